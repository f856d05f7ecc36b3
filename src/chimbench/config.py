import argparse
import json
from typing import Dict, Optional

from .constants import GENE_PAIR_KEY, ChimNamespace, cast_boolean
from .util import cast, filepath, logger

DEFAULTS = ChimNamespace()
"""
- :term:`tolerance`
- :term:`gene_pair_key`
- :term:`write_intermediate`
"""
DEFAULTS.add(
    'tolerance',
    50,
    cast_type=int,
    env_overwritable=True,
    defn='number of bases added on either side of each breakpoint when looking for close (non-exact) matches',
)
DEFAULTS.add(
    'gene_pair_key',
    GENE_PAIR_KEY.NAME,
    cast_type=GENE_PAIR_KEY,
    env_overwritable=True,
    defn='identify the genes of a gene pair by their name (the id when the annotation has no name) or by their id',
)
DEFAULTS.add(
    'write_intermediate',
    True,
    cast_type=cast_boolean,
    env_overwritable=True,
    defn='write the per junction and per gene pair tables in addition to the summary',
)


def validate_config(config: Optional[Dict] = None) -> Dict:
    """
    Check the user settings against the defaults, cast them to the expected types and fill in the
    missing ones from the defaults (which may themselves be set from the environment)

    Raises:
        KeyError: unknown setting
        TypeError: the value could not be cast to the expected type
    """
    config = {} if config is None else config
    result = DEFAULTS.to_dict()
    for attr, value in config.items():
        if attr not in DEFAULTS:
            raise KeyError(f'unknown configuration setting ({attr}). Expected one of {DEFAULTS.keys()}')
        try:
            result[attr] = cast(value, DEFAULTS.type(attr))
        except (TypeError, ValueError) as err:
            raise TypeError(f'invalid value for {attr} ({value!r}): {err}')
    if result['tolerance'] < 0:
        raise TypeError(f'tolerance cannot be negative ({result["tolerance"]})')
    return result


def load_config(filename: str) -> Dict:
    """
    read and validate a JSON config file
    """
    logger.info(f'loading: {filename}')
    with open(filename, 'r') as fh:
        config = json.load(fh)
    if not isinstance(config, dict):
        raise TypeError('the config file must hold a single JSON object', filename)
    return validate_config(config)


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(bool)
        '{True,False}'
    """
    if arg_type in [bool, cast_boolean]:
        return '{True,False}'
    elif arg_type == float:
        return 'FLOAT'
    elif arg_type == int:
        return 'INT'
    elif arg_type == filepath:
        return 'FILEPATH'
    return None
