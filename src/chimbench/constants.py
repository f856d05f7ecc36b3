"""
module responsible for small utility functions and constants used throughout the chimbench package
"""
import os
from typing import List

PROGNAME: str = 'chimbench'
EXIT_OK: int = 0


def cast_boolean(input_value) -> bool:
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class ChimNamespace:
    """
    Namespace to hold module constants

    Example:
        >>> nspace = ChimNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> nspace.otherthing
        2
    """

    def __init__(self, *pos, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_env_overwritable', set())
        object.__setattr__(self, '_env_prefix', 'CHIMBENCH')

        for k in pos:
            if k in self._members:
                raise AttributeError('Cannot respecify existing attribute', k, self._members[k])
            self[k] = k

        for attr, val in kwargs.items():
            if attr in self._members:
                raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
            self[attr] = val

        for attr, value in self._members.items():
            self._set_type(attr, type(value))

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__,
            ', '.join(sorted(['{}={}'.format(k, repr(v)) for k, v in self.items()])),
        )

    def get_env_name(self, attr: str) -> str:
        """
        Get the name of the corresponding environment variable

        Example:
            >>> nspace = ChimNamespace(a=1)
            >>> nspace.get_env_name('a')
            'CHIMBENCH_A'
        """
        if self._env_prefix:
            return '{}_{}'.format(self._env_prefix, attr).upper()
        return attr.upper()

    def get_env_var(self, attr: str):
        """
        retrieve the environment variable definition of a given attribute
        """
        env_name = self.get_env_name(attr)
        env = os.environ[env_name].strip()
        attr_type = self._types.get(attr, str)
        return attr_type(env)

    def is_env_overwritable(self, attr: str) -> bool:
        """
        Returns:
            True if the variable is overrided by specifying the environment variable equivalent
        """
        return attr in self._env_overwritable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            variables = object.__getattribute__(self, '_members')
            if attr not in variables:
                raise err
            if self.is_env_overwritable(attr):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return variables[attr]

    def items(self):
        """
        Example:
            >>> ChimNamespace(thing=1, otherthing=2).items()
            [('thing', 1), ('otherthing', 2)]
        """
        return [(k, self[k]) for k in self.keys()]

    def to_dict(self):
        return dict(self.items())

    def __getitem__(self, key):
        return getattr(self, key)

    def __setitem__(self, key, val):
        self.__setattr__(key, val)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        object.__getattribute__(self, '_members')[attr] = val

    def __contains__(self, attr):
        return attr in self._members

    def keys(self) -> List[str]:
        return [k for k in self._members]

    def values(self) -> List:
        return [self[k] for k in self._members]

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> nspace = ChimNamespace(thing=1, otherthing=2)
            >>> nspace.enforce(1)
            1
            >>> nspace.enforce(3)
            Traceback (most recent call last):
            ....
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def __iter__(self):
        return iter(self.keys())

    def _set_type(self, attr, cast_type):
        if cast_type == bool:
            self._types[attr] = cast_boolean
        else:
            self._types[attr] = cast_type

    def type(self, attr, *pos):
        """
        returns the type

        Example:
            >>> nspace = ChimNamespace(thing=1, otherthing=2)
            >>> nspace.type('thing')
            <class 'int'>
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. type takes a single \'default\' value argument')
        try:
            return self._types[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def define(self, attr, *pos):
        """
        Get the definition of a given attribute or return a default (when given) if the attribute does not exist
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. define takes a single \'default\' value argument')
        try:
            return self._defns[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def add(self, attr, value, defn=None, cast_type=None, env_overwritable=False):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, will be used in generating help menus
            cast_type (callable): the function to use in casting the value
            env_overwritable (bool): True if this attribute will be overriden by its environment variable equivalent

        Example:
            >>> nspace = ChimNamespace()
            >>> nspace.add('thing', value=1, cast_type=int, defn='I am a thing')
        """
        if cast_type:
            self._set_type(attr, cast_type)
        else:
            self._set_type(attr, type(value))
        if defn:
            self._defns[attr] = defn
        if env_overwritable:
            self._env_overwritable.add(attr)
        self[attr] = value

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError(
                'Invalid value {} for {}. Must be a valid member: {}'.format(
                    repr(value), self.__class__.__name__, self.values()
                )
            )


STRAND = ChimNamespace(POS='+', NEG='-')
"""
holds controlled vocabulary for allowed strand values

- ``POS``: the positive/forward strand
- ``NEG``: the negative/reverse strand
"""

SIDE = ChimNamespace(DONOR='donor', ACCEPTOR='acceptor')
"""the two breakpoints of a chimeric junction, 5' (donor) and 3' (acceptor)"""

GENE_PAIR_KEY = ChimNamespace(NAME='name', ID='id')
"""which gene attribute identifies a gene pair when comparing reference and predictions"""

UNKNOWN_COORDINATE: str = 'NA'
"""marker used by junction callers for a coordinate that could not be determined"""

NO_CANDIDATE: str = '.'
"""written in place of a value when a junction has no candidate (or a gene pair no distance)"""

UNDEFINED: str = 'NA'
"""written in place of a metric that cannot be computed (ex. a rate with an empty denominator)"""

JUNCTION_ID_DELIM: str = ':'
BREAKPOINT_DELIM: str = '_'
LIST_DELIM: str = ','
GENE_PAIR_DELIM: str = ':'
DISTRIBUTION_DELIM: str = ':'

COLUMNS = ChimNamespace(
    junction_id='juncid',
    ref_junction='refjunc',
    pred_junction='predjunc',
    donor_distance='dondist',
    acceptor_distance='accdist',
    sum_distance='sumdist',
    best_distance='bestdist',
    best_junction='bestjunc',
    best_ref='bestref',
    gene_pair='gnpair',
    donor_gene_id='dongnid',
    acceptor_gene_id='accgnid',
    donor_gene_name='dongnname',
    acceptor_gene_name='accgnname',
    donor_gene='dongn',
    acceptor_gene='accgn',
    close_junctions='closejunc',
    reason='reason',
    source='source',
    side='side',
    nearest_exon_distance='nearest_exon_dist',
)
"""Column names for the tabbed output files"""

SUMMARY_KEYS: List[str] = [
    'ref',
    'pred',
    'common',
    'ref_not_in_common',
    'pred_not_in_common',
    'sensitivity',
    'precision',
    'close_not_exact',
    'samechrstr',
    'refgn',
    'predgn',
    'commongn',
    'refgn_not_in_commongn',
    'predgn_not_in_commongn',
    'sngn',
    'precgn',
    'commongn2',
    'sum_don_acc_dist',
    'ref_invalid',
    'pred_invalid',
    'ref_discarded',
    'pred_discarded',
    'ref_no_gene',
    'pred_no_gene',
    'attribution_errors',
    'annotation_skipped',
]
"""order of the rows of the summary report"""
