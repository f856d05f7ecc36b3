#!python
import argparse
import logging
import platform
import sys
import time
from typing import List, Optional

from . import __version__
from . import config as _config
from . import util as _util
from .constants import EXIT_OK, GENE_PAIR_KEY, PROGNAME, cast_boolean
from .summary import main as summary_main
from .summary.metrics import summary_rows
from .util import filepath


def create_parser(argv):
    parser = argparse.ArgumentParser(
        prog=PROGNAME,
        formatter_class=_config.CustomHelpFormatter,
        add_help=False,
        description='benchmark predicted chimeric junctions against reference junctions',
    )
    required = parser.add_argument_group('required arguments')
    optional = parser.add_argument_group('optional arguments')
    optional.add_argument('-h', '--help', action='help', help='show this help message and exit')
    optional.add_argument(
        '-v',
        '--version',
        action='version',
        version='%(prog)s version ' + __version__,
        help='Outputs the version number',
    )
    required.add_argument(
        '-r', '--reference', type=filepath, required=True, help='path to the reference junctions'
    )
    required.add_argument(
        '-p', '--predicted', type=filepath, required=True, help='path to the predicted junctions'
    )
    required.add_argument(
        '-a',
        '--annotations',
        nargs='+',
        required=True,
        help='path to the GTF/GFF2 annotation file(s)',
        metavar='FILEPATH',
    )
    required.add_argument('-o', '--output', required=True, help='path to the output directory')
    optional.add_argument(
        '--tolerance',
        type=int,
        default=None,
        help=_config.DEFAULTS.define('tolerance'),
    )
    optional.add_argument(
        '--gene_pair_key',
        choices=sorted(GENE_PAIR_KEY.values()),
        default=None,
        help=_config.DEFAULTS.define('gene_pair_key'),
    )
    optional.add_argument(
        '--write_intermediate',
        type=cast_boolean,
        default=None,
        help=_config.DEFAULTS.define('write_intermediate'),
    )
    optional.add_argument(
        '--config', '-c', help='path to the JSON config file', type=filepath, default=None
    )
    optional.add_argument('--log', help='redirect stdout to a log file', default=None)
    optional.add_argument(
        '--log_level',
        help='level of logging to output',
        choices=['INFO', 'DEBUG'],
        default='INFO',
    )
    return parser, parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """
    sets up the parser and checks the validity of command line args
    then runs the benchmark and prints the summary

    Args:
        argv: List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())
    parser, args = create_parser(argv)

    log_conf = {
        'format': '{asctime} [{levelname}] {message}',
        'style': '{',
        'level': args.log_level,
    }

    original_logging_handlers = logging.root.handlers[:]
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    if args.log:  # redirect stdout AND stderr to a log file
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.logger.info(f'ChimBench: {__version__}')
    _util.logger.info(f'hostname: {platform.node()}')
    _util.log_arguments(args)

    try:
        args.annotations = _util.bash_expands(*args.annotations)
    except FileNotFoundError:
        parser.error('--annotations file(s) {} do not exist'.format(args.annotations))

    try:
        config = _config.load_config(args.config) if args.config else _config.validate_config()
        # command line flags take precedence over the config file
        overrides = {
            k: v
            for k, v in [
                ('tolerance', args.tolerance),
                ('gene_pair_key', args.gene_pair_key),
                ('write_intermediate', args.write_intermediate),
            ]
            if v is not None
        }
        config = _config.validate_config({**config, **overrides})
    except (KeyError, TypeError) as err:
        parser.error(str(err))

    try:
        summary = summary_main.main(
            reference=args.reference,
            predicted=args.predicted,
            annotations=args.annotations,
            output=args.output,
            config=config,
            start_time=start_time,
        )
        for key, value in summary_rows(summary):
            print(f'{key}\t{value}')

        duration = int(time.time()) - start_time
        hours = duration - duration % 3600
        minutes = duration - hours - (duration - hours) % 60
        seconds = duration - hours - minutes
        _util.logger.info(
            'run time (hh/mm/ss): {}:{:02d}:{:02d}'.format(hours // 3600, minutes // 60, seconds)
        )
        _util.logger.info(f'run time (s): {duration}')
    finally:
        try:
            for handler in logging.root.handlers[:]:
                logging.root.removeHandler(handler)
            for handler in original_logging_handlers:
                logging.root.addHandler(handler)
        except Exception as err:
            print(err)
    return EXIT_OK


if __name__ == '__main__':
    main()
