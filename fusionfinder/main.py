#!python
import argparse
import logging
import platform
import sys
import time

from . import __version__
from . import config as _config
from .constants import EXIT_OK, SUBCOMMAND
from .fusion import main as fusion_main
from .fusion.constants import DEFAULTS as FUSION_DEFAULTS
from . import util as _util


def main(argv=None):
    """
    sets up the parser and checks the validity of command line args
    loads reference files and redirects into subcommand main functions

    Args:
        argv (list): List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())

    parser = argparse.ArgumentParser(formatter_class=_config.CustomHelpFormatter)
    _config.augment_parser(['version'], parser)
    subp = parser.add_subparsers(dest='command', help='specifies which step/stage in the pipeline to use')
    subp.required = True
    required = {}  # hold required argument group by subparser command name
    optional = {}  # hold optional argument group by subparser command name
    for command in SUBCOMMAND.values():
        subparser = subp.add_parser(command, formatter_class=_config.CustomHelpFormatter, add_help=False)
        required[command] = subparser.add_argument_group('required arguments')
        optional[command] = subparser.add_argument_group('optional arguments')
        _config.augment_parser(['help', 'version', 'log', 'log_level'], optional[command])
        required[command].add_argument('-o', '--output', help='path to the output directory', required=True)

    # find
    required[SUBCOMMAND.FIND].add_argument(
        '-n', '--inputs', nargs='+', help='path to the chimeric alignment files', required=True, metavar='FILEPATH')
    _config.augment_parser(['annotations'], required[SUBCOMMAND.FIND])
    _config.augment_parser(FUSION_DEFAULTS.keys(), optional[SUBCOMMAND.FIND])

    args = vars(parser.parse_args(argv))

    # try checking the input files exist
    try:
        args['inputs'] = _util.bash_expands(*args['inputs'])
    except FileNotFoundError:
        parser.error('--inputs file(s) for {} {} do not exist'.format(args['command'], args['inputs']))

    log_conf = {'format': '{message}', 'style': '{', 'level': args['log_level']}

    original_logging_handlers = logging.root.handlers[:]
    for handler in original_logging_handlers:
        logging.root.removeHandler(handler)
    if args['log']:  # redirect stdout AND stderr to a log file
        log_conf['filename'] = args['log']
    logging.basicConfig(**log_conf)

    _util.LOG('FUSIONFINDER: {}'.format(__version__))
    _util.LOG('hostname:', platform.node(), time_stamp=False)
    _util.log_arguments(args)

    command = args['command']
    log_to_file = args['log']

    # discard any arguments needed for redirect/setup only
    for init_arg in ['command', 'log', 'log_level']:
        args.pop(init_arg, None)

    try:
        if command == SUBCOMMAND.FIND:
            fusion_main.main(**args, start_time=start_time)

        _util.LOG('run time (hh/mm/ss):', _util.format_duration(start_time), time_stamp=False)
        _util.LOG('run time (s):', int(time.time()) - start_time, time_stamp=False)
        return EXIT_OK
    except Exception as err:
        if log_to_file:
            logging.exception(err)  # capture the error in the logging output file
        raise err
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    main()
