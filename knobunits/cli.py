import argparse
import logging
import logging.config
import sys
from typing import Optional, Sequence

from . import __version__, humanize
from .config import Config
from .duration import TimeUnit, parse_duration
from .exceptions import KnobUnitsError
from .size import parse_size_with_si

logger = logging.getLogger(__name__)

UNITS = {u.name.lower(): u for u in TimeUnit}

parser = argparse.ArgumentParser(prog='knobunits')
parser.add_argument('-l', '--logging', help='logging level')
parser.add_argument('--version', action='version', version=__version__)
subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
subparsers.required = True

size_parser = subparsers.add_parser('size', help='Parse a size such as 4KiB')
size_parser.add_argument('text')
size_parser.add_argument(
    '--binary',
    action='store_true',
    help='Render with binary multipliers',
)

duration_parser = subparsers.add_parser(
    'duration',
    help='Parse a duration such as 250ms',
)
duration_parser.add_argument('text')
duration_parser.add_argument(
    '-u',
    '--unit',
    choices=sorted(UNITS),
    default='nanoseconds',
    help='Print the value in this unit',
)

get_parser = subparsers.add_parser('get', help='Read a value from a config file')
get_parser.add_argument('config', nargs='+', help='Config files, merged in order')
get_parser.add_argument('key', help='Dotted key')
get_parser.add_argument(
    '-t',
    '--type',
    choices=('size', 'duration', 'int', 'float', 'bool', 'str'),
    default='str',
)


def run_size(args: argparse.Namespace) -> str:
    value = parse_size_with_si(args.text)
    logger.debug('Parsed %r as %s', args.text, value)
    return '{} ({})'.format(value, humanize.format_size(value, binary=args.binary))


def run_duration(args: argparse.Namespace) -> str:
    duration = parse_duration(args.text)
    logger.debug('Parsed %r as %s', args.text, duration)
    unit = UNITS[args.unit]
    return str(unit.convert(duration.magnitude, duration.unit))


def run_get(args: argparse.Namespace) -> str:
    config = Config().load(*args.config)
    if config.logging:
        logging.config.dictConfig(config.logging)
    value = getattr(config, 'get_' + args.type)(args.key)
    if args.type == 'duration':
        return '{} ({})'.format(value, humanize.format_nanos(value))
    return str(value)


commands = {
    'size': run_size,
    'duration': run_duration,
    'get': run_get,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parser.parse_args(argv)
    if args.logging:
        logging.basicConfig(level=args.logging.upper())
    try:
        result = commands[args.command](args)
    except KeyError as e:
        parser.exit(2, '{}: error: key not found {}\n'.format(parser.prog, e))
    except (KnobUnitsError, LookupError, ValueError, TypeError, OSError) as e:
        parser.exit(2, '{}: error: {}\n'.format(parser.prog, e))
    print(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
