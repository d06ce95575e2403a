from typing import Mapping, Union

from .duration import TimeUnit, parse_nanos
from .size import BINARY_BASE, DECIMAL_BASE, MULTIPLIERS, parse_size_with_si

short_units: Mapping[TimeUnit, str] = {
    TimeUnit.NANOSECONDS: 'ns',
    TimeUnit.MICROSECONDS: 'µs',
    TimeUnit.MILLISECONDS: 'ms',
    TimeUnit.SECONDS: 's',
    TimeUnit.MINUTES: 'm',
    TimeUnit.HOURS: 'h',
    TimeUnit.DAYS: 'd',
}


def format_size(value: int, binary: bool = False) -> str:
    """
    >>> format_size(1024, binary=True)
    '1KiB'
    >>> format_size(4000000)
    '4MB'
    >>> format_size(1001)
    '1001'
    """
    base = BINARY_BASE if binary else DECIMAL_BASE
    if value:
        for letter, power in sorted(MULTIPLIERS.items(), key=lambda x: -x[1]):
            factor = base ** power
            if not value % factor:
                return '{}{}{}B'.format(
                    value // factor, letter, 'i' if binary else '')
    return str(value)


def format_duration(magnitude: int, unit: TimeUnit) -> str:
    """
    >>> format_duration(250, TimeUnit.MILLISECONDS)
    '250ms'
    """
    return '{}{}'.format(magnitude, short_units[unit])


def format_nanos(nanos: int) -> str:
    """
    Render with the largest unit that keeps the magnitude whole.

    >>> format_nanos(90 * 10 ** 9)
    '90s'
    >>> format_nanos(3600 * 10 ** 9)
    '1h'
    """
    if nanos:
        for unit in reversed(TimeUnit):
            if not nanos % unit.value:
                return format_duration(nanos // unit.value, unit)
    return format_duration(nanos, TimeUnit.NANOSECONDS)


def coerce_size(value: Union[int, float, str]) -> Union[int, float]:
    """
    >>> coerce_size('1M')
    1000000
    >>> coerce_size(512)
    512
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return parse_size_with_si(value)


def coerce_nanos(value: Union[int, str]) -> int:
    """
    Numbers are taken as nanoseconds already.

    >>> coerce_nanos('1h')
    3600000000000
    >>> coerce_nanos(15)
    15
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    elif not isinstance(value, str):
        raise TypeError(value)
    return parse_nanos(value)
