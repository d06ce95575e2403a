"""
Durations written as a magnitude and a unit alias, such as ``250ms``.

The magnitude is read into a Python integer, which does not overflow:
magnitudes past the signed 64-bit range, and their nanosecond values,
are returned exactly instead of wrapping the way a fixed-width
accumulator would.
"""
import enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

from .exceptions import MalformedDurationError

DIGITS = frozenset('0123456789')


class TimeUnit(enum.Enum):
    """Fixed time units, valued by their length in nanoseconds."""

    NANOSECONDS = 1
    MICROSECONDS = 1000
    MILLISECONDS = 1000 * 1000
    SECONDS = 1000 * 1000 * 1000
    MINUTES = 60 * 1000 * 1000 * 1000
    HOURS = 60 * 60 * 1000 * 1000 * 1000
    DAYS = 24 * 60 * 60 * 1000 * 1000 * 1000

    @property
    def nanos(self) -> int:
        return self.value

    def convert(self, magnitude: int, unit: 'TimeUnit') -> int:
        """
        Express ``magnitude`` of ``unit`` in this unit,
        truncating toward zero.

        >>> TimeUnit.SECONDS.convert(90, TimeUnit.MINUTES)
        5400
        >>> TimeUnit.MINUTES.convert(90, TimeUnit.SECONDS)
        1
        """
        total = magnitude * unit.value
        if total < 0:
            return -(-total // self.value)
        return total // self.value


UNIT_ALIASES: Mapping[str, TimeUnit] = MappingProxyType({
    'ns': TimeUnit.NANOSECONDS,
    'nano': TimeUnit.NANOSECONDS,
    'nanos': TimeUnit.NANOSECONDS,
    'nanosecond': TimeUnit.NANOSECONDS,
    'nanoseconds': TimeUnit.NANOSECONDS,
    'micro': TimeUnit.MICROSECONDS,
    'micros': TimeUnit.MICROSECONDS,
    'microsecond': TimeUnit.MICROSECONDS,
    'microseconds': TimeUnit.MICROSECONDS,
    # greek small letter mu and the micro sign look alike but differ
    '\u03bc': TimeUnit.MICROSECONDS,
    '\u03bcs': TimeUnit.MICROSECONDS,
    '\u00b5': TimeUnit.MICROSECONDS,
    '\u00b5s': TimeUnit.MICROSECONDS,
    'ms': TimeUnit.MILLISECONDS,
    'milli': TimeUnit.MILLISECONDS,
    'millis': TimeUnit.MILLISECONDS,
    'millisecond': TimeUnit.MILLISECONDS,
    'milliseconds': TimeUnit.MILLISECONDS,
    's': TimeUnit.SECONDS,
    'sec': TimeUnit.SECONDS,
    'secs': TimeUnit.SECONDS,
    'second': TimeUnit.SECONDS,
    'seconds': TimeUnit.SECONDS,
    'm': TimeUnit.MINUTES,
    'min': TimeUnit.MINUTES,
    'mins': TimeUnit.MINUTES,
    'minute': TimeUnit.MINUTES,
    'minutes': TimeUnit.MINUTES,
    'h': TimeUnit.HOURS,
    'hr': TimeUnit.HOURS,
    'hrs': TimeUnit.HOURS,
    'hour': TimeUnit.HOURS,
    'hours': TimeUnit.HOURS,
    'd': TimeUnit.DAYS,
    'day': TimeUnit.DAYS,
    'days': TimeUnit.DAYS,
})


class Duration(NamedTuple):
    magnitude: int
    unit: TimeUnit

    @property
    def nanos(self) -> int:
        return to_nanos(self.magnitude, self.unit)


def parse_unit(name: str) -> TimeUnit:
    unit = UNIT_ALIASES.get(name.lower())
    if unit is None:
        raise LookupError(name)
    return unit


def parse_duration(text: str) -> Duration:
    """
    Split a duration into its magnitude and unit.

    The magnitude is a run of ASCII digits 0-9; a sign, a fraction
    or a digit from another script is not accepted. The unit may be
    separated from it by whitespace and is resolved through
    :data:`UNIT_ALIASES`.

    >>> parse_duration('250ms')
    Duration(magnitude=250, unit=<TimeUnit.MILLISECONDS: 1000000>)
    >>> parse_duration('3 hours').unit
    <TimeUnit.HOURS: 3600000000000>
    """
    text = text.strip()

    end = 0
    while end < len(text) and text[end] in DIGITS:
        end += 1
    if not end or end == len(text):
        raise MalformedDurationError(text)

    try:
        unit = parse_unit(text[end:].lstrip())
    except LookupError:
        raise MalformedDurationError(text) from None
    return Duration(int(text[:end]), unit)


def to_nanos(magnitude: int, unit: TimeUnit) -> int:
    return magnitude * unit.value


def parse_nanos(text: str) -> int:
    """
    >>> parse_nanos('2s')
    2000000000
    """
    return to_nanos(*parse_duration(text))
