import pytest

from knobunits.duration import (
    UNIT_ALIASES,
    Duration,
    TimeUnit,
    parse_duration,
    parse_nanos,
    parse_unit,
    to_nanos,
)
from knobunits.exceptions import MalformedDurationError


def test_parse_milliseconds():
    d = parse_duration('250ms')
    assert d == (250, TimeUnit.MILLISECONDS)
    assert isinstance(d, Duration)
    assert to_nanos(*d) == 250000000
    assert d.nanos == 250000000


def test_hours_aliases():
    assert parse_duration('3 hours').unit is TimeUnit.HOURS
    assert parse_duration('3hr').unit is TimeUnit.HOURS
    assert parse_duration('3 hours') == parse_duration('3hr')


@pytest.mark.parametrize('text', ['7\u03bcs', '7\u00b5s', '7\u03bc', '7 \u00b5'])
def test_micro_glyphs(text):
    assert parse_duration(text) == (7, TimeUnit.MICROSECONDS)


@pytest.mark.parametrize('text,expected', [
    ('1ns', (1, TimeUnit.NANOSECONDS)),
    ('2 nanos', (2, TimeUnit.NANOSECONDS)),
    ('3 micros', (3, TimeUnit.MICROSECONDS)),
    ('4 MilliSeconds', (4, TimeUnit.MILLISECONDS)),
    ('5S', (5, TimeUnit.SECONDS)),
    ('6 secs', (6, TimeUnit.SECONDS)),
    ('7m', (7, TimeUnit.MINUTES)),
    ('8 mins', (8, TimeUnit.MINUTES)),
    ('9h', (9, TimeUnit.HOURS)),
    ('10 HRS', (10, TimeUnit.HOURS)),
    ('11d', (11, TimeUnit.DAYS)),
    ('  12   days  ', (12, TimeUnit.DAYS)),
    ('0s', (0, TimeUnit.SECONDS)),
    ('007ms', (7, TimeUnit.MILLISECONDS)),
])
def test_parse(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize('text', [
    '',
    '   ',
    'abc',
    '5xyz',
    'ms',
    '\u00b5s',
    '250',
    '-5s',
    '+5s',
    '1.5s',
    '5 m s',
    '5 sec onds',
    '5s5',
    '5 weeks',
    '\u0663s',
    '\uff15ms',
])
def test_malformed(text):
    with pytest.raises(MalformedDurationError):
        parse_duration(text)


def test_error_message():
    with pytest.raises(MalformedDurationError) as exc_info:
        parse_duration(' 5xyz ')
    assert str(exc_info.value) == 'Invalid duration format: "5xyz"'
    assert exc_info.value.value == '5xyz'


@pytest.mark.parametrize('unit,nanos', [
    (TimeUnit.NANOSECONDS, 1),
    (TimeUnit.MICROSECONDS, 10 ** 3),
    (TimeUnit.MILLISECONDS, 10 ** 6),
    (TimeUnit.SECONDS, 10 ** 9),
    (TimeUnit.MINUTES, 6 * 10 ** 10),
    (TimeUnit.HOURS, 36 * 10 ** 11),
    (TimeUnit.DAYS, 864 * 10 ** 11),
])
def test_to_nanos(unit, nanos):
    assert to_nanos(1, unit) == nanos
    assert unit.nanos == nanos
    assert isinstance(to_nanos(3, unit), int)


def test_parse_nanos():
    assert parse_nanos('3 hours') == 3 * 3600 * 10 ** 9
    assert parse_nanos('1 day') == 86400 * 10 ** 9


def test_convert():
    assert TimeUnit.MILLISECONDS.convert(2, TimeUnit.SECONDS) == 2000
    assert TimeUnit.SECONDS.convert(1999, TimeUnit.MILLISECONDS) == 1
    assert TimeUnit.SECONDS.convert(-1999, TimeUnit.MILLISECONDS) == -1
    assert TimeUnit.DAYS.convert(47, TimeUnit.HOURS) == 1


def test_alias_table():
    assert len(UNIT_ALIASES) == 36
    assert set(UNIT_ALIASES.values()) == set(TimeUnit)
    assert all(k == k.lower() for k in UNIT_ALIASES)
    assert '\u03bc' in UNIT_ALIASES and '\u00b5' in UNIT_ALIASES
    with pytest.raises(TypeError):
        UNIT_ALIASES['w'] = TimeUnit.DAYS  # type: ignore


def test_parse_unit():
    assert parse_unit('Seconds') is TimeUnit.SECONDS
    with pytest.raises(LookupError):
        parse_unit('fortnight')


def test_magnitude_past_int64():
    d = parse_duration('9223372036854775808ns')
    assert d.magnitude == 2 ** 63
    assert d.nanos == 2 ** 63
