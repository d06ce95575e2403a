import pytest

from knobunits import humanize
from knobunits.duration import TimeUnit, parse_duration, to_nanos
from knobunits.exceptions import MalformedDurationError, MalformedSizeError
from knobunits.size import parse_size_with_si


@pytest.mark.parametrize('value,binary,expected', [
    (0, False, '0'),
    (1000, False, '1KB'),
    (1024, True, '1KiB'),
    (1024, False, '1024'),
    (1000, True, '1000'),
    (4000000, False, '4MB'),
    (1500000, False, '1500KB'),
    (-4000000000, False, '-4GB'),
    (5 * 1024 ** 5, True, '5PiB'),
    (1001, False, '1001'),
])
def test_format_size(value, binary, expected):
    assert humanize.format_size(value, binary=binary) == expected


@pytest.mark.parametrize('value', [0, 1, 999, 1000, 1024, 3 * 1024 ** 3, -2 ** 20, 10 ** 15])
@pytest.mark.parametrize('binary', [False, True])
def test_format_size_reparse(value, binary):
    assert parse_size_with_si(humanize.format_size(value, binary)) == value


@pytest.mark.parametrize('unit', list(TimeUnit))
def test_format_duration_reparse(unit):
    text = humanize.format_duration(42, unit)
    assert parse_duration(text) == (42, unit)


def test_format_nanos():
    assert humanize.format_nanos(0) == '0ns'
    assert humanize.format_nanos(1500) == '1500ns'
    assert humanize.format_nanos(250000000) == '250ms'
    assert humanize.format_nanos(to_nanos(2, TimeUnit.DAYS)) == '2d'
    assert humanize.format_nanos(to_nanos(90, TimeUnit.MINUTES)) == '90m'


def test_coerce_size():
    assert humanize.coerce_size(10) == 10
    assert humanize.coerce_size(1.5) == 1.5
    assert humanize.coerce_size('2KiB') == 2048
    with pytest.raises(MalformedSizeError):
        humanize.coerce_size('2 kilo')
    with pytest.raises(MalformedSizeError):
        humanize.coerce_size(True)


def test_coerce_nanos():
    assert humanize.coerce_nanos(10) == 10
    assert humanize.coerce_nanos('10s') == 10 ** 10
    with pytest.raises(MalformedDurationError):
        humanize.coerce_nanos('10')
    with pytest.raises(TypeError):
        humanize.coerce_nanos(1.5)
