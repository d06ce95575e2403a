"""
Sizes with an SI multiplier.

Accepted text, after trimming and upper-casing::

    ['-'] [ws] digit+ [ws] [K|M|G|T|P [ws] ['I' [ws]]] ['B'] [ws]

``K``, ``M``, ``G``, ``T`` and ``P`` scale by powers of 1000, or of
1024 when followed by the binary marker ``I``. A trailing ``B`` names
the base unit and changes nothing.

Python integers do not overflow, so values past the signed 64-bit
range are returned exactly instead of wrapping the way a fixed-width
accumulator would.
"""
import enum
from types import MappingProxyType
from typing import Any, Mapping, Tuple

from . import converter
from .exceptions import MalformedSizeError

MULTIPLIERS: Mapping[str, int] = MappingProxyType({
    'K': 1,
    'M': 2,
    'G': 3,
    'T': 4,
    'P': 5,
})
DECIMAL_BASE = 1000
BINARY_BASE = 1024


class CharClass(enum.Enum):
    DIGIT = enum.auto()
    SPACE = enum.auto()
    MULTIPLIER = enum.auto()
    BINARY = enum.auto()
    UNIT = enum.auto()
    SIGN = enum.auto()
    OTHER = enum.auto()


class State(enum.Enum):
    START = enum.auto()
    SIGN = enum.auto()
    LEADING_SPACE = enum.auto()
    DIGITS = enum.auto()
    DIGITS_SPACE = enum.auto()
    MULTIPLIER = enum.auto()
    MULTIPLIER_SPACE = enum.auto()
    BINARY = enum.auto()
    BINARY_SPACE = enum.auto()
    UNIT = enum.auto()
    TRAILING_SPACE = enum.auto()


TRANSITIONS: Mapping[Tuple[State, CharClass], State] = {
    (State.START, CharClass.SIGN): State.SIGN,
    (State.START, CharClass.DIGIT): State.DIGITS,
    (State.START, CharClass.SPACE): State.LEADING_SPACE,
    (State.SIGN, CharClass.DIGIT): State.DIGITS,
    (State.SIGN, CharClass.SPACE): State.LEADING_SPACE,
    (State.LEADING_SPACE, CharClass.DIGIT): State.DIGITS,
    (State.LEADING_SPACE, CharClass.SPACE): State.LEADING_SPACE,
    (State.DIGITS, CharClass.DIGIT): State.DIGITS,
    (State.DIGITS, CharClass.SPACE): State.DIGITS_SPACE,
    (State.DIGITS, CharClass.MULTIPLIER): State.MULTIPLIER,
    (State.DIGITS, CharClass.UNIT): State.UNIT,
    (State.DIGITS_SPACE, CharClass.SPACE): State.DIGITS_SPACE,
    (State.DIGITS_SPACE, CharClass.MULTIPLIER): State.MULTIPLIER,
    (State.DIGITS_SPACE, CharClass.UNIT): State.UNIT,
    (State.MULTIPLIER, CharClass.SPACE): State.MULTIPLIER_SPACE,
    (State.MULTIPLIER, CharClass.BINARY): State.BINARY,
    (State.MULTIPLIER, CharClass.UNIT): State.UNIT,
    (State.MULTIPLIER_SPACE, CharClass.SPACE): State.MULTIPLIER_SPACE,
    (State.MULTIPLIER_SPACE, CharClass.BINARY): State.BINARY,
    (State.MULTIPLIER_SPACE, CharClass.UNIT): State.UNIT,
    (State.BINARY, CharClass.SPACE): State.BINARY_SPACE,
    (State.BINARY, CharClass.UNIT): State.UNIT,
    (State.BINARY_SPACE, CharClass.SPACE): State.BINARY_SPACE,
    (State.BINARY_SPACE, CharClass.UNIT): State.UNIT,
    (State.UNIT, CharClass.SPACE): State.TRAILING_SPACE,
    (State.TRAILING_SPACE, CharClass.SPACE): State.TRAILING_SPACE,
}

# a dangling binary marker ("1KI") is not a complete size
ACCEPTING = frozenset({
    State.DIGITS,
    State.DIGITS_SPACE,
    State.MULTIPLIER,
    State.MULTIPLIER_SPACE,
    State.UNIT,
    State.TRAILING_SPACE,
})


def classify(char: str, position: int) -> CharClass:
    if '0' <= char <= '9':
        return CharClass.DIGIT
    elif char == ' ':
        return CharClass.SPACE
    elif char in MULTIPLIERS:
        return CharClass.MULTIPLIER
    elif char == 'I':
        return CharClass.BINARY
    elif char == 'B':
        return CharClass.UNIT
    elif char == '-' and position == 0:
        return CharClass.SIGN
    return CharClass.OTHER


def transition(state: State, char_class: CharClass) -> State:
    try:
        return TRANSITIONS[state, char_class]
    except KeyError:
        raise LookupError(state, char_class) from None


def parse_size_with_si(value: Any) -> int:
    """
    Parse a size into a count of base units.

    >>> parse_size_with_si('1000')
    1000
    >>> parse_size_with_si('1KB')
    1000
    >>> parse_size_with_si('1 KiB')
    1024
    >>> parse_size_with_si('-4G')
    -4000000000
    """
    text = converter.to_str(value)
    if text is None:
        raise TypeError('Size expected, given None')
    text = text.strip().upper()

    state = State.START
    number = 0
    multiplier = ''
    binary = negative = False
    for position, char in enumerate(text):
        char_class = classify(char, position)
        try:
            state = transition(state, char_class)
        except LookupError:
            raise MalformedSizeError(text) from None
        if char_class is CharClass.DIGIT:
            number = number * 10 + ord(char) - ord('0')
        elif char_class is CharClass.SIGN:
            negative = True
        elif char_class is CharClass.MULTIPLIER:
            multiplier = char
        elif char_class is CharClass.BINARY:
            binary = True

    if state not in ACCEPTING:
        raise MalformedSizeError(text)
    if negative:
        number = -number
    if not multiplier:
        return number

    base = BINARY_BASE if binary else DECIMAL_BASE
    factor = 1
    for _ in range(MULTIPLIERS[multiplier]):
        factor *= base
    return number * factor
