"""
Coercion of loosely typed values, e.g. fields read from a JSON document,
into the numeric, boolean and string forms the caller expects.

None is passed through by every converter. Values of any other
unsupported type raise :class:`ConversionError`.
"""
from typing import Any, Optional

from .exceptions import ConversionError


def to_int(value: Any) -> Optional[int]:
    """
    >>> to_int(3.7)
    3
    >>> to_int(None) is None
    True
    """
    if isinstance(value, bool):
        raise ConversionError(value, 'int')
    elif isinstance(value, int):
        return value
    elif isinstance(value, float):
        return int(value)
    elif value is None:
        return None
    raise ConversionError(value, 'int')


def to_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        raise ConversionError(value, 'float')
    elif isinstance(value, (int, float)):
        return float(value)
    elif value is None:
        return None
    raise ConversionError(value, 'float')


def to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool) or value is None:
        return value
    raise ConversionError(value, 'bool')


def to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
