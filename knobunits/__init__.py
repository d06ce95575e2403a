from .duration import Duration, TimeUnit, parse_duration, parse_nanos, to_nanos
from .exceptions import MalformedDurationError, MalformedSizeError
from .size import parse_size_with_si

__version__ = '0.1.0'

__all__ = (
    'Duration',
    'MalformedDurationError',
    'MalformedSizeError',
    'TimeUnit',
    'parse_duration',
    'parse_nanos',
    'parse_size_with_si',
    'to_nanos',
)
