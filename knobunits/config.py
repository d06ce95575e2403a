import logging
import os
import re
from abc import abstractmethod
from collections import abc
from pathlib import Path
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    Mapping,
    MutableMapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from . import converter, humanize
from .exceptions import ConversionError

logger = logging.getLogger(__name__)


def merge(source: Mapping, destination: MutableMapping) -> MutableMapping:
    for key, value in source.items():
        if isinstance(value, Mapping):
            node = destination.get(key)
            if not isinstance(node, MutableMapping):
                node = destination[key] = {}
            merge(value, node)
        else:
            destination[key] = value
    return destination


class ConfigFileLoader:
    extensions: Tuple[str, ...] = ()

    _load: Callable

    @abstractmethod  # pragma: no cover
    def load_str(self, s: str) -> Mapping:
        raise NotImplementedError

    def load_fd(self, fd) -> Mapping:
        return self._load(fd)

    def load_path(self, path: Union[str, Path]) -> Mapping:
        if isinstance(path, str):
            path = Path(path)
        with path.open('rt', encoding='utf-8') as fd:
            return self.load_fd(fd)


class YamlLoader(ConfigFileLoader):
    extensions = ('.yaml', '.yml')

    def __init__(self):
        import yaml

        Loader = getattr(yaml, 'CSafeLoader', yaml.SafeLoader)
        setattr(self, '_load', lambda data: yaml.load(data, Loader))  # noqa: B010

    def load_str(self, s):
        return self._load(s)


class JsonLoader(ConfigFileLoader):
    extensions = ('.json',)

    def __init__(self):
        import json

        setattr(self, '_load', json.load)  # noqa: B010
        self._loads = json.loads

    def load_str(self, s):
        return self._loads(s)


class TomlLoader(ConfigFileLoader):
    extensions = ('.toml',)

    def __init__(self):
        try:
            import tomllib
        except ImportError:
            import tomli as tomllib
        self._loads = tomllib.loads
        self._load_binary = tomllib.load

    def load_path(self, path):
        with Path(path).open('rb') as fd:
            return self._load_binary(fd)

    def load_fd(self, fd):
        return self._loads(fd.read())

    def load_str(self, s):
        return self._loads(s)


TValueMatcher = TypeVar('TValueMatcher', bound='ValueMatcher')


class ValueMatcher:
    def __init__(self, value: Any):
        self._value = value

    @classmethod
    @abstractmethod  # pragma: no cover
    def match(cls: Type[TValueMatcher], value: str) -> Optional[TValueMatcher]:
        raise NotImplementedError

    def get_value(self):
        return self._value


class IntValueMatcher(ValueMatcher):
    fn: Callable = int

    @classmethod
    def match(cls, value):
        try:
            return cls(cls.fn(value.strip()))
        except ValueError:
            return None


class BooleanValueMatcher(IntValueMatcher):
    true = frozenset({'1', 'true', 'on', 'yes'})
    false = frozenset({'0', 'false', 'off', 'no'})

    @classmethod
    def fn(cls, value):
        if isinstance(value, bool):
            return value
        elif not isinstance(value, str):
            return bool(value)
        v = value.strip().lower()
        if v in cls.true:
            return True
        elif v in cls.false:
            return False
        raise ValueError(value)


class FloatValueMatcher(IntValueMatcher):
    fn = float


class ListValueMatcher(ValueMatcher):
    re = re.compile(r'\[(?P<items>.*)\]', re.S)

    @classmethod
    def match(cls, value):
        m = cls.re.fullmatch(value.strip())
        if m:
            items = m.group('items')
            return cls([i.strip() for i in items.split(',')] if items.strip() else [])
        return None


class IniLoader(ConfigFileLoader):
    """
    Sections become mappings. Values that read as ints, floats,
    booleans or ``[a, b]`` lists are converted, everything else
    (sizes and durations included) stays a string for the extractors.
    """

    extensions = ('.ini',)
    matchers = (
        IntValueMatcher,
        FloatValueMatcher,
        BooleanValueMatcher,
        ListValueMatcher,
    )

    def __init__(self):
        import configparser

        self._configparser = configparser

    def _replace(self, value: str) -> Any:
        for matcher in self.matchers:
            m = matcher.match(value)
            if m is None:
                continue
            v = m.get_value()
            if isinstance(v, list):
                return [self._replace(i) for i in v]
            return v
        return value

    def _convert(self, parser) -> Dict[str, Dict[str, Any]]:
        result = {}
        for section in parser.sections():
            result[section] = {
                k: v if v is None else self._replace(v)
                for k, v in parser[section].items()
            }
        return result

    def load_fd(self, fd):
        parser = self._configparser.ConfigParser(allow_no_value=True)
        parser.read_file(fd)
        return self._convert(parser)

    def load_str(self, s):
        parser = self._configparser.ConfigParser(allow_no_value=True)
        parser.read_string(s)
        return self._convert(parser)


class Registry(dict):
    def __call__(self, cls):
        for ext in cls.extensions:
            if not isinstance(ext, str):
                raise ValueError(f'Extension expect string, given {ext!r}')
            elif ext in self:
                raise ValueError(f'Duplicate extension {ext}')
            self[ext] = cls
        return cls

    def get(self, key):
        if key not in self:
            raise LookupError('No loader for {!r}'.format(key))
        return self[key]()


registry = Registry()
registry(YamlLoader)
registry(JsonLoader)
registry(TomlLoader)
registry(IniLoader)


def _to_str(value: Any) -> str:
    if isinstance(value, (Mapping, list)):
        raise ConversionError(value, 'str')
    return converter.to_str(value)


extractors: Mapping[str, Callable] = {
    'get_int': int,
    'get_float': float,
    'get_bool': BooleanValueMatcher.fn,
    'get_str': _to_str,
    'get_size': humanize.coerce_size,
    'get_duration': humanize.coerce_nanos,
    'get_path': Path,
}


class ValueExtractor(abc.Mapping):
    """
    Read-only view over a configuration mapping.

    Keys may be dotted to reach nested sections. Every name in
    :data:`extractors` becomes a method converting the value found::

        >>> v = ValueExtractor({'net': {'buffer': '4KiB', 'timeout': '3s'}})
        >>> v.get_size('net.buffer')
        4096
        >>> v.net.get_duration('timeout')
        3000000000
        >>> v.get_duration('net.idle', '1m')
        60000000000
    """

    def __init__(self, mapping: Optional[Mapping] = None, **kwargs):
        if isinstance(mapping, ValueExtractor):
            mapping = mapping._val
        elif mapping is None:
            mapping = kwargs
        if not isinstance(mapping, Mapping):
            raise TypeError(mapping)
        self._val: Mapping = mapping

    def _lookup(self, key: str) -> Any:
        if key in self._val:
            return self._val[key]
        node: Any = self._val
        for part in key.split('.'):
            if not isinstance(node, Mapping) or part not in node:
                raise KeyError(key)
            node = node[part]
        return node

    def _wrap(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return ValueExtractor(value)
        return value

    def __getitem__(self, key: str) -> Any:
        return self._wrap(self._lookup(key))

    def get(self, key, default=None):
        try:
            return self[key]
        except KeyError:
            return default

    def __contains__(self, key) -> bool:
        try:
            self._lookup(key)
        except KeyError:
            return False
        return True

    def __getattr__(self, item: str):
        if item.startswith('_'):
            raise AttributeError(item)
        elif item not in extractors:
            try:
                return self[item]
            except KeyError:
                raise AttributeError(item) from None
        convert = extractors[item]

        def extractor(key, default=..., *, null=False):
            try:
                val = self._lookup(key)
            except KeyError:
                if default is not ...:
                    val = default
                elif null:
                    val = None
                else:
                    raise
            if val is None and null:
                return None
            return convert(val)

        extractor.__name__ = item
        return extractor

    def __len__(self) -> int:
        return len(self._val)

    def __iter__(self) -> Iterator:
        return iter(self._val)

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__name__, dict(self._val))


class Config(ValueExtractor):
    """
    Configuration merged from files in load order.

    An ``env`` section maps dotted keys to environment variable names;
    variables that are set override the loaded values. A ``logging``
    section is kept apart in :attr:`logging` for
    :func:`logging.config.dictConfig`.
    """

    def __init__(self, search_dirs=(), **kwargs):
        self.search_dirs: List[Path] = [Path(i) for i in search_dirs]
        self.logging: Dict[str, Any] = {}
        self.env: Dict[str, str] = {}
        self.paths: List[Path] = []
        super().__init__({})
        if kwargs:
            self.update(kwargs)

    def _apply_env(self) -> None:
        for key, name in self.env.items():
            if name not in os.environ:
                continue
            logger.debug('Override %s from $%s', key, name)
            *path, last = key.split('.')
            node = self._val
            for part in path:
                child = node.get(part)
                if not isinstance(child, MutableMapping):
                    child = node[part] = {}  # type: ignore
                node = child
            node[last] = os.environ[name]  # type: ignore

    def update(self, *mappings: Mapping, **kwargs) -> None:
        if kwargs:
            mappings += (kwargs,)
        for data in mappings:
            data = dict(data)
            if 'logging' in data:
                merge(data.pop('logging'), self.logging)
            env = data.pop('env', None)
            if isinstance(env, Mapping):
                self.env.update(env)
            merge(data, self._val)  # type: ignore
        self._apply_env()

    def find(self, filename: Union[str, Path]) -> Optional[Path]:
        path = Path(filename)
        if path.is_absolute() or not self.search_dirs:
            return path if path.exists() else None
        for d in self.search_dirs:
            candidate = d / path
            if candidate.exists():
                return candidate
        return None

    def load_path(self, path: Path) -> Mapping:
        loader = registry.get(path.suffix)
        logger.info('Config found: %s', path.absolute())
        self.paths.append(path.absolute())
        return loader.load_path(path) or {}

    def load(self, *filenames: Union[str, Path]) -> 'Config':
        for fn in filenames:
            path = self.find(fn)
            if path is None:
                raise FileNotFoundError(fn)
            self.update(self.load_path(path))
        return self

    def __repr__(self) -> str:
        return 'Config({!r}, logging={!r})'.format(dict(self._val), self.logging)


def load_conf(*filenames, search_dirs=None, **kwargs) -> Config:
    conf = Config(search_dirs=search_dirs or [Path.cwd()], **kwargs)
    return conf.load(*filenames)
