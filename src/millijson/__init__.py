"""
Lightweight streaming JSON parser.

Parses JSON from memory or from a file into a tree of typed values, or
validates a document without building the tree. Parsing is iterative, so
deeply nested documents cannot exhaust the call stack, and every error
reports the 1-based byte position where it was detected.
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Any

from ._engine import Parser
from ._engine import parse as _parse_source
from ._errors import ErrorKind
from ._errors import JSONDecodeError
from ._errors import JSONReadError
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._provisioners import DefaultProvisioner
from ._provisioners import FakeProvisioner
from ._provisioners import Placeholder
from ._provisioners import Provisioner
from ._sources import DEFAULT_BUFFER_SIZE
from ._sources import ByteSource
from ._sources import FileReader
from ._sources import MemoryReader
from ._values import Array
from ._values import Boolean
from ._values import Null
from ._values import Number
from ._values import NumberAsString
from ._values import Object
from ._values import PythonValue
from ._values import String
from ._values import Type
from ._values import Value
from ._values import to_python

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

type Document = bytes | bytearray | memoryview | str
type PathLike = str | os.PathLike[str]


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures parsing behavior with immutable settings.

    ``number_as_string`` keeps numbers as their literal text instead of
    converting them to doubles. ``buffer_size`` is the block size used when
    reading files; it is clamped to the largest size the platform can
    allocate.
    """

    number_as_string: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        if not isinstance(self.number_as_string, bool):
            raise TypeError("number_as_string must be a boolean")
        if isinstance(self.buffer_size, bool) or not isinstance(
            self.buffer_size, int
        ):
            raise TypeError("buffer_size must be an integer")
        if self.buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")
        if self.buffer_size > sys.maxsize:
            object.__setattr__(self, "buffer_size", sys.maxsize)


def _memory_reader(data: Document) -> MemoryReader:
    if isinstance(data, str):
        return MemoryReader(data.encode("utf-8"))
    if not isinstance(data, bytes | bytearray | memoryview):
        raise TypeError(
            "the JSON document must be str or bytes-like, "
            f"not {type(data).__name__}"
        )
    return MemoryReader(data)


def parse(source: ByteSource, **kwargs: Any) -> Value:
    """
    Parses a JSON document from any ByteSource into a value tree.

    The source is consumed; the whole document must be a single JSON value
    surrounded by optional whitespace.
    """
    config = ParseConfig(**kwargs)
    return _parse_source(source, DefaultProvisioner(), config.number_as_string)


def validate(source: ByteSource, **kwargs: Any) -> Type:
    """
    Checks that a ByteSource holds valid JSON without building a tree.

    Returns the type of the root value.
    """
    config = ParseConfig(**kwargs)
    root = _parse_source(source, FakeProvisioner(), config.number_as_string)
    return root.type


def parse_string(data: Document, **kwargs: Any) -> Value:
    """
    Parses an in-memory JSON document.

    Accepts bytes-like objects or str; str input is encoded as UTF-8 first.
    """
    return parse(_memory_reader(data), **kwargs)


def validate_string(data: Document, **kwargs: Any) -> Type:
    """Validates an in-memory JSON document and returns its root type."""
    return validate(_memory_reader(data), **kwargs)


def parse_file(path: PathLike, **kwargs: Any) -> Value:
    """
    Parses a JSON file, reading it in blocks of ``buffer_size`` bytes.

    The file is closed before returning, whether parsing succeeded or not.
    """
    config = ParseConfig(**kwargs)
    logger.debug("parsing %s", path)
    with FileReader(path, config.buffer_size) as source:
        return _parse_source(
            source, DefaultProvisioner(), config.number_as_string
        )


def validate_file(path: PathLike, **kwargs: Any) -> Type:
    """Validates a JSON file and returns its root type."""
    config = ParseConfig(**kwargs)
    logger.debug("validating %s", path)
    with FileReader(path, config.buffer_size) as source:
        root = _parse_source(
            source, FakeProvisioner(), config.number_as_string
        )
    return root.type


__all__ = [
    "Array",
    "Boolean",
    "ByteSource",
    "DefaultProvisioner",
    "ErrorKind",
    "FakeProvisioner",
    "FileReader",
    "HotPathStats",
    "JSONDecodeError",
    "JSONReadError",
    "MemoryReader",
    "Null",
    "Number",
    "NumberAsString",
    "Object",
    "ParseConfig",
    "Parser",
    "Placeholder",
    "Provisioner",
    "PythonValue",
    "String",
    "Type",
    "Value",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "parse",
    "parse_file",
    "parse_string",
    "to_python",
    "validate",
    "validate_file",
    "validate_string",
]
