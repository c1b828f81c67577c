"""
Forward-only byte cursors feeding the parser.

The engine only ever needs the byte under the cursor, a validity check, a
one-byte advance and the absolute position for error messages. Anything
providing those four methods can be parsed.
"""

import logging
import os
from types import TracebackType
from typing import Protocol

from ._errors import JSONReadError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 65536

type BytesLike = bytes | bytearray | memoryview


class ByteSource(Protocol):
    """Protocol for cursors over the bytes of a JSON document."""

    def current(self) -> int:
        """Byte at the cursor; only meaningful while is_valid() is true."""
        ...

    def is_valid(self) -> bool:
        """Whether a byte is available at the cursor."""
        ...

    def advance(self) -> bool:
        """Moves forward one byte and returns the new is_valid()."""
        ...

    def position(self) -> int:
        """0-based offset of the cursor from the start of the stream."""
        ...


class MemoryReader:
    """Cursor over an in-memory buffer."""

    def __init__(self, data: BytesLike) -> None:
        self._view = memoryview(data).cast("B")
        self._length = len(self._view)
        self._pos = 0

    def current(self) -> int:
        return self._view[self._pos]

    def is_valid(self) -> bool:
        return self._pos < self._length

    def advance(self) -> bool:
        self._pos += 1
        return self._pos < self._length

    def position(self) -> int:
        return self._pos


class FileReader:
    """
    Cursor over a file, read in fixed-size blocks.

    Owns its file handle; use it as a context manager so the handle is closed
    on every exit path. The first block is read on construction.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be at least 1")

        self.path = os.fspath(path)
        self._buffer = bytearray(buffer_size)
        self._available = 0
        self._index = 0
        self._overall = 0
        self._eof = False

        try:
            self._handle = open(self.path, "rb", buffering=0)  # noqa: SIM115
        except OSError as e:
            raise JSONReadError(
                f"failed to open file at '{self.path}'", e.errno
            ) from e

        logger.debug(
            "opened %s with a %d-byte read buffer", self.path, buffer_size
        )
        try:
            self._fill()
        except BaseException:
            self._handle.close()
            raise

    def __enter__(self) -> "FileReader":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Releases the file handle; safe to call more than once."""
        self._handle.close()

    def _fill(self) -> None:
        """Reads the next block; a zero-byte read marks a clean EOF."""
        if self._eof:
            self._available = 0
            return

        try:
            read = self._handle.readinto(self._buffer)
        except OSError as e:
            raise JSONReadError(
                f"failed to read file at '{self.path}' (errno {e.errno})",
                e.errno,
            ) from e

        self._available = read or 0
        if not self._available:
            self._eof = True
            logger.debug(
                "reached end of %s after %d bytes", self.path, self._overall
            )

    def current(self) -> int:
        return self._buffer[self._index]

    def is_valid(self) -> bool:
        return self._index < self._available

    def advance(self) -> bool:
        self._index += 1
        if self._index < self._available:
            return True

        self._overall += self._available
        self._index = 0
        self._fill()
        return self._available > 0

    def position(self) -> int:
        return self._overall + self._index
