"""Error types raised while reading or parsing JSON documents."""

from enum import Enum

type Position = int

# Bytes above this are shown as escapes in messages
_PRINTABLE_LIMIT = 126


class ErrorKind(Enum):
    """
    Category of a parsing failure.

    Lets callers and tests branch on what went wrong without matching
    message text.
    """

    LITERAL = "literal"
    NUMBER = "number"
    STRING = "string"
    STRUCTURE = "structure"
    IO = "io"
    EMPTY = "empty"


class JSONDecodeError(ValueError):
    """
    Handles JSON grammar failures with precise byte position information.

    Positions are 1-based offsets into the byte stream. Structural errors
    raised inside an array or object also record where that container began.
    """

    def __init__(
        self,
        kind: ErrorKind,
        msg: str,
        pos: Position,
        container: Position | None = None,
        container_type: str = "",
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.kind = kind
        self.msg = msg
        self.pos = pos
        self.container = container

        message = f"{msg} at position {pos}"
        if container is not None:
            message += (
                f" (in {container_type} starting at position {container})"
            )
        super().__init__(message)


class JSONReadError(OSError):
    """Raised when a JSON file cannot be opened or read."""

    kind = ErrorKind.IO

    def __init__(self, msg: str, errno: int | None = None) -> None:
        if errno is None:
            super().__init__(msg)
        else:
            super().__init__(errno, msg)
        self.msg = msg


def describe_byte(byte: int) -> str:
    """Renders a single input byte for use inside an error message."""
    if byte < 0x20 or byte > _PRINTABLE_LIMIT:
        return f"\\x{byte:02x}"
    return chr(byte)
