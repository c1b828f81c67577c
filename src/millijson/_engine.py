"""
Iterative JSON parsing engine.

Nested arrays and objects are tracked on an explicit stack of frames instead
of the call stack, so nesting depth is limited only by available memory.
Values are created through a Provisioner, which lets the same grammar code
either build a tree or only validate the document.
"""

from dataclasses import dataclass
from dataclasses import field

from ._errors import ErrorKind
from ._errors import JSONDecodeError
from ._errors import describe_byte
from ._literals import WHITESPACE
from ._literals import extract_number
from ._literals import extract_string
from ._literals import is_digit
from ._profile import ProfileContext
from ._provisioners import Provisioner
from ._sources import ByteSource

_QUOTE = ord('"')
_COMMA = ord(",")
_COLON = ord(":")
_MINUS = ord("-")
_OPEN_ARRAY = ord("[")
_CLOSE_ARRAY = ord("]")
_OPEN_OBJECT = ord("{")
_CLOSE_OBJECT = ord("}")

_LITERALS = {
    ord("t"): b"true",
    ord("f"): b"false",
    ord("n"): b"null",
}


@dataclass(slots=True)
class ArrayFrame[V]:
    """An array that has been opened but not yet closed."""

    start: int
    contents: list[V] = field(default_factory=list)


@dataclass(slots=True)
class ObjectFrame[V]:
    """An object that has been opened but not yet closed."""

    start: int
    key: str
    key_position: int
    contents: dict[str, V] = field(default_factory=dict)


def skip_whitespace(source: ByteSource) -> None:
    """Skips JSON whitespace: space, tab, CR and LF only."""
    while source.is_valid() and source.current() in WHITESPACE:
        source.advance()


class Parser[V]:
    """
    State machine that parses a single JSON value from a ByteSource.

    The parser alternates between producing a value (a scalar, an empty
    container or a just-closed container) and folding that value into the
    innermost open frame. Opening a non-empty container pushes a frame and
    goes back to producing its first element.
    """

    def __init__(
        self,
        source: ByteSource,
        provisioner: Provisioner[V],
        number_as_string: bool = False,
    ) -> None:
        self.source = source
        self.provisioner = provisioner
        self.number_as_string = number_as_string
        self.stack: list[ArrayFrame[V] | ObjectFrame[V]] = []

    def parse_value(self) -> V:
        """Parses one value; the cursor must be on its first byte."""
        while True:
            value = self._produce()
            if value is None:
                continue
            value = self._fold(value)
            if value is not None:
                return value

    def _produce(self) -> V | None:
        """
        Produces the value starting at the cursor.

        Returns None when a new frame was pushed instead, in which case the
        cursor is on the first byte of that container's first element.
        """
        source = self.source
        provisioner = self.provisioner
        start = source.position() + 1
        byte = source.current()

        if byte in _LITERALS:
            expected = _LITERALS[byte]
            self._expect_literal(expected, start)
            if expected == b"null":
                return provisioner.new_null()
            return provisioner.new_boolean(expected == b"true")

        if byte == _QUOTE:
            return provisioner.new_string(extract_string(source))

        if byte == _MINUS:
            if not source.advance():
                raise JSONDecodeError(
                    ErrorKind.NUMBER, "incomplete number starting", start
                )
            if not is_digit(source.current()):
                raise JSONDecodeError(
                    ErrorKind.NUMBER,
                    "invalid number with '-' followed by "
                    f"'{describe_byte(source.current())}'",
                    start,
                )
            return self._number(negative=True)

        if is_digit(byte):
            return self._number(negative=False)

        if byte == _OPEN_ARRAY:
            self._enter_container(start, "array")
            if source.current() == _CLOSE_ARRAY:
                source.advance()
                return provisioner.new_array([])
            self.stack.append(ArrayFrame(start))
            return None

        if byte == _OPEN_OBJECT:
            self._enter_container(start, "object")
            if source.current() == _CLOSE_OBJECT:
                source.advance()
                return provisioner.new_object({})
            key, key_position = self._read_key(start)
            self.stack.append(ObjectFrame(start, key, key_position))
            return None

        raise JSONDecodeError(
            ErrorKind.STRUCTURE,
            f"unknown type starting with '{describe_byte(byte)}'",
            start,
        )

    def _fold(self, value: V) -> V | None:
        """
        Adds a finished value to the open frames, closing any that end.

        Returns the root value once the stack is empty, or None when the
        cursor has moved on to the next element of an open container.
        """
        source = self.source
        while self.stack:
            frame = self.stack[-1]

            if isinstance(frame, ArrayFrame):
                frame.contents.append(value)
                byte = self._next_separator(frame.start, "array")
                if byte == _COMMA:
                    source.advance()
                    self._skip_inside(frame.start, "array")
                    return None
                if byte != _CLOSE_ARRAY:
                    raise JSONDecodeError(
                        ErrorKind.STRUCTURE,
                        f"unknown character '{describe_byte(byte)}' in array",
                        source.position() + 1,
                        frame.start,
                        "array",
                    )
                source.advance()
                self.stack.pop()
                value = self.provisioner.new_array(frame.contents)

            else:
                if frame.key in frame.contents:
                    raise JSONDecodeError(
                        ErrorKind.STRUCTURE,
                        f"detected duplicate key '{frame.key}' in object",
                        frame.key_position,
                        frame.start,
                        "object",
                    )
                frame.contents[frame.key] = value
                byte = self._next_separator(frame.start, "object")
                if byte == _COMMA:
                    source.advance()
                    self._skip_inside(frame.start, "object")
                    frame.key, frame.key_position = self._read_key(
                        frame.start
                    )
                    return None
                if byte != _CLOSE_OBJECT:
                    raise JSONDecodeError(
                        ErrorKind.STRUCTURE,
                        f"unknown character '{describe_byte(byte)}' "
                        "in object",
                        source.position() + 1,
                        frame.start,
                        "object",
                    )
                source.advance()
                self.stack.pop()
                value = self.provisioner.new_object(frame.contents)

        return value

    def _number(self, negative: bool) -> V:
        result = extract_number(self.source, self.number_as_string)
        if isinstance(result, str):
            if negative:
                result = "-" + result
            return self.provisioner.new_number_as_string(result)
        return self.provisioner.new_number(-result if negative else result)

    def _expect_literal(self, expected: bytes, start: int) -> None:
        source = self.source
        for byte in expected:
            if not source.is_valid() or source.current() != byte:
                raise JSONDecodeError(
                    ErrorKind.LITERAL,
                    f"expected a '{expected.decode()}' string starting",
                    start,
                )
            source.advance()

    def _unterminated(self, start: int, kind: str) -> JSONDecodeError:
        return JSONDecodeError(
            ErrorKind.STRUCTURE, f"unterminated {kind} starting", start
        )

    def _skip_inside(self, start: int, kind: str) -> None:
        """Skips whitespace where the container must continue."""
        skip_whitespace(self.source)
        if not self.source.is_valid():
            raise self._unterminated(start, kind)

    def _enter_container(self, start: int, kind: str) -> None:
        self.source.advance()
        self._skip_inside(start, kind)

    def _next_separator(self, start: int, kind: str) -> int:
        self._skip_inside(start, kind)
        return self.source.current()

    def _read_key(self, start: int) -> tuple[str, int]:
        """
        Reads an object key and the colon after it.

        The cursor must be on the key's opening quote and is left on the
        first byte of the member's value.
        """
        source = self.source
        if source.current() != _QUOTE:
            raise JSONDecodeError(
                ErrorKind.STRUCTURE,
                "expected a string as the object key",
                source.position() + 1,
                start,
                "object",
            )
        key_position = source.position() + 1
        key = extract_string(source)

        self._skip_inside(start, "object")
        if source.current() != _COLON:
            raise JSONDecodeError(
                ErrorKind.STRUCTURE,
                "expected ':' to separate keys and values",
                source.position() + 1,
                start,
                "object",
            )
        source.advance()
        self._skip_inside(start, "object")
        return key, key_position


def parse[V](
    source: ByteSource,
    provisioner: Provisioner[V],
    number_as_string: bool = False,
) -> V:
    """
    Parses a complete JSON document from source.

    Leading and trailing whitespace is allowed; anything else after the root
    value is an error, as is a document with no value at all.
    """
    with ProfileContext("parse") as profile:
        begin = source.position()
        skip_whitespace(source)
        if not source.is_valid():
            raise JSONDecodeError(
                ErrorKind.EMPTY, "no contents", source.position() + 1
            )

        parser = Parser(source, provisioner, number_as_string)
        output = parser.parse_value()

        skip_whitespace(source)
        if source.is_valid():
            raise JSONDecodeError(
                ErrorKind.STRUCTURE,
                "invalid json with trailing non-space characters",
                source.position() + 1,
            )
        profile.nbytes = source.position() - begin
        return output
