"""
Decoders for JSON string and number literals.

Both decoders work directly on a ByteSource, starting with the cursor on the
first byte of the literal and leaving it just past the last one.
"""

import math
from dataclasses import dataclass
from dataclasses import field

from ._errors import ErrorKind
from ._errors import JSONDecodeError
from ._errors import describe_byte
from ._profile import ProfileContext
from ._sources import ByteSource

WHITESPACE = frozenset(b" \t\r\n")
TERMINATORS = WHITESPACE | frozenset(b",]}")

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_DOT = ord(".")
_PLUS = ord("+")
_MINUS = ord("-")
_ZERO = ord("0")
_NINE = ord("9")
_EXPONENT_MARKERS = frozenset(b"eE")
_AFTER_ZERO = TERMINATORS | _EXPONENT_MARKERS | {_DOT}

_DELETE = 0x7F
_SPACE = 0x20

_ESCAPES = {
    ord('"'): ord('"'),
    ord("\\"): ord("\\"),
    ord("/"): ord("/"),
    ord("b"): ord("\b"),
    ord("f"): ord("\f"),
    ord("n"): ord("\n"),
    ord("r"): ord("\r"),
    ord("t"): ord("\t"),
}
_UNICODE_ESCAPE = ord("u")

_HEX_DIGITS = {
    **{byte: byte - _ZERO for byte in b"0123456789"},
    **{byte: byte - ord("a") + 10 for byte in b"abcdef"},
    **{byte: byte - ord("A") + 10 for byte in b"ABCDEF"},
}

# Code unit limits for 1- and 2-byte UTF-8 sequences
_ONE_BYTE_LIMIT = 0x7F
_TWO_BYTE_LIMIT = 0x7FF

# Past this any nonzero mantissa already overflows or underflows a double
_EXPONENT_CAP = 10_000

# Raw bytes 0xED 0xA0-0xBF would encode a UTF-16 surrogate
_SURROGATE_LEAD = 0xED
_SURROGATE_SECOND = 0xA0


def is_digit(byte: int) -> bool:
    return _ZERO <= byte <= _NINE


def _append_code_unit(output: bytearray, unit: int) -> None:
    """
    Appends one UTF-16 code unit to output as UTF-8.

    Surrogate halves are encoded on their own, never paired, so a \\uD83D
    \\uDE00 sequence yields two 3-byte sequences.
    """
    if unit <= _ONE_BYTE_LIMIT:
        output.append(unit)
    elif unit <= _TWO_BYTE_LIMIT:
        output.append((unit >> 6) | 0b11000000)
        output.append((unit & 0b00111111) | 0b10000000)
    else:
        output.append((unit >> 12) | 0b11100000)
        output.append(((unit >> 6) & 0b00111111) | 0b10000000)
        output.append((unit & 0b00111111) | 0b10000000)


def _read_code_unit(source: ByteSource, start: int) -> int:
    """Reads the four hex digits of a \\u escape; cursor ends on the last."""
    unit = 0
    for _ in range(4):
        if not source.advance():
            raise JSONDecodeError(
                ErrorKind.STRING, "unterminated string", start
            )
        digit = _HEX_DIGITS.get(source.current())
        if digit is None:
            raise JSONDecodeError(
                ErrorKind.STRING,
                "invalid unicode escape detected",
                source.position() + 1,
            )
        unit = unit * 16 + digit
    return unit


def extract_string(source: ByteSource) -> str:
    """
    Decodes a string literal; the cursor must be on the opening quote.

    Returns the decoded text with the cursor just past the closing quote.
    Surrogate code points are only accepted when they come from \\u
    escapes; raw input must be well-formed UTF-8.
    """
    with ProfileContext("extract_string") as profile:
        start = source.position() + 1
        output = bytearray()
        previous = 0

        while source.advance():
            byte = source.current()
            if byte == _QUOTE:
                source.advance()
                profile.nbytes = source.position() + 1 - start
                return _decode_utf8(output, start)

            if byte == _BACKSLASH:
                if not source.advance():
                    break
                escape = source.current()
                if escape == _UNICODE_ESCAPE:
                    _append_code_unit(output, _read_code_unit(source, start))
                elif escape in _ESCAPES:
                    output.append(_ESCAPES[escape])
                else:
                    raise JSONDecodeError(
                        ErrorKind.STRING,
                        f"unrecognized escape '\\{describe_byte(escape)}'",
                        source.position() + 1,
                    )
                byte = 0
            elif byte < _SPACE or byte == _DELETE:
                raise JSONDecodeError(
                    ErrorKind.STRING,
                    "string contains ASCII control character",
                    source.position() + 1,
                )
            elif previous == _SURROGATE_LEAD and byte >= _SURROGATE_SECOND:
                raise _invalid_utf8(start)
            else:
                output.append(byte)
            previous = byte

        raise JSONDecodeError(
            ErrorKind.STRING, "unterminated string", start
        )


def _invalid_utf8(start: int) -> JSONDecodeError:
    return JSONDecodeError(
        ErrorKind.STRING, "string contains invalid UTF-8", start
    )


def _decode_utf8(output: bytearray, start: int) -> str:
    try:
        return output.decode("utf-8", errors="surrogatepass")
    except UnicodeDecodeError as e:
        raise _invalid_utf8(start) from e


@dataclass(slots=True)
class NumberLiteral:
    """
    Pieces of a scanned number literal.

    ``text`` is the literal exactly as it appeared, without any leading
    minus sign. The digit buffers hold the integer, fraction and exponent
    digits separately for numeric conversion.
    """

    text: bytearray = field(default_factory=bytearray)
    integer: bytearray = field(default_factory=bytearray)
    fraction: bytearray = field(default_factory=bytearray)
    exponent: bytearray = field(default_factory=bytearray)
    negative_exponent: bool = False

    def to_double(self) -> float:
        """
        Accumulates the digits into a double.

        Integer digits are summed with scaling, fraction digits are divided
        by a growing power of ten and the exponent is applied last. Extreme
        literals overflow to infinity or underflow to zero.
        """
        value = 0.0
        for digit in self.integer:
            value = value * 10 + (digit - _ZERO)

        scale = 1.0
        for digit in self.fraction:
            scale *= 10
            value += (digit - _ZERO) / scale

        exponent = 0
        for digit in self.exponent:
            if exponent >= _EXPONENT_CAP:
                break
            exponent = exponent * 10 + (digit - _ZERO)
        if not exponent:
            return value
        if self.negative_exponent:
            exponent = -exponent

        try:
            return value * 10.0**exponent
        except OverflowError:
            if exponent < 0 or not value:
                return 0.0
            return math.inf


def _consume_digits(
    source: ByteSource, literal: NumberLiteral, digits: bytearray
) -> None:
    while source.is_valid():
        byte = source.current()
        if not is_digit(byte):
            return
        digits.append(byte)
        literal.text.append(byte)
        source.advance()


def _number_error(msg: str, pos: int) -> JSONDecodeError:
    return JSONDecodeError(ErrorKind.NUMBER, msg, pos)


def scan_number(source: ByteSource) -> NumberLiteral:
    """
    Scans a number literal; the cursor must be on its first digit.

    Any minus sign has already been consumed by the caller. The cursor is
    left on the terminating byte, or past the end of input.
    """
    start = source.position() + 1
    literal = NumberLiteral()

    lead = source.current()
    literal.text.append(lead)
    literal.integer.append(lead)
    source.advance()
    if lead == _ZERO:
        if source.is_valid() and source.current() not in _AFTER_ZERO:
            raise _number_error("invalid number starting with 0", start)
    else:
        _consume_digits(source, literal, literal.integer)

    if not source.is_valid():
        return literal
    byte = source.current()

    if byte == _DOT:
        literal.text.append(byte)
        if not source.advance():
            raise _number_error("invalid number with trailing '.'", start)
        if not is_digit(source.current()):
            raise _number_error(
                "'.' must be followed by at least one digit", start
            )
        _consume_digits(source, literal, literal.fraction)
        if not source.is_valid():
            return literal
        byte = source.current()

    if byte in _EXPONENT_MARKERS:
        literal.text.append(byte)
        if not source.advance():
            raise _number_error("invalid number with trailing 'e/E'", start)
        byte = source.current()
        if byte in (_PLUS, _MINUS):
            literal.text.append(byte)
            literal.negative_exponent = byte == _MINUS
            if not source.advance():
                raise _number_error(
                    "invalid number with trailing exponent sign", start
                )
            if not is_digit(source.current()):
                raise _number_error(
                    "exponent sign must be followed by at least one digit",
                    start,
                )
        elif not is_digit(byte):
            raise _number_error(
                "'e/E' should be followed by a sign or digit", start
            )
        _consume_digits(source, literal, literal.exponent)
        if not source.is_valid():
            return literal
        byte = source.current()

    if byte not in TERMINATORS:
        raise _number_error(
            f"invalid number containing '{describe_byte(byte)}'",
            source.position() + 1,
        )
    return literal


def extract_number(
    source: ByteSource, as_string: bool = False
) -> float | str:
    """
    Decodes the unsigned magnitude of a number literal.

    Returns a double, or the literal's exact text when ``as_string`` is set.
    """
    with ProfileContext("extract_number") as profile:
        begin = source.position()
        literal = scan_number(source)
        profile.nbytes = source.position() - begin
        if as_string:
            return literal.text.decode("ascii")
        return literal.to_double()
