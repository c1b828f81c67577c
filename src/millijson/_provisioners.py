"""
Node factories used by the parsing engine.

The engine never constructs values itself. It asks a provisioner for every
node, so swapping the provisioner switches between building a real tree and
merely checking the grammar.
"""

from dataclasses import dataclass
from typing import Protocol

from ._values import Array
from ._values import Boolean
from ._values import Null
from ._values import Number
from ._values import NumberAsString
from ._values import Object
from ._values import String
from ._values import Type
from ._values import Value


class Provisioner[V](Protocol):
    """Protocol for factories that materialize parsed values."""

    def new_boolean(self, value: bool) -> V: ...

    def new_number(self, value: float) -> V: ...

    def new_number_as_string(self, text: str) -> V: ...

    def new_string(self, text: str) -> V: ...

    def new_null(self) -> V: ...

    def new_array(self, contents: list[V]) -> V:
        """Takes ownership of the finished element list."""
        ...

    def new_object(self, contents: dict[str, V]) -> V:
        """Takes ownership of the finished member mapping."""
        ...


class DefaultProvisioner:
    """Builds real Value nodes."""

    def new_boolean(self, value: bool) -> Value:
        return Boolean(value)

    def new_number(self, value: float) -> Value:
        return Number(value)

    def new_number_as_string(self, text: str) -> Value:
        return NumberAsString(text)

    def new_string(self, text: str) -> Value:
        return String(text)

    def new_null(self) -> Value:
        return Null()

    def new_array(self, contents: list[Value]) -> Value:
        return Array(contents)

    def new_object(self, contents: dict[str, Value]) -> Value:
        return Object(contents)


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Stand-in node that only records the kind of value parsed."""

    type: Type


_PLACEHOLDERS = {kind: Placeholder(kind) for kind in Type}


class FakeProvisioner:
    """
    Builds placeholder nodes for validation-only parsing.

    Every node of a given kind is the same shared Placeholder, and finished
    containers are dropped, so nothing but the type tags survive. While an
    object is open the engine still maps its keys to placeholders, which is
    all that duplicate-key detection needs.
    """

    def new_boolean(self, value: bool) -> Placeholder:
        return _PLACEHOLDERS[Type.BOOLEAN]

    def new_number(self, value: float) -> Placeholder:
        return _PLACEHOLDERS[Type.NUMBER]

    def new_number_as_string(self, text: str) -> Placeholder:
        return _PLACEHOLDERS[Type.NUMBER_AS_STRING]

    def new_string(self, text: str) -> Placeholder:
        return _PLACEHOLDERS[Type.STRING]

    def new_null(self) -> Placeholder:
        return _PLACEHOLDERS[Type.NULL]

    def new_array(self, contents: list[Placeholder]) -> Placeholder:
        return _PLACEHOLDERS[Type.ARRAY]

    def new_object(self, contents: dict[str, Placeholder]) -> Placeholder:
        return _PLACEHOLDERS[Type.OBJECT]
