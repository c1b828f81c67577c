"""
Value tree produced by the parser.

Every node is one of a closed set of dataclasses, each tagged with a Type.
Callers can branch on ``node.type`` or use structural pattern matching on
the classes themselves.
"""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import ClassVar
from typing import cast

# Plain Python rendering of a tree, as produced by to_python()
type PythonValue = (
    None | bool | float | str | list[PythonValue] | dict[str, PythonValue]
)


class Type(Enum):
    """All known JSON value kinds."""

    NUMBER = "number"
    NUMBER_AS_STRING = "number_as_string"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True, slots=True)
class Number:
    """JSON number stored as a double."""

    value: float
    type: ClassVar[Type] = Type.NUMBER


@dataclass(frozen=True, slots=True)
class NumberAsString:
    """
    JSON number stored as its literal source text.

    The sign is part of the text, e.g. ``"-1.50e+3"``. No conversion is done,
    so the text round-trips exactly.
    """

    value: str
    type: ClassVar[Type] = Type.NUMBER_AS_STRING


@dataclass(frozen=True, slots=True)
class String:
    """JSON string with escapes resolved."""

    value: str
    type: ClassVar[Type] = Type.STRING


@dataclass(frozen=True, slots=True)
class Boolean:
    value: bool
    type: ClassVar[Type] = Type.BOOLEAN


@dataclass(frozen=True, slots=True)
class Null:
    type: ClassVar[Type] = Type.NULL


@dataclass(slots=True)
class Array:
    """JSON array; element order matches the source text."""

    values: list["Value"] = field(default_factory=list)
    type: ClassVar[Type] = Type.ARRAY


@dataclass(slots=True)
class Object:
    """JSON object; keys are unique."""

    values: dict[str, "Value"] = field(default_factory=dict)
    type: ClassVar[Type] = Type.OBJECT


type Value = (
    Number | NumberAsString | String | Boolean | Null | Array | Object
)


def _shallow(
    node: Value,
) -> tuple[PythonValue, list[tuple[Value, PythonValue]]]:
    """Converts one node, returning containers still waiting for children."""
    if isinstance(node, Array):
        items: list[PythonValue] = []
        return items, [(node, items)]
    if isinstance(node, Object):
        members: dict[str, PythonValue] = {}
        return members, [(node, members)]
    if isinstance(node, Null):
        return None, []
    return node.value, []


def to_python(value: Value) -> PythonValue:
    """
    Converts a value tree into plain Python objects.

    Arrays become lists, objects become dicts, numbers become floats (or
    str in string-preserving mode) and null becomes None. Works with an
    explicit stack so arbitrarily deep trees convert safely.
    """
    result, pending = _shallow(value)
    while pending:
        node, target = pending.pop()
        if isinstance(node, Array):
            items = cast(list[PythonValue], target)
            for item in node.values:
                converted, children = _shallow(item)
                items.append(converted)
                pending.extend(children)
        else:
            members = cast(dict[str, PythonValue], target)
            for key, item in cast(Object, node).values.items():
                converted, children = _shallow(item)
                members[key] = converted
                pending.extend(children)
    return result
