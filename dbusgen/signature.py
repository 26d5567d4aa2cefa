"""D-Bus type signature decoding.

A signature is a string of single-character type codes. Compound types are
``a`` (array of the following complete type), ``(...)`` (struct) and
``{kv}`` (dict entry, only valid as an array element). ``v`` is a variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, List, Mapping, Sequence, Tuple, Union

from .errors import MalformedSignature

BASIC_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "y": "byte",
        "b": "boolean",
        "n": "int16",
        "q": "uint16",
        "i": "int32",
        "u": "uint32",
        "x": "int64",
        "t": "uint64",
        "d": "double",
        "s": "string",
        "o": "object_path",
        "g": "signature",
        "h": "unix_fd",
    }
)

VARIANT_CODE = "v"
ARRAY_CODE = "a"
STRUCT_OPEN, STRUCT_CLOSE = "(", ")"
DICT_OPEN, DICT_CLOSE = "{", "}"


Part = Union[str, "Node"]


def unfold(node: "Node", expand: Callable[["Node"], Union[str, Sequence[Part]]]) -> str:
    """Flatten ``node`` into text with an explicit stack instead of recursion.

    ``expand`` returns either the finished text for a node or a sequence of
    text and child nodes, which is expanded left to right.
    """
    out: List[str] = []
    pending: List[Part] = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            out.append(item)
            continue
        expanded = expand(item)
        if isinstance(expanded, str):
            out.append(expanded)
        else:
            pending.extend(reversed(expanded))
    return "".join(out)


class Node:
    """A decoded complete type.

    Equality, hashing and repr go through the encoded signature, so arbitrarily
    deep trees never hit the interpreter's recursion limit.
    """

    def parts(self) -> Union[str, Sequence[Part]]:
        """One level of the signature: its codes around the direct children."""
        raise NotImplementedError

    @property
    def signature(self) -> str:
        return unfold(self, lambda node: node.parts())

    def __str__(self) -> str:
        return self.signature

    def __repr__(self) -> str:
        return f"{type(self).__name__}<{self.signature}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return type(self) is type(other) and self.signature == other.signature

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.signature))


@dataclass(frozen=True, eq=False, repr=False)
class Basic(Node):
    code: str

    def __post_init__(self) -> None:
        if self.code not in BASIC_TYPES:
            raise ValueError(f"not a basic type code: {self.code!r}")

    def parts(self) -> str:
        return self.code

    @property
    def kind(self) -> str:
        return BASIC_TYPES[self.code]


@dataclass(frozen=True, eq=False, repr=False)
class Variant(Node):
    def parts(self) -> str:
        return VARIANT_CODE


@dataclass(frozen=True, eq=False, repr=False)
class Array(Node):
    element: Node

    def parts(self) -> Sequence[Part]:
        return (ARRAY_CODE, self.element)


@dataclass(frozen=True, eq=False, repr=False)
class Struct(Node):
    fields: Tuple[Node, ...]

    def parts(self) -> Sequence[Part]:
        return (STRUCT_OPEN, *self.fields, STRUCT_CLOSE)


@dataclass(frozen=True, eq=False, repr=False)
class DictEntry(Node):
    key: Basic
    value: Node

    def parts(self) -> Sequence[Part]:
        return (DICT_OPEN, self.key, self.value, DICT_CLOSE)


@dataclass
class _Frame:
    """An open compound type waiting for its children."""

    kind: str
    start: int
    items: List[Node] = field(default_factory=list)


_UNCLOSED = {
    ARRAY_CODE: "array has no element type",
    STRUCT_OPEN: "struct is never closed",
    DICT_OPEN: "dict entry is never closed",
}


def parse(signature: str) -> List[Node]:
    """Decode ``signature`` into one node per top-level complete type."""
    result: List[Node] = []
    stack: List[_Frame] = []

    def emit(node: Node, position: int) -> None:
        # Completed arrays bubble up until a struct, dict entry or the top level absorbs them.
        while stack and stack[-1].kind == ARRAY_CODE:
            stack.pop()
            node = Array(node)
        if not stack:
            result.append(node)
            return
        frame = stack[-1]
        if frame.kind == DICT_OPEN:
            if not frame.items and not isinstance(node, Basic):
                raise MalformedSignature(signature, position, "dict entry key must be a basic type")
            if len(frame.items) == 2:
                raise MalformedSignature(signature, position, "dict entry holds more than a key and a value")
        frame.items.append(node)

    for position, code in enumerate(signature):
        if code in BASIC_TYPES:
            emit(Basic(code), position)
        elif code == VARIANT_CODE:
            emit(Variant(), position)
        elif code in (ARRAY_CODE, STRUCT_OPEN):
            stack.append(_Frame(code, position))
        elif code == DICT_OPEN:
            if not stack or stack[-1].kind != ARRAY_CODE:
                raise MalformedSignature(signature, position, "dict entry outside an array element")
            stack.append(_Frame(code, position))
        elif code == STRUCT_CLOSE:
            if not stack or stack[-1].kind != STRUCT_OPEN:
                raise MalformedSignature(signature, position, "unexpected ')'")
            frame = stack.pop()
            if not frame.items:
                raise MalformedSignature(signature, position, "struct has no fields")
            emit(Struct(tuple(frame.items)), position)
        elif code == DICT_CLOSE:
            if not stack or stack[-1].kind != DICT_OPEN:
                raise MalformedSignature(signature, position, "unexpected '}'")
            frame = stack.pop()
            if len(frame.items) != 2:
                raise MalformedSignature(signature, position, "dict entry needs a key and a value")
            key, value = frame.items
            emit(DictEntry(key, value), position)  # type: ignore[arg-type]
        else:
            raise MalformedSignature(signature, position, f"unknown type code {code!r}")

    if stack:
        frame = stack[-1]
        raise MalformedSignature(signature, frame.start, _UNCLOSED[frame.kind])
    return result


def parse_single(signature: str) -> Node:
    """Decode a signature that must hold exactly one complete type."""
    nodes = parse(signature)
    if len(nodes) != 1:
        raise MalformedSignature(
            signature, 0, f"expected a single complete type, found {len(nodes)}"
        )
    return nodes[0]


def encode(nodes: Union[Node, List[Node], Tuple[Node, ...]]) -> str:
    """Re-encode nodes into their signature string."""
    if isinstance(nodes, Node):
        return nodes.signature
    return "".join(node.signature for node in nodes)


__all__ = [
    "Array",
    "BASIC_TYPES",
    "Basic",
    "DictEntry",
    "Node",
    "Struct",
    "Variant",
    "encode",
    "parse",
    "parse_single",
    "unfold",
]
