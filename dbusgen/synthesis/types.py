"""Mapping of decoded signatures onto Python types."""

from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Union

from ..signature import Array, Basic, DictEntry, Node, Part, Struct, Variant, unfold

_BASIC_ANNOTATIONS: Mapping[str, str] = MappingProxyType(
    {
        "y": "int",
        "b": "bool",
        "n": "int",
        "q": "int",
        "i": "int",
        "u": "int",
        "x": "int",
        "t": "int",
        "d": "float",
        "s": "str",
        "o": "str",
        "g": "str",
        "h": "int",
    }
)

_BASIC_ZEROS: Mapping[str, str] = MappingProxyType(
    {"int": "0", "bool": "False", "float": "0.0", "str": '""'}
)


def _is_byte_array(node: Node) -> bool:
    return isinstance(node, Array) and isinstance(node.element, Basic) and node.element.code == "y"


def _annotation_parts(node: Node) -> Union[str, Sequence[Part]]:
    if isinstance(node, Basic):
        return _BASIC_ANNOTATIONS[node.code]
    if isinstance(node, Variant):
        return "Any"
    if _is_byte_array(node):
        return "bytes"
    if isinstance(node, Array):
        element = node.element
        if isinstance(element, DictEntry):
            return ("Dict[", element.key, ", ", element.value, "]")
        return ("List[", element, "]")
    if isinstance(node, Struct):
        return ("Tuple[", *_joined(node.fields, ", "), "]")
    raise TypeError(f"no annotation for {node!r}")


def _zero_parts(node: Node) -> Union[str, Sequence[Part]]:
    if isinstance(node, Basic):
        return _BASIC_ZEROS[_BASIC_ANNOTATIONS[node.code]]
    if isinstance(node, Variant):
        return "None"
    if _is_byte_array(node):
        return 'b""'
    if isinstance(node, Array):
        return "{}" if isinstance(node.element, DictEntry) else "[]"
    if isinstance(node, Struct):
        return ("(", *_joined(node.fields, ", "), ",)")
    raise TypeError(f"no zero value for {node!r}")


def _joined(nodes: Sequence[Node], separator: str) -> List[Part]:
    parts: List[Part] = []
    for index, node in enumerate(nodes):
        if index:
            parts.append(separator)
        parts.append(node)
    return parts


def annotation(node: Node) -> str:
    """Return the type hint used for ``node`` in generated code."""
    return unfold(node, _annotation_parts)


def runtime_check(node: Node) -> Optional[str]:
    """Return the isinstance() tuple literal for ``node``; None accepts anything."""
    if isinstance(node, Basic):
        return f"({_BASIC_ANNOTATIONS[node.code]},)"
    if isinstance(node, Variant):
        return None
    if _is_byte_array(node):
        return "(bytes, bytearray, list)"
    if isinstance(node, Array):
        return "(dict,)" if isinstance(node.element, DictEntry) else "(list,)"
    if isinstance(node, Struct):
        return "(tuple, list)"
    raise TypeError(f"no runtime check for {node!r}")


def zero_value(node: Node) -> str:
    """Return a Python expression evaluating to the zero value of ``node``."""
    return unfold(node, _zero_parts)


__all__ = ["annotation", "runtime_check", "zero_value"]
