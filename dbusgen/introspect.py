"""Reading and combining D-Bus introspection documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Callable, Iterable, Iterator, List, Sequence, TypeVar, Union

from .errors import IntrospectionError
from .logging import get_logger
from .models import (
    ACCESS_MODES,
    DIRECTION_IN,
    DIRECTION_OUT,
    Annotation,
    Arg,
    Interface,
    Method,
    Property,
    Signal,
)
from .signature import parse_single

logger = get_logger("introspect")

Document = Union[str, bytes]
_T = TypeVar("_T")


def parse_introspection(document: Document, *, source: str = "<input>") -> List[Interface]:
    """Return the interfaces declared by ``document`` and all of its child nodes."""
    root = _load(document, source)
    interfaces: List[Interface] = []
    seen = set()
    for element in _iter_interfaces(root):
        iface = _parse_interface(element, source)
        if iface.name in seen:
            logger.debug("%s: interface %s declared twice, keeping the first", source, iface.name)
            continue
        seen.add(iface.name)
        interfaces.append(iface)
    logger.debug("%s: parsed %d interfaces", source, len(interfaces))
    return interfaces


def combine_documents(documents: Sequence[Document]) -> str:
    """Merge the interfaces of several documents into one ``<node>`` document."""
    combined = ET.Element("node")
    seen = set()
    for index, document in enumerate(documents):
        root = _load(document, f"<document {index}>")
        for element in _iter_interfaces(root):
            name = element.get("name", "")
            if name in seen:
                continue
            seen.add(name)
            combined.append(element)
    ET.indent(combined, space="\t")
    return ET.tostring(combined, encoding="unicode") + "\n"


def _load(document: Document, source: str) -> ET.Element:
    try:
        root = ET.fromstring(document)
    except ET.ParseError as exc:
        raise IntrospectionError(f"{source}: invalid introspection XML: {exc}") from exc
    if root.tag != "node":
        raise IntrospectionError(f"{source}: root element must be <node>, found <{root.tag}>")
    return root


def _iter_interfaces(node: ET.Element) -> Iterator[ET.Element]:
    yield from node.findall("interface")
    for child in node.findall("node"):
        yield from _iter_interfaces(child)


def _require_name(element: ET.Element, source: str) -> str:
    name = element.get("name")
    if not name:
        raise IntrospectionError(f"{source}: <{element.tag}> element without a name")
    return name


def _unique(items: Iterable[_T], key: Callable[[_T], str]) -> tuple:
    seen = set()
    result = []
    for item in items:
        if key(item) in seen:
            continue
        seen.add(key(item))
        result.append(item)
    return tuple(result)


def _annotations(element: ET.Element, source: str) -> tuple:
    return tuple(
        Annotation(name=_require_name(child, source), value=child.get("value", ""))
        for child in element.findall("annotation")
    )


def _parse_arg(element: ET.Element, source: str, *, default_direction: str | None) -> Arg:
    type_code = element.get("type")
    if type_code is None:
        raise IntrospectionError(f"{source}: <arg> element without a type")
    # Signal arguments are always outgoing; their direction attribute is ignored.
    direction = None
    if default_direction is not None:
        direction = element.get("direction", default_direction)
        if direction not in (DIRECTION_IN, DIRECTION_OUT):
            raise IntrospectionError(f"{source}: unknown argument direction {direction!r}")
    return Arg(name=element.get("name", ""), signature=parse_single(type_code), direction=direction)


def _parse_method(element: ET.Element, source: str) -> Method:
    args = [_parse_arg(child, source, default_direction=DIRECTION_IN) for child in element.findall("arg")]
    return Method(
        name=_require_name(element, source),
        in_args=tuple(arg for arg in args if arg.direction == DIRECTION_IN),
        out_args=tuple(arg for arg in args if arg.direction == DIRECTION_OUT),
        annotations=_annotations(element, source),
    )


def _parse_property(element: ET.Element, source: str) -> Property:
    name = _require_name(element, source)
    access = element.get("access", "")
    if access not in ACCESS_MODES:
        raise IntrospectionError(f"{source}: property {name} has unknown access {access!r}")
    type_code = element.get("type")
    if type_code is None:
        raise IntrospectionError(f"{source}: property {name} has no type")
    return Property(
        name=name,
        signature=parse_single(type_code),
        access=access,
        annotations=_annotations(element, source),
    )


def _parse_signal(element: ET.Element, source: str) -> Signal:
    return Signal(
        name=_require_name(element, source),
        args=tuple(_parse_arg(child, source, default_direction=None) for child in element.findall("arg")),
        annotations=_annotations(element, source),
    )


def _parse_interface(element: ET.Element, source: str) -> Interface:
    def by_name(item: Union[Method, Property, Signal]) -> str:
        return item.name

    return Interface(
        name=_require_name(element, source),
        methods=_unique((_parse_method(child, source) for child in element.findall("method")), by_name),
        properties=_unique((_parse_property(child, source) for child in element.findall("property")), by_name),
        signals=_unique((_parse_signal(child, source) for child in element.findall("signal")), by_name),
        annotations=_annotations(element, source),
    )


__all__ = ["combine_documents", "parse_introspection"]
