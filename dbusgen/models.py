"""Core data models shared across dbusgen components."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .signature import Node

ACCESS_READ = "read"
ACCESS_WRITE = "write"
ACCESS_READWRITE = "readwrite"
ACCESS_MODES = (ACCESS_READ, ACCESS_WRITE, ACCESS_READWRITE)

DIRECTION_IN = "in"
DIRECTION_OUT = "out"


@dataclass(frozen=True)
class Annotation:
    """Opaque name/value pair carried through to documentation."""

    name: str
    value: str


@dataclass(frozen=True)
class Arg:
    """Single argument of a method or signal."""

    name: str
    signature: Node
    direction: Optional[str] = None


@dataclass(frozen=True)
class Method:
    name: str
    in_args: Tuple[Arg, ...] = ()
    out_args: Tuple[Arg, ...] = ()
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class Property:
    name: str
    signature: Node
    access: str = ACCESS_READWRITE
    annotations: Tuple[Annotation, ...] = ()

    @property
    def readable(self) -> bool:
        return self.access in (ACCESS_READ, ACCESS_READWRITE)

    @property
    def writable(self) -> bool:
        return self.access in (ACCESS_WRITE, ACCESS_READWRITE)


@dataclass(frozen=True)
class Signal:
    name: str
    args: Tuple[Arg, ...] = ()
    annotations: Tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class Interface:
    """A D-Bus interface with uniquely named members."""

    name: str
    methods: Tuple[Method, ...] = ()
    properties: Tuple[Property, ...] = ()
    signals: Tuple[Signal, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
