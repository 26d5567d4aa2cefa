"""Generate Python bindings from D-Bus introspection data."""

from .errors import (
    DBusGenError,
    EmptyInput,
    GeneratedCodeInvalid,
    IntrospectionError,
    InvalidConfiguration,
    MalformedSignature,
    NameCollision,
)
from .introspect import combine_documents, parse_introspection
from .merge import filter_interfaces, merge
from .naming import derive
from .signature import parse
from .synthesis import SynthesisOptions, synthesize

__all__ = [
    "DBusGenError",
    "EmptyInput",
    "GeneratedCodeInvalid",
    "IntrospectionError",
    "InvalidConfiguration",
    "MalformedSignature",
    "NameCollision",
    "SynthesisOptions",
    "combine_documents",
    "derive",
    "filter_interfaces",
    "merge",
    "parse",
    "parse_introspection",
    "synthesize",
]
