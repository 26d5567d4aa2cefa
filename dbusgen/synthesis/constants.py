"""Shared constants for binding synthesis."""

DEFAULT_PACKAGE_NAME = "dbusgen"

TEMPLATE_NAME = "bindings.py.j2"

# Top-level names every generated module defines or imports; derived identifiers must not reuse them.
MODULE_NAMES = (
    "Any",
    "BusObject",
    "Callable",
    "Dict",
    "Interface",
    "List",
    "METHOD_PROPERTY_GET",
    "METHOD_PROPERTY_SET",
    "Optional",
    "Protocol",
    "Sequence",
    "Signal",
    "Tuple",
    "_INTERFACES",
    "_SIGNALS",
    "_field",
    "_unwrap",
    "add_match_rule",
    "annotations",
    "dataclass",
    "field",
    "logger",
    "logging",
    "lookup_interface",
    "lookup_signal",
)

# Attributes every generated binding class defines besides the interface members.
CLASS_MEMBER_NAMES = ("__init__", "_object", "interface_name")
