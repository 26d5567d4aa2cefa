"""Identifier derivation for generated bindings.

Raw D-Bus names (interfaces, members, arguments) become legal Python
identifiers that never shadow keywords. Arguments are camelCased, exported
names (class attributes, methods) start with an uppercase letter.
"""

from __future__ import annotations

import re
from typing import Sequence

# Python 3 keywords and soft keywords, fixed here so output does not depend on
# the interpreter running the generator.
RESERVED_WORDS = frozenset(
    {
        "False",
        "None",
        "True",
        "and",
        "as",
        "assert",
        "async",
        "await",
        "break",
        "case",
        "class",
        "continue",
        "def",
        "del",
        "elif",
        "else",
        "except",
        "finally",
        "for",
        "from",
        "global",
        "if",
        "import",
        "in",
        "is",
        "lambda",
        "match",
        "nonlocal",
        "not",
        "or",
        "pass",
        "raise",
        "return",
        "self",
        "try",
        "type",
        "while",
        "with",
        "yield",
    }
)

_SEPARATOR_RUN = re.compile(r"[^A-Za-z0-9]+([A-Za-z0-9])")
_ILLEGAL_CHARS = re.compile(r"[^A-Za-z0-9_]")


def is_reserved(name: str) -> bool:
    return name in RESERVED_WORDS


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def derive(raw_name: str, role_prefix: str, index: int, exported: bool = False) -> str:
    """Return a legal, non-reserved identifier for ``raw_name``.

    Unnamed arguments become ``role_prefix`` followed by their position.
    """
    if not raw_name:
        name = f"{role_prefix}{index}"
    else:
        head, tail = raw_name[:1].lower(), raw_name[1:]
        name = head + _SEPARATOR_RUN.sub(lambda m: m.group(1).upper(), tail)
        name = _ILLEGAL_CHARS.sub("", name)
        if not name:
            name = f"{role_prefix}{index}"
        elif name[0].isdigit():
            name = role_prefix + name
    if exported:
        name = _capitalize(name)
    if is_reserved(name):
        name = role_prefix + _capitalize(name)
        if exported:
            name = _capitalize(name)
    return name


def _strip_prefix(name: str, prefixes: Sequence[str]) -> str:
    for prefix in prefixes:
        prefix = prefix.rstrip(".")
        if prefix and name.startswith(prefix + ".") and len(name) > len(prefix) + 1:
            return name[len(prefix) + 1 :]
    return name


def interface_type(name: str, prefixes: Sequence[str] = ()) -> str:
    """Return the binding class name for a dot-delimited interface name."""
    stripped = _capitalize(_strip_prefix(name, prefixes))
    result = _SEPARATOR_RUN.sub(lambda m: "_" + m.group(1).upper(), stripped)
    result = _ILLEGAL_CHARS.sub("", result)
    if not result:
        result = "Interface"
    elif result[0].isdigit():
        result = "_" + result
    if is_reserved(result):
        result += "_"
    return result


def interface_constant(type_name: str) -> str:
    return "INTERFACE_" + type_name.lstrip("_").upper()


def constructor_name(type_name: str) -> str:
    return "new_" + type_name.lstrip("_").lower()


def member_name(raw_name: str, role_prefix: str) -> str:
    return derive(raw_name, role_prefix, 0, exported=True)


def property_getter(raw_name: str) -> str:
    return "Get" + member_name(raw_name, "Prop")


def property_setter(raw_name: str) -> str:
    return "Set" + member_name(raw_name, "Prop")


def signal_type(type_name: str, raw_signal_name: str) -> str:
    return f"{type_name}_{member_name(raw_signal_name, 'Signal')}Signal"


def signal_body_type(type_name: str, raw_signal_name: str) -> str:
    return signal_type(type_name, raw_signal_name) + "Body"


def decoder_name(type_name: str, raw_signal_name: str) -> str:
    return "_decode_" + signal_type(type_name, raw_signal_name).lower()


__all__ = [
    "RESERVED_WORDS",
    "constructor_name",
    "decoder_name",
    "derive",
    "interface_constant",
    "interface_type",
    "is_reserved",
    "member_name",
    "property_getter",
    "property_setter",
    "signal_body_type",
    "signal_type",
]
