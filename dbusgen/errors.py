"""Error taxonomy shared across dbusgen stages."""

from __future__ import annotations

from typing import Optional


class DBusGenError(RuntimeError):
    """Base class for failures that abort a generation run."""


class MalformedSignature(DBusGenError):
    """Raised when a D-Bus type signature cannot be decoded."""

    def __init__(self, signature: str, position: int, reason: str) -> None:
        super().__init__(f"malformed signature {signature!r} at position {position}: {reason}")
        self.signature = signature
        self.position = position
        self.reason = reason


class IntrospectionError(DBusGenError):
    """Raised when an introspection document is not well formed."""


class EmptyInput(DBusGenError):
    """Raised when synthesis is requested for zero interfaces."""


class InvalidConfiguration(DBusGenError):
    """Raised when generator options are contradictory or illegal."""


class NameCollision(DBusGenError):
    """Raised when two distinct raw names derive the same identifier."""

    def __init__(self, scope: str, identifier: str, first: str, second: str) -> None:
        super().__init__(
            f"{scope}: {first!r} and {second!r} both map to identifier {identifier!r}"
        )
        self.scope = scope
        self.identifier = identifier
        self.names = (first, second)


class GeneratedCodeInvalid(DBusGenError):
    """Raised when rendered bindings fail to compile; always a generator bug."""

    def __init__(self, message: str, lineno: Optional[int] = None, text: str = "") -> None:
        location = f" (line {lineno})" if lineno is not None else ""
        super().__init__(f"generated code is invalid{location}: {message}")
        self.lineno = lineno
        self.text = text


__all__ = [
    "DBusGenError",
    "EmptyInput",
    "GeneratedCodeInvalid",
    "IntrospectionError",
    "InvalidConfiguration",
    "MalformedSignature",
    "NameCollision",
]
