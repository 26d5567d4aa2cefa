"""Compile-checking and canonical formatting of generated source."""

from __future__ import annotations

import ast

import black

from ..errors import GeneratedCodeInvalid
from ..logging import get_logger


class SourceValidator:
    """Rejects generated text that does not compile and formats the rest with black."""

    def __init__(self, *, filename: str = "<generated>", line_length: int = 88) -> None:
        self.filename = filename
        self.mode = black.Mode(line_length=line_length)
        self.logger = get_logger("postproc.validate")

    def validate(self, text: str, *, format: bool = True) -> str:
        """Return ``text`` canonically formatted, or unchanged when ``format`` is off."""
        try:
            tree = ast.parse(text, filename=self.filename)
            compile(tree, self.filename, "exec", dont_inherit=True)
        except SyntaxError as exc:
            raise GeneratedCodeInvalid(exc.msg, exc.lineno, text) from exc
        except RecursionError as exc:
            # Types nested deeper than the compiler can follow.
            raise GeneratedCodeInvalid("expression nesting too deep to compile", None, text) from exc
        if not format:
            return text
        try:
            formatted = black.format_str(text, mode=self.mode)
        except black.InvalidInput as exc:
            raise GeneratedCodeInvalid(str(exc), None, text) from exc
        except RecursionError as exc:
            raise GeneratedCodeInvalid("expression nesting too deep to format", None, text) from exc
        self.logger.debug("Formatted %d lines of generated code", formatted.count("\n"))
        return formatted


def validate(text: str, *, format: bool = True) -> str:
    """Module-level shortcut around :class:`SourceValidator`."""
    return SourceValidator().validate(text, format=format)


__all__ = ["SourceValidator", "validate"]
