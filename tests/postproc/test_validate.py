"""Tests for the emission validator."""

from __future__ import annotations

import pytest

from dbusgen.errors import GeneratedCodeInvalid
from dbusgen.postproc.validate import SourceValidator, validate


def test_validate_formats_source_canonically() -> None:
    source = "x=1\ndef f( a,b ):\n  return {'a':a,'b':b}\n"
    formatted = validate(source)
    assert formatted == 'x = 1\n\n\ndef f(a, b):\n    return {"a": a, "b": b}\n'


def test_validate_is_idempotent() -> None:
    once = validate("y = [1,2,3]\n")
    assert validate(once) == once


def test_validate_rejects_syntax_errors() -> None:
    with pytest.raises(GeneratedCodeInvalid) as excinfo:
        validate("def broken(:\n    pass\n")
    assert excinfo.value.lineno == 1
    assert "broken" in excinfo.value.text


def test_validate_rejects_compile_time_errors() -> None:
    with pytest.raises(GeneratedCodeInvalid, match="duplicate argument"):
        validate("def f(a, a):\n    return a\n")


def test_validate_without_formatting_returns_raw_text() -> None:
    source = "x=1\n"
    assert SourceValidator().validate(source, format=False) == source


def test_validate_without_formatting_still_checks_syntax() -> None:
    with pytest.raises(GeneratedCodeInvalid):
        SourceValidator().validate("return = 1\n", format=False)
