"""Tests for dbusgen.signature."""

from __future__ import annotations

import pytest

from dbusgen.errors import MalformedSignature
from dbusgen.signature import (
    Array,
    Basic,
    DictEntry,
    Struct,
    Variant,
    encode,
    parse,
    parse_single,
)


def test_parse_sibling_basics() -> None:
    assert parse("ii") == [Basic("i"), Basic("i")]


def test_parse_dict_array() -> None:
    assert parse("a{sv}") == [Array(DictEntry(Basic("s"), Variant()))]


def test_parse_struct_array() -> None:
    nodes = parse("a(sv)")
    assert nodes == [Array(Struct((Basic("s"), Variant())))]
    assert len(nodes[0].element.fields) == 2


def test_parse_nested_containers() -> None:
    (node,) = parse("a{sa(ias)}")
    assert isinstance(node, Array)
    assert node.element.key == Basic("s")
    inner = node.element.value
    assert inner == Array(Struct((Basic("i"), Array(Basic("s")))))


def test_parse_empty_signature_yields_nothing() -> None:
    assert parse("") == []


@pytest.mark.parametrize(
    "signature",
    [
        "y",
        "bnqiuxtd",
        "sogh",
        "v",
        "ay",
        "aay",
        "a{sv}",
        "a{oa{sa{sv}}}",
        "(i(ss)av)",
        "a(oa{sv})sa{ua(yy)}",
        "ia{is}(xt)",
    ],
)
def test_reencoding_reproduces_signature(signature: str) -> None:
    assert encode(parse(signature)) == signature
    assert "".join(str(node) for node in parse(signature)) == signature


@pytest.mark.parametrize(
    "signature, reason",
    [
        ("a{s", "never closed"),
        ("a", "no element type"),
        ("(ii", "never closed"),
        ("ii)", "unexpected ')'"),
        ("{sv}", "outside an array"),
        ("(a{sv}{sv})", "outside an array"),
        ("a{vs}", "key must be a basic type"),
        ("a{(i)s}", "key must be a basic type"),
        ("a{sss}", "more than a key and a value"),
        ("a{s}", "needs a key and a value"),
        ("()", "no fields"),
        ("iz", "unknown type code"),
        ("a}", "unexpected '}'"),
    ],
)
def test_parse_rejects_malformed(signature: str, reason: str) -> None:
    with pytest.raises(MalformedSignature) as excinfo:
        parse(signature)
    assert reason in excinfo.value.reason
    assert excinfo.value.signature == signature


def test_malformed_signature_reports_position() -> None:
    with pytest.raises(MalformedSignature) as excinfo:
        parse("ssz")
    assert excinfo.value.position == 2


def test_parse_handles_deep_nesting_without_recursion() -> None:
    depth = 5000
    (node,) = parse("a" * depth + "i")
    levels = 0
    while isinstance(node, Array):
        node = node.element
        levels += 1
    assert levels == depth
    assert node == Basic("i")


@pytest.mark.parametrize(
    "signature",
    [
        "a" * 5000 + "i",
        "(" * 3000 + "s" + ")" * 3000,
        "a{s" * 2000 + "v" + "}" * 2000,
    ],
)
def test_deeply_nested_signatures_reencode(signature: str) -> None:
    (node,) = parse(signature)
    assert encode(node) == signature
    assert str(node) == signature


def test_deep_nodes_compare_and_hash_by_signature() -> None:
    signature = "a" * 3000 + "(iv)"
    first, second = parse_single(signature), parse_single(signature)
    assert first == second
    assert hash(first) == hash(second)
    assert first != parse_single("a" * 3000 + "(ii)")
    assert len({first, second}) == 1


def test_nodes_of_different_kinds_are_unequal() -> None:
    assert Basic("s") != Variant()
    assert Array(Basic("y")) != Basic("y")
    assert repr(Array(Basic("y"))) == "Array<ay>"


def test_parse_single_requires_one_type() -> None:
    assert parse_single("a{sv}") == Array(DictEntry(Basic("s"), Variant()))
    with pytest.raises(MalformedSignature):
        parse_single("ii")
    with pytest.raises(MalformedSignature):
        parse_single("")


def test_basic_rejects_compound_code() -> None:
    with pytest.raises(ValueError):
        Basic("a")
    assert Basic("o").kind == "object_path"
