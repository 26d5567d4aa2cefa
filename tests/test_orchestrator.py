"""Tests for dbusgen.orchestrator."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

from dbusgen.config import GeneratorConfig
from dbusgen.errors import EmptyInput, IntrospectionError, InvalidConfiguration
from dbusgen.orchestrator import Orchestrator


class RecordingValidator:
    """Test double that records the text handed to validation."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, bool]] = []

    def validate(self, text: str, *, format: bool = True) -> str:
        self.calls.append((text, format))
        return text


def _class_names(source: str) -> list[str]:
    return [node.name for node in ast.parse(source).body if isinstance(node, ast.ClassDef)]


def test_load_interfaces_merges_sources_first_seen_wins(example_xml: str, other_xml: str) -> None:
    interfaces = Orchestrator().load_interfaces([("example.xml", example_xml), ("other.xml", other_xml)])

    assert [iface.name for iface in interfaces] == ["org.example.Foo", "org.example.Bar", "org.example.Baz"]
    foo = interfaces[0]
    assert "Replacement" not in {method.name for method in foo.methods}


def test_run_generate_covers_every_source(tmp_path: Path, example_xml: str, other_xml: str) -> None:
    source = Orchestrator().run_generate(
        [("example.xml", example_xml), ("other.xml", other_xml)], GeneratorConfig(root=tmp_path)
    )
    assert {"Org_Example_Foo", "Org_Example_Bar", "Org_Example_Baz"} <= set(_class_names(source))


def test_run_generate_applies_except_filter(tmp_path: Path, example_xml: str) -> None:
    config = GeneratorConfig(root=tmp_path, exclude=["org.example.Foo"])
    source = Orchestrator().run_generate([("example.xml", example_xml)], config)
    names = _class_names(source)
    assert "Org_Example_Bar" in names
    assert "Org_Example_Foo" not in names


def test_run_generate_passes_format_flag_to_validator(tmp_path: Path, example_xml: str) -> None:
    validator = RecordingValidator()
    config = GeneratorConfig(root=tmp_path, format=False)

    Orchestrator(validator=validator).run_generate([("example.xml", example_xml)], config)

    assert len(validator.calls) == 1
    assert validator.calls[0][1] is False


def test_run_generate_checks_options_before_parsing(tmp_path: Path) -> None:
    broken = [("broken.xml", "<node><interface")]

    with pytest.raises(InvalidConfiguration):
        Orchestrator().run_generate(broken, GeneratorConfig(root=tmp_path, package_name="not valid"))
    with pytest.raises(InvalidConfiguration):
        Orchestrator().run_generate(broken, GeneratorConfig(root=tmp_path, only=["a.B"], exclude=["c.D"]))
    with pytest.raises(IntrospectionError):
        Orchestrator().run_generate(broken, GeneratorConfig(root=tmp_path))


def test_run_generate_reports_when_filters_remove_everything(tmp_path: Path, example_xml: str) -> None:
    config = GeneratorConfig(root=tmp_path, only=["org.example.Missing"])
    with pytest.raises(EmptyInput):
        Orchestrator().run_generate([("example.xml", example_xml)], config)


def test_run_combine_returns_single_document(example_xml: str, other_xml: str) -> None:
    combined = Orchestrator().run_combine([("a", example_xml), ("b", other_xml)])
    assert combined.startswith("<node>")
    assert combined.count('<interface name="org.example.Foo">') == 1
    assert combined.endswith("\n")
