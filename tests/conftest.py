from __future__ import annotations

import sys
import types
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple

import pytest

FIXTURES = Path(__file__).with_name("_fixtures")


class FakeBusObject:
    """Records calls and answers them from canned replies."""

    def __init__(self, replies: Dict[str, Sequence[Any]] | None = None) -> None:
        self.replies = dict(replies or {})
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def call(self, method: str, *args: Any) -> Sequence[Any]:
        self.calls.append((method, args))
        return list(self.replies.get(method, []))


@pytest.fixture
def example_xml() -> str:
    return (FIXTURES / "example.xml").read_text(encoding="utf-8")


@pytest.fixture
def other_xml() -> str:
    return (FIXTURES / "other.xml").read_text(encoding="utf-8")


@pytest.fixture
def fake_bus() -> Callable[..., FakeBusObject]:
    return FakeBusObject


@pytest.fixture
def load_bindings(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], types.ModuleType]:
    """Execute generated source as a throwaway module."""
    counter = {"value": 0}

    def _load(source: str) -> types.ModuleType:
        counter["value"] += 1
        name = f"_dbusgen_generated_{counter['value']}"
        module = types.ModuleType(name)
        # dataclasses resolves string annotations through sys.modules.
        monkeypatch.setitem(sys.modules, name, module)
        exec(compile(source, name, "exec"), module.__dict__)
        return module

    return _load
