"""Tests for modeldoc.core.docs.collector."""

from typing import Any

import pytest

from modeldoc.core.diagnostics import DiagnosticKind, DiagnosticLog
from modeldoc.core.docs.collector import ModelCollector
from modeldoc.core.exceptions import ValidationError


def _model(name: str, key: str, *tags: dict[str, Any], **fields: Any) -> dict[str, Any]:
    return {
        "name": name,
        "scope": "demo",
        "tags": [{"name": "model", "values": {"value": key}}, *tags],
        **fields,
    }


def _tag(name: str, value: str) -> dict[str, Any]:
    return {"name": name, "values": {"value": value}}


@pytest.fixture
def diagnostics() -> DiagnosticLog:
    return DiagnosticLog()


@pytest.fixture
def collect(make_universe, diagnostics):
    def _collect(*declarations: dict[str, Any], scopes=None, key_pattern=None):
        universe = make_universe(list(declarations), scopes=scopes)
        kwargs = {"key_pattern": key_pattern} if key_pattern else {}
        return ModelCollector(universe, diagnostics, **kwargs).collect()

    return _collect


class TestCollect:
    """Tests for enumerating models."""

    def test_demo_models_in_universe_order(self, jvm_universe) -> None:
        candidates = ModelCollector(jvm_universe).collect()
        assert [c.key for c in candidates] == [
            "combat:weapon/sword",
            "magic:enchantment",
            "broken:twice",
            "light:lamp",
        ]

    def test_declarations_without_model_tag_are_ignored(self, collect, diagnostics) -> None:
        assert collect({"name": "demo.Helper", "scope": "demo"}) == []
        assert len(diagnostics) == 0

    def test_records_can_be_models(self, collect) -> None:
        (candidate,) = collect(
            _model("demo.Point", "demo:point", _tag("description", "A point."), kind="record")
        )
        assert candidate.declaration.name == "demo.Point"

    @pytest.mark.parametrize("kind", ["interface", "enum"])
    def test_invalid_kind(self, collect, diagnostics, kind) -> None:
        assert collect(_model("demo.Shape", "demo:shape", kind=kind)) == []
        assert diagnostics.kinds() == [DiagnosticKind.INVALID_DECLARATION_KIND]

    @pytest.mark.parametrize("key", ["Demo:Upper", "demo:has space", "demo::double", ""])
    def test_invalid_key(self, collect, diagnostics, key) -> None:
        assert collect(_model("demo.Bad", key)) == []
        assert diagnostics.kinds() == [DiagnosticKind.INVALID_KEY_FORMAT]

    def test_key_without_namespace(self, collect) -> None:
        (candidate,) = collect(_model("demo.Plain", "plain", _tag("description", "Plain.")))
        assert candidate.key == "plain"

    def test_custom_key_pattern(self, collect, diagnostics) -> None:
        candidates = collect(
            _model("demo.A", "a1", _tag("description", "A.")),
            _model("demo.B", "b", _tag("description", "B.")),
            key_pattern=r"[a-z]+\d",
        )
        assert [c.key for c in candidates] == ["a1"]
        assert [d.kind for d in diagnostics.for_subject("demo.B")] == [
            DiagnosticKind.INVALID_KEY_FORMAT
        ]
        assert DiagnosticKind.INVALID_KEY_FORMAT not in [
            d.kind for d in diagnostics.for_subject("demo.A")
        ]

    def test_invalid_key_pattern(self, jvm_universe) -> None:
        with pytest.raises(ValidationError):
            ModelCollector(jvm_universe, key_pattern="[unclosed")


class TestFacets:
    """Tests for names, descriptions and groups."""

    def test_name_defaults_to_simple_name(self, collect) -> None:
        (candidate,) = collect(_model("demo.Outer.Inner", "demo:inner", _tag("description", "I.")))
        assert candidate.name == "Inner"

    def test_display_name(self, collect) -> None:
        (candidate,) = collect(
            _model("demo.Sword", "demo:sword", _tag("name", "Long Sword"), _tag("description", "S."))
        )
        assert candidate.name == "Long Sword"

    def test_missing_description(self, collect, diagnostics) -> None:
        (candidate,) = collect(_model("demo.Quiet", "demo:quiet"))
        assert candidate.description == ""
        (diagnostic,) = [d for d in diagnostics if d.kind == DiagnosticKind.MISSING_REQUIRED_ANNOTATION]
        assert diagnostic.severity == "warning"
        assert diagnostic.subject == "demo.Quiet"

    def test_group_from_declaration_wins(self, collect) -> None:
        (candidate,) = collect(
            _model("demo.Sword", "demo:sword", _tag("group", "Combat"), _tag("description", "S.")),
            scopes=[{"name": "demo", "tags": [_tag("group", "Demo")]}],
        )
        assert candidate.group == "Combat"

    def test_group_from_scope(self, collect, diagnostics) -> None:
        (candidate,) = collect(
            _model("demo.Sword", "demo:sword", _tag("description", "S.")),
            scopes=[{"name": "demo", "tags": [_tag("group", "Demo")]}],
        )
        assert candidate.group == "Demo"
        assert len(diagnostics) == 0

    def test_missing_group(self, collect, diagnostics) -> None:
        (candidate,) = collect(_model("demo.Sword", "demo:sword", _tag("description", "S.")))
        assert candidate.group == ""
        assert diagnostics.kinds() == [DiagnosticKind.MISSING_GROUP]
