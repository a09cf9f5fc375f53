"""Tests for modeldoc.core.docs.assembler."""

import pytest

from modeldoc.core.diagnostics import DiagnosticKind, DiagnosticLog
from modeldoc.core.docs.assembler import ModelAssembler, current_time_millis
from modeldoc.core.docs.models import Settings

FIXED_TIME = 1_700_000_000_000


@pytest.fixture
def settings() -> Settings:
    return Settings(project_description="Demo", founded=1, record_time=False)


class TestAssemble:
    """Tests for whole-universe assembly."""

    def test_sorted_by_key(self, jvm_universe, settings) -> None:
        document_set = ModelAssembler(jvm_universe, settings).assemble()
        assert document_set.keys() == ["combat:weapon/sword", "light:lamp", "magic:enchantment"]

    def test_failed_model_is_dropped(self, jvm_universe, settings) -> None:
        """One bad model does not stop the others."""
        diagnostics = DiagnosticLog()
        document_set = ModelAssembler(jvm_universe, settings, diagnostics).assemble()
        assert "broken:twice" not in document_set.keys()
        (failure,) = [d for d in diagnostics if d.severity == "error"]
        assert failure.kind == DiagnosticKind.MULTIPLE_FACTORY_OPERATIONS
        assert failure.subject == "demo.Broken"

    def test_document_fields(self, jvm_universe, settings) -> None:
        document_set = ModelAssembler(jvm_universe, settings).assemble()
        enchantment = document_set.elements[2]
        assert enchantment.type == "magic:enchantment"
        assert enchantment.name == "Enchantment"
        assert enchantment.group == "Demo"
        assert enchantment.description == "Magic applied to a weapon."
        assert [p.name for p in enchantment.parameters] == ["strength"]
        assert document_set.settings == settings

    def test_idempotent_without_time(self, jvm_universe, settings) -> None:
        """Two runs over the same universe produce identical output."""
        first = ModelAssembler(jvm_universe, settings).assemble()
        second = ModelAssembler(jvm_universe, settings).assemble()
        assert first.to_json() == second.to_json()
        assert all(element.last_updated == 0 for element in first.elements)

    def test_capture_time_shared_by_all_models(self, jvm_universe) -> None:
        document_set = ModelAssembler(
            jvm_universe, Settings(record_time=True), capture_time=FIXED_TIME
        ).assemble()
        assert {element.last_updated for element in document_set.elements} == {FIXED_TIME}

    def test_current_time_when_not_fixed(self, jvm_universe) -> None:
        before = current_time_millis()
        document_set = ModelAssembler(jvm_universe, Settings()).assemble()
        after = current_time_millis()
        (stamp,) = {element.last_updated for element in document_set.elements}
        assert before <= stamp <= after

    def test_parallel_matches_sequential(self, jvm_universe, settings) -> None:
        sequential = ModelAssembler(jvm_universe, settings).assemble()
        parallel = ModelAssembler(jvm_universe, settings, max_workers=4).assemble()
        assert parallel == sequential

    def test_empty_universe(self, make_universe, settings) -> None:
        document_set = ModelAssembler(make_universe([]), settings).assemble()
        assert document_set.elements == ()
        assert document_set.settings == settings


class TestDocument:
    """Tests for documenting a single candidate."""

    def test_failure_returns_none(self, jvm_universe, settings) -> None:
        assembler = ModelAssembler(jvm_universe, settings)
        broken = assembler.collector.candidate(jvm_universe.declaration("demo.Broken"))
        assert assembler.document(broken) is None
        assert assembler.diagnostics.has_errors

    def test_success(self, jvm_universe, settings) -> None:
        assembler = ModelAssembler(jvm_universe, settings)
        lamp = assembler.collector.candidate(jvm_universe.declaration("demo.Lamp"))
        document = assembler.document(lamp, last_updated=5)
        assert document.type == "light:lamp"
        assert document.parameters == ()
        assert document.last_updated == 5
