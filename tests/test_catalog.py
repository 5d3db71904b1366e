"""Tests for the Scenario Catalog."""

import json

import pytest
from pydantic import ValidationError

from glass_kernel.catalog.store import ScenarioCatalog
from glass_kernel.models.catalog import Persona, ScenarioCatalogEntry


def _entry(scenario_id: str, **kwargs) -> ScenarioCatalogEntry:
    return ScenarioCatalogEntry(
        id=scenario_id, title=scenario_id.title(), initial_message="Hi", **kwargs
    )


class TestScenarioCatalog:
    def test_lookup(self):
        catalog = ScenarioCatalog([_entry("a"), _entry("b")])
        assert catalog.lookup("a").id == "a"
        assert catalog.lookup("missing") is None
        assert "b" in catalog
        assert len(catalog) == 2

    def test_ids_keep_catalog_order(self):
        catalog = ScenarioCatalog([_entry("z"), _entry("a"), _entry("m")])
        assert catalog.ids() == ["z", "a", "m"]

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            ScenarioCatalog([_entry("a"), _entry("a")])

    def test_from_records_validates(self):
        with pytest.raises(ValidationError):
            ScenarioCatalog.from_records([{"id": "a", "title": "A"}])

    def test_from_json_file_list(self, tmp_path):
        path = tmp_path / "scenarios.json"
        path.write_text(json.dumps([
            {"id": "case-1", "title": "One", "initialMessage": "Hello"},
        ]))
        catalog = ScenarioCatalog.from_json_file(path)
        assert catalog.lookup("case-1").initial_message == "Hello"

    def test_from_json_file_wrapped(self, tmp_path):
        path = tmp_path / "scenarios.json"
        path.write_text(json.dumps({"scenarios": [
            {"id": "case-1", "title": "One", "initialMessage": "Hello"},
            {"id": "case-2", "title": "Two", "initialMessage": "Hey"},
        ]}))
        assert ScenarioCatalog.from_json_file(path).ids() == ["case-1", "case-2"]

    def test_load_default(self):
        catalog = ScenarioCatalog.load_default()
        assert len(catalog) >= 1
        entry = catalog.lookup("case-1")
        assert entry.resolved_persona() == Persona.DEVELOPER
        assert entry.plan.steps[0].label == "Add characterization tests"
        assert entry.scripted_response.thoughts
