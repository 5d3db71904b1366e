"""
Scenario Catalog: read-only repository of scripted scenarios.

Queried by: Playback Orchestrator (lookup on load) + Workspace seeding
Never written by the core. Callers receive entries they must not mutate;
the orchestrator deep-copies anything it takes ownership of.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from glass_kernel.models.catalog import ScenarioCatalogEntry

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "scenarios.json"


class ScenarioCatalog:
    """
    In-memory, ordered scenario catalog.
    Source files may be a JSON list of entries or {"scenarios": [...]}.
    """

    def __init__(self, entries: Iterable[ScenarioCatalogEntry] = ()):
        self._entries: Dict[str, ScenarioCatalogEntry] = {}
        for entry in entries:
            if entry.id in self._entries:
                raise ValueError(f"Duplicate scenario id in catalog: {entry.id}")
            self._entries[entry.id] = entry

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "ScenarioCatalog":
        """Build a catalog from raw dicts. Raises ValidationError on bad records."""
        return cls(ScenarioCatalogEntry.model_validate(r) for r in records)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "ScenarioCatalog":
        """Load a catalog from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("scenarios", [])
        catalog = cls.from_records(data)
        logger.info("Loaded %d scenarios from %s", len(catalog), path)
        return catalog

    @classmethod
    def load_default(cls) -> "ScenarioCatalog":
        """The demo catalog bundled with the package."""
        return cls.from_json_file(DEFAULT_CATALOG_PATH)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, scenario_id: str) -> bool:
        return scenario_id in self._entries

    def lookup(self, scenario_id: str) -> Optional[ScenarioCatalogEntry]:
        """Get a scenario by ID, or None if it is not in the catalog."""
        return self._entries.get(scenario_id)

    def ids(self) -> List[str]:
        """All scenario ids in catalog order."""
        return list(self._entries)

    def entries(self) -> List[ScenarioCatalogEntry]:
        return list(self._entries.values())
