"""
core/knowledge.py
────────────────────────────────────────────────────────────────────────
Read-only accessor over the curated dataset collection.

The store is handed its data (a mapping, usually loaded from JSON) so
tests can substitute their own; nothing here mutates it.  Each strategy
maps to one dataset key, and the raw mapping is wrapped in the record
variant its adapter expects.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from config import settings
from core.models.plan import Exercise
from core.models.records import (
    BalancedRecord,
    DirtyBulkRecord,
    GulfRecord,
    KetoRecord,
    MediterraneanRecord,
    RawPlanRecord,
    Strategy,
)

_LOG = logging.getLogger(__name__)

BUNDLED_PATH = Path(__file__).parent / "data" / "knowledge_base.json"

CALORIE_TIERS = (1500, 2000, 3000)

# strategy → (dataset key, record factory)
_DATASETS = {
    Strategy.dirty_bulking: ("arabian_dirty_bulking_api", DirtyBulkRecord),
    Strategy.keto: ("north_african_iraqi_keto_api", KetoRecord),
    Strategy.gulf_low_carb: (
        "arabian_gulf_low_carb_api",
        lambda data: GulfRecord(data, label="Gulf Low Carb"),
    ),
    Strategy.gulf_intermittent_fasting: (
        "arabian_gulf_intermittent_fasting_api",
        lambda data: GulfRecord(data, label="Gulf IF"),
    ),
    Strategy.gulf_mediterranean: ("gulf_mediterranean_diet_api", MediterraneanRecord),
    Strategy.north_african_balanced: ("north_african_balanced_IF_meal_plan", BalancedRecord),
}


class KnowledgeStore:
    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = MappingProxyType(dict(data))

    # ───────────────────────────── loaders ───────────────────────── #
    @classmethod
    def from_json(cls, path: str | Path) -> "KnowledgeStore":
        path = Path(path)
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: knowledge base must be a JSON object")
        _LOG.debug("knowledge base loaded from %s (%d datasets)", path, len(data))
        return cls(data)

    @classmethod
    def default(cls) -> "KnowledgeStore":
        """Process-wide store: `KNOWLEDGE_BASE_PATH` if set, else the bundled file."""
        return _default_store(settings.knowledge_base_path or str(BUNDLED_PATH))

    # ───────────────────────────── lookups ───────────────────────── #
    def lookup(self, strategy: Strategy) -> RawPlanRecord | None:
        entry = _DATASETS.get(strategy)
        if entry is None:
            return None
        key, factory = entry
        raw = self._data.get(key)
        if raw is None:
            _LOG.warning("dataset %r for strategy %s is missing", key, strategy.value)
            return None
        return factory(raw)

    def lookup_tier(self, tier: int) -> Mapping[str, Any] | None:
        """Pre-authored {meals, macros} plan for a calorie band."""
        return (self._data.get("calorie_tiers") or {}).get(f"c{tier}")

    def default_exercises(self) -> list[Exercise]:
        raw = (self._data.get("exercises") or {}).get("standard", [])
        return [Exercise.model_validate(e) for e in raw]


@lru_cache(maxsize=4)
def _default_store(path: str) -> KnowledgeStore:
    return KnowledgeStore.from_json(path)
