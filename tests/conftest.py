from __future__ import annotations

import copy
import json

import pytest

from core.knowledge import BUNDLED_PATH, KnowledgeStore
from core.models import MacroSummary, Meal, PlanData, UserProfile

with BUNDLED_PATH.open(encoding="utf-8") as _fh:
    BUNDLED_DATA = json.load(_fh)


def bundled_data() -> dict:
    """Fresh deep copy of the shipped datasets, safe to tamper with."""
    return copy.deepcopy(BUNDLED_DATA)


AI_PLAN = PlanData(
    macros=MacroSummary(calories=2100, protein=120, carbs=220, fats=70, bmi=23.1,
                        recommendation="AI plan"),
    meals=[
        Meal(id="ai_1", name="Foul Medames", type="breakfast", calories=450,
             protein=22, carbs=55, fats=12, ingredients=["Fava beans", "Olive oil"]),
    ],
)


class StubGenerator:
    """Stands in for services.gemini.generate_plan."""

    def __init__(self, plan: PlanData | None = AI_PLAN, error: Exception | None = None):
        self.plan = plan
        self.error = error
        self.calls: list[tuple[UserProfile, str]] = []

    async def __call__(self, profile: UserProfile, language: str) -> PlanData:
        self.calls.append((profile, language))
        if self.error is not None:
            raise self.error
        return self.plan


@pytest.fixture
def store() -> KnowledgeStore:
    return KnowledgeStore(bundled_data())


@pytest.fixture
def store_without_tiers() -> KnowledgeStore:
    data = bundled_data()
    del data["calorie_tiers"]
    return KnowledgeStore(data)


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()
