"""
core/fallback.py
────────────────────────────────────────────────────────────────────────
What happens when no curated strategy produced a plan.

Stage A  – pick one of three pre-authored calorie-tier plans by energy
           target and stamp the user's BMI on it.
Stage B  – only if the tier is unavailable or malformed: ask the AI
           collaborator for a whole plan.  Its errors propagate.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from pydantic import ValidationError

from core.energy import EnergyCalculator
from core.knowledge import KnowledgeStore
from core.models.plan import MacroSummary, Meal, PlanData
from core.models.profile import UserProfile
from services.gemini import generate_plan

_LOG = logging.getLogger(__name__)

PlanGenerator = Callable[[UserProfile, str], Awaitable[PlanData]]

TIER_STRATEGY_NAME = "Calorie Matched"


def tier_for(tdee: int) -> int:
    """Calorie band for an energy target (strictly greater-than thresholds)."""
    if tdee > 2800:
        return 3000
    if tdee > 1800:
        return 2000
    return 1500


def default_recommendation(strategy_name: str, language: str) -> str:
    if language == "ar":
        return f"بروتوكول {strategy_name}: محسن لملفك الشخصي."
    return f"{strategy_name} Protocol: Optimized for your profile."


class FallbackResolver:
    def __init__(
        self,
        store: KnowledgeStore,
        calc: EnergyCalculator | None = None,
        generator: PlanGenerator | None = None,
    ) -> None:
        self._store = store
        self._calc = calc or EnergyCalculator()
        self._generate = generator or generate_plan

    # ─────────────────────────── Stage A ─────────────────────────── #
    def calorie_tier_plan(
        self, profile: UserProfile, tdee: int, language: str = "en"
    ) -> PlanData | None:
        tier = tier_for(tdee)
        static = self._store.lookup_tier(tier)
        if not static:
            _LOG.warning("calorie tier %d unavailable", tier)
            return None

        macros = dict(static.get("macros") or {})
        macros["bmi"] = self._calc.bmi(profile)
        if not macros.get("recommendation"):
            macros["recommendation"] = default_recommendation(TIER_STRATEGY_NAME, language)

        try:
            meals = [Meal.model_validate(m) for m in static.get("meals") or []]
            summary = MacroSummary.model_validate(macros)
        except ValidationError:
            _LOG.exception("calorie tier %d is malformed", tier)
            return None
        if not meals:
            _LOG.warning("calorie tier %d has no meals", tier)
            return None

        _LOG.info("calorie tier %d plan for target %d kcal", tier, tdee)
        return PlanData(macros=summary, meals=meals)

    # ─────────────────────────── A then B ─────────────────────────── #
    async def resolve(
        self, profile: UserProfile, tdee: int, language: str = "en"
    ) -> PlanData:
        plan = self.calorie_tier_plan(profile, tdee, language)
        if plan is not None:
            return plan

        _LOG.warning("falling back to AI generation")
        return await self._generate(profile, language)
