"""
core/planner.py
────────────────────────────────────────────────────────────────────────
One call from profile to plan:

    energy target → strategy → raw record → adapter → (fallback) → exercises

All public I/O happens through `PlanAssembler.build(...)`.  The only error
that can escape is `services.gemini.GenerationError` from the AI stage;
everything curated either yields a plan or falls through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.adapters import normalize
from core.energy import EnergyCalculator
from core.fallback import FallbackResolver
from core.knowledge import KnowledgeStore
from core.models.plan import PlanData
from core.models.profile import UserProfile
from core.models.records import Strategy
from core.router import route

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanPreview:
    energy_target: int
    strategy: Strategy


class PlanAssembler:
    def __init__(
        self,
        store: KnowledgeStore | None = None,
        calc: EnergyCalculator | None = None,
        resolver: FallbackResolver | None = None,
    ) -> None:
        self._store = store or KnowledgeStore.default()
        self._calc = calc or EnergyCalculator()
        self._resolver = resolver or FallbackResolver(self._store, self._calc)

    def preview(self, profile: UserProfile) -> PlanPreview:
        """Energy target and strategy only – no record is normalised."""
        tdee = self._calc.tdee(profile)
        strategy = route(
            profile.goal, profile.region, profile.diet_preference, profile.diseases
        )
        return PlanPreview(energy_target=tdee, strategy=strategy)

    async def build(self, profile: UserProfile, language: str = "en") -> PlanData:
        pv = self.preview(profile)
        _LOG.info("building plan: strategy=%s target=%d kcal", pv.strategy.value, pv.energy_target)

        plan = self._curated(pv, profile, language)
        if plan is None:
            plan = await self._resolver.resolve(profile, pv.energy_target, language)

        # exercises are the same static set for everybody
        return plan.model_copy(update={"exercises": self._store.default_exercises()})

    def _curated(
        self, pv: PlanPreview, profile: UserProfile, language: str
    ) -> PlanData | None:
        if pv.strategy is Strategy.none:
            return None
        record = self._store.lookup(pv.strategy)
        if record is None:
            return None
        return normalize(record, profile.region, pv.energy_target, language)
