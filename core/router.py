"""
core/router.py
────────────────────────────────────────────────────────────────────────
Pick exactly one curated strategy for a request.

The rules overlap on purpose (a Saudi user who wants muscle *and* eats
standard food matches both rule 1 and rule 3), so the order below is a
business priority: first match wins, later rules are never looked at.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, NamedTuple

from core.models.records import Strategy

_LOG = logging.getLogger(__name__)

GULF_REGIONS = ("saudi", "uae", "kuwait", "qatar")
NORTH_AFRICAN_REGIONS = ("morocco", "algeria", "libya", "tunisia", "egypt")


class _Inputs(NamedTuple):
    goal: str
    region: str
    diet: str


class Rule(NamedTuple):
    name: str
    matches: Callable[[_Inputs], bool]
    strategy: Strategy


def _any_in(text: str, needles: Iterable[str]) -> bool:
    return any(n in text for n in needles)


RULES: tuple[Rule, ...] = (
    Rule(
        "muscle gain on a standard / dirty-bulk diet",
        lambda i: "muscle" in i.goal and i.diet in ("standard", "dirty bulk"),
        Strategy.dirty_bulking,
    ),
    Rule(
        "keto goal or diet",
        lambda i: "keto" in i.goal or "keto" in i.diet,
        Strategy.keto,
    ),
    Rule(
        "weight goal in a Gulf country",
        lambda i: "weight" in i.goal and _any_in(i.region, GULF_REGIONS),
        Strategy.gulf_low_carb,
    ),
    Rule(
        "fasting / ramadan diet",
        lambda i: _any_in(i.diet, ("fasting", "ramadan")),
        Strategy.gulf_intermittent_fasting,
    ),
    Rule(
        "maintenance / general health",
        lambda i: _any_in(i.goal, ("maintenance", "health")),
        Strategy.gulf_mediterranean,
    ),
    Rule(
        "North African region",
        lambda i: _any_in(i.region, NORTH_AFRICAN_REGIONS),
        Strategy.north_african_balanced,
    ),
)


def route(
    goal: str | None,
    region: str | None,
    diet_preference: str | None,
    diseases: Iterable[str] | None = None,  # reserved, not used for selection yet
) -> Strategy:
    inputs = _Inputs(
        goal=(goal or "").lower(),
        region=(region or "").lower(),
        diet=(diet_preference or "").lower(),
    )
    for rule in RULES:
        if rule.matches(inputs):
            _LOG.info("strategy %s selected (%s)", rule.strategy.value, rule.name)
            return rule.strategy

    _LOG.info("no curated strategy matched – calorie tier fallback")
    return Strategy.none
