"""
core/energy.py
────────────────────────────────────────────────────────────────────────
Daily energy target for a profile:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity multiplier, rounded)
3. flat goal adjustment (±500 kcal, no clamp)

Numbers come in loosely typed from the form.  Anything missing or
unparseable silently becomes 70 kg / 170 cm / 30 y – that is a default,
not a validation error.
"""

from __future__ import annotations

import logging
import math

from core.models.profile import UserProfile

_LOG = logging.getLogger(__name__)

DEFAULT_WEIGHT_KG = 70.0
DEFAULT_HEIGHT_CM = 170.0
DEFAULT_AGE = 30.0

ACTIVITY_FACTORS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "athlete": 1.9,
}
DEFAULT_ACTIVITY_FACTOR = ACTIVITY_FACTORS["moderate"]

GOAL_ADJUSTMENT = {
    "weight_loss": -500,
    "muscle_gain": 500,
}


def as_number(value: object, default: float) -> float:
    """Coerce `value` to float; 0, NaN, infinities and junk fall back to `default`."""
    try:
        num = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if not math.isfinite(num) or num == 0:
        return default
    return num


def normalize_goal(goal: str | None) -> str:
    return (goal or "").strip().lower().replace(" ", "_")


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class EnergyCalculator:
    """Source-of-truth for the kcal/day target used by routing and fallback."""

    # --------------- anthropometrics --------------------------------
    def weight_kg(self, p: UserProfile) -> float:
        return as_number(p.weight_kg, DEFAULT_WEIGHT_KG)

    def height_cm(self, p: UserProfile) -> float:
        return as_number(p.height_cm, DEFAULT_HEIGHT_CM)

    def age(self, p: UserProfile) -> float:
        return as_number(p.age, DEFAULT_AGE)

    # --------------- BMR / TDEE -------------------------------------
    def bmr(self, p: UserProfile) -> float:
        base = 10 * self.weight_kg(p) + 6.25 * self.height_cm(p) - 5 * self.age(p)
        return base + (5 if (p.gender or "").strip().lower() == "male" else -161)

    def activity_factor(self, p: UserProfile) -> float:
        level = (p.activity_level or "").strip().lower()
        return ACTIVITY_FACTORS.get(level, DEFAULT_ACTIVITY_FACTOR)

    def tdee(self, p: UserProfile) -> int:
        """Goal-adjusted daily energy target in kcal."""
        # round-half-up, not banker's rounding
        maintenance = math.floor(self.bmr(p) * self.activity_factor(p) + 0.5)
        adjust = GOAL_ADJUSTMENT.get(normalize_goal(p.goal), 0)
        target = maintenance + adjust
        _LOG.debug("energy target: maintenance=%d adjust=%+d → %d", maintenance, adjust, target)
        return target

    # --------------- BMI --------------------------------------------
    def bmi(self, p: UserProfile) -> float:
        height_m = self.height_cm(p) / 100
        return round(self.weight_kg(p) / (height_m * height_m), 1)
