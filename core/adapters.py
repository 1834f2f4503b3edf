"""
core/adapters.py
────────────────────────────────────────────────────────────────────────
Turn a strategy's raw curated record into the canonical `PlanData`.

Every dataset family nests its data differently, so each record variant
gets its own adapter:

  • DirtyBulkRecord  → meal macros summed from ingredients, day totals trusted
  • KetoRecord       → regional sub-plan, per-serving nutrition
  • GulfRecord       → region key, then a schedule key discovered at runtime
  • BalancedRecord   → one meal per slot key, day totals summed from meals

`MediterraneanRecord` deliberately has no adapter yet and always falls
through to the calorie-tier plan.

Adapters return `None` when the record has nothing usable.  `normalize()`
is the only caller: it also turns structural surprises (missing keys,
wrong types) and empty meal lists into `None`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from core.models.plan import MacroSummary, Meal, PlanData
from core.models.records import (
    BalancedRecord,
    DirtyBulkRecord,
    GulfRecord,
    KetoRecord,
    RawPlanRecord,
)
from core.text import resolve_text

_LOG = logging.getLogger(__name__)

Adapter = Callable[[Any, str, int, str], "PlanData | None"]

DEFAULT_KETO_REGION = "moroccan_keto"
DEFAULT_GULF_REGION = "saudi_arabia"
BALANCED_DAY_KEY = "day_1_moroccan_focus"

# a gulf meal never goes out with zero macros
GULF_MEAL_FALLBACK = {"calories": 500, "protein_g": 30, "carbs_g": 40, "fat_g": 15}

KETO_DAY_DEFAULTS = {"calories": 1500, "protein_g": 100, "net_carbs_g": 20, "fat_g": 100}

_RECOMMENDATIONS = {
    "dirty_bulk": {
        "en": "High Calorie Muscle Gain Protocol (Dirty Bulk)",
        "ar": "بروتوكول زيادة العضلات عالي السعرات (التضخيم)",
    },
    "balanced": {
        "en": "Balanced North African Protocol",
        "ar": "بروتوكول شمال أفريقيا المتوازن",
    },
}


# ──────────────────────────────── Helpers ────────────────────────────────

def _sum(items: Iterable[Mapping[str, Any]], key: str) -> float:
    return sum(i.get(key) or 0 for i in items)


def _humanize(key: str) -> str:
    """`saudi_arabia_low_carb` -> `saudi arabia low carb` (all underscores)."""
    return key.replace("_", " ")


def _day_one(node: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    return (node or {}).get("day_1")


# ──────────────────────────────── Adapters ───────────────────────────────

def adapt_dirty_bulk(
    record: DirtyBulkRecord, region: str, tdee: int, language: str
) -> PlanData | None:
    plans = record.payload.get("weekly_meal_plans") or {}
    day = _day_one(plans.get("middle_eastern_powerhouse"))
    if not day:
        return None

    meals = []
    for idx, m in enumerate(day["meals"]):
        ingredients = m["ingredients"]
        meals.append(
            Meal(
                id=f"db_{idx}",
                name=resolve_text(m.get("meal_name"), language),
                type=m.get("meal_type") or m.get("meal_time") or "meal",
                calories=_sum(ingredients, "calories"),
                protein=_sum(ingredients, "protein_g"),
                carbs=_sum(ingredients, "carbs_g"),
                fats=_sum(ingredients, "fat_g"),
                ingredients=[
                    f"{resolve_text(i.get('item'), language)} ({i.get('amount')})"
                    for i in ingredients
                ],
            )
        )

    # the curated day totals win over what the meals add up to
    totals = day["daily_totals"]
    macros = MacroSummary(
        calories=totals["calories"],
        protein=totals["protein_g"],
        carbs=totals["carbs_g"],
        fats=totals["fat_g"],
        bmi=0,
        recommendation=resolve_text(_RECOMMENDATIONS["dirty_bulk"], language),
    )
    return PlanData(macros=macros, meals=meals)


def adapt_keto(
    record: KetoRecord, region: str, tdee: int, language: str
) -> PlanData | None:
    plans = record.payload["weekly_meal_plans"]
    region = region.lower()
    region_key = next(
        (k for k in plans if k.split("_")[0] in region), DEFAULT_KETO_REGION
    )
    day = _day_one(plans.get(region_key)) or _day_one(plans[DEFAULT_KETO_REGION])
    if not day:
        return None

    meals = []
    for idx, m in enumerate(day["meals"]):
        nutrition = m.get("nutrition_per_serving") or {}
        meals.append(
            Meal(
                id=f"keto_{idx}",
                name=resolve_text(m.get("meal_name"), language),
                type=m.get("meal_time") or "meal",
                calories=nutrition.get("calories") or 0,
                protein=nutrition.get("protein_g") or 0,
                carbs=nutrition.get("net_carbs_g") or 0,
                fats=nutrition.get("fat_g") or 0,
                ingredients=[
                    resolve_text(i.get("item"), language)
                    for i in m.get("ingredients") or []
                ],
            )
        )

    totals = day.get("daily_totals") or {}
    label = _humanize(region_key)
    macros = MacroSummary(
        calories=totals.get("calories") or KETO_DAY_DEFAULTS["calories"],
        protein=totals.get("protein_g") or KETO_DAY_DEFAULTS["protein_g"],
        carbs=totals.get("net_carbs_g") or KETO_DAY_DEFAULTS["net_carbs_g"],
        fats=totals.get("fat_g") or KETO_DAY_DEFAULTS["fat_g"],
        bmi=0,
        recommendation=resolve_text(
            {"en": f"Keto Protocol ({label})", "ar": f"بروتوكول الكيتو ({label})"},
            language,
        ),
    )
    return PlanData(macros=macros, meals=meals)


def adapt_gulf(
    record: GulfRecord, region: str, tdee: int, language: str
) -> PlanData | None:
    """
    Shared by the Gulf low-carb and intermittent-fasting datasets:
    ``<root>.<region>.<schedule>.day_1``.  The schedule key ("16_8_schedule",
    "18_6_schedule" …) differs per region, so the first key present is used.
    """
    root = record.payload.get("meal_plans") or record.payload["weekly_meal_plans"]
    slug = region.lower().replace(" ", "_", 1)
    target_region = next((k for k in root if slug in k), DEFAULT_GULF_REGION)

    region_plans = root.get(target_region) or {}
    schedule_key = next(iter(region_plans), None)
    day = _day_one(region_plans.get(schedule_key)) if schedule_key else None
    if not day:
        return None

    meals = []
    for idx, m in enumerate(day["meals"]):
        ingredients = m.get("ingredients") or []
        meals.append(
            Meal(
                id=f"gulf_{idx}",
                name=resolve_text(m.get("meal_name"), language),
                type=m.get("meal_time") or "meal",
                calories=_sum(ingredients, "calories") or GULF_MEAL_FALLBACK["calories"],
                protein=_sum(ingredients, "protein_g") or GULF_MEAL_FALLBACK["protein_g"],
                carbs=_sum(ingredients, "carbs_g") or GULF_MEAL_FALLBACK["carbs_g"],
                fats=_sum(ingredients, "fat_g") or GULF_MEAL_FALLBACK["fat_g"],
                ingredients=[resolve_text(i.get("item"), language) for i in ingredients],
            )
        )

    totals = day.get("total_nutrition") or day.get("daily_totals") or {}
    label = _humanize(target_region)
    macros = MacroSummary(
        calories=totals.get("calories") or tdee,
        protein=totals.get("protein_g") or 100,
        carbs=totals.get("carbs_g") or 100,
        fats=totals.get("fat_g") or 60,
        bmi=0,
        recommendation=resolve_text(
            {
                "en": f"{record.label} Protocol ({label})",
                "ar": f"بروتوكول {record.label} ({label})",
            },
            language,
        ),
    )
    return PlanData(macros=macros, meals=meals)


def adapt_balanced(
    record: BalancedRecord, region: str, tdee: int, language: str
) -> PlanData | None:
    """One meal per slot of the Moroccan-focus day; totals are summed.

    Ingredient strings name the ingredient as well as its quantity
    (`lentils (50g)`), not the bare quantity (`50g`), so the list reads on
    its own.
    """
    day = (record.payload.get("weekly_meal_rotation") or {}).get(BALANCED_DAY_KEY)
    if not day:
        return None

    meals = []
    # one meal per slot, in the order the dataset lists them
    for idx, (slot, m) in enumerate(day.items()):
        nutrition = m["nutrition_per_serving"]
        meals.append(
            Meal(
                id=f"na_{idx}",
                name=resolve_text(m.get("name"), language),
                type=_humanize(slot),
                calories=nutrition["calories"],
                protein=nutrition["protein_g"],
                carbs=nutrition["carbs_g"],
                fats=nutrition["fat_g"],
                ingredients=[
                    f"{name} ({qty['amount']}{qty.get('unit', '')})"
                    for name, qty in (m.get("ingredients") or {}).items()
                ],
            )
        )

    macros = MacroSummary(
        calories=sum(m.calories for m in meals),
        protein=sum(m.protein for m in meals),
        carbs=sum(m.carbs for m in meals),
        fats=sum(m.fats for m in meals),
        bmi=0,
        recommendation=resolve_text(_RECOMMENDATIONS["balanced"], language),
    )
    return PlanData(macros=macros, meals=meals)


ADAPTERS: dict[type, Adapter] = {
    DirtyBulkRecord: adapt_dirty_bulk,
    KetoRecord: adapt_keto,
    GulfRecord: adapt_gulf,
    BalancedRecord: adapt_balanced,
}


# ──────────────────────────────── Dispatch ───────────────────────────────

def normalize(
    record: RawPlanRecord, region: str, tdee: int, language: str = "en"
) -> PlanData | None:
    """Run the record's adapter; any failure or an empty plan gives `None`."""
    kind = type(record).__name__
    adapter = ADAPTERS.get(type(record))
    if adapter is None:
        _LOG.warning("no adapter for %s – falling through", kind)
        return None

    try:
        plan = adapter(record, region or "", tdee, language)
    except (KeyError, TypeError, AttributeError, IndexError, ValueError):
        _LOG.exception("adapter for %s failed", kind)
        return None

    if plan is None or not plan.meals:
        _LOG.warning("adapter for %s produced no meals", kind)
        return None
    return plan
