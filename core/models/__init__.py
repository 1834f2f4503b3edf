"""Re-export the engine's value types for easy imports."""

from .plan import Exercise, Language, MacroSummary, Meal, PlanData
from .profile import UserProfile
from .records import (
    BalancedRecord,
    DirtyBulkRecord,
    GulfRecord,
    KetoRecord,
    MediterraneanRecord,
    RawPlanRecord,
    Strategy,
)

__all__ = [
    "Exercise",
    "Language",
    "MacroSummary",
    "Meal",
    "PlanData",
    "UserProfile",
    "BalancedRecord",
    "DirtyBulkRecord",
    "GulfRecord",
    "KetoRecord",
    "MediterraneanRecord",
    "RawPlanRecord",
    "Strategy",
]
