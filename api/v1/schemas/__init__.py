"""Re-export individual schema modules for easy imports."""

from core.models import PlanData

from .plan import PlanRequest, PreviewResponse

__all__ = [
    "PlanData",
    "PlanRequest",
    "PreviewResponse",
]
