from __future__ import annotations

from pydantic import BaseModel

from core.models import Language, Strategy, UserProfile


class PlanRequest(BaseModel):
    profile: UserProfile
    language: Language = "en"


class PreviewResponse(BaseModel):
    energy_target: int
    strategy: Strategy
