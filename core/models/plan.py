from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Language = Literal["en", "ar"]


class Meal(BaseModel):
    id: str
    name: str
    type: str                      # breakfast / lunch / main meal …
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    ingredients: list[str] = []


class MacroSummary(BaseModel):
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fats: float = Field(ge=0)
    bmi: float = 0
    recommendation: str = ""


class Exercise(BaseModel):
    id: str
    name: str
    sets: str
    reps: str
    notes: str | None = None


class PlanData(BaseModel):
    macros: MacroSummary
    meals: list[Meal]
    exercises: list[Exercise] = []
