from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# numbers arrive straight from the form; coercion happens in core.energy
LooseNumber = int | float | str | None


class UserProfile(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = ""
    age: LooseNumber = None
    gender: str = ""              # "Male" | "Female"
    region: str = ""
    weight_kg: LooseNumber = None
    height_cm: LooseNumber = None
    activity_level: str = ""      # sedentary / light / moderate / active / athlete
    goal: str = ""                # weight_loss / muscle_gain / maintenance / keto
    diet_preference: str = ""
    pregnant: bool = False
    diseases: tuple[str, ...] = ()
