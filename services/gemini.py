# services/gemini.py
from __future__ import annotations

import functools
import json
import logging
import re
from typing import Literal

from google import genai
from google.genai import types
from pydantic import ValidationError

from config import settings
from core.models.plan import Meal, PlanData
from core.models.profile import UserProfile

_LOG = logging.getLogger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")

_LANGUAGE_NAMES = {"en": "English", "ar": "Arabic"}


class GenerationError(RuntimeError):
    """Raised when the AI collaborator yields no usable plan."""


# ───────────── Response schema sent to Gemini ─────────────
class _GeneratedMeal(Meal):
    type: Literal["breakfast", "lunch", "dinner", "snack"]


class _GeneratedPlan(PlanData):
    meals: list[_GeneratedMeal]


# ───────────── Client (created on first call) ─────────────
@functools.lru_cache(maxsize=1)
def _client() -> genai.Client:
    if not settings.gemini_api_key:
        raise GenerationError("GEMINI_API_KEY not set in environment")
    return genai.Client(api_key=settings.gemini_api_key)


# ───────────── Prompt ─────────────
def build_prompt(profile: UserProfile, language: str) -> str:
    return (
        "Act as a world-class nutritionist and sports scientist.\n"
        "Based on the following user profile, generate a 1-day personalized "
        "meal plan, a macro nutrient breakdown, and a targeted exercise protocol.\n\n"
        "User Profile:\n"
        f"{json.dumps(profile.model_dump(mode='json'), indent=2, ensure_ascii=False)}\n\n"
        "Output Requirement:\n"
        "Return valid JSON strictly matching the schema.\n"
        "Ensure cultural relevance to the Arabian region.\n"
        f"Language: {_LANGUAGE_NAMES.get(language, 'English')}."
    )


# ───────────── Parsing ─────────────
def strip_code_fence(text: str) -> str:
    return _FENCE.sub("", text.strip()).strip()


def parse_plan_text(text: str | None) -> PlanData:
    """Parse Gemini's JSON answer (optionally wrapped in ```json fences)."""
    if not text or not text.strip():
        raise GenerationError("No data returned")
    cleaned = strip_code_fence(text)
    try:
        plan = PlanData.model_validate(json.loads(cleaned))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise GenerationError(f"Unparsable plan from Gemini: {exc}") from exc
    if not plan.meals:
        raise GenerationError("Gemini returned a plan without meals")
    return plan


# ───────────── Generation (async, no retry) ─────────────
async def generate_plan(profile: UserProfile, language: str = "en") -> PlanData:
    """Ask Gemini for a complete plan. Every failure surfaces as GenerationError."""
    prompt = build_prompt(profile, language)
    _LOG.debug("Calling Gemini (%s) for a %s plan…", settings.gemini_model, language)
    try:
        resp = await _client().aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=settings.gemini_temperature,
                response_mime_type="application/json",
                response_schema=_GeneratedPlan,
            ),
        )
    except GenerationError:
        raise
    except Exception as exc:
        _LOG.error("Gemini generation failed: %s", exc)
        raise GenerationError(str(exc)) from exc

    return parse_plan_text(resp.text)
