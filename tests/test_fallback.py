import asyncio

import pytest

from core.fallback import FallbackResolver, tier_for
from core.knowledge import KnowledgeStore
from core.models import UserProfile
from services.gemini import GenerationError

from conftest import AI_PLAN, StubGenerator, bundled_data

PROFILE = UserProfile(weight_kg=70, height_cm=170, age=30, gender="Male")


@pytest.mark.parametrize(
    "tdee, tier",
    [(1200, 1500), (1800, 1500), (1801, 2000), (2800, 2000), (2801, 3000), (-50, 1500)],
)
def test_tier_boundaries(tdee, tier):
    assert tier_for(tdee) == tier


def test_tier_plan_stamps_bmi_and_keeps_dataset_recommendation(store, stub_generator):
    resolver = FallbackResolver(store, generator=stub_generator)
    plan = resolver.calorie_tier_plan(PROFILE, 2094, "en")
    assert [m.id for m in plan.meals] == ["c20_1", "c20_2", "c20_3"]
    assert plan.macros.bmi == 24.2
    assert plan.macros.calories == 1600
    assert plan.macros.recommendation == "Balanced Maintenance"


def test_tier_plan_default_recommendation_is_localized():
    data = bundled_data()
    data["calorie_tiers"]["c3000"]["macros"]["recommendation"] = ""
    resolver = FallbackResolver(KnowledgeStore(data), generator=StubGenerator())

    en = resolver.calorie_tier_plan(PROFILE, 3200, "en")
    ar = resolver.calorie_tier_plan(PROFILE, 3200, "ar")
    assert en.macros.recommendation == "Calorie Matched Protocol: Optimized for your profile."
    assert ar.macros.recommendation.startswith("بروتوكول Calorie Matched")


def test_tier_plan_does_not_touch_the_store(store):
    resolver = FallbackResolver(store, generator=StubGenerator())
    resolver.calorie_tier_plan(PROFILE, 1500, "en")
    assert store.lookup_tier(1500)["macros"]["bmi"] == 0


def test_resolve_prefers_stage_a(store, stub_generator):
    resolver = FallbackResolver(store, generator=stub_generator)
    plan = asyncio.run(resolver.resolve(PROFILE, 1500, "en"))
    assert plan.meals[0].id == "c15_1"
    assert stub_generator.calls == []


def test_resolve_uses_ai_when_tier_missing(store_without_tiers, stub_generator):
    resolver = FallbackResolver(store_without_tiers, generator=stub_generator)
    plan = asyncio.run(resolver.resolve(PROFILE, 2000, "ar"))
    assert plan == AI_PLAN
    assert stub_generator.calls == [(PROFILE, "ar")]


def test_ai_failure_propagates(store_without_tiers):
    gen = StubGenerator(error=GenerationError("boom"))
    resolver = FallbackResolver(store_without_tiers, generator=gen)
    with pytest.raises(GenerationError):
        asyncio.run(resolver.resolve(PROFILE, 2000, "en"))
    assert len(gen.calls) == 1   # no retry


def test_malformed_tier_goes_to_ai():
    data = bundled_data()
    del data["calorie_tiers"]["c1500"]["macros"]
    gen = StubGenerator()
    resolver = FallbackResolver(KnowledgeStore(data), generator=gen)

    assert resolver.calorie_tier_plan(PROFILE, 1500, "en") is None
    plan = asyncio.run(resolver.resolve(PROFILE, 1500, "en"))
    assert plan == AI_PLAN
    assert len(gen.calls) == 1


def test_tier_with_bad_meal_goes_to_ai():
    data = bundled_data()
    data["calorie_tiers"]["c2000"]["meals"][0]["calories"] = -10
    gen = StubGenerator()
    resolver = FallbackResolver(KnowledgeStore(data), generator=gen)

    plan = asyncio.run(resolver.resolve(PROFILE, 2094, "ar"))
    assert plan == AI_PLAN
    assert gen.calls == [(PROFILE, "ar")]
