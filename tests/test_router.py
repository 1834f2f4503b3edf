"""
Rule order of core.router.route – the conditions overlap, so the order is
the behaviour.
"""
import pytest

from core.models import Strategy
from core.router import RULES, route


@pytest.mark.parametrize(
    "goal, region, diet, expected",
    [
        ("Muscle Gain", "Saudi Arabia", "Standard", Strategy.dirty_bulking),
        ("muscle_gain", "", "Dirty Bulk", Strategy.dirty_bulking),
        ("Keto", "Morocco", "Standard", Strategy.keto),
        ("Weight Loss", "Iraq", "Keto", Strategy.keto),
        ("Weight Loss", "Saudi Arabia", "Standard", Strategy.gulf_low_carb),
        ("weight_loss", "Kuwait City", "", Strategy.gulf_low_carb),
        ("Weight Loss", "Jordan", "Intermittent Fasting", Strategy.gulf_intermittent_fasting),
        ("Maintenance", "Qatar", "Ramadan", Strategy.gulf_intermittent_fasting),
        ("Maintenance", "Jordan", "Standard", Strategy.gulf_mediterranean),
        ("General Health", "Egypt", "", Strategy.gulf_mediterranean),
        ("Muscle Gain", "Morocco", "Vegetarian", Strategy.north_african_balanced),
        ("Weight Loss", "Tunisia", "", Strategy.north_african_balanced),
        ("Muscle Gain", "Jordan", "Vegetarian", Strategy.none),
        ("", "", "", Strategy.none),
    ],
)
def test_route(goal, region, diet, expected):
    assert route(goal, region, diet) is expected


def test_muscle_goal_with_keto_diet_is_keto():
    # rule 1 needs a standard / dirty-bulk diet, so rule 2 wins
    assert route("Muscle Gain", "Saudi Arabia", "Keto") is Strategy.keto


def test_keto_beats_gulf_low_carb():
    assert route("Weight Loss", "UAE", "keto") is Strategy.keto


def test_low_carb_beats_fasting_for_gulf_weight_loss():
    assert route("Weight Loss", "Saudi Arabia", "Ramadan fasting") is Strategy.gulf_low_carb


def test_diseases_do_not_change_selection():
    plain = route("Maintenance", "Jordan", "")
    assert route("Maintenance", "Jordan", "", diseases=["Diabetes"]) is plain


def test_none_inputs_are_tolerated():
    assert route(None, None, None) is Strategy.none


def test_route_is_deterministic():
    args = ("Weight Loss", "Qatar", "standard")
    assert {route(*args) for _ in range(10)} == {Strategy.gulf_low_carb}


def test_rule_table_order():
    assert [r.strategy for r in RULES] == [
        Strategy.dirty_bulking,
        Strategy.keto,
        Strategy.gulf_low_carb,
        Strategy.gulf_intermittent_fasting,
        Strategy.gulf_mediterranean,
        Strategy.north_african_balanced,
    ]
