# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for the condition evaluator and situation calculator."""

import pytest

from survival_narrative.conditions.evaluator import (
    DEFAULT_PREDICATES,
    ConditionEvaluator,
)
from survival_narrative.conditions.situations import (
    Situation,
    SituationCalculator,
    SituationName,
)
from survival_narrative.models.conditions import Condition
from survival_narrative.models.snapshot import (
    ActivityType,
    BodyView,
    InventoryView,
    LocationView,
    StateSnapshot,
    SurvivalStats,
    WeatherCondition,
    WeatherFront,
)
from survival_narrative.models.tensions import TensionType
from survival_narrative.tensions.registry import TensionRegistry


def _make_snapshot(**kwargs) -> StateSnapshot:
    defaults = {"tensions": TensionRegistry()}
    defaults.update(kwargs)
    return StateSnapshot(**defaults)


class TestConditionEvaluator:
    def test_every_condition_has_a_predicate(self):
        assert set(DEFAULT_PREDICATES) == set(Condition)

    def test_every_condition_evaluates_on_default_snapshot(self):
        ev = ConditionEvaluator()
        snapshot = _make_snapshot()
        for condition in Condition:
            assert isinstance(ev.evaluate(condition, snapshot), bool)

    def test_expedition_means_away_from_camp(self):
        ev = ConditionEvaluator()
        assert not ev.evaluate(Condition.IS_EXPEDITION, _make_snapshot(at_camp=True))
        assert ev.evaluate(Condition.IS_EXPEDITION, _make_snapshot(at_camp=False))

    def test_weather_conditions(self):
        ev = ConditionEvaluator()
        whiteout = _make_snapshot(weather=WeatherCondition.WHITEOUT)
        assert ev.evaluate(Condition.IS_BLIZZARD, whiteout)
        assert ev.evaluate(Condition.IS_SNOWING, whiteout)
        assert not ev.evaluate(Condition.IS_CLEAR, whiteout)

    def test_calm_before_the_storm(self):
        ev = ConditionEvaluator()
        snapshot = _make_snapshot(
            weather_front=WeatherFront.PROLONGED_BLIZZARD, front_phase=0
        )
        assert ev.evaluate(Condition.CALM_BEFORE_THE_STORM, snapshot)
        later = _make_snapshot(
            weather_front=WeatherFront.PROLONGED_BLIZZARD, front_phase=2
        )
        assert not ev.evaluate(Condition.CALM_BEFORE_THE_STORM, later)

    def test_inventory_conditions(self):
        ev = ConditionEvaluator()
        snapshot = _make_snapshot(inventory=InventoryView(resources={"fuel": 1}))
        assert ev.evaluate(Condition.HAS_FUEL, snapshot)
        assert ev.evaluate(Condition.LOW_ON_FUEL, snapshot)
        assert not ev.evaluate(Condition.HAS_FUEL_PLENTY, snapshot)
        assert ev.evaluate(Condition.NO_FOOD, snapshot)

    def test_location_conditions(self):
        ev = ConditionEvaluator()
        snapshot = _make_snapshot(
            at_camp=True,
            location=LocationView(features=frozenset({"fire", "shelter"})),
        )
        assert ev.evaluate(Condition.NEAR_FIRE, snapshot)
        assert ev.evaluate(Condition.INSIDE, snapshot)
        assert not ev.evaluate(Condition.OUTSIDE, snapshot)

    def test_body_conditions(self):
        ev = ConditionEvaluator()
        snapshot = _make_snapshot(
            body=BodyView(injured=True, capacities={"moving": 0.4}),
            survival=SurvivalStats(calories=0.1),
        )
        assert ev.evaluate(Condition.LIMPING, snapshot)
        assert ev.evaluate(Condition.IMPAIRED, snapshot)
        assert ev.evaluate(Condition.LOW_CALORIES, snapshot)
        assert not ev.evaluate(Condition.LOW_HYDRATION, snapshot)

    def test_tension_stage_conditions(self):
        ev = ConditionEvaluator()
        reg = TensionRegistry()
        snapshot = _make_snapshot(tensions=reg)
        assert not ev.evaluate(Condition.STALKED, snapshot)

        reg.create(TensionType.STALKED, 0.5)
        assert ev.evaluate(Condition.STALKED, snapshot)
        assert ev.evaluate(Condition.STALKED_HIGH, snapshot)
        assert not ev.evaluate(Condition.STALKED_CRITICAL, snapshot)

        reg.escalate(TensionType.STALKED, 0.3)
        assert ev.evaluate(Condition.STALKED_CRITICAL, snapshot)

    def test_tension_conditions_without_registry(self):
        ev = ConditionEvaluator()
        assert not ev.evaluate(Condition.STALKED, StateSnapshot())

    def test_unknown_condition_is_false(self):
        ev = ConditionEvaluator()
        assert ev.evaluate("no_such_condition", _make_snapshot()) is False

    def test_raising_predicate_is_false(self):
        def boom(snapshot):
            raise KeyError("missing")

        ev = ConditionEvaluator({"fragile": boom})
        assert ev.evaluate("fragile", _make_snapshot()) is False

    def test_register_custom_predicate(self):
        ev = ConditionEvaluator()
        ev.register("is_hunting_party", lambda s: s.activity == ActivityType.HUNTING)
        assert ev.knows("is_hunting_party")
        assert ev.evaluate(
            "is_hunting_party", _make_snapshot(activity=ActivityType.HUNTING)
        )

    def test_all_and_any(self):
        ev = ConditionEvaluator()
        snapshot = _make_snapshot(is_daytime=True)
        assert ev.all_hold([], snapshot)
        assert not ev.any_hold([], snapshot)
        assert ev.all_hold([Condition.IS_DAYTIME, Condition.AWAKE], snapshot)
        assert not ev.all_hold([Condition.IS_DAYTIME, Condition.NIGHT], snapshot)
        assert ev.any_hold([Condition.IS_DAYTIME, Condition.NIGHT], snapshot)


class TestSituations:
    def test_predator_attraction_level(self):
        calc = SituationCalculator()
        snapshot = _make_snapshot(
            inventory=InventoryView(resources={"meat": 2}),
            body=BodyView(effects={"Bleeding": 0.5}),
        )
        assert calc.gate(SituationName.ATTRACTIVE_TO_PREDATORS, snapshot)
        assert calc.level(
            SituationName.ATTRACTIVE_TO_PREDATORS, snapshot
        ) == pytest.approx(0.7)

    def test_level_total_is_clamped(self):
        calc = SituationCalculator()
        reg = TensionRegistry()
        reg.create(TensionType.FOOD_SCENT_STRONG, 0.5)
        snapshot = _make_snapshot(
            tensions=reg,
            inventory=InventoryView(resources={"meat": 2}),
            body=BodyView(effects={"Bleeding": 0.5, "Bloody": 1.0}, injured=True),
        )
        assert calc.level(SituationName.ATTRACTIVE_TO_PREDATORS, snapshot) == 1.0

    def test_vulnerable_without_weapon(self):
        calc = SituationCalculator()
        unarmed = _make_snapshot(inventory=InventoryView(has_weapon=False))
        armed = _make_snapshot(inventory=InventoryView(has_weapon=True))
        assert calc.gate(SituationName.VULNERABLE, unarmed)
        assert not calc.gate(SituationName.VULNERABLE, armed)

    def test_level_without_level_fn_follows_gate(self):
        calc = SituationCalculator()
        reg = TensionRegistry()
        snapshot = _make_snapshot(tensions=reg)
        assert calc.level(SituationName.UNDER_THREAT, snapshot) == 0.0
        reg.create(TensionType.HUNTED, 0.2)
        assert calc.level(SituationName.UNDER_THREAT, snapshot) == 1.0

    def test_serious_threat_needs_severity(self):
        calc = SituationCalculator()
        reg = TensionRegistry()
        reg.create(TensionType.STALKED, 0.3)
        snapshot = _make_snapshot(tensions=reg)
        assert calc.gate(SituationName.UNDER_THREAT, snapshot)
        assert not calc.gate(SituationName.UNDER_SERIOUS_THREAT, snapshot)
        reg.escalate(TensionType.STALKED, 0.3)
        assert calc.gate(SituationName.UNDER_SERIOUS_THREAT, snapshot)

    def test_extreme_cold_crisis(self):
        calc = SituationCalculator()
        snapshot = _make_snapshot(air_temperature_c=-30.0)
        assert calc.gate(SituationName.EXTREME_COLD_CRISIS, snapshot)
        assert not calc.gate(SituationName.EXTREME_COLD_CRISIS, _make_snapshot())

    def test_unknown_situation_fails_closed(self):
        calc = SituationCalculator()
        assert calc.gate("no_such_situation", _make_snapshot()) is False
        assert calc.level("no_such_situation", _make_snapshot()) == 0.0

    def test_raising_situation_fails_closed(self):
        def boom(ev, snapshot):
            raise ZeroDivisionError

        calc = SituationCalculator(situations=())
        calc.register(Situation("broken", boom, boom))
        assert calc.gate("broken", _make_snapshot()) is False
        assert calc.level("broken", _make_snapshot()) == 0.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_level_is_zero(self, value):
        calc = SituationCalculator(situations=())
        calc.register(Situation("unstable", lambda ev, s: True, lambda ev, s: value))
        assert calc.level("unstable", _make_snapshot()) == 0.0

    def test_builtin_names_registered(self):
        names = SituationCalculator().names()
        assert SituationName.IN_CRISIS in names
        assert SituationName.GOOD_FOR_STEALTH in names
