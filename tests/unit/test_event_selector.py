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

"""Tests for weighted choice, the catalog, cooldowns and event selection."""

import numpy as np
import pytest

from survival_narrative.conditions.situations import (
    Situation,
    SituationCalculator,
    SituationName,
)
from survival_narrative.content.builtin import build_catalog
from survival_narrative.events.catalog import EventCatalog
from survival_narrative.events.cooldowns import CooldownTracker
from survival_narrative.events.selector import EventSelector, base_event_chance
from survival_narrative.events.weighted import weighted_choice
from survival_narrative.models.conditions import Condition
from survival_narrative.models.events import (
    Choice,
    EventTemplate,
    Result,
    SituationFactor,
)
from survival_narrative.models.snapshot import (
    ActivityType,
    InventoryView,
    LocationView,
    StateSnapshot,
    WeatherCondition,
)
from survival_narrative.models.tensions import TensionType
from survival_narrative.tensions.registry import TensionRegistry


def _make_template(event_id: str = "test.event", **kwargs) -> EventTemplate:
    defaults = {
        "title": event_id,
        "choices": (Choice("Continue", results=(Result("Done."),)),),
    }
    defaults.update(kwargs)
    return EventTemplate(event_id=event_id, **defaults)


def _make_selector(templates, seed: int = 0) -> EventSelector:
    return EventSelector(
        EventCatalog(templates),
        CooldownTracker(),
        SituationCalculator(),
        np.random.default_rng(seed),
    )


def _make_snapshot(**kwargs) -> StateSnapshot:
    defaults = {"tensions": TensionRegistry()}
    defaults.update(kwargs)
    return StateSnapshot(**defaults)


class TestWeightedChoice:
    def test_empty_returns_none(self):
        assert weighted_choice([], np.random.default_rng(0)) is None

    def test_all_zero_returns_none(self):
        items = [(0.0, "a"), (0.0, "b")]
        assert weighted_choice(items, np.random.default_rng(0)) is None

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            weighted_choice([(1.0, "a"), (-0.5, "b")], np.random.default_rng(0))

    def test_non_finite_weight_rejected(self):
        with pytest.raises(ValueError):
            weighted_choice([(float("nan"), "a")], np.random.default_rng(0))

    def test_distribution_matches_weights(self):
        rng = np.random.default_rng(42)
        items = [(1.0, "a"), (2.0, "b"), (7.0, "c")]
        draws = [weighted_choice(items, rng) for _ in range(10_000)]
        counts = {k: draws.count(k) / len(draws) for k in "abc"}
        assert counts["a"] == pytest.approx(0.1, abs=0.02)
        assert counts["b"] == pytest.approx(0.2, abs=0.02)
        assert counts["c"] == pytest.approx(0.7, abs=0.02)

    def test_zero_weight_never_drawn(self):
        rng = np.random.default_rng(3)
        items = [(0.0, "never"), (1.0, "a"), (0.0, "also_never"), (0.5, "b")]
        draws = {weighted_choice(items, rng) for _ in range(10_000)}
        assert draws == {"a", "b"}


class TestCatalog:
    def test_duplicate_id_rejected(self):
        catalog = EventCatalog([_make_template("a")])
        with pytest.raises(ValueError):
            catalog.register(_make_template("a"))

    def test_unknown_id_returns_none(self):
        catalog = EventCatalog()
        assert catalog.get("missing") is None
        assert "missing" not in catalog

    def test_registration_order_kept(self):
        catalog = EventCatalog([_make_template("b"), _make_template("a")])
        assert [t.event_id for t in catalog.templates()] == ["b", "a"]
        assert len(catalog) == 2

    def test_builtin_catalog_loads(self):
        catalog = build_catalog()
        assert "threat.something_watching" in catalog
        assert "weather.whiteout" in catalog

    def test_template_validation(self):
        with pytest.raises(ValueError):
            _make_template(base_weight=-1.0)
        with pytest.raises(ValueError):
            Result("bad", weight=0.0)
        with pytest.raises(ValueError):
            Choice("Empty")

    @pytest.mark.parametrize("bad", [float("nan"), float("inf")])
    def test_non_finite_weights_rejected(self, bad):
        with pytest.raises(ValueError):
            _make_template(base_weight=bad)
        with pytest.raises(ValueError):
            _make_template(condition_weight_factors={Condition.NIGHT: bad})
        with pytest.raises(ValueError):
            SituationFactor(bad)
        with pytest.raises(ValueError):
            Result("bad", weight=bad)


class TestCooldowns:
    def test_ready_without_history(self):
        assert CooldownTracker().is_ready("a", 10, now=0)

    def test_no_cooldown_always_ready(self):
        tracker = CooldownTracker()
        tracker.record("a", 5)
        assert tracker.is_ready("a", None, now=5)

    def test_cooldown_window(self):
        tracker = CooldownTracker()
        tracker.record("a", 100)
        assert not tracker.is_ready("a", 30, now=129)
        assert tracker.is_ready("a", 30, now=130)


class TestBaseEventChance:
    def test_sleeping_never_triggers(self):
        assert base_event_chance(ActivityType.SLEEPING, 60) == 0.0

    def test_activity_scales_chance(self):
        traveling = base_event_chance(ActivityType.TRAVELING, 10)
        idle = base_event_chance(ActivityType.IDLE, 10)
        assert traveling > idle > 0.0

    def test_chance_bounded(self):
        assert base_event_chance(ActivityType.TRACKING, 100_000) == 1.0
        assert base_event_chance(ActivityType.TRAVELING, 0) == 0.0


class TestEligibility:
    def test_required_and_excluded_conditions(self):
        template = _make_template(
            required_conditions=frozenset({Condition.IS_DAYTIME}),
            excluded_conditions=frozenset({Condition.STALKED}),
        )
        selector = _make_selector([template])
        reg = TensionRegistry()
        snapshot = _make_snapshot(tensions=reg, is_daytime=True)
        assert selector.is_eligible(template, snapshot)
        assert not selector.is_eligible(template, _make_snapshot(is_daytime=False))
        reg.create(TensionType.STALKED, 0.3)
        assert not selector.is_eligible(template, snapshot)

    def test_location_scope(self):
        by_name = _make_template("by_name", location_name="river_bend")
        by_tag = _make_template("by_tag", location_tag="forest")
        selector = _make_selector([by_name, by_tag])
        snapshot = _make_snapshot(
            location=LocationView(name="river_bend", tags=frozenset({"water"}))
        )
        assert selector.is_eligible(by_name, snapshot)
        assert not selector.is_eligible(by_tag, snapshot)

    def test_required_situations(self):
        template = _make_template(
            required_situations=frozenset({SituationName.ATTRACTIVE_TO_PREDATORS})
        )
        selector = _make_selector([template])
        assert not selector.is_eligible(template, _make_snapshot())
        meat = _make_snapshot(inventory=InventoryView(resources={"meat": 1}))
        assert selector.is_eligible(template, meat)

    def test_randomized_snapshots_respect_conditions(self):
        rng = np.random.default_rng(11)
        catalog = build_catalog()
        selector = EventSelector(
            catalog, CooldownTracker(), SituationCalculator(), rng
        )
        evaluator = SituationCalculator().evaluator
        activities = list(ActivityType)
        weathers = list(WeatherCondition)
        for _ in range(300):
            reg = TensionRegistry()
            if rng.random() < 0.5:
                reg.create(TensionType.STALKED, float(rng.random()))
            snapshot = StateSnapshot(
                activity=activities[rng.integers(len(activities))],
                weather=weathers[rng.integers(len(weathers))],
                at_camp=bool(rng.random() < 0.5),
                is_daytime=bool(rng.random() < 0.5),
                air_temperature_c=float(rng.uniform(-40, 5)),
                location=LocationView(
                    tags=frozenset({"predator_territory", "animal_territory"})
                    if rng.random() < 0.5
                    else frozenset()
                ),
                inventory=InventoryView(
                    resources={"fuel": int(rng.integers(0, 4))},
                    has_weapon=bool(rng.random() < 0.5),
                ),
                tensions=reg,
            )
            eligible = {t.event_id for t in selector.eligible(snapshot)}
            for template in catalog.templates():
                holds = evaluator.all_hold(
                    template.required_conditions, snapshot
                ) and not evaluator.any_hold(template.excluded_conditions, snapshot)
                if template.event_id in eligible:
                    assert holds
                elif not template.required_situations:
                    assert not holds


class TestSelection:
    def test_effective_weight_with_factors(self):
        template = _make_template(
            base_weight=2.0,
            condition_weight_factors={Condition.NIGHT: 1.5},
            situation_weight_factors={
                SituationName.ATTRACTIVE_TO_PREDATORS: SituationFactor(
                    3.0, scaled=True
                ),
                SituationName.VULNERABLE: SituationFactor(2.0),
            },
        )
        selector = _make_selector([template])
        snapshot = _make_snapshot(
            is_daytime=False,
            inventory=InventoryView(resources={"meat": 1}, has_weapon=True),
        )
        # 2.0 * 1.5 (night) * (1 + 2 * 0.3) (meat) * 1.0 (armed, not vulnerable)
        assert selector.effective_weight(template, snapshot) == pytest.approx(4.8)

    def test_negative_effective_weight_clamped(self):
        template = _make_template(condition_weight_factors={Condition.AWAKE: -1.0})
        selector = _make_selector([template])
        assert selector.effective_weight(template, _make_snapshot()) == 0.0

    def test_non_finite_level_does_not_break_selection(self):
        situations = SituationCalculator(situations=())
        situations.register(
            Situation("unstable", lambda ev, s: True, lambda ev, s: float("nan"))
        )
        unstable = _make_template(
            "unstable",
            situation_weight_factors={"unstable": SituationFactor(3.0, scaled=True)},
        )
        steady = _make_template("steady")
        selector = EventSelector(
            EventCatalog([unstable, steady]),
            CooldownTracker(),
            situations,
            np.random.default_rng(0),
        )
        snapshot = _make_snapshot()
        # Level falls back to 0, so the factor is neutral
        assert selector.effective_weight(unstable, snapshot) == pytest.approx(1.0)
        assert selector.select(snapshot) is not None

    def test_overflowing_weight_treated_as_zero(self):
        template = _make_template(
            "huge",
            base_weight=1e308,
            condition_weight_factors={Condition.AWAKE: 10.0},
        )
        steady = _make_template("steady")
        selector = _make_selector([template, steady])
        snapshot = _make_snapshot()
        assert selector.effective_weight(template, snapshot) == 0.0
        picks = {selector.select(snapshot).event_id for _ in range(50)}
        assert picks == {"steady"}

    def test_no_candidates_means_no_event(self):
        template = _make_template(required_conditions=frozenset({Condition.NIGHT}))
        selector = _make_selector([template])
        assert selector.select(_make_snapshot(is_daytime=True)) is None

    def test_zero_weight_template_never_selected(self):
        selector = _make_selector(
            [_make_template("drawable"), _make_template("sentinel", base_weight=0.0)],
            seed=5,
        )
        snapshot = _make_snapshot()
        picks = {selector.select(snapshot).event_id for _ in range(10_000)}
        assert picks == {"drawable"}

    def test_cooldown_enforced(self):
        template = _make_template(cooldown_ticks=10)
        selector = _make_selector([template])
        assert selector.select(_make_snapshot(tick=0)) is template
        assert selector.select(_make_snapshot(tick=5)) is None
        assert selector.select(_make_snapshot(tick=10)) is template

    def test_selection_is_reproducible(self):
        templates = [_make_template(f"e{i}", base_weight=i + 1.0) for i in range(5)]
        a = _make_selector(templates, seed=99)
        b = _make_selector(templates, seed=99)
        snapshot = _make_snapshot()
        assert [a.select(snapshot).event_id for _ in range(50)] == [
            b.select(snapshot).event_id for _ in range(50)
        ]
