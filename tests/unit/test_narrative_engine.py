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

"""Tests for the narrative engine step/choose loop."""

import pytest

from survival_narrative.config import MAX_CHAIN_DEPTH
from survival_narrative.events.catalog import EventCatalog
from survival_narrative.events.effects import InMemoryEffectSink
from survival_narrative.models.conditions import Condition
from survival_narrative.models.events import Choice, EventTemplate, Result
from survival_narrative.models.snapshot import (
    ActivityType,
    LocationView,
    StateSnapshot,
    SurvivalStats,
    WeatherCondition,
)
from survival_narrative.models.tensions import TensionStage, TensionType
from survival_narrative.world.narrative_engine import NarrativeEngine

# Long enough that the base trigger roll always succeeds
ALWAYS_ROLL_MINUTES = 100_000


def _make_snapshot(tick: int = 0, **kwargs) -> StateSnapshot:
    defaults = {
        "tick": tick,
        "activity": ActivityType.TRAVELING,
        "at_camp": False,
    }
    defaults.update(kwargs)
    return StateSnapshot(**defaults)


def _make_template(event_id: str, **kwargs) -> EventTemplate:
    defaults = {
        "title": event_id,
        "choices": (Choice("Continue", results=(Result("Done."),)),),
    }
    defaults.update(kwargs)
    return EventTemplate(event_id=event_id, **defaults)


def _quiet_engine(**kwargs) -> NarrativeEngine:
    """Engine with no random events and no decay."""
    defaults = {"catalog": EventCatalog(), "seed": 1, "apply_decay": False}
    defaults.update(kwargs)
    return NarrativeEngine(**defaults)


class TestTensionDrivenEvents:
    def test_stalked_escalation_fires_closing_in(self):
        engine = _quiet_engine()
        engine.tensions.create(TensionType.STALKED, 0.3, animal_type="wolf")

        result = engine.step(_make_snapshot(tick=1))
        assert result.event.event_id == "tension.stalked.created"
        engine.choose(0)

        engine.tensions.escalate(TensionType.STALKED, 0.2)
        result = engine.step(_make_snapshot(tick=2))

        assert len(result.stage_changes) == 1
        change = result.stage_changes[0]
        assert (change.previous, change.current) == (
            TensionStage.BUILDING,
            TensionStage.ESCALATING,
        )
        assert result.event.event_id == "tension.stalked.closing_in"
        assert result.pending.source == "tension"
        assert "wolf" in result.event.text

    def test_intentional_event_preempts_selector(self):
        catalog = EventCatalog([_make_template("random.anything")])
        engine = _quiet_engine(catalog=catalog)
        engine.tensions.create(TensionType.STALKED, 0.3)

        result = engine.step(_make_snapshot(tick=1), minutes=ALWAYS_ROLL_MINUTES)
        assert result.event.event_id == "tension.stalked.created"
        assert engine.cooldowns.last_fired("random.anything") is None

    def test_resolved_choice_updates_tensions(self):
        engine = _quiet_engine()
        engine.tensions.create(TensionType.FEVER_RISING, 0.2)
        engine.step(_make_snapshot(tick=1))
        engine.choose(0)

        sink = engine.sink
        assert isinstance(sink, InMemoryEffectSink)
        assert [e.kind for e in sink.status_effects] == ["Exhausted"]

    def test_decay_applied_each_step(self):
        engine = _quiet_engine(apply_decay=True)
        engine.tensions.create(TensionType.STALKED, 0.01)
        engine.tensions.drain_stage_changes()

        result = engine.step(_make_snapshot(tick=1), minutes=60)
        assert result.decayed == [TensionType.STALKED]
        # Resolved while Building: the stalker loses interest
        assert result.event.event_id == "tension.stalked.faded"

    def test_manual_decay_runs_without_per_step_decay(self):
        engine = _quiet_engine()
        engine.tensions.create(TensionType.STALKED, 0.01)
        engine.tensions.drain_stage_changes()

        assert engine.step(_make_snapshot(tick=1), minutes=60).decayed == []
        assert engine.tensions.has(TensionType.STALKED)

        assert engine.decay(60, at_camp=False) == [TensionType.STALKED]
        assert not engine.tensions.has(TensionType.STALKED)


class TestTriggerPriority:
    def test_one_intentional_event_per_step_in_priority_order(self):
        engine = _quiet_engine()
        engine.step(_make_snapshot(tick=0))  # seeds weather and survival bands

        engine.tensions.create(TensionType.STALKED, 0.3)
        stressed = {
            "survival": SurvivalStats(calories=0.2),
            "weather": WeatherCondition.BLIZZARD,
        }

        first = engine.step(_make_snapshot(tick=1, **stressed))
        assert first.event.event_id == "tension.stalked.created"
        assert first.deferred == 2
        engine.choose(0)

        second = engine.step(_make_snapshot(tick=2, **stressed))
        assert second.event.event_id == "threshold.calories_severe"
        assert second.pending.source == "threshold"
        assert second.deferred == 1
        engine.choose(0)

        third = engine.step(_make_snapshot(tick=3, **stressed))
        assert third.event.event_id == "weather.whiteout"
        assert third.pending.source == "weather"
        assert third.deferred == 0
        engine.choose(0)

        assert engine.step(_make_snapshot(tick=4, **stressed)).event is None

    def test_intentional_events_record_cooldown(self):
        engine = _quiet_engine()
        engine.tensions.create(TensionType.STALKED, 0.3)
        engine.step(_make_snapshot(tick=9))
        assert engine.cooldowns.last_fired("tension.stalked.created") == 9


class TestChoices:
    def test_step_while_pending_raises(self):
        engine = _quiet_engine()
        engine.tensions.create(TensionType.STALKED, 0.3)
        engine.step(_make_snapshot(tick=1))
        with pytest.raises(RuntimeError):
            engine.step(_make_snapshot(tick=2))

    def test_choose_without_pending_raises(self):
        with pytest.raises(ValueError):
            _quiet_engine().choose(0)

    def test_choose_out_of_range_raises(self):
        engine = _quiet_engine()
        engine.tensions.create(TensionType.STALKED, 0.3)
        engine.step(_make_snapshot(tick=1))
        with pytest.raises(ValueError):
            engine.choose(3)
        # Still pending after a bad index
        assert engine.pending is not None

    def test_unavailable_choices_filtered(self):
        template = _make_template(
            "random.armed",
            choices=(
                Choice(
                    "Fight",
                    required_conditions=frozenset({Condition.HAS_WEAPON}),
                    results=(Result("You fight."),),
                ),
                Choice("Run", results=(Result("You run."),)),
            ),
        )
        engine = _quiet_engine(catalog=EventCatalog([template]))
        result = engine.step(_make_snapshot(tick=1), minutes=ALWAYS_ROLL_MINUTES)
        assert [c.label for c in result.pending.choices] == ["Run"]
        assert engine.choose(0).resolution.choice_label == "Run"

    def test_event_without_available_choices_not_left_pending(self):
        template = _make_template(
            "random.locked",
            choices=(
                Choice(
                    "Fight",
                    required_conditions=frozenset({Condition.HAS_WEAPON}),
                    results=(Result("You fight."),),
                ),
            ),
        )
        engine = _quiet_engine(catalog=EventCatalog([template]))
        result = engine.step(_make_snapshot(tick=1), minutes=ALWAYS_ROLL_MINUTES)
        assert result.event.event_id == "random.locked"
        assert result.pending.choices == []
        assert engine.pending is None


class TestChains:
    def test_chain_offered_then_dropped_at_depth_limit(self):
        loop = _make_template(
            "chain.loop",
            choices=(
                Choice(
                    "Again",
                    results=(Result("Again.", chain_event_id="chain.loop"),),
                ),
            ),
        )
        engine = _quiet_engine(catalog=EventCatalog([loop]))
        first = engine.step(_make_snapshot(tick=1), minutes=ALWAYS_ROLL_MINUTES)
        assert first.pending.chain_depth == 0

        for depth in range(1, MAX_CHAIN_DEPTH + 1):
            outcome = engine.choose(0)
            assert outcome.next_event.chain_depth == depth
            assert outcome.next_event.source == "chain"
            assert engine.pending is outcome.next_event

        outcome = engine.choose(0)
        assert outcome.chain_dropped
        assert outcome.next_event is None
        assert engine.pending is None

    def test_chain_to_sentinel_event(self):
        follow_up = _make_template("chain.follow_up", base_weight=0.0)
        opener = _make_template(
            "chain.opener",
            choices=(
                Choice(
                    "Go",
                    results=(Result("On.", chain_event_id="chain.follow_up"),),
                ),
            ),
        )
        engine = _quiet_engine(catalog=EventCatalog([opener, follow_up]))
        result = engine.step(_make_snapshot(tick=1), minutes=ALWAYS_ROLL_MINUTES)
        assert result.event.event_id == "chain.opener"
        outcome = engine.choose(0)
        assert outcome.next_event.event.event_id == "chain.follow_up"
        assert engine.cooldowns.last_fired("chain.follow_up") == 1


class TestRandomEvents:
    def test_sleeping_draws_nothing(self):
        engine = NarrativeEngine(seed=3, apply_decay=False)
        for tick in range(200):
            snapshot = _make_snapshot(tick=tick, activity=ActivityType.SLEEPING)
            assert engine.step(snapshot, minutes=30).event is None

    def test_same_seed_same_story(self):
        def run(seed: int) -> list[str]:
            engine = NarrativeEngine(seed=seed, apply_decay=False)
            seen = []
            for tick in range(40):
                snapshot = _make_snapshot(
                    tick=tick * 300,
                    activity=ActivityType.FORAGING,
                    location=LocationView(
                        name="birch_stand",
                        tags=frozenset({"predator_territory", "animal_territory"}),
                    ),
                )
                result = engine.step(snapshot, minutes=ALWAYS_ROLL_MINUTES)
                if result.event is not None:
                    seen.append(result.event.event_id)
                if engine.pending is not None:
                    engine.choose(0)
            return seen

        first = run(21)
        assert first
        assert first == run(21)
