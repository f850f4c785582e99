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

"""Narrative engine: owns all per-game state and runs one step at a time.

Maintains the tension registry, cooldowns, threshold and weather
trackers, the intentional-trigger queue and the pending event. Every
game instance gets its own engine; nothing here is process-wide.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import numpy as np

from survival_narrative.conditions.evaluator import ConditionEvaluator
from survival_narrative.conditions.situations import SituationCalculator
from survival_narrative.config import (
    DEFAULT_RNG_SEED,
    MAX_CHAIN_DEPTH,
    MINUTES_PER_TICK,
)
from survival_narrative.content.builtin import build_catalog, build_tension_triggers
from survival_narrative.content.thresholds import THRESHOLD_TEMPLATES
from survival_narrative.content.weather import WEATHER_TRIGGER_TEMPLATES
from survival_narrative.events.catalog import EventCatalog
from survival_narrative.events.cooldowns import CooldownTracker
from survival_narrative.events.effects import EffectSink, InMemoryEffectSink
from survival_narrative.events.resolver import OutcomeResolver, Resolution
from survival_narrative.events.selector import EventSelector
from survival_narrative.models.events import Choice, EventTemplate
from survival_narrative.models.snapshot import StateSnapshot
from survival_narrative.models.tensions import StageChange
from survival_narrative.tensions.decay import TensionDecayScheduler
from survival_narrative.tensions.registry import TensionRegistry
from survival_narrative.triggers.queue import IntentionalTriggerQueue, TriggerSource
from survival_narrative.triggers.tension_stage import TensionStageTriggers
from survival_narrative.triggers.thresholds import (
    SurvivalThresholdTracker,
    ThresholdStage,
)
from survival_narrative.triggers.weather import WeatherTransitionTracker, WeatherTrigger

logger = logging.getLogger(__name__)

RANDOM_SOURCE = "random"
CHAIN_SOURCE = "chain"


@dataclass
class PendingEvent:
    """An event offered to the player and awaiting a choice.

    Attributes:
        event: The offered template.
        choices: Choices whose conditions held when offered, in order.
        source: "random", "chain", or a TriggerSource name.
        chain_depth: 0 for a fresh event, n for the n-th link of a chain.
    """

    event: EventTemplate
    choices: list[Choice]
    source: str
    chain_depth: int = 0


@dataclass
class StepResult:
    """Summary of one engine step.

    Attributes:
        tick: Tick of the snapshot that was stepped.
        pending: The event offered this step, if any.
        stage_changes: Net tension stage changes consumed this step.
        decayed: Tension types that decayed away this step.
        deferred: Intentional events still queued for later steps.
    """

    tick: int
    pending: PendingEvent | None = None
    stage_changes: list[StageChange] = field(default_factory=list)
    decayed: list[str] = field(default_factory=list)
    deferred: int = 0

    @property
    def event(self) -> EventTemplate | None:
        return self.pending.event if self.pending else None


@dataclass
class ChoiceResult:
    """Outcome of choose().

    Attributes:
        resolution: What the resolver drew and applied.
        next_event: Chained event now pending, if any.
        chain_dropped: A chained event was dropped at the depth limit.
    """

    resolution: Resolution
    next_event: PendingEvent | None = None
    chain_dropped: bool = False


class NarrativeEngine:
    """Steps the narrative for one game.

    Args:
        catalog: Event templates; defaults to the built-in catalog.
        sink: Effect contract; defaults to an InMemoryEffectSink.
        seed: RNG seed. Equal seeds and inputs give equal runs.
        evaluator: Condition evaluator; defaults to the built-in predicates.
        tension_triggers: Stage-change handlers; defaults to built-ins.
        threshold_templates: Survival alert events per (stat, band).
        weather_templates: Weather transition events per trigger.
        apply_decay: Apply passive tension decay at the start of each step.
    """

    def __init__(
        self,
        catalog: EventCatalog | None = None,
        sink: EffectSink | None = None,
        seed: int | None = DEFAULT_RNG_SEED,
        evaluator: ConditionEvaluator | None = None,
        tension_triggers: TensionStageTriggers | None = None,
        threshold_templates: Mapping[tuple[str, ThresholdStage], EventTemplate]
        | None = None,
        weather_templates: Mapping[WeatherTrigger, EventTemplate] | None = None,
        apply_decay: bool = True,
    ):
        self._rng = np.random.default_rng(seed)
        self._catalog = catalog if catalog is not None else build_catalog()
        self._tensions = TensionRegistry()
        self._cooldowns = CooldownTracker()
        self._situations = SituationCalculator(evaluator or ConditionEvaluator())
        self._evaluator = self._situations.evaluator
        self._selector = EventSelector(
            self._catalog, self._cooldowns, self._situations, self._rng
        )
        self._sink = sink if sink is not None else InMemoryEffectSink()
        self._resolver = OutcomeResolver(
            self._catalog, self._tensions, self._sink, self._rng
        )
        self._tension_triggers = tension_triggers or build_tension_triggers()
        self._thresholds = SurvivalThresholdTracker(
            THRESHOLD_TEMPLATES
            if threshold_templates is None
            else threshold_templates
        )
        self._weather = WeatherTransitionTracker(
            WEATHER_TRIGGER_TEMPLATES
            if weather_templates is None
            else weather_templates
        )
        self._decay = TensionDecayScheduler()
        self._apply_decay = apply_decay
        self._queue = IntentionalTriggerQueue()
        self._pending: PendingEvent | None = None
        self._snapshot: StateSnapshot | None = None

    # --- Owned state ---

    @property
    def tensions(self) -> TensionRegistry:
        return self._tensions

    @property
    def cooldowns(self) -> CooldownTracker:
        return self._cooldowns

    @property
    def catalog(self) -> EventCatalog:
        return self._catalog

    @property
    def sink(self) -> EffectSink:
        return self._sink

    @property
    def selector(self) -> EventSelector:
        return self._selector

    @property
    def queue(self) -> IntentionalTriggerQueue:
        return self._queue

    @property
    def pending(self) -> PendingEvent | None:
        return self._pending

    @property
    def tick(self) -> int:
        return self._snapshot.tick if self._snapshot else 0

    # --- Simulation ---

    def decay(self, minutes: float, at_camp: bool) -> list[str]:
        """Apply passive tension decay for the given simulated minutes.

        Called by step() when per-step decay is enabled. Calling it directly
        decays on top of that, regardless of the apply_decay setting.

        Returns:
            Type keys of tensions that decayed away.
        """
        return self._decay.apply(self._tensions, minutes, at_camp)

    def step(
        self, snapshot: StateSnapshot, minutes: int = MINUTES_PER_TICK
    ) -> StepResult:
        """Advance the narrative by one step.

        Runs the pipeline: decay tensions -> drain stage changes -> feed the
        intentional triggers -> fire one intentional event, or else roll for
        and draw a random one.

        Args:
            snapshot: Read-only state for this step. Its tension registry is
                replaced by the engine's own.
            minutes: Simulated minutes this step covers.

        Returns:
            StepResult with the offered event, if any.

        Raises:
            RuntimeError: If the previous event still awaits a choice.
        """
        if self._pending is not None:
            raise RuntimeError(
                f"Event {self._pending.event.event_id!r} is awaiting a choice."
            )
        snapshot = dataclasses.replace(snapshot, tensions=self._tensions)
        self._snapshot = snapshot

        decayed: list[str] = []
        if self._apply_decay:
            decayed = self.decay(minutes, snapshot.at_camp)

        # 1. Intentional triggers, in priority order
        changes = self._tensions.drain_stage_changes()
        self._queue.extend(
            TriggerSource.TENSION, self._tension_triggers.events_for(changes)
        )
        self._queue.extend(
            TriggerSource.THRESHOLD, self._thresholds.events_for(snapshot.survival)
        )
        self._queue.extend(TriggerSource.WEATHER, self._weather.events_for(snapshot))

        pending = None
        queued = self._queue.pop()
        if queued is not None:
            source, event = queued
            self._cooldowns.record(event.event_id, snapshot.tick)
            pending = self._offer(event, source.name.lower())
        # 2. Probabilistic selection
        elif self._selector.roll_trigger(snapshot, minutes):
            event = self._selector.select(snapshot)
            if event is not None:
                pending = self._offer(event, RANDOM_SOURCE)

        return StepResult(
            tick=snapshot.tick,
            pending=pending,
            stage_changes=changes,
            decayed=decayed,
            deferred=len(self._queue),
        )

    def choose(self, index: int) -> ChoiceResult:
        """Resolve the pending event with the choice at ``index``.

        Args:
            index: Index into the pending event's available choices.

        Returns:
            ChoiceResult with the applied resolution and any chained event.

        Raises:
            ValueError: If nothing is pending or the index is out of range.
        """
        pending = self._pending
        if pending is None:
            raise ValueError("No event is awaiting a choice.")
        if not 0 <= index < len(pending.choices):
            raise ValueError(
                f"Choice index {index} out of range for {pending.event.event_id!r} "
                f"({len(pending.choices)} available)."
            )

        choice = pending.choices[index]
        resolution = self._resolver.resolve(pending.event.event_id, choice, self.tick)
        self._pending = None

        result = ChoiceResult(resolution=resolution)
        chained = resolution.chained_event
        if chained is not None:
            depth = pending.chain_depth + 1
            if depth > MAX_CHAIN_DEPTH:
                logger.debug(
                    "Chain from %s dropped at depth %d.", pending.event.event_id, depth
                )
                result.chain_dropped = True
            else:
                self._cooldowns.record(chained.event_id, self.tick)
                result.next_event = self._offer(chained, CHAIN_SOURCE, depth)
        return result

    def available_choices(self, event: EventTemplate) -> list[Choice]:
        """Choices of ``event`` whose conditions hold on the last snapshot."""
        snapshot = self._snapshot or StateSnapshot(tensions=self._tensions)
        return [
            c
            for c in event.choices
            if self._evaluator.all_hold(c.required_conditions, snapshot)
        ]

    def _offer(
        self, event: EventTemplate, source: str, depth: int = 0
    ) -> PendingEvent:
        choices = self.available_choices(event)
        pending = PendingEvent(
            event=event, choices=choices, source=source, chain_depth=depth
        )
        if choices:
            self._pending = pending
        else:
            logger.warning(
                "Event %r offered with no available choices.", event.event_id
            )
        logger.info("Offering %s event %r.", source, event.event_id)
        return pending
