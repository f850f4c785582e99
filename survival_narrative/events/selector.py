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

"""Probabilistic event selection.

Per step:
  1. Filter the catalog to eligible templates (conditions, situations,
     location scope, cooldown).
  2. Weight each candidate: base weight x condition factors x situation
     factors.
  3. Draw one candidate proportionally to its weight; no candidates or a
     zero total means no event this step.
  4. Record the draw in the cooldown tracker.

The per-step base trigger roll that gates all of this lives here too.
"""

from __future__ import annotations

import logging

import numpy as np

from survival_narrative.config import (
    ACTIVITY_EVENT_MULTIPLIERS,
    EVENTS_PER_HOUR,
    MINUTES_PER_TICK,
)
from survival_narrative.conditions.situations import SituationCalculator
from survival_narrative.models.events import EventTemplate
from survival_narrative.models.snapshot import ActivityType, StateSnapshot

from .catalog import EventCatalog
from .cooldowns import CooldownTracker
from .weighted import weighted_choice

logger = logging.getLogger(__name__)


def base_event_chance(
    activity: ActivityType,
    minutes: int = MINUTES_PER_TICK,
    events_per_hour: float = EVENTS_PER_HOUR,
    multipliers: dict[str, float] | None = None,
) -> float:
    """Chance that any random event fires during ``minutes`` of ``activity``.

    Converts an hourly event rate to a Poisson per-interval chance and
    scales it by the activity multiplier.
    """
    table = ACTIVITY_EVENT_MULTIPLIERS if multipliers is None else multipliers
    multiplier = table.get(activity.value, 1.0)
    if multiplier <= 0 or minutes <= 0:
        return 0.0
    chance = -np.expm1(-events_per_hour / 60.0 * minutes)
    return float(np.clip(chance * multiplier, 0.0, 1.0))


class EventSelector:
    """Chooses at most one eligible template per step.

    Args:
        catalog: Registered templates.
        cooldowns: Shared cooldown tracker.
        situations: Situation calculator (carries the condition evaluator).
        rng: Shared random generator.
    """

    def __init__(
        self,
        catalog: EventCatalog,
        cooldowns: CooldownTracker,
        situations: SituationCalculator,
        rng: np.random.Generator,
    ) -> None:
        self._catalog = catalog
        self._cooldowns = cooldowns
        self._situations = situations
        self._evaluator = situations.evaluator
        self._rng = rng

    def roll_trigger(
        self, snapshot: StateSnapshot, minutes: int = MINUTES_PER_TICK
    ) -> bool:
        """Base per-step roll deciding whether the selector runs at all."""
        chance = base_event_chance(snapshot.activity, minutes)
        return chance > 0 and self._rng.random() < chance

    def is_eligible(self, template: EventTemplate, snapshot: StateSnapshot) -> bool:
        location = snapshot.location
        if (
            template.location_name is not None
            and location.name != template.location_name
        ):
            return False
        if template.location_tag is not None and not location.has_tag(
            template.location_tag
        ):
            return False
        if not self._cooldowns.is_ready(
            template.event_id, template.cooldown_ticks, snapshot.tick
        ):
            return False
        if not self._evaluator.all_hold(template.required_conditions, snapshot):
            return False
        if self._evaluator.any_hold(template.excluded_conditions, snapshot):
            return False
        return all(
            self._situations.gate(name, snapshot)
            for name in template.required_situations
        )

    def eligible(self, snapshot: StateSnapshot) -> list[EventTemplate]:
        return [t for t in self._catalog.templates() if self.is_eligible(t, snapshot)]

    def effective_weight(
        self, template: EventTemplate, snapshot: StateSnapshot
    ) -> float:
        """base_weight x satisfied condition factors x situation factors."""
        weight = template.base_weight
        if weight <= 0:
            return 0.0
        for condition, factor in template.condition_weight_factors.items():
            if self._evaluator.evaluate(condition, snapshot):
                weight *= factor
        for name, situation_factor in template.situation_weight_factors.items():
            if situation_factor.scaled:
                weight *= situation_factor.factor(
                    False, self._situations.level(name, snapshot)
                )
            else:
                weight *= situation_factor.factor(
                    self._situations.gate(name, snapshot), 0.0
                )
        if not np.isfinite(weight) or weight < 0:
            logger.warning(
                "Event %r has invalid effective weight %.3f; using 0.",
                template.event_id,
                weight,
            )
            return 0.0
        return float(weight)

    def candidates(self, snapshot: StateSnapshot) -> list[tuple[float, EventTemplate]]:
        return [
            (self.effective_weight(t, snapshot), t) for t in self.eligible(snapshot)
        ]

    def select(self, snapshot: StateSnapshot) -> EventTemplate | None:
        """Draw one event for this step, or None.

        The winner's cooldown is recorded at ``snapshot.tick``.
        """
        chosen = weighted_choice(self.candidates(snapshot), self._rng)
        if chosen is None:
            logger.debug("No eligible event at tick %d.", snapshot.tick)
            return None
        self._cooldowns.record(chosen.event_id, snapshot.tick)
        logger.debug("Selected event %r at tick %d.", chosen.event_id, snapshot.tick)
        return chosen
