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

"""Outcome resolution: pick one Result of a Choice and apply it.

Effects apply in a fixed order:
  cost -> damage -> status effects -> tension operations -> reward
  -> encounter -> chained event -> abort flag
Everything that can be checked up front (the chain target included) is
resolved before the first effect is applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from survival_narrative.models.events import (
    Choice,
    EventTemplate,
    Result,
    TensionOp,
    TensionOperation,
)
from survival_narrative.tensions.registry import TensionRegistry

from .catalog import EventCatalog
from .effects import ConsumeOutcome, EffectSink
from .weighted import weighted_choice

logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    """What happened when a choice was resolved.

    Attributes:
        event_id: Event the choice belonged to.
        choice_label: Label of the chosen option.
        result: The Result that was drawn.
        resource_outcome: Outcome of the resource cost, if any.
        chained_event: Event to offer next, if the result chains.
        aborted: The current activity was aborted.
    """

    event_id: str
    choice_label: str
    result: Result
    resource_outcome: ConsumeOutcome | None = None
    chained_event: EventTemplate | None = None
    aborted: bool = False

    @property
    def text(self) -> str:
        return self.result.text

    @property
    def time_cost_minutes(self) -> int:
        return self.result.time_cost_minutes


class OutcomeResolver:
    """Resolves a chosen option into applied effects.

    Args:
        catalog: Used to look up chained events.
        tensions: Registry mutated by tension operations.
        sink: External effect contract.
        rng: Shared random generator.
    """

    def __init__(
        self,
        catalog: EventCatalog,
        tensions: TensionRegistry,
        sink: EffectSink,
        rng: np.random.Generator,
    ) -> None:
        self._catalog = catalog
        self._tensions = tensions
        self._sink = sink
        self._rng = rng

    @property
    def sink(self) -> EffectSink:
        return self._sink

    def pick_result(self, choice: Choice) -> Result:
        result = weighted_choice([(r.weight, r) for r in choice.results], self._rng)
        if result is None:
            raise RuntimeError(f"Choice {choice.label!r} has no drawable result.")
        return result

    def resolve(self, event_id: str, choice: Choice, tick: int) -> Resolution:
        """Draw one result of ``choice`` and apply its effects.

        Args:
            event_id: Event the choice belongs to.
            choice: The chosen option.
            tick: Current simulation tick (stamped on created tensions).

        Returns:
            The resolution, including any chained event to offer next.
        """
        result = self.pick_result(choice)
        chained = self._chain_target(result)
        resolution = Resolution(
            event_id=event_id,
            choice_label=choice.label,
            result=result,
            chained_event=chained,
        )

        if result.cost is not None:
            outcome = self._sink.consume_resource(
                result.cost.resource, result.cost.amount
            )
            resolution.resource_outcome = outcome
            if outcome != ConsumeOutcome.SUCCESS:
                logger.info(
                    "Event %s: cost of %.2f %s only %s.",
                    event_id,
                    result.cost.amount,
                    result.cost.resource.value,
                    outcome.value,
                )

        if result.damage is not None:
            self._sink.apply_damage(
                result.damage.amount,
                result.damage.damage_type,
                result.damage.body_target,
            )

        for effect in result.status_effects:
            self._sink.apply_status_effect(effect)

        for op in result.tension_ops:
            self._apply_tension_op(op, tick)

        if result.reward is not None:
            self._sink.grant_reward(result.reward.pool_id, result.reward.multiplier)

        if result.encounter is not None:
            self._sink.spawn_encounter(
                result.encounter.actor_type,
                result.encounter.distance,
                result.encounter.boldness,
            )

        if result.aborts_activity:
            self._sink.abort_current_activity()
            resolution.aborted = True

        logger.debug("Resolved %s / %s: %s", event_id, choice.label, result.text)
        return resolution

    def _chain_target(self, result: Result) -> EventTemplate | None:
        if result.chain_event_id is None:
            return None
        return self._catalog.get(result.chain_event_id)

    def _apply_tension_op(self, op: TensionOperation, tick: int) -> None:
        if op.op == TensionOp.CREATE:
            self._tensions.create(
                op.type_key,
                op.amount,
                animal_type=op.animal_type,
                source_location=op.source_location,
                description=op.description,
                tick=tick,
            )
        elif op.op == TensionOp.ESCALATE:
            self._tensions.escalate(op.type_key, op.amount)
        elif op.op == TensionOp.RESOLVE:
            self._tensions.resolve(op.type_key)
        else:
            raise ValueError(f"Unknown tension operation {op.op!r}.")
