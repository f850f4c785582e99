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

"""Effect contracts toward the external subsystems.

Implementations:
  - InMemoryEffectSink: records every call (testing, HTTP surface)
  - Game-side sinks wrap the body, inventory and encounter subsystems.
"""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field

from survival_narrative.models.events import (
    DamageSpec,
    DamageType,
    EncounterSpec,
    ResourceType,
    RewardGrant,
    StatusEffectSpec,
)


class ConsumeOutcome(str, enum.Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


class EffectSink(abc.ABC):
    """Narrow interface the resolver uses to mutate the outside world."""

    @abc.abstractmethod
    def apply_damage(
        self,
        amount: float,
        damage_type: DamageType,
        body_target: str | None = None,
    ) -> None:
        """Deal damage to the player.

        Args:
            amount: Damage on a 0-1 scale.
            damage_type: Kind of damage.
            body_target: Body part to hit; None lets the body pick.
        """

    @abc.abstractmethod
    def apply_status_effect(self, effect: StatusEffectSpec) -> None:
        """Apply a status effect to the player."""

    @abc.abstractmethod
    def consume_resource(self, resource: ResourceType, amount: float) -> ConsumeOutcome:
        """Remove resources from the inventory.

        Never raises on a shortfall: consumption is clamped to what is
        available and the outcome reports how much was covered.
        """

    @abc.abstractmethod
    def grant_reward(self, pool_id: str, multiplier: float) -> None:
        """Grant items from a reward pool."""

    @abc.abstractmethod
    def spawn_encounter(
        self, actor_type: str, distance: float, boldness: float
    ) -> None:
        """Start an encounter with an animal or actor."""

    @abc.abstractmethod
    def abort_current_activity(self) -> None:
        """Cut the player's current activity short."""


@dataclass
class InMemoryEffectSink(EffectSink):
    """Effect sink that records calls and tracks a resource ledger.

    Attributes:
        resources: Available resources, keyed by ResourceType value.
        damage: Damage dealt, in order.
        status_effects: Status effects applied, in order.
        consumed: (resource, requested, consumed) per consume call.
        rewards: Reward grants, in order.
        encounters: Encounters spawned, in order.
        aborts: Number of abort calls.
        calls: Name of every contract method called, in order.
    """

    resources: dict[str, float] = field(default_factory=dict)
    damage: list[DamageSpec] = field(default_factory=list)
    status_effects: list[StatusEffectSpec] = field(default_factory=list)
    consumed: list[tuple[str, float, float]] = field(default_factory=list)
    rewards: list[RewardGrant] = field(default_factory=list)
    encounters: list[EncounterSpec] = field(default_factory=list)
    aborts: int = 0
    calls: list[str] = field(default_factory=list)

    def apply_damage(
        self,
        amount: float,
        damage_type: DamageType,
        body_target: str | None = None,
    ) -> None:
        self.calls.append("apply_damage")
        self.damage.append(DamageSpec(amount, damage_type, body_target))

    def apply_status_effect(self, effect: StatusEffectSpec) -> None:
        self.calls.append("apply_status_effect")
        self.status_effects.append(effect)

    def consume_resource(self, resource: ResourceType, amount: float) -> ConsumeOutcome:
        self.calls.append("consume_resource")
        key = ResourceType(resource).value
        available = self.resources.get(key, 0.0)
        taken = min(available, amount)
        self.resources[key] = available - taken
        self.consumed.append((key, amount, taken))
        if taken >= amount:
            return ConsumeOutcome.SUCCESS
        if taken > 0:
            return ConsumeOutcome.PARTIAL
        return ConsumeOutcome.FAILURE

    def grant_reward(self, pool_id: str, multiplier: float) -> None:
        self.calls.append("grant_reward")
        self.rewards.append(RewardGrant(pool_id, multiplier))

    def spawn_encounter(
        self, actor_type: str, distance: float, boldness: float
    ) -> None:
        self.calls.append("spawn_encounter")
        self.encounters.append(EncounterSpec(actor_type, distance, boldness))

    def abort_current_activity(self) -> None:
        self.calls.append("abort_current_activity")
        self.aborts += 1

    def clear(self) -> None:
        """Forget recorded calls; the resource ledger is kept."""
        self.damage.clear()
        self.status_effects.clear()
        self.consumed.clear()
        self.rewards.clear()
        self.encounters.clear()
        self.aborts = 0
        self.calls.clear()
