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

"""Event template, choice and result definitions.

Templates are declarative records registered at load time and never
mutated afterwards. Only their cooldown state, held by the
CooldownTracker, changes at runtime.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np

from .conditions import Condition


class ResourceType(str, enum.Enum):
    FUEL = "fuel"
    TINDER = "tinder"
    FOOD = "food"
    WATER = "water"
    PLANT_FIBER = "plant_fiber"
    MEDICINE = "medicine"


class DamageType(str, enum.Enum):
    BLUNT = "blunt"
    SHARP = "sharp"
    PIERCE = "pierce"
    COLD = "cold"
    INTERNAL = "internal"


class TensionOp(str, enum.Enum):
    CREATE = "create"
    ESCALATE = "escalate"
    RESOLVE = "resolve"


@dataclass(frozen=True)
class ResourceCost:
    resource: ResourceType
    amount: float

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Resource cost must be >= 0, got {self.amount}.")


@dataclass(frozen=True)
class DamageSpec:
    """Damage on a 0-1 scale, where 1.0 destroys a tissue layer."""

    amount: float
    damage_type: DamageType = DamageType.BLUNT
    body_target: str | None = None


@dataclass(frozen=True)
class StatusEffectSpec:
    """A status effect to hand to the effects subsystem.

    Attributes:
        kind: Effect name (e.g. "Shaken", "Paranoid", "Exhausted").
        severity: 0.0-1.0.
        duration_minutes: None for effects that clear on their own terms.
    """

    kind: str
    severity: float = 0.1
    duration_minutes: int | None = None


@dataclass(frozen=True)
class RewardGrant:
    pool_id: str
    multiplier: float = 1.0


@dataclass(frozen=True)
class EncounterSpec:
    actor_type: str
    distance: float = 20.0
    boldness: float = 0.5


@dataclass(frozen=True)
class TensionOperation:
    """A create / escalate / resolve instruction for the tension registry.

    Attributes:
        op: Which operation to perform.
        type_key: Tension type.
        amount: Initial severity for CREATE, delta for ESCALATE.
        animal_type: CREATE only.
        source_location: CREATE only.
        description: CREATE only.
    """

    op: TensionOp
    type_key: str
    amount: float = 0.0
    animal_type: str | None = None
    source_location: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.type_key:
            raise ValueError("Tension operation requires a type_key.")
        if self.op == TensionOp.CREATE and not 0.0 < self.amount <= 1.0:
            raise ValueError(
                f"Initial severity must be within (0, 1], got {self.amount}."
            )

    @classmethod
    def create(
        cls,
        type_key: str,
        severity: float,
        animal_type: str | None = None,
        source_location: str | None = None,
        description: str | None = None,
    ) -> TensionOperation:
        return cls(
            TensionOp.CREATE,
            type_key,
            severity,
            animal_type=animal_type,
            source_location=source_location,
            description=description,
        )

    @classmethod
    def escalate(cls, type_key: str, amount: float) -> TensionOperation:
        return cls(TensionOp.ESCALATE, type_key, amount)

    @classmethod
    def resolve(cls, type_key: str) -> TensionOperation:
        return cls(TensionOp.RESOLVE, type_key)


@dataclass(frozen=True)
class Result:
    """One weighted consequence of a choice.

    Attributes:
        text: Narrative text shown after resolution.
        weight: Relative probability within the choice (> 0).
        time_cost_minutes: Simulated minutes the outcome takes.
        cost: Resources consumed.
        damage: Damage dealt to the player.
        status_effects: Effects applied to the player.
        tension_ops: Tension operations, applied in order.
        reward: Reward pool granted.
        encounter: Encounter to spawn.
        chain_event_id: Event offered immediately after this one.
        aborts_activity: Cut the current activity short.
    """

    text: str
    weight: float = 1.0
    time_cost_minutes: int = 0
    cost: ResourceCost | None = None
    damage: DamageSpec | None = None
    status_effects: tuple[StatusEffectSpec, ...] = ()
    tension_ops: tuple[TensionOperation, ...] = ()
    reward: RewardGrant | None = None
    encounter: EncounterSpec | None = None
    chain_event_id: str | None = None
    aborts_activity: bool = False

    def __post_init__(self) -> None:
        if not np.isfinite(self.weight) or self.weight <= 0:
            raise ValueError(f"Result weight must be > 0, got {self.weight}.")
        if self.time_cost_minutes < 0:
            raise ValueError("Result time cost cannot be negative.")


@dataclass(frozen=True)
class Choice:
    label: str
    text: str = ""
    results: tuple[Result, ...] = ()
    required_conditions: frozenset[Condition] = frozenset()

    def __post_init__(self) -> None:
        if not self.results:
            raise ValueError(f"Choice {self.label!r} has no results.")


@dataclass(frozen=True)
class SituationFactor:
    """Weight multiplier driven by a named situation.

    When ``scaled`` is False the multiplier applies in full if the
    situation's gate holds. When True it is interpolated by the
    situation level: 1.0 at level 0, ``multiplier`` at level 1.
    """

    multiplier: float
    scaled: bool = False

    def __post_init__(self) -> None:
        if not np.isfinite(self.multiplier):
            raise ValueError(
                f"Situation multiplier must be finite, got {self.multiplier}."
            )

    def factor(self, gate: bool, level: float) -> float:
        if self.scaled:
            return 1.0 + (self.multiplier - 1.0) * level
        return self.multiplier if gate else 1.0


@dataclass(frozen=True)
class EventTemplate:
    """Declarative event definition.

    Attributes:
        event_id: Unique identifier within the catalog.
        title: Display title.
        text: Narrative text.
        base_weight: Selection weight before modifiers (>= 0). Zero means
            the event is only reachable by chaining or intentional triggers.
        required_conditions: All must hold.
        excluded_conditions: None may hold.
        required_situations: Situation gates that must all hold.
        condition_weight_factors: Multiplier per satisfied condition.
        situation_weight_factors: Multiplier per situation.
        location_name: Exact location name scope.
        location_tag: Location tag scope.
        cooldown_ticks: Minimum ticks between random selections.
        choices: Choices offered to the player, in display order.
    """

    event_id: str
    title: str
    text: str = ""
    base_weight: float = 1.0
    required_conditions: frozenset[Condition] = frozenset()
    excluded_conditions: frozenset[Condition] = frozenset()
    required_situations: frozenset[str] = frozenset()
    condition_weight_factors: dict[Condition, float] = field(default_factory=dict)
    situation_weight_factors: dict[str, SituationFactor] = field(
        default_factory=dict
    )
    location_name: str | None = None
    location_tag: str | None = None
    cooldown_ticks: int | None = None
    choices: tuple[Choice, ...] = ()

    def __post_init__(self) -> None:
        if not self.event_id:
            raise ValueError("Event template requires an event_id.")
        if not np.isfinite(self.base_weight) or self.base_weight < 0:
            raise ValueError(
                f"Event {self.event_id!r} has invalid base weight {self.base_weight}."
            )
        for condition, factor in self.condition_weight_factors.items():
            if not np.isfinite(factor):
                raise ValueError(
                    f"Event {self.event_id!r} has non-finite factor {factor} "
                    f"for {condition}."
                )
        if self.cooldown_ticks is not None and self.cooldown_ticks < 0:
            raise ValueError(f"Event {self.event_id!r} has a negative cooldown.")

    @property
    def is_sentinel(self) -> bool:
        """Zero-weight events never win a random draw."""
        return self.base_weight == 0
