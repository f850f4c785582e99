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

"""Tension model: persistent, severity-tracked dangers.

A tension's stage is a pure function of (type_key, severity) through a
per-type threshold table. Severity is always held in [0, 1].
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np

from survival_narrative.config import (
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_ESCALATING_THRESHOLD,
    DEFAULT_TENSION_DECAY_PER_HOUR,
    FEVER_CAMP_DECAY_MULTIPLIER,
)


class TensionStage(enum.IntEnum):
    """Discrete severity bands, ordered from mildest to most severe."""

    BUILDING = 1
    ESCALATING = 2
    CRITICAL = 3


class TensionType:
    """Tension type keys used by built-in content."""

    STALKED = "Stalked"
    HUNTED = "Hunted"
    SMOKE_SPOTTED = "SmokeSpotted"
    INFESTED = "Infested"
    WOUND_UNTREATED = "WoundUntreated"
    SHELTER_WEAKENED = "ShelterWeakened"
    FOOD_SCENT_STRONG = "FoodScentStrong"
    DISTURBED = "Disturbed"
    WOUNDED_PREY = "WoundedPrey"
    PACK_NEARBY = "PackNearby"
    CLAIMED_TERRITORY = "ClaimedTerritory"
    HERD_NEARBY = "HerdNearby"
    DEADLY_COLD = "DeadlyCold"
    FEVER_RISING = "FeverRising"
    TRAP_LINE_ACTIVE = "TrapLineActive"
    MAMMOTH_TRACKED = "MammothTracked"
    FRESH_TRAIL = "FreshTrail"
    SCAVENGERS_WAITING = "ScavengersWaiting"
    SABER_TOOTH_STALKED = "SaberToothStalked"


@dataclass(frozen=True)
class TensionProfile:
    """Per-type tuning: stage cut points and passive decay.

    Attributes:
        escalating_at: Severity at which the stage becomes ESCALATING.
        critical_at: Severity at which the stage becomes CRITICAL.
        decay_per_hour: Passive severity loss per in-game hour.
        decays_at_camp: Whether decay continues while the player is at camp.
        camp_decay_multiplier: Decay rate multiplier applied at camp.
    """

    escalating_at: float = DEFAULT_ESCALATING_THRESHOLD
    critical_at: float = DEFAULT_CRITICAL_THRESHOLD
    decay_per_hour: float = DEFAULT_TENSION_DECAY_PER_HOUR
    decays_at_camp: bool = True
    camp_decay_multiplier: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 < self.escalating_at < self.critical_at <= 1.0:
            raise ValueError(
                "Thresholds must satisfy 0 < escalating_at < critical_at <= 1, "
                f"got {self.escalating_at} / {self.critical_at}."
            )

    def stage_for(self, severity: float) -> TensionStage:
        if severity >= self.critical_at:
            return TensionStage.CRITICAL
        if severity >= self.escalating_at:
            return TensionStage.ESCALATING
        return TensionStage.BUILDING


DEFAULT_PROFILE = TensionProfile()

# Threshold table. The *_HIGH / *_CRITICAL conditions are stage checks
# against these cut points.
TENSION_PROFILES: dict[str, TensionProfile] = {
    TensionType.STALKED: TensionProfile(0.4, 0.7, decay_per_hour=0.05),
    TensionType.HUNTED: TensionProfile(0.4, 0.7, decay_per_hour=0.02),
    TensionType.SMOKE_SPOTTED: TensionProfile(
        0.4, 0.7, decay_per_hour=0.03, decays_at_camp=False
    ),
    TensionType.INFESTED: TensionProfile(
        0.4, 0.7, decay_per_hour=0.0, decays_at_camp=False
    ),
    TensionType.WOUND_UNTREATED: TensionProfile(
        0.3, 0.6, decay_per_hour=0.0, decays_at_camp=False
    ),
    TensionType.SHELTER_WEAKENED: TensionProfile(
        0.4, 0.7, decay_per_hour=0.0, decays_at_camp=False
    ),
    TensionType.FOOD_SCENT_STRONG: TensionProfile(0.4, 0.7, decay_per_hour=0.10),
    TensionType.DISTURBED: TensionProfile(0.5, 0.7, decay_per_hour=0.02),
    TensionType.WOUNDED_PREY: TensionProfile(0.5, 0.7, decay_per_hour=0.08),
    TensionType.PACK_NEARBY: TensionProfile(0.4, 0.7, decay_per_hour=0.03),
    TensionType.CLAIMED_TERRITORY: TensionProfile(
        0.5, 0.8, decay_per_hour=0.0, decays_at_camp=False
    ),
    TensionType.HERD_NEARBY: TensionProfile(0.3, 0.6, decay_per_hour=0.15),
    TensionType.DEADLY_COLD: TensionProfile(
        0.3, 0.6, decay_per_hour=0.0, decays_at_camp=False
    ),
    TensionType.FEVER_RISING: TensionProfile(
        0.4,
        0.7,
        decay_per_hour=0.01,
        camp_decay_multiplier=FEVER_CAMP_DECAY_MULTIPLIER,
    ),
    TensionType.TRAP_LINE_ACTIVE: TensionProfile(
        0.4, 0.7, decay_per_hour=0.02, decays_at_camp=False
    ),
    TensionType.MAMMOTH_TRACKED: TensionProfile(0.3, 0.6, decay_per_hour=0.01),
    TensionType.FRESH_TRAIL: TensionProfile(0.4, 0.7, decay_per_hour=0.15),
    TensionType.SCAVENGERS_WAITING: TensionProfile(0.4, 0.7, decay_per_hour=0.05),
    TensionType.SABER_TOOTH_STALKED: TensionProfile(
        0.4, 0.7, decay_per_hour=0.02, decays_at_camp=False
    ),
}


def profile_for(type_key: str) -> TensionProfile:
    """Return the profile for a tension type, falling back to the default."""
    return TENSION_PROFILES.get(type_key, DEFAULT_PROFILE)


def stage_of(type_key: str, severity: float) -> TensionStage:
    """Map a severity to its stage under the type's threshold table.

    Monotonic: for s1 < s2, stage_of(t, s1) <= stage_of(t, s2).
    """
    return profile_for(type_key).stage_for(clamp_severity(severity))


def clamp_severity(value: float) -> float:
    return float(np.clip(value, 0.0, 1.0))


@dataclass
class ActiveTension:
    """A persistent danger currently in play.

    Attributes:
        type_key: Tension type; at most one active tension per key.
        severity: 0.0-1.0, clamped on every write.
        animal_type: Associated animal/predator, if any.
        source_location: Where the tension originated, if relevant.
        description: Free-text detail for narrative use.
        created_tick: Simulation tick the tension was created at.
    """

    type_key: str
    severity: float = 0.0
    animal_type: str | None = None
    source_location: str | None = None
    description: str | None = None
    created_tick: int = 0

    def __post_init__(self) -> None:
        self.severity = clamp_severity(self.severity)

    @property
    def stage(self) -> TensionStage:
        return stage_of(self.type_key, self.severity)

    @property
    def profile(self) -> TensionProfile:
        return profile_for(self.type_key)


@dataclass(frozen=True)
class StageChange:
    """Net stage transition of one tension over one step.

    ``previous``/``current`` are None when the tension was absent.
    ``tension`` is a copy of the tension's last known state.
    """

    type_key: str
    previous: TensionStage | None
    current: TensionStage | None
    tension: ActiveTension = field(compare=False)

    @property
    def is_creation(self) -> bool:
        return self.previous is None and self.current is not None

    @property
    def is_resolution(self) -> bool:
        return self.previous is not None and self.current is None

    @property
    def is_escalation(self) -> bool:
        return (
            self.previous is not None
            and self.current is not None
            and self.current > self.previous
        )

    @property
    def is_deescalation(self) -> bool:
        return (
            self.previous is not None
            and self.current is not None
            and self.current < self.previous
        )
