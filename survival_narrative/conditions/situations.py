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

"""Situations: named composite predicates built from primitive conditions.

Each situation exposes a boolean gate and a continuous level in [0, 1].
Levels are weighted sums of indicator contributions with the total
clamped to 1.0. Situations are stateless and never mutate the snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from survival_narrative.config import (
    CRISIS_BLOOD,
    LOW_WATER_LITERS,
    SERIOUS_THREAT_SEVERITY,
    SOAKED_WETNESS,
    VULNERABLE_BLOOD,
)
from survival_narrative.models.conditions import Condition as C
from survival_narrative.models.snapshot import ActivityType, StateSnapshot
from survival_narrative.models.tensions import TensionType

from .evaluator import ConditionEvaluator

logger = logging.getLogger(__name__)

GateFn = Callable[[ConditionEvaluator, StateSnapshot], bool]
LevelFn = Callable[[ConditionEvaluator, StateSnapshot], float]


class SituationName:
    """Built-in situation names."""

    ATTRACTIVE_TO_PREDATORS = "attractive_to_predators"
    FOLLOWING_ANIMAL_SIGNS = "following_animal_signs"
    VULNERABLE = "vulnerable"
    SUPPLY_PRESSURE = "supply_pressure"
    EXPOSED = "exposed"
    HARSH_CONDITIONS = "harsh_conditions"
    UNDER_THREAT = "under_threat"
    UNDER_SERIOUS_THREAT = "under_serious_threat"
    IN_CRISIS = "in_crisis"
    FAVORABLE_CONDITIONS = "favorable_conditions"
    IN_DARKNESS = "in_darkness"
    DETECTABLE = "detectable"
    GOOD_FOR_STEALTH = "good_for_stealth"
    CRITICALLY_DEPLETED = "critically_depleted"
    EXTREME_COLD_CRISIS = "extreme_cold_crisis"
    HAS_UNTREATED_WOUND = "has_untreated_wound"


@dataclass(frozen=True)
class Situation:
    """A named composite predicate.

    Attributes:
        name: Identifier referenced by templates.
        gate: Boolean form.
        level: Continuous form. When omitted the level is 1.0 while the
            gate holds and 0.0 otherwise.
    """

    name: str
    gate: GateFn
    level: LevelFn | None = None


def _sum_levels(*contributions: float) -> float:
    parts = np.clip(np.asarray(contributions, dtype=float), 0.0, 1.0)
    return float(np.clip(parts.sum(), 0.0, 1.0))


def _wetness(s: StateSnapshot) -> float:
    return s.body.wetness


def _tension(s: StateSnapshot, type_key: str) -> bool:
    return s.tensions is not None and s.tensions.has(type_key)


def _tension_above(s: StateSnapshot, type_key: str, threshold: float) -> bool:
    return s.tensions is not None and s.tensions.has_above(type_key, threshold)


# --- Predator attraction ---


def attractive_to_predators(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        ev.evaluate(C.HAS_MEAT, s)
        or s.body.has_effect("Bleeding")
        or s.body.has_effect("Bloody")
        or _tension(s, TensionType.FOOD_SCENT_STRONG)
    )


def predator_attraction_level(ev: ConditionEvaluator, s: StateSnapshot) -> float:
    return _sum_levels(
        0.3 if ev.evaluate(C.HAS_MEAT, s) else 0.0,
        0.4 if s.body.has_effect("Bleeding") else 0.0,
        0.3 if _tension(s, TensionType.FOOD_SCENT_STRONG) else 0.0,
        0.2 if ev.evaluate(C.INJURED, s) else 0.0,
        s.body.effect_severity("Bloody") * 0.3,
    )


def following_animal_signs(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return s.activity == ActivityType.TRACKING


# --- Vulnerability ---


def vulnerable(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        ev.any_hold((C.INJURED, C.SLOW, C.IMPAIRED), s)
        or not s.inventory.has_weapon
        or s.body.blood < VULNERABLE_BLOOD
        or _wetness(s) > SOAKED_WETNESS
    )


def vulnerability_level(ev: ConditionEvaluator, s: StateSnapshot) -> float:
    if s.body.blood < CRISIS_BLOOD:
        blood = 0.3
    elif s.body.blood < VULNERABLE_BLOOD:
        blood = 0.15
    else:
        blood = 0.0
    return _sum_levels(
        0.25 if ev.evaluate(C.INJURED, s) else 0.0,
        0.2 if ev.evaluate(C.SLOW, s) else 0.0,
        0.2 if ev.evaluate(C.IMPAIRED, s) else 0.0,
        0.15 if not s.inventory.has_weapon else 0.0,
        0.1 if ev.evaluate(C.LIMPING, s) else 0.0,
        0.1 if ev.evaluate(C.WINDED, s) else 0.0,
        blood,
        _wetness(s) * 0.2,
    )


# --- Supplies ---


def supply_pressure(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        ev.any_hold((C.LOW_ON_FUEL, C.LOW_ON_FOOD), s)
        or s.inventory.count("water") < LOW_WATER_LITERS
    )


def supply_pressure_level(ev: ConditionEvaluator, s: StateSnapshot) -> float:
    if ev.evaluate(C.NO_FUEL, s):
        fuel = 0.4
    elif ev.evaluate(C.LOW_ON_FUEL, s):
        fuel = 0.2
    else:
        fuel = 0.0
    if ev.evaluate(C.NO_FOOD, s):
        food = 0.4
    elif ev.evaluate(C.LOW_ON_FOOD, s):
        food = 0.2
    else:
        food = 0.0
    water_liters = s.inventory.count("water")
    if water_liters <= 0:
        water = 0.3
    elif water_liters < LOW_WATER_LITERS:
        water = 0.15
    else:
        water = 0.0
    return _sum_levels(fuel, food, water)


# --- Exposure ---


def exposed(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    unsheltered = ev.evaluate(C.NO_SHELTER, s) and ev.any_hold(
        (C.IS_SNOWING, C.HIGH_WIND, C.IS_RAINING), s
    )
    soaked_in_cold = _wetness(s) > SOAKED_WETNESS and ev.evaluate(
        C.EXTREMELY_COLD, s
    )
    return unsheltered or soaked_in_cold


def harsh_conditions(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return ev.any_hold((C.IS_BLIZZARD, C.IS_STORMY, C.EXTREMELY_COLD), s)


def extreme_cold_crisis(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        ev.evaluate(C.EXTREMELY_COLD, s)
        or ev.all_hold((C.IS_BLIZZARD, C.LOW_ON_FUEL), s)
        or (_wetness(s) > 0.7 and ev.evaluate(C.LOW_TEMPERATURE, s))
    )


def extreme_cold_level(ev: ConditionEvaluator, s: StateSnapshot) -> float:
    if ev.evaluate(C.NO_FUEL, s):
        fuel = 0.3
    elif ev.evaluate(C.LOW_ON_FUEL, s):
        fuel = 0.15
    else:
        fuel = 0.0
    return _sum_levels(
        0.4 if ev.evaluate(C.EXTREMELY_COLD, s) else 0.0,
        0.25 if ev.evaluate(C.IS_BLIZZARD, s) else 0.0,
        fuel,
        _wetness(s) * 0.3,
    )


# --- Danger ---


def under_threat(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        _tension(s, TensionType.STALKED)
        or _tension(s, TensionType.HUNTED)
        or _tension(s, TensionType.PACK_NEARBY)
    )


def under_serious_threat(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        _tension_above(s, TensionType.STALKED, SERIOUS_THREAT_SEVERITY)
        or _tension(s, TensionType.HUNTED)
        or _tension_above(s, TensionType.PACK_NEARBY, SERIOUS_THREAT_SEVERITY)
    )


def in_crisis(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        (vulnerable(ev, s) and under_threat(ev, s))
        or (supply_pressure(ev, s) and exposed(ev, s))
        or ev.evaluate(C.DEADLY_COLD_CRITICAL, s)
        or s.body.blood < CRISIS_BLOOD
    )


def favorable_conditions(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        ev.all_hold((C.IS_DAYTIME, C.IS_CLEAR), s)
        and not under_threat(ev, s)
        and not supply_pressure(ev, s)
    )


# --- Stealth / darkness ---


def in_darkness(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return ev.any_hold((C.NIGHT, C.IN_DARKNESS), s)


def detectable(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        attractive_to_predators(ev, s)
        or ev.evaluate(C.HIGH_VISIBILITY, s)
        or s.activity == ActivityType.TRAVELING
    )


def good_for_stealth(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return (
        ev.evaluate(C.LOW_VISIBILITY, s)
        and not attractive_to_predators(ev, s)
        and s.activity != ActivityType.TRAVELING
    )


# --- Body ---


def critically_depleted(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return ev.all_hold((C.LOW_CALORIES, C.LOW_HYDRATION), s)


def critically_depleted_level(ev: ConditionEvaluator, s: StateSnapshot) -> float:
    return _sum_levels(
        0.5 if ev.evaluate(C.LOW_CALORIES, s) else 0.0,
        0.5 if ev.evaluate(C.LOW_HYDRATION, s) else 0.0,
    )


def has_untreated_wound(ev: ConditionEvaluator, s: StateSnapshot) -> bool:
    return ev.any_hold((C.WOUND_UNTREATED, C.WOUND_UNTREATED_HIGH), s)


BUILTIN_SITUATIONS: tuple[Situation, ...] = (
    Situation(
        SituationName.ATTRACTIVE_TO_PREDATORS,
        attractive_to_predators,
        predator_attraction_level,
    ),
    Situation(SituationName.FOLLOWING_ANIMAL_SIGNS, following_animal_signs),
    Situation(SituationName.VULNERABLE, vulnerable, vulnerability_level),
    Situation(SituationName.SUPPLY_PRESSURE, supply_pressure, supply_pressure_level),
    Situation(SituationName.EXPOSED, exposed),
    Situation(SituationName.HARSH_CONDITIONS, harsh_conditions),
    Situation(
        SituationName.EXTREME_COLD_CRISIS, extreme_cold_crisis, extreme_cold_level
    ),
    Situation(SituationName.UNDER_THREAT, under_threat),
    Situation(SituationName.UNDER_SERIOUS_THREAT, under_serious_threat),
    Situation(SituationName.IN_CRISIS, in_crisis),
    Situation(SituationName.FAVORABLE_CONDITIONS, favorable_conditions),
    Situation(SituationName.IN_DARKNESS, in_darkness),
    Situation(SituationName.DETECTABLE, detectable),
    Situation(SituationName.GOOD_FOR_STEALTH, good_for_stealth),
    Situation(
        SituationName.CRITICALLY_DEPLETED,
        critically_depleted,
        critically_depleted_level,
    ),
    Situation(SituationName.HAS_UNTREATED_WOUND, has_untreated_wound),
)


class SituationCalculator:
    """Evaluates named situations. Unknown or failing situations fail closed.

    Args:
        evaluator: Condition evaluator the situations are built on.
        situations: Situations to register; defaults to BUILTIN_SITUATIONS.
    """

    def __init__(
        self,
        evaluator: ConditionEvaluator | None = None,
        situations: tuple[Situation, ...] = BUILTIN_SITUATIONS,
    ) -> None:
        self._evaluator = evaluator or ConditionEvaluator()
        self._situations: dict[str, Situation] = {}
        for situation in situations:
            self.register(situation)

    @property
    def evaluator(self) -> ConditionEvaluator:
        return self._evaluator

    def register(self, situation: Situation) -> None:
        self._situations[situation.name] = situation

    def names(self) -> list[str]:
        return sorted(self._situations)

    def gate(self, name: str, snapshot: StateSnapshot) -> bool:
        situation = self._situations.get(name)
        if situation is None:
            logger.warning("Unknown situation %r evaluated as false.", name)
            return False
        try:
            return bool(situation.gate(self._evaluator, snapshot))
        except Exception:
            logger.warning(
                "Situation %r raised; evaluated as false.", name, exc_info=True
            )
            return False

    def level(self, name: str, snapshot: StateSnapshot) -> float:
        """Return the situation level in [0, 1]; 0.0 on failure."""
        situation = self._situations.get(name)
        if situation is None:
            logger.warning("Unknown situation %r has level 0.", name)
            return 0.0
        if situation.level is None:
            return 1.0 if self.gate(name, snapshot) else 0.0
        try:
            value = situation.level(self._evaluator, snapshot)
        except Exception:
            logger.warning("Situation level %r raised; level 0.", name, exc_info=True)
            return 0.0
        if not np.isfinite(value):
            logger.warning("Situation level %r is %r; level 0.", name, value)
            return 0.0
        return float(np.clip(value, 0.0, 1.0))
