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

"""Condition evaluator: pure boolean predicates over a StateSnapshot.

evaluate() is total. An unknown condition, or a predicate that raises,
evaluates to False so that one malformed condition cannot take the
selector down with it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping

from survival_narrative.config import (
    BLOODY_HIGH,
    EXTREME_COLD_C,
    FAR_FROM_CAMP_DISTANCE,
    FULLY_WATERPROOFED,
    HAZARDOUS_TERRAIN,
    HIGH_VISIBILITY,
    HIGH_WIND,
    IMPAIRED_CAPACITY,
    LOW_BODY_TEMPERATURE_C,
    LOW_FOOD_COUNT,
    LOW_FUEL_COUNT,
    LOW_SURVIVAL_STAT,
    LOW_VISIBILITY,
    PLENTY_COUNT,
    REDUCED_CAPACITY,
    VERY_FAR_FROM_CAMP_DISTANCE,
    WATERPROOFED,
)
from survival_narrative.models.conditions import Condition
from survival_narrative.models.snapshot import (
    CAMP_WORK_ACTIVITIES,
    ActivityType,
    LocationFeature,
    LocationTag,
    StateSnapshot,
    WeatherCondition,
    WeatherFront,
)
from survival_narrative.models.tensions import TensionStage, TensionType

logger = logging.getLogger(__name__)

Predicate = Callable[[StateSnapshot], bool]

_SNOWING = frozenset(
    {
        WeatherCondition.LIGHT_SNOW,
        WeatherCondition.HEAVY_SNOW,
        WeatherCondition.BLIZZARD,
        WeatherCondition.WHITEOUT,
    }
)
_BLIZZARD = frozenset({WeatherCondition.BLIZZARD, WeatherCondition.WHITEOUT})
_RAINING = frozenset({WeatherCondition.RAINY, WeatherCondition.FREEZING_RAIN})
_WORKING = frozenset(
    {
        ActivityType.CAMP_WORK,
        ActivityType.FORAGING,
        ActivityType.HUNTING,
        ActivityType.TRACKING,
        ActivityType.BUTCHERING,
    }
)


# --- Predicate builders ---


def _activity_is(*activities: ActivityType) -> Predicate:
    allowed = frozenset(activities)
    return lambda s: s.activity in allowed


def _weather_in(conditions: frozenset[WeatherCondition]) -> Predicate:
    return lambda s: s.weather in conditions


def _feature(feature: str) -> Predicate:
    return lambda s: s.location.has_feature(feature)


def _tag(*tags: str) -> Predicate:
    return lambda s: any(s.location.has_tag(t) for t in tags)


def _has(resource: str) -> Predicate:
    return lambda s: s.inventory.count(resource) > 0


def _plenty(resource: str) -> Predicate:
    return lambda s: s.inventory.count(resource) >= PLENTY_COUNT


def _low(resource: str, limit: float) -> Predicate:
    return lambda s: 0 < s.inventory.count(resource) <= limit


def _none(resource: str) -> Predicate:
    return lambda s: s.inventory.count(resource) <= 0


def _capacity_below(name: str, limit: float) -> Predicate:
    return lambda s: s.body.capacity(name) < limit


def _survival_below(stat: str) -> Predicate:
    return lambda s: s.survival.fraction(stat) < LOW_SURVIVAL_STAT


def _tension_active(type_key: str) -> Predicate:
    def predicate(s: StateSnapshot) -> bool:
        return s.tensions is not None and s.tensions.has(type_key)

    return predicate


def _tension_stage_at_least(type_key: str, stage: TensionStage) -> Predicate:
    def predicate(s: StateSnapshot) -> bool:
        if s.tensions is None:
            return False
        current = s.tensions.stage_of(type_key)
        return current is not None and current >= stage

    return predicate


def _tension_high(type_key: str) -> Predicate:
    return _tension_stage_at_least(type_key, TensionStage.ESCALATING)


def _tension_critical(type_key: str) -> Predicate:
    return _tension_stage_at_least(type_key, TensionStage.CRITICAL)


# --- Composite location / body predicates ---


def _fire_burning(s: StateSnapshot) -> bool:
    return s.location.has_feature(LocationFeature.FIRE)


def _inside(s: StateSnapshot) -> bool:
    return s.at_camp and s.location.has_feature(LocationFeature.SHELTER)


def _in_darkness(s: StateSnapshot) -> bool:
    return not s.is_daytime and not _fire_burning(s)


def _has_light_source(s: StateSnapshot) -> bool:
    return _fire_burning(s) or s.inventory.count("torch") > 0


def _has_food(s: StateSnapshot) -> bool:
    return s.inventory.count("food") + s.inventory.count("meat") > 0


def _impaired(s: StateSnapshot) -> bool:
    return any(
        s.body.capacity(name) < IMPAIRED_CAPACITY
        for name in ("moving", "manipulation", "consciousness")
    )


def _limping(s: StateSnapshot) -> bool:
    return s.body.injured and s.body.capacity("moving") < REDUCED_CAPACITY


def _calm_before_storm(s: StateSnapshot) -> bool:
    return s.weather_front == WeatherFront.PROLONGED_BLIZZARD and s.front_phase == 0


DEFAULT_PREDICATES: dict[Condition, Predicate] = {
    # Time
    Condition.IS_DAYTIME: lambda s: s.is_daytime,
    Condition.NIGHT: lambda s: not s.is_daytime,
    # Activity
    Condition.TRAVELING: _activity_is(ActivityType.TRAVELING),
    Condition.WORKING: lambda s: s.activity in _WORKING,
    Condition.FORAGING: _activity_is(ActivityType.FORAGING),
    Condition.HUNTING: _activity_is(ActivityType.HUNTING, ActivityType.TRACKING),
    Condition.BUTCHERING: _activity_is(ActivityType.BUTCHERING),
    Condition.EATING: _activity_is(ActivityType.EATING),
    Condition.IS_SLEEPING: _activity_is(ActivityType.SLEEPING),
    Condition.AWAKE: lambda s: s.activity != ActivityType.SLEEPING,
    Condition.IS_CAMP_WORK: lambda s: s.activity in CAMP_WORK_ACTIVITIES,
    Condition.IS_EXPEDITION: lambda s: s.on_expedition,
    # Camp / expedition
    Condition.AT_CAMP: lambda s: s.at_camp,
    Condition.ON_EXPEDITION: lambda s: s.on_expedition,
    Condition.FAR_FROM_CAMP: (
        lambda s: s.location.distance_from_camp >= FAR_FROM_CAMP_DISTANCE
    ),
    Condition.VERY_FAR_FROM_CAMP: (
        lambda s: s.location.distance_from_camp >= VERY_FAR_FROM_CAMP_DISTANCE
    ),
    # Weather
    Condition.IS_CLEAR: lambda s: s.weather == WeatherCondition.CLEAR,
    Condition.IS_MISTY: lambda s: s.weather == WeatherCondition.MISTY,
    Condition.IS_SNOWING: _weather_in(_SNOWING),
    Condition.IS_BLIZZARD: _weather_in(_BLIZZARD),
    Condition.IS_RAINING: _weather_in(_RAINING),
    Condition.IS_STORMY: lambda s: s.weather == WeatherCondition.STORMY,
    Condition.HIGH_WIND: lambda s: s.wind >= HIGH_WIND,
    Condition.EXTREMELY_COLD: lambda s: s.air_temperature_c <= EXTREME_COLD_C,
    Condition.CALM_BEFORE_THE_STORM: _calm_before_storm,
    # Location
    Condition.OUTSIDE: lambda s: not _inside(s),
    Condition.INSIDE: _inside,
    Condition.FIRE_BURNING: _fire_burning,
    Condition.NEAR_FIRE: lambda s: _fire_burning(s) and s.at_camp,
    Condition.HAS_SHELTER: _feature(LocationFeature.SHELTER),
    Condition.NO_SHELTER: lambda s: not s.location.has_feature(LocationFeature.SHELTER),
    Condition.NEAR_WATER: _feature(LocationFeature.WATER),
    Condition.FROZEN_WATER: _feature(LocationFeature.FROZEN_WATER),
    Condition.HAS_CARCASS: _feature(LocationFeature.CARCASS),
    Condition.HAS_ACTIVE_SNARES: _feature(LocationFeature.SNARES),
    Condition.HAS_FUEL_FORAGE: _feature(LocationFeature.FUEL_FORAGE),
    Condition.IN_ANIMAL_TERRITORY: _tag(
        LocationTag.ANIMAL_TERRITORY,
        LocationTag.PREDATOR_TERRITORY,
        LocationTag.PREY_TERRITORY,
    ),
    Condition.HAS_PREDATORS: _tag(LocationTag.PREDATOR_TERRITORY),
    Condition.IS_FOREST: _tag(LocationTag.FOREST),
    Condition.NEAR_MOUNTAINS: _tag(LocationTag.MOUNTAIN),
    Condition.HAS_ESCAPE_TERRAIN: _tag(LocationTag.ESCAPE_TERRAIN),
    Condition.CORNERED: _tag(LocationTag.CORNERED),
    Condition.HIGH_VISIBILITY: lambda s: s.location.visibility >= HIGH_VISIBILITY,
    Condition.LOW_VISIBILITY: lambda s: s.location.visibility <= LOW_VISIBILITY,
    Condition.IN_DARKNESS: _in_darkness,
    Condition.HAS_LIGHT_SOURCE: _has_light_source,
    Condition.HAZARDOUS_TERRAIN: (
        lambda s: s.location.terrain_hazard >= HAZARDOUS_TERRAIN
    ),
    # Inventory
    Condition.HAS_FOOD: _has_food,
    Condition.HAS_MEAT: _has("meat"),
    Condition.HAS_FUEL: _has("fuel"),
    Condition.HAS_TINDER: _has("tinder"),
    Condition.HAS_WATER: _has("water"),
    Condition.HAS_MEDICINE: _has("medicine"),
    Condition.HAS_PLANT_FIBER: _has("plant_fiber"),
    Condition.HAS_FUEL_PLENTY: _plenty("fuel"),
    Condition.HAS_FOOD_PLENTY: _plenty("food"),
    Condition.LOW_ON_FUEL: _low("fuel", LOW_FUEL_COUNT),
    Condition.LOW_ON_FOOD: _low("food", LOW_FOOD_COUNT),
    Condition.NO_FUEL: _none("fuel"),
    Condition.NO_FOOD: lambda s: not _has_food(s),
    Condition.HAS_WEAPON: lambda s: s.inventory.has_weapon,
    Condition.HAS_FIRESTARTER: lambda s: s.inventory.has_firestarter,
    Condition.WATERPROOFED: lambda s: s.inventory.waterproofing >= WATERPROOFED,
    Condition.FULLY_WATERPROOFED: (
        lambda s: s.inventory.waterproofing >= FULLY_WATERPROOFED
    ),
    # Body
    Condition.INJURED: lambda s: s.body.injured,
    Condition.SLOW: _capacity_below("moving", REDUCED_CAPACITY),
    Condition.IMPAIRED: _impaired,
    Condition.LIMPING: _limping,
    Condition.CLUMSY: _capacity_below("manipulation", REDUCED_CAPACITY),
    Condition.FOGGY: _capacity_below("consciousness", REDUCED_CAPACITY),
    Condition.WINDED: _capacity_below("breathing", REDUCED_CAPACITY),
    Condition.LOW_CALORIES: _survival_below("calories"),
    Condition.LOW_HYDRATION: _survival_below("hydration"),
    Condition.LOW_TEMPERATURE: (
        lambda s: s.survival.body_temperature_c < LOW_BODY_TEMPERATURE_C
    ),
    Condition.PLAYER_BLOODY: lambda s: s.body.has_effect("Bloody"),
    Condition.PLAYER_BLOODY_HIGH: (
        lambda s: s.body.effect_severity("Bloody") >= BLOODY_HIGH
    ),
    # Tensions
    Condition.STALKED: _tension_active(TensionType.STALKED),
    Condition.STALKED_HIGH: _tension_high(TensionType.STALKED),
    Condition.STALKED_CRITICAL: _tension_critical(TensionType.STALKED),
    Condition.HUNTED: _tension_active(TensionType.HUNTED),
    Condition.SMOKE_SPOTTED: _tension_active(TensionType.SMOKE_SPOTTED),
    Condition.INFESTED: _tension_active(TensionType.INFESTED),
    Condition.WOUND_UNTREATED: _tension_active(TensionType.WOUND_UNTREATED),
    Condition.WOUND_UNTREATED_HIGH: _tension_high(TensionType.WOUND_UNTREATED),
    Condition.SHELTER_WEAKENED: _tension_active(TensionType.SHELTER_WEAKENED),
    Condition.FOOD_SCENT_STRONG: _tension_active(TensionType.FOOD_SCENT_STRONG),
    Condition.DISTURBED: _tension_active(TensionType.DISTURBED),
    Condition.DISTURBED_HIGH: _tension_high(TensionType.DISTURBED),
    Condition.DISTURBED_CRITICAL: _tension_critical(TensionType.DISTURBED),
    Condition.WOUNDED_PREY: _tension_active(TensionType.WOUNDED_PREY),
    Condition.WOUNDED_PREY_HIGH: _tension_high(TensionType.WOUNDED_PREY),
    Condition.WOUNDED_PREY_CRITICAL: _tension_critical(TensionType.WOUNDED_PREY),
    Condition.PACK_NEARBY: _tension_active(TensionType.PACK_NEARBY),
    Condition.PACK_NEARBY_HIGH: _tension_high(TensionType.PACK_NEARBY),
    Condition.PACK_NEARBY_CRITICAL: _tension_critical(TensionType.PACK_NEARBY),
    Condition.CLAIMED_TERRITORY: _tension_active(TensionType.CLAIMED_TERRITORY),
    Condition.CLAIMED_TERRITORY_HIGH: _tension_high(TensionType.CLAIMED_TERRITORY),
    Condition.HERD_NEARBY: _tension_active(TensionType.HERD_NEARBY),
    Condition.HERD_NEARBY_URGENT: _tension_high(TensionType.HERD_NEARBY),
    Condition.DEADLY_COLD: _tension_active(TensionType.DEADLY_COLD),
    Condition.DEADLY_COLD_CRITICAL: _tension_critical(TensionType.DEADLY_COLD),
    Condition.FEVER_RISING: _tension_active(TensionType.FEVER_RISING),
    Condition.FEVER_HIGH: _tension_high(TensionType.FEVER_RISING),
    Condition.FEVER_CRITICAL: _tension_critical(TensionType.FEVER_RISING),
    Condition.MAMMOTH_TRACKED: _tension_active(TensionType.MAMMOTH_TRACKED),
    Condition.MAMMOTH_TRACKED_HIGH: _tension_high(TensionType.MAMMOTH_TRACKED),
    Condition.TRAP_LINE_ACTIVE: _tension_active(TensionType.TRAP_LINE_ACTIVE),
    Condition.SABER_TOOTH_STALKED: _tension_active(TensionType.SABER_TOOTH_STALKED),
}


class ConditionEvaluator:
    """Evaluates condition identifiers against a snapshot.

    Holds a predicate table seeded from DEFAULT_PREDICATES. Extra
    predicates can be registered per instance, keyed by a Condition or
    by any string identifier.

    Args:
        predicates: Optional predicates added on top of the defaults.
    """

    def __init__(self, predicates: Mapping[str, Predicate] | None = None) -> None:
        self._predicates: dict[str, Predicate] = dict(DEFAULT_PREDICATES)
        if predicates:
            self._predicates.update(predicates)

    def register(self, condition: str, predicate: Predicate) -> None:
        """Add or replace the predicate for a condition identifier."""
        self._predicates[condition] = predicate

    def knows(self, condition: str) -> bool:
        return condition in self._predicates

    def evaluate(self, condition: str, snapshot: StateSnapshot) -> bool:
        """Evaluate one condition. Never raises.

        Args:
            condition: A Condition member or a registered string id.
            snapshot: The current state snapshot.

        Returns:
            The predicate's result, or False if the condition is unknown
            or its predicate raised.
        """
        predicate = self._predicates.get(condition)
        if predicate is None:
            logger.warning("Unknown condition %r evaluated as false.", condition)
            return False
        try:
            return bool(predicate(snapshot))
        except Exception:
            logger.warning(
                "Condition %r raised; evaluated as false.", condition, exc_info=True
            )
            return False

    def all_hold(self, conditions: Iterable[str], snapshot: StateSnapshot) -> bool:
        return all(self.evaluate(c, snapshot) for c in conditions)

    def any_hold(self, conditions: Iterable[str], snapshot: StateSnapshot) -> bool:
        return any(self.evaluate(c, snapshot) for c in conditions)
