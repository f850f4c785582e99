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

"""Read-only state snapshot consumed by conditions, situations and triggers.

The snapshot is built by the simulation loop once per step from the
external subsystems (body, inventory, world, weather). The engine never
writes to it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from survival_narrative.tensions.registry import TensionRegistry


class ActivityType(str, enum.Enum):
    IDLE = "idle"
    SLEEPING = "sleeping"
    RESTING = "resting"
    CAMP_WORK = "camp_work"
    EATING = "eating"
    TRAVELING = "traveling"
    FORAGING = "foraging"
    HUNTING = "hunting"
    TRACKING = "tracking"
    BUTCHERING = "butchering"
    FIGHTING = "fighting"
    ENCOUNTER = "encounter"


# Activities that count as camp chores.
CAMP_WORK_ACTIVITIES = frozenset(
    {ActivityType.CAMP_WORK, ActivityType.EATING, ActivityType.RESTING}
)


class WeatherCondition(str, enum.Enum):
    CLEAR = "clear"
    CLOUDY = "cloudy"
    MISTY = "misty"
    LIGHT_SNOW = "light_snow"
    HEAVY_SNOW = "heavy_snow"
    RAINY = "rainy"
    FREEZING_RAIN = "freezing_rain"
    BLIZZARD = "blizzard"
    WHITEOUT = "whiteout"
    STORMY = "stormy"


class WeatherFront(str, enum.Enum):
    NONE = "none"
    PROLONGED_BLIZZARD = "prolonged_blizzard"


class LocationTag:
    """Common location tag constants."""

    CAMP = "camp"
    FOREST = "forest"
    WATER = "water"
    MOUNTAIN = "mountain"
    ANIMAL_TERRITORY = "animal_territory"
    PREDATOR_TERRITORY = "predator_territory"
    PREY_TERRITORY = "prey_territory"
    ESCAPE_TERRAIN = "escape_terrain"
    CORNERED = "cornered"


class LocationFeature:
    """Common location feature constants."""

    FIRE = "fire"
    SHELTER = "shelter"
    WATER = "water"
    FROZEN_WATER = "frozen_water"
    CARCASS = "carcass"
    SNARES = "snares"
    FUEL_FORAGE = "fuel_forage"


@dataclass(frozen=True)
class LocationView:
    """Current location as seen by the engine.

    Attributes:
        name: Exact location name (used by name-scoped events).
        tags: Terrain/territory tags (used by tag-scoped events).
        features: Features present (fire, shelter, carcass, ...).
        visibility: 0.0 (enclosed) to 1.0 (open sightlines).
        terrain_hazard: 0.0 (easy) to 1.0 (treacherous).
        distance_from_camp: Grid distance to camp.
    """

    name: str = "camp"
    tags: frozenset[str] = frozenset()
    features: frozenset[str] = frozenset()
    visibility: float = 0.5
    terrain_hazard: float = 0.0
    distance_from_camp: int = 0

    def has_feature(self, feature: str) -> bool:
        return feature in self.features

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags


@dataclass(frozen=True)
class SurvivalStats:
    """Survival stats as fractions of their maximum (0-1)."""

    energy: float = 1.0
    calories: float = 1.0
    hydration: float = 1.0
    body_temperature_c: float = 37.0

    def fraction(self, stat: str) -> float:
        return float(getattr(self, stat))


@dataclass(frozen=True)
class InventoryView:
    """Inventory contents relevant to conditions.

    Attributes:
        resources: Resource type -> count (water in liters).
        has_weapon: A weapon is equipped.
        has_firestarter: A fire-starting tool is carried.
        waterproofing: Best waterproofing level of worn gear (0-1).
        equipment_condition: Equipment slot -> condition (0-1).
    """

    resources: dict[str, float] = field(default_factory=dict)
    has_weapon: bool = False
    has_firestarter: bool = False
    waterproofing: float = 0.0
    equipment_condition: dict[str, float] = field(default_factory=dict)

    def count(self, resource: str) -> float:
        return float(self.resources.get(resource, 0.0))


@dataclass(frozen=True)
class BodyView:
    """Body state relevant to conditions.

    Attributes:
        blood: Blood volume condition (0-1).
        capacities: Capacity name -> level (moving, manipulation,
            consciousness, perception, breathing).
        effects: Active effect name -> severity (0-1).
        injured: Any untreated injury present.
        wetness: How soaked the player is (0-1).
    """

    blood: float = 1.0
    capacities: dict[str, float] = field(default_factory=dict)
    effects: dict[str, float] = field(default_factory=dict)
    injured: bool = False
    wetness: float = 0.0

    def capacity(self, name: str) -> float:
        return float(self.capacities.get(name, 1.0))

    def has_effect(self, name: str) -> bool:
        return self.effects.get(name, 0.0) > 0.0

    def effect_severity(self, name: str) -> float:
        return float(self.effects.get(name, 0.0))


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only view of the world for one simulation step.

    Attributes:
        tick: Current simulation tick.
        location: Current location.
        activity: What the player is doing.
        weather: Current weather condition.
        weather_front: Active weather front, if any.
        front_phase: Index of the current phase within the front.
        air_temperature_c: Ambient temperature.
        wind: Wind strength (0-1).
        is_daytime: Sun is up.
        at_camp: Player is at camp.
        survival: Survival stats.
        inventory: Inventory view.
        body: Body view.
        tensions: The live tension registry (read only here).
    """

    tick: int = 0
    location: LocationView = field(default_factory=LocationView)
    activity: ActivityType = ActivityType.IDLE
    weather: WeatherCondition = WeatherCondition.CLEAR
    weather_front: WeatherFront = WeatherFront.NONE
    front_phase: int = 0
    air_temperature_c: float = -5.0
    wind: float = 0.0
    is_daytime: bool = True
    at_camp: bool = True
    survival: SurvivalStats = field(default_factory=SurvivalStats)
    inventory: InventoryView = field(default_factory=InventoryView)
    body: BodyView = field(default_factory=BodyView)
    tensions: TensionRegistry | None = None

    @property
    def on_expedition(self) -> bool:
        return not self.at_camp
