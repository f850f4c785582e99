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

"""Primitive condition identifiers.

Each identifier names a boolean predicate over a StateSnapshot. The
predicates themselves live in survival_narrative.conditions.evaluator.
"""

from __future__ import annotations

import enum


class Condition(str, enum.Enum):
    # Time
    IS_DAYTIME = "is_daytime"
    NIGHT = "night"

    # Activity
    TRAVELING = "traveling"
    WORKING = "working"
    FORAGING = "foraging"
    HUNTING = "hunting"
    BUTCHERING = "butchering"
    EATING = "eating"
    IS_SLEEPING = "is_sleeping"
    AWAKE = "awake"
    IS_CAMP_WORK = "is_camp_work"
    IS_EXPEDITION = "is_expedition"

    # Camp / expedition
    AT_CAMP = "at_camp"
    ON_EXPEDITION = "on_expedition"
    FAR_FROM_CAMP = "far_from_camp"
    VERY_FAR_FROM_CAMP = "very_far_from_camp"

    # Weather
    IS_CLEAR = "is_clear"
    IS_MISTY = "is_misty"
    IS_SNOWING = "is_snowing"
    IS_BLIZZARD = "is_blizzard"
    IS_RAINING = "is_raining"
    IS_STORMY = "is_stormy"
    HIGH_WIND = "high_wind"
    EXTREMELY_COLD = "extremely_cold"
    CALM_BEFORE_THE_STORM = "calm_before_the_storm"

    # Location
    OUTSIDE = "outside"
    INSIDE = "inside"
    FIRE_BURNING = "fire_burning"
    NEAR_FIRE = "near_fire"
    HAS_SHELTER = "has_shelter"
    NO_SHELTER = "no_shelter"
    NEAR_WATER = "near_water"
    FROZEN_WATER = "frozen_water"
    HAS_CARCASS = "has_carcass"
    HAS_ACTIVE_SNARES = "has_active_snares"
    HAS_FUEL_FORAGE = "has_fuel_forage"
    IN_ANIMAL_TERRITORY = "in_animal_territory"
    HAS_PREDATORS = "has_predators"
    IS_FOREST = "is_forest"
    NEAR_MOUNTAINS = "near_mountains"
    HAS_ESCAPE_TERRAIN = "has_escape_terrain"
    CORNERED = "cornered"
    HIGH_VISIBILITY = "high_visibility"
    LOW_VISIBILITY = "low_visibility"
    IN_DARKNESS = "in_darkness"
    HAS_LIGHT_SOURCE = "has_light_source"
    HAZARDOUS_TERRAIN = "hazardous_terrain"

    # Inventory
    HAS_FOOD = "has_food"
    HAS_MEAT = "has_meat"
    HAS_FUEL = "has_fuel"
    HAS_TINDER = "has_tinder"
    HAS_WATER = "has_water"
    HAS_MEDICINE = "has_medicine"
    HAS_PLANT_FIBER = "has_plant_fiber"
    HAS_FUEL_PLENTY = "has_fuel_plenty"
    HAS_FOOD_PLENTY = "has_food_plenty"
    LOW_ON_FUEL = "low_on_fuel"
    LOW_ON_FOOD = "low_on_food"
    NO_FUEL = "no_fuel"
    NO_FOOD = "no_food"
    HAS_WEAPON = "has_weapon"
    HAS_FIRESTARTER = "has_firestarter"
    WATERPROOFED = "waterproofed"
    FULLY_WATERPROOFED = "fully_waterproofed"

    # Body
    INJURED = "injured"
    SLOW = "slow"
    IMPAIRED = "impaired"
    LIMPING = "limping"
    CLUMSY = "clumsy"
    FOGGY = "foggy"
    WINDED = "winded"
    LOW_CALORIES = "low_calories"
    LOW_HYDRATION = "low_hydration"
    LOW_TEMPERATURE = "low_temperature"
    PLAYER_BLOODY = "player_bloody"
    PLAYER_BLOODY_HIGH = "player_bloody_high"

    # Tensions (stage checks against the per-type threshold table)
    STALKED = "stalked"
    STALKED_HIGH = "stalked_high"
    STALKED_CRITICAL = "stalked_critical"
    HUNTED = "hunted"
    SMOKE_SPOTTED = "smoke_spotted"
    INFESTED = "infested"
    WOUND_UNTREATED = "wound_untreated"
    WOUND_UNTREATED_HIGH = "wound_untreated_high"
    SHELTER_WEAKENED = "shelter_weakened"
    FOOD_SCENT_STRONG = "food_scent_strong"
    DISTURBED = "disturbed"
    DISTURBED_HIGH = "disturbed_high"
    DISTURBED_CRITICAL = "disturbed_critical"
    WOUNDED_PREY = "wounded_prey"
    WOUNDED_PREY_HIGH = "wounded_prey_high"
    WOUNDED_PREY_CRITICAL = "wounded_prey_critical"
    PACK_NEARBY = "pack_nearby"
    PACK_NEARBY_HIGH = "pack_nearby_high"
    PACK_NEARBY_CRITICAL = "pack_nearby_critical"
    CLAIMED_TERRITORY = "claimed_territory"
    CLAIMED_TERRITORY_HIGH = "claimed_territory_high"
    HERD_NEARBY = "herd_nearby"
    HERD_NEARBY_URGENT = "herd_nearby_urgent"
    DEADLY_COLD = "deadly_cold"
    DEADLY_COLD_CRITICAL = "deadly_cold_critical"
    FEVER_RISING = "fever_rising"
    FEVER_HIGH = "fever_high"
    FEVER_CRITICAL = "fever_critical"
    MAMMOTH_TRACKED = "mammoth_tracked"
    MAMMOTH_TRACKED_HIGH = "mammoth_tracked_high"
    TRAP_LINE_ACTIVE = "trap_line_active"
    SABER_TOOTH_STALKED = "saber_tooth_stalked"
