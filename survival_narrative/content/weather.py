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

"""Weather events.

Whiteout, Lost in Fog and Sudden Clearing can also be drawn at random
while their conditions hold. The weather-transition trigger fires
zero-weight copies of them on the step the weather changes.
"""

from __future__ import annotations

import dataclasses

from survival_narrative.models.conditions import Condition as C
from survival_narrative.models.events import (
    Choice,
    EncounterSpec,
    EventTemplate,
    ResourceCost,
    ResourceType,
    Result,
    StatusEffectSpec,
    TensionOperation,
)
from survival_narrative.models.tensions import TensionType as T
from survival_narrative.triggers.weather import WeatherTrigger

WHITEOUT = EventTemplate(
    event_id="weather.whiteout",
    title="Whiteout",
    text=(
        "The snow is so thick you can't see your hand in front of your face. "
        "You've lost all sense of direction."
    ),
    base_weight=1.5,
    required_conditions=frozenset({C.IS_BLIZZARD, C.TRAVELING}),
    cooldown_ticks=120,
    choices=(
        Choice(
            "Keep Moving",
            "Trust your instincts and keep walking.",
            results=(
                Result(
                    "Your instincts serve you well.",
                    weight=0.3,
                    time_cost_minutes=10,
                ),
                Result(
                    "You drift off course. It takes time to correct.",
                    weight=0.4,
                    time_cost_minutes=25,
                ),
                Result(
                    "You're completely lost. Nothing looks familiar.",
                    weight=0.2,
                    time_cost_minutes=45,
                    status_effects=(StatusEffectSpec("Shaken", 0.2, 60),),
                ),
                Result(
                    "You walk straight into a hidden hazard.",
                    weight=0.1,
                    time_cost_minutes=15,
                    aborts_activity=True,
                ),
            ),
        ),
        Choice(
            "Stop and Wait",
            "Dig in and wait for visibility to return.",
            results=(
                Result(
                    "The storm passes. You continue.",
                    weight=0.4,
                    time_cost_minutes=30,
                ),
                Result(
                    "The cold seeps in despite your efforts.",
                    weight=0.45,
                    time_cost_minutes=40,
                    tension_ops=(TensionOperation.create(T.DEADLY_COLD, 0.3),),
                ),
                Result(
                    "Something finds you while you're stationary.",
                    weight=0.15,
                    time_cost_minutes=20,
                    encounter=EncounterSpec("wolf", 12.0, 0.6),
                ),
            ),
        ),
        Choice(
            "Burn Fuel for Warmth",
            "Wait out the storm in relative comfort.",
            required_conditions=frozenset({C.HAS_FUEL, C.HAS_FIRESTARTER}),
            results=(
                Result(
                    "The fire holds. You wait it out.",
                    time_cost_minutes=45,
                    cost=ResourceCost(ResourceType.FUEL, 3),
                ),
            ),
        ),
    ),
)

LOST_IN_FOG = EventTemplate(
    event_id="weather.lost_in_fog",
    title="Lost in Fog",
    text=(
        "The fog is disorienting. Every direction looks the same. "
        "You're not sure which way you came from."
    ),
    base_weight=1.0,
    required_conditions=frozenset({C.IS_MISTY, C.TRAVELING}),
    cooldown_ticks=120,
    choices=(
        Choice(
            "Wait for it to Lift",
            "Sit tight.",
            results=(
                Result(
                    "The fog clears in twenty minutes.",
                    weight=0.45,
                    time_cost_minutes=20,
                ),
                Result(
                    "The fog persists.",
                    weight=0.4,
                    time_cost_minutes=40,
                ),
                Result(
                    "Something finds you while you're sitting still.",
                    weight=0.15,
                    time_cost_minutes=15,
                    encounter=EncounterSpec("wolf", 10.0, 0.5),
                ),
            ),
        ),
        Choice(
            "Keep Moving Slowly",
            "Careful steps. Watch for landmarks.",
            results=(
                Result(
                    "You find your way with only minor delay.",
                    weight=0.5,
                    time_cost_minutes=15,
                ),
                Result(
                    "You walk in circles. When the fog clears you're barely closer.",
                    weight=0.5,
                    time_cost_minutes=35,
                ),
            ),
        ),
    ),
)

SUDDEN_CLEARING = EventTemplate(
    event_id="weather.sudden_clearing",
    title="Sudden Clearing",
    text="The clouds part. For the first time in hours you can see clearly.",
    base_weight=0.3,
    required_conditions=frozenset({C.IS_CLEAR, C.IS_EXPEDITION}),
    cooldown_ticks=240,
    choices=(
        Choice(
            "Push Further",
            "Use the good weather while it lasts.",
            results=(
                Result("The good weather holds.", weight=0.7),
                Result(
                    "Weather changes again. You're caught out.",
                    weight=0.3,
                    time_cost_minutes=15,
                ),
            ),
        ),
        Choice(
            "Rest and Recover",
            "Let your body recover.",
            results=(Result("You feel better for the rest.", time_cost_minutes=15),),
        ),
    ),
)

MASSIVE_STORM_APPROACHING = EventTemplate(
    event_id="weather.massive_storm_approaching",
    title="Calm Before the Storm",
    text=(
        "The air goes still and heavy. The sky to the north is the color of "
        "a bruise. Something big is coming."
    ),
    base_weight=0.0,
    choices=(
        Choice(
            "Head Back to Camp",
            "Get to shelter while you still can.",
            results=(Result("You turn for home.", aborts_activity=True),),
        ),
        Choice(
            "Press On",
            "There's still time.",
            results=(
                Result(
                    "You keep working, one eye on the horizon.",
                    status_effects=(StatusEffectSpec("Paranoid", 0.1, 60),),
                ),
            ),
        ),
    ),
)

WEATHER_EVENTS: tuple[EventTemplate, ...] = (
    WHITEOUT,
    LOST_IN_FOG,
    SUDDEN_CLEARING,
    MASSIVE_STORM_APPROACHING,
)


def _intentional(template: EventTemplate) -> EventTemplate:
    return dataclasses.replace(
        template,
        base_weight=0.0,
        required_conditions=frozenset(),
        cooldown_ticks=None,
    )


WEATHER_TRIGGER_TEMPLATES: dict[WeatherTrigger, EventTemplate] = {
    WeatherTrigger.WHITEOUT: _intentional(WHITEOUT),
    WeatherTrigger.LOST_IN_FOG: _intentional(LOST_IN_FOG),
    WeatherTrigger.SUDDEN_CLEARING: _intentional(SUDDEN_CLEARING),
    WeatherTrigger.CALM_BEFORE_STORM: MASSIVE_STORM_APPROACHING,
}
