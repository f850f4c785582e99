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

"""Stage-change handlers for built-in tension types.

Creation and escalation are favored. Most resolutions stay silent since
the event that resolved the tension already told the story; the one
exception is a stalker that loses interest while still Building.
"""

from __future__ import annotations

from survival_narrative.models.events import (
    Choice,
    EventTemplate,
    Result,
    StatusEffectSpec,
)
from survival_narrative.models.tensions import StageChange, TensionStage, TensionType
from survival_narrative.triggers.tension_stage import TensionStageTriggers

B = TensionStage.BUILDING
E = TensionStage.ESCALATING
CR = TensionStage.CRITICAL


def _event(
    event_id: str,
    title: str,
    text: str,
    label: str,
    choice_text: str,
    outcome: str,
    minutes: int = 2,
    *effects: StatusEffectSpec,
) -> EventTemplate:
    return EventTemplate(
        event_id=event_id,
        title=title,
        text=text,
        base_weight=0.0,
        choices=(
            Choice(
                label,
                choice_text,
                results=(
                    Result(outcome, time_cost_minutes=minutes, status_effects=effects),
                ),
            ),
        ),
    )


def _animal(change: StageChange, default: str) -> str:
    return change.tension.animal_type or default


# --- Stalked ---


def stalked(change: StageChange) -> EventTemplate | None:
    predator = _animal(change, "wolf")
    if change.is_creation:
        reason = (
            change.tension.description
            or "Movement in the trees. Eyes catching light."
        )
        return _event(
            "tension.stalked.created",
            "Something's Attention",
            f"The hair on your neck rises. {reason} Something has noticed you.",
            "Stay Alert",
            "You're being watched. Act accordingly.",
            "You keep your guard up. Whatever it is hasn't committed yet.",
            2,
            StatusEffectSpec("Paranoid", 0.1),
        )
    if change.is_resolution:
        if change.previous != B:
            return None
        return _event(
            "tension.stalked.faded",
            "Lost Interest",
            "The feeling of being watched fades. Whatever was following you "
            "has moved on.",
            "Continue",
            "You're alone again. Probably.",
            "The tension drains from your shoulders.",
        )
    if (change.previous, change.current) == (B, E):
        return _event(
            "tension.stalked.closing_in",
            "Closing In",
            f"Movement parallels your path. The {predator} is getting bolder.",
            "Acknowledge",
            "You see it now, keeping pace through the brush.",
            "It knows you know. The game has changed.",
            2,
            StatusEffectSpec("Shaken", 0.15),
        )
    if (change.previous, change.current) == (E, CR):
        return _event(
            "tension.stalked.eyes_in_the_dark",
            "Eyes in the Dark",
            f"Eyes reflect in the firelight. The {predator} is close now. Too close.",
            "Face It",
            "This ends now.",
            f"You turn to face the {predator}. It doesn't back down.",
            3,
            StatusEffectSpec("Frightened", 0.3),
        )
    if (change.previous, change.current) == (CR, E):
        return _event(
            "tension.stalked.backing_off",
            "Backing Off",
            f"The {predator} retreats slightly. Something gave it pause.",
            "Keep Pressure",
            "Don't let up.",
            "It's reconsidering. Good.",
        )
    return None


# --- Hunted ---


def hunted(change: StageChange) -> EventTemplate | None:
    if change.is_creation or change.is_resolution:
        return None
    if change.current == CR and change.previous != CR:
        predator = _animal(change, "wolf")
        return _event(
            "tension.hunted.the_hunt",
            "The Hunt",
            f"The {predator} is committed now. It's hunting you.",
            "Brace Yourself",
            "It's coming.",
            "You hear it accelerating through the brush.",
            2,
            StatusEffectSpec("Terrified", 0.4),
        )
    return None


# --- Fever ---


def fever_rising(change: StageChange) -> EventTemplate | None:
    if change.is_creation:
        return _event(
            "tension.fever.something_wrong",
            "Something Wrong",
            "A chill runs through you that has nothing to do with the cold. "
            "Your body is fighting something.",
            "Push Through",
            "You can handle this.",
            "You ignore the warning signs. For now.",
            2,
            StatusEffectSpec("Exhausted", 0.15, 60),
        )
    if (change.previous, change.current) == (B, E):
        return _event(
            "tension.fever.rising",
            "Fever Rising",
            "The chills are getting worse. Your hands shake. "
            "The infection is spreading.",
            "Rest",
            "You need to stop.",
            "You curl up by the fire, shivering.",
            15,
            StatusEffectSpec("Fever", 0.3),
        )
    if (change.previous, change.current) == (E, CR):
        return _event(
            "tension.fever.crisis",
            "Fever Crisis",
            "You're burning up. Shadows move at the edge of your vision.",
            "Fight It",
            "You have to push through.",
            "Everything becomes a blur of heat and cold.",
            5,
            StatusEffectSpec("Fever", 0.6),
        )
    return None


# --- Wounded prey ---


def wounded_prey(change: StageChange) -> EventTemplate | None:
    if change.is_deescalation and change.current == B:
        prey = _animal(change, "caribou")
        return _event(
            "tension.wounded_prey.trail_going_cold",
            "Trail Going Cold",
            f"The blood trail is thinning. The {prey} is getting away.",
            "Hurry",
            "You need to move faster.",
            "You quicken your pace, following what signs remain.",
        )
    return None


# --- Deadly cold ---


def deadly_cold(change: StageChange) -> EventTemplate | None:
    if change.is_creation:
        return _event(
            "tension.deadly_cold.created",
            "Deadly Cold",
            "The cold is no longer discomfort. It's becoming dangerous. "
            "You need fire. Now.",
            "Acknowledge",
            "This is life or death.",
            "Every minute matters now.",
            1,
            StatusEffectSpec("Fear", 0.2),
        )
    if change.is_resolution:
        return None
    if change.current == CR and change.previous != CR:
        return _event(
            "tension.deadly_cold.going_numb",
            "Going Numb",
            "You can't feel your fingers anymore. Your thoughts are slowing.",
            "Fight",
            "Keep moving. Keep thinking.",
            "Every step is an act of will.",
            2,
            StatusEffectSpec("Frostbite", 0.3),
            StatusEffectSpec("Shaken", 0.3),
        )
    return None


BUILTIN_HANDLERS = {
    TensionType.STALKED: stalked,
    TensionType.HUNTED: hunted,
    TensionType.FEVER_RISING: fever_rising,
    TensionType.WOUNDED_PREY: wounded_prey,
    TensionType.DEADLY_COLD: deadly_cold,
}


def register_builtin_handlers(triggers: TensionStageTriggers) -> None:
    for type_key, handler in BUILTIN_HANDLERS.items():
        triggers.register(type_key, handler)
