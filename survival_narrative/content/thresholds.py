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

"""Survival-stat threshold alerts, one per (stat, band)."""

from __future__ import annotations

from survival_narrative.models.events import (
    Choice,
    EventTemplate,
    Result,
    StatusEffectSpec,
)
from survival_narrative.triggers.thresholds import ThresholdStage


def _alert(
    event_id: str,
    title: str,
    text: str,
    label: str,
    choice_text: str,
    outcome: str,
    effect: StatusEffectSpec | None = None,
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
                    Result(
                        outcome,
                        time_cost_minutes=2,
                        status_effects=(effect,) if effect else (),
                    ),
                ),
            ),
        ),
    )


THRESHOLD_TEMPLATES: dict[tuple[str, ThresholdStage], EventTemplate] = {
    ("energy", ThresholdStage.SEVERE): _alert(
        "threshold.energy_severe",
        "Exhaustion Setting In",
        "Your legs are heavy. Every movement takes conscious effort.",
        "Push Through",
        "You can keep going. For now.",
        "You force yourself on, knowing you'll pay for it later.",
    ),
    ("energy", ThresholdStage.CRITICAL): _alert(
        "threshold.energy_critical",
        "Dangerous Exhaustion",
        "You can barely keep your eyes open. You're making mistakes.",
        "Acknowledge",
        "You need to rest. Now.",
        "Rest is no longer optional.",
        StatusEffectSpec("Exhausted", 0.4, 120),
    ),
    ("calories", ThresholdStage.SEVERE): _alert(
        "threshold.calories_severe",
        "Hunger Gnaws",
        "Your stomach cramps. Your hands tremble slightly.",
        "Endure",
        "You've been hungry before.",
        "But not like this.",
    ),
    ("calories", ThresholdStage.CRITICAL): _alert(
        "threshold.calories_critical",
        "Starvation",
        "The world narrows. Your body is eating itself to survive.",
        "Acknowledge",
        "You need food. Anything.",
        "Without food soon you won't have the strength to find any.",
        StatusEffectSpec("Hungry", 0.5),
    ),
    ("hydration", ThresholdStage.SEVERE): _alert(
        "threshold.hydration_severe",
        "Thirst Building",
        "Your mouth is dry. Your lips are cracked.",
        "Endure",
        "You can still function.",
        "For now. Dehydration kills faster than hunger.",
    ),
    ("hydration", ThresholdStage.CRITICAL): _alert(
        "threshold.hydration_critical",
        "Severe Dehydration",
        "Your head pounds. The world spins when you stand.",
        "Acknowledge",
        "Water. You need water.",
        "Water is life or death now.",
        StatusEffectSpec("Thirsty", 0.5),
    ),
}
