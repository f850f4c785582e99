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

"""Weather-transition triggers.

Fires only on the step where the observed weather changes:
  - blizzard or whiteout while traveling -> whiteout
  - fog rolling in while traveling -> lost in fog
  - clearing after a dangerous condition -> sudden clearing
All three are suppressed while sleeping or when not on an expedition.
A change that lands in the first phase of a prolonged-blizzard front also
fires the calm-before-the-storm warning.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping

from survival_narrative.models.events import EventTemplate
from survival_narrative.models.snapshot import (
    ActivityType,
    StateSnapshot,
    WeatherCondition,
    WeatherFront,
)

logger = logging.getLogger(__name__)

DANGEROUS_WEATHER = frozenset(
    {
        WeatherCondition.BLIZZARD,
        WeatherCondition.WHITEOUT,
        WeatherCondition.HEAVY_SNOW,
        WeatherCondition.FREEZING_RAIN,
        WeatherCondition.STORMY,
    }
)


class WeatherTrigger(str, enum.Enum):
    WHITEOUT = "whiteout"
    LOST_IN_FOG = "lost_in_fog"
    SUDDEN_CLEARING = "sudden_clearing"
    CALM_BEFORE_STORM = "calm_before_storm"


def transition_trigger(
    previous: WeatherCondition | None,
    snapshot: StateSnapshot,
) -> WeatherTrigger | None:
    """Classify a weather change, or None if it warrants no event."""
    if snapshot.activity == ActivityType.SLEEPING:
        return None
    if not snapshot.on_expedition:
        return None

    current = snapshot.weather
    traveling = snapshot.activity == ActivityType.TRAVELING
    if current in (WeatherCondition.BLIZZARD, WeatherCondition.WHITEOUT) and traveling:
        return WeatherTrigger.WHITEOUT
    if current == WeatherCondition.MISTY and traveling and previous != current:
        return WeatherTrigger.LOST_IN_FOG
    if current == WeatherCondition.CLEAR and previous in DANGEROUS_WEATHER:
        return WeatherTrigger.SUDDEN_CLEARING
    return None


class WeatherTransitionTracker:
    """Remembers the last observed weather and emits transition events.

    Args:
        templates: Event to fire for each WeatherTrigger.
    """

    def __init__(self, templates: Mapping[WeatherTrigger, EventTemplate]) -> None:
        self._templates = dict(templates)
        self._last: WeatherCondition | None = None

    @property
    def last_weather(self) -> WeatherCondition | None:
        return self._last

    def events_for(self, snapshot: StateSnapshot) -> list[EventTemplate]:
        """Observe the snapshot's weather; return events for a change."""
        previous = self._last
        self._last = snapshot.weather
        if previous is None or previous == snapshot.weather:
            return []

        logger.debug(
            "Weather changed %s -> %s.", previous.value, snapshot.weather.value
        )
        triggers = []
        trigger = transition_trigger(previous, snapshot)
        if trigger is not None:
            triggers.append(trigger)
        if (
            snapshot.weather_front == WeatherFront.PROLONGED_BLIZZARD
            and snapshot.front_phase == 0
        ):
            triggers.append(WeatherTrigger.CALM_BEFORE_STORM)

        return [self._templates[t] for t in triggers if t in self._templates]

    def reset(self) -> None:
        self._last = None
