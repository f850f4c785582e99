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

"""Survival-stat threshold triggers.

Each tracked stat is discretized into bands (Healthy > 50%, Normal
25-50%, Severe 10-25%, Critical < 10%). An event fires once when a stat
worsens into Severe or Critical. The first observation only seeds the
band; recoveries are tracked silently, so a later worsening fires again.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from survival_narrative.config import (
    THRESHOLD_HEALTHY_ABOVE,
    THRESHOLD_NORMAL_ABOVE,
    THRESHOLD_SEVERE_ABOVE,
    TRACKED_SURVIVAL_STATS,
)
from survival_narrative.models.events import EventTemplate
from survival_narrative.models.snapshot import SurvivalStats

logger = logging.getLogger(__name__)


class ThresholdStage(enum.IntEnum):
    """Discretized survival stat band; higher is worse."""

    HEALTHY = 0
    NORMAL = 1
    SEVERE = 2
    CRITICAL = 3


ALERT_STAGES = frozenset({ThresholdStage.SEVERE, ThresholdStage.CRITICAL})


def threshold_stage(fraction: float) -> ThresholdStage:
    if fraction > THRESHOLD_HEALTHY_ABOVE:
        return ThresholdStage.HEALTHY
    if fraction >= THRESHOLD_NORMAL_ABOVE:
        return ThresholdStage.NORMAL
    if fraction >= THRESHOLD_SEVERE_ABOVE:
        return ThresholdStage.SEVERE
    return ThresholdStage.CRITICAL


@dataclass(frozen=True)
class ThresholdChange:
    stat: str
    previous: ThresholdStage | None
    current: ThresholdStage

    @property
    def is_initial(self) -> bool:
        return self.previous is None

    @property
    def is_worsening(self) -> bool:
        return self.previous is not None and self.current > self.previous

    @property
    def is_improving(self) -> bool:
        return self.previous is not None and self.current < self.previous

    @property
    def is_alert(self) -> bool:
        return self.is_worsening and self.current in ALERT_STAGES


class SurvivalThresholdTracker:
    """Remembers the last band per stat and emits alert events.

    Args:
        templates: (stat, stage) -> event fired on worsening into that band.
        stats: Stat names to track (attributes of SurvivalStats).
    """

    def __init__(
        self,
        templates: Mapping[tuple[str, ThresholdStage], EventTemplate],
        stats: Iterable[str] = TRACKED_SURVIVAL_STATS,
    ) -> None:
        self._templates = dict(templates)
        self._stats = tuple(stats)
        self._last: dict[str, ThresholdStage] = {}

    def stage(self, stat: str) -> ThresholdStage | None:
        return self._last.get(stat)

    def observe(self, survival: SurvivalStats) -> list[ThresholdChange]:
        """Record the current bands and return the ones that moved."""
        changes = []
        for stat in self._stats:
            current = threshold_stage(survival.fraction(stat))
            previous = self._last.get(stat)
            if previous == current:
                continue
            self._last[stat] = current
            changes.append(ThresholdChange(stat, previous, current))
        return changes

    def events_for(self, survival: SurvivalStats) -> list[EventTemplate]:
        """Observe ``survival`` and return the alert events to fire."""
        events = []
        for change in self.observe(survival):
            if not change.is_alert:
                continue
            template = self._templates.get((change.stat, change.current))
            if template is None:
                logger.debug(
                    "No threshold event for %s %s.", change.stat, change.current
                )
                continue
            events.append(template)
        return events

    def reset(self) -> None:
        self._last.clear()
