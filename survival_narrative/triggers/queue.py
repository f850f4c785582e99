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

"""Queue of intentional (guaranteed) events awaiting their step.

One FIFO per trigger source. pop() drains sources in fixed priority
order, tension stage first, then survival thresholds, then weather, so
at most one intentional event fires per step and the rest are deferred.
"""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable

from survival_narrative.models.events import EventTemplate


class TriggerSource(enum.IntEnum):
    """Trigger sources; lower value drains first."""

    TENSION = 0
    THRESHOLD = 1
    WEATHER = 2


class IntentionalTriggerQueue:
    """Priority-ordered FIFOs of intentional events."""

    def __init__(self) -> None:
        self._queues: dict[TriggerSource, deque[EventTemplate]] = {
            source: deque() for source in TriggerSource
        }

    def push(self, source: TriggerSource, event: EventTemplate) -> None:
        self._queues[source].append(event)

    def extend(self, source: TriggerSource, events: Iterable[EventTemplate]) -> None:
        self._queues[source].extend(events)

    def pop(self) -> tuple[TriggerSource, EventTemplate] | None:
        """Remove and return the highest-priority queued event, or None."""
        for source in TriggerSource:
            queue = self._queues[source]
            if queue:
                return source, queue.popleft()
        return None

    def pending(self) -> list[tuple[TriggerSource, str]]:
        """(source, event_id) of every queued event, in drain order."""
        return [
            (source, event.event_id)
            for source in TriggerSource
            for event in self._queues[source]
        ]

    def clear(self) -> None:
        for queue in self._queues.values():
            queue.clear()

    def __len__(self) -> int:
        return sum(len(q) for q in self._queues.values())

    @property
    def empty(self) -> bool:
        return len(self) == 0
