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

"""Tension-stage triggers: map StageChange records to guaranteed events.

Handlers are registered per tension type. A type without a handler, or a
handler returning None, produces no event (a silent fade).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from survival_narrative.models.events import EventTemplate
from survival_narrative.models.tensions import StageChange

logger = logging.getLogger(__name__)

StageHandler = Callable[[StageChange], EventTemplate | None]


class TensionStageTriggers:
    """Registry of stage-change handlers keyed by tension type."""

    def __init__(self) -> None:
        self._handlers: dict[str, StageHandler] = {}

    def register(self, type_key: str, handler: StageHandler) -> None:
        """Register the handler for a tension type.

        Raises:
            ValueError: If the type already has a handler.
        """
        if type_key in self._handlers:
            raise ValueError(f"Tension type {type_key!r} already has a handler.")
        self._handlers[type_key] = handler

    def handles(self, type_key: str) -> bool:
        return type_key in self._handlers

    def event_for(self, change: StageChange) -> EventTemplate | None:
        handler = self._handlers.get(change.type_key)
        if handler is None:
            return None
        event = handler(change)
        if event is not None:
            logger.debug(
                "Tension %s %s -> %s triggers %s.",
                change.type_key,
                change.previous,
                change.current,
                event.event_id,
            )
        return event

    def events_for(self, changes: Iterable[StageChange]) -> list[EventTemplate]:
        events = []
        for change in changes:
            event = self.event_for(change)
            if event is not None:
                events.append(event)
        return events
