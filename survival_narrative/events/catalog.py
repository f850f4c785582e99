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

"""Registry of event templates, keyed by event id."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from survival_narrative.models.events import EventTemplate

logger = logging.getLogger(__name__)


class EventCatalog:
    """Holds every registered EventTemplate.

    Registration happens at load time. Lookups of unknown ids return None
    and log a content warning instead of raising.
    """

    def __init__(self, templates: Iterable[EventTemplate] = ()) -> None:
        self._templates: dict[str, EventTemplate] = {}
        self.register_all(templates)

    def register(self, template: EventTemplate) -> None:
        """Register a template.

        Raises:
            ValueError: If a template with the same id is already registered.
        """
        if template.event_id in self._templates:
            raise ValueError(f"Event {template.event_id!r} is already registered.")
        self._templates[template.event_id] = template

    def register_all(self, templates: Iterable[EventTemplate]) -> None:
        for template in templates:
            self.register(template)

    def get(self, event_id: str) -> EventTemplate | None:
        template = self._templates.get(event_id)
        if template is None:
            logger.warning("Event %r is not registered.", event_id)
        return template

    def templates(self) -> list[EventTemplate]:
        """All templates in registration order."""
        return list(self._templates.values())

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)
