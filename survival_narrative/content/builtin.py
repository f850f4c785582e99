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

"""Built-in content wiring."""

from __future__ import annotations

from survival_narrative.events.catalog import EventCatalog
from survival_narrative.models.events import EventTemplate
from survival_narrative.triggers.tension_stage import TensionStageTriggers

from .tension_handlers import register_builtin_handlers
from .threats import THREAT_EVENTS
from .weather import WEATHER_EVENTS


def builtin_templates() -> tuple[EventTemplate, ...]:
    return THREAT_EVENTS + WEATHER_EVENTS


def build_catalog() -> EventCatalog:
    """A catalog holding every built-in template."""
    return EventCatalog(builtin_templates())


def build_tension_triggers() -> TensionStageTriggers:
    triggers = TensionStageTriggers()
    register_builtin_handlers(triggers)
    return triggers
