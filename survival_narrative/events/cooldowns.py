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

"""Last-fired bookkeeping for event cooldowns."""

from __future__ import annotations


class CooldownTracker:
    """Maps event id to the tick it last fired at.

    An event with a cooldown is ready again once
    ``now - last_fired >= cooldown_ticks``.
    """

    def __init__(self) -> None:
        self._last_fired: dict[str, int] = {}

    def record(self, event_id: str, tick: int) -> None:
        self._last_fired[event_id] = tick

    def last_fired(self, event_id: str) -> int | None:
        return self._last_fired.get(event_id)

    def is_ready(self, event_id: str, cooldown_ticks: int | None, now: int) -> bool:
        """Whether the event may be selected at tick ``now``.

        Args:
            event_id: Event to check.
            cooldown_ticks: The template's cooldown; None means no cooldown.
            now: Current tick.
        """
        if cooldown_ticks is None:
            return True
        last = self._last_fired.get(event_id)
        if last is None:
            return True
        return now - last >= cooldown_ticks

    def entries(self) -> dict[str, int]:
        return dict(self._last_fired)

    def clear(self) -> None:
        self._last_fired.clear()
