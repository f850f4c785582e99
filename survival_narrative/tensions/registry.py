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

"""Tension registry and stage machine.

Per tension type the states are {absent, Building, Escalating, Critical}.
The registry remembers each tension's stage as of the first mutation
since the last drain, so drain_stage_changes() reports one net
transition per tension no matter how many mutations happened in between.
"""

from __future__ import annotations

import dataclasses
import logging

from survival_narrative.models.tensions import (
    ActiveTension,
    StageChange,
    TensionStage,
    clamp_severity,
)

logger = logging.getLogger(__name__)


class TensionRegistry:
    """Keyed store of active tensions, at most one per type key."""

    def __init__(self) -> None:
        self._tensions: dict[str, ActiveTension] = {}
        # type_key -> stage before the first mutation since the last drain
        self._baseline: dict[str, TensionStage | None] = {}
        # type_key -> copy of the last known state, kept for resolutions
        self._last_seen: dict[str, ActiveTension] = {}

    # --- Mutations ---

    def create(
        self,
        type_key: str,
        severity: float,
        animal_type: str | None = None,
        source_location: str | None = None,
        description: str | None = None,
        tick: int = 0,
    ) -> ActiveTension:
        """Create a tension, or merge into the active one of the same type.

        Merging keeps the existing metadata and raises severity to
        max(current, severity); it never lowers it.

        Args:
            type_key: Tension type.
            severity: Initial severity, clamped to 1.0; must be positive.
            animal_type: Associated animal, if any.
            source_location: Where the tension originated.
            description: Narrative detail.
            tick: Creation tick.

        Returns:
            The active tension.

        Raises:
            ValueError: If severity is not positive. A tension at 0 is
                resolved, never registered.
        """
        if not severity > 0:
            raise ValueError(
                f"Tension {type_key!r} needs a positive severity, got {severity}."
            )
        self._mark(type_key)
        existing = self._tensions.get(type_key)
        if existing is not None:
            existing.severity = max(existing.severity, clamp_severity(severity))
            self._remember(existing)
            logger.debug(
                "Merged tension %s to severity %.2f.", type_key, existing.severity
            )
            return existing

        tension = ActiveTension(
            type_key=type_key,
            severity=severity,
            animal_type=animal_type,
            source_location=source_location,
            description=description,
            created_tick=tick,
        )
        self._tensions[type_key] = tension
        self._remember(tension)
        logger.debug("Created tension %s at severity %.2f.", type_key, tension.severity)
        return tension

    def escalate(self, type_key: str, delta: float) -> ActiveTension | None:
        """Shift severity by ``delta`` (may be negative), clamped to [0, 1].

        No-op on an absent tension. A tension driven to severity 0 is
        resolved.

        Returns:
            The tension after the change, or None if absent or resolved.
        """
        tension = self._tensions.get(type_key)
        if tension is None:
            return None
        self._mark(type_key)
        tension.severity = clamp_severity(tension.severity + delta)
        self._remember(tension)
        if tension.severity <= 0.0:
            self.resolve(type_key)
            return None
        return tension

    def resolve(self, type_key: str) -> bool:
        """Remove a tension. No-op on an absent tension.

        Returns:
            True if a tension was removed.
        """
        if type_key not in self._tensions:
            return False
        self._mark(type_key)
        self._remember(self._tensions.pop(type_key))
        logger.debug("Resolved tension %s.", type_key)
        return True

    # --- Queries ---

    def get(self, type_key: str) -> ActiveTension | None:
        return self._tensions.get(type_key)

    def has(self, type_key: str) -> bool:
        return type_key in self._tensions

    def has_above(self, type_key: str, threshold: float) -> bool:
        tension = self._tensions.get(type_key)
        return tension is not None and tension.severity > threshold

    def stage_of(self, type_key: str) -> TensionStage | None:
        """Current stage of a tension, or None when absent."""
        tension = self._tensions.get(type_key)
        return None if tension is None else tension.stage

    def all(self) -> list[ActiveTension]:
        return list(self._tensions.values())

    def __len__(self) -> int:
        return len(self._tensions)

    def __contains__(self, type_key: object) -> bool:
        return type_key in self._tensions

    # --- Stage changes ---

    def drain_stage_changes(self) -> list[StageChange]:
        """Return and clear the net stage changes since the last drain.

        At most one change per tension; tensions whose net stage did not
        move (including created-then-resolved) report nothing.
        """
        changes: list[StageChange] = []
        for type_key, previous in self._baseline.items():
            current = self.stage_of(type_key)
            if current == previous:
                continue
            changes.append(
                StageChange(
                    type_key=type_key,
                    previous=previous,
                    current=current,
                    tension=self._last_seen[type_key],
                )
            )
        self._baseline.clear()
        self._last_seen.clear()
        return changes

    def has_pending_changes(self) -> bool:
        return any(
            self.stage_of(key) != previous for key, previous in self._baseline.items()
        )

    def _mark(self, type_key: str) -> None:
        if type_key not in self._baseline:
            self._baseline[type_key] = self.stage_of(type_key)

    def _remember(self, tension: ActiveTension) -> None:
        self._last_seen[tension.type_key] = dataclasses.replace(tension)
