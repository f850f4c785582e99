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

"""Passive tension decay, applied by the owner of the simulation loop."""

from __future__ import annotations

import logging

from survival_narrative.models.tensions import ActiveTension

from .registry import TensionRegistry

logger = logging.getLogger(__name__)


class TensionDecayScheduler:
    """Applies per-profile decay through TensionRegistry.escalate.

    Tensions whose profile does not decay at camp hold steady while the
    player is there; others decay at ``camp_decay_multiplier`` times the
    normal rate.
    """

    def decay_amount(
        self, tension: ActiveTension, minutes: float, at_camp: bool
    ) -> float:
        profile = tension.profile
        rate = profile.decay_per_hour
        if at_camp:
            if not profile.decays_at_camp:
                return 0.0
            rate *= profile.camp_decay_multiplier
        return max(rate, 0.0) * minutes / 60.0

    def apply(
        self, registry: TensionRegistry, minutes: float, at_camp: bool
    ) -> list[str]:
        """Decay every active tension by ``minutes`` of simulated time.

        Returns:
            Type keys of tensions that decayed away entirely.
        """
        if minutes <= 0:
            return []
        resolved: list[str] = []
        for tension in registry.all():
            amount = self.decay_amount(tension, minutes, at_camp)
            if amount <= 0:
                continue
            if registry.escalate(tension.type_key, -amount) is None:
                resolved.append(tension.type_key)
        if resolved:
            logger.debug("Tensions decayed away: %s", ", ".join(resolved))
        return resolved
