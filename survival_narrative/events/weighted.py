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

"""Weighted random choice shared by event selection and result resolution."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")


def weighted_choice(
    items: Sequence[tuple[float, T]],
    rng: np.random.Generator,
) -> T | None:
    """Draw one value with probability proportional to its weight.

    Draws u in [0, total) and walks the cumulative weights, so an item
    with weight 0 owns an empty interval and is never returned.

    Args:
        items: (weight, value) pairs. Weights must be finite and >= 0.
        rng: Shared random generator.

    Returns:
        The chosen value, or None if items is empty or all weights are 0.

    Raises:
        ValueError: If any weight is negative or not finite.
    """
    if not items:
        return None
    weights = np.asarray([w for w, _ in items], dtype=float)
    if not np.all(np.isfinite(weights)) or np.any(weights < 0):
        raise ValueError(f"Weights must be finite and >= 0, got {weights.tolist()}.")

    cumulative = np.cumsum(weights)
    total = cumulative[-1]
    if total <= 0:
        return None

    roll = rng.random() * total
    index = int(np.searchsorted(cumulative, roll, side="right"))
    if index >= len(items):
        # roll rounded up to total; fall back to the last positive weight
        index = int(np.flatnonzero(weights > 0)[-1])
    return items[index][1]
