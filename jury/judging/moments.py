"""Running mean/variance state for judgment outcomes.

Two ways to build the same state:
- RunningMoments.update(): Welford's single-pass step, O(1) per value
- batch_moments(): numpy two-pass reduction over a batch

States combine exactly with RunningMoments.merge() (Chan et al. parallel
formula), so a batch reduced outside the aggregator lock can be folded
into the live state in O(1).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


@dataclass
class RunningMoments:
    """Count / mean / sum-of-squared-deviations triple."""

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0

    def update(self, value: float) -> None:
        self.count += 1
        delta = value - self.mean
        self.mean += delta / self.count
        self.m2 += delta * (value - self.mean)

    def merge(self, other: RunningMoments) -> None:
        """Fold another state into this one."""
        if other.count == 0:
            return
        if self.count == 0:
            self.count, self.mean, self.m2 = other.count, other.mean, other.m2
            return

        total = self.count + other.count
        delta = other.mean - self.mean
        self.mean += delta * other.count / total
        self.m2 += other.m2 + delta * delta * self.count * other.count / total
        self.count = total

    @property
    def variance(self) -> float:
        """Population variance (0.0 with no values)."""
        if self.count < 1:
            return 0.0
        # m2 can drift a hair below zero on near-constant input
        return max(self.m2 / self.count, 0.0)

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.mean) and math.isfinite(self.m2)

    def copy(self) -> RunningMoments:
        return RunningMoments(count=self.count, mean=self.mean, m2=self.m2)


def batch_moments(values: Iterable[float]) -> RunningMoments:
    """Reduce a batch of outcomes to a RunningMoments state with numpy."""
    arr = np.asarray(list(values), dtype=np.float64)
    if arr.size == 0:
        return RunningMoments()

    # Overflow shows up as inf/nan in the result; callers check is_finite
    with np.errstate(over="ignore", invalid="ignore"):
        mean = float(np.mean(arr))
        m2 = float(np.sum((arr - mean) ** 2))
    return RunningMoments(count=int(arr.size), mean=mean, m2=m2)


__all__ = ["RunningMoments", "batch_moments"]
