"""
incident_analytics/services/volume_thresholds.py

Minimum-volume cutoffs for the per-responder views.

Two policies exist for deciding which responders are frequent enough to
report:

    absolute  - a fixed minimum record count per view
                (1000 for the person view, 100 for performance)
    relative  - a share of all records with a floor
                (count >= max(50, ceil(0.5 % of total)))

The absolute policy is the default. On small datasets it hides everyone;
switch to relative via ANALYSIS_THRESHOLD_POLICY in that case. Both
boundaries are inclusive.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from incident_analytics.config import THRESHOLD_POLICY_RELATIVE, AnalysisSettings


class VolumeThreshold(ABC):
    """
    Contract for responder volume cutoffs.
    """

    @abstractmethod
    def minimum_count(self, total_records: int) -> int:
        """
        Smallest count that still passes, given the size of the dataset.
        """

    def passes(self, count: int, total_records: int) -> bool:
        return count >= self.minimum_count(total_records)


@dataclass(frozen=True)
class AbsoluteThreshold(VolumeThreshold):
    min_count: int

    def minimum_count(self, total_records: int) -> int:
        return self.min_count


@dataclass(frozen=True)
class RelativeThreshold(VolumeThreshold):
    """
    ``max(floor, ceil(share * total_records))``.

    The share is applied in decimal arithmetic so that, for example,
    0.005 * 200 is exactly 1 rather than a float just above it.
    """

    share: float
    floor: int

    def minimum_count(self, total_records: int) -> int:
        scaled = Decimal(str(self.share)) * total_records
        return max(self.floor, math.ceil(scaled))


@dataclass(frozen=True)
class ThresholdPair:
    person: VolumeThreshold
    performance: VolumeThreshold


def build_thresholds(settings: AnalysisSettings) -> ThresholdPair:
    """
    Build the person / performance cutoffs for the configured policy.
    """

    if settings.threshold_policy == THRESHOLD_POLICY_RELATIVE:
        relative = RelativeThreshold(
            share=settings.relative_min_share,
            floor=settings.relative_min_floor,
        )
        return ThresholdPair(person=relative, performance=relative)

    return ThresholdPair(
        person=AbsoluteThreshold(min_count=settings.person_min_count),
        performance=AbsoluteThreshold(min_count=settings.performance_min_count),
    )
