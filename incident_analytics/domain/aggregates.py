"""
incident_analytics/domain/aggregates.py

Aggregate view shapes handed to presentation collaborators.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CountEntry:
    """
    One bucket of a grouped count.
    """

    name: str
    count: int


@dataclass(frozen=True)
class PersonShareEntry:
    """
    Responder count annotated with its share of all records (percent, 1 dp).
    """

    name: str
    count: int
    percentage: float


@dataclass(frozen=True)
class TrendEntry:
    """
    Chronological bucket. ``moving_average`` is None until the window fills.
    """

    name: str
    count: int
    moving_average: float | None = None


@dataclass(frozen=True)
class PerformanceEntry:
    name: str
    avg_duration: float
    total_count: int


@dataclass(frozen=True)
class AggregatedStatistics:
    """
    The eight named views computed for one record sequence.
    """

    by_person: list[PersonShareEntry] = field(default_factory=list)
    by_category: list[CountEntry] = field(default_factory=list)
    by_issue_category: list[CountEntry] = field(default_factory=list)
    by_day_of_week: list[CountEntry] = field(default_factory=list)
    by_year: list[CountEntry] = field(default_factory=list)
    by_month: list[TrendEntry] = field(default_factory=list)
    by_week: list[TrendEntry] = field(default_factory=list)
    person_performance: list[PerformanceEntry] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    total_records: int = 0
