"""
incident_analytics/services/aggregation_service.py

Aggregation engine: canonical records -> named statistical views.

Views
-----
    by_person           responder counts with share of total, volume-filtered
    by_category         work category counts, first-encountered order
    by_issue_category   failure category counts, top N
    by_day_of_week      fixed 月..日 order, zero-filled
    by_year             valid-year records, ascending
    by_month            valid-month records, ascending, moving average (3)
    by_week             valid-year records with a week number, ascending,
                        moving average (4)
    person_performance  mean duration per responder, volume-filtered

Every view is computed by its own method in one pass over the records and
reads no other view's output. Descending sorts are stable, so ties keep
first-encountered order. All one-decimal values round half up.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

from incident_analytics.config import AnalysisSettings
from incident_analytics.domain.aggregates import (
    AggregatedStatistics,
    CountEntry,
    PerformanceEntry,
    PersonShareEntry,
    TrendEntry,
)
from incident_analytics.domain.service_record import DAY_OF_WEEK_ORDER, ServiceRecord
from incident_analytics.services.volume_thresholds import (
    AbsoluteThreshold,
    ThresholdPair,
    build_thresholds,
)

logger = logging.getLogger(__name__)

EMPTY_VALUE_LABEL = "(空)"

DEFAULT_TOP_N = 15
DEFAULT_MONTH_WINDOW = 3
DEFAULT_WEEK_WINDOW = 4

_ONE_DECIMAL = Decimal("0.1")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def round_one_decimal(value: float) -> float:
    """
    Round half up to one decimal place on the shortest decimal repr.
    """

    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def calculate_moving_average(
    entries: Sequence[CountEntry],
    window: int,
) -> list[TrendEntry]:
    """
    Attach a simple moving average to chronologically sorted buckets.

    Index ``i`` carries the mean of counts ``[i - window + 1, i]`` for
    ``i >= window - 1``; earlier entries have no moving average (None).
    """

    if window < 1:
        raise ValueError("Moving average window must be at least 1.")

    trend: list[TrendEntry] = []
    running_total = 0
    for index, entry in enumerate(entries):
        running_total += entry.count
        if index >= window:
            running_total -= entries[index - window].count

        moving_average = (
            round_one_decimal(running_total / window) if index >= window - 1 else None
        )
        trend.append(
            TrendEntry(name=entry.name, count=entry.count, moving_average=moving_average)
        )
    return trend


def _ascending(counter: Counter[str]) -> list[CountEntry]:
    return [CountEntry(name=name, count=count) for name, count in sorted(counter.items())]


def _top(counter: Counter[str], limit: int) -> list[CountEntry]:
    # most_common is stable for equal counts: first-encountered wins.
    return [CountEntry(name=name, count=count) for name, count in counter.most_common(limit)]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class AggregationService:
    """
    Computes the dashboard views for one record sequence.

    Stateless between calls; a single instance can serve many runs.

    Parameters
    ----------
    thresholds:
        Volume cutoffs for the person and performance views. Defaults to the
        absolute policy (1000 / 100).
    top_n:
        Entry limit for the issue category view and column analysis.
    month_window, week_window:
        Moving average windows for the monthly and weekly trends.
    """

    def __init__(
        self,
        *,
        thresholds: ThresholdPair | None = None,
        top_n: int = DEFAULT_TOP_N,
        month_window: int = DEFAULT_MONTH_WINDOW,
        week_window: int = DEFAULT_WEEK_WINDOW,
    ) -> None:
        self._thresholds = thresholds or ThresholdPair(
            person=AbsoluteThreshold(min_count=1000),
            performance=AbsoluteThreshold(min_count=100),
        )
        self._top_n = max(1, top_n)
        self._month_window = max(1, month_window)
        self._week_window = max(1, week_window)

    @classmethod
    def from_settings(cls, settings: AnalysisSettings) -> "AggregationService":
        return cls(
            thresholds=build_thresholds(settings),
            top_n=settings.top_n,
            month_window=settings.month_window,
            week_window=settings.week_window,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate_statistics(self, records: Iterable[ServiceRecord]) -> AggregatedStatistics:
        """
        Compute all eight views plus the header list in one call.
        """

        rows = tuple(records)
        statistics = AggregatedStatistics(
            by_person=self.count_by_person(rows),
            by_category=self.count_by_category(rows),
            by_issue_category=self.count_by_issue_category(rows),
            by_day_of_week=self.count_by_day_of_week(rows),
            by_year=self.count_by_year(rows),
            by_month=self.count_by_month(rows),
            by_week=self.count_by_week(rows),
            person_performance=self.person_performance(rows),
            headers=self.extract_headers(rows),
            total_records=len(rows),
        )
        logger.info(
            "Aggregated records=%d persons=%d years=%d months=%d weeks=%d",
            statistics.total_records,
            len(statistics.by_person),
            len(statistics.by_year),
            len(statistics.by_month),
            len(statistics.by_week),
        )
        return statistics

    def count_by_person(self, records: Sequence[ServiceRecord]) -> list[PersonShareEntry]:
        """
        Responder counts, volume-filtered, busiest first.

        ``percentage`` is the share of *all* records, including those
        without a responder.
        """

        total = len(records)
        counts: Counter[str] = Counter(record.person for record in records if record.person)

        threshold = self._thresholds.person
        entries = [
            PersonShareEntry(
                name=name,
                count=count,
                percentage=round_one_decimal(count / total * 100) if total else 0.0,
            )
            for name, count in counts.items()
            if threshold.passes(count, total)
        ]
        entries.sort(key=lambda entry: entry.count, reverse=True)
        logger.debug(
            "count_by_person responders=%d kept=%d cutoff=%d",
            len(counts),
            len(entries),
            threshold.minimum_count(total),
        )
        return entries

    def count_by_category(self, records: Sequence[ServiceRecord]) -> list[CountEntry]:
        counts: Counter[str] = Counter(record.category for record in records if record.category)
        return [CountEntry(name=name, count=count) for name, count in counts.items()]

    def count_by_issue_category(self, records: Sequence[ServiceRecord]) -> list[CountEntry]:
        counts: Counter[str] = Counter(
            record.issue_category for record in records if record.issue_category
        )
        entries = _top(counts, self._top_n)
        logger.debug(
            "count_by_issue_category categories=%d kept=%d", len(counts), len(entries)
        )
        return entries

    def count_by_day_of_week(self, records: Sequence[ServiceRecord]) -> list[CountEntry]:
        counts: Counter[str] = Counter(
            record.day_of_week for record in records if record.day_of_week
        )
        return [CountEntry(name=day, count=counts.get(day, 0)) for day in DAY_OF_WEEK_ORDER]

    def count_by_year(self, records: Sequence[ServiceRecord]) -> list[CountEntry]:
        counts: Counter[str] = Counter(
            record.parsed_year for record in records if record.is_valid_year
        )
        return _ascending(counts)

    def count_by_month(self, records: Sequence[ServiceRecord]) -> list[TrendEntry]:
        counts: Counter[str] = Counter(
            record.parsed_month_label for record in records if record.is_valid_month
        )
        trend = calculate_moving_average(_ascending(counts), self._month_window)
        logger.debug("count_by_month buckets=%d window=%d", len(trend), self._month_window)
        return trend

    def count_by_week(self, records: Sequence[ServiceRecord]) -> list[TrendEntry]:
        counts: Counter[str] = Counter(
            f"{record.parsed_year}-W{record.week_of_year:02d}"
            for record in records
            if record.is_valid_year and record.week_of_year > 0
        )
        trend = calculate_moving_average(_ascending(counts), self._week_window)
        logger.debug("count_by_week buckets=%d window=%d", len(trend), self._week_window)
        return trend

    def person_performance(self, records: Sequence[ServiceRecord]) -> list[PerformanceEntry]:
        """
        Mean resolution time per responder, slowest first.

        Records with an unparsed duration count as 0 minutes.
        """

        total = len(records)
        durations: defaultdict[str, int] = defaultdict(int)
        counts: defaultdict[str, int] = defaultdict(int)
        for record in records:
            if not record.person:
                continue
            durations[record.person] += record.duration_minutes
            counts[record.person] += 1

        threshold = self._thresholds.performance
        entries = [
            PerformanceEntry(
                name=name,
                avg_duration=round_one_decimal(durations[name] / count),
                total_count=count,
            )
            for name, count in counts.items()
            if threshold.passes(count, total)
        ]
        entries.sort(key=lambda entry: entry.avg_duration, reverse=True)
        logger.debug(
            "person_performance responders=%d kept=%d cutoff=%d",
            len(counts),
            len(entries),
            threshold.minimum_count(total),
        )
        return entries

    @staticmethod
    def extract_headers(records: Sequence[ServiceRecord]) -> list[str]:
        """
        Header names from the first record's raw mapping, in header order.
        """

        if not records:
            return []
        return list(records[0].raw.keys())

    def analyze_column(
        self,
        records: Iterable[ServiceRecord],
        column: str,
    ) -> list[CountEntry]:
        """
        Top-N value distribution of one raw (non-canonical) column.

        Empty or missing cells are grouped under ``(空)``.
        """

        counts: Counter[str] = Counter(
            record.raw.get(column) or EMPTY_VALUE_LABEL for record in records
        )
        return _top(counts, self._top_n)
