"""
incident_analytics/domain package marker.
"""

from incident_analytics.domain.aggregates import (
    AggregatedStatistics,
    CountEntry,
    PerformanceEntry,
    PersonShareEntry,
    TrendEntry,
)
from incident_analytics.domain.service_record import (
    DAY_OF_WEEK_ORDER,
    SUPPORTED_YEAR_MAX,
    SUPPORTED_YEAR_MIN,
    ParseResult,
    ServiceRecord,
)

__all__ = [
    "AggregatedStatistics",
    "CountEntry",
    "DAY_OF_WEEK_ORDER",
    "ParseResult",
    "PerformanceEntry",
    "PersonShareEntry",
    "SUPPORTED_YEAR_MAX",
    "SUPPORTED_YEAR_MIN",
    "ServiceRecord",
    "TrendEntry",
]
