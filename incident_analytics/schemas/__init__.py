"""
incident_analytics/schemas package marker.
"""

from incident_analytics.schemas.analysis import (
    ColumnDistributionResponse,
    CountEntryResponse,
    HealthResponse,
    PerformanceEntryResponse,
    PersonShareEntryResponse,
    RecordPageResponse,
    RecordResponse,
    StatisticsResponse,
    TrendEntryResponse,
)

__all__ = [
    "ColumnDistributionResponse",
    "CountEntryResponse",
    "HealthResponse",
    "PerformanceEntryResponse",
    "PersonShareEntryResponse",
    "RecordPageResponse",
    "RecordResponse",
    "StatisticsResponse",
    "TrendEntryResponse",
]
