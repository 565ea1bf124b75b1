"""
incident_analytics/services package marker.
"""

from incident_analytics.services.aggregation_service import (
    AggregationService,
    calculate_moving_average,
)
from incident_analytics.services.analysis_service import (
    AnalysisInputError,
    AnalysisResult,
    AnalysisService,
    ColumnDistribution,
    UnknownColumnError,
    get_analysis_service,
)
from incident_analytics.services.record_parser import RecordParser, parse_records
from incident_analytics.services.record_query_service import RecordPage, RecordQueryService

__all__ = [
    "AggregationService",
    "AnalysisInputError",
    "AnalysisResult",
    "AnalysisService",
    "ColumnDistribution",
    "RecordPage",
    "RecordParser",
    "RecordQueryService",
    "UnknownColumnError",
    "calculate_moving_average",
    "get_analysis_service",
    "parse_records",
]
