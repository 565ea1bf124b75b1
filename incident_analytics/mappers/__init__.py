"""
incident_analytics/mappers package marker.
"""

from incident_analytics.mappers.column_mapper import (
    CANONICAL_FIELDS,
    DEFAULT_COLUMN_ALIASES,
    INTEGER_FIELDS,
    ColumnMapper,
    ColumnMapping,
    deduplicate_headers,
)

__all__ = [
    "CANONICAL_FIELDS",
    "DEFAULT_COLUMN_ALIASES",
    "INTEGER_FIELDS",
    "ColumnMapper",
    "ColumnMapping",
    "deduplicate_headers",
]
