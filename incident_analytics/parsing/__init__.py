"""
incident_analytics/parsing package marker.
"""

from incident_analytics.parsing.csv_lines import is_blank_line, split_line, split_lines
from incident_analytics.parsing.date_rules import DateDerivation, derive_year_month
from incident_analytics.parsing.field_values import (
    clean_person_name,
    normalize_day_of_week,
    parse_int,
)

__all__ = [
    "DateDerivation",
    "clean_person_name",
    "derive_year_month",
    "is_blank_line",
    "normalize_day_of_week",
    "parse_int",
    "split_line",
    "split_lines",
]
