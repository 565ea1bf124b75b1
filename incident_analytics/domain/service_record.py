"""
incident_analytics/domain/service_record.py

Canonical record shape produced by the record parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DAY_OF_WEEK_ORDER: tuple[str, ...] = ("月", "火", "水", "木", "金", "土", "日")

SUPPORTED_YEAR_MIN = 2021
SUPPORTED_YEAR_MAX = 2026


@dataclass(frozen=True)
class ServiceRecord:
    """
    One maintenance incident, resolved from an arbitrary export row.

    Fields whose source column could not be resolved carry the zero value
    of their type (``0`` or ``""``).
    """

    term: int = 0
    total_id: int = 0
    month_id: int = 0
    machine_id: int = 0
    link: str = ""
    building_name: str = ""
    category: str = ""
    issue_details: str = ""
    response_time: str = ""
    person: str = ""
    region: str = ""
    ward: str = ""
    date: str = ""
    month: str = ""
    week_of_month: int = 0
    week_of_year: int = 0
    day_of_week: str = ""
    issue_category: str = ""
    level: str = ""
    level2: str = ""
    version: str = ""
    type: str = ""
    model: str = ""
    locker_spec: str = ""
    request_id: str = ""
    start_time: str = ""
    end_time: str = ""
    duration_minutes: int = 0
    parsed_year: str = ""
    parsed_month_label: str = ""
    is_valid_year: bool = False
    is_valid_month: bool = False
    raw: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ParseResult:
    """
    Parser output: records in source row order plus deduplicated headers.
    """

    records: tuple[ServiceRecord, ...] = ()
    headers: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.records
