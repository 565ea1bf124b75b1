"""
incident_analytics/schemas/analysis.py

Response schemas for analysis endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CountEntryResponse(BaseModel):
    name: str
    count: int = Field(..., ge=0)


class PersonShareEntryResponse(BaseModel):
    name: str
    count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0.0, le=100.0)


class TrendEntryResponse(BaseModel):
    """
    API response model for one trend bucket.

    ``moving_average`` is null until the averaging window is filled.
    """

    name: str
    count: int = Field(..., ge=0)
    moving_average: float | None = None


class PerformanceEntryResponse(BaseModel):
    name: str
    avg_duration: float
    total_count: int = Field(..., ge=0)


class StatisticsResponse(BaseModel):
    """
    API response model for the full set of aggregate views.
    """

    total_records: int = Field(..., ge=0)
    headers: list[str] = Field(default_factory=list)
    by_person: list[PersonShareEntryResponse] = Field(default_factory=list)
    by_category: list[CountEntryResponse] = Field(default_factory=list)
    by_issue_category: list[CountEntryResponse] = Field(default_factory=list)
    by_day_of_week: list[CountEntryResponse] = Field(default_factory=list)
    by_year: list[CountEntryResponse] = Field(default_factory=list)
    by_month: list[TrendEntryResponse] = Field(default_factory=list)
    by_week: list[TrendEntryResponse] = Field(default_factory=list)
    person_performance: list[PerformanceEntryResponse] = Field(default_factory=list)


class ColumnDistributionResponse(BaseModel):
    """
    API response model for ad-hoc analysis of one raw column.
    """

    column: str
    total_records: int = Field(..., ge=0)
    entries: list[CountEntryResponse] = Field(default_factory=list)


class RecordResponse(BaseModel):
    """
    API response model for one canonical record row.
    """

    term: int
    total_id: int
    month_id: int
    machine_id: int
    link: str
    building_name: str
    category: str
    issue_details: str
    response_time: str
    person: str
    region: str
    ward: str
    date: str
    month: str
    week_of_month: int
    week_of_year: int
    day_of_week: str
    issue_category: str
    level: str
    level2: str
    version: str
    type: str
    model: str
    locker_spec: str
    request_id: str
    start_time: str
    end_time: str
    duration_minutes: int
    parsed_year: str
    parsed_month_label: str
    is_valid_year: bool
    is_valid_month: bool
    raw: dict[str, str] = Field(default_factory=dict)


class RecordPageResponse(BaseModel):
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=1)
    items: list[RecordResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    version: str
