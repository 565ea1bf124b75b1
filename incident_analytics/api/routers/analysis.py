"""
incident_analytics/api/routers/analysis.py

Analysis HTTP endpoints.

Every endpoint takes the export as a multipart upload and runs the full
parse/aggregate pipeline on it; no dataset is stored between requests.
"""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status

from incident_analytics.api.dependencies import get_csv_text
from incident_analytics.schemas.analysis import (
    ColumnDistributionResponse,
    CountEntryResponse,
    RecordPageResponse,
    RecordResponse,
    StatisticsResponse,
)
from incident_analytics.services.analysis_service import (
    AnalysisService,
    UnknownColumnError,
    get_analysis_service,
)

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("/statistics", response_model=StatisticsResponse)
def compute_statistics(
    content: str = Depends(get_csv_text),
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> StatisticsResponse:
    """
    Parse one export and return every aggregate view.
    """

    result = analysis_service.analyze(content)
    return StatisticsResponse.model_validate(asdict(result.statistics))


@router.post("/columns", response_model=ColumnDistributionResponse)
def analyze_column(
    column: str = Query(..., min_length=1, description="Header name to group by"),
    content: str = Depends(get_csv_text),
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ColumnDistributionResponse:
    """
    Return the most frequent values of one raw column.
    """

    try:
        distribution = analysis_service.column_distribution(content, column)
    except UnknownColumnError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc

    return ColumnDistributionResponse(
        column=distribution.column,
        total_records=distribution.total_records,
        entries=[
            CountEntryResponse(name=entry.name, count=entry.count)
            for entry in distribution.entries
        ],
    )


@router.post("/records", response_model=RecordPageResponse)
def list_records(
    search: str | None = Query(default=None, description="Case-insensitive search term"),
    page: int = Query(default=1, ge=1),
    content: str = Depends(get_csv_text),
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> RecordPageResponse:
    """
    Return one page of parsed records, optionally filtered.
    """

    record_page = analysis_service.find_records(content, search=search, page=page)
    return RecordPageResponse(
        page=record_page.page,
        page_size=record_page.page_size,
        total_items=record_page.total_items,
        total_pages=record_page.total_pages,
        items=[RecordResponse.model_validate(asdict(record)) for record in record_page.items],
    )
