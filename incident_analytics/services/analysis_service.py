"""
incident_analytics/services/analysis_service.py

Service layer for the upload -> parse -> aggregate workflow.

Each call runs the whole pipeline on the supplied content; nothing is kept
between calls, so a new upload always produces a fresh, complete result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from incident_analytics.config import get_analysis_settings, get_upload_settings
from incident_analytics.domain.aggregates import AggregatedStatistics, CountEntry
from incident_analytics.domain.service_record import ParseResult
from incident_analytics.services.aggregation_service import AggregationService
from incident_analytics.services.record_parser import RecordParser
from incident_analytics.services.record_query_service import (
    DEFAULT_PAGE_SIZE,
    RecordPage,
    RecordQueryService,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class AnalysisInputError(ValueError):
    """
    Raised when uploaded bytes cannot be turned into export text.
    """


class UnknownColumnError(ValueError):
    """
    Raised when column analysis is requested for a header the file lacks.
    """

    def __init__(self, *, column: str, headers: tuple[str, ...]) -> None:
        super().__init__(f"Column '{column}' is not present in the uploaded file.")
        self.column = column
        self.headers = headers

    def to_dict(self) -> dict[str, object]:
        return {
            "message": str(self),
            "column": self.column,
            "available_columns": list(self.headers),
        }


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisResult:
    parse_result: ParseResult
    statistics: AggregatedStatistics


@dataclass(frozen=True)
class ColumnDistribution:
    column: str
    entries: list[CountEntry]
    total_records: int


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class AnalysisService:
    """
    Coordinates decoding, parsing, aggregation and record lookup.
    """

    def __init__(
        self,
        *,
        parser: RecordParser | None = None,
        aggregator: AggregationService | None = None,
        query: RecordQueryService | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._parser = parser or RecordParser()
        self._aggregator = aggregator or AggregationService()
        self._query = query or RecordQueryService()
        self._page_size = max(1, page_size)

    @staticmethod
    def decode(payload: bytes) -> str:
        """
        Decode an uploaded file as UTF-8, dropping a BOM if present.
        """

        try:
            return payload.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise AnalysisInputError("CSV must be UTF-8 encoded.") from exc

    def parse(self, content: str) -> ParseResult:
        return self._parser.parse(content)

    def analyze(self, content: str) -> AnalysisResult:
        """
        Parse the export and compute every aggregate view.
        """

        parse_result = self.parse(content)
        statistics = self._aggregator.calculate_statistics(parse_result.records)
        return AnalysisResult(parse_result=parse_result, statistics=statistics)

    def column_distribution(self, content: str, column: str) -> ColumnDistribution:
        """
        Top-N values of one raw column.

        Raises UnknownColumnError when the file has no such header.
        """

        parse_result = self.parse(content)
        if column not in parse_result.headers:
            raise UnknownColumnError(column=column, headers=parse_result.headers)

        entries = self._aggregator.analyze_column(parse_result.records, column)
        logger.info(
            "Column distribution column=%r distinct_shown=%d records=%d",
            column,
            len(entries),
            len(parse_result.records),
        )
        return ColumnDistribution(
            column=column,
            entries=entries,
            total_records=len(parse_result.records),
        )

    def find_records(
        self,
        content: str,
        *,
        search: str | None = None,
        page: int = 1,
    ) -> RecordPage:
        """
        Search the parsed records and return one page in source order.
        """

        parse_result = self.parse(content)
        matched = self._query.search(parse_result.records, search)
        return self._query.paginate(matched, page=page, page_size=self._page_size)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_analysis_service() -> AnalysisService:
    """
    Build and cache the analysis service with env-driven settings.
    """

    settings = get_analysis_settings()
    return AnalysisService(
        aggregator=AggregationService.from_settings(settings),
        page_size=get_upload_settings().page_size,
    )
