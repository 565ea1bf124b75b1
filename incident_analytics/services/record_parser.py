"""
incident_analytics/services/record_parser.py

Record parser: raw export text -> ordered canonical service records.

Parsing is best-effort. A file with fewer than two lines yields an empty
result. Unresolved columns, short rows, unparseable numbers and undatable
text degrade to zero values on the affected field and never abort the file.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from incident_analytics.domain.service_record import ParseResult, ServiceRecord
from incident_analytics.logging_utils import log_event
from incident_analytics.mappers.column_mapper import (
    CANONICAL_FIELDS,
    INTEGER_FIELDS,
    ColumnMapper,
    ColumnMapping,
    deduplicate_headers,
)
from incident_analytics.parsing.csv_lines import is_blank_line, split_line, split_lines
from incident_analytics.parsing.date_rules import derive_year_month
from incident_analytics.parsing.field_values import (
    clean_person_name,
    normalize_day_of_week,
    parse_int,
)

logger = logging.getLogger(__name__)

DEFAULT_DEBUG_ROWS = 3


class RecordParser:
    """
    Converts one uploaded export into canonical service records.
    """

    def __init__(
        self,
        *,
        mapper: ColumnMapper | None = None,
        debug_rows: int = DEFAULT_DEBUG_ROWS,
    ) -> None:
        self._mapper = mapper or ColumnMapper()
        self._debug_rows = max(0, debug_rows)

    def parse(self, content: str) -> ParseResult:
        """
        Parse a whole file's text.

        Returns records in source row order together with the deduplicated
        header names. Blank data lines are skipped.
        """

        lines = split_lines(content)
        if len(lines) < 2:
            logger.info("Export has no data rows lines=%d; returning empty result", len(lines))
            return ParseResult()

        headers = deduplicate_headers(split_line(lines[0]))
        mapping = self._mapper.build_mapping(headers)
        log_event(
            logger,
            logging.DEBUG,
            "column_mapping_resolved",
            mapping=mapping.describe(),
            strategies=mapping.match_strategies,
            unresolved=list(mapping.unresolved_fields),
        )

        records: list[ServiceRecord] = []
        for row_number, line in enumerate(lines[1:], start=2):
            if is_blank_line(line):
                continue

            record = self.parse_row(split_line(line), headers=headers, mapping=mapping)
            if len(records) < self._debug_rows:
                log_event(
                    logger,
                    logging.DEBUG,
                    "row_dates_derived",
                    row_number=row_number,
                    date=record.date,
                    month=record.month,
                    parsed_year=record.parsed_year,
                    parsed_month_label=record.parsed_month_label,
                )
            records.append(record)

        logger.info(
            "Parsed export rows=%d columns=%d valid_year=%d valid_month=%d unresolved_fields=%d",
            len(records),
            len(headers),
            sum(1 for record in records if record.is_valid_year),
            sum(1 for record in records if record.is_valid_month),
            len(mapping.unresolved_fields),
        )
        return ParseResult(records=tuple(records), headers=headers)

    def parse_row(
        self,
        cells: Sequence[str],
        *,
        headers: Sequence[str],
        mapping: ColumnMapping,
    ) -> ServiceRecord:
        """
        Build one canonical record from an already split row.
        """

        mapped = self._mapper.map_row(cells=cells, mapping=mapping)

        values: dict[str, Any] = {}
        for field_name in CANONICAL_FIELDS:
            text = mapped[field_name]
            values[field_name] = parse_int(text) if field_name in INTEGER_FIELDS else text

        values["person"] = clean_person_name(mapped["person"])
        values["day_of_week"] = normalize_day_of_week(mapped["day_of_week"])

        derivation = derive_year_month(mapped["month"], mapped["date"])
        raw = {
            header: cells[index] if index < len(cells) else ""
            for index, header in enumerate(headers)
        }

        return ServiceRecord(
            **values,
            parsed_year=derivation.parsed_year,
            parsed_month_label=derivation.parsed_month_label,
            is_valid_year=derivation.is_valid_year,
            is_valid_month=derivation.is_valid_month,
            raw=raw,
        )


def parse_records(content: str) -> ParseResult:
    """
    Parse export text with the default column aliases.
    """

    return RecordParser().parse(content)
