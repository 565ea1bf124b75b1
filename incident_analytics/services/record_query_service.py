"""
incident_analytics/services/record_query_service.py

Search and paging over parsed records for table display.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Sequence

from incident_analytics.domain.service_record import ServiceRecord

DEFAULT_PAGE_SIZE = 20

_SCALAR_FIELDS: tuple[str, ...] = tuple(
    item.name
    for item in fields(ServiceRecord)
    if item.name not in {"raw", "is_valid_year", "is_valid_month"}
)


@dataclass(frozen=True)
class RecordPage:
    """
    One page of records. ``total_pages`` is at least 1 even when empty.
    """

    items: list[ServiceRecord]
    page: int
    page_size: int
    total_items: int
    total_pages: int


class RecordQueryService:
    """
    Case-insensitive search and 1-based pagination, preserving source order.
    """

    def search(self, records: Sequence[ServiceRecord], term: str | None) -> list[ServiceRecord]:
        """
        Keep records where any field value or raw cell contains ``term``.
        """

        needle = (term or "").strip().lower()
        if not needle:
            return list(records)
        return [record for record in records if self._matches(record, needle)]

    def paginate(
        self,
        records: Sequence[ServiceRecord],
        *,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> RecordPage:
        """
        Slice one page; out-of-range page numbers are clamped.
        """

        size = max(1, page_size)
        total_items = len(records)
        total_pages = max(1, math.ceil(total_items / size))
        current = min(max(1, page), total_pages)
        start = (current - 1) * size
        return RecordPage(
            items=list(records[start:start + size]),
            page=current,
            page_size=size,
            total_items=total_items,
            total_pages=total_pages,
        )

    @staticmethod
    def _matches(record: ServiceRecord, needle: str) -> bool:
        for name in _SCALAR_FIELDS:
            if needle in str(getattr(record, name)).lower():
                return True
        return any(needle in value.lower() for value in record.raw.values())
