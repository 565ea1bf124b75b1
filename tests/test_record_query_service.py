from __future__ import annotations

import pytest

from incident_analytics.domain.service_record import ServiceRecord
from incident_analytics.services.record_query_service import RecordQueryService


@pytest.fixture()
def query() -> RecordQueryService:
    return RecordQueryService()


@pytest.fixture()
def records() -> list[ServiceRecord]:
    return [
        ServiceRecord(total_id=1, person="田中", building_name="Aビル", raw={"備考": "Door jam"}),
        ServiceRecord(total_id=2, person="佐藤", building_name="Bビル", raw={"備考": ""}),
        ServiceRecord(total_id=3, person="Tanaka", building_name="Cタワー", raw={"備考": "DOOR"}),
    ]


class TestSearch:
    def test_matches_canonical_fields(
        self, query: RecordQueryService, records: list[ServiceRecord]
    ) -> None:
        assert [record.total_id for record in query.search(records, "田中")] == [1]

    def test_matches_raw_cells_case_insensitively(
        self, query: RecordQueryService, records: list[ServiceRecord]
    ) -> None:
        assert [record.total_id for record in query.search(records, "door")] == [1, 3]

    def test_matches_integer_fields_as_text(
        self, query: RecordQueryService, records: list[ServiceRecord]
    ) -> None:
        assert [record.total_id for record in query.search(records, "2")] == [2]

    @pytest.mark.parametrize("term", [None, "", "   "])
    def test_blank_term_returns_everything(
        self, query: RecordQueryService, records: list[ServiceRecord], term: str | None
    ) -> None:
        assert query.search(records, term) == records

    def test_no_match(self, query: RecordQueryService, records: list[ServiceRecord]) -> None:
        assert query.search(records, "存在しない") == []


class TestPaginate:
    def test_pages_are_sliced_in_order(self, query: RecordQueryService) -> None:
        rows = [ServiceRecord(total_id=index) for index in range(45)]

        page = query.paginate(rows, page=3, page_size=20)

        assert page.total_items == 45
        assert page.total_pages == 3
        assert page.page == 3
        assert [record.total_id for record in page.items] == list(range(40, 45))

    @pytest.mark.parametrize(("requested", "expected"), [(0, 1), (-5, 1), (99, 3)])
    def test_page_is_clamped(
        self, query: RecordQueryService, requested: int, expected: int
    ) -> None:
        rows = [ServiceRecord(total_id=index) for index in range(45)]

        assert query.paginate(rows, page=requested, page_size=20).page == expected

    def test_empty_input_has_one_page(self, query: RecordQueryService) -> None:
        page = query.paginate([], page=1)

        assert page.items == []
        assert page.total_pages == 1
        assert page.total_items == 0
        assert page.page_size == 20
