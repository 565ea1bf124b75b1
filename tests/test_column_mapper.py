from __future__ import annotations

import unittest

from incident_analytics.mappers.column_mapper import (
    CANONICAL_FIELDS,
    MATCH_EXACT,
    MATCH_SUBSTRING,
    ColumnMapper,
    deduplicate_headers,
)


class TestColumnMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = ColumnMapper()

    def test_resolves_japanese_export_headers_exactly(self) -> None:
        headers = ["総番号", "物件名", "対応者", "対応日", "対応月", "障害区分", "作業時間（分）"]

        mapping = self.mapper.build_mapping(headers)

        self.assertEqual(mapping.index_of("total_id"), 0)
        self.assertEqual(mapping.index_of("building_name"), 1)
        self.assertEqual(mapping.index_of("person"), 2)
        self.assertEqual(mapping.index_of("date"), 3)
        self.assertEqual(mapping.index_of("month"), 4)
        self.assertEqual(mapping.index_of("issue_category"), 5)
        self.assertEqual(mapping.index_of("duration_minutes"), 6)
        self.assertEqual(mapping.match_strategies["person"], MATCH_EXACT)

    def test_exact_match_wins_over_earlier_substring_match(self) -> None:
        headers = ["障害区分", "区分"]

        mapping = self.mapper.build_mapping(headers)

        self.assertEqual(mapping.index_of("category"), 1)
        self.assertEqual(mapping.index_of("issue_category"), 0)
        self.assertEqual(mapping.match_strategies["category"], MATCH_EXACT)

    def test_falls_back_to_substring_match(self) -> None:
        headers = ["受付No", "担当者名"]

        mapping = self.mapper.build_mapping(headers)

        self.assertEqual(mapping.index_of("person"), 1)
        self.assertEqual(mapping.match_strategies["person"], MATCH_SUBSTRING)

    def test_english_aliases_are_case_insensitive_and_trimmed(self) -> None:
        for header in ("Responder", "  ASSIGNEE ", "worker", "Handler", "PERSON"):
            with self.subTest(header=header):
                mapping = self.mapper.build_mapping(["Ticket", header])
                self.assertEqual(mapping.index_of("person"), 1)
                self.assertEqual(mapping.match_strategies["person"], MATCH_EXACT)

    def test_columns_may_be_shared_between_fields(self) -> None:
        mapping = self.mapper.build_mapping(["Issue Category"])

        self.assertEqual(mapping.index_of("issue_category"), 0)
        self.assertEqual(mapping.index_of("category"), 0)
        self.assertEqual(mapping.match_strategies["category"], MATCH_SUBSTRING)

    def test_unmatched_fields_are_unresolved(self) -> None:
        mapping = self.mapper.build_mapping(["foo", "bar"])

        self.assertIsNone(mapping.index_of("person"))
        self.assertIn("person", mapping.unresolved_fields)
        self.assertEqual(len(mapping.unresolved_fields), len(CANONICAL_FIELDS))
        self.assertIsNone(mapping.describe()["person"])

    def test_map_row_reads_missing_cells_as_empty(self) -> None:
        mapping = self.mapper.build_mapping(["対応者", "対応日", "作業時間（分）"])

        mapped = self.mapper.map_row(cells=["田中"], mapping=mapping)

        self.assertEqual(mapped["person"], "田中")
        self.assertEqual(mapped["date"], "")
        self.assertEqual(mapped["duration_minutes"], "")
        self.assertEqual(mapped["region"], "")
        self.assertEqual(set(mapped), set(CANONICAL_FIELDS))

    def test_custom_aliases_replace_defaults(self) -> None:
        mapper = ColumnMapper(aliases={"person": ("tech",)})

        mapping = mapper.build_mapping(["対応者", "Tech"])

        self.assertEqual(mapping.index_of("person"), 1)
        self.assertIsNone(mapping.index_of("date"))


class TestDeduplicateHeaders(unittest.TestCase):
    def test_repeated_names_get_incrementing_suffix(self) -> None:
        self.assertEqual(deduplicate_headers(["A", "A", "B"]), ("A", "A_1", "B"))
        self.assertEqual(deduplicate_headers(["A", "A", "A"]), ("A", "A_1", "A_2"))

    def test_empty_headers_become_column(self) -> None:
        self.assertEqual(deduplicate_headers(["", " ", "X"]), ("Column", "Column_1", "X"))

    def test_suffix_skips_names_already_taken(self) -> None:
        self.assertEqual(deduplicate_headers(["A", "A_1", "A"]), ("A", "A_1", "A_2"))

    def test_keys_are_always_unique(self) -> None:
        headers = deduplicate_headers(["A", "A", "A_1", "A_1", "", "Column"])
        self.assertEqual(len(headers), len(set(headers)))


if __name__ == "__main__":
    unittest.main()
