"""
incident_analytics/mappers/column_mapper.py

Column mapping from arbitrary export headers to canonical record fields.

Exports from different offices name the same column differently, so no
column position is assumed. Each canonical field carries an ordered alias
list and is resolved once per file in two passes:

    1. exact   - trimmed, case-insensitive equality with any alias
    2. substring - header contains an alias (case-insensitive)

The substring pass only runs when no alias matched exactly. Columns are
not reserved: two fields may resolve to the same header.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

CANONICAL_FIELDS: tuple[str, ...] = (
    "term",
    "total_id",
    "month_id",
    "machine_id",
    "link",
    "building_name",
    "category",
    "issue_details",
    "response_time",
    "person",
    "region",
    "ward",
    "date",
    "month",
    "week_of_month",
    "week_of_year",
    "day_of_week",
    "issue_category",
    "level",
    "level2",
    "version",
    "type",
    "model",
    "locker_spec",
    "request_id",
    "start_time",
    "end_time",
    "duration_minutes",
)

INTEGER_FIELDS: frozenset[str] = frozenset(
    {
        "term",
        "total_id",
        "month_id",
        "machine_id",
        "week_of_month",
        "week_of_year",
        "duration_minutes",
    }
)

DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "term": ("期", "term", "period"),
    "total_id": ("総番号", "No", "ＩＤ", "ID", "total id"),
    "month_id": ("月番号", "month id", "monthly no"),
    "machine_id": ("号機", "機番", "機器ＩＤ", "機器ID", "machine", "unit no"),
    "link": ("FCリンク", "FCリンク先", "link", "url"),
    "building_name": ("物件名", "建物", "物件", "設置先", "building", "property", "site"),
    "category": ("区分", "作業区分", "category"),
    "issue_details": ("障害内容", "内容", "詳細", "issue details", "details", "description"),
    "response_time": ("対応時間", "response time"),
    "person": (
        "対応者",
        "担当者",
        "作業員",
        "担当",
        "人",
        "responder",
        "assignee",
        "worker",
        "handler",
        "person",
    ),
    "region": ("地域", "エリア", "拠点", "支店", "region", "area", "branch"),
    "ward": ("区県別", "ward", "prefecture"),
    "date": ("対応日", "作業日", "日付", "受付日", "完了日", "実施日", "年月日", "date"),
    "month": ("対応月", "作業月", "対象月", "month"),
    "week_of_month": ("対応週（月）", "週（月）", "week of month"),
    "week_of_year": ("対応週（年）", "週（年）", "week of year"),
    "day_of_week": ("曜日", "day of week", "weekday"),
    "issue_category": (
        "障害区分",
        "故障区分",
        "分類",
        "種別",
        "カテゴリ",
        "issue category",
        "failure category",
        "failure type",
    ),
    "level": ("Level", "レベル"),
    "level2": ("Level2",),
    "version": ("Ver", "バージョン", "version"),
    "type": ("type", "タイプ"),
    "model": ("型式", "モデル", "model"),
    "locker_spec": ("ロッカー仕様", "locker spec"),
    "request_id": ("依頼番号", "リクエスト", "受付番号", "request id", "request no"),
    "start_time": ("作業開始時間", "開始時間", "着工", "start time"),
    "end_time": ("作業終了時間", "終了時間", "完了時", "end time"),
    "duration_minutes": ("作業時間（分）", "作業時間", "時間分", "duration", "minutes"),
}

EMPTY_HEADER_NAME = "Column"

MATCH_EXACT = "exact"
MATCH_SUBSTRING = "substring"


def normalize_header(header: str) -> str:
    """
    Normalize a column name for case-insensitive matching.
    """

    return header.strip().lower()


def deduplicate_headers(raw_headers: Sequence[str]) -> tuple[str, ...]:
    """
    Give every header a unique name.

    Empty headers become ``Column``; repeats get ``_1``, ``_2``, ... in
    order of appearance, skipping any suffix already taken by a literal
    header.
    """

    headers: list[str] = []
    taken: set[str] = set()
    repeat_counts: dict[str, int] = {}

    for raw in raw_headers:
        base = raw.strip() or EMPTY_HEADER_NAME
        name = base
        if base in repeat_counts or base in taken:
            count = repeat_counts.get(base, 0)
            while True:
                count += 1
                name = f"{base}_{count}"
                if name not in taken:
                    break
            repeat_counts[base] = count
        else:
            repeat_counts[base] = 0
        taken.add(name)
        headers.append(name)

    return tuple(headers)


@dataclass(frozen=True)
class ColumnMapping:
    """
    Resolved mapping between canonical fields and source header positions.
    """

    canonical_to_index: dict[str, int]
    match_strategies: dict[str, str]
    source_headers: tuple[str, ...]

    def index_of(self, canonical_field: str) -> int | None:
        return self.canonical_to_index.get(canonical_field)

    @property
    def unresolved_fields(self) -> tuple[str, ...]:
        return tuple(
            name for name in CANONICAL_FIELDS if name not in self.canonical_to_index
        )

    def describe(self) -> dict[str, str | None]:
        """
        Canonical field -> source header name (None when unresolved).
        """

        return {
            name: (
                self.source_headers[self.canonical_to_index[name]]
                if name in self.canonical_to_index
                else None
            )
            for name in CANONICAL_FIELDS
        }


class ColumnMapper:
    """
    Maps incoming export columns to canonical record fields.
    """

    def __init__(self, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        alias_map = aliases or DEFAULT_COLUMN_ALIASES
        self._aliases: dict[str, tuple[str, ...]] = {
            canonical: tuple(values)
            for canonical, values in alias_map.items()
        }

    def build_mapping(self, headers: Sequence[str]) -> ColumnMapping:
        """
        Resolve every canonical field against one file's header row.

        Unresolved fields are simply absent from the mapping; the caller
        treats them as zero-valued.
        """

        normalized_headers = [normalize_header(header) for header in headers]

        indexes: dict[str, int] = {}
        strategies: dict[str, str] = {}
        for canonical_field in CANONICAL_FIELDS:
            candidates = [
                normalize_header(alias)
                for alias in self._aliases.get(canonical_field, ())
                if alias.strip()
            ]

            index = self._find_exact_match(candidates, normalized_headers)
            strategy = MATCH_EXACT
            if index is None:
                index = self._find_substring_match(candidates, normalized_headers)
                strategy = MATCH_SUBSTRING
            if index is None:
                continue

            indexes[canonical_field] = index
            strategies[canonical_field] = strategy

        return ColumnMapping(
            canonical_to_index=indexes,
            match_strategies=strategies,
            source_headers=tuple(headers),
        )

    def map_row(
        self,
        *,
        cells: Sequence[str],
        mapping: ColumnMapping,
    ) -> dict[str, str]:
        """
        Pick canonical raw field values out of one split row.

        Unresolved fields and cells past the end of a short row read as "".
        """

        mapped: dict[str, str] = {}
        for canonical_field in CANONICAL_FIELDS:
            index = mapping.index_of(canonical_field)
            if index is None or index >= len(cells):
                mapped[canonical_field] = ""
            else:
                mapped[canonical_field] = cells[index]
        return mapped

    @staticmethod
    def _find_exact_match(
        candidates: Sequence[str],
        normalized_headers: Sequence[str],
    ) -> int | None:
        for candidate in candidates:
            for index, header in enumerate(normalized_headers):
                if header == candidate:
                    return index
        return None

    @staticmethod
    def _find_substring_match(
        candidates: Sequence[str],
        normalized_headers: Sequence[str],
    ) -> int | None:
        for candidate in candidates:
            for index, header in enumerate(normalized_headers):
                if candidate in header:
                    return index
        return None
