"""
incident_analytics/parsing/date_rules.py

Year / month derivation from loosely formatted date text.

Exports put the authoritative date in either the month column or the date
column, and the two may use different formats within the same file. The
derivation is therefore an explicit chain of extraction rules tried in
priority order; each rule either yields a candidate number or nothing.

Year (searched in ``month + " " + date``):
    1. a literal 2021..2026 anywhere
    2. the first two-digit token followed by ``/`` or ``-`` (21..26 -> 20xx)

Month (only once a year is known; month text first, then date text):
    1. ``YYYY<sep>M``    sep is one of 年 / -
    2. ``<sep>M``
    3. ``M月``            month text only
    4. bare 1..12       month text only

A candidate outside the accepted range is dropped and the next rule runs.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Protocol, Sequence

from incident_analytics.domain.service_record import SUPPORTED_YEAR_MAX, SUPPORTED_YEAR_MIN


class ExtractionRule(Protocol):
    name: str

    def extract(self, text: str) -> int | None:
        ...


@dataclass(frozen=True)
class PatternRule:
    """
    Regex rule yielding one capture group as an integer, plus an offset.
    """

    name: str
    pattern: re.Pattern[str]
    group: int = 1
    offset: int = 0

    def extract(self, text: str) -> int | None:
        match = self.pattern.search(text)
        if match is None:
            return None
        return int(match.group(self.group)) + self.offset


@dataclass(frozen=True)
class BareNumberRule:
    """
    Whole text is a one- or two-digit number.
    """

    name: str = "bare_number"

    def extract(self, text: str) -> int | None:
        stripped = text.strip()
        if not re.fullmatch(r"[0-9]{1,2}", stripped):
            return None
        return int(stripped)


_SUPPORTED_YEARS = "|".join(
    str(year) for year in range(SUPPORTED_YEAR_MIN, SUPPORTED_YEAR_MAX + 1)
)

FOUR_DIGIT_YEAR = PatternRule(
    name="four_digit_year",
    pattern=re.compile(f"({_SUPPORTED_YEARS})"),
)
TWO_DIGIT_YEAR = PatternRule(
    name="two_digit_year",
    pattern=re.compile(r"([0-9]{2})[/\-]"),
    offset=2000,
)

YEAR_MONTH_PATTERN = PatternRule(
    name="year_separator_month",
    pattern=re.compile(r"([0-9]{4})[年/\-]([0-9]{1,2})"),
    group=2,
)
SEPARATOR_MONTH_PATTERN = PatternRule(
    name="separator_month",
    pattern=re.compile(r"[年/\-]([0-9]{1,2})"),
)
KANJI_MONTH_PATTERN = PatternRule(
    name="kanji_month",
    pattern=re.compile(r"([0-9]{1,2})月"),
)
BARE_MONTH = BareNumberRule(name="bare_month")

YEAR_RULES: tuple[ExtractionRule, ...] = (FOUR_DIGIT_YEAR, TWO_DIGIT_YEAR)
MONTH_COLUMN_RULES: tuple[ExtractionRule, ...] = (
    YEAR_MONTH_PATTERN,
    SEPARATOR_MONTH_PATTERN,
    KANJI_MONTH_PATTERN,
    BARE_MONTH,
)
DATE_COLUMN_RULES: tuple[ExtractionRule, ...] = (
    YEAR_MONTH_PATTERN,
    SEPARATOR_MONTH_PATTERN,
)


@dataclass(frozen=True)
class DateDerivation:
    parsed_year: str = ""
    parsed_month_label: str = ""
    is_valid_year: bool = False
    is_valid_month: bool = False


def normalize_date_text(value: str | None) -> str:
    """
    Fold full-width digits and separators to ASCII before matching.
    """

    if not value:
        return ""
    return unicodedata.normalize("NFKC", value).strip()


def first_match(
    rules: Sequence[ExtractionRule],
    text: str,
    *,
    minimum: int,
    maximum: int,
) -> int | None:
    """
    Run rules in order and return the first candidate within [minimum, maximum].
    """

    if not text:
        return None
    for rule in rules:
        candidate = rule.extract(text)
        if candidate is not None and minimum <= candidate <= maximum:
            return candidate
    return None


def derive_year(month_text: str, date_text: str) -> str:
    combined = f"{month_text} {date_text}".strip()
    year = first_match(
        YEAR_RULES,
        combined,
        minimum=SUPPORTED_YEAR_MIN,
        maximum=SUPPORTED_YEAR_MAX,
    )
    return str(year) if year is not None else ""


def derive_month(month_text: str, date_text: str) -> int | None:
    month = first_match(MONTH_COLUMN_RULES, month_text, minimum=1, maximum=12)
    if month is None:
        month = first_match(DATE_COLUMN_RULES, date_text, minimum=1, maximum=12)
    return month


def derive_year_month(month_value: str | None, date_value: str | None) -> DateDerivation:
    """
    Derive year and ``YYYY-MM`` label from the raw month and date cells.

    Examples::

        derive_year_month("2024年3月", "")  -> 2024 / 2024-03
        derive_year_month("", "13/99")      -> no year
        derive_year_month("", "2020年1月")  -> no year (outside 2021..2026)
    """

    month_text = normalize_date_text(month_value)
    date_text = normalize_date_text(date_value)

    parsed_year = derive_year(month_text, date_text)
    if not parsed_year:
        return DateDerivation()

    month = derive_month(month_text, date_text)
    if month is None:
        return DateDerivation(parsed_year=parsed_year, is_valid_year=True)

    return DateDerivation(
        parsed_year=parsed_year,
        parsed_month_label=f"{parsed_year}-{month:02d}",
        is_valid_year=True,
        is_valid_month=True,
    )
