"""
incident_analytics/parsing/field_values.py

Best-effort coercion of raw cell text into canonical field values.

Nothing here raises: text that cannot be interpreted degrades to the zero
value of the target type.
"""

from __future__ import annotations

import re
import unicodedata

from incident_analytics.domain.service_record import DAY_OF_WEEK_ORDER

MAX_INTEGER_DIGITS = 15

_PLAIN_NUMBER = re.compile(r"(?P<sign>[+-]?)(?P<digits>[0-9]+)(?:\.[0-9]*)?")

_PARENTHETICAL = re.compile(r"[(（].*?[)）]")

_DAY_BRACKETS = str.maketrans("", "", "()[]（）［］【】")

_ENGLISH_DAY_PREFIXES: dict[str, str] = {
    "mon": "月",
    "tue": "火",
    "wed": "水",
    "thu": "木",
    "fri": "金",
    "sat": "土",
    "sun": "日",
}


def parse_int(value: str | None) -> int:
    """
    Parse an integer-valued cell; anything unparseable becomes 0.

    Only plain ``[+-]digits[.digits]`` text is read. Decimal text is
    truncated toward zero and thousands separators are ignored, so
    ``"1,234"`` reads as 1234 and ``"12.7"`` as 12. Exponent notation and
    values with more than 15 integer digits read as 0.
    """

    if not value:
        return 0
    text = unicodedata.normalize("NFKC", value).strip().replace(",", "")
    match = _PLAIN_NUMBER.fullmatch(text)
    if match is None:
        return 0

    digits = match.group("digits")
    if len(digits.lstrip("0")) > MAX_INTEGER_DIGITS:
        return 0
    number = int(digits)
    return -number if match.group("sign") == "-" else number


def clean_person_name(value: str | None) -> str:
    """
    Drop parenthetical shift/day annotations from a responder name.

    ``"田中(Mon)"`` and ``"田中（月）"`` both become ``"田中"``. Idempotent.
    """

    if not value:
        return ""
    return _PARENTHETICAL.sub("", value).strip()


def normalize_day_of_week(value: str | None) -> str:
    """
    Map weekday text to one of the seven canonical symbols, or "".

    Accepts the bare symbol, the long form (``"月曜日"``), bracketed forms
    (``"(月)"``) and English names or abbreviations.
    """

    if not value:
        return ""
    text = unicodedata.normalize("NFKC", value).translate(_DAY_BRACKETS).strip()
    if not text:
        return ""
    if text[0] in DAY_OF_WEEK_ORDER:
        return text[0]
    return _ENGLISH_DAY_PREFIXES.get(text[:3].lower(), "")
