"""
incident_analytics/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

THRESHOLD_POLICY_ABSOLUTE = "absolute"
THRESHOLD_POLICY_RELATIVE = "relative"
_ALLOWED_THRESHOLD_POLICIES = {THRESHOLD_POLICY_ABSOLUTE, THRESHOLD_POLICY_RELATIVE}


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def read_threshold_policy() -> str:
    """
    Read and validate ANALYSIS_THRESHOLD_POLICY.

    Raises RuntimeError for anything other than 'absolute' or 'relative'
    so a typo never silently changes which responders are reported.
    """

    raw = _get_str_env("ANALYSIS_THRESHOLD_POLICY", THRESHOLD_POLICY_ABSOLUTE)
    policy = raw.lower()
    if policy not in _ALLOWED_THRESHOLD_POLICIES:
        raise RuntimeError(
            f"ANALYSIS_THRESHOLD_POLICY '{raw}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_THRESHOLD_POLICIES)}."
        )
    return policy


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Runtime settings for the aggregation engine.

    ``threshold_policy`` selects how responders are filtered out of the
    person and performance views: fixed minimum counts (``absolute``) or a
    share of all records with a floor (``relative``).
    """

    threshold_policy: str = THRESHOLD_POLICY_ABSOLUTE
    person_min_count: int = 1000
    performance_min_count: int = 100
    relative_min_share: float = 0.005
    relative_min_floor: int = 50
    top_n: int = 15
    month_window: int = 3
    week_window: int = 4


@dataclass(frozen=True)
class UploadSettings:
    """
    Limits applied to uploaded files by the HTTP layer.
    """

    max_bytes: int = 50 * 1024 * 1024
    page_size: int = 20


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached aggregation settings from environment variables.
    """

    share = _get_float_env("ANALYSIS_RELATIVE_MIN_SHARE", 0.005)
    if not 0.0 < share <= 1.0:
        share = 0.005

    return AnalysisSettings(
        threshold_policy=read_threshold_policy(),
        person_min_count=max(1, _get_int_env("ANALYSIS_PERSON_MIN_COUNT", 1000)),
        performance_min_count=max(1, _get_int_env("ANALYSIS_PERFORMANCE_MIN_COUNT", 100)),
        relative_min_share=share,
        relative_min_floor=max(1, _get_int_env("ANALYSIS_RELATIVE_MIN_FLOOR", 50)),
        top_n=max(1, _get_int_env("ANALYSIS_TOP_N", 15)),
        month_window=max(1, _get_int_env("ANALYSIS_MONTH_WINDOW", 3)),
        week_window=max(1, _get_int_env("ANALYSIS_WEEK_WINDOW", 4)),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        max_bytes=max(1, _get_int_env("UPLOAD_MAX_BYTES", 50 * 1024 * 1024)),
        page_size=max(1, _get_int_env("RECORDS_PAGE_SIZE", 20)),
    )
