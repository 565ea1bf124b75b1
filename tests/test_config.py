"""
tests/test_config.py

Pytest unit tests for env-driven settings and threshold construction.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from incident_analytics.config import (
    THRESHOLD_POLICY_ABSOLUTE,
    THRESHOLD_POLICY_RELATIVE,
    get_analysis_settings,
    get_upload_settings,
    read_threshold_policy,
)
from incident_analytics.services.volume_thresholds import (
    AbsoluteThreshold,
    RelativeThreshold,
    build_thresholds,
)

_ENV_NAMES = (
    "ANALYSIS_THRESHOLD_POLICY",
    "ANALYSIS_PERSON_MIN_COUNT",
    "ANALYSIS_PERFORMANCE_MIN_COUNT",
    "ANALYSIS_RELATIVE_MIN_SHARE",
    "ANALYSIS_RELATIVE_MIN_FLOOR",
    "ANALYSIS_TOP_N",
    "ANALYSIS_MONTH_WINDOW",
    "ANALYSIS_WEEK_WINDOW",
    "UPLOAD_MAX_BYTES",
    "RECORDS_PAGE_SIZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_analysis_settings.cache_clear()
    get_upload_settings.cache_clear()
    yield
    get_analysis_settings.cache_clear()
    get_upload_settings.cache_clear()


class TestAnalysisSettings:
    def test_defaults(self) -> None:
        settings = get_analysis_settings()

        assert settings.threshold_policy == THRESHOLD_POLICY_ABSOLUTE
        assert settings.person_min_count == 1000
        assert settings.performance_min_count == 100
        assert settings.relative_min_share == 0.005
        assert settings.relative_min_floor == 50
        assert settings.top_n == 15
        assert settings.month_window == 3
        assert settings.week_window == 4

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_THRESHOLD_POLICY", "Relative")
        monkeypatch.setenv("ANALYSIS_TOP_N", "5")
        monkeypatch.setenv("ANALYSIS_RELATIVE_MIN_SHARE", "0.01")

        settings = get_analysis_settings()

        assert settings.threshold_policy == THRESHOLD_POLICY_RELATIVE
        assert settings.top_n == 5
        assert settings.relative_min_share == 0.01

    def test_invalid_numbers_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_PERSON_MIN_COUNT", "many")
        monkeypatch.setenv("ANALYSIS_MONTH_WINDOW", "-2")
        monkeypatch.setenv("ANALYSIS_RELATIVE_MIN_SHARE", "1.5")

        settings = get_analysis_settings()

        assert settings.person_min_count == 1000
        assert settings.month_window == 1
        assert settings.relative_min_share == 0.005

    def test_unknown_policy_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_THRESHOLD_POLICY", "adaptive")

        with pytest.raises(RuntimeError, match="ANALYSIS_THRESHOLD_POLICY"):
            read_threshold_policy()


class TestUploadSettings:
    def test_defaults(self) -> None:
        settings = get_upload_settings()

        assert settings.max_bytes == 50 * 1024 * 1024
        assert settings.page_size == 20

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("UPLOAD_MAX_BYTES", "1024")
        monkeypatch.setenv("RECORDS_PAGE_SIZE", "50")

        settings = get_upload_settings()

        assert settings.max_bytes == 1024
        assert settings.page_size == 50


class TestBuildThresholds:
    def test_absolute_policy(self) -> None:
        pair = build_thresholds(get_analysis_settings())

        assert pair.person == AbsoluteThreshold(min_count=1000)
        assert pair.performance == AbsoluteThreshold(min_count=100)

    def test_relative_policy_applies_to_both_views(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_THRESHOLD_POLICY", "relative")

        pair = build_thresholds(get_analysis_settings())

        assert pair.person == RelativeThreshold(share=0.005, floor=50)
        assert pair.performance == pair.person
