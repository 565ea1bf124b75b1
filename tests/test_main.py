"""
tests/test_main.py

Pytest unit tests for startup environment validation.
"""

from __future__ import annotations

import pytest

from incident_analytics.main import _POSITIVE_INT_ENV, _validate_env


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (*_POSITIVE_INT_ENV, "ANALYSIS_RELATIVE_MIN_SHARE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("ANALYSIS_THRESHOLD_POLICY", raising=False)


class TestValidateEnv:
    def test_defaults_pass(self) -> None:
        _validate_env()

    def test_valid_overrides_pass(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_THRESHOLD_POLICY", "relative")
        monkeypatch.setenv("ANALYSIS_TOP_N", "10")
        monkeypatch.setenv("ANALYSIS_RELATIVE_MIN_SHARE", "0.01")
        monkeypatch.setenv("UPLOAD_MAX_BYTES", "1048576")

        _validate_env()

    @pytest.mark.parametrize("name", _POSITIVE_INT_ENV)
    @pytest.mark.parametrize("raw_value", ["many", "0", "-3", "1.5"])
    def test_rejects_bad_integer(
        self, monkeypatch: pytest.MonkeyPatch, name: str, raw_value: str
    ) -> None:
        monkeypatch.setenv(name, raw_value)

        with pytest.raises(RuntimeError, match=name):
            _validate_env()

    @pytest.mark.parametrize("raw_value", ["abc", "0", "1.5", "-0.1", "nan"])
    def test_rejects_bad_share(self, monkeypatch: pytest.MonkeyPatch, raw_value: str) -> None:
        monkeypatch.setenv("ANALYSIS_RELATIVE_MIN_SHARE", raw_value)

        with pytest.raises(RuntimeError, match="ANALYSIS_RELATIVE_MIN_SHARE"):
            _validate_env()

    def test_collects_every_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_THRESHOLD_POLICY", "adaptive")
        monkeypatch.setenv("ANALYSIS_MONTH_WINDOW", "zero")
        monkeypatch.setenv("ANALYSIS_RELATIVE_MIN_SHARE", "2")
        monkeypatch.setenv("LOG_LEVEL", "loud")

        with pytest.raises(RuntimeError) as exc_info:
            _validate_env()

        message = str(exc_info.value)
        assert "ANALYSIS_THRESHOLD_POLICY" in message
        assert "ANALYSIS_MONTH_WINDOW" in message
        assert "ANALYSIS_RELATIVE_MIN_SHARE" in message
        assert "LOG_LEVEL" in message
