from __future__ import annotations

import logging
import os
import re

from fastapi import FastAPI

from incident_analytics.schemas.analysis import HealthResponse

API_VERSION = "1.0.0"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

_POSITIVE_INT_ENV = (
    "ANALYSIS_PERSON_MIN_COUNT",
    "ANALYSIS_PERFORMANCE_MIN_COUNT",
    "ANALYSIS_RELATIVE_MIN_FLOOR",
    "ANALYSIS_TOP_N",
    "ANALYSIS_MONTH_WINDOW",
    "ANALYSIS_WEEK_WINDOW",
    "UPLOAD_MAX_BYTES",
    "RECORDS_PAGE_SIZE",
)

_DIGITS = re.compile(r"[0-9]+")


def _validate_env() -> None:
    """
    Validate analysis-related environment variables at startup.

    Raises RuntimeError listing every invalid variable so the operator can
    fix all problems in one restart cycle.
    """

    from incident_analytics.config import load_env_files, read_threshold_policy

    load_env_files()

    errors: list[str] = []

    # --- Threshold policy ------------------------------------------------
    try:
        read_threshold_policy()
    except RuntimeError as exc:
        errors.append(str(exc))

    # --- Log level -------------------------------------------------------
    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        errors.append(
            f"LOG_LEVEL='{log_level}' is not valid. Allowed values: {sorted(_LOG_LEVELS)}."
        )

    # --- Numeric settings ------------------------------------------------
    for name in _POSITIVE_INT_ENV:
        raw_value = os.getenv(name, "").strip()
        if raw_value and (not _DIGITS.fullmatch(raw_value) or int(raw_value) < 1):
            errors.append(f"{name}='{raw_value}' must be a positive integer.")

    share_raw = os.getenv("ANALYSIS_RELATIVE_MIN_SHARE", "").strip()
    if share_raw:
        try:
            share = float(share_raw)
        except ValueError:
            share = 0.0
        if not 0.0 < share <= 1.0:
            errors.append(
                f"ANALYSIS_RELATIVE_MIN_SHARE='{share_raw}' must be a number in (0, 1]."
            )

    if errors:
        raise RuntimeError(
            "Startup validation failed: invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Incident Analytics API",
        version=API_VERSION,
    )

    from incident_analytics.api.routers import analysis_router

    application.include_router(analysis_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", version=API_VERSION)

    logging.getLogger(__name__).info("Incident analytics API initialised version=%s", API_VERSION)
    return application


app = create_app()
