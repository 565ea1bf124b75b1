"""
incident_analytics/api/dependencies.py

Shared FastAPI dependencies for upload validation.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, UploadFile, status

from incident_analytics.config import UploadSettings, get_upload_settings
from incident_analytics.services.analysis_service import AnalysisInputError, AnalysisService

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def get_csv_text(
    file: UploadFile = Depends(get_csv_upload),
    settings: UploadSettings = Depends(get_upload_settings),
) -> str:
    """
    Read the whole upload into text, enforcing the configured size cap.
    """

    try:
        payload = file.file.read(settings.max_bytes + 1)
    finally:
        file.file.close()

    if len(payload) > settings.max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"CSV exceeds the {settings.max_bytes}-byte upload limit.",
        )

    try:
        return AnalysisService.decode(payload)
    except AnalysisInputError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
