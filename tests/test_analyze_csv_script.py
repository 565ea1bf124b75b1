from __future__ import annotations

import json
from pathlib import Path

import pytest

from scripts.analyze_csv import main

EXPORT = (
    "総番号,物件名,対応者,対応日,曜日\n"
    "1,Aビル,田中,2024/3/4,月\n"
    "2,Bビル,佐藤,2024/3/5,火\n"
)


@pytest.fixture()
def export_path(tmp_path: Path) -> Path:
    path = tmp_path / "export.csv"
    path.write_text(EXPORT, encoding="utf-8")
    return path


def test_prints_statistics(export_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(export_path)]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["total_records"] == 2
    assert [entry["name"] for entry in payload["by_month"]] == ["2024-03"]
    assert len(payload["by_day_of_week"]) == 7


def test_prints_column_distribution(
    export_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main([str(export_path), "--column", "物件名"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["column"] == "物件名"
    assert payload["entries"] == [{"name": "Aビル", "count": 1}, {"name": "Bビル", "count": 1}]


def test_unknown_column_exits_with_two(
    export_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main([str(export_path), "--column", "地域"]) == 2

    error = json.loads(capsys.readouterr().err)
    assert error["column"] == "地域"


def test_prints_matching_records(export_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main([str(export_path), "--search", "bビル"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["total_items"] == 1
    assert payload["items"][0]["person"] == "佐藤"


def test_missing_file(tmp_path: Path) -> None:
    assert main([str(tmp_path / "missing.csv")]) == 1


def test_non_utf8_file(tmp_path: Path) -> None:
    path = tmp_path / "sjis.csv"
    path.write_bytes("対応者\n田中\n".encode("shift_jis"))

    assert main([str(path)]) == 1
