"""
Tests for the weekly report CLI.
"""

import json
import os
from datetime import date

from weekly_report import build_report, latest_biometric_day, main

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")


def test_latest_biometric_day(fixture_stores):
    assert latest_biometric_day(fixture_stores) == date(2024, 10, 24)


def test_build_report_defaults_to_latest_day(fixture_stores):
    report = build_report(fixture_stores)
    assert report["reference_date"] == "2024-10-24"
    assert report["period"] == "Oct 20 - Oct 26"
    assert report["burnout"]["risk_tier"] == "moderate"
    assert len(report["insights"]) == 8


def test_build_report_limit(fixture_stores):
    assert len(build_report(fixture_stores, limit=2)["insights"]) == 2


def test_main_json(capsys):
    assert main(["--data-dir", DATA_DIR, "--json", "--limit", "3"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert [i["pattern"] for i in report["insights"]] == [
        "productivity_pattern", "energy_status", "sleep_productivity",
    ]
    assert report["energy"]["energy_score"] == 84


def test_main_text(capsys):
    assert main(["--data-dir", DATA_DIR, "--date", "2024-10-24"]) == 0
    out = capsys.readouterr().out
    assert "FlowSync weekly report (Oct 20 - Oct 26)" in out
    assert "Burnout risk: moderate" in out
    assert "1. [172] Productivity Pattern Discovered" in out


def test_main_past_date_uses_moods_up_to_that_day(capsys):
    assert main(["--data-dir", DATA_DIR, "--date", "2024-10-18", "--json"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["burnout"]["recent_score"] == 2.67
    assert report["energy"]["mood"]["score"] == 3.14


def test_main_empty_data_dir(tmp_path, capsys):
    assert main(["--data-dir", str(tmp_path)]) == 0
    assert "No insights this week" in capsys.readouterr().out


def test_main_invalid_fixture(tmp_path):
    (tmp_path / "moods.json").write_text('[{"id": 1, "mood": "great", "moodScore": 1}]')
    assert main(["--data-dir", str(tmp_path)]) == 1
