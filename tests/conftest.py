"""
Shared test configuration.

Adds src/ to sys.path so flat modules (insight_engine, models, sources, ...)
and the analytics/pipeline packages import the same way they do at runtime.
Also provides record factories and a fresh copy of the fixture stores.
"""

import os
import sys
from datetime import date, datetime, time

import pytest

_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_src_dir = os.path.join(_project_root, "src")

if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from models import BiometricRecord, MoodEntry, energy_level_for  # noqa: E402
from sources import load_fixture_stores  # noqa: E402

DATA_DIR = os.path.join(_project_root, "data")

# Last day of the fixture week
FIXTURE_END = date(2024, 10, 24)

_LABELS = {5: "great", 4: "good", 3: "okay", 2: "low", 1: "poor"}


@pytest.fixture
def make_bio():
    """Factory for BiometricRecord with defaults matching a 'medium' day."""

    def _make(day, sleep_score=78, sleep_hours=7.5, hrv=42, resting_hr=65,
              energy_score=72, record_id=None):
        return BiometricRecord.model_validate({
            "id": record_id if record_id is not None else day.toordinal(),
            "date": day,
            "sleepScore": sleep_score,
            "sleepHours": sleep_hours,
            "hrv": hrv,
            "restingHR": resting_hr,
            "energyLevel": energy_level_for(energy_score),
            "energyScore": energy_score,
        })

    return _make


@pytest.fixture
def make_mood():
    """Factory for MoodEntry; a plain date is logged at 20:00 that evening."""
    counter = {"id": 0}

    def _make(when, score, note=None):
        counter["id"] += 1
        ts = when if isinstance(when, datetime) else datetime.combine(when, time(20, 0))
        return MoodEntry.model_validate({
            "id": counter["id"],
            "mood": _LABELS[score],
            "moodScore": score,
            "note": note,
            "timestamp": ts,
        })

    return _make


@pytest.fixture
def fixture_stores():
    return load_fixture_stores(DATA_DIR)
