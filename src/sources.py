"""
Collaborator sources for the analytics core.

The core only reads through the three protocols below. The in-memory
stores implement them for the API, the CLI and tests; they own their
records and hand out copies, so callers can never mutate stored state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol, Union

import config
from constants import DEFAULT_BIOMETRIC
from errors import NotFoundError
from models import BiometricRecord, Goal, MoodEntry, compute_progress

log = logging.getLogger("sources")


# ─── Protocols ─────────────────────────────────────────────


class MoodSource(Protocol):
    def recent(self, n: int, until: Optional[date] = None) -> List[MoodEntry]:
        """Up to ``n`` latest entries logged on or before ``until``, oldest first."""
        ...


class BiometricSource(Protocol):
    def for_date(self, day: date) -> BiometricRecord:
        ...

    def range(self, start: date, end: date) -> List[BiometricRecord]:
        ...


class GoalSource(Protocol):
    def all(self) -> List[Goal]:
        ...


# ─── In-memory stores ──────────────────────────────────────


class _Store:
    model: Any = None
    kind = "record"

    def __init__(self, records: Iterable[Any] = ()):
        self._records: Dict[int, Any] = {}
        for rec in records:
            self.create(rec)

    def _coerce(self, data: Union[Dict[str, Any], Any]):
        if isinstance(data, self.model):
            return data.model_copy(deep=True)
        return self.model.model_validate(data)

    def _next_id(self) -> int:
        return max(self._records, default=0) + 1

    def __len__(self) -> int:
        return len(self._records)

    def create(self, data: Union[Dict[str, Any], Any]):
        if isinstance(data, dict) and data.get("id") is None:
            data = {**data, "id": self._next_id()}
        rec = self._coerce(data)
        self._records[rec.id] = rec
        return rec.model_copy(deep=True)

    def get(self, record_id: int):
        rec = self._records.get(record_id)
        if rec is None:
            raise NotFoundError(self.kind, record_id)
        return rec.model_copy(deep=True)

    def _field_names(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Re-key ``data`` by field name; aliases and field names both accepted."""
        lookup: Dict[str, str] = {}
        for name, info in self.model.model_fields.items():
            lookup[name] = name
            if info.alias:
                lookup[info.alias] = name
            choices = getattr(info.validation_alias, "choices", [info.validation_alias])
            for alias in choices:
                if isinstance(alias, str):
                    lookup[alias] = name
        renamed = {}
        for key, value in data.items():
            if key in lookup:
                renamed[lookup[key]] = value
            else:
                log.debug("Ignoring unknown %s field %r", self.kind, key)
        return renamed

    def update(self, record_id: int, data: Dict[str, Any]):
        current = self.get(record_id)
        merged = {**current.model_dump(), **self._field_names(data), "id": record_id}
        rec = self.model.model_validate(merged)
        self._records[record_id] = rec
        return rec.model_copy(deep=True)

    def delete(self, record_id: int) -> None:
        if record_id not in self._records:
            raise NotFoundError(self.kind, record_id)
        del self._records[record_id]

    def list(self) -> List[Any]:
        return [r.model_copy(deep=True) for r in self._records.values()]


class InMemoryMoodStore(_Store):
    model = MoodEntry
    kind = "mood entry"

    def create(self, data: Union[Dict[str, Any], Any]):
        if isinstance(data, dict) and not data.get("timestamp"):
            data = {**data, "timestamp": datetime.now()}
        return super().create(data)

    def recent(self, n: int, until: Optional[date] = None) -> List[MoodEntry]:
        if n <= 0:
            return []
        rows = [m for m in self._records.values() if until is None or m.day <= until]
        ordered = sorted(rows, key=lambda m: (m.timestamp, m.id))
        return [m.model_copy(deep=True) for m in ordered[-n:]]


class InMemoryBiometricStore(_Store):
    model = BiometricRecord
    kind = "biometric record"

    def for_date(self, day: date) -> BiometricRecord:
        """Stored record for ``day``, or the default day when nothing was recorded."""
        matches = [r for r in self._records.values() if r.date == day]
        if matches:
            return max(matches, key=lambda r: r.id).model_copy(deep=True)
        log.debug("No biometric record for %s, using default day", day)
        return BiometricRecord.model_validate({"id": 0, "date": day, **DEFAULT_BIOMETRIC})

    def range(self, start: date, end: date) -> List[BiometricRecord]:
        rows = [r for r in self._records.values() if start <= r.date <= end]
        return [r.model_copy(deep=True) for r in sorted(rows, key=lambda r: (r.date, r.id))]


class InMemoryGoalStore(_Store):
    model = Goal
    kind = "goal"

    def all(self) -> List[Goal]:
        return self.list()

    def toggle_task(self, goal_id: int, task_id: int) -> Goal:
        """Flip a task's completion flag and recompute the goal's progress."""
        goal = self._records.get(goal_id)
        if goal is None:
            raise NotFoundError(self.kind, goal_id)
        task = next((t for t in goal.tasks if t.id == task_id), None)
        if task is None:
            raise NotFoundError("task", task_id)
        task.completed = not task.completed
        goal.progress = compute_progress(goal.tasks)
        return goal.model_copy(deep=True)


# ─── Fixtures ──────────────────────────────────────────────


@dataclass
class FixtureStores:
    moods: InMemoryMoodStore
    biometrics: InMemoryBiometricStore
    goals: InMemoryGoalStore


def _read_json(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        log.warning("Fixture file missing: %s", path)
        return []
    with path.open(encoding="utf-8") as fh:
        rows = json.load(fh)
    if not isinstance(rows, list):
        raise ValueError(f"{path.name}: expected a JSON list, got {type(rows).__name__}")
    return rows


def load_fixture_stores(data_dir: Optional[Union[str, Path]] = None) -> FixtureStores:
    """Build the three stores from moods.json, biometrics.json and goals.json."""
    root = Path(config.DATA_DIR if data_dir is None else data_dir)
    stores = FixtureStores(
        moods=InMemoryMoodStore(_read_json(root / "moods.json")),
        biometrics=InMemoryBiometricStore(_read_json(root / "biometrics.json")),
        goals=InMemoryGoalStore(_read_json(root / "goals.json")),
    )
    log.info(
        "Loaded fixtures from %s: %d moods, %d biometric days, %d goals",
        root, len(stores.moods), len(stores.biometrics), len(stores.goals),
    )
    return stores
