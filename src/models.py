"""
Data model for the wellness analytics core.

Source records (mood entries, biometric days, goals) are pydantic models so
fixture JSON is validated on load. Field names follow the dashboard's
camelCase JSON through aliases; Python code uses snake_case.

Derived records (energy breakdown, burnout assessment, insights) are frozen
dataclasses: they are recomputed per request and never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from analytics.stats_toolkit import round_half_up
from constants import (
    ENERGY_HIGH_ABOVE,
    ENERGY_LOW_BELOW,
    MOOD_NOTE_MAX_LEN,
    MOOD_SCORES,
)

log = logging.getLogger("models")

# BiometricRecord has a field named `date`; annotate it through this alias.
_Date = date

EnergyLevel = Literal["low", "medium", "high"]
GoalCategory = Literal["health", "work", "personal"]


def energy_level_for(score: float) -> str:
    """Map a 0-100 energy score onto the low/medium/high level."""
    if score > ENERGY_HIGH_ABOVE:
        return "high"
    if score < ENERGY_LOW_BELOW:
        return "low"
    return "medium"


def compute_progress(tasks: List["Task"]) -> int:
    """Percentage of completed tasks, rounded half-up. 0 for no tasks."""
    if not tasks:
        return 0
    done = sum(1 for t in tasks if t.completed)
    return int(round_half_up(100 * done / len(tasks)))


# ─── Source records ────────────────────────────────────────


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class MoodEntry(_Record):
    id: int
    mood_label: Literal["great", "good", "okay", "low", "poor"] = Field(
        validation_alias=AliasChoices("moodLabel", "mood", "mood_label"),
        serialization_alias="moodLabel",
    )
    mood_score: int = Field(ge=1, le=5, alias="moodScore")
    note: Optional[str] = Field(default=None, max_length=MOOD_NOTE_MAX_LEN)
    timestamp: datetime

    @field_validator("mood_label", mode="before")
    @classmethod
    def _lower_label(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("note", mode="before")
    @classmethod
    def _blank_note_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def _label_matches_score(self) -> "MoodEntry":
        expected = MOOD_SCORES[self.mood_label]
        if expected != self.mood_score:
            raise ValueError(
                f"mood label '{self.mood_label}' implies score {expected}, got {self.mood_score}"
            )
        return self

    @property
    def day(self) -> date:
        return self.timestamp.date()


class BiometricRecord(_Record):
    id: int
    date: _Date
    sleep_score: float = Field(ge=0, le=100, alias="sleepScore")
    sleep_hours: float = Field(ge=0, le=24, alias="sleepHours")
    hrv: float = Field(ge=0)
    resting_hr: float = Field(ge=0, alias="restingHR")
    energy_level: EnergyLevel = Field(alias="energyLevel")
    energy_score: float = Field(ge=0, le=100, alias="energyScore")

    @model_validator(mode="after")
    def _check_energy_level(self) -> "BiometricRecord":
        # Advisory only: stored level may lag behind a re-scored record.
        expected = energy_level_for(self.energy_score)
        if expected != self.energy_level:
            log.warning(
                "Biometric %s on %s has energyLevel=%s but energyScore=%s implies %s",
                self.id, self.date, self.energy_level, self.energy_score, expected,
            )
        return self


class Task(_Record):
    id: int
    title: str
    completed: bool = False


class Goal(_Record):
    id: int
    title: str
    category: GoalCategory
    progress: int = Field(default=0, ge=0, le=100)
    target_date: Optional[date] = Field(default=None, alias="targetDate")
    tasks: List[Task] = Field(default_factory=list)

    @model_validator(mode="after")
    def _progress_from_tasks(self) -> "Goal":
        if self.tasks:
            self.progress = compute_progress(self.tasks)
        return self


# ─── Derived records ───────────────────────────────────────


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class FactorBreakdown:
    score: float
    contribution: int
    impact: float


@dataclass(frozen=True)
class EnergyBreakdown:
    sleep: FactorBreakdown
    hrv: FactorBreakdown
    mood: FactorBreakdown
    correlation_strength: float
    energy_score: int
    energy_level: str
    mood_trend: float = 0.0
    mood_data_available: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


class BurnoutTier(str, Enum):
    INSUFFICIENT_DATA = "insufficient-data"
    LOW = "low"
    MILD = "mild"
    MODERATE = "moderate"
    HIGH = "high"


@dataclass(frozen=True)
class BurnoutAssessment:
    risk_tier: BurnoutTier
    level: int
    average_score: float
    recent_score: float
    decline: float
    recommendations: Tuple[str, ...] = ()
    entries: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))


@dataclass(frozen=True)
class GoalAdjustment:
    type: Literal["task-reduction", "mindfulness", "timeline"]
    action: str
    severity: Optional[int] = None
    duration: Optional[int] = None
    days: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class GoalAdjustmentPlan:
    risk_tier: BurnoutTier
    directives: Tuple[GoalAdjustment, ...]
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_tier": self.risk_tier.value,
            "directives": [d.to_dict() for d in self.directives],
            "message": self.message,
        }


class InsightKind(str, Enum):
    PRODUCTIVITY_PATTERN = "productivity_pattern"
    SLEEP_PRODUCTIVITY = "sleep_productivity"
    MOOD_TASK_CORRELATION = "mood_task_correlation"
    HRV_MINDFULNESS = "hrv_mindfulness"
    CONSISTENT_PERFORMANCE = "consistent_performance"
    OPTIMAL_BALANCE = "optimal_balance"
    SLEEP_IMPROVEMENT = "sleep_improvement"
    SLEEP_RECOVERY = "sleep_recovery"
    ENERGY_BOOST = "energy_boost"
    ENERGY_DIP = "energy_dip"
    ENERGY_STATUS = "energy_status"
    BURNOUT_RISK = "burnout_risk"


@dataclass(frozen=True)
class Insight:
    id: int
    title: str
    pattern: InsightKind
    period: str
    score: float
    summary: str
    recommendations: Tuple[str, ...]
    goal_correlation: Optional[str] = None
    confidence: float = 0.0
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return _plain(asdict(self))
