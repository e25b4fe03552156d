"""Typed payloads produced by the pattern analyzer, one per insight kind."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class ProductivityPattern:
    day: str
    avg_energy: int
    avg_sleep: float
    composite_score: int
    days_observed: int


@dataclass(frozen=True)
class SleepProductivityPattern:
    optimal_sleep: float
    low_sleep: float
    difference: float
    high_energy_days: int
    low_energy_days: int


@dataclass(frozen=True)
class MoodTaskPattern:
    total_mood_dips: int
    task_related_dips: int
    avg_energy_on_mood_dips: int


@dataclass(frozen=True)
class MindfulnessPattern:
    mindfulness_impact: int
    total_mindfulness_days: int
    avg_mood_after_mindfulness: float
    avg_resting_hr: int
    exercise_days: int


@dataclass(frozen=True)
class ConsistencyPattern:
    consistency: float
    avg_energy: int


@dataclass(frozen=True)
class OptimalBalancePattern:
    sleep_score: int
    energy_score: int
    hrv: int


@dataclass(frozen=True)
class SleepTrendPattern:
    direction: Literal["improving", "declining"]
    change: float
    avg_sleep_score: int
    avg_sleep_hours: float


@dataclass(frozen=True)
class EnergyTrendPattern:
    direction: Literal["rising", "falling"]
    change: float
    avg_energy_score: int
