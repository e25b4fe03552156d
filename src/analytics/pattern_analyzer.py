"""
Pattern analyzer: independent weekly analyses over biometric and mood data.

Each analysis returns a PatternResult. A result either carries a typed
payload (the pattern was found and is worth surfacing) or no payload with
confidence 0. Text is rendered separately by pipeline.insight_templates;
nothing in this module formats user-facing sentences.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from analytics.payloads import (
    ConsistencyPattern,
    EnergyTrendPattern,
    MindfulnessPattern,
    MoodTaskPattern,
    OptimalBalancePattern,
    ProductivityPattern,
    SleepProductivityPattern,
    SleepTrendPattern,
)
from analytics.stats_toolkit import (
    confidence_for,
    consistency_score,
    linear_trend,
    round_half_up,
    volatility,
)
from constants import (
    CONSISTENCY_MIN,
    EXERCISE_KEYWORDS,
    HIGH_ENERGY_ABOVE,
    LOW_ENERGY_BELOW,
    MINDFULNESS_KEYWORDS,
    MOOD_DIP_BELOW,
    OPTIMAL_ENERGY_SCORE_ABOVE,
    OPTIMAL_HRV_ABOVE,
    OPTIMAL_SLEEP_SCORE_ABOVE,
    SLEEP_GAP_MIN_HOURS,
    TASK_KEYWORDS,
    TREND_SIGNIFICANT_POINTS,
    WEEKDAY_SLEEP_WEIGHT,
)
from models import BiometricRecord, InsightKind, MoodEntry

log = logging.getLogger("pattern_analyzer")

_BIO_COLUMNS = ["date", "sleep_score", "sleep_hours", "hrv", "resting_hr", "energy_score"]


@dataclass(frozen=True)
class PatternResult:
    pattern: str
    kind: Optional[InsightKind] = None
    payload: Any = None
    confidence: float = 0.0

    @property
    def surfaced(self) -> bool:
        return self.payload is not None


@dataclass(frozen=True)
class WeeklyBiometricSummary:
    days: int
    averages: Dict[str, float] = field(default_factory=dict)
    trends: Dict[str, float] = field(default_factory=dict)
    volatility: Dict[str, float] = field(default_factory=dict)


def _empty(pattern: str) -> PatternResult:
    return PatternResult(pattern=pattern)


def _found(pattern: str, kind: InsightKind, payload: Any, data_points: int) -> PatternResult:
    return PatternResult(
        pattern=pattern, kind=kind, payload=payload, confidence=confidence_for(data_points)
    )


# ─── Frames ────────────────────────────────────────────────


def biometric_frame(records: Sequence[BiometricRecord]) -> pd.DataFrame:
    """Records as a date-sorted frame; empty frame with the right columns if none."""
    if not records:
        return pd.DataFrame(columns=_BIO_COLUMNS)
    df = pd.DataFrame(
        [
            {
                "date": r.date,
                "sleep_score": float(r.sleep_score),
                "sleep_hours": float(r.sleep_hours),
                "hrv": float(r.hrv),
                "resting_hr": float(r.resting_hr),
                "energy_score": float(r.energy_score),
            }
            for r in records
        ],
        columns=_BIO_COLUMNS,
    )
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def _moods_by_time(moods: Sequence[MoodEntry]) -> List[MoodEntry]:
    return sorted(moods or [], key=lambda m: m.timestamp)


def _has_any(text: str, keywords: Sequence[str]) -> bool:
    return any(k in text for k in keywords)


# ─── Analyses ──────────────────────────────────────────────


def analyze_productivity_by_weekday(records: Sequence[BiometricRecord]) -> PatternResult:
    """Weekday with the best ``avgEnergy + 10 * avgSleepHours``."""
    df = biometric_frame(records)
    if df.empty:
        return _empty("productivity_by_weekday")

    df["weekday"] = pd.to_datetime(df["date"]).dt.day_name()
    by_day = df.groupby("weekday", sort=False).agg(
        avg_energy=("energy_score", "mean"),
        avg_sleep=("sleep_hours", "mean"),
        n=("energy_score", "size"),
    )
    by_day["composite"] = by_day["avg_energy"] + WEEKDAY_SLEEP_WEIGHT * by_day["avg_sleep"]

    best_day = by_day["composite"].idxmax()
    best = by_day.loc[best_day]
    if best["composite"] <= 0:
        return _empty("productivity_by_weekday")

    payload = ProductivityPattern(
        day=str(best_day),
        avg_energy=int(round_half_up(best["avg_energy"])),
        avg_sleep=round_half_up(best["avg_sleep"], 1),
        composite_score=int(round_half_up(best["composite"])),
        days_observed=int(best["n"]),
    )
    return _found("productivity_by_weekday", InsightKind.PRODUCTIVITY_PATTERN, payload, len(df))


def analyze_sleep_productivity(records: Sequence[BiometricRecord]) -> PatternResult:
    """Sleep-hours gap between high-energy (>80) and low-energy (<60) days."""
    df = biometric_frame(records)
    high = df[df["energy_score"] > HIGH_ENERGY_ABOVE]
    low = df[df["energy_score"] < LOW_ENERGY_BELOW]
    if high.empty or low.empty:
        return _empty("sleep_productivity")

    avg_high = float(high["sleep_hours"].mean())
    avg_low = float(low["sleep_hours"].mean())
    difference = round_half_up(avg_high - avg_low, 1)
    if difference <= SLEEP_GAP_MIN_HOURS:
        log.debug("Sleep gap %.1fh below threshold", difference)
        return _empty("sleep_productivity")

    payload = SleepProductivityPattern(
        optimal_sleep=round_half_up(avg_high, 1),
        low_sleep=round_half_up(avg_low, 1),
        difference=difference,
        high_energy_days=len(high),
        low_energy_days=len(low),
    )
    return _found(
        "sleep_productivity", InsightKind.SLEEP_PRODUCTIVITY, payload, len(high) + len(low)
    )


def analyze_mood_task_correlation(
    moods: Sequence[MoodEntry], records: Sequence[BiometricRecord]
) -> PatternResult:
    """Mood dips (score < 3) on days with biometric data, and how many mention work."""
    by_date = {r.date: r for r in records or []}
    matched = 0
    dip_energy: List[float] = []
    task_related = 0
    for mood in _moods_by_time(moods):
        day = by_date.get(mood.day)
        if day is None:
            continue
        matched += 1
        if mood.mood_score >= MOOD_DIP_BELOW:
            continue
        dip_energy.append(float(day.energy_score))
        if _has_any((mood.note or "").lower(), TASK_KEYWORDS):
            task_related += 1

    if not dip_energy:
        return _empty("mood_task_correlation")

    payload = MoodTaskPattern(
        total_mood_dips=len(dip_energy),
        task_related_dips=task_related,
        avg_energy_on_mood_dips=int(round_half_up(sum(dip_energy) / len(dip_energy))),
    )
    return _found("mood_task_correlation", InsightKind.MOOD_TASK_CORRELATION, payload, matched)


def analyze_hrv_activity(
    records: Sequence[BiometricRecord], moods: Sequence[MoodEntry]
) -> PatternResult:
    """HRV, resting HR and mood on days whose mood note mentions mindfulness."""
    first_note: Dict[Any, MoodEntry] = {}
    for mood in _moods_by_time(moods):
        if mood.note and mood.day not in first_note:
            first_note[mood.day] = mood

    mindful: List[Tuple[float, float, float]] = []
    exercise_days = 0
    annotated = 0
    for rec in sorted(records or [], key=lambda r: r.date):
        mood = first_note.get(rec.date)
        if mood is None:
            continue
        annotated += 1
        note = mood.note.lower()
        if _has_any(note, MINDFULNESS_KEYWORDS):
            mindful.append((float(rec.hrv), float(rec.resting_hr), float(mood.mood_score)))
        if _has_any(note, EXERCISE_KEYWORDS):
            exercise_days += 1

    if not mindful:
        return _empty("hrv_activity")

    n = len(mindful)
    impact = int(round_half_up(sum(m[0] for m in mindful) / n))
    if impact <= 0:
        return _empty("hrv_activity")

    payload = MindfulnessPattern(
        mindfulness_impact=impact,
        total_mindfulness_days=n,
        avg_mood_after_mindfulness=round_half_up(sum(m[2] for m in mindful) / n, 1),
        avg_resting_hr=int(round_half_up(sum(m[1] for m in mindful) / n)),
        exercise_days=exercise_days,
    )
    return _found("hrv_activity", InsightKind.HRV_MINDFULNESS, payload, annotated)


def analyze_consistency(records: Sequence[BiometricRecord]) -> PatternResult:
    df = biometric_frame(records)
    score = consistency_score(df["energy_score"].tolist())
    if score <= CONSISTENCY_MIN:
        return _empty("consistency")
    payload = ConsistencyPattern(
        consistency=round_half_up(score, 2),
        avg_energy=int(round_half_up(df["energy_score"].mean())),
    )
    return _found("consistency", InsightKind.CONSISTENT_PERFORMANCE, payload, len(df))


def analyze_optimal_balance(records: Sequence[BiometricRecord]) -> PatternResult:
    df = biometric_frame(records)
    if df.empty:
        return _empty("optimal_balance")
    sleep = float(df["sleep_score"].mean())
    energy = float(df["energy_score"].mean())
    hrv = float(df["hrv"].mean())
    if not (
        sleep > OPTIMAL_SLEEP_SCORE_ABOVE
        and energy > OPTIMAL_ENERGY_SCORE_ABOVE
        and hrv > OPTIMAL_HRV_ABOVE
    ):
        return _empty("optimal_balance")
    payload = OptimalBalancePattern(
        sleep_score=int(round_half_up(sleep)),
        energy_score=int(round_half_up(energy)),
        hrv=int(round_half_up(hrv)),
    )
    return _found("optimal_balance", InsightKind.OPTIMAL_BALANCE, payload, len(df))


def analyze_sleep_trend(records: Sequence[BiometricRecord]) -> PatternResult:
    df = biometric_frame(records)
    change = linear_trend(df["sleep_score"].tolist())
    if abs(change) <= TREND_SIGNIFICANT_POINTS:
        return _empty("sleep_trend")
    improving = change > 0
    payload = SleepTrendPattern(
        direction="improving" if improving else "declining",
        change=round_half_up(change, 1),
        avg_sleep_score=int(round_half_up(df["sleep_score"].mean())),
        avg_sleep_hours=round_half_up(df["sleep_hours"].mean(), 1),
    )
    kind = InsightKind.SLEEP_IMPROVEMENT if improving else InsightKind.SLEEP_RECOVERY
    return _found("sleep_trend", kind, payload, len(df))


def analyze_energy_trend(records: Sequence[BiometricRecord]) -> PatternResult:
    df = biometric_frame(records)
    change = linear_trend(df["energy_score"].tolist())
    if abs(change) <= TREND_SIGNIFICANT_POINTS:
        return _empty("energy_trend")
    rising = change > 0
    payload = EnergyTrendPattern(
        direction="rising" if rising else "falling",
        change=round_half_up(change, 1),
        avg_energy_score=int(round_half_up(df["energy_score"].mean())),
    )
    kind = InsightKind.ENERGY_BOOST if rising else InsightKind.ENERGY_DIP
    return _found("energy_trend", kind, payload, len(df))


def summarize_week(records: Sequence[BiometricRecord]) -> WeeklyBiometricSummary:
    """Rounded averages plus trend and volatility of sleep and energy scores."""
    df = biometric_frame(records)
    if df.empty:
        return WeeklyBiometricSummary(days=0)
    averages = {
        "sleep_score": int(round_half_up(df["sleep_score"].mean())),
        "sleep_hours": round_half_up(df["sleep_hours"].mean(), 1),
        "hrv": int(round_half_up(df["hrv"].mean())),
        "resting_hr": int(round_half_up(df["resting_hr"].mean())),
        "energy_score": int(round_half_up(df["energy_score"].mean())),
    }
    trends = {
        "sleep": round_half_up(linear_trend(df["sleep_score"].tolist()), 1),
        "energy": round_half_up(linear_trend(df["energy_score"].tolist()), 1),
    }
    vol = {
        "sleep": round_half_up(volatility(df["sleep_score"].tolist()), 1),
        "energy": round_half_up(volatility(df["energy_score"].tolist()), 1),
    }
    return WeeklyBiometricSummary(days=len(df), averages=averages, trends=trends, volatility=vol)


def analyze_all(
    records: Sequence[BiometricRecord], moods: Sequence[MoodEntry]
) -> List[PatternResult]:
    """Run every analysis; order here is the insertion order used for ties."""
    results = [
        analyze_productivity_by_weekday(records),
        analyze_sleep_productivity(records),
        analyze_mood_task_correlation(moods, records),
        analyze_hrv_activity(records, moods),
        analyze_sleep_trend(records),
        analyze_energy_trend(records),
        analyze_consistency(records),
        analyze_optimal_balance(records),
    ]
    surfaced = [r.pattern for r in results if r.surfaced]
    log.info("Pattern analysis: %d/%d patterns surfaced (%s)",
             len(surfaced), len(results), ", ".join(surfaced) or "none")
    return results
