"""
Insight Engine
==============
Assembles the weekly insight list shown on the dashboard.

Pipeline:
  1. Pattern analysis over the biometric range and mood series.
  2. Energy breakdown for the latest day + burnout risk for the last 7 moods.
  3. Every surfaced result becomes one scored Insight (uniform shape).
  4. Stable sort by score (descending), truncate to the configured limit.

Insights are derived data. They are regenerated on every request and can
never be created, edited or deleted by hand.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Sequence

import config
from analytics.burnout import classify_burnout_risk, plan_goal_adjustments
from analytics.energy_scorer import compute_energy_breakdown
from analytics.pattern_analyzer import PatternResult, analyze_all, summarize_week
from analytics.stats_toolkit import confidence_for, round_half_up
from constants import BURNOUT_SCORE_PER_LEVEL, DEFAULT_INSIGHT_LIMIT, MOOD_WINDOW_SIZE
from errors import UnsupportedOperationError
from models import (
    BiometricRecord,
    BurnoutAssessment,
    BurnoutTier,
    EnergyBreakdown,
    Goal,
    GoalAdjustmentPlan,
    Insight,
    InsightKind,
    MoodEntry,
)
from pipeline.insight_templates import clip, goal_correlation_for, render, week_period
from sources import BiometricSource, GoalSource, MoodSource

log = logging.getLogger("insight_engine")

# Hard upper bound on the list size; configuration can only lower it.
MAX_INSIGHTS = DEFAULT_INSIGHT_LIMIT

# Mood entries pulled for weekly analysis (more than a week to cover gaps).
MOOD_HISTORY = 30

INSIGHT_IDS: Dict[InsightKind, int] = {
    InsightKind.SLEEP_IMPROVEMENT: 1,
    InsightKind.SLEEP_RECOVERY: 2,
    InsightKind.ENERGY_BOOST: 3,
    InsightKind.ENERGY_DIP: 4,
    InsightKind.CONSISTENT_PERFORMANCE: 5,
    InsightKind.OPTIMAL_BALANCE: 6,
    InsightKind.PRODUCTIVITY_PATTERN: 101,
    InsightKind.SLEEP_PRODUCTIVITY: 102,
    InsightKind.MOOD_TASK_CORRELATION: 103,
    InsightKind.HRV_MINDFULNESS: 104,
    InsightKind.ENERGY_STATUS: 201,
    InsightKind.BURNOUT_RISK: 202,
}

# Ranking key per kind, computed from the kind's payload.
_SCORERS: Dict[InsightKind, Callable[[Any], float]] = {
    InsightKind.PRODUCTIVITY_PATTERN: lambda p: p.composite_score,
    InsightKind.SLEEP_PRODUCTIVITY: lambda p: round_half_up(p.optimal_sleep * 10),
    InsightKind.MOOD_TASK_CORRELATION: lambda p: 100 - p.avg_energy_on_mood_dips,
    InsightKind.HRV_MINDFULNESS: lambda p: p.mindfulness_impact,
    InsightKind.SLEEP_IMPROVEMENT: lambda p: p.avg_sleep_score,
    InsightKind.SLEEP_RECOVERY: lambda p: p.avg_sleep_score,
    InsightKind.ENERGY_BOOST: lambda p: p.avg_energy_score,
    InsightKind.ENERGY_DIP: lambda p: p.avg_energy_score,
    InsightKind.CONSISTENT_PERFORMANCE: lambda p: p.avg_energy,
    InsightKind.OPTIMAL_BALANCE: lambda p: round_half_up((p.sleep_score + p.energy_score) / 2),
    InsightKind.ENERGY_STATUS: lambda b: b.energy_score,
    InsightKind.BURNOUT_RISK: lambda a: BURNOUT_SCORE_PER_LEVEL * a.level,
}


def _build_insight(
    kind: InsightKind,
    payload: Any,
    confidence: float,
    period: str,
    goals: Sequence[Goal],
    extra: Optional[Dict[str, Any]] = None,
) -> Insight:
    rendered = render(payload)
    return Insight(
        id=INSIGHT_IDS[kind],
        title=rendered.title,
        pattern=kind,
        period=period,
        score=float(_SCORERS[kind](payload)),
        summary=clip(rendered.summary),
        recommendations=tuple(rendered.recommendations),
        goal_correlation=goal_correlation_for(goals, kind),
        confidence=confidence,
        details={"notes": list(rendered.details), **(extra or {})},
    )


def _aligned_energy_history(
    window: Sequence[MoodEntry], records: Sequence[BiometricRecord]
) -> Optional[List[float]]:
    """Same-day energy score for every mood in the window, or None if any is missing."""
    by_date = {r.date: r.energy_score for r in records}
    history = [by_date.get(m.day) for m in window]
    if not history or any(v is None for v in history):
        return None
    return [float(v) for v in history]


def _energy_details(breakdown: EnergyBreakdown) -> Dict[str, Any]:
    return {
        "correlation_strength": breakdown.correlation_strength,
        "mood_data_available": breakdown.mood_data_available,
    }


def _latest(records: Sequence[BiometricRecord]) -> Optional[BiometricRecord]:
    return max(records, key=lambda r: r.date) if records else None


def generate_weekly_insights(
    biometric_range: Sequence[BiometricRecord],
    mood_series: Sequence[MoodEntry],
    goals: Sequence[Goal],
    reference_date: Optional[date] = None,
    limit: Optional[int] = None,
) -> List[Insight]:
    """Ranked weekly insights, at most ``limit`` (capped at 8) entries."""
    records = list(biometric_range or [])
    moods = sorted(mood_series or [], key=lambda m: m.timestamp)
    goals = list(goals or [])
    limit = MAX_INSIGHTS if limit is None else max(0, min(limit, MAX_INSIGHTS))

    latest = _latest(records)
    if reference_date is None:
        reference_date = latest.date if latest else date.today()
    period = week_period(reference_date)

    insights: List[Insight] = []
    pattern_results: List[PatternResult] = analyze_all(records, moods)
    for result in pattern_results:
        if result.surfaced:
            insights.append(
                _build_insight(result.kind, result.payload, result.confidence, period, goals)
            )

    window = moods[-MOOD_WINDOW_SIZE:]
    if latest is not None:
        breakdown = compute_energy_breakdown(
            latest, window, energy_history=_aligned_energy_history(window, records)
        )
        insights.append(
            _build_insight(
                InsightKind.ENERGY_STATUS, breakdown, confidence_for(len(window) + 1), period, goals,
                extra=_energy_details(breakdown),
            )
        )

    assessment = classify_burnout_risk(window)
    if assessment.level > 0:
        insights.append(
            _build_insight(
                InsightKind.BURNOUT_RISK, assessment, confidence_for(assessment.entries), period, goals
            )
        )

    ranked = sorted(insights, key=lambda i: i.score, reverse=True)[:limit]
    log.info(
        "Generated %d insight(s), returning %d for %s",
        len(insights), len(ranked), period,
    )
    return ranked


class InsightService:
    """Read-side facade over the collaborator sources."""

    def __init__(
        self,
        moods: MoodSource,
        biometrics: BiometricSource,
        goals: GoalSource,
        limit: Optional[int] = None,
    ):
        self.moods = moods
        self.biometrics = biometrics
        self.goals = goals
        self.limit = config.INSIGHT_LIMIT if limit is None else limit

    def _week(self, reference_date: Optional[date]) -> tuple:
        ref = reference_date or date.today()
        return ref - timedelta(days=6), ref

    def get_weekly_insights(self, reference_date: Optional[date] = None) -> List[Insight]:
        start, end = self._week(reference_date)
        return generate_weekly_insights(
            self.biometrics.range(start, end),
            self.moods.recent(MOOD_HISTORY, until=end),
            self.goals.all(),
            reference_date=end,
            limit=self.limit,
        )

    def get_all(self, reference_date: Optional[date] = None) -> List[Insight]:
        return self.get_weekly_insights(reference_date)

    def get_by_id(self, insight_id: int, reference_date: Optional[date] = None) -> Optional[Insight]:
        for insight in self.get_weekly_insights(reference_date):
            if insight.id == int(insight_id):
                return insight
        return None

    def weekly_summary(self, reference_date: Optional[date] = None) -> Dict[str, Any]:
        start, end = self._week(reference_date)
        summary = summarize_week(self.biometrics.range(start, end))
        return {
            "period": week_period(end),
            "days": summary.days,
            "averages": summary.averages,
            "trends": summary.trends,
            "volatility": summary.volatility,
        }

    def energy_breakdown(self, for_date: Optional[date] = None) -> EnergyBreakdown:
        day = for_date or date.today()
        window = self.moods.recent(config.MOOD_WINDOW, until=day)
        history = None
        if window:
            records = self.biometrics.range(window[0].day, window[-1].day)
            history = _aligned_energy_history(window, records)
        return compute_energy_breakdown(self.biometrics.for_date(day), window, energy_history=history)

    def burnout(self, reference_date: Optional[date] = None) -> BurnoutAssessment:
        """Risk from the moods logged on or before ``reference_date`` (default: all)."""
        return classify_burnout_risk(self.moods.recent(config.MOOD_WINDOW, until=reference_date))

    def goal_adjustments(self, reference_date: Optional[date] = None) -> GoalAdjustmentPlan:
        return plan_goal_adjustments(self.burnout(reference_date))

    # Insights are always regenerated from source data.

    def create(self, data: Dict[str, Any]):
        raise UnsupportedOperationError("create")

    def update(self, insight_id: int, data: Dict[str, Any]):
        raise UnsupportedOperationError("update")

    def delete(self, insight_id: int):
        raise UnsupportedOperationError("delete")


def burnout_needs_attention(assessment: BurnoutAssessment) -> bool:
    return assessment.risk_tier in (BurnoutTier.MODERATE, BurnoutTier.HIGH)
