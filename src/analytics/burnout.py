"""Burnout risk classification from the recent mood window."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from analytics.energy_scorer import MoodWindow, mood_scores
from analytics.stats_toolkit import mean, round_half_up
from constants import BURNOUT_MIN_ENTRIES, BURNOUT_RECENT_COUNT, MOOD_WINDOW_SIZE
from models import BurnoutAssessment, BurnoutTier, GoalAdjustment, GoalAdjustmentPlan

log = logging.getLogger("burnout")

TIER_LEVELS: Dict[BurnoutTier, int] = {
    BurnoutTier.INSUFFICIENT_DATA: 0,
    BurnoutTier.LOW: 0,
    BurnoutTier.MILD: 1,
    BurnoutTier.MODERATE: 2,
    BurnoutTier.HIGH: 3,
}

# (task reduction %, mindfulness minutes, deadline extension days)
# None means the tier does not touch that lever.
TIER_ADJUSTMENTS: Dict[BurnoutTier, Tuple[Optional[int], Optional[int], Optional[int]]] = {
    BurnoutTier.HIGH: (50, 10, 10),
    BurnoutTier.MODERATE: (25, 5, 5),
    BurnoutTier.MILD: (None, 5, None),
}

TIER_RECOMMENDATIONS: Dict[BurnoutTier, Tuple[str, ...]] = {
    BurnoutTier.INSUFFICIENT_DATA: (),
    BurnoutTier.LOW: (
        "Your mood has been steady - keep your current routine",
        "Keep logging your mood to catch early warning signs",
    ),
    BurnoutTier.MILD: (
        "Take short breaks between focused work sessions",
        "Try a 5-minute mindfulness break in the afternoon",
    ),
    BurnoutTier.MODERATE: (
        "Reduce your daily task load by 25% this week",
        "Schedule a 5-minute mindfulness break after each work block",
        "Extend non-urgent goal deadlines by 5 days",
    ),
    BurnoutTier.HIGH: (
        "Reduce your daily task load by 50% until your mood recovers",
        "Take a 10-minute mindfulness break at least twice a day",
        "Extend goal deadlines by 10 days to relieve pressure",
        "Consider talking to someone you trust about how you feel",
    ),
}

ENCOURAGEMENT = "Your mood looks stable. No goal changes needed - keep up the good work!"
INSUFFICIENT_MESSAGE = "Log your mood for a few more days to unlock burnout insights."


def _tier_for(average: float, decline: float) -> BurnoutTier:
    # First match wins; comparisons are strict.
    if average < 3 or decline > 1.5:
        return BurnoutTier.HIGH
    if average < 4 or decline > 1:
        return BurnoutTier.MODERATE
    if average < 5 or decline > 0.5:
        return BurnoutTier.MILD
    return BurnoutTier.LOW


def classify_burnout_risk(mood_window: Optional[MoodWindow]) -> BurnoutAssessment:
    """Classify the last 7 mood scores (chronological) into a risk tier."""
    try:
        scores = mood_scores(mood_window)[-MOOD_WINDOW_SIZE:]
    except (TypeError, ValueError, AttributeError) as e:
        log.warning("Unusable mood window (%s), treating as insufficient data", e)
        scores = []
    if len(scores) < BURNOUT_MIN_ENTRIES:
        log.debug("Burnout: %d mood entries, need %d", len(scores), BURNOUT_MIN_ENTRIES)
        return BurnoutAssessment(
            risk_tier=BurnoutTier.INSUFFICIENT_DATA,
            level=0,
            average_score=round_half_up(mean(scores), 2),
            recent_score=round_half_up(mean(scores[-BURNOUT_RECENT_COUNT:]), 2),
            decline=0.0,
            recommendations=(),
            entries=len(scores),
        )

    average = mean(scores)
    recent = mean(scores[-BURNOUT_RECENT_COUNT:])
    decline = average - recent
    tier = _tier_for(average, decline)
    log.debug("Burnout: avg=%.2f recent=%.2f decline=%.2f -> %s", average, recent, decline, tier.value)

    return BurnoutAssessment(
        risk_tier=tier,
        level=TIER_LEVELS[tier],
        average_score=round_half_up(average, 2),
        recent_score=round_half_up(recent, 2),
        decline=round_half_up(decline, 2),
        recommendations=TIER_RECOMMENDATIONS[tier],
        entries=len(scores),
    )


def plan_goal_adjustments(assessment: BurnoutAssessment) -> GoalAdjustmentPlan:
    """Turn a burnout assessment into structured goal-adjustment directives."""
    tier = assessment.risk_tier
    levers = TIER_ADJUSTMENTS.get(tier)
    if levers is None:
        message = INSUFFICIENT_MESSAGE if tier is BurnoutTier.INSUFFICIENT_DATA else ENCOURAGEMENT
        return GoalAdjustmentPlan(risk_tier=tier, directives=(), message=message)

    reduction, minutes, days = levers
    directives = []
    if reduction is not None:
        directives.append(GoalAdjustment(
            type="task-reduction",
            action=f"Reduce active tasks by {reduction}%",
            severity=reduction,
        ))
    if minutes is not None:
        directives.append(GoalAdjustment(
            type="mindfulness",
            action=f"Add a {minutes}-minute mindfulness break to your day",
            duration=minutes,
        ))
    if days is not None:
        directives.append(GoalAdjustment(
            type="timeline",
            action=f"Extend goal target dates by {days} days",
            days=days,
        ))

    message = {
        BurnoutTier.HIGH: "High burnout risk: lighten your goals now and prioritise recovery.",
        BurnoutTier.MODERATE: "Moderate burnout risk: scale back this week's goals a little.",
        BurnoutTier.MILD: "Mild strain detected: build short recovery breaks into your day.",
    }[tier]
    return GoalAdjustmentPlan(risk_tier=tier, directives=tuple(directives), message=message)
