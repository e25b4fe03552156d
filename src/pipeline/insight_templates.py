"""Render analytical payloads into insight titles, summaries and recommendations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from functools import singledispatch
from typing import Dict, Sequence, Tuple

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
from analytics.stats_toolkit import round_half_up
from models import BurnoutAssessment, EnergyBreakdown, Goal, InsightKind


@dataclass(frozen=True)
class RenderedInsight:
    title: str
    summary: str
    recommendations: Tuple[str, ...]
    details: Tuple[str, ...] = ()


def clip(s: str, limit: int = 260) -> str:
    s = s.replace("\n", " ").strip()
    if len(s) <= limit:
        return s
    return s[: limit - 3].rstrip() + "..."


def _num(value: float) -> str:
    """Drop a trailing .0 so 8.0 renders as 8."""
    return str(int(value)) if float(value).is_integer() else str(value)


def week_period(reference: date) -> str:
    """Sunday-to-Saturday week containing ``reference``, e.g. 'Oct 18 - Oct 24'."""
    start = reference - timedelta(days=(reference.weekday() + 1) % 7)
    end = start + timedelta(days=6)
    return f"{start:%b} {start.day} - {end:%b} {end.day}"


@singledispatch
def render(payload) -> RenderedInsight:
    raise TypeError(f"No insight template for {type(payload).__name__}")


@render.register
def _(p: ProductivityPattern) -> RenderedInsight:
    sleep = _num(p.avg_sleep)
    return RenderedInsight(
        title="Productivity Pattern Discovered",
        summary=(
            f"You're more productive on {p.day}s! Average energy: {p.avg_energy}, "
            f"typically after {sleep} hours of sleep."
        ),
        recommendations=(
            f"Schedule important tasks on {p.day}s when possible",
            f"Maintain {sleep}+ hours of sleep before key days",
            f"Use {p.day}s for your most challenging work",
        ),
    )


@render.register
def _(p: SleepProductivityPattern) -> RenderedInsight:
    optimal = _num(p.optimal_sleep)
    return RenderedInsight(
        title="Sleep-Productivity Connection",
        summary=(
            f"Your productivity peaks after {optimal}+ hours of sleep. "
            f"You're {_num(p.difference)} hours more rested on high-energy days."
        ),
        recommendations=(
            f"Target {optimal}+ hours of sleep for optimal performance",
            "Track your bedtime to ensure consistent sleep duration",
            "Consider adjusting evening routine to improve sleep quality",
        ),
        details=(f"Low-energy days averaged {_num(p.low_sleep)} hours of sleep.",),
    )


@render.register
def _(p: MoodTaskPattern) -> RenderedInsight:
    return RenderedInsight(
        title="Mood Dips on Task-Heavy Days",
        summary=(
            f"Mood dipped on {p.task_related_dips} out of {p.total_mood_dips} low-mood days, "
            "often during task-heavy periods without breaks."
        ),
        recommendations=(
            "Schedule regular breaks during intensive work sessions",
            "Use the Pomodoro technique for better task management",
            "Consider brief mindfulness exercises between tasks",
        ),
        details=(f"Average energy on low-mood days was {p.avg_energy_on_mood_dips}.",),
    )


@render.register
def _(p: MindfulnessPattern) -> RenderedInsight:
    details = [f"Resting heart rate averaged {p.avg_resting_hr} bpm on those days."]
    if p.exercise_days:
        details.append(f"You also logged exercise on {p.exercise_days} day(s).")
    return RenderedInsight(
        title="Heart Rate Calms After Mindfulness",
        summary=(
            f"Your heart rate variability improves to {p.mindfulness_impact}ms after journaling "
            f"and mindfulness activities. Mood improved to {_num(p.avg_mood_after_mindfulness)}/5 "
            "on these days."
        ),
        recommendations=(
            "Continue daily journaling for cardiovascular benefits",
            "Add 5-10 minutes of meditation to your routine",
            "Track HRV improvements with consistent mindfulness practice",
        ),
        details=tuple(details),
    )


@render.register
def _(p: ConsistencyPattern) -> RenderedInsight:
    return RenderedInsight(
        title="Consistent Performance",
        summary=(
            "Excellent consistency this week! Your metrics show stable patterns with minimal "
            f"day-to-day variation. Average energy score: {p.avg_energy}."
        ),
        recommendations=(
            "Continue your current routine - it's working well",
            "Consider gradually increasing goals or challenges",
            "Document what's working to replicate success",
        ),
    )


@render.register
def _(p: OptimalBalancePattern) -> RenderedInsight:
    return RenderedInsight(
        title="Optimal Balance Achieved",
        summary=(
            "Outstanding week! You've achieved optimal balance with high sleep quality "
            f"({p.sleep_score}), energy ({p.energy_score}), and HRV ({p.hrv}ms)."
        ),
        recommendations=(
            "This is your peak performance zone - maintain these habits",
            "Perfect time to tackle your most challenging goals",
            "Consider sharing your routine with others",
        ),
    )


@render.register
def _(p: SleepTrendPattern) -> RenderedInsight:
    points = int(round_half_up(abs(p.change)))
    if p.direction == "improving":
        return RenderedInsight(
            title="Sleep Quality Improving",
            summary=(
                f"Your sleep quality improved by {points} points this week. You're averaging "
                f"{_num(p.avg_sleep_hours)} hours of sleep with a quality score of {p.avg_sleep_score}."
            ),
            recommendations=(
                "Maintain your current bedtime routine",
                "Consider adding meditation before sleep",
                "Track what factors contribute to your best sleep nights",
            ),
        )
    return RenderedInsight(
        title="Sleep Recovery Needed",
        summary=(
            f"Sleep quality declined by {points} points this week. Focus on recovery to improve "
            f"your {p.avg_sleep_score} average score."
        ),
        recommendations=(
            "Establish a consistent bedtime routine",
            "Limit screen time before bed",
            "Consider earlier bedtime to increase sleep duration",
        ),
    )


@render.register
def _(p: EnergyTrendPattern) -> RenderedInsight:
    points = int(round_half_up(abs(p.change)))
    if p.direction == "rising":
        return RenderedInsight(
            title="Energy Levels Rising",
            summary=(
                f"Your energy levels increased by {points} points this week. You're maintaining "
                f"strong performance with an average score of {p.avg_energy_score}."
            ),
            recommendations=(
                "Capitalize on high energy with challenging tasks",
                "Consider increasing workout intensity",
                "Use this momentum to tackle important goals",
            ),
        )
    return RenderedInsight(
        title="Energy Dip Detected",
        summary=(
            f"Energy levels dropped by {points} points this week. Your current average is "
            f"{p.avg_energy_score}, time to focus on recovery."
        ),
        recommendations=(
            "Prioritize rest and recovery activities",
            "Reduce high-intensity workouts temporarily",
            "Focus on stress management and relaxation",
        ),
    )


@render.register
def _(b: EnergyBreakdown) -> RenderedInsight:
    factors = {"Sleep": b.sleep, "HRV": b.hrv, "Mood": b.mood}
    strongest = max(factors, key=lambda k: factors[k].impact)
    weakest = min(factors, key=lambda k: factors[k].impact)
    weakest_label = weakest if weakest == "HRV" else weakest.lower()
    if b.energy_level == "high":
        recs = (
            "Tackle your most demanding task while energy is high",
            "Protect tonight's sleep to carry this into tomorrow",
        )
    elif b.energy_level == "medium":
        recs = (
            "Pick one focus block for important work",
            f"Give your {weakest_label} some attention to lift tomorrow's score",
        )
    else:
        recs = (
            "Keep today light and prioritise recovery",
            f"Your {weakest_label} is pulling energy down - start there",
        )
    return RenderedInsight(
        title="Today's Energy Status",
        summary=(
            f"Energy score {b.energy_score}/100 ({b.energy_level}). "
            f"{strongest} is helping most today."
        ),
        recommendations=recs,
        details=(
            f"Sleep {b.sleep.contribution}/40, HRV {b.hrv.contribution}/30, mood {b.mood.contribution}/30.",
            f"Mood-energy correlation strength: {_num(b.correlation_strength)}.",
        ),
    )


@render.register
def _(a: BurnoutAssessment) -> RenderedInsight:
    tier = a.risk_tier.value
    return RenderedInsight(
        title=f"{tier.capitalize()} Burnout Risk",
        summary=(
            f"Your recent mood averages {_num(a.recent_score)}/5 against a weekly average of "
            f"{_num(a.average_score)}/5 ({tier} burnout risk)."
        ),
        recommendations=tuple(a.recommendations),
    )


# ─── Goal correlation ──────────────────────────────────────

_GOAL_TOPIC: Dict[InsightKind, str] = {
    InsightKind.PRODUCTIVITY_PATTERN: "productivity",
    InsightKind.SLEEP_PRODUCTIVITY: "sleep_productivity",
    InsightKind.MOOD_TASK_CORRELATION: "mood",
    InsightKind.HRV_MINDFULNESS: "mindfulness",
    InsightKind.SLEEP_IMPROVEMENT: "sleep",
    InsightKind.SLEEP_RECOVERY: "sleep",
    InsightKind.ENERGY_BOOST: "energy",
    InsightKind.ENERGY_DIP: "energy",
    InsightKind.ENERGY_STATUS: "energy",
    InsightKind.CONSISTENT_PERFORMANCE: "consistency",
    InsightKind.OPTIMAL_BALANCE: "optimal",
    InsightKind.BURNOUT_RISK: "burnout",
}


def goal_correlation_for(goals: Sequence[Goal], kind: InsightKind):
    """Sentence linking a pattern to the user's goals; None without goals."""
    if not goals:
        return None
    total = len(goals)
    health = sum(1 for g in goals if g.category == "health")
    work = sum(1 for g in goals if g.category == "work")
    personal = sum(1 for g in goals if g.category == "personal")

    templates = {
        "sleep": (
            "Your sleep improvements are supporting your health goals. "
            f"{health} health goal(s) may benefit from continued sleep optimization."
        ),
        "energy": (
            "Higher energy levels will help you achieve your active goals. "
            "Consider focusing on your health-related objectives."
        ),
        "consistency": (
            "Your consistent performance creates a strong foundation for goal achievement. "
            "Keep up the momentum!"
        ),
        "optimal": (
            "With optimal performance, you're well-positioned to make significant progress "
            "on all your goals."
        ),
        "productivity": (
            f"Your productivity patterns can help optimize your {work} work goal(s). "
            "Schedule important tasks during peak performance times."
        ),
        "sleep_productivity": (
            "Understanding your sleep-productivity connection can boost achievement of "
            f"your {total} active goal(s)."
        ),
        "mood": (
            "Managing mood fluctuations will support progress on your "
            f"{personal} personal development goal(s)."
        ),
        "mindfulness": (
            "Your mindfulness practice is enhancing both physical and mental well-being, "
            f"supporting {health} health goal(s)."
        ),
        "burnout": (
            f"Easing the load on your {total} active goal(s) now protects long-term progress."
        ),
    }
    topic = _GOAL_TOPIC.get(kind)
    return templates.get(topic, f"This pattern may impact your {total} active goal(s).")
