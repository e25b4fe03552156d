"""
Energy composite scorer.

Combines last night's sleep score, HRV and the recent mood window into a
0-100 energy score with a per-factor breakdown:

  sleep  up to 40 points   sleepScore / 100
  hrv    up to 30 points   (hrv - 30) / 30
  mood   up to 30 points   moodAverage / 5

Contributions are clamped at 0; impacts keep their sign and are measured
against population baselines (sleep 75, HRV 42 ms, mood 3.5).
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from analytics.stats_toolkit import (
    MIN_SIGNIFICANCE_POINTS,
    correlation_significance,
    linear_trend,
    mean,
    round_half_up,
)
from constants import (
    CORRELATION_SIGNIFICANCE_ALPHA,
    CORRELATION_STRENGTH_FALLBACK,
    CORRELATION_STRENGTH_NOMINAL,
    DEFAULT_BIOMETRIC,
    HRV_BASELINE,
    HRV_FLOOR,
    HRV_IMPACT_DIVISOR,
    HRV_SPAN,
    HRV_WEIGHT,
    MOOD_BASELINE,
    MOOD_IMPACT_FACTOR,
    MOOD_WEIGHT,
    MOOD_WINDOW_SIZE,
    NEUTRAL_MOOD,
    SLEEP_BASELINE,
    SLEEP_IMPACT_DIVISOR,
    SLEEP_WEIGHT,
)
from models import BiometricRecord, EnergyBreakdown, FactorBreakdown, MoodEntry, energy_level_for

log = logging.getLogger("energy_scorer")

MoodWindow = Sequence[Union[MoodEntry, float, int]]

# Paired mood/energy days needed before the strength is computed from data.
MIN_HISTORY_FOR_STRENGTH = MIN_SIGNIFICANCE_POINTS


def mood_scores(window: Optional[MoodWindow]) -> list:
    """Extract numeric mood scores from entries or plain numbers."""
    if not window:
        return []
    return [float(m.mood_score) if isinstance(m, MoodEntry) else float(m) for m in window]


def _contribution(ratio: float, weight: int) -> int:
    return int(round_half_up(max(0.0, min(1.0, ratio)) * weight))


def _impact(value: float) -> float:
    return round_half_up(value, 1)


def compute_energy_breakdown(
    biometric: Optional[BiometricRecord],
    mood_window: Optional[MoodWindow],
    energy_history: Optional[Sequence[float]] = None,
) -> EnergyBreakdown:
    """Score today's energy. Never raises; falls back to neutral inputs.

    ``energy_history`` is optional: one energy score per mood in the window,
    in the same order. With at least three aligned points the correlation
    strength is measured; it replaces the fixed default only when the
    Pearson test is significant (p < 0.05). A constant series never is.
    """
    if biometric is not None:
        sleep_score = float(biometric.sleep_score)
        hrv = float(biometric.hrv)
    else:
        log.info("No biometric record supplied, using default day")
        sleep_score = float(DEFAULT_BIOMETRIC["sleepScore"])
        hrv = float(DEFAULT_BIOMETRIC["hrv"])

    try:
        scores = mood_scores(mood_window)[-MOOD_WINDOW_SIZE:]
    except (TypeError, ValueError, AttributeError) as e:
        log.warning("Unusable mood window (%s), falling back to neutral mood", e)
        scores = []

    if scores:
        mood_avg = mean(scores)
        mood_trend = linear_trend(scores)
        strength = CORRELATION_STRENGTH_NOMINAL
        mood_available = True
    else:
        mood_avg = NEUTRAL_MOOD
        mood_trend = 0.0
        strength = CORRELATION_STRENGTH_FALLBACK
        mood_available = False

    if mood_available and energy_history is not None:
        history = [float(v) for v in energy_history][-len(scores):]
        if len(history) == len(scores) and len(history) >= MIN_HISTORY_FOR_STRENGTH:
            r, p = correlation_significance(scores, history)
            if p < CORRELATION_SIGNIFICANCE_ALPHA:
                strength = round_half_up(min(1.0, abs(r)), 2)
            else:
                log.debug("Mood/energy correlation not significant (r=%.2f, p=%.3f)", r, p)
        else:
            log.debug(
                "Energy history not aligned with mood window (%d vs %d), keeping default strength",
                len(history), len(scores),
            )

    sleep = FactorBreakdown(
        score=sleep_score,
        contribution=_contribution(sleep_score / 100.0, SLEEP_WEIGHT),
        impact=_impact((sleep_score - SLEEP_BASELINE) / SLEEP_IMPACT_DIVISOR),
    )
    hrv_factor = FactorBreakdown(
        score=hrv,
        contribution=_contribution((hrv - HRV_FLOOR) / HRV_SPAN, HRV_WEIGHT),
        impact=_impact((hrv - HRV_BASELINE) / HRV_IMPACT_DIVISOR),
    )
    mood = FactorBreakdown(
        score=round_half_up(mood_avg, 2),
        contribution=_contribution(mood_avg / 5.0, MOOD_WEIGHT),
        impact=_impact((mood_avg - MOOD_BASELINE) * MOOD_IMPACT_FACTOR),
    )

    total = max(0, min(100, sleep.contribution + hrv_factor.contribution + mood.contribution))
    return EnergyBreakdown(
        sleep=sleep,
        hrv=hrv_factor,
        mood=mood,
        correlation_strength=strength,
        energy_score=total,
        energy_level=energy_level_for(total),
        mood_trend=round_half_up(mood_trend, 2),
        mood_data_available=mood_available,
    )
