"""
Shared constants used across multiple modules.
Single source of truth for scoring weights, baselines and thresholds.
"""

# Energy level thresholds on the 0-100 energy score
ENERGY_HIGH_ABOVE = 80
ENERGY_LOW_BELOW = 65

# Composite energy weights (max points per factor, sums to 100)
SLEEP_WEIGHT = 40
HRV_WEIGHT = 30
MOOD_WEIGHT = 30

# HRV contribution range: (hrv - HRV_FLOOR) / HRV_SPAN
HRV_FLOOR = 30.0
HRV_SPAN = 30.0

# Population-level impact baselines (not personalised)
SLEEP_BASELINE = 75.0
HRV_BASELINE = 42.0
MOOD_BASELINE = 3.5

SLEEP_IMPACT_DIVISOR = 3.0
HRV_IMPACT_DIVISOR = 2.0
MOOD_IMPACT_FACTOR = 6.0

NEUTRAL_MOOD = 3.5
CORRELATION_STRENGTH_NOMINAL = 0.85
CORRELATION_STRENGTH_FALLBACK = 0.70
# Measured mood/energy correlation replaces the nominal one only below this p-value.
CORRELATION_SIGNIFICANCE_ALPHA = 0.05

# Burnout classification
BURNOUT_MIN_ENTRIES = 3
BURNOUT_RECENT_COUNT = 3
MOOD_WINDOW_SIZE = 7

# Mood scale
MOOD_SCORES = {
    "great": 5,
    "good": 4,
    "okay": 3,
    "low": 2,
    "poor": 1,
}
MOOD_DIP_BELOW = 3
MOOD_NOTE_MAX_LEN = 50

# Free-text keywords matched against mood notes (lower-cased substring match)
TASK_KEYWORDS = ("task", "work", "busy")
MINDFULNESS_KEYWORDS = ("journal", "meditat", "relax")
EXERCISE_KEYWORDS = ("exercise", "workout", "run")

# Pattern thresholds
HIGH_ENERGY_ABOVE = 80
LOW_ENERGY_BELOW = 60
SLEEP_GAP_MIN_HOURS = 0.5
CONSISTENCY_MIN = 0.8
TREND_SIGNIFICANT_POINTS = 5
OPTIMAL_SLEEP_SCORE_ABOVE = 80
OPTIMAL_ENERGY_SCORE_ABOVE = 80
OPTIMAL_HRV_ABOVE = 45

WEEKDAY_SLEEP_WEIGHT = 10

# Insight assembly
DEFAULT_INSIGHT_LIMIT = 8
BURNOUT_SCORE_PER_LEVEL = 30

# Default record synthesised when no biometric data exists for a date
DEFAULT_BIOMETRIC = {
    "sleepScore": 78,
    "sleepHours": 7.5,
    "hrv": 42,
    "restingHR": 65,
    "energyLevel": "medium",
    "energyScore": 72,
}
