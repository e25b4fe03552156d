"""
Tests for burnout risk classification and goal-adjustment planning.

Covers: tier priority and strict boundaries, the 7-entry window,
insufficient data, and the directives each tier produces.
"""

import pytest

from analytics.burnout import (
    ENCOURAGEMENT,
    INSUFFICIENT_MESSAGE,
    classify_burnout_risk,
    plan_goal_adjustments,
)
from models import BurnoutTier


# ─── classify_burnout_risk ────────────────────────────────────


class TestClassification:

    def test_declining_week_is_moderate(self):
        # avg 3.14, recent 1.67, decline 1.48 (not > 1.5)
        a = classify_burnout_risk([5, 4, 5, 3, 2, 2, 1])
        assert a.risk_tier == BurnoutTier.MODERATE
        assert a.level == 2
        assert a.decline == pytest.approx(1.48)

    def test_decline_exactly_one_and_a_half_is_not_high(self):
        a = classify_burnout_risk([5, 5, 5, 2, 2, 2])
        assert a.average_score == pytest.approx(3.5)
        assert a.recent_score == pytest.approx(2.0)
        assert a.decline == pytest.approx(1.5)
        assert a.risk_tier == BurnoutTier.MODERATE

    def test_average_exactly_three_is_moderate(self):
        assert classify_burnout_risk([3, 3, 3]).risk_tier == BurnoutTier.MODERATE

    def test_low_average_is_high(self):
        a = classify_burnout_risk([2, 2, 2])
        assert a.risk_tier == BurnoutTier.HIGH
        assert a.level == 3

    def test_sharp_decline_is_high(self):
        # avg 3.29 but recent 1.0 -> decline 2.29
        assert classify_burnout_risk([5, 5, 5, 5, 1, 1, 1]).risk_tier == BurnoutTier.HIGH

    def test_all_great_is_low(self):
        a = classify_burnout_risk([5, 5, 5, 5])
        assert a.risk_tier == BurnoutTier.LOW
        assert a.level == 0
        assert a.recommendations

    def test_good_but_not_great_is_mild(self):
        a = classify_burnout_risk([4, 4, 4, 4])
        assert a.risk_tier == BurnoutTier.MILD
        assert a.level == 1

    def test_only_last_seven_entries_count(self):
        a = classify_burnout_risk([1, 1, 1, 5, 5, 5, 5, 5, 5, 5])
        assert a.risk_tier == BurnoutTier.LOW
        assert a.entries == 7

    def test_accepts_mood_entries(self, make_mood):
        from datetime import date, timedelta
        start = date(2024, 10, 18)
        window = [make_mood(start + timedelta(days=i), s) for i, s in enumerate([2, 2, 2])]
        assert classify_burnout_risk(window).risk_tier == BurnoutTier.HIGH


class TestInsufficientData:

    @pytest.mark.parametrize("window", [[], None, [5], [1, 1]])
    def test_fewer_than_three(self, window):
        a = classify_burnout_risk(window)
        assert a.risk_tier == BurnoutTier.INSUFFICIENT_DATA
        assert a.level == 0
        assert a.recommendations == ()

    def test_tier_serializes_with_hyphen(self):
        assert classify_burnout_risk([]).to_dict()["risk_tier"] == "insufficient-data"

    @pytest.mark.parametrize("window", [["not-a-score", 3, 2], [object()], 42])
    def test_unusable_window_never_raises(self, window, caplog):
        with caplog.at_level("WARNING", logger="burnout"):
            a = classify_burnout_risk(window)
        assert a.risk_tier == BurnoutTier.INSUFFICIENT_DATA
        assert a.entries == 0
        assert "Unusable mood window" in caplog.text


class TestRecommendations:

    def test_high_mentions_fifty_percent(self):
        recs = classify_burnout_risk([1, 1, 1]).recommendations
        assert any("50%" in r for r in recs)
        assert any("10-minute" in r for r in recs)

    def test_moderate_mentions_twenty_five_percent(self):
        recs = classify_burnout_risk([3, 3, 3]).recommendations
        assert any("25%" in r for r in recs)

    def test_order_is_stable(self):
        assert (classify_burnout_risk([2, 2, 2]).recommendations
                == classify_burnout_risk([1, 2, 1]).recommendations)


# ─── plan_goal_adjustments ────────────────────────────────────


class TestGoalAdjustments:

    def test_high_tier_directives(self):
        plan = plan_goal_adjustments(classify_burnout_risk([1, 1, 1]))
        by_type = {d.type: d for d in plan.directives}
        assert [d.type for d in plan.directives] == ["task-reduction", "mindfulness", "timeline"]
        assert by_type["task-reduction"].severity == 50
        assert by_type["mindfulness"].duration == 10
        assert by_type["timeline"].days == 10

    def test_moderate_tier_directives(self):
        plan = plan_goal_adjustments(classify_burnout_risk([3, 3, 3]))
        values = [(d.severity, d.duration, d.days) for d in plan.directives]
        assert values == [(25, None, None), (None, 5, None), (None, None, 5)]

    def test_mild_tier_only_mindfulness(self):
        plan = plan_goal_adjustments(classify_burnout_risk([4, 4, 4]))
        assert len(plan.directives) == 1
        assert plan.directives[0].to_dict() == {
            "type": "mindfulness",
            "action": "Add a 5-minute mindfulness break to your day",
            "duration": 5,
        }

    def test_low_tier_is_encouraging(self):
        plan = plan_goal_adjustments(classify_burnout_risk([5, 5, 5]))
        assert plan.directives == ()
        assert plan.message == ENCOURAGEMENT

    def test_insufficient_data_message(self):
        plan = plan_goal_adjustments(classify_burnout_risk([5]))
        assert plan.directives == ()
        assert plan.message == INSUFFICIENT_MESSAGE

    def test_plan_to_dict(self):
        d = plan_goal_adjustments(classify_burnout_risk([1, 1, 1])).to_dict()
        assert d["risk_tier"] == "high"
        assert len(d["directives"]) == 3
