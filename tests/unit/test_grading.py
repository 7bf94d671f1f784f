"""
Unit tests for time-based grade suggestion.

Run: pytest tests/unit/test_grading.py -v
"""

import pytest

from recall.core.config import GradingThresholds
from recall.core.models import CardRecord, Quality
from recall.study.grading import suggest_grade_from_time


class TestSuggestGradeFromTime:
    @pytest.mark.parametrize(
        "response_ms,expected",
        [
            (0, Quality.EASY),
            (5000, Quality.EASY),
            (9999, Quality.EASY),
            (15000, Quality.GOOD),
            (25000, Quality.HARD),
            (39999, Quality.HARD),
            (60000, Quality.AGAIN),
            (300000, Quality.AGAIN),
        ],
    )
    def test_correct_answers_by_latency(self, response_ms, expected):
        assert suggest_grade_from_time(response_ms, True) == expected

    # ========================================
    # Boundaries are exclusive
    # ========================================

    def test_exactly_fast_threshold_is_good(self):
        assert suggest_grade_from_time(10000, True) == Quality.GOOD

    def test_exactly_normal_threshold_is_hard(self):
        assert suggest_grade_from_time(20000, True) == Quality.HARD

    def test_exactly_slow_threshold_is_again(self):
        assert suggest_grade_from_time(40000, True) == Quality.AGAIN

    # ========================================
    # Incorrect answers
    # ========================================

    @pytest.mark.parametrize("response_ms", [0, 1000, 15000, 90000])
    def test_wrong_answer_always_again(self, response_ms):
        assert suggest_grade_from_time(response_ms, False) == Quality.AGAIN

    def test_custom_thresholds(self):
        thresholds = GradingThresholds(fast=2, normal=5, slow=8, very_slow=30)
        assert suggest_grade_from_time(1500, True, thresholds) == Quality.EASY
        assert suggest_grade_from_time(4000, True, thresholds) == Quality.GOOD
        assert suggest_grade_from_time(6000, True, thresholds) == Quality.HARD
        assert suggest_grade_from_time(9000, True, thresholds) == Quality.AGAIN

    def test_negative_time_rejected(self):
        with pytest.raises(ValueError):
            suggest_grade_from_time(-1, True)


class TestSlowCorrectInconsistency:
    """
    A very slow correct answer is graded Again.

    Accuracy bookkeeping (times_correct) follows the grade, not the raw
    correctness flag, so such an answer is not counted as correct.
    """

    def test_slow_correct_is_again(self):
        assert suggest_grade_from_time(45000, was_correct=True) == Quality.AGAIN

    def test_slow_correct_not_counted_correct(self, scheduler):
        grade = suggest_grade_from_time(45000, was_correct=True)
        card, _ = scheduler.schedule(CardRecord.new(), grade)
        assert card.times_answered == 1
        assert card.times_correct == 0

    def test_hard_correct_not_counted_correct(self, scheduler):
        grade = suggest_grade_from_time(25000, was_correct=True)
        card, _ = scheduler.schedule(CardRecord.new(), grade)
        assert grade == Quality.HARD
        assert card.times_correct == 0
