"""
Unit tests for the SM-2 algorithm.

Run: pytest tests/unit/test_sm2.py -v
"""

import pytest

from ksrs.core.sm2 import Quality, SM2Config, SM2Scheduler, SM2State, review


def assert_review(expected, given):
    """expected: (repetitions, interval, ease); given: (repetitions, ease, quality)."""
    repetitions, ease, quality = given
    state, interval = review(SM2State(repetitions=repetitions, ease_factor=ease), quality)

    assert state.repetitions == expected[0]
    assert interval == expected[1]
    assert state.ease_factor == pytest.approx(expected[2])


class TestQuality:
    """Grade ordering and correctness."""

    @pytest.mark.parametrize("quality", [Quality.GRADE3, Quality.GRADE4, Quality.GRADE5])
    def test_correct_grades(self, quality):
        assert quality.is_correct

    @pytest.mark.parametrize("quality", [Quality.GRADE0, Quality.GRADE1, Quality.GRADE2])
    def test_incorrect_grades(self, quality):
        assert not quality.is_correct

    def test_rank_is_distance_from_perfect(self):
        assert Quality.GRADE5.rank == 0
        assert Quality.GRADE3.rank == 2
        assert Quality.GRADE0.rank == 5


class TestReview:
    """Ease, repetitions and intervals after one review."""

    def test_new_state(self):
        state = SM2Scheduler().initial_state()

        assert state.repetitions == 0
        assert state.ease_factor == 2.5
        assert review(state, Quality.GRADE5)[1] == 1

    @pytest.mark.parametrize("quality,ease", [
        (Quality.GRADE5, 2.6),
        (Quality.GRADE4, 2.5),
        (Quality.GRADE3, 2.36),
    ])
    def test_first_correct_review(self, quality, ease):
        assert_review((1, 1, ease), (0, 2.5, quality))

    def test_second_review(self):
        assert_review((2, 6, 2.6), (1, 2.5, Quality.GRADE5))

    def test_third_review(self):
        assert_review((3, 15, 2.6), (2, 2.5, Quality.GRADE5))

    def test_hard_review_after_three_repetitions(self):
        # 6 -> int(6 * 1.86) = 11 -> int(11 * 1.86) = 20
        assert_review((4, 20, 1.86), (3, 2.0, Quality.GRADE3))

    def test_interval_truncates_every_step(self):
        # 6 -> int(15.6) = 15 -> int(39.0) = 39, not int(6 * 2.6 * 2.6) = 40
        assert_review((4, 39, 2.6), (3, 2.5, Quality.GRADE5))

    @pytest.mark.parametrize("quality", [Quality.GRADE0, Quality.GRADE1, Quality.GRADE2])
    def test_incorrect_review_resets(self, quality):
        assert_review((0, 1, 2.5), (3, 2.5, quality))

    def test_ease_factor_floor(self):
        assert_review((1, 1, 1.3), (0, 1.3, Quality.GRADE3))


class TestProperties:
    """Invariants over many reviews."""

    @pytest.mark.parametrize("quality", list(Quality))
    def test_review_is_deterministic(self, quality):
        state = SM2State(repetitions=4, ease_factor=2.1)

        assert review(state, quality) == review(state, quality)
        assert state == SM2State(repetitions=4, ease_factor=2.1)

    def test_ease_never_below_minimum(self):
        state = SM2State()
        for _ in range(50):
            state, interval = review(state, Quality.GRADE3)
            assert state.ease_factor >= 1.3
            assert interval >= 1

        assert state.ease_factor == pytest.approx(1.3)

    def test_incorrect_answers_leave_ease_untouched(self):
        state = SM2State(repetitions=2, ease_factor=1.9)
        for quality in (Quality.GRADE0, Quality.GRADE1, Quality.GRADE2):
            new_state, _ = review(state, quality)
            assert new_state.ease_factor == 1.9

    def test_custom_config(self):
        scheduler = SM2Scheduler(SM2Config(first_interval=2, second_interval=5))

        state, interval = scheduler.review(SM2State(), Quality.GRADE4)
        assert interval == 2

        state, interval = scheduler.review(state, Quality.GRADE4)
        assert interval == 5
