"""
SM-2 Spaced Repetition Algorithm.

Turns the outcome of a single review into an updated memory state and the
number of days to wait before the next review. Pure: no storage, no clock.

SM-2 Grade Scale:
0 - Complete blackout
1 - Incorrect, but upon seeing the answer remembered
2 - Incorrect, but the answer seemed easy to recall
3 - Correct, but recalled with serious difficulty
4 - Correct, after some hesitation
5 - Correct, with perfect recall
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum

# =============================================================================
# Grades
# =============================================================================


class Quality(IntEnum):
    """Quality of a response, ordered from worst to best."""

    GRADE0 = 0
    GRADE1 = 1
    GRADE2 = 2
    GRADE3 = 3
    GRADE4 = 4
    GRADE5 = 5

    @property
    def is_correct(self) -> bool:
        return self >= Quality.GRADE3

    @property
    def rank(self) -> int:
        """Distance from a perfect answer (GRADE5 -> 0, GRADE0 -> 5)."""
        return Quality.GRADE5 - self


# =============================================================================
# SM-2 State
# =============================================================================


@dataclass(frozen=True)
class SM2State:
    """SM-2 algorithm state for a single item."""

    repetitions: int = 0  # Consecutive correct answers
    ease_factor: float = 2.5  # EF starts at 2.5, never below 1.3


@dataclass
class SM2Config:
    """Configuration for SM-2 algorithm."""

    initial_easiness: float = 2.5
    minimum_easiness: float = 1.3
    first_interval: int = 1  # Days for first review
    second_interval: int = 6  # Days for second review


# =============================================================================
# Scheduler
# =============================================================================


class SM2Scheduler:
    """
    Implements the SM-2 spaced repetition algorithm.

    Each item carries:
    - Easiness Factor (EF): how quickly the interval grows (2.5 default, min 1.3)
    - Repetitions: consecutive correct recalls

    The interval itself is not stored. It is derived from the repetition
    count and the current EF every time a review happens.
    """

    def __init__(self, config: SM2Config | None = None):
        """
        Initialize SM-2 scheduler.

        Args:
            config: Custom configuration (uses defaults if None)
        """
        self.config = config or SM2Config()

    def initial_state(self) -> SM2State:
        """State of an item that has never been reviewed."""
        return SM2State(repetitions=0, ease_factor=self.config.initial_easiness)

    def review(self, state: SM2State, quality: Quality) -> tuple[SM2State, int]:
        """
        Apply a review to a state.

        Args:
            state: Current SM-2 state
            quality: Grade of the response

        Returns:
            (updated state, days until the next review)
        """
        new_state = self.update_state(state, quality)
        return new_state, self.new_interval(new_state, quality)

    def update_state(self, state: SM2State, quality: Quality) -> SM2State:
        """Update the easiness factor and repetition counter."""
        quality = Quality(quality)
        if not quality.is_correct:
            # Failed - back to the beginning, EF untouched
            return replace(state, repetitions=0)

        # EF' = EF + (0.1 - r * (0.08 + r * 0.02)), r = 5 - q
        rank = float(quality.rank)
        ease_factor = max(
            self.config.minimum_easiness,
            state.ease_factor + (0.1 - rank * (0.08 + rank * 0.02)),
        )
        return SM2State(repetitions=state.repetitions + 1, ease_factor=ease_factor)

    def new_interval(self, state: SM2State, quality: Quality) -> int:
        """
        Days until the next review for an already updated state.

        Incorrect answers always come back the next day.
        """
        if not Quality(quality).is_correct:
            return self.config.first_interval
        return self._interval_for(max(state.repetitions, 1), state.ease_factor)

    def _interval_for(self, repetitions: int, ease_factor: float) -> int:
        if repetitions == 1:
            return self.config.first_interval

        interval = self.config.second_interval
        # Truncate at every step, not only at the end
        for _ in range(3, repetitions + 1):
            interval = int(interval * ease_factor)
        return interval


_default_scheduler = SM2Scheduler()


def review(state: SM2State, quality: Quality) -> tuple[SM2State, int]:
    """Review with the default SM-2 configuration."""
    return _default_scheduler.review(state, quality)
