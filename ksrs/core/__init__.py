"""
Core building blocks without I/O: the SM-2 algorithm, review-day
boundaries and character classification.
"""

from .sm2 import Quality, SM2Config, SM2Scheduler, SM2State, review

__all__ = [
    "Quality",
    "SM2Config",
    "SM2Scheduler",
    "SM2State",
    "review",
]
