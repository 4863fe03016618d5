"""
Procedures module for adaptive vision testing.

This module contains:
- Trial recording
- The n-down/m-up staircase controller
- Assessment sessions and the handle-based session API
"""

from .staircase import StaircaseController, StaircaseStatus, UpDownRule
from .recorder import ResponseRecorder, Trial
from .session import (
    AssessmentSession,
    StaircaseConfig,
    TrialOutcome,
    create_session,
    get_next_stimulus_level,
    get_result,
    get_trial_log,
    submit_response,
)

__all__ = [
    "StaircaseController",
    "StaircaseStatus",
    "UpDownRule",
    "ResponseRecorder",
    "Trial",
    "AssessmentSession",
    "StaircaseConfig",
    "TrialOutcome",
    "create_session",
    "get_next_stimulus_level",
    "get_result",
    "get_trial_log",
    "submit_response",
]
