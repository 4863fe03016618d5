"""
Vision Assessment - adaptive staircase engine for an educational vision assessment tool
"""

__version__ = "0.1.0"

# Import order matters: procedures before analysis
from .procedures import (
    AssessmentSession,
    StaircaseConfig,
    StaircaseStatus,
    create_session,
    get_next_stimulus_level,
    get_result,
    get_trial_log,
    submit_response,
)
from .analysis import ThresholdEstimate, ThresholdEstimator
from .stimulus import StimulusLevelModel
from .exceptions import (
    ConfigurationError,
    InsufficientDataError,
    InvalidLevelError,
    SessionNotCompleteError,
    SessionTerminatedError,
)

__all__ = [
    "AssessmentSession",
    "StaircaseConfig",
    "StaircaseStatus",
    "create_session",
    "get_next_stimulus_level",
    "get_result",
    "get_trial_log",
    "submit_response",
    "ThresholdEstimate",
    "ThresholdEstimator",
    "StimulusLevelModel",
    "ConfigurationError",
    "InsufficientDataError",
    "InvalidLevelError",
    "SessionNotCompleteError",
    "SessionTerminatedError",
]
