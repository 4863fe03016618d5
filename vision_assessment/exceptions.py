"""Exceptions raised by the staircase engine."""


class VisionAssessmentError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(VisionAssessmentError, ValueError):
    """Invalid bounds, step rule or staircase parameters."""


class InvalidLevelError(VisionAssessmentError, ValueError):
    """A response was submitted for a level the session did not present."""


class SessionTerminatedError(VisionAssessmentError):
    """A response was submitted after the session terminated."""


class SessionNotCompleteError(VisionAssessmentError):
    """A result was requested before the session terminated."""


class InsufficientDataError(VisionAssessmentError):
    """Not enough reversals (or trials) to compute a threshold."""
