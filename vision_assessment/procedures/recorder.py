"""Trial records and the recorder that appends them to a session's log."""
# Standard library imports
import time
from dataclasses import dataclass
from typing import List

# Local imports
from ..exceptions import InvalidLevelError


@dataclass(frozen=True)
class Trial:
    """One presented stimulus and the subject's response."""
    index: int
    level: float
    correct: bool
    timestamp: float


class ResponseRecorder:
    """Creates Trial records and appends them to the session-owned log."""

    def __init__(self, level_model, trial_log: List[Trial]):
        self.level_model = level_model
        self.trial_log = trial_log

    def record_response(self, level, correct) -> Trial:
        """
        Record a response at the given level.

        Args:
            level (float): Level the stimulus was presented at
            correct (bool): Whether the subject responded correctly

        Returns:
            Trial: The appended, immutable trial record

        Raises:
            InvalidLevelError: If the level is outside the model bounds
        """
        if not self.level_model.contains(level):
            raise InvalidLevelError(
                f"Level {level} outside [{self.level_model.min_level}, "
                f"{self.level_model.max_level}]")
        trial = Trial(
            index=len(self.trial_log),
            level=level,
            correct=bool(correct),
            timestamp=time.time(),
        )
        self.trial_log.append(trial)
        return trial
