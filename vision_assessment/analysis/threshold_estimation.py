"""Threshold estimation from staircase reversals."""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np
from scipy.stats import gmean

from ..exceptions import ConfigurationError, InsufficientDataError
from ..procedures.staircase import StaircaseStatus
from ..utils.defaults import SCALES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThresholdEstimate:
    """Final threshold for one session. Immutable once created."""
    value: float
    variability: float
    standard_error: float
    trials_used: int
    reversals_used: int
    levels: Tuple[float, ...]
    status: StaircaseStatus

    @property
    def boundary_limited(self):
        return self.status is StaircaseStatus.BOUNDARY_LIMITED

    @property
    def converged(self):
        return self.status is StaircaseStatus.CONVERGED


class ThresholdEstimator:
    """
    Averages the levels at the last ``reversals_used`` reversals.

    Args:
        reversals_used (int): Number of final reversals to average (K)
        min_reversals (int): Reversals required before an estimate is allowed.
            Defaults to ``reversals_used``.
        scale (str): 'linear' for the arithmetic mean, 'geometric' for the
            geometric mean (use with geometric step rules)
    """

    def __init__(self, reversals_used=4, min_reversals=None, scale='linear'):
        if reversals_used < 1:
            raise ConfigurationError("reversals_used must be >= 1")
        if scale not in SCALES:
            raise ConfigurationError(f"scale must be one of {SCALES}, got {scale!r}")
        self.reversals_used = reversals_used
        self.min_reversals = reversals_used if min_reversals is None else min_reversals
        self.scale = scale

    def estimate(self, trial_log, reversals, status=StaircaseStatus.CONVERGED):
        """
        Compute the threshold from the final reversals.

        Args:
            trial_log (Sequence[Trial]): Ordered trials of the session
            reversals (Sequence[Reversal]): Reversals in the order they occurred
            status (StaircaseStatus): Termination status to attach

        Returns:
            ThresholdEstimate

        Raises:
            InsufficientDataError: Too few reversals, or reversals that do not
                refer to trials in the log
        """
        if len(reversals) < self.min_reversals:
            raise InsufficientDataError(
                f"Need at least {self.min_reversals} reversals, got {len(reversals)}")
        n_trials = len(trial_log)
        for reversal in reversals:
            if not 0 <= reversal.trial_index < n_trials:
                raise InsufficientDataError(
                    f"Reversal at trial {reversal.trial_index} not in a log of {n_trials} trials")

        selected = reversals[-self.reversals_used:]
        levels = np.array([r.level for r in selected], dtype=float)
        return self._summarise(levels, n_trials, len(selected), status)

    def estimate_from_track(self, trial_log, status):
        """
        Fallback estimate from the last presented levels.

        Used when a session stopped (max trials or boundary) before collecting
        enough reversals. A run pinned at a boundary averages to that boundary.
        """
        if not trial_log:
            raise InsufficientDataError("Cannot estimate a threshold from an empty trial log")
        levels = np.array([t.level for t in trial_log[-self.reversals_used:]], dtype=float)
        logger.info("Estimating from the last %d presented levels (%s)", len(levels), status.value)
        return self._summarise(levels, len(trial_log), 0, status)

    def _summarise(self, levels, trials_used, reversals_used, status):
        if self.scale == 'geometric':
            value = float(gmean(levels))
            spread = np.log(levels)
        else:
            value = float(np.mean(levels))
            spread = levels
        variability = float(np.std(spread, ddof=1)) if len(levels) > 1 else 0.0
        standard_error = variability / np.sqrt(len(levels))
        return ThresholdEstimate(
            value=value,
            variability=variability,
            standard_error=float(standard_error),
            trials_used=trials_used,
            reversals_used=reversals_used,
            levels=tuple(float(level) for level in levels),
            status=status,
        )
