"""
Adaptive staircase implementation using a transformed n-down/m-up rule.
"""
# Standard library imports
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

# Local imports
from ..exceptions import ConfigurationError, SessionTerminatedError
from .recorder import Trial

logger = logging.getLogger(__name__)

UP = 1     # easier
DOWN = -1  # harder


class StaircaseStatus(Enum):
    RUNNING = 'running'
    CONVERGED = 'converged'
    MAX_TRIALS_EXCEEDED = 'max_trials_exceeded'
    BOUNDARY_LIMITED = 'boundary_limited'

    @property
    def terminal(self):
        return self is not StaircaseStatus.RUNNING


@dataclass(frozen=True)
class UpDownRule:
    """Step down after ``n_down`` correct in a row, up after ``m_up`` incorrect in a row."""
    n_down: int = 2
    m_up: int = 1

    def __post_init__(self):
        if self.n_down < 1 or self.m_up < 1:
            raise ConfigurationError(
                f"streak lengths must be >= 1, got n_down={self.n_down}, m_up={self.m_up}")

    def decide(self, correct_streak, incorrect_streak):
        """Direction to move given the current streaks, or None to stay."""
        if correct_streak >= self.n_down:
            return DOWN
        if incorrect_streak >= self.m_up:
            return UP
        return None


@dataclass(frozen=True)
class Reversal:
    """A flip in the direction of level change. ``level`` is the level after the flip."""
    trial_index: int
    level_before: float
    level: float
    direction: int


@dataclass
class SessionState:
    current_level: float
    consecutive_correct: int = 0
    consecutive_incorrect: int = 0
    trial_log: List[Trial] = field(default_factory=list)
    reversals: List[Reversal] = field(default_factory=list)
    status: StaircaseStatus = StaircaseStatus.RUNNING
    last_direction: Optional[int] = None
    boundary_run: int = 0

    @property
    def reversal_count(self):
        return len(self.reversals)

    @property
    def terminated(self):
        return self.status.terminal


@dataclass(frozen=True)
class StepDecision:
    """What the controller did in response to one trial."""
    trial: Trial
    direction: Optional[int]
    level_before: float
    level_after: float
    reversal: bool
    status: StaircaseStatus


class StaircaseController:
    """
    Decides the next stimulus level after each trial and when the run has converged.

    The controller owns the mutable SessionState; nothing else writes to it
    except the recorder appending to ``state.trial_log``.
    """

    def __init__(self, level_model, rule, reversals_required, max_trials,
                 boundary_run_length, start_level, state=None):
        if reversals_required < 1:
            raise ConfigurationError("reversals_required must be >= 1")
        if max_trials < 1:
            raise ConfigurationError("max_trials must be >= 1")
        if boundary_run_length < 1:
            raise ConfigurationError("boundary_run_length must be >= 1")
        if not level_model.contains(start_level):
            raise ConfigurationError(
                f"start_level {start_level} outside [{level_model.min_level}, "
                f"{level_model.max_level}]")

        self.level_model = level_model
        self.rule = rule
        self.reversals_required = reversals_required
        self.max_trials = max_trials
        self.boundary_run_length = boundary_run_length
        self.state = state if state is not None else SessionState(current_level=start_level)

    @property
    def next_level(self):
        return self.state.current_level

    def process(self, trial: Trial) -> StepDecision:
        """
        Advance the staircase with a recorded trial.

        Args:
            trial (Trial): The trial just recorded at ``next_level``

        Returns:
            StepDecision: Direction taken, new level, reversal flag and status
        """
        state = self.state
        if state.terminated:
            raise SessionTerminatedError(f"Staircase already terminated ({state.status.value})")

        # Update streaks; a response that breaks a streak resets its counter
        if trial.correct:
            state.consecutive_incorrect = 0
            state.consecutive_correct += 1
        else:
            state.consecutive_correct = 0
            state.consecutive_incorrect += 1

        level_before = state.current_level
        direction = self.rule.decide(state.consecutive_correct, state.consecutive_incorrect)
        reversal = False

        if direction is not None:
            if direction == DOWN:
                state.consecutive_correct = 0
            else:
                state.consecutive_incorrect = 0
            state.current_level = self.level_model.step(level_before, direction)

            if state.last_direction is not None and direction != state.last_direction:
                reversal = True
                state.reversals.append(Reversal(
                    trial_index=trial.index,
                    level_before=level_before,
                    level=state.current_level,
                    direction=direction,
                ))
            state.last_direction = direction

        if self.level_model.is_boundary(trial.level) and not reversal:
            state.boundary_run += 1
        else:
            state.boundary_run = 0

        state.status = self._check_termination()

        logger.debug(
            "trial %d level=%s correct=%s -> level=%s reversals=%d status=%s",
            trial.index, trial.level, trial.correct, state.current_level,
            state.reversal_count, state.status.value)
        if state.terminated:
            logger.info("Staircase terminated: %s after %d trials, %d reversals",
                        state.status.value, len(state.trial_log), state.reversal_count)

        return StepDecision(
            trial=trial,
            direction=direction,
            level_before=level_before,
            level_after=state.current_level,
            reversal=reversal,
            status=state.status,
        )

    def _check_termination(self):
        state = self.state
        if state.reversal_count >= self.reversals_required:
            return StaircaseStatus.CONVERGED
        if state.boundary_run >= self.boundary_run_length:
            return StaircaseStatus.BOUNDARY_LIMITED
        if len(state.trial_log) >= self.max_trials:
            return StaircaseStatus.MAX_TRIALS_EXCEEDED
        return StaircaseStatus.RUNNING
