"""
Assessment session: one end-to-end staircase run for one subject and one test.
"""
# Standard library imports
import logging
from dataclasses import asdict, dataclass
from typing import Optional, Tuple

# Third-party imports
import yaml

# Local imports
from ..analysis.threshold_estimation import ThresholdEstimate, ThresholdEstimator
from ..exceptions import (
    ConfigurationError,
    InsufficientDataError,
    InvalidLevelError,
    SessionNotCompleteError,
    SessionTerminatedError,
)
from ..stimulus.levels import FixedStep, StimulusLevelModel, make_step_rule
from ..utils.defaults import (
    DEFAULT_BOUNDARY_RUN_LENGTH,
    DEFAULT_CORRECT_STREAK,
    DEFAULT_INCORRECT_STREAK,
    DEFAULT_MAX_TRIALS,
    DEFAULT_REVERSALS_REQUIRED,
    DEFAULT_REVERSALS_USED,
    TEST_PRESETS,
)
from .recorder import ResponseRecorder, Trial
from .staircase import StaircaseController, StaircaseStatus, UpDownRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaircaseConfig:
    """
    Parameters for one staircase run.

    Args:
        min_level, max_level (float): Bounds of the stimulus scale; lower is harder
        step_size (float): Additive step for 'fixed', multiplicative factor for 'geometric'
        correct_streak_to_decrease (int): Correct answers in a row before stepping down (N)
        incorrect_streak_to_increase (int): Wrong answers in a row before stepping up (M)
        reversals_required (int): Reversals that end the run as converged
        max_trials (int): Hard cap on trials
        reversals_used_for_estimate (int): Final reversals averaged into the threshold (K)
        start_level (float, optional): First level shown; must lie on the step grid
            for fixed steps. Defaults to the grid point nearest mid-range.
        step_kind (str): 'fixed' or 'geometric'
        boundary_run_length (int): Trials pinned at a bound, without reversing,
            before the run stops as boundary limited
        scale (str): 'linear' (arithmetic mean) or 'geometric' (geometric mean)
    """
    min_level: float
    max_level: float
    step_size: float
    correct_streak_to_decrease: int = DEFAULT_CORRECT_STREAK
    incorrect_streak_to_increase: int = DEFAULT_INCORRECT_STREAK
    reversals_required: int = DEFAULT_REVERSALS_REQUIRED
    max_trials: int = DEFAULT_MAX_TRIALS
    reversals_used_for_estimate: int = DEFAULT_REVERSALS_USED
    start_level: Optional[float] = None
    step_kind: str = 'fixed'
    boundary_run_length: int = DEFAULT_BOUNDARY_RUN_LENGTH
    scale: str = 'linear'

    def __post_init__(self):
        if self.reversals_used_for_estimate < 1:
            raise ConfigurationError("reversals_used_for_estimate must be >= 1")
        if self.reversals_used_for_estimate > self.reversals_required:
            raise ConfigurationError(
                f"reversals_used_for_estimate ({self.reversals_used_for_estimate}) cannot "
                f"exceed reversals_required ({self.reversals_required})")
        if self.scale == 'geometric' and self.min_level <= 0:
            raise ConfigurationError("geometric scale needs a strictly positive minimum level")
        if self.step_size <= 0:
            raise ConfigurationError(f"step size must be positive, got {self.step_size}")
        rule = self.step_rule
        if (self.start_level is not None and isinstance(rule, FixedStep)
                and not rule.on_grid(self.start_level, self.min_level)):
            raise ConfigurationError(
                f"start_level {self.start_level} is not on the grid "
                f"{self.min_level} + k*{self.step_size}")

    @property
    def step_rule(self):
        return make_step_rule(self.step_kind, self.step_size)

    @property
    def initial_level(self):
        """Start level, defaulting to the grid point nearest the middle of the range."""
        if self.start_level is not None:
            return self.start_level
        middle = (self.min_level + self.max_level) / 2
        rule = self.step_rule
        if isinstance(rule, FixedStep):
            return rule.nearest(middle, self.min_level)
        return middle

    @classmethod
    def from_dict(cls, data):
        known = cls.__dataclass_fields__
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(f"Unknown staircase config keys: {unknown}")
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Incomplete staircase config: {e}") from e

    @classmethod
    def from_yaml(cls, path):
        """Load a config from a YAML file, optionally nested under a 'staircase' key."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data.get('staircase', data))

    @classmethod
    def for_test(cls, test_name, **overrides):
        """Config for one of the preset vision tests (see TEST_PRESETS)."""
        try:
            preset = dict(TEST_PRESETS[test_name])
        except KeyError:
            raise ConfigurationError(
                f"Unknown test {test_name!r}; expected one of {sorted(TEST_PRESETS)}") from None
        preset.pop('units')
        preset.update(overrides)
        return cls.from_dict(preset)

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class TrialOutcome:
    """
    Result of submitting one response.

    ``next_level`` is the level to show next; the streak and reversal counts
    are the controller's state after this trial.
    """
    trial: Trial
    next_level: float
    correct_streak: int
    incorrect_streak: int
    reversal_count: int
    reversal: bool
    status: StaircaseStatus

    @property
    def terminated(self):
        return self.status.terminal


class AssessmentSession:
    """
    Orchestrates one staircase run.

    Each session owns its own state; independent sessions (one per subject
    or per eye) share nothing and may run side by side.
    """

    def __init__(self, config: StaircaseConfig):
        self.config = config
        self.level_model = StimulusLevelModel(
            config.min_level,
            config.max_level,
            config.step_rule,
        )
        self.controller = StaircaseController(
            level_model=self.level_model,
            rule=UpDownRule(config.correct_streak_to_decrease,
                            config.incorrect_streak_to_increase),
            reversals_required=config.reversals_required,
            max_trials=config.max_trials,
            boundary_run_length=config.boundary_run_length,
            start_level=config.initial_level,
        )
        self.recorder = ResponseRecorder(self.level_model, self.controller.state.trial_log)
        self.estimator = ThresholdEstimator(
            reversals_used=config.reversals_used_for_estimate,
            scale=config.scale,
        )
        self._result: Optional[ThresholdEstimate] = None

        logger.info("Session created: levels [%s, %s], %d-down/%d-up, %d reversals, max %d trials",
                    config.min_level, config.max_level,
                    config.correct_streak_to_decrease, config.incorrect_streak_to_increase,
                    config.reversals_required, config.max_trials)

    @property
    def state(self):
        return self.controller.state

    @property
    def status(self):
        return self.state.status

    @property
    def trial_log(self) -> Tuple[Trial, ...]:
        return tuple(self.state.trial_log)

    @property
    def reversals(self):
        return tuple(self.state.reversals)

    def next_stimulus_level(self):
        """Level the presentation layer should show for the next trial."""
        return self.controller.next_level

    def submit_response(self, correct, level=None) -> TrialOutcome:
        """
        Record the subject's response to the stimulus at ``next_stimulus_level()``.

        Args:
            correct (bool): Whether the response was correct
            level (float, optional): Level actually presented; must match
                ``next_stimulus_level()`` when given

        Returns:
            TrialOutcome
        """
        if self.is_complete():
            raise SessionTerminatedError(
                f"Session already terminated ({self.status.value}); no further responses accepted")

        expected = self.next_stimulus_level()
        if level is not None and level != expected:
            raise InvalidLevelError(
                f"Response submitted for level {level}, but the presented level is {expected}")

        trial = self.recorder.record_response(expected, correct)
        decision = self.controller.process(trial)
        state = self.state
        return TrialOutcome(
            trial=trial,
            next_level=decision.level_after,
            correct_streak=state.consecutive_correct,
            incorrect_streak=state.consecutive_incorrect,
            reversal_count=state.reversal_count,
            reversal=decision.reversal,
            status=decision.status,
        )

    def is_complete(self):
        return self.state.terminated

    def get_result(self) -> ThresholdEstimate:
        """Threshold estimate; computed once and returned unchanged on later calls."""
        if not self.is_complete():
            raise SessionNotCompleteError(
                f"Session still running after {len(self.state.trial_log)} trials")
        if self._result is None:
            self._result = self._estimate()
        return self._result

    def _estimate(self):
        status = self.status
        trial_log, reversals = self.trial_log, self.reversals
        if status is StaircaseStatus.CONVERGED:
            return self.estimator.estimate(trial_log, reversals, status)
        # Early stops still return a flagged estimate rather than failing
        try:
            return self.estimator.estimate(trial_log, reversals, status)
        except InsufficientDataError:
            return self.estimator.estimate_from_track(trial_log, status)


def create_session(config) -> AssessmentSession:
    """Create a session from a StaircaseConfig or a plain dict."""
    if isinstance(config, dict):
        config = StaircaseConfig.from_dict(config)
    return AssessmentSession(config)


def get_next_stimulus_level(session: AssessmentSession):
    return session.next_stimulus_level()


def submit_response(session: AssessmentSession, correct, level=None) -> TrialOutcome:
    return session.submit_response(correct, level=level)


def get_result(session: AssessmentSession) -> ThresholdEstimate:
    return session.get_result()


def get_trial_log(session: AssessmentSession) -> Tuple[Trial, ...]:
    return session.trial_log
