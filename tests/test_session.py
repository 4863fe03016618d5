import pytest

import vision_assessment as va
from vision_assessment.exceptions import (
    ConfigurationError,
    InvalidLevelError,
    SessionNotCompleteError,
    SessionTerminatedError,
)
from vision_assessment.procedures import AssessmentSession, StaircaseConfig, StaircaseStatus

from conftest import make_config, run_responses

WORKED_EXAMPLE = [True, True, False, True, True, False, True, True]


def test_worked_example_through_the_session(session):
    outcomes = run_responses(session, WORKED_EXAMPLE)

    assert [o.terminated for o in outcomes] == [False] * 7 + [True]
    assert session.is_complete()
    result = session.get_result()
    assert result.status is StaircaseStatus.CONVERGED
    assert result.levels == (5.0, 4.0, 5.0, 4.0)
    assert result.value == pytest.approx(4.5)
    assert result.trials_used == 8


def test_outcome_reports_state(session):
    first = session.submit_response(True)
    assert first.next_level == 5
    assert first.correct_streak == 1 and first.incorrect_streak == 0
    second = session.submit_response(True)
    assert second.next_level == 4
    assert second.correct_streak == 0
    third = session.submit_response(False)
    assert third.reversal and third.reversal_count == 1


def test_get_result_is_idempotent(session):
    run_responses(session, WORKED_EXAMPLE)
    assert session.get_result() is session.get_result()
    assert session.get_result() == session.get_result()


def test_result_before_completion_raises(session):
    session.submit_response(True)
    with pytest.raises(SessionNotCompleteError):
        session.get_result()


def test_response_after_termination_raises(session):
    run_responses(session, WORKED_EXAMPLE)
    with pytest.raises(SessionTerminatedError):
        session.submit_response(True)
    assert len(session.trial_log) == 8


def test_mismatched_level_is_rejected_without_side_effects(session):
    with pytest.raises(InvalidLevelError):
        session.submit_response(True, level=4)
    assert session.trial_log == ()
    assert session.next_stimulus_level() == 5


def test_boundary_limited_session_still_returns_flagged_estimate():
    session = AssessmentSession(make_config(start_level=10, boundary_run_length=3))
    run_responses(session, [False, False, False])

    assert session.status is StaircaseStatus.BOUNDARY_LIMITED
    result = session.get_result()
    assert result.boundary_limited
    assert result.value == 10


def test_max_trials_with_few_reversals_falls_back_to_track():
    config = make_config(reversals_required=10, max_trials=5)
    session = AssessmentSession(config)
    run_responses(session, [True] * 5)

    result = session.get_result()
    assert result.status is StaircaseStatus.MAX_TRIALS_EXCEEDED
    assert result.levels == (5.0, 4.0, 4.0, 3.0)
    assert result.value == pytest.approx(4.0)


def test_presented_levels_stay_in_bounds_for_any_responses():
    config = make_config(min_level=0, max_level=3, start_level=2, reversals_required=30,
                         max_trials=40, boundary_run_length=40)
    session = AssessmentSession(config)
    pattern = [True, True, True, True, True, True, False, False, False, False, False, True]
    i = 0
    while not session.is_complete():
        session.submit_response(pattern[i % len(pattern)])
        i += 1
    assert all(0 <= t.level <= 3 for t in session.trial_log)


def test_sessions_are_isolated(config):
    a, b = AssessmentSession(config), AssessmentSession(config)
    run_responses(a, [True, True])
    assert a.next_stimulus_level() == 4
    assert b.next_stimulus_level() == 5
    assert b.trial_log == ()


def test_trial_log_is_read_only(session):
    session.submit_response(True)
    log = session.trial_log
    assert isinstance(log, tuple)
    assert [t.index for t in log] == [0]


def test_handle_api():
    handle = va.create_session(make_config().to_dict())
    for correct in WORKED_EXAMPLE:
        level = va.get_next_stimulus_level(handle)
        va.submit_response(handle, correct, level=level)
    assert va.get_result(handle).value == pytest.approx(4.5)
    assert len(va.get_trial_log(handle)) == 8


class TestStaircaseConfig:

    def test_estimate_count_cannot_exceed_reversals_required(self):
        with pytest.raises(ConfigurationError):
            make_config(reversals_required=3, reversals_used_for_estimate=4)

    def test_invalid_bounds_fail_at_session_creation(self):
        with pytest.raises(ConfigurationError):
            AssessmentSession(make_config(min_level=10, max_level=0))

    def test_start_defaults_to_mid_range(self):
        assert make_config(start_level=None).initial_level == 5

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigurationError):
            StaircaseConfig.from_dict({'min_level': 0, 'max_level': 1, 'step_size': 0.1,
                                       'stepsize': 1})

    def test_missing_keys_rejected(self):
        with pytest.raises(ConfigurationError):
            StaircaseConfig.from_dict({'min_level': 0})

    def test_for_test_preset(self):
        config = StaircaseConfig.for_test('distance_acuity', max_trials=30)
        assert (config.min_level, config.max_level, config.step_size) == (-0.3, 1.0, 0.1)
        assert config.max_trials == 30
        with pytest.raises(ConfigurationError):
            StaircaseConfig.for_test('colour_vision')

    def test_from_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(
            "staircase:\n"
            "  min_level: 1\n"
            "  max_level: 64\n"
            "  step_size: 2\n"
            "  step_kind: geometric\n"
            "  scale: geometric\n"
            "  start_level: 16\n"
        )
        config = StaircaseConfig.from_yaml(path)
        session = AssessmentSession(config)
        session.submit_response(True)
        session.submit_response(True)
        assert session.next_stimulus_level() == 8

    def test_default_start_snaps_to_grid(self):
        config = make_config(step_size=3, start_level=None)
        assert config.initial_level == 6
        session = AssessmentSession(config)
        outcome = session.submit_response(False)
        assert outcome.next_level == 9

    def test_off_grid_start_rejected(self):
        with pytest.raises(ConfigurationError):
            make_config(step_size=3, start_level=5)
        with pytest.raises(ConfigurationError):
            make_config(start_level=2.5)

    def test_geometric_scale_needs_positive_minimum(self):
        with pytest.raises(ConfigurationError):
            make_config(min_level=-3, max_level=3, start_level=0, scale='geometric')
        with pytest.raises(ConfigurationError):
            make_config(min_level=0, max_level=10, scale='geometric')

    def test_non_positive_step_rejected(self):
        with pytest.raises(ConfigurationError):
            make_config(step_size=0)
