import pytest

from vision_assessment.procedures import AssessmentSession, StaircaseConfig


def make_config(**overrides):
    """Config used by the worked examples: 0-10 in unit steps, 2-down/1-up."""
    params = dict(
        min_level=0,
        max_level=10,
        step_size=1,
        correct_streak_to_decrease=2,
        incorrect_streak_to_increase=1,
        reversals_required=4,
        reversals_used_for_estimate=4,
        max_trials=50,
        start_level=5,
    )
    params.update(overrides)
    return StaircaseConfig(**params)


def run_responses(session, responses):
    outcomes = []
    for correct in responses:
        outcomes.append(session.submit_response(correct, level=session.next_stimulus_level()))
    return outcomes


@pytest.fixture
def config() -> StaircaseConfig:
    return make_config()


@pytest.fixture
def session(config) -> AssessmentSession:
    return AssessmentSession(config)
