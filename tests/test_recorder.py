import dataclasses

import pytest

from vision_assessment.exceptions import InvalidLevelError
from vision_assessment.procedures import ResponseRecorder
from vision_assessment.stimulus import FixedStep, StimulusLevelModel


@pytest.fixture
def recorder():
    return ResponseRecorder(StimulusLevelModel(0, 10, FixedStep(1)), [])


def test_record_response_appends_ordered_trials(recorder):
    first = recorder.record_response(5, True)
    second = recorder.record_response(4, False)

    assert recorder.trial_log == [first, second]
    assert (first.index, first.level, first.correct) == (0, 5, True)
    assert (second.index, second.level, second.correct) == (1, 4, False)


def test_trials_are_immutable(recorder):
    trial = recorder.record_response(5, True)
    with pytest.raises(dataclasses.FrozenInstanceError):
        trial.correct = False


def test_out_of_bounds_level_is_rejected_without_logging(recorder):
    with pytest.raises(InvalidLevelError):
        recorder.record_response(11, True)
    assert recorder.trial_log == []
