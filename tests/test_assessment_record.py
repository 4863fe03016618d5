from datetime import date

import pytest

from vision_assessment.analysis import ThresholdEstimate
from vision_assessment.procedures import StaircaseStatus
from vision_assessment.records import (
    AssessmentRecord,
    calculate_age,
    format_estimate,
    logmar_to_snellen,
)


def estimate(value, status=StaircaseStatus.CONVERGED):
    return ThresholdEstimate(value=value, variability=0.05, standard_error=0.025,
                             trials_used=30, reversals_used=4, levels=(value,) * 4,
                             status=status)


def test_calculate_age_before_and_after_birthday():
    assert calculate_age('2015-06-20', today=date(2026, 6, 19)) == 10
    assert calculate_age('2015-06-20', today=date(2026, 6, 20)) == 11


@pytest.mark.parametrize("logmar, snellen", [(0.0, '6/6'), (0.3, '6/12'), (1.0, '6/60')])
def test_logmar_to_snellen(logmar, snellen):
    assert logmar_to_snellen(logmar) == snellen


def test_format_estimate():
    assert format_estimate('distance_acuity', estimate(0.3)) == '0.30 logMAR (6/12)'
    assert format_estimate('contrast_sensitivity', estimate(-1.65)) == '1.65 logCS'
    limited = format_estimate('near_acuity', estimate(1.0, StaircaseStatus.BOUNDARY_LIMITED))
    assert limited.endswith('[limited by test range]')
    with pytest.raises(ValueError):
        format_estimate('stereo', estimate(0.0))


def test_progress_badges():
    record = AssessmentRecord()
    record.student_info.assessment_date = ''
    assert record.student_info_progress().badge == ''
    assert record.see_it_progress().status == 'empty'

    record.student_info.student_name = 'Sam'
    record.student_info.year_group = 'Year 4'
    assert record.student_info_progress().badge == '2/5'

    record.apply_estimate('distance_acuity', estimate(0.1))
    record.apply_estimate('near_acuity', estimate(0.2))
    assert record.see_it_progress().badge == '2/4'
    assert not record.report_ready


def test_report_ready_when_all_sections_complete():
    record = AssessmentRecord()
    info = record.student_info
    info.student_name, info.date_of_birth, info.year_group, info.assessed_by = (
        'Sam', '2016-09-01', 'Year 4', 'QTVI')
    for test_name, value in [('distance_acuity', 0.0), ('near_acuity', 0.1),
                             ('contrast_sensitivity', -1.5)]:
        record.apply_estimate(test_name, estimate(value))
    record.set_light_sensitivity('glare', True)

    assert record.see_it_progress().badge == 'Complete'
    assert record.report_ready
    assert record.student_age(today=date(2026, 10, 19)) == 10


def test_light_sensitivity_toggle():
    record = AssessmentRecord()
    record.set_light_sensitivity('glare', True)
    record.set_light_sensitivity('glare', True)
    record.set_light_sensitivity('low_light', True)
    record.set_light_sensitivity('glare', False)
    assert record.see_it.light_sensitivity == ['low_light']
    with pytest.raises(ValueError):
        record.set_light_sensitivity('sunburn', True)


def test_dict_round_trip_ignores_unknown_fields():
    record = AssessmentRecord()
    record.student_info.student_name = 'Sam'
    record.set_light_sensitivity('glare', True)
    data = record.to_dict()
    data['seeIt']['lastModified'] = '2026-10-19T10:00:00'

    restored = AssessmentRecord.from_dict(data)
    assert restored == record
