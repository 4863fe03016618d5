"""
Records module: the student assessment record and its completion tracking.
"""

from .assessment_record import (
    AssessmentRecord,
    SectionProgress,
    SeeItFindings,
    StudentInfo,
    calculate_age,
    format_estimate,
    logmar_to_snellen,
)

__all__ = [
    "AssessmentRecord",
    "SectionProgress",
    "SeeItFindings",
    "StudentInfo",
    "calculate_age",
    "format_estimate",
    "logmar_to_snellen",
]
