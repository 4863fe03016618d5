"""
Assessment record for one student: details plus the "See it" findings.

Staircase estimates are written into the findings as formatted text so the
record can be handed to a report or storage layer unchanged.
"""
# Standard library imports
from dataclasses import asdict, dataclass, field, fields
from datetime import date
from typing import List, Optional

# Local imports
from ..utils.defaults import SNELLEN_TEST_DISTANCE, TEST_PRESETS

LIGHT_SENSITIVITY_OPTIONS = ('none', 'bright_light', 'glare', 'fluorescent', 'low_light')


@dataclass
class StudentInfo:
    student_name: str = ''
    date_of_birth: str = ''
    year_group: str = ''
    assessment_date: str = field(default_factory=lambda: date.today().isoformat())
    assessed_by: str = ''


@dataclass
class SeeItFindings:
    distance_acuity: str = ''
    distance_acuity_notes: str = ''
    near_acuity: str = ''
    near_distance: str = ''
    near_acuity_notes: str = ''
    contrast_sensitivity: str = ''
    contrast_sensitivity_notes: str = ''
    light_sensitivity: List[str] = field(default_factory=list)
    light_sensitivity_notes: str = ''

    # Fields that count towards completion; notes and near distance are optional
    REQUIRED = ('distance_acuity', 'near_acuity', 'contrast_sensitivity', 'light_sensitivity')


@dataclass(frozen=True)
class SectionProgress:
    completed: int
    total: int

    @property
    def status(self):
        if self.completed == self.total:
            return 'complete'
        return 'partial' if self.completed else 'empty'

    @property
    def badge(self):
        if self.status == 'complete':
            return 'Complete'
        if self.status == 'partial':
            return f"{self.completed}/{self.total}"
        return ''


def calculate_age(date_of_birth, today=None):
    """Age in whole years on ``today`` (defaults to the current date)."""
    if isinstance(date_of_birth, str):
        date_of_birth = date.fromisoformat(date_of_birth)
    today = today or date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


def logmar_to_snellen(logmar, distance=SNELLEN_TEST_DISTANCE):
    """Snellen fraction for a logMAR value, e.g. 0.0 -> '6/6', 0.3 -> '6/12'."""
    denominator = distance * 10 ** logmar
    return f"{distance}/{round(denominator)}"


def format_estimate(test_name, estimate):
    """Human-readable text for a staircase estimate of one of the preset tests."""
    if test_name not in TEST_PRESETS:
        raise ValueError(f"Unknown test {test_name!r}")
    value = estimate.value
    if test_name == 'contrast_sensitivity':
        # Lower contrast thresholds mean better sensitivity
        text = f"{-value:.2f} logCS"
    else:
        text = f"{value:.2f} logMAR ({logmar_to_snellen(value)})"
    if estimate.boundary_limited:
        text += ' [limited by test range]'
    return text


@dataclass
class AssessmentRecord:
    student_info: StudentInfo = field(default_factory=StudentInfo)
    see_it: SeeItFindings = field(default_factory=SeeItFindings)

    def student_info_progress(self):
        values = [getattr(self.student_info, f.name) for f in fields(StudentInfo)]
        return SectionProgress(sum(1 for v in values if v), len(values))

    def see_it_progress(self):
        values = [getattr(self.see_it, name) for name in SeeItFindings.REQUIRED]
        return SectionProgress(sum(1 for v in values if v), len(values))

    @property
    def report_ready(self):
        return (self.student_info_progress().status == 'complete'
                and self.see_it_progress().status == 'complete')

    def student_age(self, today=None) -> Optional[int]:
        if not self.student_info.date_of_birth:
            return None
        return calculate_age(self.student_info.date_of_birth, today)

    def apply_estimate(self, test_name, estimate):
        """Store a formatted staircase estimate in the matching finding."""
        setattr(self.see_it, test_name, format_estimate(test_name, estimate))

    def set_light_sensitivity(self, option, checked):
        if option not in LIGHT_SENSITIVITY_OPTIONS:
            raise ValueError(f"Unknown light sensitivity option {option!r}")
        selected = self.see_it.light_sensitivity
        if checked and option not in selected:
            selected.append(option)
        elif not checked and option in selected:
            selected.remove(option)

    def to_dict(self):
        return {
            'studentInfo': asdict(self.student_info),
            'seeIt': asdict(self.see_it),
        }

    @classmethod
    def from_dict(cls, data):
        """Rebuild a record; missing fields keep their defaults, unknown ones are ignored."""
        def pick(dc, values):
            names = {f.name for f in fields(dc)}
            return dc(**{k: v for k, v in (values or {}).items() if k in names})

        return cls(
            student_info=pick(StudentInfo, data.get('studentInfo')),
            see_it=pick(SeeItFindings, data.get('seeIt')),
        )
