# result_predictor/services/advisory.py
from typing import Optional

from result_predictor.schema.assessment import Advisory, StudentAssessment
from result_predictor.services.registry import SubjectRegistry, default_registry

ATTENDANCE_THRESHOLD = 75
WEAK_SUBJECT_MARK = 50
LOW_CA_MARK = 10
LOW_EXAM_MARK = 30

ATTENDANCE_SUGGESTION = (
    f"Improve class attendance to at least {ATTENDANCE_THRESHOLD}% "
    "to better understand course material"
)


def advise(
    assessment: StudentAssessment,
    registry: Optional[SubjectRegistry] = None,
) -> Advisory:
    """Suggestions and weaknesses, attendance first, then registry order."""
    registry = registry or default_registry()
    suggestions = []
    weaknesses = []

    if assessment.attendance < ATTENDANCE_THRESHOLD:
        suggestions.append(ATTENDANCE_SUGGESTION)

    for name in registry.names():
        subject_score = assessment.subjects[name]
        if subject_score.total >= WEAK_SUBJECT_MARK:
            continue

        suggestions.append(f"Focus on improving {name}")

        if subject_score.first_ca < LOW_CA_MARK:
            weaknesses.append(f"{name}: Low First CA")
        if subject_score.second_ca < LOW_CA_MARK:
            weaknesses.append(f"{name}: Low Second CA")
        if subject_score.exam_score < LOW_EXAM_MARK:
            weaknesses.append(f"{name}: Poor exam performance")

    return Advisory(suggestions=suggestions, weaknesses=weaknesses)
