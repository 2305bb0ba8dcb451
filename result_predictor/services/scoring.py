# result_predictor/services/scoring.py
from typing import Dict, List, Optional, Tuple

from result_predictor.schema.assessment import (
    PredictedGrade,
    StudentAssessment,
    SubjectGrade,
    SubjectResult,
    SubjectScore,
)
from result_predictor.services.registry import SubjectRegistry, default_registry

# Inclusive lower bounds, checked top down
GRADE_BOUNDARIES: Tuple[Tuple[float, str], ...] = (
    (70, "A"),
    (60, "B"),
    (50, "C"),
    (45, "D"),
    (40, "E"),
)
FAIL_GRADE = "F"

GRADE_POINTS: Dict[str, float] = {
    "A": 5.0,
    "B": 4.0,
    "C": 3.0,
    "D": 2.0,
    "E": 1.0,
    "F": 0.0,
}

# A subject is passed from 40. The overall Lower Credit band starts at 50.
SUBJECT_PASS_MARK = 40
LOWER_CREDIT_MARK = 50

# Applied to the average subject total
CLASSIFICATION_BANDS: Tuple[Tuple[float, PredictedGrade], ...] = (
    (75, PredictedGrade.DISTINCTION),
    (65, PredictedGrade.UPPER_CREDIT),
    (LOWER_CREDIT_MARK, PredictedGrade.LOWER_CREDIT),
    (45, PredictedGrade.PASS),
)


def grade_for(total: float) -> str:
    for lower_bound, grade in GRADE_BOUNDARIES:
        if total >= lower_bound:
            return grade
    return FAIL_GRADE


def grade_point_for(grade: str) -> float:
    return GRADE_POINTS[grade]


def score(subject_score: SubjectScore) -> SubjectGrade:
    """Total, letter grade and grade point of one subject."""
    total = subject_score.total
    grade = grade_for(total)
    return SubjectGrade(total=total, grade=grade, grade_point=grade_point_for(grade))


def classify(average: float) -> PredictedGrade:
    """Overall classification of the average subject total."""
    for lower_bound, band in CLASSIFICATION_BANDS:
        if average >= lower_bound:
            return band
    return PredictedGrade.FAIL


def score_assessment(
    assessment: StudentAssessment,
    registry: Optional[SubjectRegistry] = None,
) -> List[SubjectResult]:
    """Score every subject of a normalized assessment in registry order."""
    registry = registry or default_registry()

    results = []
    for subject in registry:
        subject_score = assessment.subjects[subject.name]
        graded = score(subject_score)
        results.append(
            SubjectResult(
                subject=subject.name,
                first_ca=subject_score.first_ca,
                second_ca=subject_score.second_ca,
                exam_score=subject_score.exam_score,
                total=graded.total,
                grade=graded.grade,
                grade_point=graded.grade_point,
                credit_units=subject.credit_units,
                weighted_points=graded.grade_point * subject.credit_units,
                passed=graded.total >= SUBJECT_PASS_MARK,
            )
        )
    return results
