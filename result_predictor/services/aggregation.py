# result_predictor/services/aggregation.py
import math

from typing import Sequence

from result_predictor.schema.assessment import (
    PerformanceSummary,
    StudentAssessment,
    SubjectResult,
)

DECIMAL_PLACES = 2


def average_total(results: Sequence[SubjectResult]) -> float:
    """Arithmetic mean of the subject totals, unrounded."""
    if not results:
        return 0.0
    return math.fsum(result.total for result in results) / len(results)


def calculate_gpa(total_weighted_points: float, total_credit_units: int) -> float:
    if total_credit_units == 0:
        return 0.0
    return total_weighted_points / total_credit_units


def calculate_cgpa(
    assessment: StudentAssessment,
    total_weighted_points: float,
    total_credit_units: int,
) -> float:
    """
    Combine the current term with the prior CGPA/credit-unit pair.

    Without a prior pair the CGPA is the term GPA.
    """
    if not assessment.has_history:
        return calculate_gpa(total_weighted_points, total_credit_units)

    previous_points = assessment.previous_cgpa * assessment.previous_credit_units
    credit_units = assessment.previous_credit_units + total_credit_units
    if credit_units == 0:
        return 0.0
    return (previous_points + total_weighted_points) / credit_units


def aggregate(
    assessment: StudentAssessment,
    results: Sequence[SubjectResult],
) -> PerformanceSummary:
    """
    Summarize scored subjects into averages, pass counts, GPA and CGPA.

    Everything is computed at full precision and rounded to two decimal
    places on the way out.

    Args:
        assessment: The normalized assessment the results were scored from
        results: Scored subjects in registry order

    Returns:
        PerformanceSummary with the results attached
    """
    totals = [result.total for result in results]
    passed = sum(1 for result in results if result.passed)

    total_credit_units = sum(result.credit_units for result in results)
    total_weighted_points = math.fsum(result.weighted_points for result in results)

    gpa = calculate_gpa(total_weighted_points, total_credit_units)
    cgpa = calculate_cgpa(assessment, total_weighted_points, total_credit_units)

    return PerformanceSummary(
        average=round(average_total(results), DECIMAL_PLACES),
        passed=passed,
        failed=len(results) - passed,
        highest=round(max(totals), DECIMAL_PLACES) if totals else 0.0,
        lowest=round(min(totals), DECIMAL_PLACES) if totals else 0.0,
        gpa=round(gpa, DECIMAL_PLACES),
        cgpa=round(cgpa, DECIMAL_PLACES),
        total_credit_units=total_credit_units,
        total_weighted_points=round(total_weighted_points, DECIMAL_PLACES),
        results=tuple(results),
    )
