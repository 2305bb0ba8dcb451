# result_predictor/services/prediction.py
import uuid

from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from result_predictor.logging_config import app_logger
from result_predictor.schema.assessment import PredictionRecord, StudentAssessment
from result_predictor.schema.validation import ValidationFailure
from result_predictor.services.advisory import advise
from result_predictor.services.aggregation import aggregate, average_total
from result_predictor.services.normalizer import normalize
from result_predictor.services.registry import SubjectRegistry, default_registry
from result_predictor.services.scoring import classify, score_assessment


def predict(
    assessment: StudentAssessment,
    registry: Optional[SubjectRegistry] = None,
    now: Optional[datetime] = None,
) -> PredictionRecord:
    """
    Score, aggregate and advise on a normalized assessment.

    The overall classification uses the unrounded average subject total.
    """
    registry = registry or default_registry()

    results = score_assessment(assessment, registry)
    summary = aggregate(assessment, results)
    advisory = advise(assessment, registry)

    return PredictionRecord(
        id=uuid.uuid4(),
        assessment=assessment,
        predicted_grade=classify(average_total(results)),
        summary=summary,
        suggestions=advisory.suggestions,
        weaknesses=advisory.weaknesses,
        created_at=now or datetime.now(timezone.utc),
    )


def submit(
    raw: Mapping[str, Any],
    registry: Optional[SubjectRegistry] = None,
) -> Union[PredictionRecord, ValidationFailure]:
    """Manual entry: normalize one raw record and predict on it."""
    registry = registry or default_registry()

    result = normalize(raw, registry)
    if isinstance(result, ValidationFailure):
        app_logger.warning(
            f"Rejected submission with {len(result.issues)} issue(s): "
            f"{[issue.kind.value for issue in result.issues]}"
        )
        return result

    record = predict(result, registry)
    app_logger.info(
        f"Created prediction {record.id} for student {result.student_id}: "
        f"{record.predicted_grade.value}"
    )
    return record
