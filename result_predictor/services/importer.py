# result_predictor/services/importer.py
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence, Union

from result_predictor.logging_config import app_logger
from result_predictor.schema.assessment import PredictionRecord, StudentAssessment
from result_predictor.schema.validation import (
    BatchValidationFailure,
    ErrorKind,
    RowFailure,
    ValidationFailure,
    ValidationIssue,
)
from result_predictor.services.normalizer import normalize
from result_predictor.services.prediction import predict
from result_predictor.services.registry import SubjectRegistry, default_registry


def import_batch(
    rows: Sequence[Mapping[str, Any]],
    registry: Optional[SubjectRegistry] = None,
) -> Union[List[PredictionRecord], BatchValidationFailure]:
    """
    Turn decoded spreadsheet rows into prediction records, all or nothing.

    Every row is normalized before any record is created. If a single row
    fails, the whole batch is rejected and the failure lists each bad row
    (1-based) with its issues.

    Args:
        rows: Raw rows with string keys, in sheet order
        registry: Subject registry the sheet columns follow

    Returns:
        Records in row order, or BatchValidationFailure
    """
    registry = registry or default_registry()

    if not rows:
        app_logger.warning("Rejected import: no rows")
        return BatchValidationFailure(kind=ErrorKind.EMPTY_BATCH)

    assessments: List[StudentAssessment] = []
    failures: List[RowFailure] = []

    for number, row in enumerate(rows, start=1):
        if not isinstance(row, Mapping):
            failures.append(
                RowFailure(
                    row=number,
                    issues=[
                        ValidationIssue(
                            kind=ErrorKind.MISSING_REQUIRED_FIELD,
                            message="Row is not a record with named columns",
                        )
                    ],
                )
            )
            continue

        result = normalize(row, registry)
        if isinstance(result, ValidationFailure):
            app_logger.debug(f"Row {number} failed: {result.kinds()}")
            failures.append(RowFailure(row=number, issues=result.issues))
        else:
            assessments.append(result)

    if failures:
        app_logger.warning(
            f"Rejected import of {len(rows)} row(s): "
            f"{len(failures)} row(s) invalid"
        )
        return BatchValidationFailure(rows=failures)

    now = datetime.now(timezone.utc)
    records = [predict(assessment, registry, now=now) for assessment in assessments]

    app_logger.info(f"Imported {len(records)} student record(s)")
    return records
