# result_predictor/schema/validation.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    # Optional-but-needed context, e.g. half of the previous CGPA pair
    MISSING_FIELD = "MissingField"
    INVALID_NUMBER = "InvalidNumber"
    OUT_OF_RANGE = "OutOfRange"
    SCORE_OVERFLOW = "ScoreOverflow"
    EMPTY_BATCH = "EmptyBatch"
    BATCH_VALIDATION_FAILURE = "BatchValidationFailure"


class ValidationIssue(BaseModel):
    """A single problem found while normalizing a raw record"""
    kind: ErrorKind
    field: Optional[str] = None
    message: str


class ValidationFailure(BaseModel):
    """Every issue found in one raw record"""
    issues: List[ValidationIssue]

    def kinds(self) -> List[ErrorKind]:
        return [issue.kind for issue in self.issues]


class RowFailure(BaseModel):
    """Issues for one row of an import batch. `row` is 1-based."""
    row: int
    issues: List[ValidationIssue]


class BatchValidationFailure(BaseModel):
    """Why a whole import batch was rejected"""
    kind: ErrorKind = ErrorKind.BATCH_VALIDATION_FAILURE
    rows: List[RowFailure] = []

    @property
    def message(self) -> str:
        if self.kind == ErrorKind.EMPTY_BATCH:
            return "The import batch contains no rows"
        numbers = ", ".join(str(failure.row) for failure in self.rows)
        return f"Import rejected: invalid data in row(s) {numbers}"
