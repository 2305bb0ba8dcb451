# result_predictor/schema/assessment.py
import math

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator


# Subject totals are kept to two decimal places
TOTAL_PRECISION = 2


def subject_total(first_ca: float, second_ca: float, exam_score: float) -> float:
    """Exact sum of the three marks, so 12.2 + 19.9 + 27.9 is 60.0"""
    return round(math.fsum((first_ca, second_ca, exam_score)), TOTAL_PRECISION)


class Level(str, Enum):
    ND1 = "ND1"
    ND2 = "ND2"
    HND1 = "HND1"
    HND2 = "HND2"


class PredictedGrade(str, Enum):
    # Overall classification of the average subject total.
    # Not the same scale as the per-subject A-F letter grade.
    DISTINCTION = "Distinction"
    UPPER_CREDIT = "Upper Credit"
    LOWER_CREDIT = "Lower Credit"
    PASS = "Pass"
    FAIL = "Fail"


class Subject(BaseModel):
    """Subject Registry entry with the maximum mark of each component"""
    name: str
    max_first_ca: int = Field(ge=0)
    max_second_ca: int = Field(ge=0)
    max_exam: int = Field(ge=0)
    credit_units: int = Field(ge=0)

    model_config = {"frozen": True}


class SubjectScore(BaseModel):
    first_ca: float = Field(0.0, ge=0)
    second_ca: float = Field(0.0, ge=0)
    exam_score: float = Field(0.0, ge=0)

    model_config = {"frozen": True}

    @property
    def total(self) -> float:
        return subject_total(self.first_ca, self.second_ca, self.exam_score)


class StudentAssessment(BaseModel):
    """A validated assessment record. Only the normalizer should build these."""
    student_name: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    department: str = Field(min_length=1)
    level: Level
    attendance: float = Field(ge=0, le=100)
    subjects: Dict[str, SubjectScore]
    previous_cgpa: Optional[float] = Field(None, ge=0.0, le=5.0)
    previous_credit_units: Optional[int] = Field(None, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_previous_pair(self):
        if (self.previous_cgpa is None) != (self.previous_credit_units is None):
            raise ValueError(
                "previous_cgpa and previous_credit_units must be given together"
            )
        return self

    @property
    def has_history(self) -> bool:
        return self.previous_cgpa is not None


class SubjectGrade(BaseModel):
    total: float
    grade: str
    grade_point: float


class SubjectResult(BaseModel):
    """Scored subject, derived from a SubjectScore and its registry entry"""
    subject: str
    first_ca: float
    second_ca: float
    exam_score: float
    total: float
    grade: str
    grade_point: float
    credit_units: int
    weighted_points: float
    passed: bool

    model_config = {"frozen": True}


class PerformanceSummary(BaseModel):
    average: float
    passed: int
    failed: int
    highest: float
    lowest: float
    gpa: float
    cgpa: float
    total_credit_units: int
    total_weighted_points: float
    results: Tuple[SubjectResult, ...] = ()

    model_config = {"frozen": True}


class Advisory(BaseModel):
    suggestions: List[str] = []
    weaknesses: List[str] = []


class PredictionRecord(BaseModel):
    """A completed prediction. Never mutated after creation."""
    id: UUID
    assessment: StudentAssessment
    predicted_grade: PredictedGrade
    summary: PerformanceSummary
    suggestions: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    created_at: datetime

    model_config = {"frozen": True}

    @field_validator("suggestions", "weaknesses", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        """Stored records may carry null instead of an empty list"""
        return () if value is None else value


class ImportRequest(BaseModel):
    """Rows already decoded from a spreadsheet"""
    rows: List[Any]
