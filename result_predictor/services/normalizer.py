# result_predictor/services/normalizer.py
import math

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from result_predictor.schema.assessment import (
    Level,
    StudentAssessment,
    SubjectScore,
    subject_total,
)
from result_predictor.schema.validation import (
    ErrorKind,
    ValidationFailure,
    ValidationIssue,
)
from result_predictor.services.registry import SubjectRegistry, default_registry

# Canonical field -> accepted keys, first present key wins
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "student_name": ("Student Name", "studentName"),
    "student_id": ("Student ID", "studentId"),
    "department": ("Department", "department"),
    "level": ("Level", "level"),
    "attendance": ("Attendance", "attendance"),
    "previous_cgpa": ("Previous CGPA", "previousCGPA"),
    "previous_credit_units": ("Previous Credit Units", "previousCreditUnits"),
}

REQUIRED_FIELDS = ("student_name", "student_id", "department", "level")

# Score component -> (spreadsheet column suffix, nested manual-form keys)
COMPONENT_KEYS: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "first_ca": ("First CA", ("firstCA",)),
    "second_ca": ("Second CA", ("secondCA",)),
    "exam_score": ("Exam", ("examScore", "score")),
}

COMPONENT_LABELS = {
    "first_ca": "First CA",
    "second_ca": "Second CA",
    "exam_score": "Exam",
}

MAX_ATTENDANCE = 100
MAX_SUBJECT_TOTAL = 100
MAX_CGPA = 5.0

_MISSING = object()


class InvalidNumber(ValueError):
    pass


def subject_column(subject: str, component: str) -> str:
    """Spreadsheet column name, e.g. ``"Algorithms (First CA)"``."""
    return f"{subject} ({COMPONENT_KEYS[component][0]})"


def resolve_alias(raw: Mapping[str, Any], field: str) -> Any:
    """Return the value of the first alias present in ``raw``."""
    for key in FIELD_ALIASES[field]:
        if key in raw:
            return raw[key]
    return _MISSING


def _is_blank(value: Any) -> bool:
    if value is _MISSING or value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def to_number(value: Any) -> Optional[float]:
    """
    Coerce a form or spreadsheet value to a float.

    Returns None for missing values (None, blank strings, NaN from
    spreadsheet decoders) and raises InvalidNumber for anything else
    that is not numeric.
    """
    if _is_blank(value):
        return None
    # bool is an int subclass but never a mark
    if isinstance(value, bool):
        raise InvalidNumber(repr(value))
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise InvalidNumber("an integer too large for a float")
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise InvalidNumber(repr(value))
    else:
        raise InvalidNumber(repr(value))

    if math.isnan(number) or math.isinf(number):
        raise InvalidNumber(repr(value))
    return number


class _Collector:
    def __init__(self):
        self.issues: List[ValidationIssue] = []

    def add(self, kind: ErrorKind, field: str, message: str):
        self.issues.append(ValidationIssue(kind=kind, field=field, message=message))

    def number(self, value: Any, field: str) -> Optional[float]:
        try:
            return to_number(value)
        except InvalidNumber as exc:
            self.add(
                ErrorKind.INVALID_NUMBER,
                field,
                f"{field} must be a number, got {exc}",
            )
            return None


def _text(value: Any) -> str:
    if _is_blank(value):
        return ""
    return str(value).strip()


def _nested_component(
    raw: Mapping[str, Any], subject: str, component: str
) -> Any:
    subjects = raw.get("subjects")
    if not isinstance(subjects, Mapping):
        return _MISSING
    scores = subjects.get(subject)
    if not isinstance(scores, Mapping):
        return _MISSING
    for key in COMPONENT_KEYS[component][1]:
        if key in scores:
            return scores[key]
    return _MISSING


def _normalize_subjects(
    raw: Mapping[str, Any], registry: SubjectRegistry, errors: _Collector
) -> Dict[str, SubjectScore]:
    nested = raw.get("subjects")
    if isinstance(nested, Mapping):
        for name in nested:
            if name not in registry:
                errors.add(
                    ErrorKind.OUT_OF_RANGE,
                    f"subjects.{name}",
                    f"{name} is not a registered subject",
                )

    subjects: Dict[str, SubjectScore] = {}
    for subject in registry:
        limits = {
            "first_ca": subject.max_first_ca,
            "second_ca": subject.max_second_ca,
            "exam_score": subject.max_exam,
        }
        values: Dict[str, float] = {}
        valid = True
        for component, maximum in limits.items():
            column = subject_column(subject.name, component)
            value = raw[column] if column in raw else _MISSING
            if _is_blank(value):
                value = _nested_component(raw, subject.name, component)

            number = errors.number(value, column)
            if number is None:
                # Missing marks count as zero, invalid ones were recorded
                if not _is_blank(value):
                    valid = False
                number = 0.0
            elif number < 0 or number > maximum:
                errors.add(
                    ErrorKind.OUT_OF_RANGE,
                    column,
                    f"{column} must be between 0 and {maximum}, got {number:g}",
                )
                valid = False
            values[component] = number

        total = subject_total(**values)
        if total > MAX_SUBJECT_TOTAL:
            errors.add(
                ErrorKind.SCORE_OVERFLOW,
                subject.name,
                f"Total score for {subject.name} cannot exceed "
                f"{MAX_SUBJECT_TOTAL}, got {total:g}",
            )
            valid = False

        if valid:
            subjects[subject.name] = SubjectScore(**values)

    return subjects


def normalize(
    raw: Mapping[str, Any],
    registry: Optional[SubjectRegistry] = None,
) -> Union[StudentAssessment, ValidationFailure]:
    """
    Turn a manual form submission or a spreadsheet row into a
    StudentAssessment.

    Every problem in the record is collected; when any is found a
    ValidationFailure listing all of them is returned instead of raising.

    Args:
        raw: Mapping with canonical or human-readable keys
        registry: Subject registry to read subject marks for

    Returns:
        StudentAssessment, or ValidationFailure with every issue found
    """
    registry = registry or default_registry()
    errors = _Collector()

    identity = {}
    for field in REQUIRED_FIELDS:
        value = _text(resolve_alias(raw, field))
        if not value:
            errors.add(
                ErrorKind.MISSING_REQUIRED_FIELD,
                field,
                f"{FIELD_ALIASES[field][0]} is required",
            )
        identity[field] = value

    level = None
    if identity["level"]:
        try:
            level = Level(identity["level"])
        except ValueError:
            allowed = ", ".join(item.value for item in Level)
            errors.add(
                ErrorKind.OUT_OF_RANGE,
                "level",
                f"Level must be one of {allowed}, got {identity['level']!r}",
            )

    raw_attendance = resolve_alias(raw, "attendance")
    attendance = errors.number(raw_attendance, "attendance")
    if attendance is None and _is_blank(raw_attendance):
        errors.add(ErrorKind.MISSING_FIELD, "attendance", "Attendance is required")
    elif attendance is not None and not 0 <= attendance <= MAX_ATTENDANCE:
        errors.add(
            ErrorKind.OUT_OF_RANGE,
            "attendance",
            f"Attendance must be between 0 and {MAX_ATTENDANCE}, "
            f"got {attendance:g}",
        )

    raw_cgpa = resolve_alias(raw, "previous_cgpa")
    raw_units = resolve_alias(raw, "previous_credit_units")
    previous_cgpa = errors.number(raw_cgpa, "previous_cgpa")
    previous_units = errors.number(raw_units, "previous_credit_units")

    if previous_cgpa is not None and not 0.0 <= previous_cgpa <= MAX_CGPA:
        errors.add(
            ErrorKind.OUT_OF_RANGE,
            "previous_cgpa",
            f"Previous CGPA must be between 0.0 and {MAX_CGPA}, "
            f"got {previous_cgpa:g}",
        )
    if previous_units is not None:
        if previous_units < 0:
            errors.add(
                ErrorKind.OUT_OF_RANGE,
                "previous_credit_units",
                f"Previous credit units cannot be negative, got {previous_units:g}",
            )
        elif not previous_units.is_integer():
            errors.add(
                ErrorKind.INVALID_NUMBER,
                "previous_credit_units",
                f"Previous credit units must be a whole number, "
                f"got {previous_units:g}",
            )

    cgpa_given = not _is_blank(raw_cgpa)
    units_given = not _is_blank(raw_units)
    if cgpa_given != units_given:
        missing = "previous_credit_units" if cgpa_given else "previous_cgpa"
        errors.add(
            ErrorKind.MISSING_FIELD,
            missing,
            "Previous CGPA and previous credit units must be given together",
        )

    subjects = _normalize_subjects(raw, registry, errors)

    if errors.issues:
        return ValidationFailure(issues=errors.issues)

    return StudentAssessment(
        student_name=identity["student_name"],
        student_id=identity["student_id"],
        department=identity["department"],
        level=level,
        attendance=attendance,
        subjects=subjects,
        previous_cgpa=previous_cgpa,
        previous_credit_units=(
            int(previous_units) if previous_units is not None else None
        ),
    )
