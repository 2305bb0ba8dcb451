# result_predictor/services/registry.py
from typing import Iterator, List, Optional, Sequence

from result_predictor.schema.assessment import Subject
from result_predictor.settings import settings

DEFAULT_SUBJECTS = (
    "Use of English",
    "Database Design",
    "Frontend Development",
    "Data Structures",
    "Algorithms",
    "Software Engineering",
)


class SubjectRegistry:
    """
    Ordered catalog of subjects and their scoring weights.
    Registry order drives scoring, advisory and report column order.
    """

    def __init__(self, subjects: Sequence[Subject]):
        if not subjects:
            raise ValueError("A subject registry needs at least one subject")

        names = [subject.name for subject in subjects]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate subjects in registry: {duplicates}")

        self._subjects: List[Subject] = list(subjects)

    def __iter__(self) -> Iterator[Subject]:
        return iter(self._subjects)

    def __len__(self) -> int:
        return len(self._subjects)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def names(self) -> List[str]:
        return [subject.name for subject in self._subjects]

    def get(self, name: str) -> Optional[Subject]:
        for subject in self._subjects:
            if subject.name == name:
                return subject
        return None


def default_registry(credit_units: Optional[int] = None) -> SubjectRegistry:
    """The six subjects marked 20 / 20 / 60 (First CA / Second CA / Exam)."""
    if credit_units is None:
        credit_units = settings.DEFAULT_CREDIT_UNITS

    return SubjectRegistry(
        [
            Subject(
                name=name,
                max_first_ca=20,
                max_second_ca=20,
                max_exam=60,
                credit_units=credit_units,
            )
            for name in DEFAULT_SUBJECTS
        ]
    )
