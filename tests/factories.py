from result_predictor.schema.assessment import StudentAssessment
from result_predictor.services.normalizer import normalize
from result_predictor.services.registry import DEFAULT_SUBJECTS


def make_row(scores=None, **fields):
    """
    A spreadsheet-style row. ``scores`` maps subject -> (first CA,
    second CA, exam); unlisted subjects get 20 / 20 / 40.
    """
    row = {
        "Student Name": "Ada Obi",
        "Student ID": "HUK/ND/001",
        "Department": "Computer Science",
        "Level": "ND1",
        "Attendance": 90,
    }
    scores = scores or {}
    for subject in DEFAULT_SUBJECTS:
        first_ca, second_ca, exam = scores.get(subject, (20, 20, 40))
        row[f"{subject} (First CA)"] = first_ca
        row[f"{subject} (Second CA)"] = second_ca
        row[f"{subject} (Exam)"] = exam
    row.update(fields)
    return row


def make_assessment(scores=None, **fields) -> StudentAssessment:
    assessment = normalize(make_row(scores, **fields))
    assert isinstance(assessment, StudentAssessment), assessment
    return assessment
