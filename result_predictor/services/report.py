# result_predictor/services/report.py
import csv
import io

from itertools import groupby
from typing import Iterable, List, Optional, Sequence

from result_predictor.schema.assessment import PredictionRecord
from result_predictor.schema.report import ChartSeries, ReportTable
from result_predictor.services.registry import SubjectRegistry, default_registry

CSV_IDENTITY_COLUMNS = ["Student Name", "Student ID", "Department", "Level"]
CSV_FREE_TEXT_COLUMNS = ("Suggestions", "Weaknesses")
ENTRY_SEPARATOR = "; "

REPORT_TABLE_HEADER = [
    "Subject",
    "First CA",
    "Second CA",
    "Exam",
    "Total",
    "Grade",
    "Credit Units",
    "Grade Point",
    "Weighted Points",
    "Status",
]


def format_number(value: float) -> str:
    return f"{value:.2f}"


def format_percentage(value: float) -> str:
    return f"{format_number(value)}%"


def csv_header(registry: Optional[SubjectRegistry] = None) -> List[str]:
    registry = registry or default_registry()
    return [
        *CSV_IDENTITY_COLUMNS,
        "GPA",
        "CGPA",
        "Predicted Grade",
        "Attendance",
        *registry.names(),
        *CSV_FREE_TEXT_COLUMNS,
        "Timestamp",
    ]


def to_csv_rows(
    records: Iterable[PredictionRecord],
    registry: Optional[SubjectRegistry] = None,
) -> List[List[str]]:
    """
    Flatten records into CSV rows, header first.

    Subject cells hold the subject total; suggestions and weaknesses are
    joined into one cell each.
    """
    registry = registry or default_registry()
    rows = [csv_header(registry)]

    for record in records:
        assessment = record.assessment
        totals = {result.subject: result.total for result in record.summary.results}
        rows.append(
            [
                assessment.student_name,
                assessment.student_id,
                assessment.department,
                assessment.level.value,
                format_number(record.summary.gpa),
                format_number(record.summary.cgpa),
                record.predicted_grade.value,
                format_number(assessment.attendance),
                *[
                    format_number(totals[name]) if name in totals else ""
                    for name in registry.names()
                ],
                ENTRY_SEPARATOR.join(record.suggestions),
                ENTRY_SEPARATOR.join(record.weaknesses),
                record.created_at.isoformat(),
            ]
        )
    return rows


def _write_cells(cells: Sequence[str], quoting: int) -> str:
    buffer = io.StringIO()
    # A cell holding CR or LF is quoted because both are in the terminator
    csv.writer(buffer, quoting=quoting, lineterminator="\r\n").writerow(cells)
    return buffer.getvalue()[:-2]


def render_csv(rows: Sequence[Sequence[str]]) -> str:
    """
    Write rows produced by ``to_csv_rows`` as CSV text.

    Free-text columns are always double-quoted in data rows. Other cells
    are quoted only when they contain a separator, quote or line break.
    """
    if not rows:
        return ""

    output = io.StringIO()
    header = list(rows[0])
    output.write(_write_cells(header, csv.QUOTE_MINIMAL))
    output.write("\n")

    free_text = {
        index for index, name in enumerate(header) if name in CSV_FREE_TEXT_COLUMNS
    }
    for row in rows[1:]:
        # Runs of adjacent cells share a quoting mode
        runs = groupby(enumerate(row), key=lambda item: item[0] in free_text)
        output.write(
            ",".join(
                _write_cells(
                    [cell for _, cell in run],
                    csv.QUOTE_ALL if forced else csv.QUOTE_MINIMAL,
                )
                for forced, run in runs
            )
        )
        output.write("\n")
    return output.getvalue()


def to_report_table(record: PredictionRecord) -> ReportTable:
    """Tables for the PDF report of one record."""
    assessment = record.assessment
    summary = record.summary

    details = [
        ["Student Name", assessment.student_name],
        ["Student ID", assessment.student_id],
        ["Department", assessment.department],
        ["Level", assessment.level.value],
        ["Attendance", format_percentage(assessment.attendance)],
        ["Predicted Grade", record.predicted_grade.value],
    ]

    rows = [
        [
            result.subject,
            format_number(result.first_ca),
            format_number(result.second_ca),
            format_number(result.exam_score),
            format_number(result.total),
            result.grade,
            str(result.credit_units),
            format_number(result.grade_point),
            format_number(result.weighted_points),
            "Pass" if result.passed else "Fail",
        ]
        for result in summary.results
    ]

    summary_rows = [
        ["Total Credit Units", str(summary.total_credit_units)],
        ["Total Weighted Points", format_number(summary.total_weighted_points)],
        ["GPA", format_number(summary.gpa)],
        ["CGPA", format_number(summary.cgpa)],
    ]

    return ReportTable(
        title=f"{assessment.student_name} ({assessment.student_id})",
        details=details,
        header=list(REPORT_TABLE_HEADER),
        rows=rows,
        summary_rows=summary_rows,
    )


def to_chart_series(record: PredictionRecord) -> ChartSeries:
    results = record.summary.results
    return ChartSeries(
        label=record.assessment.student_name,
        labels=[result.subject for result in results],
        data=[result.total for result in results],
    )
