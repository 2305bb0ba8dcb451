# result_predictor/schema/report.py
from typing import List
from uuid import UUID

from pydantic import BaseModel


class ReportTable(BaseModel):
    """Table shapes handed to the PDF writer"""
    title: str
    details: List[List[str]]
    header: List[str]
    rows: List[List[str]]
    summary_rows: List[List[str]]


class ChartSeries(BaseModel):
    """Per-subject totals for a radar chart"""
    label: str
    labels: List[str]
    data: List[float]


class RecordReport(BaseModel):
    record_id: UUID
    table: ReportTable
    chart: ChartSeries
