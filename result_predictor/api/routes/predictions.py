# result_predictor/api/routes/predictions.py
import uuid

from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import Response

from result_predictor.api.dependencies.auth import get_current_user
from result_predictor.api.dependencies.store import get_record_store, get_registry
from result_predictor.api.exceptions.handlers import AssessmentRejected
from result_predictor.schema.assessment import ImportRequest, PredictionRecord
from result_predictor.schema.base import BaseResponse
from result_predictor.schema.report import RecordReport
from result_predictor.schema.validation import BatchValidationFailure, ValidationFailure
from result_predictor.services import prediction as prediction_handler
from result_predictor.services.importer import import_batch
from result_predictor.services.registry import SubjectRegistry
from result_predictor.services.report import (
    render_csv,
    to_chart_series,
    to_csv_rows,
    to_report_table,
)
from result_predictor.services.store import RecordStore, add_records, remove_record

router = APIRouter(prefix="/predictions")


@router.post(
    "/",
    status_code=201,
    response_model=BaseResponse[PredictionRecord],
)
async def create_prediction(
    raw: Dict[str, Any] = Body(...),
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    registry: SubjectRegistry = Depends(get_registry),
) -> BaseResponse[PredictionRecord]:
    """
    Manual entry: validate one assessment and store its prediction
    """
    result = prediction_handler.submit(raw, registry)
    if isinstance(result, ValidationFailure):
        raise AssessmentRejected(result)

    add_records(store, user_id, [result])
    return BaseResponse(data=result, message="Student data submitted successfully")


@router.post(
    "/import",
    status_code=201,
    response_model=BaseResponse[List[PredictionRecord]],
)
async def import_predictions(
    request: ImportRequest,
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    registry: SubjectRegistry = Depends(get_registry),
) -> BaseResponse[List[PredictionRecord]]:
    """
    Import rows decoded from a spreadsheet. Any invalid row rejects the
    whole batch and nothing is stored.
    """
    result = import_batch(request.rows, registry)
    if isinstance(result, BatchValidationFailure):
        raise AssessmentRejected(result, message=result.message)

    add_records(store, user_id, result)
    return BaseResponse(
        data=result,
        message=f"Successfully processed {len(result)} student records",
    )


@router.get("/", response_model=BaseResponse[List[PredictionRecord]])
async def list_predictions(
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
) -> BaseResponse[List[PredictionRecord]]:
    return BaseResponse(data=store.get(user_id))


@router.get("/export")
async def export_predictions(
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
    registry: SubjectRegistry = Depends(get_registry),
) -> Response:
    """
    Download every stored prediction as CSV
    """
    records = store.get(user_id)
    if not records:
        raise HTTPException(status_code=404, detail="No predictions to export")

    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return Response(
        content=render_csv(to_csv_rows(records, registry)),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": (
                f'attachment; filename="predictions_{timestamp}.csv"'
            )
        },
    )


@router.get("/{record_id}/report", response_model=BaseResponse[RecordReport])
async def get_prediction_report(
    record_id: uuid.UUID,
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
) -> BaseResponse[RecordReport]:
    record = next(
        (record for record in store.get(user_id) if record.id == record_id), None
    )
    if not record:
        raise HTTPException(status_code=404, detail="Prediction not found")

    return BaseResponse(
        data=RecordReport(
            record_id=record.id,
            table=to_report_table(record),
            chart=to_chart_series(record),
        )
    )


@router.delete("/{record_id}", response_model=BaseResponse)
async def delete_prediction(
    record_id: uuid.UUID,
    user_id: str = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store),
) -> BaseResponse:
    """
    Permanently delete one prediction
    """
    if not remove_record(store, user_id, record_id):
        raise HTTPException(status_code=404, detail="Prediction not found")

    return BaseResponse(message=f"Prediction {record_id} has been deleted")
