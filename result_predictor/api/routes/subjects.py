# result_predictor/api/routes/subjects.py
from typing import List

from fastapi import APIRouter, Depends

from result_predictor.api.dependencies.store import get_registry
from result_predictor.schema.assessment import Subject
from result_predictor.schema.base import BaseResponse
from result_predictor.services.registry import SubjectRegistry

router = APIRouter(prefix="/subjects")


@router.get("/", response_model=BaseResponse[List[Subject]])
async def list_subjects(
    registry: SubjectRegistry = Depends(get_registry),
) -> BaseResponse[List[Subject]]:
    """Subjects in registry order with their maximum marks"""
    return BaseResponse(data=list(registry))
