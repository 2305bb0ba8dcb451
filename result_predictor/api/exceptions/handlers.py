# result_predictor/api/exceptions/handlers.py
from typing import Union

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from result_predictor.schema.base import BaseResponse
from result_predictor.schema.validation import BatchValidationFailure, ValidationFailure


class AssessmentRejected(Exception):
    """Raised by routes when the normalizer or importer returns a failure"""

    def __init__(
        self,
        failure: Union[ValidationFailure, BatchValidationFailure],
        message: str = "Invalid assessment data",
    ):
        super().__init__(message)
        self.failure = failure
        self.message = message


async def assessment_rejected_handler(
    request: Request, exc: AssessmentRejected
) -> JSONResponse:
    body = BaseResponse(
        status=False,
        message=exc.message,
        error=exc.failure.model_dump(mode="json"),
    )
    return JSONResponse(
        status_code=422,
        content=body.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AssessmentRejected, assessment_rejected_handler)
