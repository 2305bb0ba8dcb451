from contextlib import asynccontextmanager

from fastapi import FastAPI

from result_predictor.api.exceptions.handlers import register_exception_handlers
from result_predictor.api.routes.predictions import router as predictions_router
from result_predictor.api.routes.subjects import router as subjects_router
from result_predictor.database import init_db
from result_predictor.settings import settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Student Result Predictor",
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}

register_exception_handlers(app)
app.include_router(subjects_router)
app.include_router(predictions_router)
