# result_predictor/api/dependencies/store.py
from fastapi import Depends
from sqlalchemy.orm import Session

from result_predictor.database import get_db
from result_predictor.services.registry import SubjectRegistry, default_registry
from result_predictor.services.store import RecordStore, SqlRecordStore


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    return SqlRecordStore(db)


def get_registry() -> SubjectRegistry:
    return default_registry()
