# result_predictor/services/store.py
from abc import ABC, abstractmethod
from typing import Dict, List, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from result_predictor.logging_config import app_logger
from result_predictor.models.prediction import PredictionList
from result_predictor.schema.assessment import PredictionRecord


class RecordStore(ABC):
    """One list of prediction records per user, read and written whole."""

    @abstractmethod
    def get(self, user_id: str) -> List[PredictionRecord]:
        ...

    @abstractmethod
    def put(self, user_id: str, records: Sequence[PredictionRecord]) -> None:
        ...


class InMemoryRecordStore(RecordStore):
    def __init__(self):
        self._lists: Dict[str, List[PredictionRecord]] = {}

    def get(self, user_id: str) -> List[PredictionRecord]:
        return list(self._lists.get(user_id, []))

    def put(self, user_id: str, records: Sequence[PredictionRecord]) -> None:
        self._lists[user_id] = list(records)


class SqlRecordStore(RecordStore):
    """Stores each user's list as a JSON document in ``prediction_lists``."""

    def __init__(self, db: Session):
        self.db = db

    def _select(self, user_id: str):
        stmt = select(PredictionList).where(PredictionList.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get(self, user_id: str) -> List[PredictionRecord]:
        row = self._select(user_id)
        if not row:
            return []
        return [PredictionRecord.model_validate(item) for item in row.records]

    def put(self, user_id: str, records: Sequence[PredictionRecord]) -> None:
        payload = [record.model_dump(mode="json") for record in records]

        row = self._select(user_id)
        if row:
            row.records = payload
        else:
            self.db.add(PredictionList(user_id=user_id, records=payload))

        try:
            self.db.commit()
        except Exception as e:
            app_logger.error(f"Error saving records for user {user_id}: {e}")
            self.db.rollback()
            raise


def add_records(
    store: RecordStore,
    user_id: str,
    records: Sequence[PredictionRecord],
) -> List[PredictionRecord]:
    """Prepend new records (newest first, batch order kept) and save."""
    updated = list(records) + store.get(user_id)
    store.put(user_id, updated)
    return updated


def remove_record(store: RecordStore, user_id: str, record_id: UUID) -> bool:
    """Delete one record by id. Returns False when the user has no such record."""
    existing = store.get(user_id)
    remaining = [record for record in existing if record.id != record_id]
    if len(remaining) == len(existing):
        return False

    store.put(user_id, remaining)
    app_logger.info(f"Removed prediction {record_id} for user {user_id}")
    return True
