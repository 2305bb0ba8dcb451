import uuid

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from result_predictor.database import Base
from result_predictor.models.prediction import PredictionList
from result_predictor.services.prediction import predict
from result_predictor.services.store import (
    InMemoryRecordStore,
    SqlRecordStore,
    add_records,
    remove_record,
)

from tests.factories import make_assessment


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[PredictionList.__table__])
    db = sessionmaker(bind=engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(params=["memory", "sql"])
def store(request, session):
    if request.param == "memory":
        return InMemoryRecordStore()
    return SqlRecordStore(session)


def _record(student_id):
    return predict(make_assessment(**{"Student ID": student_id}))


def test_unknown_user_has_no_records(store):
    assert store.get("nobody") == []


def test_new_records_are_listed_first(store):
    add_records(store, "lecturer", [_record("001")])
    add_records(store, "lecturer", [_record("002"), _record("003")])

    ids = [record.assessment.student_id for record in store.get("lecturer")]

    assert ids == ["002", "003", "001"]


def test_lists_are_per_user(store):
    add_records(store, "admin", [_record("001")])

    assert store.get("lecturer") == []
    assert len(store.get("admin")) == 1


def test_remove_record(store):
    first, second = _record("001"), _record("002")
    add_records(store, "admin", [first, second])

    assert remove_record(store, "admin", first.id) is True
    assert store.get("admin") == [second]
    assert remove_record(store, "admin", uuid.uuid4()) is False
    assert remove_record(store, "lecturer", second.id) is False


def test_sql_store_round_trips_records(session):
    record = _record("001")
    SqlRecordStore(session).put("admin", [record])

    assert SqlRecordStore(session).get("admin") == [record]
