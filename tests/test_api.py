import csv
import io

import pytest
from fastapi.testclient import TestClient

from result_predictor.api.dependencies.store import get_record_store
from result_predictor.main import app
from result_predictor.services.registry import DEFAULT_SUBJECTS
from result_predictor.services.store import InMemoryRecordStore

from tests.factories import make_row

AUTH = {"X-User-Id": "lecturer"}


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_record_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_subjects(client):
    response = client.get("/subjects/")

    assert response.status_code == 200
    subjects = response.json()["data"]
    assert [subject["name"] for subject in subjects] == list(DEFAULT_SUBJECTS)
    assert subjects[0]["max_exam"] == 60


def test_identity_is_required(client):
    response = client.get("/predictions/")

    assert response.status_code == 401


def test_manual_entry(client, store):
    response = client.post("/predictions/", json=make_row(), headers=AUTH)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] is True
    assert body["data"]["predicted_grade"] == "Distinction"
    assert body["data"]["suggestions"] == []
    assert len(store.get("lecturer")) == 1


def test_manual_entry_validation_failure(client, store):
    response = client.post(
        "/predictions/", json=make_row(Attendance=101), headers=AUTH
    )

    assert response.status_code == 422
    body = response.json()
    assert body["status"] is False
    assert body["error"]["issues"][0]["kind"] == "OutOfRange"
    assert store.get("lecturer") == []


def test_import_is_atomic(client, store):
    rows = [make_row(), make_row(Attendance=150), make_row()]

    response = client.post("/predictions/import", json={"rows": rows}, headers=AUTH)

    assert response.status_code == 422
    error = response.json()["error"]
    assert error["kind"] == "BatchValidationFailure"
    assert [failure["row"] for failure in error["rows"]] == [2]
    assert store.get("lecturer") == []


def test_empty_import(client):
    response = client.post("/predictions/import", json={"rows": []}, headers=AUTH)

    assert response.status_code == 422
    assert response.json()["error"]["kind"] == "EmptyBatch"


def test_import_list_and_delete(client):
    rows = [make_row(**{"Student ID": "001"}), make_row(**{"Student ID": "002"})]

    response = client.post("/predictions/import", json={"rows": rows}, headers=AUTH)
    assert response.status_code == 201
    assert response.json()["message"] == "Successfully processed 2 student records"

    listed = client.get("/predictions/", headers=AUTH).json()["data"]
    assert [item["assessment"]["student_id"] for item in listed] == ["001", "002"]

    record_id = listed[0]["id"]
    assert client.delete(f"/predictions/{record_id}", headers=AUTH).status_code == 200
    assert client.delete(f"/predictions/{record_id}", headers=AUTH).status_code == 404

    remaining = client.get("/predictions/", headers=AUTH).json()["data"]
    assert [item["assessment"]["student_id"] for item in remaining] == ["002"]


def test_export_csv(client):
    client.post("/predictions/", json=make_row({"Algorithms": (5, 5, 20)}, Attendance=60), headers=AUTH)

    response = client.get("/predictions/export", headers=AUTH)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "predictions_" in response.headers["content-disposition"]
    header, row = list(csv.reader(io.StringIO(response.text)))
    cells = dict(zip(header, row))
    assert cells["Student ID"] == "HUK/ND/001"
    assert cells["Algorithms"] == "30.00"


def test_export_without_records(client):
    assert client.get("/predictions/export", headers=AUTH).status_code == 404


def test_report(client):
    created = client.post("/predictions/", json=make_row(), headers=AUTH).json()["data"]

    response = client.get(f"/predictions/{created['id']}/report", headers=AUTH)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["table"]["header"][0] == "Subject"
    assert len(data["table"]["rows"]) == len(DEFAULT_SUBJECTS)
    assert data["chart"]["data"] == [80.0] * len(DEFAULT_SUBJECTS)


def test_other_users_cannot_see_records(client):
    created = client.post("/predictions/", json=make_row(), headers=AUTH).json()["data"]

    other = {"X-User-Id": "admin"}
    assert client.get("/predictions/", headers=other).json()["data"] == []
    assert client.get(f"/predictions/{created['id']}/report", headers=other).status_code == 404


def test_import_rejects_rows_that_are_not_records(client, store):
    rows = [make_row(), ["Ada Obi", "HUK/ND/001"]]

    response = client.post("/predictions/import", json={"rows": rows}, headers=AUTH)

    assert response.status_code == 422
    body = response.json()
    assert body["status"] is False
    assert body["error"]["kind"] == "BatchValidationFailure"
    assert [failure["row"] for failure in body["error"]["rows"]] == [2]
    assert store.get("lecturer") == []


def test_manual_entry_with_huge_number(client, store):
    response = client.post(
        "/predictions/", json=make_row(Attendance=10 ** 400), headers=AUTH
    )

    assert response.status_code == 422
    assert response.json()["error"]["issues"][0]["kind"] == "InvalidNumber"
    assert store.get("lecturer") == []
