"""
HTTP tests for the MealTrack API.

The check-in repository dependency is overridden with one backed by an
in-memory collection, so no MongoDB server is needed.
"""

from io import BytesIO

import pandas as pd
import pytest

from test_fixtures import client, FakeCollection, make_document, make_record, utc
from main import app
from api.dependencies import get_checkin_repository
from adapters import mongo_adapter
from repositories.checkin_repository import CheckInRepository


SEED = [
    make_record("A", "2024-01-01", "08:00 am"),
    make_record("A", "2024-01-01", "08:30 am"),
    make_record("B", "2024-01-01", "01:00 pm"),
    make_record("C", "2024-01-02", "07:45 pm"),
    make_record("C", "2024-01-05", "08:00 am"),
]


@pytest.fixture
def collection():
    col = FakeCollection([make_document(r, str(i)) for i, r in enumerate(SEED)])
    app.dependency_overrides[get_checkin_repository] = lambda: CheckInRepository(col)
    yield col
    app.dependency_overrides.clear()


def test_root():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"message": "Attendance server running..."}


def test_health_check(monkeypatch):
    monkeypatch.setattr(mongo_adapter, "ping", lambda: True)

    r = client.get("/health-check")

    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "MealTrack", "mongo": "up"}
    assert "X-Request-ID" in r.headers


def test_health_check_reports_mongo_down(monkeypatch):
    monkeypatch.setattr(mongo_adapter, "ping", lambda: False)

    assert client.get("/health-check").json()["mongo"] == "down"


# =============================================================================
# RAW CHECK-INS
# =============================================================================


def test_list_checkins(collection):
    r = client.get("/api/attendances", params={"from": "2024-01-01", "to": "2024-01-02"})

    assert r.status_code == 200
    body = r.json()
    assert [d["uniqueId"] for d in body] == ["A", "A", "B", "C"]
    assert set(body[0]) == {"uniqueId", "name", "rollNo", "date", "time"}


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"from": "2024-01-01"},
        {"to": "2024-01-01"},
        {"from": "2024-01-01", "to": "01/02/2024"},
    ],
)
def test_list_checkins_rejects_bad_dates(collection, params):
    r = client.get("/api/attendances", params=params)

    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["error"]["code"] == "INVALID_RANGE"
    assert collection.queries == []


def test_reversed_range_is_rejected(collection):
    r = client.get("/api/attendances/summary", params={"from": "2024-01-05", "to": "2024-01-01"})

    assert r.status_code == 400
    assert "must not be after" in r.json()["error"]["message"]


# =============================================================================
# SUMMARY
# =============================================================================


def test_summary(collection):
    r = client.get("/api/attendances/summary", params={"from": "2024-01-01", "to": "2024-01-02"})

    assert r.status_code == 200
    body = r.json()
    assert body["totals"] == {"Breakfast": 1, "Lunch": 1, "Snacks": 0, "Dinner": 1}
    assert body["rows"][0] == {
        "uniqueId": "A",
        "name": "Asha Rao",
        "rollNo": "21A1034",
        "date": "2024-01-01",
        "Breakfast": "Present",
        "Lunch": "Absent",
        "Snacks": "Absent",
        "Dinner": "Absent",
    }
    assert [(row["uniqueId"], row["date"]) for row in body["rows"]] == [
        ("A", "2024-01-01"),
        ("B", "2024-01-01"),
        ("C", "2024-01-02"),
    ]


def test_summary_with_filter(collection):
    r = client.get(
        "/api/attendances/summary",
        params={"from": "2024-01-01", "to": "2024-01-31", "filter": "A1"},
    )

    assert r.status_code == 200
    body = r.json()
    assert [row["uniqueId"] for row in body["rows"]] == ["A", "C", "C"]
    assert body["totals"] == {"Breakfast": 2, "Lunch": 0, "Snacks": 0, "Dinner": 1}


def test_summary_empty_window(collection):
    r = client.get("/api/attendances/summary", params={"from": "2023-06-01", "to": "2023-06-30"})

    assert r.status_code == 200
    assert r.json() == {
        "rows": [],
        "totals": {"Breakfast": 0, "Lunch": 0, "Snacks": 0, "Dinner": 0},
    }


def test_summary_malformed_record(collection):
    bad = make_record("D", "2024-01-01", "half past eight")
    collection.documents.append(make_document(bad, "99"))

    r = client.get("/api/attendances/summary", params={"from": "2024-01-01", "to": "2024-01-01"})

    assert r.status_code == 422
    error = r.json()["error"]
    assert error["code"] == "MALFORMED_RECORD"
    assert error["details"]["identifier_id"] == "D"


def test_summary_storage_failure(collection):
    collection.fail = True

    r = client.get("/api/attendances/summary", params={"from": "2024-01-01", "to": "2024-01-02"})

    assert r.status_code == 503
    assert r.json()["error"]["code"] == "STORAGE_ERROR"


def test_storage_not_connected(monkeypatch):
    monkeypatch.setattr(mongo_adapter, "get_collection", lambda name: None)

    r = client.get("/api/attendances", params={"from": "2024-01-01", "to": "2024-01-02"})

    assert r.status_code == 503
    assert r.json()["error"]["message"] == "MongoDB not available"


@pytest.mark.parametrize(
    "path, params",
    [
        ("/api/attendances", {}),
        ("/api/attendances/summary", {"to": "2024-01-02"}),
        ("/api/attendances/summary", {"from": "2024-01-05", "to": "2024-01-01"}),
        ("/api/attendances/summary/export", {"from": "2024-13-01", "to": "2024-12-31"}),
    ],
)
def test_bad_dates_rejected_before_storage_is_touched(monkeypatch, path, params):
    monkeypatch.setattr(mongo_adapter, "get_collection", lambda name: None)

    r = client.get(path, params=params)

    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_RANGE"


# =============================================================================
# EXPORT
# =============================================================================


def test_export_summary(collection):
    r = client.get(
        "/api/attendances/summary/export",
        params={"from": "2024-01-01", "to": "2024-01-02"},
    )

    assert r.status_code == 200
    assert r.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert 'filename="attendance_summary.xlsx"' in r.headers["content-disposition"]

    df = pd.read_excel(BytesIO(r.content), sheet_name="Attendance", dtype=str)
    assert list(df.columns) == [
        "uniqueId", "name", "rollNo", "date", "Breakfast", "Lunch", "Snacks", "Dinner",
    ]
    assert df["uniqueId"].tolist() == ["A", "B", "C"]
    assert df.loc[2, "Dinner"] == "Present"
