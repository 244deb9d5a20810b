"""
Tests for the range fetcher: interval construction, inclusivity and input
validation.
"""

import pytest
from datetime import timedelta

from test_fixtures import FakeCollection, make_document, make_record, utc
from repositories.checkin_repository import CheckInRepository
from services import range_fetcher
from app.exceptions import InvalidRangeError, StorageError


def test_parse_date_range_bounds():
    lower, upper = range_fetcher.parse_date_range("2024-01-01", "2024-01-31")

    assert lower == utc(2024, 1, 1, 0, 0, 0, 0)
    assert upper == utc(2024, 1, 31, 23, 59, 59, 999000)
    assert lower.utcoffset() == timedelta(0)


def test_single_day_range():
    lower, upper = range_fetcher.parse_date_range("2024-02-29", "2024-02-29")

    assert upper - lower == timedelta(hours=23, minutes=59, seconds=59, milliseconds=999)


@pytest.mark.parametrize(
    "from_date, to_date",
    [
        (None, "2024-01-01"),
        ("2024-01-01", None),
        ("", "2024-01-01"),
        ("2024/01/01", "2024-01-02"),
        ("2024-1-1", "2024-01-02"),
        ("01-01-2024", "2024-01-02"),
        ("2024-01-01", "tomorrow"),
        ("2024-02-30", "2024-03-01"),
        ("2024-13-01", "2024-12-31"),
        ("٢٠٢٤-٠١-٠١", "2024-01-02"),
    ],
)
def test_invalid_dates_are_rejected(from_date, to_date):
    with pytest.raises(InvalidRangeError) as exc_info:
        range_fetcher.parse_date_range(from_date, to_date)

    assert exc_info.value.http_status == 400


def test_missing_date_message():
    with pytest.raises(InvalidRangeError, match="Missing from or to date"):
        range_fetcher.fetch_range(CheckInRepository(FakeCollection()), "2024-01-01", None)


def test_fetch_range_includes_both_bounds():
    at_lower = make_record("A", time="12:00 am", timestamp=utc(2024, 1, 1))
    at_upper = make_record("B", time="11:59 pm", timestamp=utc(2024, 1, 2, 23, 59, 59, 999000))
    before = make_record("C", time="11:59 pm", timestamp=utc(2023, 12, 31, 23, 59, 59, 999000))
    after = make_record("C", time="12:00 am", timestamp=utc(2024, 1, 3))
    collection = FakeCollection(
        [make_document(r, str(i)) for i, r in enumerate([before, at_lower, at_upper, after])]
    )

    records = range_fetcher.fetch_range(CheckInRepository(collection), "2024-01-01", "2024-01-02")

    assert [r.identifier_id for r in records] == ["A", "B"]
    assert collection.queries == [
        {"date": {"$gte": utc(2024, 1, 1), "$lte": utc(2024, 1, 2, 23, 59, 59, 999000)}}
    ]


def test_reversed_range_matches_nothing():
    record = make_record("A", "2024-01-05")
    collection = FakeCollection([make_document(record)])

    assert range_fetcher.fetch_range(CheckInRepository(collection), "2024-01-10", "2024-01-01") == []


def test_ensure_ordered():
    range_fetcher.ensure_ordered("2024-01-01", "2024-01-01")
    range_fetcher.ensure_ordered("2024-01-01", "2024-01-02")

    with pytest.raises(InvalidRangeError, match="must not be after"):
        range_fetcher.ensure_ordered("2024-01-02", "2024-01-01")


def test_storage_failure_is_surfaced():
    collection = FakeCollection(fail=True)

    with pytest.raises(StorageError):
        range_fetcher.fetch_range(CheckInRepository(collection), "2024-01-01", "2024-01-02")

    # no retry
    assert len(collection.queries) == 1
