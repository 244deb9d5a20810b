from typing import Dict, Iterable, List, Optional, Set, Tuple
from datetime import date, datetime, timezone
import re

from domain.enums import Meal, Presence
from domain.models.meal_window import window_for
from domain.schemas.attendance_schemas import (
    CheckInRecord,
    AttendanceRow,
    MealTotals,
    AttendanceSummary,
)
from repositories.checkin_repository import CheckInRepository
from services import range_fetcher
from app.exceptions import MalformedRecordError

# "H:MM am" / "HH:MM pm"
TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{1,2})\s+([ap]m)$", re.IGNORECASE)

RowKey = Tuple[str, date]


def parse_time(value: str) -> int:
    """Convert a 12-hour clock string to minutes since midnight.

    12 am is hour 0, 12 pm stays 12 and every other pm hour gains 12.

    Raises:
        ValueError: If the string is not of the form "H:MM am|pm"
    """
    match = TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Unrecognised clock time: {value!r}")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    modifier = match.group(3).lower()

    if modifier == "pm" and hours != 12:
        hours += 12
    elif modifier == "am" and hours == 12:
        hours = 0
    return hours * 60 + minutes


def classify_meal(minute_of_day: int) -> Optional[Meal]:
    """Return the meal served at ``minute_of_day``, or None outside every window."""
    window = window_for(minute_of_day)
    return window.meal if window is not None else None


def calendar_day(timestamp: datetime) -> date:
    """UTC calendar date of a timestamp. Naive values are taken to be UTC."""
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.date()


def filter_by_roll_number(
    records: Iterable[CheckInRecord], needle: Optional[str]
) -> List[CheckInRecord]:
    """Keep records whose roll number contains ``needle``, ignoring case."""
    if not needle:
        return list(records)
    needle = needle.lower()
    return [r for r in records if needle in r.roll_number.lower()]


class AttendanceService:
    @staticmethod
    def classify(record: CheckInRecord) -> Optional[Meal]:
        """
        Classify a check-in into a meal using its clock string.

        Raises:
            MalformedRecordError: If the clock string cannot be parsed
        """
        try:
            minute_of_day = parse_time(record.time)
        except ValueError as exc:
            raise MalformedRecordError(
                f"Check-in for {record.identifier_id} has an invalid time {record.time!r}",
                details={
                    "identifier_id": record.identifier_id,
                    "time": record.time,
                    "timestamp": record.timestamp.isoformat(),
                },
            ) from exc
        return classify_meal(minute_of_day)

    @staticmethod
    def aggregate(
        records: Iterable[CheckInRecord], filter: Optional[str] = None
    ) -> AttendanceSummary:
        """
        Build the per-person, per-day presence matrix and per-meal headcounts.

        Records are grouped by (identifier, UTC calendar day). The first record
        seen for a key supplies the name and roll number of its row. Repeated
        swipes inside one meal window mark the meal Present once and count
        once towards that meal's total. Records outside every meal window are
        ignored.

        Args:
            records: Check-ins for the window, in any order
            filter: Optional case-insensitive roll number substring

        Returns:
            AttendanceSummary with rows in first-seen order and meal totals

        Raises:
            MalformedRecordError: If any retained record has an unparseable
                time; no partial summary is produced
        """
        grouped: Dict[RowKey, dict] = {}
        present: Dict[Meal, Set[RowKey]] = {meal: set() for meal in Meal}

        for record in filter_by_roll_number(records, filter):
            meal = AttendanceService.classify(record)
            if meal is None:
                continue

            key = (record.identifier_id, calendar_day(record.timestamp))
            row = grouped.get(key)
            if row is None:
                row = {
                    "identifier_id": record.identifier_id,
                    "display_name": record.display_name,
                    "roll_number": record.roll_number,
                    "calendar_day": key[1],
                    **{m.name.lower(): Presence.ABSENT for m in Meal},
                }
                grouped[key] = row

            row[meal.name.lower()] = Presence.PRESENT
            present[meal].add(key)

        rows = [AttendanceRow(**row) for row in grouped.values()]
        totals = MealTotals(**{meal.name.lower(): len(keys) for meal, keys in present.items()})
        return AttendanceSummary(rows=rows, totals=totals)

    @staticmethod
    def summarize(
        repository: CheckInRepository,
        from_date: Optional[str],
        to_date: Optional[str],
        filter: Optional[str] = None,
    ) -> AttendanceSummary:
        """Fetch the window from storage and aggregate it."""
        records = range_fetcher.fetch_range(repository, from_date, to_date)
        return AttendanceService.aggregate(records, filter)
