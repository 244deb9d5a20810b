from typing import List, Optional, Tuple
from datetime import date, datetime, timezone
import re
import logging

from domain.schemas.attendance_schemas import CheckInRecord
from repositories.checkin_repository import CheckInRepository
from app.exceptions import InvalidRangeError

logger = logging.getLogger("mealtrack.range")

DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


def parse_date(value: Optional[str], name: str) -> date:
    """Parse a YYYY-MM-DD query value.

    Raises:
        InvalidRangeError: If the value is missing or not a real calendar date
    """
    if not value:
        raise InvalidRangeError("Missing from or to date", details={"missing": name})

    match = DATE_RE.match(value.strip())
    if match is None:
        raise InvalidRangeError(
            f"'{name}' must be formatted as YYYY-MM-DD",
            details={name: value},
        )

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidRangeError(
            f"'{name}' is not a valid calendar date", details={name: value}
        ) from exc


def parse_date_range(
    from_date: Optional[str], to_date: Optional[str]
) -> Tuple[datetime, datetime]:
    """
    Build the inclusive UTC interval covering two calendar dates.

    The lower bound is 00:00:00.000 of ``from_date`` and the upper bound is
    23:59:59.999 of ``to_date``. A reversed window is not rejected here; it
    simply matches nothing.

    Raises:
        InvalidRangeError: If either date is missing or unparseable
    """
    start = parse_date(from_date, "from")
    end = parse_date(to_date, "to")

    lower = datetime(start.year, start.month, start.day, 0, 0, 0, 0, tzinfo=timezone.utc)
    upper = datetime(end.year, end.month, end.day, 23, 59, 59, 999000, tzinfo=timezone.utc)
    return lower, upper


def ensure_ordered(from_date: Optional[str], to_date: Optional[str]) -> None:
    """Reject a window whose start falls after its end."""
    start = parse_date(from_date, "from")
    end = parse_date(to_date, "to")
    if start > end:
        raise InvalidRangeError(
            "'from' date must not be after 'to' date",
            details={"from": from_date, "to": to_date},
        )


def fetch_range(
    repository: CheckInRepository, from_date: Optional[str], to_date: Optional[str]
) -> List[CheckInRecord]:
    """
    Fetch every check-in recorded between two calendar dates, both inclusive.

    Raises:
        InvalidRangeError: If either date is missing or unparseable
        StorageError: If the repository read fails (not retried)
    """
    lower, upper = parse_date_range(from_date, to_date)
    logger.debug("Fetching check-ins in [%s, %s]", lower.isoformat(), upper.isoformat())
    return repository.find_between(lower, upper)
