"""
API dependencies for dependency injection
"""

from typing import NamedTuple, Optional

from fastapi import Query

from adapters import mongo_adapter
from app.config import settings
from app.exceptions import StorageError
from repositories.checkin_repository import CheckInRepository
from services import range_fetcher


class DateRange(NamedTuple):
    from_date: str
    to_date: str


def get_date_range(
    from_date: Optional[str] = Query(None, alias="from", description="First day, YYYY-MM-DD"),
    to_date: Optional[str] = Query(None, alias="to", description="Last day, YYYY-MM-DD"),
) -> DateRange:
    """
    Validated date window dependency.

    Declare it before the repository so a bad window is rejected without
    touching storage.

    Raises:
        InvalidRangeError: If a date is missing, malformed or 'from' is after 'to'
    """
    range_fetcher.ensure_ordered(from_date, to_date)
    return DateRange(from_date, to_date)


def get_checkin_repository() -> CheckInRepository:
    """
    Check-in repository dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(repo: CheckInRepository = Depends(get_checkin_repository)):
            # Use repo here
            pass

    Raises:
        StorageError: If MongoDB is not connected
    """
    collection = mongo_adapter.get_collection(settings.mongo_collection)
    if collection is None:
        raise StorageError("MongoDB not available")
    return CheckInRepository(collection)
