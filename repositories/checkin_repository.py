"""
Check-in Repository - Data access layer for check-in documents (MongoDB integration)
"""

from typing import Iterable, List
from datetime import datetime
import logging

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from domain.mappers.checkin_mapper import CheckInMapper
from domain.schemas.attendance_schemas import CheckInRecord
from app.exceptions import StorageError

logger = logging.getLogger("mealtrack.repositories.checkin")

# Stored name of CheckInRecord.timestamp
TIMESTAMP_FIELD = "date"


class CheckInRepository:
    """
    Repository for check-in records stored in a MongoDB collection.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def find_between(self, lower: datetime, upper: datetime) -> List[CheckInRecord]:
        """Get every check-in whose timestamp lies in [lower, upper].

        Args:
            lower: Inclusive lower bound
            upper: Inclusive upper bound

        Returns:
            Check-in records in storage order

        Raises:
            StorageError: If the read fails
            MalformedRecordError: If a stored document cannot be mapped
        """
        query = {TIMESTAMP_FIELD: {"$gte": lower, "$lte": upper}}
        try:
            documents = list(self.collection.find(query))
        except PyMongoError as exc:
            logger.error("Check-in query failed for %s..%s: %s", lower, upper, exc)
            raise StorageError(
                "Failed to fetch attendance",
                details={"from": lower.isoformat(), "to": upper.isoformat()},
            ) from exc

        logger.info("Fetched %d check-ins between %s and %s", len(documents), lower, upper)
        return [CheckInMapper.from_document(doc) for doc in documents]

    def insert_many(self, records: Iterable[CheckInRecord]) -> int:
        """Store check-in records, returning how many were written."""
        documents = [CheckInMapper.to_document(record) for record in records]
        if not documents:
            return 0
        try:
            result = self.collection.insert_many(documents, ordered=False)
        except PyMongoError as exc:
            raise StorageError("Failed to store check-ins") from exc
        return len(result.inserted_ids)

    def ensure_indexes(self) -> None:
        """Index the timestamp field used by range queries."""
        try:
            self.collection.create_index([(TIMESTAMP_FIELD, ASCENDING)])
        except PyMongoError as exc:
            raise StorageError("Failed to create check-in indexes") from exc
