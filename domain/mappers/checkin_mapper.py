"""
Check-in domain mappers.
Handles transformation between raw MongoDB documents and CheckInRecord DTOs.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from domain.schemas.attendance_schemas import CheckInRecord
from app.exceptions import MalformedRecordError


class CheckInMapper:
    """Mapper for check-in document transformations."""

    @staticmethod
    def from_document(document: Mapping[str, Any]) -> CheckInRecord:
        """
        Convert a stored check-in document to a CheckInRecord.

        Args:
            document: Raw document as returned by pymongo

        Returns:
            CheckInRecord built from the stored field names

        Raises:
            MalformedRecordError: If required fields are missing or mistyped
        """
        try:
            return CheckInRecord.model_validate(document)
        except ValidationError as exc:
            raise MalformedRecordError(
                "Check-in document could not be read",
                details={
                    "document_id": str(document.get("_id")),
                    "errors": [
                        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                        for err in exc.errors()
                    ],
                },
            ) from exc

    @staticmethod
    def to_document(record: CheckInRecord) -> dict:
        """Convert a CheckInRecord back to the stored document layout."""
        return record.model_dump(by_alias=True)
