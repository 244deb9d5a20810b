from typing import Any, Mapping, Optional


class AttendanceError(Exception):
    """Base class for errors surfaced by the attendance pipeline.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (offending values, ids)
        code: machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_code = "ATTENDANCE_ERROR"

    def __init__(self, message: str = "Attendance error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class InvalidRangeError(AttendanceError):
    """Raised when the requested date window is missing, unparseable or reversed.

    http_status is 400.
    """

    http_status = 400
    default_code = "INVALID_RANGE"

    def __init__(self, message: str = "Invalid date range", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class StorageError(AttendanceError):
    """Raised when the check-in store cannot be read. Never retried.

    http_status is 503.
    """

    http_status = 503
    default_code = "STORAGE_ERROR"

    def __init__(self, message: str = "Failed to fetch attendance", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)


class MalformedRecordError(AttendanceError):
    """Raised when a check-in record cannot be interpreted.

    Aborts the whole aggregation. http_status is 422.
    """

    http_status = 422
    default_code = "MALFORMED_RECORD"

    def __init__(self, message: str = "Malformed check-in record", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message, details, code)
