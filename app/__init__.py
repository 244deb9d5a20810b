"""
App package - Application configuration and core utilities.
Contains settings and the exception taxonomy shared by every layer.
"""

from app.config import settings
from app.exceptions import (
    AttendanceError,
    InvalidRangeError,
    StorageError,
    MalformedRecordError,
)

__all__ = [
    "settings",
    "AttendanceError",
    "InvalidRangeError",
    "StorageError",
    "MalformedRecordError",
]
