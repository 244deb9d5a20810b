"""
Domain schemas package - Pydantic models for validation and serialization.
"""

from domain.schemas.attendance_schemas import (
    CheckInRecord,
    AttendanceRow,
    MealTotals,
    AttendanceSummary,
)

__all__ = [
    "CheckInRecord",
    "AttendanceRow",
    "MealTotals",
    "AttendanceSummary",
]
