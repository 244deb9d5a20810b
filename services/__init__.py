"""Services package - Business logic layer"""

from services import range_fetcher
from services.attendance_service import AttendanceService
from services.export_service import ExportService

# Note: range_fetcher contains utility functions, not a class

__all__ = [
    "range_fetcher",
    "AttendanceService",
    "ExportService",
]
