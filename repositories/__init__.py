"""
Repositories package - Data access layer.
"""

from repositories.checkin_repository import CheckInRepository

__all__ = [
    "CheckInRepository",
]
