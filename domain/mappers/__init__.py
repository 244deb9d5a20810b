"""
Domain mappers package.
Handles transformation between stored documents and DTOs (Data Transfer Objects).
"""

from domain.mappers.checkin_mapper import CheckInMapper

__all__ = ["CheckInMapper"]
