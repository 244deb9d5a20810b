"""API routes package"""

from . import attendances, health

__all__ = ["attendances", "health"]
