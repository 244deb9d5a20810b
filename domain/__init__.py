"""
Domain layer - Business entities, schemas, mappers and enums.
"""

from domain import enums, models, schemas

__all__ = ["enums", "models", "schemas"]
