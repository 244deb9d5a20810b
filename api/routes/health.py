"""Health check and utility routes"""

from fastapi import APIRouter
import logging

from adapters import mongo_adapter
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("mealtrack.api.health")


@router.get("/")
def root():
    return {"message": "Attendance server running..."}


@router.get("/health-check")
def health_check():
    """Basic health check endpoint, including MongoDB reachability"""
    mongo_up = mongo_adapter.ping()
    if not mongo_up:
        logger.warning("Health check: MongoDB unreachable")
    return {
        "status": "ok",
        "service": settings.app_name,
        "mongo": "up" if mongo_up else "down",
    }
