"""Health check and utility routes"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, get_settings
from app.config import Settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("menuplanner.api.health")


@router.get("/health-check")
def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name, "version": settings.app_version}


@router.get("/health-check/database")
def database_health(db: Session = Depends(get_db)):
    """Check that the database answers a trivial query"""
    try:
        db.execute(text("SELECT 1"))
        return {"database": "ok"}
    except Exception as e:
        logger.exception("Database health check failed")
        return {"database": "unavailable", "error": str(e)}
