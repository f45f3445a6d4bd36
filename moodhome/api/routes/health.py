'''
Liveness and database connectivity checks.
'''
import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from moodhome.api.deps import get_database
from moodhome.db.session import Database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

SERVICE = "moodhome-api"

@router.get("/health")
async def health():
    """
    Simple health check. Does not require database connectivity.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "API is running",
        "service": SERVICE,
    }

@router.get("/health/full")
def health_full(database: Database = Depends(get_database)):
    """
    Verifies both API and database connectivity.
    """
    ok = database.ping()
    if ok:
        logger.info("Database health check successful")
    return {
        "status": "healthy" if ok else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if ok else "disconnected",
        "service": SERVICE,
    }
