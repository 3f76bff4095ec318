# parking_manager/routers/health.py
"""
System health check endpoint.
Returns status of backend + database + the record counts held in memory.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from parking_manager.config import settings
from parking_manager.services.parking_manager import ParkingManager
from parking_manager.utils.dependencies import get_manager
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(manager: ParkingManager = Depends(get_manager)):
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "version": settings.APP_VERSION,
        "database": "unknown",
        "records": {
            "employees": len(manager.employees),
            "parking_spaces": len(manager.spaces),
            "assignments": len(manager.assignments),
        },
        "last_updated": manager.last_updated.isoformat() if manager.last_updated else None,
    }

    db = manager.storage.session_factory()
    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
    except SQLAlchemyError as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"
    finally:
        db.close()

    return result
