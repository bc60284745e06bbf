# citygrid/routers/health.py
"""
System health check endpoint.
Returns status of backend + store + ledger height.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from citygrid.routers.deps import get_runtime
from citygrid.services.runtime import Runtime
from citygrid.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/health", summary="System health check")
def health_check(runtime: Runtime = Depends(get_runtime)):
    result = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": "ok",
        "store": "unknown",
        "height": runtime.ledger.current_height(),
    }

    try:
        runtime.store.ping()
        result["store"] = "ok"
    except Exception as e:
        logger.error(f"Store health check failed: {e}")
        result["store"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
