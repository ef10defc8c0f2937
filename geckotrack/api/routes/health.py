from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Request

from geckotrack.domain.errors import PersistenceError

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_store(request: Request) -> dict:
    """Check the entity store connection."""
    try:
        await request.app.state.store.ping()
        return {"status": "ok"}
    except PersistenceError as e:
        return {"status": "error", "message": str(e)[:100]}


@router.get("/health", summary="Service health probe")
async def health_check(request: Request) -> dict:
    """Return basic service and store status information."""
    settings = request.app.state.settings
    store_status = await check_store(request)

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": "ok" if store_status.get("status") == "ok" else "degraded",
        "timestamp": datetime.now(UTC).isoformat(),
        "datastores": {"store": store_status},
    }
    logger.info("health_probe", **payload)
    return payload
