"""
Liveness and readiness probes for the hosting platform.
"""
from fastapi import APIRouter, Request

from webinar.database.connections import check_registration_store

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", summary="Liveness probe")
async def liveness():
    """The process is up and serving requests."""
    return {"status": "healthy"}


@router.get("/ready", summary="Readiness probe")
async def readiness(request: Request):
    """
    Report whether registrations can be stored.

    Always 200: a missing store leaves the site usable, so the body says
    "degraded" rather than failing the probe.
    """
    state = request.app.state
    checks = {
        "api": "healthy",
        "mongodb": await check_registration_store(state.mongo_client, state.registrations),
    }
    degraded = any(result != "healthy" for result in checks.values())
    return {"status": "degraded" if degraded else "healthy", "checks": checks}
