"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """
    Liveness probe.

    Does not touch the database, so it stays up while the store is down.
    """
    return {"status": "ok"}
