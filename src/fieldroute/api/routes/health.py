"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...services.customers import get_store

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't touch the feed."""
    return {"status": "ok"}


@router.get("/health/snapshot", status_code=status.HTTP_200_OK)
def health_snapshot() -> dict:
    """Report whether a customer snapshot has been published yet."""
    snapshot = get_store().snapshot
    if snapshot is None:
        return {"loaded": False}
    return {
        "loaded": True,
        "generated_at": snapshot.generated_at.isoformat(),
        "customers": len(snapshot.customers),
        "weekday": snapshot.weekday,
    }
