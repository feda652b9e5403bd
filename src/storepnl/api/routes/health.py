"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request) -> dict[str, str]:
    cache = getattr(request.app.state, "cache", None)
    if cache is not None and hasattr(cache, "ping") and not cache.ping():
        return {"status": "degraded", "cache": "unreachable"}
    return {"status": "ready"}
