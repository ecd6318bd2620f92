"""
cep_weather.api.routers.health

Liveness endpoint shared by both services.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


# --- Module Notes -----------------------------------------------------------
# Liveness only: both services are stateless and have no dependency worth gating on.
