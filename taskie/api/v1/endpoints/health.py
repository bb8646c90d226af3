from __future__ import annotations

from fastapi import APIRouter

from taskie.core.config import get_settings

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": get_settings().app_env}
