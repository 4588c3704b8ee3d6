# streambrain/services/api/routers/health.py
from __future__ import annotations
from fastapi import APIRouter
from streambrain.common.settings import get_settings
from streambrain.services.ladder.tiers_loader import get_quality_tiers

router = APIRouter()

@router.get("/healthz")
def healthz():
    s = get_settings()
    return {
        "ok": True,
        "app": s.app_name,
        "env": s.app_env,
        "tiers_version": get_quality_tiers().version,
    }
