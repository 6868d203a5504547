"""
Health Check Router
==================
Endpoints for health checks and readiness probes.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notion_relay import __version__
from notion_relay.web_api.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns OK if the service is running.
    """
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    """
    Readiness check endpoint.
    Not ready until a Discord bot token is configured.
    """
    if not settings.DISCORD_BOT_TOKEN:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": "DISCORD_BOT_TOKEN is not set"},
        )
    return {"status": "ready"}
