"""
Notion Relay Web API
====================
FastAPI application receiving Notion webhooks and posting to Discord.

Quick Start:
    uvicorn notion_relay.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
