"""
FastAPI Application
==================
Main entry point for the Notion → Discord relay.

Run with:
    uvicorn notion_relay.web_api.main:app --reload
"""
import logging

import jsonschema
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notion_relay import __version__
from notion_relay.errors import ConfigurationError, DiscordDeliveryError
from notion_relay.web_api.config import settings
from notion_relay.web_api.routers import health, webhook

logger = logging.getLogger(__name__)

# Create application
app = FastAPI(
    title="Notion Relay",
    description="Forward Notion database webhooks to Discord channels",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)


# Error payloads
@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(DiscordDeliveryError)
async def delivery_error_handler(request: Request, exc: DiscordDeliveryError):
    return JSONResponse(status_code=502, content={"error": str(exc)})


@app.exception_handler(jsonschema.ValidationError)
async def message_contract_error_handler(request: Request, exc: jsonschema.ValidationError):
    logger.error("Assembled message violates the Discord contract: %s", exc.message)
    return JSONResponse(
        status_code=500,
        content={"error": f"Assembled message is invalid: {exc.message}"},
    )


@app.get("/")
async def root():
    """Root endpoint - service info"""
    return {
        "message": "ok",
        "name": "Notion Relay",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# Include routers; the webhook's catch-all path goes last
app.include_router(health.router, tags=["Health"])
app.include_router(webhook.router, tags=["Webhook"])


# For running directly: python -m notion_relay.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
