"""
Pydantic Schemas
===============
Request and response models for the API.
"""
from .webhook import ErrorResponse, NotionPage, NotionWebhook

__all__ = ["ErrorResponse", "NotionPage", "NotionWebhook"]
