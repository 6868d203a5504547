"""
Webhook Schemas
===============
Request model for the Notion automation webhook.

Property values are kept as raw dicts: the formatter owns their
interpretation, including variants this schema has never heard of.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any


class NotionPage(BaseModel):
    """The page object Notion sends under ``data``"""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(default=None, description="Page id")
    url: Optional[str] = Field(default=None, description="Canonical page URL")
    properties: Dict[str, Dict[str, Any]] = Field(
        ..., description="Property name to typed property value, in display order"
    )


class NotionWebhook(BaseModel):
    """Body of a Notion 'Send webhook' automation"""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "data": {
                    "url": "https://www.notion.so/Task-1a2b3c",
                    "properties": {
                        "Name": {
                            "type": "title",
                            "title": [
                                {
                                    "type": "text",
                                    "text": {"content": "Ship it", "link": None},
                                    "plain_text": "Ship it",
                                }
                            ],
                        },
                        "Done": {"type": "checkbox", "checkbox": True},
                    },
                }
            }
        },
    )

    data: NotionPage


class ErrorResponse(BaseModel):
    """JSON error payload for non-2xx responses"""

    error: str = Field(..., description="Human-readable error message")
