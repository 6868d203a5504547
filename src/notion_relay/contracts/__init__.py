"""Bundled JSON schemas for the webhook body and the outgoing message."""

from notion_relay.contracts.load import load_schema, validate_file, validate_instance

__all__ = ["load_schema", "validate_file", "validate_instance"]
