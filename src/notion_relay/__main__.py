"""CLI entry-point for notion_relay.

Usage:
    python -m notion_relay format <webhook.json> [--layout LAYOUT] [--title T] [--json]
    python -m notion_relay validate <webhook.json> [--schema NAME]
    python -m notion_relay send <webhook.json> --channel ID [--layout LAYOUT] [--title T]
    python -m notion_relay serve [--host H] [--port P] [--reload]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import jsonschema

from notion_relay import __version__
from notion_relay.contracts.load import MESSAGE_SCHEMA, WEBHOOK_SCHEMA, validate_file, validate_instance
from notion_relay.errors import NotionRelayError
from notion_relay.message import build_message, format_record_text
from notion_relay.model import MessageLayout
from notion_relay.model.record import Record
from notion_relay.utils.exit_codes import ExitCode
from notion_relay.utils.json_norm import stable_json_dump
from notion_relay.utils.logging import setup_logging

logger = logging.getLogger("notion_relay")

_LAYOUTS = [layout.value for layout in MessageLayout]


def _add_message_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--layout",
        choices=_LAYOUTS,
        default=None,
        help="Message layout (default: MESSAGE_LAYOUT setting).",
    )
    p.add_argument(
        "--title",
        default=None,
        help="Title line, used verbatim.",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="notion-relay",
        description="Forward Notion database webhooks to Discord channels.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log at DEBUG level.",
    )
    sub = p.add_subparsers(dest="command")

    # ── format subcommand ───────────────────────────────────────────
    fmt_p = sub.add_parser(
        "format",
        help="Render a webhook body (or page, or properties map) offline.",
    )
    fmt_p.add_argument("input", type=Path, help="Path to the JSON file.")
    _add_message_args(fmt_p)
    fmt_p.add_argument(
        "--json",
        dest="json_out",
        action="store_true",
        default=False,
        help="Print the Discord message payload instead of the text block.",
    )

    # ── validate subcommand ─────────────────────────────────────────
    val_p = sub.add_parser(
        "validate",
        help="Validate a JSON file against a bundled schema.",
    )
    val_p.add_argument("instance", type=Path, help="Path to the JSON file to validate.")
    val_p.add_argument(
        "--schema",
        dest="schema_name",
        default=WEBHOOK_SCHEMA,
        help=f"Schema filename (default: {WEBHOOK_SCHEMA}).",
    )

    # ── send subcommand ─────────────────────────────────────────────
    send_p = sub.add_parser(
        "send",
        help="Format a webhook body and post it to a Discord channel.",
    )
    send_p.add_argument("input", type=Path, help="Path to the JSON file.")
    send_p.add_argument("--channel", required=True, help="Discord channel id.")
    _add_message_args(send_p)

    # ── serve subcommand ────────────────────────────────────────────
    serve_p = sub.add_parser("serve", help="Run the webhook server.")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)
    serve_p.add_argument("--reload", action="store_true", default=False)

    return p


def _load_record(path: Path) -> Record:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return Record.from_webhook(data)


def _handle_format(args: argparse.Namespace) -> int:
    """Dispatch ``notion-relay format <file>``."""
    from notion_relay.web_api.config import settings

    try:
        record = _load_record(args.input)
    except (OSError, ValueError, TypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    max_dump = settings.MAX_DIAGNOSTIC_LENGTH or None
    if args.json_out:
        message = build_message(
            record,
            title=args.title,
            layout=args.layout or settings.MESSAGE_LAYOUT,
            max_dump_length=max_dump,
        )
        stable_json_dump(message, sys.stdout)
        return ExitCode.SUCCESS

    if args.title:
        print(args.title)
    print(format_record_text(record.properties, max_dump_length=max_dump))
    if record.url:
        print(record.url)
    return ExitCode.SUCCESS


def _handle_validate(args: argparse.Namespace) -> int:
    """Dispatch ``notion-relay validate <file>``.

    Exit code contract:
      1 = schema violation
      2 = unreadable file / unknown schema
    """
    try:
        validate_file(args.instance, args.schema_name)
    except jsonschema.ValidationError as e:
        print(f"FAIL: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _handle_send(args: argparse.Namespace) -> int:
    """Dispatch ``notion-relay send <file> --channel ID``."""
    from notion_relay.discord import DiscordClient
    from notion_relay.web_api.config import settings

    if not settings.DISCORD_BOT_TOKEN:
        print("error: DISCORD_BOT_TOKEN is not set", file=sys.stderr)
        return ExitCode.ERROR
    try:
        record = _load_record(args.input)
    except (OSError, ValueError, TypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR

    message = build_message(
        record,
        title=args.title,
        layout=args.layout or settings.MESSAGE_LAYOUT,
        max_dump_length=settings.MAX_DIAGNOSTIC_LENGTH or None,
    )
    try:
        validate_instance(message, MESSAGE_SCHEMA)
    except jsonschema.ValidationError as e:
        print(f"FAIL: assembled message is invalid: {e.message}", file=sys.stderr)
        return ExitCode.VIOLATION

    try:
        with DiscordClient(
            settings.DISCORD_BOT_TOKEN,
            base_url=settings.DISCORD_API_BASE,
            timeout=settings.DISCORD_TIMEOUT,
        ) as client:
            client.send_message(args.channel, message)
    except NotionRelayError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.ERROR
    print("OK")
    return ExitCode.SUCCESS


def _handle_serve(args: argparse.Namespace) -> int:
    """Dispatch ``notion-relay serve``."""
    import uvicorn

    from notion_relay.web_api.config import settings

    host = args.host or settings.HOST
    port = args.port or settings.PORT
    logger.info("Starting Notion Relay %s on %s:%d", __version__, host, port)
    uvicorn.run(
        "notion_relay.web_api.main:app",
        host=host,
        port=port,
        reload=args.reload,
        log_config=None,
    )
    return ExitCode.SUCCESS


_HANDLERS = {
    "format": _handle_format,
    "validate": _handle_validate,
    "send": _handle_send,
    "serve": _handle_serve,
}


def main(argv: list[str] | None = None) -> int:
    """Entry-point; returns an exit code (see ``utils.exit_codes``)."""
    from notion_relay.web_api.config import settings

    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else settings.LOG_LEVEL, settings.LOG_FILE)

    handler = _HANDLERS.get(args.command)
    if handler is None:
        parser.print_help(sys.stderr)
        return ExitCode.ERROR
    return int(handler(args))


if __name__ == "__main__":
    raise SystemExit(main())
