"""Logging for the bot process.

Every record carries a ``conversation_id`` attribute ("-" outside a turn), so
both the plain and the JSON output can tell interleaved conversations apart.
Pass it with ``extra={"conversation_id": ...}``.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_NO_CONVERSATION = "-"
_PLAIN_FORMAT = "%(levelname)s | %(name)s | %(conversation_id)s | %(message)s"

_handler: logging.Handler | None = None


class ConversationFilter(logging.Filter):
    """Fills in ``conversation_id`` for records logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "conversation_id"):
            record.conversation_id = _NO_CONVERSATION
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        conversation_id = getattr(record, "conversation_id", _NO_CONVERSATION)
        if conversation_id != _NO_CONVERSATION:
            payload["conversation_id"] = conversation_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def build_handler(json_logs: bool = False, stream=None) -> logging.Handler:
    # stderr keeps stdout free for bot replies in the console transport
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json_logs else logging.Formatter(_PLAIN_FORMAT))
    handler.addFilter(ConversationFilter())
    return handler


def setup_logging(json_logs: bool = False, level: int | str = logging.INFO) -> None:
    """Attach the bot's handler to the root logger once; later calls only adjust the level."""
    global _handler
    root = logging.getLogger()
    root.setLevel(level)
    if _handler is not None:
        return

    _handler = build_handler(json_logs)
    root.handlers.clear()
    root.addHandler(_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"promptbot.{name}")
