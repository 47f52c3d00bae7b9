from __future__ import annotations

import io
import json
import logging

from promptbot.logging_setup import build_handler, get_logger


def _emit(json_logs: bool, **extra) -> str:
    stream = io.StringIO()
    handler = build_handler(json_logs, stream=stream)
    logger = logging.getLogger("promptbot.Test")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    try:
        logger.info("Counter reset from %d", 4, extra=extra or None)
    finally:
        logger.removeHandler(handler)
    return stream.getvalue().strip()


def test_json_output_includes_conversation_id():
    payload = json.loads(_emit(True, conversation_id="c1"))
    assert payload == {
        "level": "INFO",
        "name": "promptbot.Test",
        "message": "Counter reset from 4",
        "conversation_id": "c1",
    }


def test_json_output_omits_missing_conversation():
    payload = json.loads(_emit(True))
    assert "conversation_id" not in payload


def test_plain_output_marks_records_outside_a_conversation():
    assert _emit(False) == "INFO | promptbot.Test | - | Counter reset from 4"
    assert _emit(False, conversation_id="c9") == "INFO | promptbot.Test | c9 | Counter reset from 4"


def test_get_logger_namespaces_under_package():
    assert get_logger("DialogRuntime").name == "promptbot.DialogRuntime"
