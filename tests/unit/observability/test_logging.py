"""Tests for logging setup."""

import json
import logging

from cascada.observability.logging import ContextLogger, setup_logging


def test_setup_logging_sets_package_level():
    setup_logging("debug")

    assert logging.getLogger("cascada").level == logging.DEBUG


def test_log_file_receives_json_records(tmp_path):
    """
    GIVEN logging configured with a log file
    WHEN a cascada logger emits a record with extras
    THEN the file holds one JSON object per record including the extras
    """
    # Arrange
    log_file = tmp_path / "cascada.log"
    setup_logging("INFO", str(log_file))

    # Act
    logging.getLogger("cascada.test").info("turn done", extra={"session_id": "u1"})
    for handler in logging.getLogger("cascada").handlers:
        handler.flush()

    # Assert
    record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
    assert record["message"] == "turn done"
    assert record["session_id"] == "u1"


def test_context_logger_adds_context(caplog):
    adapter = ContextLogger("cascada.test").with_context(session_id="u7")

    with caplog.at_level(logging.INFO, logger="cascada.test"):
        adapter.info("hello")

    assert caplog.records[-1].session_id == "u7"
