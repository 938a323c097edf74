"""
Tests for the context-aware log formatter.
"""

from __future__ import annotations

import logging

from app.main import ContextFormatter, configure_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "Invoice recorded", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_context():
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")

    line = formatter.format(_record(invoice_number="INV-001", status=200, unrelated="x", reason=""))

    assert line == "INFO:app.test:Invoice recorded | invoice_number=INV-001 status=200"


def test_formatter_without_context_is_plain():
    assert ContextFormatter("%(message)s").format(_record()) == "Invoice recorded"


def test_configure_logging_installs_single_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        configure_logging("debug")
        handler = configure_logging("warning")

        assert root.handlers == [handler]
        assert isinstance(handler.formatter, ContextFormatter)
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
