"""
Tests for configuration and logging setup.
"""

import json
import logging

from bank_ledger.config import Settings, get_settings
from bank_ledger.logging_config import JsonFormatter, get_logger, setup_logging


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_default_lock_timeout_is_positive():
    assert Settings().LOCK_TIMEOUT_MS >= 0


def test_setup_logging_sets_package_level():
    setup_logging(level="DEBUG")
    try:
        assert logging.getLogger("bank_ledger").level == logging.DEBUG
        assert len(logging.getLogger("bank_ledger").handlers) == 1

        # Calling again replaces the handler instead of stacking another
        setup_logging(level="WARNING", format_type="json")
        package_logger = logging.getLogger("bank_ledger")
        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0].formatter, JsonFormatter)
    finally:
        package_logger = logging.getLogger("bank_ledger")
        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)
        package_logger.setLevel(logging.NOTSET)


def test_json_formatter_includes_context():
    record = logging.LogRecord(
        name="bank_ledger.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="deposit rejected: %s",
        args=("Account 1 is closed",),
        exc_info=None,
    )
    record.context = {"account_id": 1}

    data = json.loads(JsonFormatter().format(record))

    assert data["level"] == "WARNING"
    assert data["logger"] == "bank_ledger.test"
    assert data["message"] == "deposit rejected: Account 1 is closed"
    assert data["context"] == {"account_id": 1}


def test_get_logger_returns_named_logger():
    assert get_logger("bank_ledger.x").name == "bank_ledger.x"
