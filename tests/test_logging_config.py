"""
Tests for logging setup.
"""

import json
import logging

import pytest

from app.core.logging_config import CustomJsonFormatter, get_logger, setup_logging


@pytest.fixture
def restore_logging():
    """
    Undo setup_logging after the test.

    pytest attaches and detaches its own capture handlers per test phase,
    so only handlers that don't belong to pytest are put back.
    """
    root = logging.getLogger()
    handlers = [h for h in root.handlers if type(h).__module__ != "_pytest.logging"]
    level = root.level
    sqlalchemy_level = logging.getLogger("sqlalchemy.engine").level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_level)


class TestSetupLogging:
    """Tests for setup_logging"""

    def test_json_logs(self, capsys, restore_logging):
        setup_logging("INFO", json_logs=True)

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)

        get_logger("jobly.test").info("Created company c1")
        record = json.loads(capsys.readouterr().out.strip())

        assert record["message"] == "Created company c1"
        assert record["level"] == "INFO"
        assert record["logger"] == "jobly.test"
        assert record["service"] == "Jobly"
        assert "line" not in record

    def test_warnings_carry_location(self, capsys, restore_logging):
        setup_logging("INFO", json_logs=True)

        get_logger("jobly.test").warning("Rejected duplicate company: c1")
        record = json.loads(capsys.readouterr().out.strip())

        assert record["level"] == "WARNING"
        assert isinstance(record["line"], int)
        assert record["pathname"].endswith("test_logging_config.py")

    def test_plain_logs(self, capsys, restore_logging):
        setup_logging("debug", json_logs=False)

        assert logging.getLogger().level == logging.DEBUG
        get_logger("jobly.test").debug("hello")

        assert " - jobly.test - DEBUG - hello" in capsys.readouterr().out

    def test_sql_echo(self, restore_logging):
        setup_logging("INFO", json_logs=False)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

        setup_logging("INFO", json_logs=False, sql_echo=True)
        assert logging.getLogger("sqlalchemy.engine").level == logging.INFO
