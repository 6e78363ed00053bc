"""Tests for logging configuration utilities."""

from io import StringIO
import json
import logging
from pathlib import Path

import pytest

from hubfirmware.core.archive import ZipArchiveReader
from hubfirmware.core.firmware import FirmwareReaderError, FirmwareReaderErrorCode
from hubfirmware.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
)


def _record(msg: str = "message", level: int = logging.INFO, exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="hubfirmware.test",
        level=level,
        pathname="/path/to/reader.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.funcName = "load"
    record.module = "reader"
    return record


class TestStructuredJSONFormatter:
    """Test suite for StructuredJSONFormatter."""

    def test_basic_log_format(self):
        """Test basic log record formatting to JSON."""
        data = json.loads(StructuredJSONFormatter().format(_record("Opened package")))

        assert data["level"] == "INFO"
        assert data["message"] == "Opened package"
        assert "timestamp" in data
        assert data["context"]["logger_name"] == "hubfirmware.test"
        assert data["context"]["module"] == "reader"
        assert data["context"]["function"] == "load"
        assert data["context"]["line"] == 42

    def test_extra_fields_in_context(self):
        """Test that extra fields are included in context."""
        record = _record()
        record.package = "cityhub.zip"
        record.entries = ["main.py"]

        data = json.loads(StructuredJSONFormatter().format(record))

        assert data["context"]["package"] == "cityhub.zip"
        assert data["context"]["entries"] == ["main.py"]

    def test_reader_error_with_cause(self):
        """Test a chained FirmwareReaderError records its cause."""
        try:
            try:
                raise OSError("truncated")
            except OSError as e:
                raise FirmwareReaderError(FirmwareReaderErrorCode.MALFORMED_ARCHIVE, e) from e
        except FirmwareReaderError:
            import sys

            exc_info = sys.exc_info()

        data = json.loads(
            StructuredJSONFormatter().format(_record("load failed", logging.ERROR, exc_info))
        )

        assert data["level"] == "ERROR"
        assert data["context"]["error_type"] == "FirmwareReaderError"
        assert data["context"]["error_message"] == "bad zip data"
        assert "truncated" in data["context"]["error_cause"]
        assert "FirmwareReaderError" in data["context"]["stack_trace"]


class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_standard_logging(self, capsys):
        """Test standard text logging configuration."""
        configure_logging(level="INFO")

        logging.getLogger("test.standard").info("Test message")

        captured = capsys.readouterr()
        assert "Test message" in captured.out
        assert "test.standard" in captured.out
        assert "INFO" in captured.out

    def test_configure_structured_logging_to_file(self, tmp_path: Path):
        """Test structured JSON logging to file."""
        log_file = tmp_path / "hubfirmware.jsonl"
        configure_logging(level="debug", structured=True, filename=str(log_file))

        logger = logging.getLogger("test.file")
        logger.debug("Debug message")
        logger.warning("Warning message")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        assert [line["level"] for line in lines[-2:]] == ["DEBUG", "WARNING"]
        assert all("logger_name" in line["context"] for line in lines)

    def test_custom_format_string(self, capsys):
        """Test custom format string for standard logging."""
        configure_logging(level="INFO", format_string="%(levelname)s | %(message)s")

        logging.getLogger("test.custom").info("Custom format test")

        assert "INFO | Custom format test" in capsys.readouterr().out

    def test_unknown_level(self):
        """Test unknown level names are rejected."""
        with pytest.raises(ValueError):
            configure_logging(level="LOUD")


class TestGetLogger:
    """Test suite for get_logger function."""

    def test_get_logger_without_context(self):
        """Test getting a plain logger without context."""
        logger = get_logger("test.plain")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.plain"

    def test_get_logger_with_context(self):
        """Test context kwargs reach structured output."""
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredJSONFormatter())

        logger = get_logger("test.adapter", package="technichub.zip")
        assert isinstance(logger, logging.LoggerAdapter)
        logger.logger.addHandler(handler)
        logger.logger.setLevel(logging.INFO)

        logger.info("Message with context")

        data = json.loads(stream.getvalue().strip())
        assert data["context"]["package"] == "technichub.zip"
        logger.logger.removeHandler(handler)


async def test_zip_adapter_logs_entries_at_debug(caplog, zip_factory):
    """Test opening an archive emits a debug trace with the entry names."""
    with caplog.at_level(logging.DEBUG, logger="hubfirmware.core.archive.impl_zip"):
        await ZipArchiveReader().open(zip_factory({"main.py": b""}))

    assert "main.py" in caplog.text
