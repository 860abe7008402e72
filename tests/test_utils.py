"""Unit tests for timezone and logging utilities."""

import logging
from datetime import datetime
from pathlib import Path

import pytest
import pytz

from carb_ledger.utils.logging_config import setup_logging
from carb_ledger.utils.parameters import LoggingConfig
from carb_ledger.utils.timezone_utils import make_timezone_aware, parse_datetime


def test_parse_naive_datetime_uses_timezone() -> None:
    """Test that strings without an offset are localized."""
    parsed = parse_datetime("2024-01-15 08:00", "America/Santiago")

    expected = pytz.timezone("America/Santiago").localize(datetime(2024, 1, 15, 8, 0))
    if parsed != expected:
        raise AssertionError(f"Expected {expected}, got {parsed}")


def test_parse_aware_datetime_keeps_instant() -> None:
    """Test that strings with an offset keep their instant."""
    parsed = parse_datetime("2024-01-15T08:00:00+00:00", "America/Santiago")

    if parsed != datetime(2024, 1, 15, 8, 0, tzinfo=pytz.UTC):
        raise AssertionError(f"Unexpected instant: {parsed}")

    if parsed.tzinfo is None:
        raise AssertionError("Expected aware datetime")


def test_parse_invalid_datetime_raises() -> None:
    """Test that garbage input is rejected."""
    with pytest.raises(ValueError):
        parse_datetime("not a date")


def test_make_timezone_aware_naive() -> None:
    """Test localizing a naive datetime."""
    aware = make_timezone_aware(datetime(2024, 6, 1, 12, 0), "UTC")

    if aware.tzinfo is None or aware.hour != 12:
        raise AssertionError(f"Unexpected result: {aware}")


def test_setup_logging_with_file(tmp_path: Path) -> None:
    """Test that a file handler is attached when configured."""
    log_file = tmp_path / "logs" / "carb_ledger.log"
    config = LoggingConfig(level="DEBUG", file=str(log_file), console=False)

    logger = setup_logging(config, "carb_ledger.test")
    logger.debug("hello")
    for handler in logger.handlers:
        handler.flush()

    if logger.level != logging.DEBUG:
        raise AssertionError(f"Expected DEBUG level, got {logger.level}")

    if len(logger.handlers) != 1:
        raise AssertionError(f"Expected one handler, got {logger.handlers}")

    if "hello" not in log_file.read_text(encoding="utf-8"):
        raise AssertionError("Expected message in log file")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
