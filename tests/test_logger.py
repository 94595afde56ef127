"""Tests for the logging helpers."""

from __future__ import annotations

import logging

from pulse_stats.logger import StatsFormatter, log_request_summary, setup_logging
from pulse_stats.models import StatisticsRecord


def test_summary_all_fields_is_info(caplog):
    record = StatisticsRecord(
        range_label="September 17, 2026 - October 17, 2026",
        **{name: 1 for name in StatisticsRecord.model_fields if name != "range_label"},
    )
    logger = logging.getLogger("pulse_stats.api")
    with caplog.at_level(logging.INFO, logger="pulse_stats.api"):
        log_request_summary(record, logger, duration_ms=42.0, output_format="html")

    assert caplog.records[-1].levelno == logging.INFO
    assert "Served html with 10/10 fields in 42ms" in caplog.text


def test_summary_missing_fields_is_warning(caplog):
    record = StatisticsRecord(total_starcount=19000)
    logger = logging.getLogger("pulse_stats.api")
    with caplog.at_level(logging.INFO, logger="pulse_stats.api"):
        log_request_summary(record, logger)

    assert caplog.records[-1].levelno == logging.WARNING
    assert "1/10 fields" in caplog.text
    assert "total_issues" in caplog.text
    assert "missing: range_label" in caplog.text


def test_formatter_plain_output():
    formatter = StatsFormatter(use_colors=False)
    record = logging.LogRecord(
        "pulse_stats.extraction", logging.ERROR, __file__, 1, "no digits", None, None
    )
    line = formatter.format(record)
    assert "ERROR" in line
    assert "parse" in line
    assert line.endswith("| no digits")


def test_setup_logging_quietens_httpx(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging(level="debug", log_file=str(tmp_path / "pulse.log"))
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
