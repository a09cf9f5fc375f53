"""Tests for the loguru configuration."""

import json

from modeldoc.core import logging as modeldoc_logging
from modeldoc.core.logging import _line_format, configure_logging, get_logger


class TestLineFormat:
    """Text formats show the diagnostic context when it is bound."""

    def test_appends_kind_and_subject(self):
        fmt = _line_format("{message}")
        line = fmt({"extra": {"kind": "MISSING_FACTORY", "subject": "demo.Lamp"}})
        assert "{extra[kind]}" in line
        assert "{extra[subject]}" in line
        assert line.endswith("\n{exception}")

    def test_plain_records_are_unchanged(self):
        fmt = _line_format("{message}")
        assert fmt({"extra": {"module": "x"}}) == "{message}\n{exception}"


class TestConfigureLogging:
    """Handler installation."""

    def test_same_arguments_are_a_noop(self):
        configure_logging(level="WARNING", format="console", force_reconfigure=True)
        handlers = list(modeldoc_logging._HANDLER_IDS)
        configure_logging(level="WARNING", format="console")
        assert modeldoc_logging._HANDLER_IDS == handlers

    def test_file_sink_keeps_diagnostic_extras(self, tmp_path):
        log_file = tmp_path / "logs" / "modeldoc.jsonl"
        configure_logging(
            level="INFO", format="console", output_file=log_file, force_reconfigure=True
        )
        get_logger("tests").bind(kind="INVALID_KEY", subject="demo.Bad").error("bad key")
        # Reconfiguring closes the file sink
        configure_logging(level="INFO", format="console", force_reconfigure=True)

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        extra = records[-1]["record"]["extra"]
        assert extra["kind"] == "INVALID_KEY"
        assert extra["subject"] == "demo.Bad"
        assert records[-1]["record"]["message"] == "bad key"
