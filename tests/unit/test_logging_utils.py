"""Tests for the logging configuration helper."""

import logging

import pytest

from bbcode_ast.logging_utils import configure_logging


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logging")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_and_single_console_handler(self):
        root_logger = configure_logging(logging.INFO)
        configure_logging(logging.INFO)

        assert root_logger is logging.getLogger()
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], logging.StreamHandler)

    def test_accepts_level_names(self):
        assert configure_logging("debug").level == logging.DEBUG

    def test_unknown_level_name_falls_back_to_info(self):
        assert configure_logging("chatty").level == logging.INFO

    def test_trace_mode_includes_logger_name(self):
        handler = configure_logging(logging.DEBUG, trace_mode=True).handlers[0]
        record = logging.LogRecord("bbcode_ast.parser", logging.DEBUG, __file__, 1, "hello", None, None)
        assert "[bbcode_ast.parser]" in handler.format(record)

    def test_log_file_receives_messages(self, tmp_path):
        log_path = tmp_path / "parse.log"
        configure_logging(logging.INFO, log_file=str(log_path))
        logging.getLogger("bbcode_ast.test").warning("written to file")

        for handler in logging.getLogger().handlers:
            handler.flush()
        content = log_path.read_text(encoding="utf-8")
        assert "Logging to file" in content
        assert "written to file" in content

    def test_unwritable_log_file_keeps_console_logging(self, tmp_path, capsys):
        missing_path = tmp_path / "missing" / "parse.log"
        root_logger = configure_logging(logging.INFO, log_file=str(missing_path))
        assert len(root_logger.handlers) == 1
        assert "Could not create log file" in capsys.readouterr().err
