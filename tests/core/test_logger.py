"""
Tests for Logging Utilities

Tests setup_logging, get_logger and PipelineLogger.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from credit_default.core.logger import setup_logging, get_logger, PipelineLogger


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop the handlers setup_logging installs and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestSetupLogging:
    """Test suite for setup_logging function."""

    def test_setup_logging_default(self):
        setup_logging()

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_custom_level(self):
        setup_logging(log_level='WARNING')

        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_writes_file(self, tmp_path):
        log_file = tmp_path / 'logs' / 'pipeline.log'

        setup_logging(log_file=str(log_file))
        logging.getLogger('credit_default.test').info("Written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "Written to file" in log_file.read_text(encoding='utf-8')

    def test_setup_logging_replaces_handlers(self, tmp_path):
        setup_logging(log_file=str(tmp_path / 'a.log'))
        setup_logging(log_file=str(tmp_path / 'b.log'))

        file_handlers = [
            h for h in logging.getLogger().handlers
            if isinstance(h, logging.FileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename.endswith('b.log')

    def test_third_party_loggers_quietened(self):
        setup_logging(log_level='DEBUG')

        assert logging.getLogger('joblib').level == logging.WARNING
        assert logging.getLogger('sklearn').level == logging.WARNING


class TestGetLogger:
    """Test suite for get_logger function."""

    def test_get_logger_returns_same_instance(self):
        assert get_logger('same_name') is get_logger('same_name')

    def test_get_logger_name(self):
        assert get_logger('credit_default.trials').name == 'credit_default.trials'


class TestPipelineLogger:
    """Test suite for PipelineLogger class."""

    def test_format_message_without_context(self):
        pl = PipelineLogger('format_test')

        assert pl._format_message("Test message") == "Test message"

    def test_format_message_with_context(self):
        pl = PipelineLogger('format_test')
        pl.set_context(run_id='xyz')

        assert pl._format_message("Test message") == "[run_id=xyz] Test message"

    def test_context_accumulates(self):
        pl = PipelineLogger('context_test')
        pl.set_context(run_id='xyz')
        pl.set_context(algorithm='lda')

        assert pl._format_message("m") == "[run_id=xyz algorithm=lda] m"

    def test_console_only_without_file(self):
        setup_logging()

        assert not any(
            isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers
        )

    def test_metric_and_data_stats(self, caplog):
        pl = PipelineLogger('stats_test')

        with caplog.at_level(logging.INFO):
            pl.metric('accuracy', 0.8)
            pl.data_stats('train', 22000, 17)
            pl.step_start('Model trials')
            pl.step_complete('Model trials', 1.5)

        assert "METRIC | accuracy: 0.8" in caplog.text
        assert "DATA | train: 22,000 rows, 17 columns" in caplog.text
        assert "STEP | Starting: Model trials" in caplog.text
        assert "STEP | Completed: Model trials (1.50s)" in caplog.text
