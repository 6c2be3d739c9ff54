"""
Logging Utilities

Console and per-run file logging, plus the structured step/metric lines the
orchestrator writes.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional


_loggers: Dict[str, logging.Logger] = {}

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-5s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries whose INFO/DEBUG output is noise in a run log
QUIET_LOGGERS = ("sklearn", "joblib")


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> None:
    """
    Route every logger to stdout and, for a run, to its log file.

    Calling it again replaces the handlers of the previous call, so each run
    writes only to its own log file.

    Args:
        log_level: Level name for the root logger and both handlers
        log_file: Run log path; parent directories are created
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files kept
    """
    level = getattr(logging, log_level.upper())
    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Cached ``logging.getLogger``."""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
    return _loggers[name]


class PipelineLogger:
    """
    Logger for the orchestrator's run log.

    Every line carries the run context (``[run_id=...]``); steps, metrics and
    dataset sizes use fixed prefixes so a run log can be grepped.
    """

    def __init__(self, name: str):
        self.logger = get_logger(name)
        self._context: Dict[str, Any] = {}

    def set_context(self, **kwargs) -> None:
        """Add key=value pairs prefixed to every message."""
        self._context.update(kwargs)

    def _format_message(self, message: str) -> str:
        if self._context:
            context_str = " ".join(f"{k}={v}" for k, v in self._context.items())
            return f"[{context_str}] {message}"
        return message

    def info(self, message: str) -> None:
        self.logger.info(self._format_message(message))

    def error(self, message: str) -> None:
        self.logger.error(self._format_message(message))

    def step_start(self, step_name: str) -> None:
        self.info(f"STEP | Starting: {step_name}")

    def step_complete(self, step_name: str, duration: float) -> None:
        self.info(f"STEP | Completed: {step_name} ({duration:.2f}s)")

    def metric(self, name: str, value: Any) -> None:
        self.info(f"METRIC | {name}: {value}")

    def data_stats(self, name: str, rows: int, columns: int) -> None:
        self.info(f"DATA | {name}: {rows:,} rows, {columns} columns")
