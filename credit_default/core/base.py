"""
Base Classes for Pipeline Components

Shared base of the candidate models and the tuner.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging
import time


class PipelineComponent(ABC):
    """
    A configurable, named unit of work with its own logger.

    Subclasses implement ``run``. Configuration is a plain nested dict
    (an algorithm's ``default_params`` and ``tuning`` sections) read with
    dotted keys.
    """

    def __init__(self, config: Optional[Dict[str, Any]], name: Optional[str] = None):
        self.config = config or {}
        self.name = name or self.__class__.__name__
        self.logger = logging.getLogger(self.name)
        self._started_at: Optional[float] = None

    @abstractmethod
    def run(self, *args, **kwargs) -> Any:
        """Execute the component."""

    def get_config(self, key: str, default: Any = None) -> Any:
        """
        Look up a dotted key such as ``'tuning.param_grid'``.

        Args:
            key: Dotted path into the config dict
            default: Returned when any part of the path is missing

        Returns:
            Configured value or default
        """
        value = self.config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def _start_execution(self) -> None:
        self._started_at = time.perf_counter()
        self.logger.debug(f"Starting {self.name}")

    def _end_execution(self) -> float:
        """Log and return the seconds since ``_start_execution``."""
        if self._started_at is None:
            return 0.0
        duration = time.perf_counter() - self._started_at
        self._started_at = None
        self.logger.debug(f"Completed {self.name} in {duration:.2f} seconds")
        return duration
