"""
Credit Default Prediction - Core Package

This package provides the core infrastructure for the pipeline:
- Base classes for all components
- Logging utilities
- Custom exceptions
"""

from credit_default.core.base import PipelineComponent
from credit_default.core.logger import get_logger, setup_logging, PipelineLogger
from credit_default.core.exceptions import (
    PipelineException,
    ConfigurationError,
    DataValidationError,
    SchemaValidationError,
    DataReaderError,
    ModelTrainingError,
    HyperparameterTuningError,
    EvaluationError,
    ArtifactError,
)

__all__ = [
    # Base class
    "PipelineComponent",
    # Logging
    "get_logger",
    "setup_logging",
    "PipelineLogger",
    # Exceptions
    "PipelineException",
    "ConfigurationError",
    "DataValidationError",
    "SchemaValidationError",
    "DataReaderError",
    "ModelTrainingError",
    "HyperparameterTuningError",
    "EvaluationError",
    "ArtifactError",
]
