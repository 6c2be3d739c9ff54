"""
Config Module

Pydantic-based configuration for the default prediction pipeline.
"""

from credit_default.config.schema import (
    PipelineConfig,
    DataConfig,
    ColumnConfig,
    LabelConfig,
    CrossValidationConfig,
    AlgorithmConfig,
    ModelsConfig,
    OutputConfig,
    ReproducibilityConfig,
)
from credit_default.config.loader import load_config, save_config

__all__ = [
    "PipelineConfig",
    "DataConfig",
    "ColumnConfig",
    "LabelConfig",
    "CrossValidationConfig",
    "AlgorithmConfig",
    "ModelsConfig",
    "OutputConfig",
    "ReproducibilityConfig",
    "load_config",
    "save_config",
]
