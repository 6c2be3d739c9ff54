"""
Data Module

Schema declaration, typed loading, design matrix encoding and fold assignment.
"""

from credit_default.data.schema import CREDIT_SCHEMA, ColumnSpec, DatasetSchema, LabelSpec
from credit_default.data.loader import (
    Dataset,
    load_dataset,
    load_training_data,
    load_scoring_data,
)
from credit_default.data.encoding import build_design_matrix, design_columns
from credit_default.data.folds import make_folds, fold_assignments

__all__ = [
    "CREDIT_SCHEMA",
    "ColumnSpec",
    "DatasetSchema",
    "LabelSpec",
    "Dataset",
    "load_dataset",
    "load_training_data",
    "load_scoring_data",
    "build_design_matrix",
    "design_columns",
    "make_folds",
    "fold_assignments",
]
