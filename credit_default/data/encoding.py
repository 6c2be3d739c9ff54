"""
Design Matrix Encoding

Turns typed features into the numeric matrix the models consume. Categorical
columns use treatment coding: the first declared level is the reference and
every other level gets one indicator column. Columns come from the schema,
never from the values present in a file, so training and scoring matrices
always line up.
"""

from typing import List

import pandas as pd

from credit_default.data.loader import Dataset
from credit_default.data.schema import DatasetSchema


def indicator_name(column: str, level: str) -> str:
    return f"{column}_{level}"


def design_columns(schema: DatasetSchema) -> List[str]:
    """Names of the design matrix columns, in order."""
    names = []
    for column in schema.columns:
        if column.is_categorical:
            names.extend(indicator_name(column.name, level) for level in column.levels[1:])
        else:
            names.append(column.name)
    return names


def build_design_matrix(dataset: Dataset) -> pd.DataFrame:
    """
    Encode a dataset's features as a float matrix.

    Args:
        dataset: Typed dataset.

    Returns:
        DataFrame with columns ``design_columns(dataset.schema)``.
    """
    schema = dataset.schema
    categorical = [c.name for c in schema.categorical_columns]

    matrix = pd.get_dummies(
        dataset.features,
        columns=categorical,
        prefix_sep='_',
        drop_first=True,
        dtype=float,
    )
    return matrix.reindex(columns=design_columns(schema)).astype(float)
