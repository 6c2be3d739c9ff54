"""
Pytest Configuration and Shared Fixtures

Provides common fixtures for all test modules including:
- Pipeline configurations (Pydantic-based), default and fast
- Synthetic credit card records with a known default signal
- CSV writers for training and scoring files
- Typed datasets and design matrices
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import pandas as pd
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from credit_default.config.schema import NUMERIC_COLUMNS, PipelineConfig
from credit_default.data.schema import CREDIT_SCHEMA, DatasetSchema


FEATURE_ORDER = [
    "limit_bal", "sex", "education", "marriage", "age",
    *[f"bill_amt{i}" for i in range(1, 7)],
    *[f"pay_amt{i}" for i in range(1, 7)],
]


def make_credit_records(
    n: int,
    seed: int = 42,
    with_labels: bool = True,
    with_ids: bool = False,
    balanced: bool = False,
) -> pd.DataFrame:
    """Synthetic credit card records in file layout.

    Properties:
    - Every declared categorical level is drawn from its level set
    - Defaulters have lower limits and lower repayments than non-defaulters
    - ``balanced`` gives exactly n // 2 defaulters
    """
    rng = np.random.RandomState(seed)

    if balanced:
        target = np.array([0, 1] * (n // 2) + [0] * (n % 2))
    else:
        target = (rng.rand(n) < 0.3).astype(int)

    data: Dict[str, Any] = {}
    data["limit_bal"] = np.round(rng.uniform(10000, 500000, n) * (1 - 0.4 * target), -3)
    data["sex"] = rng.choice([1, 2], n)
    data["education"] = rng.choice([1, 2, 3, 4], n)
    data["marriage"] = rng.choice([1, 2, 3], n)
    data["age"] = rng.randint(21, 70, n)
    for i in range(1, 7):
        data[f"bill_amt{i}"] = np.round(rng.uniform(0, 100000, n))
    for i in range(1, 7):
        data[f"pay_amt{i}"] = np.round(rng.uniform(0, 10000, n) * (1 - 0.6 * target))

    df = pd.DataFrame(data)[FEATURE_ORDER]
    if with_ids:
        df.insert(0, "id", [f"{1000 + i}" for i in range(n)])
    if with_labels:
        df["default"] = target
    return df


def write_csv(df: pd.DataFrame, path: Path) -> str:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return str(path)


# ===================================================================
# CONFIGURATION FIXTURES
# ===================================================================

@pytest.fixture
def default_config() -> PipelineConfig:
    """PipelineConfig with every default."""
    return PipelineConfig()


@pytest.fixture
def fast_config_dict(tmp_path) -> Dict[str, Any]:
    """Config dict with small forests and a small boosting grid.

    Data paths point into tmp_path; write the files with the data fixtures.
    """
    return {
        "data": {
            "train_path": str(tmp_path / "data" / "train.csv"),
            "scoring_path": str(tmp_path / "data" / "score.csv"),
        },
        "cross_validation": {"n_folds": 3, "seed": 407267},
        "models": {
            "random_forest": {
                "default_params": {"n_estimators": 20, "n_jobs": 1},
                "param_grid": {"max_features": [2, 4, 6, None]},
            },
            "gradient_boosting": {
                "param_grid": {
                    "n_estimators": [10, 20],
                    "max_depth": [2, 3],
                    "learning_rate": [0.1],
                    "min_samples_leaf": [1],
                },
            },
        },
        "output": {
            "base_dir": str(tmp_path / "runs"),
            "predictions_path": str(tmp_path / "out" / "predictions.csv"),
        },
        "reproducibility": {"log_level": "DEBUG"},
    }


@pytest.fixture
def fast_config(fast_config_dict) -> PipelineConfig:
    return PipelineConfig(**fast_config_dict)


# ===================================================================
# DATA FIXTURES
# ===================================================================

@pytest.fixture
def credit_records():
    """Factory fixture: make_credit_records(n, seed, with_labels, with_ids, balanced)."""
    return make_credit_records


@pytest.fixture
def csv_writer():
    """Factory fixture: write_csv(df, path) -> str."""
    return write_csv


@pytest.fixture
def schema() -> DatasetSchema:
    return CREDIT_SCHEMA


@pytest.fixture
def train_frame() -> pd.DataFrame:
    """60 labeled records, ~30% default rate."""
    return make_credit_records(60, seed=7)


@pytest.fixture
def scoring_frame() -> pd.DataFrame:
    """8 unlabeled records with ids."""
    return make_credit_records(8, seed=11, with_labels=False, with_ids=True)


@pytest.fixture
def train_csv(tmp_path, train_frame) -> str:
    return write_csv(train_frame, tmp_path / "data" / "train.csv")


@pytest.fixture
def scoring_csv(tmp_path, scoring_frame) -> str:
    return write_csv(scoring_frame, tmp_path / "data" / "score.csv")


@pytest.fixture
def train_dataset(train_csv, schema):
    from credit_default.data.loader import load_training_data

    return load_training_data(train_csv, schema)


@pytest.fixture
def scoring_dataset(scoring_csv, schema):
    from credit_default.data.loader import load_scoring_data

    return load_scoring_data(scoring_csv, schema)


@pytest.fixture
def design_data(train_dataset):
    """(X, y) design matrix and class indices for the training records."""
    from credit_default.data.encoding import build_design_matrix

    return build_design_matrix(train_dataset), train_dataset.labels


@pytest.fixture
def feature_names() -> List[str]:
    return list(FEATURE_ORDER)


@pytest.fixture
def numeric_columns() -> List[str]:
    return list(NUMERIC_COLUMNS)


# ===================================================================
# LOGGING FIXTURES
# ===================================================================

@pytest.fixture
def isolated_logging():
    """Remove the console/file handlers a pipeline run installs on the root logger."""
    import logging
    from logging.handlers import RotatingFileHandler

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
