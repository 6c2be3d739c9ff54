"""
Fold Assignment

Reproducible k-fold partitioning for cross-validation. The same labels, fold
count and seed always give the same folds.
"""

from typing import List, Tuple
import logging

import numpy as np
import pandas as pd

from sklearn.model_selection import KFold, StratifiedKFold

from credit_default.core.exceptions import DataValidationError


logger = logging.getLogger(__name__)

Fold = Tuple[np.ndarray, np.ndarray]


def make_folds(
    y: pd.Series,
    n_folds: int = 10,
    seed: int = 407267,
    stratify: bool = True,
) -> List[Fold]:
    """
    Split row positions into (train, held-out) index pairs.

    Folds are stratified on the label when every class has at least
    ``n_folds`` members; otherwise a shuffled plain k-fold is used.

    Args:
        y: Class labels.
        n_folds: Number of folds.
        seed: Random seed for the shuffle.
        stratify: Prefer stratified folds when the class counts allow it.

    Returns:
        List of ``n_folds`` (train_positions, test_positions) tuples.
    """
    n = len(y)
    if n_folds < 2:
        raise DataValidationError(f"At least 2 folds are needed, got {n_folds}")
    if n < n_folds:
        raise DataValidationError(
            f"Cannot make {n_folds} folds from {n} records",
            details={'n_records': n, 'n_folds': n_folds},
        )

    positions = np.arange(n)
    min_class_count = int(pd.Series(y).value_counts().min()) if n else 0

    if stratify and min_class_count >= n_folds:
        splitter = StratifiedKFold(n_splits=n_folds, shuffle=True, random_state=seed)
        splits = splitter.split(positions, np.asarray(y))
    else:
        if stratify:
            logger.warning(
                f"Smallest class has {min_class_count} records, fewer than "
                f"{n_folds} folds; using unstratified folds"
            )
        splitter = KFold(n_splits=n_folds, shuffle=True, random_state=seed)
        splits = splitter.split(positions)

    return [(train, test) for train, test in splits]


def fold_assignments(folds: List[Fold], n_records: int) -> np.ndarray:
    """Held-out fold number of every record (-1 if never held out)."""
    assignment = np.full(n_records, -1, dtype=int)
    for fold_number, (_, test) in enumerate(folds):
        assignment[test] = fold_number
    return assignment
