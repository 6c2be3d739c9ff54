"""
Model Selector

Picks the trial with the lowest cross-validated misclassification rate.
"""

from typing import Sequence
import json
import logging

import pandas as pd

from credit_default.core.exceptions import EvaluationError
from credit_default.pipeline.trials import TrialResult


logger = logging.getLogger(__name__)


def select_best(trials: Sequence[TrialResult]) -> TrialResult:
    """
    Return the trial with the minimum misclassification rate.

    Ties go to the trial that appears first.

    Args:
        trials: Trial results in run order.

    Returns:
        The selected trial.

    Raises:
        EvaluationError: If there are no trials.
    """
    if not trials:
        raise EvaluationError("No trial results to select from", metric_name="misclassification_rate")

    best = trials[0]
    for trial in trials[1:]:
        if trial.misclassification_rate < best.misclassification_rate:
            best = trial

    logger.info(
        "SELECTED | %s (misclassification rate %.7f)",
        best.algorithm, best.misclassification_rate,
    )
    return best


def comparison_table(trials: Sequence[TrialResult]) -> pd.DataFrame:
    """
    Tabulate trials, best first.

    The sort is stable, so tied trials keep their run order.

    Args:
        trials: Trial results in run order.

    Returns:
        DataFrame with one row per trial.
    """
    rows = [
        {
            'rank': 0,
            'algorithm': t.algorithm,
            'accuracy': t.accuracy,
            'misclassification_rate': t.misclassification_rate,
            'accuracy_std': t.accuracy_std,
            'best_params': json.dumps(t.best_params, sort_keys=True, default=str),
            'n_candidates': t.n_candidates,
            'n_folds': t.n_folds,
            'duration_seconds': round(t.duration_seconds, 3),
        }
        for t in trials
    ]
    table = pd.DataFrame(rows, columns=[
        'rank', 'algorithm', 'accuracy', 'misclassification_rate', 'accuracy_std',
        'best_params', 'n_candidates', 'n_folds', 'duration_seconds',
    ])
    table = table.sort_values('misclassification_rate', kind='mergesort').reset_index(drop=True)
    table['rank'] = range(1, len(table) + 1)
    return table
