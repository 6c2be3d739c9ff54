"""
Model Trials

Runs one candidate algorithm under k-fold cross-validation and records the
result. A trial is the unit the selector compares.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import logging
import time

import numpy as np

from credit_default.config.schema import PipelineConfig
from credit_default.core.exceptions import DataValidationError
from credit_default.data.encoding import build_design_matrix
from credit_default.data.folds import make_folds
from credit_default.data.loader import Dataset
from credit_default.models.hyperparameter_tuner import HyperparameterTuner
from credit_default.models.model_factory import ModelFactory


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialResult:
    """Cross-validated outcome of one candidate algorithm.

    Attributes:
        algorithm: Algorithm identifier.
        accuracy: Mean held-out accuracy of the best grid point.
        param_grid: Grid that was searched (empty if none).
        best_params: Winning grid point (empty if no grid).
        accuracy_std: Standard deviation of the fold accuracies.
        fold_accuracies: Held-out accuracy of each fold for the best point.
        n_candidates: Number of grid points evaluated.
        n_folds: Fold count.
        seed: Seed used for fold assignment and estimators.
        duration_seconds: Wall-clock time of the trial.
        warnings: Distinct library warnings raised while fitting folds.
    """

    algorithm: str
    accuracy: float
    param_grid: Dict[str, List[Any]] = field(default_factory=dict)
    best_params: Dict[str, Any] = field(default_factory=dict)
    accuracy_std: float = 0.0
    fold_accuracies: Tuple[float, ...] = ()
    n_candidates: int = 1
    n_folds: int = 0
    seed: Optional[int] = None
    duration_seconds: float = 0.0
    warnings: Tuple[str, ...] = ()

    @property
    def misclassification_rate(self) -> float:
        """Share of held-out records assigned the wrong class."""
        return 1.0 - self.accuracy

    def summary(self) -> str:
        """Human-readable one-line summary."""
        params = f" params={self.best_params}" if self.best_params else ""
        return (
            f"{self.algorithm}: accuracy={self.accuracy:.7f} "
            f"misclassification={self.misclassification_rate:.7f}{params} "
            f"({self.n_candidates} candidate(s), {self.duration_seconds:.1f}s)"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'algorithm': self.algorithm,
            'accuracy': self.accuracy,
            'misclassification_rate': self.misclassification_rate,
            'accuracy_std': self.accuracy_std,
            'best_params': dict(self.best_params),
            'param_grid': {k: list(v) for k, v in self.param_grid.items()},
            'fold_accuracies': list(self.fold_accuracies),
            'n_candidates': self.n_candidates,
            'n_folds': self.n_folds,
            'seed': self.seed,
            'duration_seconds': round(self.duration_seconds, 3),
            'warnings': list(self.warnings),
        }


def run_trial(
    dataset: Dataset,
    algorithm: str,
    param_grid: Optional[Dict[str, List[Any]]] = None,
    n_folds: int = 10,
    seed: int = 407267,
    algorithm_config: Optional[Dict[str, Any]] = None,
    stratify: bool = True,
    n_jobs: int = 1,
) -> TrialResult:
    """
    Cross-validate one algorithm, searching its grid if it has one.

    The seed is reapplied at the start of every trial so each trial sees the
    same folds regardless of what ran before it.

    Args:
        dataset: Labeled training dataset.
        algorithm: Algorithm identifier known to ModelFactory.
        param_grid: Grid overriding the configured one.
        n_folds: Number of cross-validation folds.
        seed: Seed for folds and stochastic estimators.
        algorithm_config: Model configuration (default params, grid).
        stratify: Prefer stratified folds.
        n_jobs: Parallel jobs for fold fitting.

    Returns:
        TrialResult for the best grid point.
    """
    if not dataset.has_labels:
        raise DataValidationError("Trials need a labeled dataset")

    start = time.perf_counter()
    np.random.seed(seed)

    X = build_design_matrix(dataset)
    y = dataset.labels
    folds = make_folds(y, n_folds=n_folds, seed=seed, stratify=stratify)

    model = ModelFactory.create(algorithm, algorithm_config, random_state=seed)
    grid = model.get_tuning_param_grid(X.shape[1], param_grid)

    tuner = HyperparameterTuner(scoring='accuracy', n_jobs=n_jobs)
    outcome = tuner.tune(model, X, y, folds=folds, param_grid=param_grid)

    trial = TrialResult(
        algorithm=algorithm,
        accuracy=outcome['best_score'],
        param_grid=grid,
        best_params=outcome['best_params'],
        accuracy_std=outcome['score_std'],
        fold_accuracies=tuple(outcome['fold_scores']),
        n_candidates=outcome['n_combinations'],
        n_folds=n_folds,
        seed=seed,
        duration_seconds=time.perf_counter() - start,
        warnings=tuple(outcome['fit_warnings']),
    )
    logger.info("TRIAL | %s", trial.summary())
    return trial


def run_trials(
    dataset: Dataset,
    config: PipelineConfig,
    algorithms: Optional[List[str]] = None,
) -> List[TrialResult]:
    """
    Run every enabled candidate in configuration order.

    Args:
        dataset: Labeled training dataset.
        config: Pipeline configuration.
        algorithms: Explicit subset to run (defaults to the enabled ones).

    Returns:
        Trial results in run order.
    """
    cv = config.cross_validation
    names = algorithms if algorithms is not None else config.models.enabled_algorithms()

    trials = []
    for algorithm in names:
        algorithm_config = config.models.get(algorithm)
        trials.append(run_trial(
            dataset,
            algorithm,
            n_folds=cv.n_folds,
            seed=cv.seed,
            algorithm_config=algorithm_config.to_model_config(),
            stratify=cv.stratify,
            n_jobs=cv.n_jobs,
        ))
    return trials
