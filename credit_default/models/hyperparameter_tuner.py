"""
Hyperparameter Tuner

Cross-validated grid search over precomputed folds.
"""

from typing import Any, Dict, List, Optional, Tuple
import warnings

import numpy as np
import pandas as pd

from joblib import Parallel, delayed
from sklearn.base import clone
from sklearn.metrics import get_scorer
from sklearn.model_selection import ParameterGrid

from credit_default.core.base import PipelineComponent
from credit_default.core.exceptions import HyperparameterTuningError
from credit_default.data.folds import Fold
from credit_default.models.base_model import BaseModel


def _fit_and_score_fold(
    estimator: Any,
    X: pd.DataFrame,
    y: pd.Series,
    fold: Fold,
    scoring: str
) -> Tuple[float, Optional[str]]:
    """
    Fit on the training part of one fold and score the held-out part.

    A singular covariance or design matrix leaves no classifier for the fold.
    Every held-out record then counts as misclassified (score 0.0) and the
    library message is returned alongside.
    """
    train, test = fold
    try:
        estimator.fit(X.iloc[train], y.iloc[train])
    except np.linalg.LinAlgError as e:
        return 0.0, str(e)
    return float(get_scorer(scoring)(estimator, X.iloc[test], y.iloc[test])), None


class HyperparameterTuner(PipelineComponent):
    """
    Grid search with k-fold cross-validation.

    Every grid point is scored on the same folds. The grid point with the
    highest mean fold score wins; ties go to the first point in grid order.
    A model without a grid is simply cross-validated once.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        scoring: str = 'accuracy',
        n_jobs: int = 1,
        name: Optional[str] = None
    ):
        """
        Initialize the tuner.

        Args:
            config: Tuning configuration
            scoring: scikit-learn scorer name
            n_jobs: Parallel jobs for fold fitting
            name: Optional tuner name
        """
        super().__init__(config or {}, name or "HyperparameterTuner")

        self.scoring = scoring
        self.n_jobs = n_jobs
        self.best_params_: Optional[Dict[str, Any]] = None
        self.best_score_: Optional[float] = None
        self.fit_warnings_: List[str] = []

    def run(
        self,
        model: BaseModel,
        X: pd.DataFrame,
        y: pd.Series,
        **kwargs
    ) -> Dict[str, Any]:
        """Run tuning."""
        return self.tune(model, X, y, **kwargs)

    def tune(
        self,
        model: BaseModel,
        X: pd.DataFrame,
        y: pd.Series,
        folds: List[Fold],
        param_grid: Optional[Dict[str, List[Any]]] = None
    ) -> Dict[str, Any]:
        """
        Tune hyperparameters for a model.

        Args:
            model: Model to tune
            X: Design matrix
            y: Class indices
            folds: (train, held-out) position pairs
            param_grid: Grid overriding the model's configured grid

        Returns:
            Dictionary with best params, mean and per-fold scores
        """
        self._start_execution()

        grid = model.get_tuning_param_grid(X.shape[1], param_grid)
        method = 'grid_search' if grid else 'cross_validation'
        self.logger.info(f"Starting {method} for {model.name} with {len(folds)}-fold CV")

        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter('always')
                result = self._search(model, X, y, folds, grid)
        except Exception as e:
            self._end_execution()
            raise HyperparameterTuningError(
                f"Tuning failed: {e}",
                model_name=model.name,
                cause=e
            )

        messages = {str(w.message) for w in caught}
        messages.update(result.pop('degenerate_folds'))
        self.fit_warnings_ = sorted(messages)
        for message in self.fit_warnings_:
            self.logger.warning(f"Fold warning ({model.name}): {message}")

        self.best_params_ = result['best_params']
        self.best_score_ = result['best_score']
        result['method'] = method
        result['fit_warnings'] = list(self.fit_warnings_)

        self.logger.info(f"Best score: {self.best_score_:.4f}")
        if self.best_params_:
            self.logger.info(f"Best params: {self.best_params_}")

        self._end_execution()
        return result

    def _search(
        self,
        model: BaseModel,
        X: pd.DataFrame,
        y: pd.Series,
        folds: List[Fold],
        param_grid: Dict[str, List[Any]]
    ) -> Dict[str, Any]:
        """Score every grid point (a single empty point without a grid) on the folds."""
        points = list(ParameterGrid(param_grid)) if param_grid else [{}]
        if param_grid:
            self.logger.info(f"Grid search with {len(points)} combinations")

        base = model.build_estimator(model.resolved_params())
        fold_scores: List[List[float]] = []
        degenerate = set()

        for point in points:
            estimator = clone(base).set_params(**point)
            outcomes = Parallel(n_jobs=self.n_jobs)(
                delayed(_fit_and_score_fold)(clone(estimator), X, y, fold, self.scoring)
                for fold in folds
            )
            fold_scores.append([score for score, _ in outcomes])
            for i, (_, failure) in enumerate(outcomes):
                if failure is not None:
                    degenerate.add(f"fold {i} fit failed, scored as misclassified: {failure}")

        means = np.array([np.mean(scores) for scores in fold_scores], dtype=float)
        best = int(np.argmax(means))

        return {
            'best_params': dict(points[best]),
            'best_score': float(means[best]),
            'score_std': float(np.std(fold_scores[best])),
            'fold_scores': [float(s) for s in fold_scores[best]],
            'mean_scores': means.tolist(),
            'n_combinations': len(points),
            'degenerate_folds': degenerate,
        }
