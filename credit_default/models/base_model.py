"""
Base Model

Abstract base class for the candidate classifiers.
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Tuple
import warnings

import numpy as np
import pandas as pd

from credit_default.core.base import PipelineComponent
from credit_default.core.exceptions import ArtifactError, ModelTrainingError


class BaseModel(PipelineComponent):
    """
    Abstract base class for candidate classifiers.

    Each subclass wraps one library estimator. The estimator built by
    ``build_estimator`` is what cross-validation clones per fold, and what
    ``fit`` trains on the full data.
    """

    #: Short algorithm identifier used in configuration and reports
    algorithm: str = ''

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        random_state: Optional[int] = None
    ):
        """
        Initialize the model.

        Args:
            config: Model configuration dictionary
            name: Optional model name
            random_state: Seed for stochastic estimators
        """
        super().__init__(config or {}, name)
        self.random_state = random_state
        self.default_params: Dict[str, Any] = self.get_config(
            'default_params', self.get_default_params()
        )
        self.model = None
        self.is_fitted = False
        self.feature_names: List[str] = []
        self.feature_importances_: Optional[Dict[str, float]] = None
        self.fit_warnings_: List[str] = []
        self._best_params: Optional[Dict[str, Any]] = None

    @abstractmethod
    def get_default_params(self) -> Dict[str, Any]:
        """Built-in estimator parameters, used when the config has none."""
        pass

    @abstractmethod
    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Create an unfitted scikit-learn compatible estimator.

        Args:
            params: Parameters overriding the defaults

        Returns:
            Estimator instance
        """
        pass

    def run(self, X: pd.DataFrame, y: pd.Series, **kwargs) -> 'BaseModel':
        """Run is implemented as fit."""
        return self.fit(X, y)

    def resolved_params(self) -> Dict[str, Any]:
        """Default parameters with the tuned parameters applied on top."""
        params = dict(self.default_params)
        if self._best_params:
            params.update(self._best_params)
        return params

    def fit(self, X: pd.DataFrame, y: pd.Series) -> 'BaseModel':
        """
        Fit the model on the full data.

        Library warnings (non-convergence, collinearity) are recorded in
        ``fit_warnings_`` and logged; they do not fail the fit.

        Args:
            X: Training features
            y: Training target (class indices 0/1)

        Returns:
            Self
        """
        self._start_execution()

        try:
            X, y = self._validate_input(X, y)
            self.model = self.build_estimator(self.resolved_params())

            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter('always')
                self.model.fit(X, y)
            self.fit_warnings_ = sorted({str(w.message) for w in caught})
            for message in self.fit_warnings_:
                self.logger.warning(f"Fit warning: {message}")

            self._extract_feature_importances()
            self.is_fitted = True

            duration = self._end_execution()
            self.logger.info(f"Model fitted on {len(X)} samples in {duration:.2f}s")
            return self

        except ModelTrainingError:
            self._end_execution()
            raise
        except Exception as e:
            self._end_execution()
            raise ModelTrainingError(
                f"{self.name} training failed: {e}",
                model_name=self.name,
                cause=e
            )

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """
        Generate class predictions.

        Args:
            X: Features

        Returns:
            Predicted class indices
        """
        self._check_fitted()
        X, _ = self._validate_input(X)
        return self.model.predict(X)

    def predict_proba(self, X: pd.DataFrame) -> np.ndarray:
        """
        Generate probability predictions for the positive class.

        Args:
            X: Features

        Returns:
            Predicted probabilities for the positive class (1D array)
        """
        self._check_fitted()
        X, _ = self._validate_input(X)
        proba = self.model.predict_proba(X)
        classes = list(self.model.classes_)
        if 1 not in classes:
            return np.zeros(len(X))
        return proba[:, classes.index(1)]

    def get_params(self) -> Dict[str, Any]:
        """Get model parameters."""
        if self.model is not None and hasattr(self.model, 'get_params'):
            return self.model.get_params()
        return dict(self.default_params)

    @property
    def best_params(self) -> Optional[Dict[str, Any]]:
        """Get best parameters from tuning."""
        return self._best_params

    @best_params.setter
    def best_params(self, params: Optional[Dict[str, Any]]) -> None:
        """Set best parameters."""
        self._best_params = dict(params) if params else None

    def get_tuning_param_grid(
        self,
        n_features: Optional[int] = None,
        param_grid: Optional[Dict[str, List[Any]]] = None
    ) -> Dict[str, List[Any]]:
        """
        Get the parameter grid for cross-validated search.

        Args:
            n_features: Number of design matrix columns
            param_grid: Grid overriding the configured one

        Returns:
            Parameter grid (empty when the algorithm has nothing to tune)
        """
        if param_grid is None:
            param_grid = self.get_config('tuning.param_grid', {}) or {}
        return {key: list(values) for key, values in param_grid.items()}

    def get_feature_importance(
        self,
        top_n: Optional[int] = None
    ) -> Dict[str, float]:
        """
        Get feature importance scores.

        Args:
            top_n: Return only top N features

        Returns:
            Dictionary of feature name to importance score
        """
        if self.feature_importances_ is None:
            return {}

        sorted_features = dict(
            sorted(
                self.feature_importances_.items(),
                key=lambda x: abs(x[1]),
                reverse=True
            )
        )

        if top_n:
            return dict(list(sorted_features.items())[:top_n])

        return sorted_features

    def save(self, path: str) -> None:
        """
        Save model to disk.

        Args:
            path: Path to save model
        """
        import joblib

        artifact = {
            'algorithm': self.algorithm,
            'model': self.model,
            'feature_names': self.feature_names,
            'feature_importances': self.feature_importances_,
            'best_params': self._best_params,
            'config': self.config
        }

        try:
            joblib.dump(artifact, path)
        except OSError as e:
            raise ArtifactError(f"Failed to save model: {e}", artifact_path=path, cause=e)
        self.logger.info(f"Model saved to {path}")

    def load(self, path: str) -> 'BaseModel':
        """
        Load model from disk.

        Args:
            path: Path to load model from

        Returns:
            Self
        """
        import joblib

        try:
            artifact = joblib.load(path)
        except OSError as e:
            raise ArtifactError(f"Failed to load model: {e}", artifact_path=path, cause=e)

        self.model = artifact['model']
        self.feature_names = artifact['feature_names']
        self.feature_importances_ = artifact['feature_importances']
        self._best_params = artifact['best_params']
        self.is_fitted = True

        self.logger.info(f"Model loaded from {path}")

        return self

    def _extract_feature_importances(self) -> None:
        estimator = self.model
        if hasattr(estimator, 'steps'):
            estimator = estimator.steps[-1][1]

        if hasattr(estimator, 'feature_importances_'):
            values = estimator.feature_importances_
        elif hasattr(estimator, 'coef_'):
            values = np.abs(np.ravel(estimator.coef_))
        else:
            self.feature_importances_ = None
            return

        self.feature_importances_ = {
            name: float(value) for name, value in zip(self.feature_names, values)
        }

    def _check_fitted(self) -> None:
        if not self.is_fitted:
            raise ModelTrainingError("Model not fitted", model_name=self.name)

    def _validate_input(
        self,
        X: pd.DataFrame,
        y: Optional[pd.Series] = None
    ) -> Tuple[pd.DataFrame, Optional[pd.Series]]:
        """
        Validate and prepare input data.

        Args:
            X: Features
            y: Target (optional)

        Returns:
            Validated (X, y) tuple
        """
        if not isinstance(X, pd.DataFrame):
            X = pd.DataFrame(X)

        # Store feature names on first fit
        if not self.feature_names:
            self.feature_names = list(X.columns)

        if self.is_fitted:
            missing = set(self.feature_names) - set(X.columns)
            if missing:
                raise ModelTrainingError(
                    f"Missing features: {sorted(missing)}",
                    model_name=self.name
                )
            X = X[self.feature_names]

        if y is not None:
            if not isinstance(y, pd.Series):
                y = pd.Series(y)

            if len(X) != len(y):
                raise ModelTrainingError(
                    f"X and y length mismatch: {len(X)} vs {len(y)}",
                    model_name=self.name
                )

        return X, y
