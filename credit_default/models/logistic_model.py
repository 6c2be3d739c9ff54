"""
Logistic Regression Model

Binomial logistic regression with standardized inputs.
"""

from typing import Any, Dict, List, Optional

from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler

from credit_default.models.base_model import BaseModel


class LogisticRegressionModel(BaseModel):
    """
    Logistic Regression classifier for credit default.

    The default regularization is negligible (C=1e6) so the fit matches an
    unpenalized binomial GLM. On separable folds the coefficients diverge and
    probabilities saturate at 0 or 1; the resulting convergence warnings are
    logged and the fit is kept.
    """

    algorithm = 'logistic_regression'

    # Step name of the classifier inside the estimator pipeline
    STEP = 'classifier'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        random_state: Optional[int] = None
    ):
        super().__init__(config, name or "LogisticRegressionModel", random_state)

    def get_default_params(self) -> Dict[str, Any]:
        return {
            'C': 1.0e6,
            'solver': 'lbfgs',
            'max_iter': 1000,
        }

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> Pipeline:
        prefix = f"{self.STEP}__"
        params = {
            key[len(prefix):] if key.startswith(prefix) else key: value
            for key, value in (self.default_params if params is None else params).items()
        }
        if self.random_state is not None:
            params.setdefault('random_state', self.random_state)

        return Pipeline([
            ('scaler', StandardScaler()),
            (self.STEP, LogisticRegression(**params)),
        ])

    def get_tuning_param_grid(
        self,
        n_features: Optional[int] = None,
        param_grid: Optional[Dict[str, List[Any]]] = None
    ) -> Dict[str, List[Any]]:
        """Grid keys are addressed to the classifier step of the pipeline."""
        grid = super().get_tuning_param_grid(n_features, param_grid)
        prefix = f"{self.STEP}__"
        return {
            key if key.startswith(prefix) else prefix + key: values
            for key, values in grid.items()
        }

    def get_coefficients(self) -> Dict[str, float]:
        """
        Get model coefficients (signed, on the standardized scale).

        Returns:
            Dictionary of feature name to coefficient
        """
        if self.model is None:
            return {}
        classifier = self.model.named_steps[self.STEP]
        return dict(zip(self.feature_names, classifier.coef_[0].tolist()))
