"""
Discriminant Analysis Models

Linear and quadratic discriminant analysis. Neither has tuning parameters.
"""

from typing import Any, Dict, Optional

from sklearn.discriminant_analysis import (
    LinearDiscriminantAnalysis,
    QuadraticDiscriminantAnalysis,
)

from credit_default.models.base_model import BaseModel


class LDAModel(BaseModel):
    """Linear discriminant analysis with a pooled covariance matrix."""

    algorithm = 'lda'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        random_state: Optional[int] = None
    ):
        super().__init__(config, name or "LDAModel", random_state)

    def get_default_params(self) -> Dict[str, Any]:
        return {'solver': 'svd'}

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> LinearDiscriminantAnalysis:
        params = dict(self.default_params if params is None else params)
        return LinearDiscriminantAnalysis(**params)


class QDAModel(BaseModel):
    """
    Quadratic discriminant analysis with one covariance matrix per class.

    Skewed billing and payment amounts make the per-class Gaussian fit poor on
    credit data, so a misclassification rate far above the other candidates is
    expected. Collinearity warnings are logged, not raised. A class with fewer
    records than predictors has a singular covariance matrix; the tuner scores
    such a fold as fully misclassified.
    """

    algorithm = 'qda'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        random_state: Optional[int] = None
    ):
        super().__init__(config, name or "QDAModel", random_state)

    def get_default_params(self) -> Dict[str, Any]:
        return {'reg_param': 0.0}

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> QuadraticDiscriminantAnalysis:
        params = dict(self.default_params if params is None else params)
        return QuadraticDiscriminantAnalysis(**params)
