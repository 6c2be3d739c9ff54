"""
Gradient Boosting Model

Boosted classification trees tuned over tree count, depth, shrinkage and leaf size.
"""

from typing import Any, Dict, Optional

from sklearn.ensemble import GradientBoostingClassifier

from credit_default.models.base_model import BaseModel


class GradientBoostingModel(BaseModel):
    """
    Gradient boosted trees for credit default.

    Grid parameters map onto scikit-learn as:
    - number of trees -> ``n_estimators``
    - tree depth -> ``max_depth``
    - shrinkage -> ``learning_rate``
    - minimum leaf size -> ``min_samples_leaf`` (a row count)
    """

    algorithm = 'gradient_boosting'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        random_state: Optional[int] = None
    ):
        super().__init__(config, name or "GradientBoostingModel", random_state)

    def get_default_params(self) -> Dict[str, Any]:
        return {
            'loss': 'log_loss',
            'n_estimators': 100,
            'max_depth': 3,
            'learning_rate': 0.1,
            'min_samples_leaf': 15,
            'subsample': 1.0,
        }

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> GradientBoostingClassifier:
        params = dict(self.default_params if params is None else params)
        if self.random_state is not None:
            params.setdefault('random_state', self.random_state)
        return GradientBoostingClassifier(**params)
