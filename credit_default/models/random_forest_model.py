"""
Random Forest Model

Random forest classifier; with every feature considered at each split it is
bagging.
"""

from typing import Any, Dict, List, Optional
import logging

from sklearn.ensemble import RandomForestClassifier

from credit_default.models.base_model import BaseModel


logger = logging.getLogger(__name__)


def resolve_max_features(values: List[Any], n_features: Optional[int]) -> List[Any]:
    """
    Turn a ``max_features`` sweep into concrete feature counts.

    ``None`` and ``'all'`` mean every feature (bagging). Counts above the
    number of features are clipped to it. Duplicates after resolution are
    dropped, keeping the first occurrence.

    Args:
        values: Configured candidates
        n_features: Number of design matrix columns (None leaves values as-is)

    Returns:
        Resolved candidates in their original order
    """
    if n_features is None:
        return list(values)

    resolved = []
    for value in values:
        if value is None or value == 'all':
            count = n_features
        elif isinstance(value, int):
            if value > n_features:
                logger.warning(f"max_features={value} clipped to {n_features} features")
            count = max(1, min(value, n_features))
        else:
            # fractions and 'sqrt'/'log2' are passed through to scikit-learn
            count = value
        if count not in resolved:
            resolved.append(count)
    return resolved


class RandomForestModel(BaseModel):
    """
    Random forest / bagging classifier for credit default.

    Tuned over ``max_features``, the number of candidate features per split.
    """

    algorithm = 'random_forest'

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        random_state: Optional[int] = None
    ):
        super().__init__(config, name or "RandomForestModel", random_state)

    def get_default_params(self) -> Dict[str, Any]:
        return {
            'n_estimators': 500,
            'max_features': 'sqrt',
            'n_jobs': 1,
        }

    def build_estimator(self, params: Optional[Dict[str, Any]] = None) -> RandomForestClassifier:
        params = dict(self.default_params if params is None else params)
        if self.random_state is not None:
            params.setdefault('random_state', self.random_state)
        if params.get('max_features') == 'all':
            params['max_features'] = None
        return RandomForestClassifier(**params)

    def get_tuning_param_grid(
        self,
        n_features: Optional[int] = None,
        param_grid: Optional[Dict[str, List[Any]]] = None
    ) -> Dict[str, List[Any]]:
        grid = super().get_tuning_param_grid(n_features, param_grid)
        if 'max_features' in grid:
            grid['max_features'] = resolve_max_features(grid['max_features'], n_features)
        return grid
