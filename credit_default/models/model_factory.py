"""
Model Factory

Factory pattern for creating model instances.
"""

from typing import Any, Dict, List, Optional, Type

from credit_default.core.exceptions import ConfigurationError
from credit_default.models.base_model import BaseModel
from credit_default.models.discriminant_model import LDAModel, QDAModel
from credit_default.models.gradient_boosting_model import GradientBoostingModel
from credit_default.models.logistic_model import LogisticRegressionModel
from credit_default.models.random_forest_model import RandomForestModel


class ModelFactory:
    """
    Factory for creating model instances.

    Creates the candidate models by algorithm identifier.
    """

    # Registry of available models, in comparison order
    _models: Dict[str, Type[BaseModel]] = {
        'logistic_regression': LogisticRegressionModel,
        'lda': LDAModel,
        'qda': QDAModel,
        'random_forest': RandomForestModel,
        'gradient_boosting': GradientBoostingModel,
    }

    @classmethod
    def create(
        cls,
        model_type: str,
        config: Optional[Dict[str, Any]] = None,
        name: Optional[str] = None,
        random_state: Optional[int] = None
    ) -> BaseModel:
        """
        Create a model instance.

        Args:
            model_type: Algorithm identifier (e.g. 'gradient_boosting')
            config: Model configuration
            name: Optional instance name
            random_state: Seed for stochastic estimators

        Returns:
            Model instance
        """
        model_type = model_type.lower()

        if model_type not in cls._models:
            raise ConfigurationError(
                f"Unknown model type: {model_type}. "
                f"Available: {list(cls._models.keys())}"
            )

        model_class = cls._models[model_type]
        return model_class(config or {}, name, random_state=random_state)

    @classmethod
    def list_models(cls) -> List[str]:
        """List all available model types."""
        return list(cls._models.keys())
