"""
Models Module

Candidate classifiers, the model factory and cross-validated tuning.
"""

from credit_default.models.base_model import BaseModel
from credit_default.models.model_factory import ModelFactory
from credit_default.models.logistic_model import LogisticRegressionModel
from credit_default.models.discriminant_model import LDAModel, QDAModel
from credit_default.models.random_forest_model import RandomForestModel
from credit_default.models.gradient_boosting_model import GradientBoostingModel
from credit_default.models.hyperparameter_tuner import HyperparameterTuner

__all__ = [
    "BaseModel",
    "ModelFactory",
    "LogisticRegressionModel",
    "LDAModel",
    "QDAModel",
    "RandomForestModel",
    "GradientBoostingModel",
    "HyperparameterTuner",
]
