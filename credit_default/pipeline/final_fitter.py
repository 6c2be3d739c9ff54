"""
Final Fitter

Refits the selected algorithm on the complete training dataset.
"""

from typing import Any, Dict, Optional
import logging

from credit_default.core.exceptions import DataValidationError
from credit_default.data.encoding import build_design_matrix
from credit_default.data.loader import Dataset
from credit_default.models.base_model import BaseModel
from credit_default.models.model_factory import ModelFactory
from credit_default.pipeline.trials import TrialResult


logger = logging.getLogger(__name__)


def fit_final_model(
    dataset: Dataset,
    trial: TrialResult,
    algorithm_config: Optional[Dict[str, Any]] = None,
    seed: Optional[int] = None,
) -> BaseModel:
    """
    Fit the selected algorithm and parameters on every labeled record.

    No records are held out. The returned model scores positive-class
    probabilities through ``predict_proba``.

    Args:
        dataset: Labeled training dataset.
        trial: The selected trial (algorithm and best parameters).
        algorithm_config: Model configuration used during the trial.
        seed: Seed for stochastic estimators; defaults to the trial's seed.

    Returns:
        Fitted model.
    """
    if not dataset.has_labels:
        raise DataValidationError("The final model needs a labeled dataset")

    seed = trial.seed if seed is None else seed
    model = ModelFactory.create(trial.algorithm, algorithm_config, random_state=seed)
    model.best_params = trial.best_params

    logger.info(
        "FINAL | Fitting %s on %d records with params %s",
        trial.algorithm, dataset.n_records, model.resolved_params(),
    )
    X = build_design_matrix(dataset)
    return model.fit(X, dataset.labels)
