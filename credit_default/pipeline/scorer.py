"""
Scorer

Applies the final model to the scoring dataset.
"""

import logging

import numpy as np
import pandas as pd

from credit_default.core.exceptions import DataValidationError, EvaluationError
from credit_default.data.encoding import build_design_matrix
from credit_default.data.loader import Dataset
from credit_default.models.base_model import BaseModel


logger = logging.getLogger(__name__)


def score_dataset(
    model: BaseModel,
    dataset: Dataset,
    id_header: str = 'id',
    probability_header: str = 'default',
) -> pd.DataFrame:
    """
    Predict the probability of default for every scoring record.

    Rows keep the scoring dataset's order; nothing is sorted or filtered.

    Args:
        model: Fitted final model.
        dataset: Scoring dataset with ids.
        id_header: Name of the id column in the output.
        probability_header: Name of the probability column in the output.

    Returns:
        Two-column DataFrame of ids and probabilities.

    Raises:
        EvaluationError: If a probability is not finite or outside [0, 1].
    """
    if dataset.ids is None:
        raise DataValidationError("Scoring dataset has no ids")

    X = build_design_matrix(dataset)
    probabilities = np.asarray(model.predict_proba(X), dtype=float)

    invalid = ~np.isfinite(probabilities) | (probabilities < 0.0) | (probabilities > 1.0)
    if invalid.any():
        raise EvaluationError(
            f"{int(invalid.sum())} predicted probabilities are not in [0, 1]",
            metric_name=probability_header,
            details={'ids': dataset.ids[invalid].head(5).tolist()},
        )

    predictions = pd.DataFrame({
        id_header: dataset.ids.to_numpy(),
        probability_header: probabilities,
    })
    logger.info(
        "SCORED | %d records, mean probability %.4f",
        len(predictions), float(probabilities.mean()) if len(probabilities) else 0.0,
    )
    return predictions
