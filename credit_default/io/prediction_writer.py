"""
Prediction Writer

Writes (id, probability) rows to a delimited file. The file either appears
complete or not at all.
"""

from pathlib import Path
import logging
import os
import tempfile

import pandas as pd

from credit_default.core.exceptions import ArtifactError


logger = logging.getLogger(__name__)


def write_predictions(
    predictions: pd.DataFrame,
    path: str,
    delimiter: str = ',',
) -> Path:
    """
    Write predictions atomically.

    The rows go to a temporary file in the target directory which then
    replaces ``path``. On failure the temporary file is removed and any
    previous file at ``path`` is left untouched.

    Args:
        predictions: DataFrame of ids and probabilities, in output order.
        path: Destination file.
        delimiter: Field delimiter.

    Returns:
        Path of the written file.

    Raises:
        ArtifactError: If the file cannot be written.
    """
    out_path = Path(path)
    tmp_path = None

    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode='w',
            encoding='utf-8',
            newline='',
            suffix='.tmp',
            prefix=f".{out_path.name}.",
            dir=out_path.parent,
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            predictions.to_csv(tmp, sep=delimiter, index=False, lineterminator='\n')
        os.replace(tmp_path, out_path)
        tmp_path = None
    except (OSError, ValueError) as e:
        raise ArtifactError(
            f"Failed to write predictions: {e}",
            artifact_path=str(out_path),
            cause=e,
        )
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)

    logger.info("Predictions written to %s (%d rows)", out_path, len(predictions))
    return out_path
