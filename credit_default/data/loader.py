"""
Data Loader

Reads the training and scoring files and types every declared column against
a DatasetSchema. Any value that does not fit the schema aborts the load.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

import numpy as np
import pandas as pd

from credit_default.core.exceptions import (
    DataReaderError,
    DataValidationError,
    SchemaValidationError,
)
from credit_default.data.schema import DatasetSchema


logger = logging.getLogger(__name__)

# Number of offending rows/values quoted per validation error
_MAX_EXAMPLES = 5


@dataclass
class Dataset:
    """A typed dataset: features in schema order, optional labels and ids."""
    features: pd.DataFrame
    schema: DatasetSchema
    labels: Optional[pd.Series] = None
    ids: Optional[pd.Series] = None
    source: Optional[str] = None

    @property
    def n_records(self) -> int:
        return len(self.features)

    @property
    def has_labels(self) -> bool:
        return self.labels is not None

    @property
    def default_rate(self) -> Optional[float]:
        """Share of records in the positive class, if labeled."""
        if self.labels is None or len(self.labels) == 0:
            return None
        return float(self.labels.mean())


def _normalize_level(value: str) -> str:
    """Textual form of a categorical value; '2.0' and ' 2' both become '2'."""
    text = str(value).strip()
    try:
        number = float(text)
    except ValueError:
        return text
    if number.is_integer():
        return str(int(number))
    return text


def _line_numbers(mask: pd.Series) -> List[int]:
    # +2: header line plus 1-based numbering
    return [int(i) + 2 for i in np.flatnonzero(mask.to_numpy())[:_MAX_EXAMPLES]]


def _read_table(path: str, delimiter: str) -> pd.DataFrame:
    """Read a delimited file with every column as text."""
    if not Path(path).exists():
        raise DataReaderError(f"Input file not found: {path}", source=path)

    try:
        return pd.read_csv(path, sep=delimiter, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise DataValidationError(f"Input file is empty: {path}", cause=e)
    except pd.errors.ParserError as e:
        raise DataValidationError(f"Malformed rows in {path}", cause=e)
    except (OSError, UnicodeDecodeError) as e:
        raise DataReaderError(f"Failed to read {path}: {e}", source=path, cause=e)


def _check_columns(raw: pd.DataFrame, required: List[str], path: str) -> None:
    missing = [c for c in required if c not in raw.columns]
    if missing:
        raise SchemaValidationError(
            f"Missing required columns in {path}: {missing}",
            expected_schema={'columns': required},
            actual_schema={'columns': list(raw.columns)},
        )


def _missing_value_errors(raw: pd.DataFrame, columns: List[str]) -> List[Dict[str, Any]]:
    errors = []
    for name in columns:
        mask = raw[name].isna()
        if mask.any():
            errors.append({
                'column': name,
                'error': 'missing_values',
                'count': int(mask.sum()),
                'lines': _line_numbers(mask),
            })
    return errors


def _coerce_numeric(raw: pd.Series, errors: List[Dict[str, Any]]) -> pd.Series:
    values = pd.to_numeric(raw, errors='coerce')
    bad = values.isna() & raw.notna()
    if bad.any():
        errors.append({
            'column': raw.name,
            'error': 'non_numeric',
            'count': int(bad.sum()),
            'lines': _line_numbers(bad),
            'values': raw[bad].head(_MAX_EXAMPLES).tolist(),
        })
    return values.astype(float)


def _coerce_categorical(
    raw: pd.Series,
    levels: List[str],
    errors: List[Dict[str, Any]],
) -> pd.Series:
    by_text = {_normalize_level(level): level for level in levels}
    normalized = raw.map(lambda v: v if pd.isna(v) else by_text.get(_normalize_level(v)))
    unknown = normalized.isna() & raw.notna()
    if unknown.any():
        errors.append({
            'column': raw.name,
            'error': 'unknown_level',
            'count': int(unknown.sum()),
            'lines': _line_numbers(unknown),
            'values': sorted(set(raw[unknown].tolist()))[:_MAX_EXAMPLES],
            'allowed': list(levels),
        })
    return pd.Series(
        pd.Categorical(normalized, categories=list(levels)),
        index=raw.index,
        name=raw.name,
    )


def _type_features(raw: pd.DataFrame, schema: DatasetSchema, path: str) -> pd.DataFrame:
    """Apply the schema to the feature columns, collecting every problem first."""
    errors = _missing_value_errors(raw, schema.feature_names)
    typed = {}
    for column in schema.columns:
        if column.is_categorical:
            typed[column.name] = _coerce_categorical(raw[column.name], list(column.levels), errors)
        else:
            typed[column.name] = _coerce_numeric(raw[column.name], errors)

    if any(e['error'] == 'unknown_level' for e in errors):
        raise SchemaValidationError(
            f"Categorical values outside the declared levels in {path}",
            validation_errors=errors,
            details={'errors': errors},
        )
    if errors:
        raise DataValidationError(
            f"Invalid values in {path}",
            validation_errors=errors,
            details={'errors': errors},
        )

    return pd.DataFrame(typed, index=raw.index)[schema.feature_names]


def _type_labels(raw: pd.Series, schema: DatasetSchema, path: str) -> pd.Series:
    label = schema.label
    if raw.isna().any():
        raise DataValidationError(
            f"Missing label values in {path}",
            validation_errors=[{
                'column': label.column,
                'error': 'missing_values',
                'lines': _line_numbers(raw.isna()),
            }],
        )

    by_text = {str(v): index for index, v in enumerate(label.values)}
    encoded = raw.map(lambda v: by_text.get(_normalize_level(v)))
    unknown = encoded.isna()
    if unknown.any():
        raise DataValidationError(
            f"Label values outside {list(label.values)} in {path}",
            validation_errors=[{
                'column': label.column,
                'error': 'unknown_label',
                'lines': _line_numbers(unknown),
                'values': sorted(set(raw[unknown].tolist()))[:_MAX_EXAMPLES],
            }],
        )
    return encoded.astype(int).rename(label.column)


def _type_ids(raw: pd.Series, path: str) -> pd.Series:
    ids = raw.str.strip()
    if ids.isna().any():
        raise DataValidationError(
            f"Missing ids in {path}",
            validation_errors=[{
                'column': raw.name,
                'error': 'missing_values',
                'lines': _line_numbers(ids.isna()),
            }],
        )
    duplicated = ids.duplicated(keep=False)
    if duplicated.any():
        raise DataValidationError(
            f"Duplicate ids in {path}",
            validation_errors=[{
                'column': raw.name,
                'error': 'duplicate_ids',
                'lines': _line_numbers(duplicated),
                'values': sorted(set(ids[duplicated].tolist()))[:_MAX_EXAMPLES],
            }],
        )
    return ids


def load_dataset(
    path: str,
    schema: DatasetSchema,
    require_labels: bool = False,
    require_ids: bool = False,
    delimiter: str = ',',
) -> Dataset:
    """
    Load a delimited file and type it against a schema.

    Columns not declared in the schema (other than the label and id) are
    ignored. An id column that is present but not required is still kept.

    Args:
        path: Path to the delimited file (header row required).
        schema: Schema shared by every dataset of the run.
        require_labels: Fail if the label column is absent.
        require_ids: Fail if the id column is absent.
        delimiter: Field delimiter.

    Returns:
        Typed Dataset.

    Raises:
        DataReaderError: If the file cannot be read.
        SchemaValidationError: On missing columns or undeclared categorical levels.
        DataValidationError: On non-numeric, missing, duplicate or unknown label values.
    """
    path = str(path)
    logger.info(f"Loading data from {path}")
    raw = _read_table(path, delimiter)
    raw.columns = [str(c).strip() for c in raw.columns]

    required = list(schema.feature_names)
    if require_labels:
        required.append(schema.label.column)
    if require_ids:
        required.append(schema.id_column)
    _check_columns(raw, required, path)
    if raw.empty:
        raise DataValidationError(
            f"No records in {path}",
            details={'path': path, 'columns': list(raw.columns)},
        )

    features = _type_features(raw, schema, path)

    labels = None
    if require_labels:
        labels = _type_labels(raw[schema.label.column], schema, path)

    ids = None
    if schema.id_column in raw.columns:
        ids = _type_ids(raw[schema.id_column], path)

    dataset = Dataset(
        features=features.reset_index(drop=True),
        schema=schema,
        labels=labels.reset_index(drop=True) if labels is not None else None,
        ids=ids.reset_index(drop=True) if ids is not None else None,
        source=path,
    )

    logger.info(f"Loaded {dataset.n_records:,} rows, {len(schema.feature_names)} feature columns")
    if dataset.default_rate is not None:
        logger.info(f"Default rate: {dataset.default_rate:.2%}")
    return dataset


def load_training_data(path: str, schema: DatasetSchema, delimiter: str = ',') -> Dataset:
    """Load the labeled training file."""
    return load_dataset(path, schema, require_labels=True, delimiter=delimiter)


def load_scoring_data(path: str, schema: DatasetSchema, delimiter: str = ',') -> Dataset:
    """Load the unlabeled scoring file; ids are required."""
    return load_dataset(path, schema, require_ids=True, delimiter=delimiter)
