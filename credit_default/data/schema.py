"""
Dataset Schema

The explicit schema artifact shared by the training and scoring loads.
Categorical level orderings live here and nowhere else, so both datasets
are always typed and encoded against the same levels.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from credit_default.config.schema import PipelineConfig


NUMERIC = "numeric"
CATEGORICAL = "categorical"


@dataclass(frozen=True)
class ColumnSpec:
    """Declared semantic type of one feature column."""
    name: str
    kind: str = NUMERIC
    levels: Tuple[str, ...] = ()

    @property
    def is_categorical(self) -> bool:
        return self.kind == CATEGORICAL

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'name': self.name, 'type': self.kind}
        if self.levels:
            result['levels'] = list(self.levels)
        return result


@dataclass(frozen=True)
class LabelSpec:
    """
    Binary label as a two-value enumeration.

    Raw file values are mapped to class indices 0 (negative) and 1 (positive);
    models only ever see the indices. Names are used when a label has to be
    rendered, never for fitting.
    """
    column: str = 'default'
    values: Tuple[int, int] = (0, 1)
    names: Tuple[str, str] = ('not_default', 'default')

    @property
    def positive_value(self) -> int:
        return self.values[1]

    @property
    def positive_name(self) -> str:
        return self.names[1]

    def name_for(self, class_index: int) -> str:
        """Display name of a class index (0 or 1)."""
        return self.names[class_index]

    def encode(self, raw: pd.Series) -> pd.Series:
        """Map raw label values to class indices. Unknown values become NaN."""
        mapping = {value: index for index, value in enumerate(self.values)}
        return raw.map(mapping)


@dataclass(frozen=True)
class DatasetSchema:
    """Ordered feature declarations plus the label and id columns."""
    columns: Tuple[ColumnSpec, ...]
    label: LabelSpec = field(default_factory=LabelSpec)
    id_column: str = 'id'

    @property
    def feature_names(self) -> List[str]:
        return [c.name for c in self.columns]

    @property
    def categorical_columns(self) -> List[ColumnSpec]:
        return [c for c in self.columns if c.is_categorical]

    @property
    def numeric_columns(self) -> List[ColumnSpec]:
        return [c for c in self.columns if not c.is_categorical]

    def get(self, name: str) -> Optional[ColumnSpec]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'columns': [c.to_dict() for c in self.columns],
            'label': {
                'column': self.label.column,
                'values': list(self.label.values),
                'names': list(self.label.names),
            },
            'id_column': self.id_column,
        }

    @classmethod
    def from_config(cls, config: PipelineConfig) -> 'DatasetSchema':
        """Build the schema from the ``columns``, ``label`` and ``data`` sections."""
        columns = tuple(
            ColumnSpec(
                name=c.name,
                kind=c.type,
                levels=tuple(c.levels) if c.levels else (),
            )
            for c in config.columns
        )
        label = LabelSpec(
            column=config.data.target_column,
            values=tuple(config.label.values),
            names=tuple(config.label.names),
        )
        return cls(columns=columns, label=label, id_column=config.data.id_column)


CREDIT_SCHEMA = DatasetSchema.from_config(PipelineConfig())
