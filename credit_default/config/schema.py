"""
Pydantic Configuration Schema

Defines all configuration models for the default prediction pipeline.
All fields have defaults reproducing the credit default competition run.
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from credit_default.core.exceptions import ConfigurationError


NUMERIC_COLUMNS = (
    ["limit_bal", "age"]
    + [f"bill_amt{i}" for i in range(1, 7)]
    + [f"pay_amt{i}" for i in range(1, 7)]
)


class DataConfig(BaseModel):
    """Input file configuration."""

    model_config = {"frozen": True}

    train_path: str = "data/final_train.csv"
    scoring_path: str = "data/final_compete.csv"
    id_column: str = "id"
    target_column: str = "default"
    delimiter: str = ","


class ColumnConfig(BaseModel):
    """Declared type of a single feature column."""

    model_config = {"frozen": True}

    name: str
    type: Literal["numeric", "categorical"] = "numeric"
    levels: Optional[List[str]] = None

    @field_validator("levels", mode="before")
    @classmethod
    def levels_as_strings(cls, value: Any) -> Any:
        if value is None:
            return value
        return [str(v) for v in value]

    @model_validator(mode="after")
    def levels_match_type(self) -> "ColumnConfig":
        if self.type == "categorical":
            if not self.levels:
                raise ValueError(f"Categorical column '{self.name}' needs levels")
            if len(set(self.levels)) != len(self.levels):
                raise ValueError(f"Duplicate levels for column '{self.name}': {self.levels}")
        elif self.levels:
            raise ValueError(f"Numeric column '{self.name}' cannot declare levels")
        return self


def _default_columns() -> List[ColumnConfig]:
    columns = [ColumnConfig(name="limit_bal")]
    columns.append(ColumnConfig(name="sex", type="categorical", levels=["1", "2"]))
    columns.append(
        ColumnConfig(name="education", type="categorical", levels=["1", "2", "3", "4"])
    )
    columns.append(ColumnConfig(name="marriage", type="categorical", levels=["1", "2", "3"]))
    columns.extend(ColumnConfig(name=name) for name in NUMERIC_COLUMNS[1:])
    return columns


class LabelConfig(BaseModel):
    """Binary label declaration: raw values and display names, negative first."""

    model_config = {"frozen": True}

    values: List[int] = Field(default_factory=lambda: [0, 1])
    names: List[str] = Field(default_factory=lambda: ["not_default", "default"])

    @model_validator(mode="after")
    def two_distinct_values(self) -> "LabelConfig":
        if len(self.values) != 2 or self.values[0] == self.values[1]:
            raise ValueError(f"Label needs exactly two distinct values, got {self.values}")
        if len(self.names) != 2 or self.names[0] == self.names[1]:
            raise ValueError(f"Label needs exactly two distinct names, got {self.names}")
        return self


class CrossValidationConfig(BaseModel):
    """K-fold cross-validation configuration."""

    model_config = {"frozen": True}

    n_folds: int = Field(default=10, ge=2)
    seed: int = 407267
    stratify: bool = True
    n_jobs: int = 1


class AlgorithmConfig(BaseModel):
    """Configuration of one candidate algorithm.

    ``default_params`` replaces the model's built-in defaults when given;
    ``param_grid`` is swept under cross-validation (empty means a single fit).
    """

    model_config = {"frozen": True}

    enabled: bool = True
    default_params: Optional[Dict[str, Any]] = None
    param_grid: Dict[str, List[Any]] = Field(default_factory=dict)

    def to_model_config(self) -> Dict[str, Any]:
        """Dict form consumed by the model classes."""
        config: Dict[str, Any] = {"tuning": {"param_grid": dict(self.param_grid)}}
        if self.default_params is not None:
            config["default_params"] = dict(self.default_params)
        return config


class ModelsConfig(BaseModel):
    """Candidate algorithms, compared in declaration order."""

    model_config = {"frozen": True}

    logistic_regression: AlgorithmConfig = Field(default_factory=AlgorithmConfig)
    lda: AlgorithmConfig = Field(default_factory=AlgorithmConfig)
    qda: AlgorithmConfig = Field(default_factory=AlgorithmConfig)
    random_forest: AlgorithmConfig = Field(
        default_factory=lambda: AlgorithmConfig(
            param_grid={"max_features": [2, 4, 6, None]}
        )
    )
    gradient_boosting: AlgorithmConfig = Field(
        default_factory=lambda: AlgorithmConfig(
            param_grid={
                "n_estimators": [50 * i for i in range(1, 11)],
                "max_depth": [3, 4, 5],
                "learning_rate": [0.1, 0.01, 0.001],
                "min_samples_leaf": [15],
            }
        )
    )

    def enabled_algorithms(self) -> List[str]:
        """Names of enabled algorithms in declaration order."""
        return [
            name for name in type(self).model_fields
            if getattr(self, name).enabled
        ]

    def get(self, algorithm: str) -> AlgorithmConfig:
        if algorithm not in type(self).model_fields:
            raise ConfigurationError(
                f"Unknown algorithm: {algorithm}. "
                f"Available: {list(type(self).model_fields)}"
            )
        return getattr(self, algorithm)


class OutputConfig(BaseModel):
    """Output configuration."""

    model_config = {"frozen": True}

    base_dir: str = "outputs/default_prediction"
    predictions_path: str = "outputs/predictions.csv"
    id_header: str = "id"
    probability_header: str = "default"
    save_trials: bool = True
    save_model: bool = True


class ReproducibilityConfig(BaseModel):
    """Reproducibility and logging configuration."""

    model_config = {"frozen": True}

    save_config: bool = True
    save_metadata: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


class PipelineConfig(BaseModel):
    """Top-level pipeline configuration combining all sections."""

    model_config = {"frozen": True}

    data: DataConfig = Field(default_factory=DataConfig)
    columns: List[ColumnConfig] = Field(default_factory=_default_columns)
    label: LabelConfig = Field(default_factory=LabelConfig)
    cross_validation: CrossValidationConfig = Field(default_factory=CrossValidationConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    reproducibility: ReproducibilityConfig = Field(default_factory=ReproducibilityConfig)

    @model_validator(mode="after")
    def columns_unique(self) -> "PipelineConfig":
        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column declarations: {names}")
        reserved = {self.data.id_column, self.data.target_column} & set(names)
        if reserved:
            raise ValueError(f"Id/target columns cannot be declared as features: {sorted(reserved)}")
        return self
