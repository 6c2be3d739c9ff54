"""
Pipeline Orchestrator

Runs the default prediction pipeline end to end: load both datasets, run
the cross-validated trials, select the best algorithm, refit it on all
training records, score the scoring records and write the predictions.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import logging
import time

import pandas as pd

from credit_default.config.schema import PipelineConfig
from credit_default.core.exceptions import PipelineException
from credit_default.core.logger import PipelineLogger, setup_logging
from credit_default.data.loader import Dataset, load_scoring_data, load_training_data
from credit_default.data.schema import DatasetSchema
from credit_default.io.output_manager import OutputManager
from credit_default.io.prediction_writer import write_predictions
from credit_default.models.base_model import BaseModel
from credit_default.pipeline.final_fitter import fit_final_model
from credit_default.pipeline.scorer import score_dataset
from credit_default.pipeline.selector import comparison_table, select_best
from credit_default.pipeline.trials import TrialResult, run_trials


logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Aggregate result of a full pipeline run.

    Attributes:
        trials: Trial results in run order.
        selected: The trial with the lowest misclassification rate.
        comparison: Ranked comparison table of all trials.
        final_model: Model refit on every training record.
        predictions: Scored (id, probability) rows in scoring order.
        predictions_path: Where the predictions were written.
        run_dir: Run directory holding the artifacts.
        total_duration: Total wall-clock time in seconds.
        status: 'success' or 'failed'.
    """

    trials: List[TrialResult] = field(default_factory=list)
    selected: Optional[TrialResult] = None
    comparison: Optional[pd.DataFrame] = None
    final_model: Optional[BaseModel] = None
    predictions: Optional[pd.DataFrame] = None
    predictions_path: Optional[Path] = None
    run_dir: Optional[Path] = None
    total_duration: float = 0.0
    status: str = "pending"

    def summary(self) -> str:
        """Human-readable multi-line summary of the full run."""
        lines = [f"Pipeline {self.status} in {self.total_duration:.1f}s"]
        for trial in self.trials:
            lines.append(f"  {trial.summary()}")
        if self.selected is not None:
            lines.append(
                f"  Selected: {self.selected.algorithm} "
                f"(misclassification rate {self.selected.misclassification_rate:.7f})"
            )
        if self.predictions_path is not None:
            lines.append(f"  Predictions: {self.predictions_path}")
        return "\n".join(lines)


class DefaultPredictionPipeline:
    """Orchestrates the default prediction pipeline.

    Args:
        config: Frozen pipeline configuration.
        output_manager: OutputManager for the current run. Created from the
            config when not given.
        algorithms: Subset of candidate algorithms to compare. Defaults to
            every enabled algorithm in the config.
    """

    def __init__(
        self,
        config: PipelineConfig,
        output_manager: Optional[OutputManager] = None,
        algorithms: Optional[List[str]] = None,
    ):
        self._config = config
        self._output_manager = output_manager or OutputManager(config)
        self._algorithms = algorithms
        self._schema = DatasetSchema.from_config(config)
        self._log = PipelineLogger(__name__)
        self._setup_logging()

    @property
    def output_manager(self) -> OutputManager:
        return self._output_manager

    @property
    def schema(self) -> DatasetSchema:
        return self._schema

    def _setup_logging(self) -> None:
        """Configure file and console logging for this run."""
        setup_logging(
            log_level=self._config.reproducibility.log_level,
            log_file=str(self._output_manager.get_log_path()),
        )
        self._log.set_context(run_id=self._output_manager.run_id)
        self._log.info(f"INIT | Output directory: {self._output_manager.run_dir}")

    def load_data(self):
        """Load the training and scoring datasets against the shared schema."""
        data_cfg = self._config.data
        train = load_training_data(data_cfg.train_path, self._schema, data_cfg.delimiter)
        self._log.data_stats("train", train.n_records, len(self._schema.feature_names))
        self._log.metric("train_default_rate", round(train.default_rate, 6))

        scoring = load_scoring_data(data_cfg.scoring_path, self._schema, data_cfg.delimiter)
        self._log.data_stats("scoring", scoring.n_records, len(self._schema.feature_names))
        return train, scoring

    def run(self) -> PipelineResult:
        """Run every step in order.

        Returns:
            PipelineResult with trials, selection and predictions.

        Raises:
            PipelineException: Any step failure. The run is marked failed and
                its metadata saved before the exception propagates.
        """
        result = PipelineResult(run_dir=self._output_manager.run_dir)
        start = time.perf_counter()

        try:
            if self._config.reproducibility.save_config:
                self._output_manager.save_config_snapshot(self._config)

            train, scoring = self._timed("Load data", self.load_data)

            result.trials = self._timed(
                "Model trials",
                lambda: run_trials(train, self._config, self._algorithms),
            )
            result.selected = select_best(result.trials)
            result.comparison = comparison_table(result.trials)
            self._log.metric("selected_algorithm", result.selected.algorithm)
            self._log.metric(
                "selected_misclassification_rate",
                f"{result.selected.misclassification_rate:.7f}",
            )
            if self._config.output.save_trials:
                self._output_manager.save_trial_results(result.comparison)

            result.final_model = self._timed(
                "Final fit",
                lambda: self._fit_final(train, result.selected),
            )
            if self._config.output.save_model:
                result.final_model.save(str(self._output_manager.get_model_path()))

            result.predictions = self._timed(
                "Scoring",
                lambda: score_dataset(
                    result.final_model,
                    scoring,
                    id_header=self._config.output.id_header,
                    probability_header=self._config.output.probability_header,
                ),
            )
            result.predictions_path = write_predictions(
                result.predictions,
                self._config.output.predictions_path,
                delimiter=self._config.data.delimiter,
            )
        except PipelineException as e:
            result.status = "failed"
            result.total_duration = time.perf_counter() - start
            self._log.error(f"FAILED | {e}")
            self._output_manager.mark_failed()
            self._save_metadata(result)
            raise

        result.status = "success"
        result.total_duration = time.perf_counter() - start
        self._output_manager.mark_complete("success")
        self._save_metadata(result)
        self._log.info(f"DONE | {result.summary()}")
        return result

    def _fit_final(self, train: Dataset, selected: TrialResult) -> BaseModel:
        algorithm_config = self._config.models.get(selected.algorithm).to_model_config()
        return fit_final_model(train, selected, algorithm_config)

    def _timed(self, step_name: str, func):
        self._log.step_start(step_name)
        step_start = time.perf_counter()
        value = func()
        self._log.step_complete(step_name, time.perf_counter() - step_start)
        return value

    def _save_metadata(self, result: PipelineResult) -> None:
        if not self._config.reproducibility.save_metadata:
            return
        self._output_manager.add_metadata(
            selected_algorithm=result.selected.algorithm if result.selected else None,
            trials=[t.to_dict() for t in result.trials],
            predictions_path=str(result.predictions_path) if result.predictions_path else None,
        )
        self._output_manager.save_run_metadata()
