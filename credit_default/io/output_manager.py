"""
Output Manager

Creates and manages the run directory structure, saves artifacts and metadata.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import hashlib
import json
import logging
import platform
import sys

import pandas as pd

from credit_default.config.schema import PipelineConfig
from credit_default.core.exceptions import ArtifactError


logger = logging.getLogger(__name__)

RUN_SUBDIRS = ["config", "reports", "models", "logs"]


def _get_package_version(package: str) -> str:
    """Get the version string of an installed package.

    Args:
        package: Distribution name.

    Returns:
        Version string, or 'not installed' if unavailable.
    """
    import importlib.metadata

    try:
        return importlib.metadata.version(package)
    except importlib.metadata.PackageNotFoundError:
        return "not installed"


def _compute_file_hash(input_path: str) -> str:
    """Compute the MD5 hash of an input file.

    Args:
        input_path: Path to the input file.

    Returns:
        MD5 hex digest, or 'missing' if the file does not exist.
    """
    p = Path(input_path)
    if not p.is_file():
        return "missing"

    digest = hashlib.md5()
    with open(p, "rb") as f:
        for chunk in iter(lambda: f.read(1 << 20), b""):
            digest.update(chunk)
    return digest.hexdigest()


class OutputManager:
    """Manages the output directory structure and artifact saving for a pipeline run.

    Creates a unique run directory under the configured base_dir with the structure:
        {base_dir}/{run_id}/
            config/
            reports/
            models/
            logs/

    The run_id format is {YYYYMMDD}_{HHMMSS}_{short_hash} where short_hash
    is derived from the config for uniqueness.

    Args:
        config: The pipeline configuration.
        run_start: Optional datetime for the run start. Defaults to now.
    """

    def __init__(self, config: PipelineConfig, run_start: Optional[datetime] = None):
        self._config = config
        self._run_start = run_start or datetime.now()
        self._run_end: Optional[datetime] = None
        self._status = "running"
        self._extra: Dict[str, Any] = {}

        config_json = config.model_dump_json()
        short_hash = hashlib.md5(config_json.encode()).hexdigest()[:6]
        timestamp = self._run_start.strftime("%Y%m%d_%H%M%S")
        self._run_id = f"{timestamp}_{short_hash}"

        self._base_dir = Path(config.output.base_dir)
        self._run_dir = self._base_dir / self._run_id
        self._create_directories()

        logger.info("Output directory: %s", self._run_dir)

    @property
    def run_id(self) -> str:
        """The unique identifier for this run."""
        return self._run_id

    @property
    def run_dir(self) -> Path:
        """Root directory for this run."""
        return self._run_dir

    @property
    def status(self) -> str:
        return self._status

    def _create_directories(self) -> None:
        try:
            for subdir in RUN_SUBDIRS:
                (self._run_dir / subdir).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArtifactError(
                f"Cannot create run directory: {e}",
                artifact_path=str(self._run_dir),
                cause=e,
            )

    def save_config_snapshot(self, config: PipelineConfig) -> Path:
        """Save the frozen config to the run directory.

        Args:
            config: The pipeline configuration to snapshot.

        Returns:
            Path to the saved config file.
        """
        from credit_default.config.loader import save_config

        config_path = self._run_dir / "config" / "pipeline_config.yaml"
        save_config(config, str(config_path))
        return config_path

    def save_trial_results(self, table: pd.DataFrame) -> Path:
        """Save the trial comparison table as CSV.

        Args:
            table: One row per trial.

        Returns:
            Path to the saved table.
        """
        path = self._run_dir / "reports" / "trial_results.csv"
        table.to_csv(path, index=False)
        logger.debug("Trial results saved to %s", path)
        return path

    def save_json(self, name: str, obj: Any, subdir: str = "reports") -> Path:
        """Save a JSON-serializable object to the run directory.

        Args:
            name: File name without extension.
            obj: Object to save.
            subdir: Subdirectory within the run dir.

        Returns:
            Path to the saved file.
        """
        target_dir = self._run_dir / subdir
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"{name}.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(obj, f, indent=2, default=str)
        logger.debug("Artifact saved: %s", path)
        return path

    def get_model_path(self) -> Path:
        """Path for the persisted final model."""
        return self._run_dir / "models" / "final_model.joblib"

    def get_log_path(self) -> Path:
        """Path for the run log file."""
        return self._run_dir / "logs" / "pipeline.log"

    def add_metadata(self, **values: Any) -> None:
        """Attach extra fields to the run metadata (e.g. selected algorithm)."""
        self._extra.update(values)

    def save_run_metadata(self) -> Path:
        """Collect and save run metadata to run_metadata.json.

        Includes package versions, OS info, timing, status and input hashes.

        Returns:
            Path to the metadata file.
        """
        self._run_end = self._run_end or datetime.now()
        duration = (self._run_end - self._run_start).total_seconds()

        metadata = {
            "run_id": self._run_id,
            "python_version": sys.version,
            "package_versions": {
                package: _get_package_version(package)
                for package in ("pandas", "numpy", "scikit-learn", "joblib", "pydantic")
            },
            "os_info": {
                "system": platform.system(),
                "release": platform.release(),
                "machine": platform.machine(),
            },
            "run_start": self._run_start.isoformat(),
            "run_end": self._run_end.isoformat(),
            "duration_seconds": round(duration, 2),
            "status": self._status,
            "input_file_hashes": {
                "train": _compute_file_hash(self._config.data.train_path),
                "scoring": _compute_file_hash(self._config.data.scoring_path),
            },
        }
        metadata.update(self._extra)

        path = self._run_dir / "run_metadata.json"
        with open(path, "w", encoding="utf-8") as f:
            json.dump(metadata, f, indent=2, default=str)

        logger.info("Run metadata saved to %s", path)
        return path

    def mark_complete(self, status: str = "success") -> None:
        """Mark the run as complete.

        Args:
            status: Final status ('success' or 'failed').
        """
        self._status = status
        self._run_end = datetime.now()

    def mark_failed(self) -> None:
        """Mark the run as failed."""
        self.mark_complete(status="failed")
