"""
Integration Tests for End-to-End Pipeline

Runs the full pipeline and the CLI on small synthetic files, verifying the
prediction file, run artifacts and reproducibility.
"""

import importlib.util
import json
from pathlib import Path

import pandas as pd
import pytest
import yaml

from credit_default.config.schema import PipelineConfig
from credit_default.pipeline.orchestrator import DefaultPredictionPipeline


pytestmark = pytest.mark.usefixtures("isolated_logging")

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "run_default_prediction.py"


def _load_cli():
    spec = importlib.util.spec_from_file_location("run_default_prediction", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def tiny_files(tmp_path, credit_records, csv_writer):
    """10 balanced training records and 3 scoring records."""
    train = csv_writer(credit_records(10, seed=3, balanced=True), tmp_path / "data" / "train.csv")
    score = csv_writer(
        credit_records(3, seed=5, with_labels=False, with_ids=True),
        tmp_path / "data" / "score.csv",
    )
    return train, score


@pytest.fixture
def tiny_config_dict(fast_config_dict):
    """Default 10-fold setup with every candidate enabled."""
    fast_config_dict["cross_validation"] = {"n_folds": 10, "seed": 407267}
    return fast_config_dict


@pytest.mark.integration
class TestEndToEnd:
    """Full pipeline runs on the 10-record training file."""

    def test_two_runs_byte_identical(self, tiny_files, tiny_config_dict, tmp_path):
        outputs = []
        for run in ("first", "second"):
            config_dict = dict(tiny_config_dict)
            config_dict["output"] = dict(
                tiny_config_dict["output"],
                predictions_path=str(tmp_path / run / "predictions.csv"),
            )
            result = DefaultPredictionPipeline(PipelineConfig(**config_dict)).run()
            outputs.append(Path(result.predictions_path).read_bytes())

        assert outputs[0] == outputs[1]

    def test_prediction_file_contract(self, tiny_files, tiny_config_dict):
        _, score_path = tiny_files

        result = DefaultPredictionPipeline(PipelineConfig(**tiny_config_dict)).run()

        written = pd.read_csv(result.predictions_path, dtype={"id": str})
        expected_ids = pd.read_csv(score_path, dtype={"id": str})["id"]
        assert list(written.columns) == ["id", "default"]
        assert len(written) == 3
        assert written["id"].tolist() == expected_ids.tolist()
        assert written["default"].between(0.0, 1.0).all()

    def test_every_enabled_candidate_compared(self, tiny_files, tiny_config_dict):
        result = DefaultPredictionPipeline(PipelineConfig(**tiny_config_dict)).run()

        assert [t.algorithm for t in result.trials] == [
            "logistic_regression", "lda", "qda", "random_forest", "gradient_boosting",
        ]
        for trial in result.trials:
            assert trial.n_folds == 10
            assert len(trial.fold_accuracies) == 10
            assert trial.misclassification_rate == 1.0 - trial.accuracy
        best_rate = min(t.misclassification_rate for t in result.trials)
        assert result.selected.misclassification_rate == best_rate


@pytest.mark.integration
class TestCommandLine:
    """The CLI script end to end."""

    def test_cli_success(self, tiny_files, tiny_config_dict, tmp_path, capsys):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump(tiny_config_dict), encoding="utf-8")
        output = tmp_path / "cli" / "predictions.csv"

        exit_code = _load_cli().main([
            "--config", str(config_path),
            "--output", str(output),
            "--n-folds", "5",
            "--algorithms", "lda", "logistic_regression",
        ])

        assert exit_code == 0
        assert output.exists()
        assert "Pipeline completed: success" in capsys.readouterr().out

        run_dirs = list((tmp_path / "runs").iterdir())
        snapshot = yaml.safe_load((run_dirs[0] / "config" / "pipeline_config.yaml").read_text())
        assert snapshot["cross_validation"]["n_folds"] == 5
        metadata = json.loads((run_dirs[0] / "run_metadata.json").read_text())
        assert [t["algorithm"] for t in metadata["trials"]] == ["lda", "logistic_regression"]

    def test_cli_missing_input_exits_one(self, tmp_path, tiny_config_dict):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump(tiny_config_dict), encoding="utf-8")

        exit_code = _load_cli().main([
            "--config", str(config_path),
            "--train", str(tmp_path / "missing.csv"),
        ])

        assert exit_code == 1

    def test_cli_missing_config_exits_one(self, tmp_path):
        assert _load_cli().main(["--config", str(tmp_path / "nope.yaml")]) == 1

    def test_cli_header_only_training_file_exits_one(self, tmp_path, tiny_config_dict, credit_records):
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump(tiny_config_dict), encoding="utf-8")
        empty_train = tmp_path / "empty_train.csv"
        credit_records(1).iloc[:0].to_csv(empty_train, index=False)

        exit_code = _load_cli().main([
            "--config", str(config_path),
            "--train", str(empty_train),
        ])

        assert exit_code == 1
        run_dirs = list((tmp_path / "runs").iterdir())
        metadata = json.loads((run_dirs[0] / "run_metadata.json").read_text())
        assert metadata["status"] == "failed"

    def test_cli_rejects_disabled_algorithm(self, tmp_path, tiny_config_dict):
        tiny_config_dict["models"]["qda"] = {"enabled": False}
        config_path = tmp_path / "config.yaml"
        config_path.write_text(yaml.safe_dump(tiny_config_dict), encoding="utf-8")

        exit_code = _load_cli().main([
            "--config", str(config_path),
            "--algorithms", "lda", "qda",
        ])

        assert exit_code == 1
        assert not (tmp_path / "runs").exists()
