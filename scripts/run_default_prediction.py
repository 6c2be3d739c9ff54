#!/usr/bin/env python3
"""
Default Prediction CLI

Usage:
    # Run with YAML config (recommended):
    python scripts/run_default_prediction.py --config config/default_prediction.yaml

    # Override specific settings via CLI:
    python scripts/run_default_prediction.py \
        --config config/default_prediction.yaml \
        --train data/final_train.csv \
        --scoring data/final_compete.csv \
        --output outputs/predictions.csv

    # Compare a subset of the candidates:
    python scripts/run_default_prediction.py --algorithms lda qda
"""

import sys
import argparse
from pathlib import Path

# Add project root to path
project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from pydantic import ValidationError

from credit_default.config.loader import load_config
from credit_default.core.exceptions import ConfigurationError, PipelineException
from credit_default.core.logger import get_logger
from credit_default.io.output_manager import OutputManager
from credit_default.models.model_factory import ModelFactory
from credit_default.pipeline.orchestrator import DefaultPredictionPipeline


logger = get_logger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Credit Card Default Prediction Pipeline',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        '--config', default=None,
        help='Path to YAML config file (e.g., config/default_prediction.yaml)',
    )

    # Data overrides
    parser.add_argument(
        '--train', default=None,
        help='Path to the labeled training file (overrides config)',
    )
    parser.add_argument(
        '--scoring', default=None,
        help='Path to the scoring file (overrides config)',
    )
    parser.add_argument(
        '--output', default=None,
        help='Path of the predictions file (overrides config)',
    )
    parser.add_argument(
        '--output-dir', default=None,
        help='Base directory for run artifacts',
    )

    # Cross-validation overrides
    parser.add_argument(
        '--n-folds', type=int, default=None,
        help='Number of cross-validation folds',
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Seed for fold assignment and stochastic estimators',
    )
    parser.add_argument(
        '--algorithms', nargs='+', default=None,
        choices=ModelFactory.list_models(),
        help='Subset of the enabled candidate algorithms to compare (default: all enabled)',
    )

    return parser.parse_args(argv)


def _build_cli_overrides(args) -> dict:
    """Build a flat dot-notation override dict from CLI args."""
    overrides = {}

    if args.train is not None:
        overrides["data.train_path"] = args.train
    if args.scoring is not None:
        overrides["data.scoring_path"] = args.scoring
    if args.output is not None:
        overrides["output.predictions_path"] = args.output
    if args.output_dir is not None:
        overrides["output.base_dir"] = args.output_dir
    if args.n_folds is not None:
        overrides["cross_validation.n_folds"] = args.n_folds
    if args.seed is not None:
        overrides["cross_validation.seed"] = args.seed

    return overrides


def _check_algorithms(config, algorithms) -> None:
    """Reject requested algorithms that the config does not enable."""
    enabled = config.models.enabled_algorithms()
    disabled = [name for name in algorithms or [] if name not in enabled]
    if disabled:
        raise ConfigurationError(
            f"Algorithms not enabled in config: {disabled}",
            details={"enabled": enabled},
        )


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        # Load config: YAML + CLI overrides
        config = load_config(yaml_path=args.config, cli_overrides=_build_cli_overrides(args))
        _check_algorithms(config, args.algorithms)

        output_manager = OutputManager(config)
        pipeline = DefaultPredictionPipeline(
            config,
            output_manager=output_manager,
            algorithms=args.algorithms,
        )
        result = pipeline.run()
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    except PipelineException as e:
        logger.error("Pipeline failed: %s", e)
        return 1

    print(f"\n{'='*60}")
    print(f"Pipeline completed: {result.status}")
    print(f"Selected algorithm: {result.selected.algorithm} "
          f"(misclassification rate {result.selected.misclassification_rate:.7f})")
    print(f"Predictions: {result.predictions_path}")
    print(f"Run directory: {output_manager.run_dir}")
    print(f"Log file: {output_manager.get_log_path()}")
    print(f"{'='*60}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
