"""
Pipeline Module

Model trials, selection, final fit, scoring and end-to-end orchestration.
"""

from credit_default.pipeline.trials import TrialResult, run_trial, run_trials
from credit_default.pipeline.selector import select_best, comparison_table
from credit_default.pipeline.final_fitter import fit_final_model
from credit_default.pipeline.scorer import score_dataset
from credit_default.pipeline.orchestrator import DefaultPredictionPipeline, PipelineResult

__all__ = [
    "TrialResult",
    "run_trial",
    "run_trials",
    "select_best",
    "comparison_table",
    "fit_final_model",
    "score_dataset",
    "DefaultPredictionPipeline",
    "PipelineResult",
]
