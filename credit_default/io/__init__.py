"""
IO Module

Prediction file writing and run artifact management.
"""

from credit_default.io.output_manager import OutputManager
from credit_default.io.prediction_writer import write_predictions

__all__ = [
    "OutputManager",
    "write_predictions",
]
