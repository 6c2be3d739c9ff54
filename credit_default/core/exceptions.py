"""
Custom Exceptions for the Pipeline

Provides a hierarchy of exceptions for the failure classes of a prediction run:
bad input files, model fitting failures, evaluation problems and output
write failures.
"""

from typing import Any, Dict, List, Optional


class PipelineException(Exception):
    """
    Base exception for all pipeline errors.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        result = self.message
        if self.details:
            result += f" | Details: {self.details}"
        if self.cause:
            result += f" | Caused by: {self.cause}"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None
        }


class ConfigurationError(PipelineException):
    """
    Raised when there's a configuration error.

    Examples:
    - Configuration file not found
    - Unknown algorithm requested
    - No candidate algorithm enabled
    """
    pass


class DataValidationError(PipelineException):
    """
    Raised when an input dataset is malformed.

    Examples:
    - Non-numeric value in a numeric column
    - Missing values
    - Duplicate record ids
    - Label values outside the declared label levels
    """

    def __init__(
        self,
        message: str,
        validation_errors: Optional[List[Dict[str, Any]]] = None,
        **kwargs
    ):
        """
        Initialize the data validation error.

        Args:
            message: Error message
            validation_errors: List of validation error details
            **kwargs: Additional arguments for parent class
        """
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors or []

    def __str__(self) -> str:
        result = super().__str__()
        if self.validation_errors:
            error_count = len(self.validation_errors)
            result += f" | {error_count} validation error(s)"
        return result


class SchemaValidationError(DataValidationError):
    """
    Raised when a dataset does not match its declared schema.

    Examples:
    - Missing columns
    - Categorical level outside the declared level set
    """

    def __init__(
        self,
        message: str,
        expected_schema: Optional[Dict[str, Any]] = None,
        actual_schema: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.expected_schema = expected_schema
        self.actual_schema = actual_schema


class DataReaderError(PipelineException):
    """
    Raised when an input file cannot be read.

    Examples:
    - File not found
    - Unparseable delimited text
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.source = source

    def __str__(self) -> str:
        result = super().__str__()
        if self.source:
            result += f" | Source: {self.source}"
        return result


class ModelTrainingError(PipelineException):
    """
    Raised when model training fails.

    Examples:
    - Library error while fitting
    - Prediction requested from an unfitted model
    - Invalid hyperparameters
    """

    def __init__(
        self,
        message: str,
        model_name: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.model_name = model_name

    def __str__(self) -> str:
        result = super().__str__()
        if self.model_name:
            result += f" | Model: {self.model_name}"
        return result


class HyperparameterTuningError(ModelTrainingError):
    """
    Raised when a cross-validated trial fails.

    Examples:
    - Every fold failed to fit
    - Invalid parameter grid
    """
    pass


class EvaluationError(PipelineException):
    """
    Raised when model evaluation or selection fails.

    Examples:
    - No trial results to select from
    - Probabilities outside [0, 1]
    """

    def __init__(
        self,
        message: str,
        metric_name: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.metric_name = metric_name


class ArtifactError(PipelineException):
    """
    Raised when artifact operations fail.

    Examples:
    - Prediction file cannot be written
    - Model save/load error
    """

    def __init__(
        self,
        message: str,
        artifact_path: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.artifact_path = artifact_path
