"""
Spatial expression exception hierarchy with fuzzy-match suggestions.

All exceptions inherit from ``SpatialExpressionError`` and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any


class SpatialExpressionError(Exception):
    """Base exception for all spatial expression errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class ValidationError(SpatialExpressionError):
    """Parameters supplied for an operation failed validation."""

    def __init__(self, message: str, parameter: str | None = None) -> None:
        self.message = message
        self.parameter = parameter
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "parameter": self.parameter,
        }


class MissingParameterError(ValidationError):
    """A required parameter was left absent."""

    def __init__(self, operation: str, parameter: str) -> None:
        self.operation = operation
        super().__init__(
            f"Operation '{operation}' requires parameter '{parameter}'",
            parameter=parameter,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MISSING_PARAMETER",
            "operation": self.operation,
            "parameter": self.parameter,
        }


class MutuallyExclusiveParametersError(ValidationError):
    """
    Parameters occupying the same semantic role were supplied together.

    Raised for example when ``buffer`` receives ``num_seg_quarter_circle``
    together with any of its ``style_*`` parameters.
    """

    def __init__(self, operation: str, parameters: list[str]) -> None:
        self.operation = operation
        self.parameters = parameters
        super().__init__(
            f"Operation '{operation}' received mutually exclusive parameters: "
            f"{', '.join(parameters)}",
            parameter=parameters[0] if parameters else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "MUTUALLY_EXCLUSIVE_PARAMETERS",
            "operation": self.operation,
            "parameters": list(self.parameters),
        }


class UnknownParameterError(ValidationError):
    """
    Unknown keyword passed to an operation.

    Provides fuzzy-matched suggestions for likely intended parameters.
    """

    def __init__(self, operation: str, parameter: str, valid: list[str]) -> None:
        self.operation = operation
        self.valid_parameters = valid
        self.suggestions = get_close_matches(parameter, valid, n=3, cutoff=0.6)

        message = f"Unknown parameter '{parameter}' for operation '{operation}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        if valid:
            message += f" Valid parameters: {', '.join(sorted(valid))}"
        else:
            message += " The operation accepts no parameters."
        super().__init__(message, parameter=parameter)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_PARAMETER",
            "operation": self.operation,
            "parameter": self.parameter,
            "suggestions": self.suggestions,
            "valid_parameters": sorted(self.valid_parameters),
        }


class OperationNotFoundError(SpatialExpressionError):
    """
    Unknown spatial operation requested.

    Provides fuzzy-matched suggestions for likely intended operations.
    """

    def __init__(self, operation: str, valid_operations: list[str]) -> None:
        self.operation = operation
        self.valid_operations = valid_operations
        self.suggestions = get_close_matches(
            operation, valid_operations, n=3, cutoff=0.6
        )

        message = f"Unknown spatial operation: '{operation}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid operations: {', '.join(sorted(valid_operations)[:10])}..."
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OPERATION_NOT_FOUND",
            "operation": self.operation,
            "suggestions": self.suggestions,
            "valid_operations": sorted(self.valid_operations),
        }
