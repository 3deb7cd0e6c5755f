"""Custom exception classes for the developer metrics engine.

All exceptions follow the engine error format:
{
    "error": {
        "code": "ENGINE_ERROR_CODE",
        "message": "Human-readable message",
        "details": {}  # optional
    }
}

Numeric edge cases (zero denominators, empty peer lists) never raise. Only
contract violations surface as errors.
"""

from __future__ import annotations

from typing import Any


class EngineBaseError(Exception):
    """Base exception for the developer metrics engine."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result


class ConfigurationError(EngineBaseError):
    """Engine settings are internally inconsistent."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code="INVALID_CONFIGURATION",
            message=message,
            details=details,
        )


class NoComparableMetricsError(EngineBaseError):
    """Two metric sets share no metric key, so nothing can be compared."""

    def __init__(
        self,
        left_keys: list[str] | None = None,
        right_keys: list[str] | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if left_keys is not None:
            details["left_metrics"] = left_keys
        if right_keys is not None:
            details["right_metrics"] = right_keys
        super().__init__(
            code="NO_COMPARABLE_METRICS",
            message="No comparable metrics between the two developers",
            details=details,
        )
