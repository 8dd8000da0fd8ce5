# Copyright 2024 OptionRank Contributors
# SPDX-License-Identifier: Apache-2.0

"""
Exception hierarchy for OptionRank.

All OptionRank-specific exceptions inherit from OptionRankError and carry an
error code plus keyword context for logging.

Usage:
    from optionrank.core.errors import ValidationError

    if not symbols:
        raise ValidationError("No symbols supplied", raw=raw)
"""

from typing import Any, Dict, Optional


class OptionRankError(Exception):
    """
    Base exception for all OptionRank errors.

    Provides structured error information including error codes and context.
    """

    error_code: str = "OR000"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        **context: Any,
    ):
        """
        Initialize OptionRankError.

        Args:
            message: Human-readable error message
            error_code: Optional specific error code (overrides class default)
            **context: Additional context key-value pairs for debugging
        """
        self.message = message
        self.error_code = error_code or self.__class__.error_code
        self.context: Dict[str, Any] = context

        full_message = f"[{self.error_code}] {message}"
        if context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in context.items())
            full_message += f" ({context_str})"

        super().__init__(full_message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class DataError(OptionRankError):
    """
    Error related to market data.

    Use for:
    - Transport failures talking to the provider
    - Unrecognized response payloads
    - Missing prices for the requested date
    """

    error_code: str = "OR100"
    status_code: int = 502


class ValidationError(OptionRankError):
    """
    Error related to request validation.

    Use for:
    - Empty symbol lists
    - Unknown ranking strategies
    - Malformed dates
    """

    error_code: str = "OR200"
    status_code: int = 400


class CalendarError(ValidationError):
    """Error resolving trading sessions (unsupported exchange, out-of-range date)."""

    error_code: str = "OR210"


class ConfigurationError(OptionRankError):
    """Error related to configuration (missing API key, bad settings)."""

    error_code: str = "OR300"
    status_code: int = 500


# Error code reference:
# OR000 - General/Unknown errors
# OR1xx - Data errors
# OR2xx - Validation errors (OR210 calendar)
# OR3xx - Configuration errors
