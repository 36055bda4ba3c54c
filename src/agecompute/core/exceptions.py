"""
Custom exceptions for AgeCompute.

Exception hierarchy:
    AgeComputeError (base)
    ├── ConfigurationError
    ├── AuthenticationError
    └── InsightError

The age calculation core never raises; these cover configuration and the
narrative (insight) collaborator only.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class AgeComputeError(Exception):
    """Base exception for all AgeCompute errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            details: Additional error details (optional)
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(AgeComputeError):
    """
    Raised when configuration is invalid or missing.

    Examples:
        - Missing config file passed explicitly
        - Invalid YAML syntax
    """

    pass


class AuthenticationError(AgeComputeError):
    """
    Raised when credentials for an external service are missing or rejected.

    Examples:
        - ANTHROPIC_API_KEY not set
    """

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize authentication error.

        Args:
            message: Error message
            service: Service that failed authentication (e.g., "anthropic")
            details: Additional error details
        """
        super().__init__(message, details)
        self.service = service

    def __str__(self) -> str:
        if self.service:
            return f"[{self.service}] {self.message}"
        return self.message


class InsightFailure(Enum):
    """Why a cultural insight could not be produced."""
    NOT_CONFIGURED = "not_configured"  # no API key
    NETWORK = "network"                # connection error or timeout
    NON_SUCCESS = "non_success"        # non-2xx response
    MALFORMED = "malformed"            # bad JSON or missing fields


class InsightError(AgeComputeError):
    """
    Raised when the narrative collaborator fails.

    All kinds are treated the same way by callers ("insight unavailable");
    the kind is kept for diagnostics.
    """

    def __init__(
        self,
        message: str,
        kind: InsightFailure,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize insight error.

        Args:
            message: Error message
            kind: Failure category
            status_code: HTTP status code if applicable
            details: Additional error details
        """
        super().__init__(message, details)
        self.kind = kind
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [f"[{self.kind.value}]"]
        if self.status_code:
            parts.append(f"HTTP {self.status_code}:")
        parts.append(self.message)
        return " ".join(parts)
