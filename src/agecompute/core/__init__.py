"""Core modules for AgeCompute."""

from agecompute.core.config import Config
from agecompute.core.exceptions import (
    AgeComputeError,
    AuthenticationError,
    ConfigurationError,
    InsightError,
    InsightFailure,
)

__all__ = [
    "Config",
    "AgeComputeError",
    "AuthenticationError",
    "ConfigurationError",
    "InsightError",
    "InsightFailure",
]
