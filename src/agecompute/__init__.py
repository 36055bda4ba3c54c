"""
AgeCompute - Chinese age calculator.

Computes international age (周岁), nominal age (虚岁), zodiac animal (生肖),
days lived, days to the next birthday and lunar calendar dates from a
Gregorian birth date, with an optional Claude-generated cultural insight.
"""

__version__ = "1.0.0"

from agecompute.age.engine import AgeEngine, AgeFacts, compute_age_facts
from agecompute.age.lunar import CalendarConverter, lunar_label_of, lunar_year_of
from agecompute.core.config import Config
from agecompute.core.exceptions import (
    AgeComputeError,
    AuthenticationError,
    ConfigurationError,
    InsightError,
    InsightFailure,
)
from agecompute.cli.main import cli

__all__ = [
    "__version__",
    "AgeEngine",
    "AgeFacts",
    "CalendarConverter",
    "Config",
    "AgeComputeError",
    "AuthenticationError",
    "ConfigurationError",
    "InsightError",
    "InsightFailure",
    "cli",
    "compute_age_facts",
    "lunar_label_of",
    "lunar_year_of",
]
