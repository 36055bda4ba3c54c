"""Age and lunar calendar calculation core."""

from agecompute.age.engine import (
    ZODIAC_ANIMALS,
    AgeEngine,
    AgeFacts,
    compute_age_facts,
    zodiac_of,
)
from agecompute.age.lunar import (
    CalendarConverter,
    format_full_date,
    lunar_label_of,
    lunar_year_of,
)

__all__ = [
    "ZODIAC_ANIMALS",
    "AgeEngine",
    "AgeFacts",
    "CalendarConverter",
    "compute_age_facts",
    "format_full_date",
    "lunar_label_of",
    "lunar_year_of",
    "zodiac_of",
]
