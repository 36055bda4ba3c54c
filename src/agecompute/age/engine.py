"""
Age Engine - 周岁、虚岁、生肖与生日倒计时

Derives the full set of age facts from a birth date and a reference moment.
The reference moment is always passed in; nothing here reads the clock.

Only the date portion of the reference moment participates, so all day
counts are whole days.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from agecompute.age.lunar import DateLike, LunarCalendar, as_date, default_converter

logger = logging.getLogger(__name__)

# Index 0 is the rat; lunar year 4 (and every 12 years from it) is a rat year
ZODIAC_ANIMALS = ("鼠", "牛", "虎", "兔", "龙", "蛇", "马", "羊", "猴", "鸡", "狗", "猪")
ZODIAC_OFFSET = 4


@dataclass(frozen=True)
class AgeFacts:
    """
    Age facts for one birth date at one reference moment.

    Attributes:
        international_age: 周岁, completed Gregorian years
        nominal_age: 虚岁, 1 at birth and +1 at every lunar new year
        days_lived: whole days between birth date and reference date
        zodiac_animal: 生肖 of the birth lunar year
        days_to_next_birthday: 0 when the birthday is today
        lunar_birth_date_label: lunar rendering of the birth date
        lunar_current_date_label: lunar rendering of the reference date
        solar_term: 节气 falling on the birth date, if any
    """
    international_age: int
    nominal_age: int
    days_lived: int
    zodiac_animal: str
    days_to_next_birthday: int
    lunar_birth_date_label: str
    lunar_current_date_label: str
    solar_term: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize with camelCase keys, matching the JSON output."""
        return {
            "internationalAge": self.international_age,
            "nominalAge": self.nominal_age,
            "daysLived": self.days_lived,
            "zodiacAnimal": self.zodiac_animal,
            "daysToNextBirthday": self.days_to_next_birthday,
            "lunarBirthDateLabel": self.lunar_birth_date_label,
            "lunarCurrentDateLabel": self.lunar_current_date_label,
            "solarTerm": self.solar_term,
        }


def zodiac_of(lunar_year: int) -> str:
    """Zodiac animal of a lunar year; index is always in [0, 11]."""
    return ZODIAC_ANIMALS[(lunar_year - ZODIAC_OFFSET) % 12]


def international_age(birth_date: date, today: date) -> int:
    """Completed years, borrowing one if this year's birthday is still ahead."""
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def birthday_in_year(birth_date: date, year: int) -> date:
    """
    Birthday observed in the given Gregorian year.

    A 29 February birthday falls on 1 March in common years, the same day
    international_age() starts counting the new year of age.
    """
    try:
        return birth_date.replace(year=year)
    except ValueError:
        return date(year, 3, 1)


def days_to_next_birthday(birth_date: date, today: date) -> int:
    candidate = birthday_in_year(birth_date, today.year)
    if candidate < today:
        candidate = birthday_in_year(birth_date, today.year + 1)
    return (candidate - today).days


class AgeEngine:
    """
    Computes AgeFacts using a lunar calendar converter.

    Usage:
        engine = AgeEngine()
        facts = engine.compute(date(1995, 1, 1), datetime.now())
    """

    def __init__(self, converter: Optional[LunarCalendar] = None):
        """
        Args:
            converter: Lunar calendar backend (defaults to lunar_python)
        """
        self.converter = converter or default_converter

    def compute(self, birth_date: DateLike, now: DateLike) -> AgeFacts:
        """
        Compute all age facts.

        Never raises for valid dates; a birth date after ``now`` still gets
        an answer and is left for the caller to judge.

        Args:
            birth_date: Gregorian birth date
            now: Reference moment, only its date is used

        Returns:
            AgeFacts value
        """
        birth = as_date(birth_date)
        today = as_date(now)

        birth_lunar_year = self.converter.lunar_year_of(birth)
        current_lunar_year = self.converter.lunar_year_of(today)

        solar_term_of = getattr(self.converter, "solar_term_of", None)
        solar_term = solar_term_of(birth) if solar_term_of else None

        facts = AgeFacts(
            international_age=international_age(birth, today),
            nominal_age=1 + (current_lunar_year - birth_lunar_year),
            days_lived=abs((today - birth).days),
            zodiac_animal=zodiac_of(birth_lunar_year),
            days_to_next_birthday=days_to_next_birthday(birth, today),
            lunar_birth_date_label=self.converter.lunar_label_of(birth),
            lunar_current_date_label=self.converter.lunar_label_of(today),
            solar_term=solar_term,
        )

        if birth > today:
            logger.debug("Birth date %s is after reference date %s", birth, today)
        logger.debug("Computed age facts for %s at %s: %s", birth, today, facts)
        return facts


def compute_age_facts(
    birth_date: DateLike,
    now: DateLike,
    converter: Optional[LunarCalendar] = None,
) -> AgeFacts:
    """Compute AgeFacts for ``birth_date`` as of ``now``."""
    return AgeEngine(converter).compute(birth_date, now)
