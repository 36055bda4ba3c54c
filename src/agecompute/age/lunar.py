"""
Lunar Calendar Converter - 公历转农历

Uses the lunar_python library to map a Gregorian date onto the Chinese
lunar calendar. The lunar year starts at the lunar new year (正月初一),
so January/February dates before it belong to the previous lunar year.

Conversion failures never propagate: the converter falls back to the
Gregorian year and a Gregorian date label.

Usage:
    from agecompute.age.lunar import lunar_year_of, lunar_label_of

    lunar_year_of(date(1995, 1, 1))   # 1994
    lunar_label_of(date(2024, 6, 15)) # "2024甲辰年五月初十 星期六"
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Protocol, Union

from lunar_python import Solar

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


class LunarCalendar(Protocol):
    """Anything that can place a Gregorian date in the lunar calendar."""

    def lunar_year_of(self, value: DateLike) -> int: ...

    def lunar_label_of(self, value: DateLike) -> str: ...


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def format_full_date(value: DateLike) -> str:
    """
    Gregorian long date in Chinese, e.g. "1995年1月1日".

    Used as the label when lunar conversion is unavailable.
    """
    d = as_date(value)
    return f"{d.year}年{d.month}月{d.day}日"


class CalendarConverter:
    """公历 → 农历 converter backed by lunar_python."""

    def _to_lunar(self, value: DateLike):
        d = as_date(value)
        return Solar.fromYmd(d.year, d.month, d.day).getLunar()

    def lunar_year_of(self, value: DateLike) -> int:
        """
        Lunar year number in effect on the given date.

        Args:
            value: Gregorian date (a datetime contributes its date only)

        Returns:
            Lunar year, or the Gregorian year if conversion fails
        """
        try:
            return int(self._to_lunar(value).getYear())
        except Exception as e:
            logger.warning("Lunar year conversion failed for %s: %s", value, e)
            return as_date(value).year

    def lunar_label_of(self, value: DateLike) -> str:
        """
        Full Chinese rendering of the lunar date.

        Format: "{year}{干支}年{月}月{日} 星期{周}", e.g.
        "2024甲辰年五月初十 星期六". Display only.

        Args:
            value: Gregorian date

        Returns:
            Lunar label, or a Gregorian label if conversion fails
        """
        try:
            lunar = self._to_lunar(value)
            return (
                f"{lunar.getYear()}{lunar.getYearInGanZhi()}年"
                f"{lunar.getMonthInChinese()}月{lunar.getDayInChinese()} "
                f"星期{lunar.getWeekInChinese()}"
            )
        except Exception as e:
            logger.warning("Lunar label conversion failed for %s: %s", value, e)
            return format_full_date(value)

    def solar_term_of(self, value: DateLike) -> Optional[str]:
        """
        节气 name if the date is a solar-term day.

        Returns:
            Solar term name (e.g. "立春"), None otherwise or on failure
        """
        try:
            term = self._to_lunar(value).getJieQi()
        except Exception as e:
            logger.warning("Solar term lookup failed for %s: %s", value, e)
            return None
        return term or None


# Shared default instance; the converter is stateless
default_converter = CalendarConverter()


def lunar_year_of(value: DateLike) -> int:
    """Lunar year of a Gregorian date using the default converter."""
    return default_converter.lunar_year_of(value)


def lunar_label_of(value: DateLike) -> str:
    """Lunar date label of a Gregorian date using the default converter."""
    return default_converter.lunar_label_of(value)
