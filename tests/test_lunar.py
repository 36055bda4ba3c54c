"""
Tests for the lunar calendar converter.

Uses the real lunar_python backend; the fallback path is exercised by
patching the backend to fail.
"""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import patch

import pytest

from agecompute.age.lunar import (
    CalendarConverter,
    format_full_date,
    lunar_label_of,
    lunar_year_of,
)


@pytest.fixture
def converter():
    return CalendarConverter()


class TestLunarYear:
    """Tests for lunar_year_of()."""

    def test_mid_year_matches_gregorian_year(self, converter):
        """Should map a June date to the same-numbered lunar year."""
        assert converter.lunar_year_of(date(2024, 6, 15)) == 2024

    def test_early_january_belongs_to_previous_lunar_year(self, converter):
        """Should map dates before the lunar new year to the previous year."""
        # 1995 lunar new year fell on 31 January
        assert converter.lunar_year_of(date(1995, 1, 1)) == 1994

    @pytest.mark.parametrize(
        "eve, new_year",
        [
            (date(2023, 1, 21), date(2023, 1, 22)),
            (date(2024, 2, 9), date(2024, 2, 10)),
        ],
    )
    def test_year_changes_on_lunar_new_year(self, converter, eve, new_year):
        """Should switch lunar year exactly at 正月初一."""
        assert converter.lunar_year_of(eve) == new_year.year - 1
        assert converter.lunar_year_of(new_year) == new_year.year

    def test_accepts_datetime(self, converter):
        """Should use only the date portion of a datetime."""
        assert converter.lunar_year_of(datetime(2024, 2, 9, 23, 59)) == 2023

    def test_module_function_uses_default_converter(self):
        assert lunar_year_of(date(2024, 6, 15)) == 2024


class TestLunarLabel:
    """Tests for lunar_label_of()."""

    def test_label_is_non_empty(self, converter):
        label = converter.lunar_label_of(date(1995, 1, 1))
        assert isinstance(label, str)
        assert label

    def test_label_contains_lunar_year_and_ganzhi(self, converter):
        """Should render the lunar year number and its 干支."""
        label = converter.lunar_label_of(date(2024, 6, 15))
        assert label.startswith("2024")
        assert "甲辰" in label

    def test_lunar_new_year_label(self, converter):
        """Should render 正月初一 for the lunar new year."""
        label = lunar_label_of(date(2024, 2, 10))
        assert "正月初一" in label


class TestSolarTerm:
    """Tests for solar_term_of()."""

    def test_solar_term_day(self, converter):
        """Should return the term name on a solar-term day."""
        assert converter.solar_term_of(date(2024, 2, 4)) == "立春"

    def test_ordinary_day(self, converter):
        """Should return None on other days."""
        assert converter.solar_term_of(date(2024, 6, 15)) is None


class TestFallback:
    """Tests for degradation when conversion fails."""

    def test_year_falls_back_to_gregorian(self, converter):
        """Should return the Gregorian year instead of raising."""
        with patch("agecompute.age.lunar.Solar.fromYmd", side_effect=RuntimeError("boom")):
            assert converter.lunar_year_of(date(1995, 1, 1)) == 1995

    def test_label_falls_back_to_gregorian(self, converter):
        """Should return a Gregorian label instead of raising."""
        with patch("agecompute.age.lunar.Solar.fromYmd", side_effect=RuntimeError("boom")):
            assert converter.lunar_label_of(date(1995, 1, 1)) == "1995年1月1日"

    def test_solar_term_falls_back_to_none(self, converter):
        with patch("agecompute.age.lunar.Solar.fromYmd", side_effect=RuntimeError("boom")):
            assert converter.solar_term_of(date(2024, 2, 4)) is None

    def test_fallback_logs_warning(self, converter, caplog):
        """Should log the conversion failure."""
        with patch("agecompute.age.lunar.Solar.fromYmd", side_effect=RuntimeError("boom")):
            converter.lunar_year_of(date(1995, 1, 1))

        assert "Lunar year conversion failed" in caplog.text


class TestFormatFullDate:
    def test_format(self):
        assert format_full_date(date(1995, 1, 1)) == "1995年1月1日"

    def test_format_datetime(self):
        assert format_full_date(datetime(2024, 12, 31, 8, 0)) == "2024年12月31日"
