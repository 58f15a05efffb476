"""
Tests for Calendar Helpers

Run with: pytest tests/test_seasonality.py -v
"""

import pytest
from datetime import datetime, timedelta

from core.seasonality import ambient_temperature, is_working_hours, seasonal_factor


class TestWorkingHours:
    """Test the weekday 08:00-18:00 window."""

    def test_weekday_morning(self):
        # 8 January 2024 is a Monday
        assert is_working_hours(datetime(2024, 1, 8, 10, 0)) is True

    def test_boundaries(self):
        assert is_working_hours(datetime(2024, 1, 8, 8, 0)) is True
        assert is_working_hours(datetime(2024, 1, 8, 7, 59)) is False
        assert is_working_hours(datetime(2024, 1, 8, 17, 59)) is True
        assert is_working_hours(datetime(2024, 1, 8, 18, 0)) is False

    def test_weekend(self):
        assert is_working_hours(datetime(2024, 1, 13, 10, 0)) is False
        assert is_working_hours(datetime(2024, 1, 14, 10, 0)) is False


class TestSeasonalFactor:
    """Test the annual oscillation."""

    def test_first_of_january_is_zero(self):
        assert seasonal_factor(datetime(2023, 1, 1)) == pytest.approx(0.0)

    def test_peak_near_april(self):
        # 2 April 2023 is zero-based day 91
        assert seasonal_factor(datetime(2023, 4, 2)) == pytest.approx(0.1, abs=1e-3)

    def test_bounded_over_a_year(self):
        start = datetime(2024, 1, 1)
        for day in range(366):
            value = seasonal_factor(start + timedelta(days=day))
            assert -0.1 <= value <= 0.1


class TestAmbientTemperature:
    """Test ambient temperature derivation."""

    def test_baseline(self):
        assert ambient_temperature(0.0) == pytest.approx(22.0)

    def test_seasonal_swing(self):
        assert ambient_temperature(0.1) == pytest.approx(22.5)
        assert ambient_temperature(-0.1) == pytest.approx(21.5)
