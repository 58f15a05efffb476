"""
Tests for Motor Health Score Engine

These tests verify the health scoring calculations are correct
and produce expected results for various motor conditions.

Run with: pytest tests/test_health_score.py -v
"""

import pytest

from core.health_score import (
    MotorHealthEngine,
    HealthCategory,
    HealthScore,
    calculate_motor_health,
    vibration_health,
    temperature_health,
    bearing_health,
    oil_health,
)


class TestComponentTerms:
    """Test the piecewise component health terms."""

    def test_vibration_bands(self):
        assert vibration_health(1.0) == 100.0
        assert vibration_health(2.8) == pytest.approx(100.0)
        assert vibration_health(4.95) == pytest.approx(50.0)
        assert vibration_health(7.1) == pytest.approx(0.0)
        assert vibration_health(8.0) == 0.0

    def test_temperature_bands(self):
        assert temperature_health(60.0) == 100.0
        assert temperature_health(80.0) == pytest.approx(80.0)
        assert temperature_health(85.0) == pytest.approx(70.0)
        assert temperature_health(90.0) == pytest.approx(50.0)
        assert temperature_health(95.0) == pytest.approx(30.0)
        assert temperature_health(96.0) == 0.0

    def test_bearing_and_oil(self):
        assert bearing_health(0.0) == 100.0
        assert bearing_health(0.05) == pytest.approx(50.0)
        assert bearing_health(0.5) == 0.0
        assert oil_health(0.01) == pytest.approx(80.0)
        assert oil_health(0.1) == 0.0


class TestMotorHealthEngine:
    """Test the weighted health engine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.engine = MotorHealthEngine()

    def test_default_weights_sum_to_one(self):
        total = sum(self.engine.weights.values())
        assert total == pytest.approx(1.0)

    def test_efficiency_dominates(self):
        weights = self.engine.weights
        assert weights["efficiency"] == max(weights.values())

    def test_custom_weights_must_sum_to_one(self):
        with pytest.raises(ValueError):
            MotorHealthEngine(weights={
                "efficiency": 0.5,
                "vibration": 0.5,
                "temperature": 0.5,
                "bearing": 0.0,
                "oil": 0.0,
            })

    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError):
            MotorHealthEngine(weights={"efficiency": 0.5, "noise": 0.5})

    def test_healthy_motor(self):
        """96% efficient motor with every other term at 100."""
        result = self.engine.calculate(
            efficiency=96.0,
            vibration=1.0,
            temperature=60.0,
            bearing_wear=0.0,
            oil_degradation=0.0,
        )

        assert isinstance(result, HealthScore)
        assert result.overall_score == pytest.approx(98.4)
        assert result.category == HealthCategory.EXCELLENT
        assert result.primary_concern is None
        assert result.recommendations == []

    def test_hot_motor_flags_temperature(self):
        result = self.engine.calculate(
            efficiency=92.0,
            vibration=1.0,
            temperature=95.0,
            bearing_wear=0.0,
            oil_degradation=0.0,
        )

        assert result.overall_score == pytest.approx(82.8)
        assert result.category == HealthCategory.GOOD
        assert result.primary_concern == "temperature"
        assert result.breakdown[0].metric_name == "temperature"
        assert len(result.recommendations) > 0

    def test_breakdown_sorted_worst_first(self):
        result = self.engine.calculate(88.0, 5.0, 82.0, 0.03, 0.01)
        scores = [m.normalized_score for m in result.breakdown]
        assert scores == sorted(scores)
        assert len(result.breakdown) == 5

    def test_score_matches_calculate(self):
        args = (90.0, 2.9, 78.0, 0.004, 0.002)
        assert self.engine.score(*args) == pytest.approx(
            self.engine.calculate(*args).overall_score
        )

    def test_failed_motor_is_critical(self):
        result = self.engine.calculate(20.0, 8.0, 110.0, 0.5, 0.5)
        assert result.overall_score == pytest.approx(8.0)
        assert result.category == HealthCategory.CRITICAL

    def test_category_thresholds(self):
        assert self.engine._get_category(90) == HealthCategory.EXCELLENT
        assert self.engine._get_category(75) == HealthCategory.GOOD
        assert self.engine._get_category(55) == HealthCategory.FAIR
        assert self.engine._get_category(30) == HealthCategory.POOR
        assert self.engine._get_category(29.9) == HealthCategory.CRITICAL

    def test_to_dict(self):
        data = self.engine.calculate(92.0, 1.7, 65.0, 0.0, 0.0).to_dict()
        assert data["category"] == "excellent"
        assert {m["metric_name"] for m in data["breakdown"]} == {
            "efficiency", "vibration", "temperature", "bearing", "oil"
        }


class TestConvenienceFunction:
    """Test the calculate_motor_health convenience function."""

    def test_calculate_motor_health(self):
        result = calculate_motor_health(92.0, 1.7, 65.0, 0.0, 0.0)

        assert isinstance(result, HealthScore)
        assert 0 <= result.overall_score <= 100
