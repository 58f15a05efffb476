"""
Tests for the Reading Sampler

These tests verify status priority, title formatting, alert generation
and that one sampled reading is internally consistent.

Run with: pytest tests/test_sampler.py -v
"""

import re
import pytest
from dataclasses import replace
from datetime import datetime

from core.maintenance import MaintenanceStatus
from engine.config import EngineConfig
from engine.motor import AggregateMotor, TORQUE_CONSTANT
from engine.sampler import (
    MACHINE_ID,
    ReadingSampler,
    build_alerts,
    determine_status,
    health_indicator,
    reading_title,
    title_prefix,
)

NOW = datetime(2024, 1, 8, 10, 0)


def make_sampler(seed=42) -> ReadingSampler:
    motor = AggregateMotor(EngineConfig(seed=seed, noise=False), clock=lambda: NOW)
    return ReadingSampler(motor)


class TestDetermineStatus:
    """Test first-match-wins status priority."""

    def test_normal(self):
        assert determine_status(65, 1.5, 92, 3.5, 100, 95) == "normal"

    def test_maintenance(self):
        assert determine_status(65, 1.5, 92, 3.5, 100, 80) == "maintenance"

    @pytest.mark.parametrize("args", [
        (85, 1.5, 92, 3.5, 100, 95),
        (65, 4.5, 92, 3.5, 100, 95),
        (65, 1.5, 80, 3.5, 100, 95),
        (65, 1.5, 92, 2.2, 100, 95),
        (65, 1.5, 92, 3.5, 75, 95),
        (65, 1.5, 92, 3.5, 100, 70),
    ])
    def test_warning(self, args):
        assert determine_status(*args) == "warning"

    @pytest.mark.parametrize("args", [
        (91, 1.5, 92, 3.5, 100, 95),
        (65, 5.5, 92, 3.5, 100, 95),
        (65, 1.5, 70, 3.5, 100, 95),
        (65, 1.5, 92, 1.5, 100, 95),
        (65, 1.5, 92, 3.5, 60, 95),
        (65, 1.5, 92, 3.5, 100, 50),
    ])
    def test_critical(self, args):
        assert determine_status(*args) == "critical"

    def test_critical_beats_warning(self):
        assert determine_status(95, 4.5, 80, 3.5, 100, 95) == "critical"


class TestTitles:
    """Test title prefix, colour and format."""

    @pytest.mark.parametrize("speed,temperature,health,expected", [
        (2900, 65, 95, "High-speed"),
        (2000, 65, 95, "Low-speed"),
        (2500, 85, 95, "High-temp"),
        (2500, 45, 95, "Cool"),
        (2500, 65, 96, "Optimal"),
        (2500, 65, 70, "Degraded"),
        (2500, 65, 85, "Standard"),
    ])
    def test_title_prefix(self, speed, temperature, health, expected):
        assert title_prefix(speed, temperature, health) == expected

    @pytest.mark.parametrize("health,expected", [
        (95, "green"), (80, "yellow"), (65, "orange"), (40, "red"),
    ])
    def test_health_indicator(self, health, expected):
        assert health_indicator(health) == expected

    def test_reading_title_format(self):
        title = reading_title(2500, 65, "normal", 96)
        pattern = (
            r"^\[NORMAL\] green Optimal Operation - 2500RPM @ 65°C "
            r"\(Health: 96%\) \[[0-9a-f]{8}\]$"
        )
        assert re.match(pattern, title)

    def test_titles_are_unique(self):
        assert reading_title(2500, 65, "normal", 96) != reading_title(2500, 65, "normal", 96)


class TestBuildAlerts:
    """Test one alert per crossed threshold."""

    def setup_method(self):
        """Set up test fixtures."""
        reading = make_sampler().sample()
        self.quiet = replace(
            reading,
            temperature=65,
            vibration=1.5,
            oil_pressure=3.5,
            bearing_health=100.0,
            system_health=95,
            efficiency=92.0,
            maintenance_status=int(MaintenanceStatus.GOOD),
            alerts=[],
        )

    def test_quiet_reading_has_no_alerts(self):
        assert build_alerts(self.quiet) == []

    def test_critical_temperature(self):
        alerts = build_alerts(replace(self.quiet, temperature=92))
        assert len(alerts) == 1
        assert alerts[0].type == "temperature"
        assert alerts[0].severity == "critical"
        assert alerts[0].machine_id == MACHINE_ID

    def test_warning_temperature(self):
        alerts = build_alerts(replace(self.quiet, temperature=85))
        assert [a.severity for a in alerts] == ["warning"]

    def test_multiple_alerts(self):
        alerts = build_alerts(replace(self.quiet, vibration=5.5, efficiency=80.0))
        assert {(a.type, a.severity) for a in alerts} == {
            ("vibration", "critical"), ("efficiency", "warning")
        }

    def test_maintenance_due_is_info(self):
        alerts = build_alerts(replace(
            self.quiet, maintenance_status=int(MaintenanceStatus.MAINTENANCE_DUE)
        ))
        assert [(a.type, a.severity) for a in alerts] == [("maintenance", "info")]


class TestReadingSampler:
    """Test complete readings."""

    def setup_method(self):
        """Set up test fixtures."""
        self.sampler = make_sampler()

    def test_reading_is_consistent(self):
        for _ in range(50):
            r = self.sampler.sample()
            assert r.machine_id == MACHINE_ID
            assert r.speed == int(r.rpm)
            assert r.torque == pytest.approx(r.power_consumption * TORQUE_CONSTANT / r.rpm)
            assert r.status == determine_status(
                r.temperature, r.vibration, r.efficiency,
                r.oil_pressure, r.bearing_health, r.system_health
            )
            assert r.title.startswith(f"[{r.status.upper()}]")
            assert f"{r.speed}RPM" in r.title

    def test_each_sample_is_a_new_tick(self):
        self.sampler.sample()
        self.sampler.sample()
        assert self.sampler.motor.coalescer.tick == 2

    def test_explicit_advance(self):
        reading = self.sampler.sample(advance_seconds=65.0)
        assert reading.operating_minutes == 1
        assert reading.operating_seconds == pytest.approx(5.0)

    def test_timestamp(self):
        stamp = datetime(2024, 3, 1, 12, 0)
        assert self.sampler.sample(timestamp=stamp).timestamp == stamp
        assert self.sampler.sample().timestamp == NOW

    def test_reading_passes_range_guard(self):
        for _ in range(100):
            self.sampler.sample(advance_seconds=60.0)
            assert self.sampler.last_validation.is_valid

    def test_to_dict(self):
        data = self.sampler.sample().to_dict()
        assert data["timestamp"] == NOW.isoformat()
        assert isinstance(data["alerts"], list)
        assert "title" in data


class TestHistory:
    """Sampled readings are kept for window analytics."""

    def test_readings_are_kept_oldest_first(self):
        sampler = make_sampler()
        first = sampler.sample(advance_seconds=5.0)
        second = sampler.sample(advance_seconds=5.0)
        assert list(sampler.history) == [first, second]

    def test_history_is_bounded(self):
        motor = AggregateMotor(EngineConfig(seed=42, noise=False), clock=lambda: NOW)
        sampler = ReadingSampler(motor, history_size=3)
        readings = [sampler.sample(advance_seconds=5.0) for _ in range(5)]
        assert list(sampler.history) == readings[-3:]
