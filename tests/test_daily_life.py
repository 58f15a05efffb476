"""
Tests for Daily-Life Application Metrics

Run with: pytest tests/test_daily_life.py -v
"""

import pytest

from core.maintenance import MaintenanceStatus
from engine.daily_life import compute_daily_life
from engine.models import MotorState


class TestComputeDailyLife:
    """Test the derived consumer-facing metrics."""

    def setup_method(self):
        """Set up test fixtures."""
        self.state = MotorState(
            speed=2500.0,
            temperature=70.0,
            efficiency=90.0,
            vibration=2.0,
            power_consumption=6.0,
            system_health=88.0,
            runtime_seconds=25 * 3600.0,
            coolant_flow_rate=15.0,
            ambient_temperature=22.0,
            maintenance_status=MaintenanceStatus.CRITICAL,
        )
        self.metrics = compute_daily_life(self.state)

    def test_home_metrics(self):
        m = self.metrics
        assert m.hvac_efficiency == pytest.approx(90.0)
        assert m.energy_savings == pytest.approx(72.0)
        assert m.comfort_level == pytest.approx(60.0)
        assert m.air_quality == pytest.approx(80.0)
        assert m.smart_devices == 25

    def test_vehicle_metrics(self):
        m = self.metrics
        assert m.fuel_efficiency == 100.0
        assert m.engine_health == pytest.approx(88.0)
        assert m.battery_level == pytest.approx(20.0)
        assert m.tire_pressure == pytest.approx(70.0)
        assert m.vehicle_maintenance_due is True

    def test_recreation_metrics(self):
        m = self.metrics
        assert m.boat_engine_hours == 2
        assert m.blade_sharpness == pytest.approx(60.0)
        assert m.fuel_level == pytest.approx(10.0)
        assert m.generator_power_output == pytest.approx(60.0)
        assert m.pool_pump_flow_rate == pytest.approx(300.0)
        assert m.pool_pump_energy_usage == pytest.approx(90.0)

    def test_appliance_metrics(self):
        m = self.metrics
        assert m.washing_machine_efficiency == pytest.approx(88.2)
        assert m.dishwasher_efficiency == pytest.approx(85.5)
        assert m.refrigerator_efficiency == pytest.approx(91.8)
        assert m.air_conditioner_efficiency == pytest.approx(90.0)

    def test_percentages_are_clamped(self):
        hot = MotorState(temperature=120.0, vibration=12.0, efficiency=96.0)
        m = compute_daily_life(hot)
        assert m.comfort_level == 0.0
        assert m.battery_level == 0.0
        assert m.blade_sharpness == 0.0
        assert m.fuel_level == 0.0

    @pytest.mark.parametrize("status,expected", [
        (MaintenanceStatus.GOOD, False),
        (MaintenanceStatus.WARNING, False),
        (MaintenanceStatus.CRITICAL, True),
        (MaintenanceStatus.MAINTENANCE_DUE, True),
    ])
    def test_vehicle_maintenance_due(self, status, expected):
        m = compute_daily_life(MotorState(maintenance_status=status))
        assert m.vehicle_maintenance_due is expected

    def test_state_is_not_modified(self):
        before = self.state.copy()
        compute_daily_life(self.state)
        assert self.state == before

    def test_to_dict(self):
        data = self.metrics.to_dict()
        assert len(data) == 22
        assert data["smart_devices"] == 25
