"""
Tests for Machine Physics Stages

These tests verify each physics stage formula, its clamp range, and
the ordered update of a whole machine.

Run with: pytest tests/test_physics.py -v
"""

import pytest
from datetime import datetime

from core.physics import MachinePhysics, PhysicsConstants, clamp
from core.maintenance import MaintenanceStatus
from engine.models import Machine, MachineType


def make_machine(**overrides) -> Machine:
    """Running reference machine at the 2500 rpm operating point."""
    now = datetime(2024, 1, 8, 10, 0)
    fields = dict(
        id="TEST-001",
        name="Test Motor",
        type=MachineType.MOTOR,
        is_running=True,
        current_speed=2500.0,
        target_speed=2500.0,
        temperature=65.0,
        load=0.7,
        efficiency=92.0,
        power_consumption=6.0,
        vibration=1.2,
        pressure=3.5,
        flow_rate=15.0,
        health_score=95.0,
        installed_at=now,
        last_maintenance=now,
    )
    fields.update(overrides)
    return Machine(**fields)


class TestClamp:
    """Tests for the clamp helper."""

    def test_inside_range(self):
        assert clamp(5.0, 0.0, 10.0) == 5.0

    def test_below_and_above(self):
        assert clamp(-1.0, 0.0, 10.0) == 0.0
        assert clamp(11.0, 0.0, 10.0) == 10.0


class TestPhysicsConstants:
    """Test physics constants are reasonable."""

    def test_reference_point(self):
        constants = PhysicsConstants()
        assert constants.REFERENCE_SPEED == 2500.0
        assert constants.REFERENCE_TEMP == 65.0

    def test_ranges_are_ordered(self):
        c = PhysicsConstants()
        assert c.MIN_EFFICIENCY < c.MAX_EFFICIENCY
        assert c.MIN_VIBRATION < c.MAX_VIBRATION
        assert c.MIN_LOAD < c.MAX_LOAD
        assert c.MIN_POWER < c.MAX_POWER


class TestWearAndDegradation:
    """Tests for bearing wear and oil degradation accumulation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.physics = MachinePhysics()

    def test_operating_hours(self):
        assert self.physics.operating_hours(0.0, 3600.0) == pytest.approx(1.0)
        assert self.physics.operating_hours(2.0, 1800.0) == pytest.approx(2.5)

    def test_bearing_wear_at_reference_point(self):
        """One hour at reference speed, full load and 65°C adds 0.0008."""
        wear = self.physics.bearing_wear(0.0, 2500.0, 1.0, 65.0, 3600.0)
        assert wear == pytest.approx(0.0008)

    def test_hotter_bearing_wears_faster(self):
        cool = self.physics.bearing_wear(0.0, 2500.0, 0.7, 65.0, 3600.0)
        hot = self.physics.bearing_wear(0.0, 2500.0, 0.7, 95.0, 3600.0)
        assert hot == pytest.approx(cool * 1.5)

    def test_bearing_wear_never_decreases(self):
        """A cold machine adds no wear rather than removing it."""
        wear = self.physics.bearing_wear(0.01, 2500.0, 0.7, -30.0, 3600.0)
        assert wear == pytest.approx(0.01)

    def test_oil_degradation_at_reference_point(self):
        degradation = self.physics.oil_degradation(0.0, 65.0, 3600.0)
        assert degradation == pytest.approx(0.00015)

    def test_wear_is_clamped_to_one(self):
        assert self.physics.bearing_wear(0.9999, 5000.0, 1.0, 120.0, 36000.0) == 1.0


class TestThermalModel:
    """Tests for the first-order thermal model."""

    def setup_method(self):
        """Set up test fixtures."""
        self.physics = MachinePhysics()

    def test_one_minute_step(self):
        """heat 18.5, cooling 1.2 × 43 over one minute."""
        temperature = self.physics.temperature(65.0, 2500.0, 0.7, 22.0, 60.0)
        assert temperature == pytest.approx(65.0 + 18.5 - 1.2 * 43.0)

    def test_idle_machine_stays_at_ambient(self):
        assert self.physics.temperature(22.0, 0.0, 0.0, 22.0, 60.0) == pytest.approx(22.0)

    def test_never_below_ambient(self):
        temperature = self.physics.temperature(30.0, 0.0, 0.0, 22.0, 3600.0)
        assert temperature >= 22.0

    def test_capped_at_maximum(self):
        temperature = self.physics.temperature(119.0, 5000.0, 1.0, 22.0, 600.0)
        assert temperature <= 120.0


class TestEfficiencyAndVibration:
    """Tests for efficiency losses and vibration harmonics."""

    def setup_method(self):
        """Set up test fixtures."""
        self.physics = MachinePhysics()

    def test_new_machine_at_optimal_load(self):
        assert self.physics.efficiency(0.0, 0.0, 65.0, 0.8) == pytest.approx(95.0)

    def test_thermal_and_part_load_losses(self):
        """85°C costs 2 points, 0.6 load costs 1 point."""
        assert self.physics.efficiency(0.0, 0.0, 85.0, 0.6) == pytest.approx(92.0)

    def test_worn_machine_hits_floor(self):
        assert self.physics.efficiency(1.0, 0.0, 65.0, 0.8) == 70.0

    def test_base_vibration(self):
        assert self.physics.vibration(0.0, 0.0, 0.0, 0.0) == pytest.approx(1.0)

    def test_wear_raises_vibration(self):
        assert self.physics.vibration(0.0, 0.0, 0.1, 0.0) == pytest.approx(2.5)

    def test_vibration_capped(self):
        assert self.physics.vibration(2500.0, 0.7, 1.0, 10.0) == 8.0


class TestSpeedLoadPower:
    """Tests for speed control, load profile and power draw."""

    def setup_method(self):
        """Set up test fixtures."""
        self.physics = MachinePhysics()

    def test_speed_holds_at_setpoint(self):
        speed = self.physics.speed(2500.0, 2500.0, 0.7, 65.0, 90.0, 60.0)
        assert speed == pytest.approx(2500.0)

    def test_speed_moves_toward_target(self):
        speed = self.physics.speed(2500.0, 3000.0, 0.7, 65.0, 90.0, 60.0)
        assert speed == pytest.approx(2550.0)

    def test_speed_clamped_to_target_band(self):
        assert self.physics.speed(5000.0, 3000.0, 0.7, 65.0, 90.0, 1.0) == pytest.approx(3900.0)
        assert self.physics.speed(100.0, 3000.0, 0.7, 65.0, 90.0, 1.0) == pytest.approx(2100.0)

    def test_load_at_start_of_cycle(self):
        assert self.physics.load(0.0, 90.0, 0.0) == pytest.approx(0.75)

    def test_load_range(self):
        assert self.physics.load(0.0, 200.0, 0.0) == 1.0
        assert self.physics.load(0.0, 0.0, 0.0) == 0.2

    def test_power(self):
        """4.5 + 0.7 × 1.8 + 10 × 0.15"""
        assert self.physics.power(0.7, 90.0, 65.0, 0.0) == pytest.approx(7.26)

    def test_power_range(self):
        assert self.physics.power(1.0, 70.0, 120.0, 1.0) == 15.0


class TestHealthScore:
    """Tests for the composite machine health."""

    def setup_method(self):
        """Set up test fixtures."""
        self.physics = MachinePhysics()

    def test_perfect_machine(self):
        assert self.physics.health_score(0.0, 0.0, 65.0, 1.0, 100.0, 0.0) == pytest.approx(100.0)

    def test_wear_penalty(self):
        health = self.physics.health_score(0.04, 0.0, 65.0, 1.0, 100.0, 0.0)
        assert health == pytest.approx(90.0)

    def test_health_floor(self):
        assert self.physics.health_score(1.0, 1.0, 120.0, 8.0, 70.0, 1000.0) == 0.0


class TestMachineUpdate:
    """Tests for the ordered update of a whole machine."""

    def setup_method(self):
        """Set up test fixtures."""
        self.physics = MachinePhysics()

    def test_stopped_machine_is_frozen(self):
        machine = make_machine(is_running=False)
        before = machine.copy()

        assert self.physics.update(machine, 1.0, 0.0) is False
        assert machine == before

    def test_running_machine_updates(self):
        machine = make_machine()
        assert self.physics.update(machine, 1.0, 0.0) is True
        assert machine.operating_hours == pytest.approx(1.0 / 3600.0)
        assert machine.bearing_wear > 0.0

    def test_ranges_hold_over_many_updates(self):
        machine = make_machine()
        for _ in range(2000):
            self.physics.update(machine, 60.0, 0.05)
            assert 70.0 <= machine.efficiency <= 96.0
            assert 0.5 <= machine.vibration <= 8.0
            assert 22.0 <= machine.temperature <= 120.0
            assert 0.0 <= machine.health_score <= 100.0
            assert 0.2 <= machine.load <= 1.0
            assert 2.0 <= machine.power_consumption <= 15.0

    def test_wear_is_monotonic(self):
        machine = make_machine()
        previous_wear, previous_oil = 0.0, 0.0
        for _ in range(500):
            self.physics.update(machine, 60.0, 0.0)
            assert machine.bearing_wear >= previous_wear
            assert machine.oil_degradation >= previous_oil
            previous_wear, previous_oil = machine.bearing_wear, machine.oil_degradation

    def test_maintenance_status_is_set(self):
        machine = make_machine(bearing_wear=0.2)
        self.physics.update(machine, 1.0, 0.0)
        assert machine.maintenance_status == MaintenanceStatus.CRITICAL
