"""
Tests for the Aggregate Motor

These tests verify the two-phase physics pass, derived quantities
(vibration magnitude, torque), the legacy accessor surface and the
control operations.

Run with: pytest tests/test_motor.py -v
"""

import math
import pytest
from datetime import datetime, timedelta

from core.maintenance import MaintenanceStatus
from engine.config import EngineConfig
from engine.motor import AggregateMotor, MAX_VIBRATION, TORQUE_CONSTANT
from engine.sampler import ReadingSampler
from engine.scenarios import SPEED_SCENARIOS, THERMAL_SCENARIOS, EFFICIENCY_SCENARIOS

START = datetime(2024, 1, 8, 10, 0)


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def tick(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def make_motor(seed=42, noise=False, clock=None) -> AggregateMotor:
    return AggregateMotor(EngineConfig(seed=seed, noise=noise), clock=clock or FakeClock())


class TestPhysicsPass:
    """Test the scenario physics and stratified override."""

    def setup_method(self):
        """Set up test fixtures."""
        self.motor = make_motor()

    def test_stratified_ranges(self):
        for _ in range(500):
            self.motor.advance(5.0)
            s = self.motor.state
            assert 2200.0 <= s.speed <= 3300.0
            assert 60.0 <= s.temperature <= 95.0
            assert 72.0 <= s.efficiency <= 96.0
            assert 0.2 <= s.load <= 1.0
            assert 2.0 <= s.power_consumption <= 15.0
            assert 0.0 <= s.system_health <= 100.0
            for axis in (s.vibration_x, s.vibration_y, s.vibration_z):
                assert 0.1 <= axis <= 8.0

    def test_vibration_magnitude_is_axis_norm(self):
        for _ in range(50):
            self.motor.advance(5.0)
            s = self.motor.state
            expected = math.sqrt(s.vibration_x ** 2 + s.vibration_y ** 2 + s.vibration_z ** 2)
            assert s.vibration == pytest.approx(expected)

    def test_physics_results_are_kept(self):
        self.motor.advance(5.0)
        s = self.motor.state
        assert 70.0 <= s.physics_efficiency <= 96.0
        assert s.physics_speed >= 0.0
        assert s.physics_temperature > 0.0

    def test_scenario_names_recorded(self):
        self.motor.advance(5.0)
        s = self.motor.state
        assert s.speed_scenario in {x.name for x in SPEED_SCENARIOS}
        assert s.thermal_scenario in {x.name for x in THERMAL_SCENARIOS}
        assert s.efficiency_scenario in {x.name for x in EFFICIENCY_SCENARIOS}

    def test_wear_is_monotonic(self):
        previous = self.motor.snapshot()
        for _ in range(200):
            self.motor.advance(600.0)
            current = self.motor.snapshot()
            assert current.bearing_wear >= previous.bearing_wear
            assert current.oil_degradation >= previous.oil_degradation
            assert current.runtime_seconds > previous.runtime_seconds
            previous = current

    def test_system_health_matches_engine(self):
        self.motor.advance(5.0)
        s = self.motor.state
        report = self.motor.health_report()
        assert s.system_health == pytest.approx(report.overall_score)

    def test_advance_rejects_non_positive_dt(self):
        with pytest.raises(ValueError):
            self.motor.advance(-1.0)


class TestLongRun:
    """Worn-out motors still produce readings inside the guarded ranges."""

    def test_vibration_stays_in_range_as_bearings_wear(self):
        sampler = ReadingSampler(AggregateMotor(EngineConfig(seed=1), clock=FakeClock()))

        for _ in range(2000):
            reading = sampler.sample(advance_seconds=3600.0)
            assert 0.5 <= reading.vibration <= 8.0
            assert sampler.last_validation.errors == []
            assert sampler.last_validation.is_valid

        assert sampler.motor.state.bearing_wear > 0.5

    def test_capped_magnitude_is_still_axis_norm(self):
        motor = make_motor(seed=1)
        motor.state.bearing_wear = 1.0
        motor.advance(1.0)
        s = motor.state

        assert s.vibration == pytest.approx(MAX_VIBRATION)
        expected = math.sqrt(s.vibration_x ** 2 + s.vibration_y ** 2 + s.vibration_z ** 2)
        assert s.vibration == pytest.approx(expected)
        assert all(0.1 <= axis <= 8.0 for axis in (s.vibration_x, s.vibration_y, s.vibration_z))


class TestTimeModel:
    """Elapsed wall-clock time drives coalesced passes."""

    def test_elapsed_time_drives_runtime(self):
        clock = FakeClock()
        motor = make_motor(clock=clock)

        clock.tick(10.0)
        motor.rpm()
        motor.torque()
        assert motor.state.runtime_seconds == pytest.approx(10.0)
        assert motor.coalescer.tick == 1

        motor.reset_for_next_reading()
        clock.tick(5.0)
        motor.rpm()
        assert motor.state.runtime_seconds == pytest.approx(15.0)

    def test_reads_within_a_tick_agree(self):
        motor = make_motor()
        speed = motor.rpm()
        for _ in range(10):
            assert motor.rpm() == speed
            assert motor.motor_speed() == int(speed)

    def test_seeded_motors_are_reproducible(self):
        first, second = make_motor(seed=11), make_motor(seed=11)
        for _ in range(20):
            first.advance(5.0)
            second.advance(5.0)
            assert first.snapshot() == second.snapshot()


class TestLegacyAccessors:
    """Derived and auxiliary readings."""

    def setup_method(self):
        """Set up test fixtures."""
        self.motor = make_motor()
        self.motor.advance(5.0)

    def test_torque_consistent_with_power_and_speed(self):
        s = self.motor.state
        assert self.motor.torque() == pytest.approx(
            s.power_consumption * TORQUE_CONSTANT / s.speed
        )

    def test_torque_zero_without_speed(self):
        self.motor.state.speed = 0.0
        assert self.motor.torque() == 0.0

    def test_integer_accessors(self):
        s = self.motor.state
        assert self.motor.motor_speed() == int(s.speed)
        assert self.motor.motor_temperature() == int(s.temperature)
        assert isinstance(self.motor.system_health(), int)

    def test_shaft_position_in_degrees(self):
        assert 0.0 <= self.motor.shaft_position() < 360.0

    def test_nominal_sensors_without_noise(self):
        assert self.motor.oil_pressure() == 3.5
        assert self.motor.voltage() == 230.0
        assert self.motor.power_factor() == 0.92
        assert self.motor.strain_gauge_2() == 350.0

    def test_sound_tracks_vibration(self):
        assert self.motor.sound_level() == pytest.approx(70.0 + self.motor.state.vibration * 2.0)

    def test_operating_time_split(self):
        motor = make_motor()
        motor.advance(3725.0)
        assert motor.operating_hours() == 1
        assert motor.operating_minutes() == 2
        assert motor.operating_seconds() == pytest.approx(5.0)

    def test_bearing_health_from_wear(self):
        self.motor.state.bearing_wear = 0.02
        assert self.motor.bearing_health() == pytest.approx(80.0)

    def test_noisy_sensors_stay_near_nominal(self):
        motor = make_motor(noise=True)
        for _ in range(50):
            assert abs(motor.oil_pressure() - 3.5) <= 0.1 + 1e-9
            assert 0.0 <= motor.humidity() <= 100.0


class TestControl:
    """Start, stop and reset."""

    def setup_method(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.motor = make_motor(clock=self.clock)
        self.motor.advance(5.0)

    def test_stopped_motor_is_frozen(self):
        self.motor.stop()
        before = self.motor.snapshot()

        self.motor.advance(60.0)
        self.clock.tick(60.0)
        self.motor.reset_for_next_reading()

        assert self.motor.snapshot() == before
        assert self.motor.is_running() is False

    def test_start_skips_stopped_interval(self):
        self.motor.stop()
        self.clock.tick(3600.0)
        runtime = self.motor.state.runtime_seconds

        self.motor.start()
        self.clock.tick(2.0)
        self.motor.rpm()
        assert self.motor.state.runtime_seconds == pytest.approx(runtime + 2.0)

    def test_reset(self):
        self.motor.state.bearing_wear = 0.08
        self.motor.state.oil_degradation = 0.04
        self.motor.state.maintenance_status = MaintenanceStatus.CRITICAL

        self.motor.reset()

        s = self.motor.state
        assert s.bearing_wear == 0.0
        assert s.oil_degradation == 0.0
        assert s.runtime_seconds == 0.0
        assert s.system_health == 95.0
        assert s.maintenance_status == MaintenanceStatus.GOOD
        assert not self.motor.coalescer.is_fresh
