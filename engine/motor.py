"""
Aggregate Motor Engine

A single "representative" motor with a richer sensor surface than the
fleet machines: per-axis vibration, pressures, flows, electrical and
environmental readings, strain gauges and derived daily-life metrics.

Each physics pass has two phases:
1. Physics: draw operating scenarios and compute speed, temperature and
   efficiency from them with load, ambient, time, seasonal and wear terms.
2. Override: replace those three with stratified draws so 70% of
   readings are normal, 20% warning and 10% critical.

The physics results are kept (``physics_speed`` etc.) and load, wear and
degradation keep feeding later passes. Simulated time follows the
injected wall clock; ``advance(dt)`` steps explicitly.
"""

import logging
import math
from datetime import datetime
from typing import Callable, Optional

from core.health_score import MotorHealthEngine, HealthScore, bearing_health
from core.maintenance import MaintenanceStatus, classify_maintenance
from core.physics import MachinePhysics, clamp
from core.seasonality import seasonal_factor, ambient_temperature
from .config import EngineConfig
from .coalescer import UpdateCoalescer
from .daily_life import DailyLifeMetrics, compute_daily_life
from .models import MotorState, RESET_HEALTH_SCORE
from .random_source import RandomSource, SeededRandom
from .scenarios import (
    ScenarioLibrary, SPEED_BAND, TEMPERATURE_BAND, EFFICIENCY_BAND,
)

logger = logging.getLogger(__name__)


# Per-axis share of the scenario's base vibration
AXIS_FACTORS = (1.0, 0.8, 0.6)
MIN_AXIS_VIBRATION = 0.1
MAX_AXIS_VIBRATION = 8.0
MAX_VIBRATION = 8.0                 # mm/s, magnitude of the axis vector

# Auxiliary sensors: (nominal, noise amplitude)
OIL_PRESSURE = (3.5, 0.1)           # bar
AIR_PRESSURE = (7.2, 0.2)           # bar
HYDRAULIC_PRESSURE = (175.0, 5.0)   # bar
COOLANT_FLOW_NOISE = 1.0            # L/min
FUEL_FLOW = (10.0, 0.5)             # L/h
VOLTAGE = (230.0, 2.0)              # V
CURRENT = (20.0, 1.0)               # A
POWER_FACTOR = (0.92, 0.02)
AMBIENT_PRESSURE = (101.3, 0.2)     # kPa
DISPLACEMENT = (0.1, 0.05)          # mm
STRAIN_GAUGES = ((400.0, 50.0), (350.0, 40.0), (380.0, 45.0))  # µε

# Torque (N·m) = P (kW) × 9549 / n (rpm)
TORQUE_CONSTANT = 9549.0


class AggregateMotor:
    """
    Single-motor telemetry engine with the legacy flat accessor surface.

    Example:
        motor = AggregateMotor(EngineConfig(seed=7))
        print(motor.motor_speed(), motor.torque(), motor.vibration())
        motor.reset_for_next_reading()
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[RandomSource] = None,
        clock: Optional[Callable[[], datetime]] = None,
        physics: Optional[MachinePhysics] = None,
        health_engine: Optional[MotorHealthEngine] = None,
    ):
        """
        Initialize the aggregate motor.

        Args:
            config: Engine settings (defaults to EngineConfig())
            rng: Random source (defaults to SeededRandom(config.seed))
            clock: Wall-clock source driving elapsed time
            physics: Shared wear/power stages (defaults to MachinePhysics())
            health_engine: System health scorer (defaults to MotorHealthEngine())
        """
        self.config = config or EngineConfig()
        self.rng = rng or SeededRandom(self.config.seed)
        self.clock = clock or datetime.now
        self.physics = physics or MachinePhysics()
        self.health_engine = health_engine or MotorHealthEngine()
        self.coalescer = UpdateCoalescer("motor")
        self.state = MotorState()
        self._last_update = self.clock()

    # =========================================
    # Physics pass
    # =========================================

    def physics_pass(self, dt: float) -> None:
        """
        Advance the motor by ``dt`` seconds. A stopped motor stays frozen.
        """
        s = self.state
        if not s.is_running:
            return

        rng = self.rng
        now = self.clock()
        seasonal = seasonal_factor(now)
        speed_scenario, thermal, efficiency_scenario = ScenarioLibrary.draw(rng)

        # Runtime, wear and degradation (read the stored temperature)
        s.runtime_seconds += dt
        hours = s.runtime_seconds / 3600.0
        s.bearing_wear = self.physics.bearing_wear(
            s.bearing_wear, s.speed, s.load, s.temperature, dt
        )
        s.oil_degradation = self.physics.oil_degradation(s.oil_degradation, s.temperature, dt)
        s.seasonal = seasonal
        s.ambient_temperature = ambient_temperature(seasonal)

        s.load = clamp(
            speed_scenario.load
            + math.sin(hours * 0.05) * 0.1
            + math.sin(hours * 0.2) * 0.05
            + seasonal * 0.05,
            0.2, 1.0
        )

        s.physics_speed = max(0.0, (
            speed_scenario.base_speed * (0.9 + s.load * 0.15)
            - (speed_scenario.ambient - 25.0) * 2.0
            + math.sin(hours * 0.1) * 50.0
            + seasonal * 100.0
            - s.bearing_wear * 500.0
            + rng.uniform(-50.0, 50.0)
        ))
        s.speed = SPEED_BAND.sample(rng)

        s.physics_temperature = (
            thermal.base_temperature
            + s.load * 10.0
            + (thermal.ambient - 25.0) * 0.5
            + seasonal * 5.0
            + s.bearing_wear * 40.0
            + rng.uniform(-2.0, 2.0)
        )
        s.temperature = TEMPERATURE_BAND.sample(rng)

        s.physics_efficiency = clamp(
            efficiency_scenario.base_efficiency
            - s.bearing_wear * 120.0 * efficiency_scenario.wear_factor
            - s.oil_degradation * 80.0
            - max(0.0, (s.temperature - 75.0) * 0.2)
            - abs(s.load - 0.8) * 5.0
            + rng.uniform(-1.0, 1.0),
            70.0, 96.0
        )
        s.efficiency = EFFICIENCY_BAND.sample(rng)

        # Axes are primary; the magnitude is derived from them
        axes = []
        for factor in AXIS_FACTORS:
            value = (
                thermal.base_vibration * factor
                + (s.speed / 3000.0) * 0.3 * factor
                + s.load * 0.2 * factor
                + s.bearing_wear * 10.0 * factor
                + rng.uniform(-0.1, 0.1)
            )
            axes.append(clamp(value, MIN_AXIS_VIBRATION, MAX_AXIS_VIBRATION))
        magnitude = math.sqrt(sum(a * a for a in axes))
        if magnitude > MAX_VIBRATION:
            # Shrink the whole vector so the norm stays in range
            axes = [a * MAX_VIBRATION / magnitude for a in axes]
            magnitude = MAX_VIBRATION
        s.vibration_x, s.vibration_y, s.vibration_z = axes
        s.vibration = magnitude

        s.power_consumption = self.physics.power(
            s.load, s.efficiency, s.temperature, s.bearing_wear
        )
        s.system_health = self.health_engine.score(
            s.efficiency, s.vibration, s.temperature, s.bearing_wear, s.oil_degradation
        )
        s.maintenance_status = classify_maintenance(
            bearing_wear=s.bearing_wear,
            oil_degradation=s.oil_degradation,
            temperature=s.temperature,
            vibration=s.vibration,
            efficiency=s.efficiency,
            operating_hours=hours,
        )

        s.speed_scenario = speed_scenario.name
        s.thermal_scenario = thermal.name
        s.efficiency_scenario = efficiency_scenario.name

    def _step_elapsed(self) -> None:
        now = self.clock()
        dt = max(0.0, (now - self._last_update).total_seconds())
        self._last_update = now
        self.physics_pass(dt)

    def _refresh(self) -> None:
        self.coalescer.ensure_fresh(self._step_elapsed)

    def advance(self, dt: float) -> None:
        """Run one pass of ``dt`` simulated seconds and mark the reading fresh."""
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        self.physics_pass(dt)
        self._last_update = self.clock()
        self.coalescer.mark_fresh()

    def reset_for_next_reading(self) -> None:
        self.coalescer.reset_for_next_reading()

    def snapshot(self) -> MotorState:
        """Noise-free copy of the current state."""
        self._refresh()
        return self.state.copy()

    def _noisy(self, nominal: float, amplitude: float) -> float:
        if not self.config.noise:
            return nominal
        return nominal + self.rng.uniform(-amplitude, amplitude)

    # =========================================
    # Motion
    # =========================================

    def motor_speed(self) -> int:
        self._refresh()
        return int(self.state.speed)

    def rpm(self) -> float:
        self._refresh()
        return self.state.speed

    def torque(self) -> float:
        """Shaft torque (N·m) from this tick's power and speed."""
        self._refresh()
        if self.state.speed <= 0:
            return 0.0
        return self.state.power_consumption * TORQUE_CONSTANT / self.state.speed

    def shaft_position(self) -> float:
        """Shaft angle in degrees."""
        self._refresh()
        return math.fmod(self.state.speed * 6.0, 360.0)

    def displacement(self) -> float:
        self._refresh()
        return self._noisy(*DISPLACEMENT)

    # =========================================
    # Temperature and vibration
    # =========================================

    def motor_temperature(self) -> int:
        self._refresh()
        return int(self.state.temperature)

    def vibration_x(self) -> float:
        self._refresh()
        return self.state.vibration_x

    def vibration_y(self) -> float:
        self._refresh()
        return self.state.vibration_y

    def vibration_z(self) -> float:
        self._refresh()
        return self.state.vibration_z

    def vibration(self) -> float:
        self._refresh()
        return self.state.vibration

    # =========================================
    # Pressure, flow and electrical
    # =========================================

    def oil_pressure(self) -> float:
        self._refresh()
        return self._noisy(*OIL_PRESSURE)

    def air_pressure(self) -> float:
        self._refresh()
        return self._noisy(*AIR_PRESSURE)

    def hydraulic_pressure(self) -> float:
        self._refresh()
        return self._noisy(*HYDRAULIC_PRESSURE)

    def coolant_flow_rate(self) -> float:
        self._refresh()
        return self._noisy(self.state.coolant_flow_rate, COOLANT_FLOW_NOISE)

    def fuel_flow_rate(self) -> float:
        self._refresh()
        return self._noisy(*FUEL_FLOW)

    def voltage(self) -> float:
        self._refresh()
        return self._noisy(*VOLTAGE)

    def current(self) -> float:
        self._refresh()
        return self._noisy(*CURRENT)

    def power_factor(self) -> float:
        self._refresh()
        return self._noisy(*POWER_FACTOR)

    def power_consumption(self) -> float:
        self._refresh()
        return self.state.power_consumption

    def efficiency(self) -> float:
        self._refresh()
        return self.state.efficiency

    # =========================================
    # Environment, strain and sound
    # =========================================

    def humidity(self) -> float:
        """Relative humidity (%)."""
        self._refresh()
        return clamp(self._noisy(50.0 + self.state.seasonal * 10.0, 3.0), 0.0, 100.0)

    def ambient_temperature(self) -> float:
        self._refresh()
        return self._noisy(self.state.ambient_temperature, 1.0)

    def ambient_pressure(self) -> float:
        self._refresh()
        return self._noisy(*AMBIENT_PRESSURE)

    def strain_gauge_1(self) -> float:
        self._refresh()
        return self._noisy(*STRAIN_GAUGES[0])

    def strain_gauge_2(self) -> float:
        self._refresh()
        return self._noisy(*STRAIN_GAUGES[1])

    def strain_gauge_3(self) -> float:
        self._refresh()
        return self._noisy(*STRAIN_GAUGES[2])

    def sound_level(self) -> float:
        """Sound pressure level (dB), rising with vibration."""
        self._refresh()
        return self._noisy(70.0 + self.state.vibration * 2.0, 3.0)

    # =========================================
    # Wear, runtime and status
    # =========================================

    def bearing_health(self) -> float:
        self._refresh()
        return bearing_health(self.state.bearing_wear)

    def bearing_wear(self) -> float:
        self._refresh()
        return self.state.bearing_wear

    def oil_degradation(self) -> float:
        self._refresh()
        return self.state.oil_degradation

    def operating_hours(self) -> int:
        self._refresh()
        return int(self.state.runtime_seconds // 3600)

    def operating_minutes(self) -> int:
        self._refresh()
        return int(self.state.runtime_seconds // 60) % 60

    def operating_seconds(self) -> float:
        self._refresh()
        return self.state.runtime_seconds % 60.0

    def maintenance_status(self) -> int:
        self._refresh()
        return int(self.state.maintenance_status)

    def system_health(self) -> int:
        self._refresh()
        return int(self.state.system_health)

    def health_report(self) -> HealthScore:
        """Full health breakdown for the current tick."""
        self._refresh()
        s = self.state
        return self.health_engine.calculate(
            s.efficiency, s.vibration, s.temperature, s.bearing_wear, s.oil_degradation
        )

    def is_running(self) -> bool:
        return self.state.is_running

    # =========================================
    # Daily-life metrics
    # =========================================

    def daily_life(self) -> DailyLifeMetrics:
        self._refresh()
        return compute_daily_life(self.state)

    def hvac_efficiency(self) -> float:
        return self.daily_life().hvac_efficiency

    def energy_savings(self) -> float:
        return self.daily_life().energy_savings

    def comfort_level(self) -> float:
        return self.daily_life().comfort_level

    def air_quality(self) -> float:
        return self.daily_life().air_quality

    def smart_devices(self) -> int:
        return self.daily_life().smart_devices

    def fuel_efficiency(self) -> float:
        return self.daily_life().fuel_efficiency

    def engine_health(self) -> float:
        return self.daily_life().engine_health

    def battery_level(self) -> float:
        return self.daily_life().battery_level

    def tire_pressure(self) -> float:
        return self.daily_life().tire_pressure

    def vehicle_maintenance_due(self) -> bool:
        return self.daily_life().vehicle_maintenance_due

    def boat_engine_efficiency(self) -> float:
        return self.daily_life().boat_engine_efficiency

    def boat_engine_hours(self) -> int:
        return self.daily_life().boat_engine_hours

    def blade_sharpness(self) -> float:
        return self.daily_life().blade_sharpness

    def fuel_level(self) -> float:
        return self.daily_life().fuel_level

    def generator_power_output(self) -> float:
        return self.daily_life().generator_power_output

    def generator_fuel_efficiency(self) -> float:
        return self.daily_life().generator_fuel_efficiency

    def pool_pump_flow_rate(self) -> float:
        return self.daily_life().pool_pump_flow_rate

    def pool_pump_energy_usage(self) -> float:
        return self.daily_life().pool_pump_energy_usage

    def washing_machine_efficiency(self) -> float:
        return self.daily_life().washing_machine_efficiency

    def dishwasher_efficiency(self) -> float:
        return self.daily_life().dishwasher_efficiency

    def refrigerator_efficiency(self) -> float:
        return self.daily_life().refrigerator_efficiency

    def air_conditioner_efficiency(self) -> float:
        return self.daily_life().air_conditioner_efficiency

    # =========================================
    # Control operations
    # =========================================

    def start(self) -> None:
        # Elapsed time while stopped is not simulated
        self._last_update = self.clock()
        self.state.is_running = True
        self.coalescer.invalidate()
        logger.info("Aggregate motor started")

    def stop(self) -> None:
        self.state.is_running = False
        self.coalescer.invalidate()
        logger.info("Aggregate motor stopped")

    def reset(self) -> None:
        """Restore wear, degradation, runtime, health and status."""
        s = self.state
        s.bearing_wear = 0.0
        s.oil_degradation = 0.0
        s.runtime_seconds = 0.0
        s.system_health = RESET_HEALTH_SCORE
        s.maintenance_status = MaintenanceStatus.GOOD
        self.coalescer.invalidate()
        logger.info("Aggregate motor wear state reset")
