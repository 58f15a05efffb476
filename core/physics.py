"""
Physics Model for Industrial Machine Telemetry

This module contains the closed-form model that evolves the state of a
simulated machine over time. It is not a motor simulator: the goal is
bounded, plausible, internally-consistent numbers that drift smoothly and
occasionally cross warning/critical thresholds.

Stages (evaluated in this exact order by MachinePhysics.update):
1. Operating hours
2. Bearing wear
3. Oil degradation
4. Temperature
5. Efficiency
6. Vibration
7. Speed
8. Load
9. Power
10. Health score
11. Maintenance status

Later stages read values written by earlier ones within the same pass
(speed and load consume this pass's temperature and efficiency). The
order is what produces the lightly-coupled oscillating traces.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

from .maintenance import classify_maintenance
from .seasonality import ambient_temperature


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class PhysicsConstants:
    """
    Coefficients and ranges used by the machine physics stages.

    These are tuning constants for a demo model, not measured values.
    """

    # Reference operating point
    REFERENCE_SPEED: float = 2500.0       # rpm, speed factor == 1.0
    REFERENCE_TEMP: float = 65.0          # °C

    # Wear / degradation rates (per operating hour)
    BEARING_WEAR_RATE: float = 0.0008
    OIL_DEGRADATION_RATE: float = 0.00015
    WEAR_TEMP_SPAN: float = 30.0          # °C normalising span for wear
    OIL_TEMP_SPAN: float = 20.0           # °C normalising span for oil

    # Thermal model
    HEAT_PER_LOAD: float = 15.0
    HEAT_PER_SPEED: float = 8.0
    BASE_COOLING: float = 0.8
    COOLING_PER_SPEED: float = 0.4
    MAX_TEMP: float = 120.0

    # Efficiency model
    BASE_EFFICIENCY: float = 95.0
    OPTIMAL_LOAD: float = 0.8
    DERATE_TEMP: float = 75.0
    MIN_EFFICIENCY: float = 70.0
    MAX_EFFICIENCY: float = 96.0

    # Vibration range (mm/s)
    MIN_VIBRATION: float = 0.5
    MAX_VIBRATION: float = 8.0

    # Speed control
    SPEED_GAIN: float = 0.1
    MIN_SPEED_RATIO: float = 0.7
    MAX_SPEED_RATIO: float = 1.3

    # Load range
    MIN_LOAD: float = 0.2
    MAX_LOAD: float = 1.0

    # Power range (kW)
    BASE_POWER: float = 4.5
    MIN_POWER: float = 2.0
    MAX_POWER: float = 15.0

    # Health range
    MIN_HEALTH: float = 0.0
    MAX_HEALTH: float = 100.0


class MachinePhysics:
    """
    Per-machine state update model.

    Each stage method is a pure function of its arguments; ``update``
    threads a machine's fields through the stages in order and writes
    the results back onto the machine.

    Example:
        physics = MachinePhysics()
        physics.update(machine, elapsed_seconds=1.0, seasonal=0.05)
        print(machine.temperature, machine.health_score)
    """

    def __init__(self, constants: Optional[PhysicsConstants] = None):
        """
        Initialize the physics model.

        Args:
            constants: Custom coefficients. If None, uses defaults.
        """
        self.constants = constants or PhysicsConstants()

    # =========================================
    # Individual stages
    # =========================================

    def speed_factor(self, speed: float) -> float:
        """Speed relative to the 2500 rpm reference point."""
        return speed / self.constants.REFERENCE_SPEED

    def operating_hours(self, hours: float, dt: float) -> float:
        """Accumulate operating time (dt in seconds)."""
        return hours + dt / 3600.0

    def bearing_wear(
        self,
        wear: float,
        speed: float,
        load: float,
        temperature: float,
        dt: float
    ) -> float:
        """
        Accumulate bearing wear.

        Formula:
            wear += speedFactor × load × (1 + 0.5 × tempFactor) × hours × 0.0008

        Where tempFactor = (temperature - 65) / 30.
        Wear never decreases; only an explicit reset restores it.
        """
        c = self.constants
        temp_factor = (temperature - c.REFERENCE_TEMP) / c.WEAR_TEMP_SPAN
        increment = (
            self.speed_factor(speed) * load * (1.0 + 0.5 * temp_factor)
            * (dt / 3600.0) * c.BEARING_WEAR_RATE
        )
        return clamp(wear + max(0.0, increment), 0.0, 1.0)

    def oil_degradation(self, degradation: float, temperature: float, dt: float) -> float:
        """
        Accumulate oil degradation.

        Formula:
            degradation += (1 + 0.3 × (temperature - 65) / 20) × hours × 0.00015
        """
        c = self.constants
        temp_factor = (temperature - c.REFERENCE_TEMP) / c.OIL_TEMP_SPAN
        increment = (1.0 + 0.3 * temp_factor) * (dt / 3600.0) * c.OIL_DEGRADATION_RATE
        return clamp(degradation + max(0.0, increment), 0.0, 1.0)

    def temperature(
        self,
        temperature: float,
        speed: float,
        load: float,
        ambient: float,
        dt: float
    ) -> float:
        """
        First-order thermal model with load/speed heating and convective cooling.

        Formula:
            heat    = load × 15 + speedFactor × 8
            cooling = 0.8 + speedFactor × 0.4
            T      += (heat - cooling × (T - ambient)) × (dt / 60)

        Clamped to [ambient, 120] °C.
        """
        c = self.constants
        sf = self.speed_factor(speed)
        heat_generation = load * c.HEAT_PER_LOAD + sf * c.HEAT_PER_SPEED
        cooling_rate = c.BASE_COOLING + sf * c.COOLING_PER_SPEED
        temperature += (heat_generation - cooling_rate * (temperature - ambient)) * (dt / 60.0)
        return clamp(temperature, ambient, c.MAX_TEMP)

    def efficiency(
        self,
        wear: float,
        oil_degradation: float,
        temperature: float,
        load: float
    ) -> float:
        """
        Efficiency (%) after wear, lubricant, thermal and part-load losses.

        Formula:
            95 - wear×120 - oil×80 - max(0, (T-75)×0.2) - |load-0.8|×5

        Clamped to [70, 96].
        """
        c = self.constants
        value = (
            c.BASE_EFFICIENCY
            - wear * 120.0
            - oil_degradation * 80.0
            - max(0.0, (temperature - c.DERATE_TEMP) * 0.2)
            - abs(load - c.OPTIMAL_LOAD) * 5.0
        )
        return clamp(value, c.MIN_EFFICIENCY, c.MAX_EFFICIENCY)

    def vibration(self, speed: float, load: float, wear: float, hours: float) -> float:
        """
        Vibration magnitude (mm/s) from harmonics, wear and slow resonance.

        Formula:
            1.0 + sin(speed×0.01)×0.3 + sin(load×10)×0.2 + wear×15 + sin(hours×0.5)×0.1
        """
        c = self.constants
        value = (
            1.0
            + math.sin(speed * 0.01) * 0.3
            + math.sin(load * 10.0) * 0.2
            + wear * 15.0
            + math.sin(hours * 0.5) * 0.1
        )
        return clamp(value, c.MIN_VIBRATION, c.MAX_VIBRATION)

    def speed(
        self,
        current: float,
        target: float,
        load: float,
        temperature: float,
        efficiency: float,
        dt: float
    ) -> float:
        """
        Proportional speed control toward a load/thermal-adjusted setpoint.

        Formula:
            setpoint = target + (load-0.7)×300 - (T-65)×1.5 - (eff-90)×2
            speed   += (setpoint - speed) × 0.1 × (dt / 60)

        Clamped to [0.7 × target, 1.3 × target].
        """
        c = self.constants
        setpoint = (
            target
            + (load - 0.7) * 300.0
            - (temperature - c.REFERENCE_TEMP) * 1.5
            - (efficiency - 90.0) * 2.0
        )
        speed_change = (setpoint - current) * c.SPEED_GAIN
        current += speed_change * (dt / 60.0)
        return clamp(current, target * c.MIN_SPEED_RATIO, target * c.MAX_SPEED_RATIO)

    def load(self, hours: float, efficiency: float, seasonal: float) -> float:
        """
        Load fraction from production cycles and demand patterns.

        Formula:
            0.75 + sin(h×0.05)×0.15 + sin(h×0.2)×0.1 + (eff-90)×0.01 + seasonal×0.05

        Clamped to [0.2, 1.0].
        """
        c = self.constants
        value = (
            0.75
            + math.sin(hours * 0.05) * 0.15     # ~20 hour production cycle
            + math.sin(hours * 0.2) * 0.1       # ~5 hour demand variation
            + (efficiency - 90.0) * 0.01
            + seasonal * 0.05
        )
        return clamp(value, c.MIN_LOAD, c.MAX_LOAD)

    def power(
        self,
        load: float,
        efficiency: float,
        temperature: float,
        wear: float
    ) -> float:
        """
        Power draw (kW).

        Formula:
            4.5 + load×1.8 + (100-eff)×0.15 + (T-65)×0.05 + wear×50

        Clamped to [2, 15].
        """
        c = self.constants
        value = (
            c.BASE_POWER
            + load * 1.8
            + (100.0 - efficiency) * 0.15
            + (temperature - c.REFERENCE_TEMP) * 0.05
            + wear * 50.0
        )
        return clamp(value, c.MIN_POWER, c.MAX_POWER)

    def health_score(
        self,
        wear: float,
        oil_degradation: float,
        temperature: float,
        vibration: float,
        efficiency: float,
        hours: float
    ) -> float:
        """
        Composite machine health (0-100).

        Formula:
            100 - wear×250 - oil×150 - max(0,(T-75)×0.8)
                - (vib-1)×12 - (100-eff)×0.8 - hours×0.01
        """
        c = self.constants
        value = (
            100.0
            - wear * 250.0
            - oil_degradation * 150.0
            - max(0.0, (temperature - c.DERATE_TEMP) * 0.8)
            - (vibration - 1.0) * 12.0
            - (100.0 - efficiency) * 0.8
            - hours * 0.01
        )
        return clamp(value, c.MIN_HEALTH, c.MAX_HEALTH)

    # =========================================
    # Full ordered pass
    # =========================================

    def update(self, machine: Any, elapsed_seconds: float, seasonal: float) -> bool:
        """
        Advance one machine by ``elapsed_seconds`` of simulated time.

        Stopped machines are frozen and left untouched.

        Args:
            machine: Object exposing the Machine state attributes
            elapsed_seconds: Simulated time step (seconds)
            seasonal: Seasonal factor for this pass

        Returns:
            True if the machine was updated
        """
        if not machine.is_running:
            return False

        dt = elapsed_seconds
        ambient = ambient_temperature(seasonal)

        machine.operating_hours = self.operating_hours(machine.operating_hours, dt)
        machine.bearing_wear = self.bearing_wear(
            machine.bearing_wear, machine.current_speed, machine.load,
            machine.temperature, dt
        )
        machine.oil_degradation = self.oil_degradation(
            machine.oil_degradation, machine.temperature, dt
        )
        machine.temperature = self.temperature(
            machine.temperature, machine.current_speed, machine.load, ambient, dt
        )
        machine.efficiency = self.efficiency(
            machine.bearing_wear, machine.oil_degradation,
            machine.temperature, machine.load
        )
        machine.vibration = self.vibration(
            machine.current_speed, machine.load,
            machine.bearing_wear, machine.operating_hours
        )
        machine.current_speed = self.speed(
            machine.current_speed, machine.target_speed, machine.load,
            machine.temperature, machine.efficiency, dt
        )
        machine.load = self.load(machine.operating_hours, machine.efficiency, seasonal)
        machine.power_consumption = self.power(
            machine.load, machine.efficiency, machine.temperature, machine.bearing_wear
        )
        machine.health_score = self.health_score(
            machine.bearing_wear, machine.oil_degradation, machine.temperature,
            machine.vibration, machine.efficiency, machine.operating_hours
        )
        machine.maintenance_status = classify_maintenance(
            bearing_wear=machine.bearing_wear,
            oil_degradation=machine.oil_degradation,
            temperature=machine.temperature,
            vibration=machine.vibration,
            efficiency=machine.efficiency,
            operating_hours=machine.operating_hours,
        )
        return True
