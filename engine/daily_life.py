"""
Daily-Life Application Metrics

Translates the aggregate motor's state into everyday equivalents (home
HVAC, vehicles, recreation, appliances) for consumer-facing dashboards.
Every metric is a pure function of one MotorState; nothing here is
written back into the motor.

Percentages are clamped to [0, 100]. Counts and physical quantities
(flow, energy, engine hours) are only floored at zero.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict

from core.maintenance import MaintenanceStatus
from core.physics import clamp
from .models import MotorState


def _pct(value: float) -> float:
    return clamp(value, 0.0, 100.0)


@dataclass(frozen=True)
class DailyLifeMetrics:
    """Consumer-facing equivalents of the current motor reading."""

    # Home
    hvac_efficiency: float
    energy_savings: float
    comfort_level: float
    air_quality: float
    smart_devices: int

    # Vehicle
    fuel_efficiency: float
    engine_health: float
    battery_level: float
    tire_pressure: float
    vehicle_maintenance_due: bool

    # Recreation
    boat_engine_efficiency: float
    boat_engine_hours: int
    blade_sharpness: float
    fuel_level: float
    generator_power_output: float
    generator_fuel_efficiency: float
    pool_pump_flow_rate: float         # L/min
    pool_pump_energy_usage: float      # Wh

    # Appliances
    washing_machine_efficiency: float
    dishwasher_efficiency: float
    refrigerator_efficiency: float
    air_conditioner_efficiency: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def compute_daily_life(state: MotorState) -> DailyLifeMetrics:
    """
    Derive daily-life metrics from a motor state.

    Args:
        state: Aggregate motor state after a physics pass

    Returns:
        DailyLifeMetrics for the same tick
    """
    eff = state.efficiency
    temperature = state.temperature
    vibration = state.vibration
    power = state.power_consumption

    return DailyLifeMetrics(
        hvac_efficiency=_pct(eff),
        energy_savings=_pct(eff * 0.8),
        comfort_level=_pct(100.0 - (temperature - 50.0) * 2.0),
        air_quality=_pct(100.0 - vibration * 10.0),
        smart_devices=max(0, math.floor(state.speed / 100.0)),

        fuel_efficiency=_pct(eff * 1.2),
        engine_health=_pct(state.system_health),
        battery_level=_pct(100.0 - (temperature - 30.0) * 2.0),
        tire_pressure=_pct(100.0 - vibration * 15.0),
        vehicle_maintenance_due=state.maintenance_status > MaintenanceStatus.WARNING,

        boat_engine_efficiency=_pct(eff),
        boat_engine_hours=max(0, math.floor(state.operating_hours / 10.0)),
        blade_sharpness=_pct(100.0 - vibration * 20.0),
        fuel_level=_pct(100.0 - (temperature - 40.0) * 3.0),
        generator_power_output=max(0.0, power * 10.0),
        generator_fuel_efficiency=_pct(eff),
        pool_pump_flow_rate=max(0.0, state.coolant_flow_rate * 20.0),
        pool_pump_energy_usage=max(0.0, power * 15.0),

        washing_machine_efficiency=_pct(eff * 0.98),
        dishwasher_efficiency=_pct(eff * 0.95),
        refrigerator_efficiency=_pct(eff * 1.02 - max(0.0, state.ambient_temperature - 25.0) * 0.5),
        air_conditioner_efficiency=_pct(eff - max(0.0, temperature - 70.0) * 0.3),
    )
