"""
Entity Models for the Simulation Engines

Plain dataclasses holding simulated state:
- Machine: one industrial unit in the fleet
- EdgeNode: an edge-compute node serving machines
- MLModel: a predictive model whose metrics drift over time
- MotorState: the single aggregate motor's core physical state

Engines own the live instances; hosts only ever receive ``copy()``
results, so mutating a returned object never changes engine state.
"""

import copy
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Tuple

from core.maintenance import MaintenanceStatus


class MachineType(IntEnum):
    """Machine categories. Integer values are part of the host contract."""
    MOTOR = 0
    PUMP = 1
    CONVEYOR = 2
    COMPRESSOR = 3
    FAN = 4
    GENERATOR = 5
    TURBINE = 6
    CRUSHER = 7
    MIXER = 8
    PRESS = 9


# Values restored by an explicit reset
RESET_HEALTH_SCORE = 95.0


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, IntEnum):
        return int(value)
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass
class Machine:
    """
    State of one simulated industrial machine.

    Speeds are in rpm, temperature in °C, power in kW, vibration in mm/s,
    pressure in bar and flow in m³/h. ``load`` is a fraction of rated load.
    """
    id: str
    name: str
    type: MachineType
    is_running: bool
    current_speed: float
    target_speed: float
    temperature: float
    load: float
    efficiency: float
    power_consumption: float
    vibration: float
    pressure: float
    flow_rate: float
    health_score: float
    installed_at: datetime
    last_maintenance: datetime
    bearing_wear: float = 0.0
    oil_degradation: float = 0.0
    operating_hours: float = 0.0
    maintenance_status: MaintenanceStatus = MaintenanceStatus.GOOD

    def reset_wear(self, now: datetime) -> None:
        """Restore cumulative wear fields as if freshly serviced."""
        self.bearing_wear = 0.0
        self.oil_degradation = 0.0
        self.operating_hours = 0.0
        self.health_score = RESET_HEALTH_SCORE
        self.maintenance_status = MaintenanceStatus.GOOD
        self.last_maintenance = now

    def copy(self) -> "Machine":
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {k: _serialize(v) for k, v in asdict(self).items()}
        data["type_name"] = self.type.name.lower()
        data["maintenance_label"] = self.maintenance_status.label
        return data


@dataclass
class EdgeNode:
    """
    State of one edge-compute node.

    Utilisation values are percentages, latency and processing time are
    in milliseconds, storage in GB and bandwidth in percent of link.
    Offline nodes stay frozen at zero.
    """
    id: str
    name: str
    location: str
    is_online: bool
    cpu_usage: float
    memory_usage: float
    network_latency: float
    processing_time: float
    storage_used: float
    bandwidth_usage: float
    connected_machines: int
    last_sync: datetime
    uptime_seconds: float = 0.0

    def copy(self) -> "EdgeNode":
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {k: _serialize(v) for k, v in asdict(self).items()}


@dataclass
class MLModel:
    """
    State of one predictive model.

    ``failure_probability`` is a percentage derived from fleet health and
    ``remaining_useful_life`` is in hours. ``feature_weights`` is fixed and
    informational only.
    """
    id: str
    name: str
    accuracy: float
    confidence: float
    failure_probability: float
    remaining_useful_life: float
    feature_weights: Tuple[float, ...]
    last_training: datetime
    prediction_count: int = 0

    def copy(self) -> "MLModel":
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {k: _serialize(v) for k, v in asdict(self).items()}


@dataclass
class MotorState:
    """
    Core physical state of the single aggregate motor.

    Derived display metrics (see engine.daily_life) are computed from
    this state and never written back into it.
    """
    speed: float = 2500.0
    temperature: float = 65.0
    load: float = 0.7
    efficiency: float = 92.0
    power_consumption: float = 6.0
    vibration_x: float = 1.2
    vibration_y: float = 0.96
    vibration_z: float = 0.72
    vibration: float = 1.70
    bearing_wear: float = 0.0
    oil_degradation: float = 0.0
    runtime_seconds: float = 0.0
    is_running: bool = True
    maintenance_status: MaintenanceStatus = MaintenanceStatus.GOOD
    system_health: float = 95.0
    ambient_temperature: float = 22.0
    coolant_flow_rate: float = 15.0

    # Physics-pass results before the stratified override
    physics_speed: float = 2500.0
    physics_temperature: float = 65.0
    physics_efficiency: float = 92.0

    # Seasonal factor of the last pass
    seasonal: float = 0.0

    # Scenario names drawn on the last pass
    speed_scenario: str = ""
    thermal_scenario: str = ""
    efficiency_scenario: str = ""

    @property
    def operating_hours(self) -> float:
        return self.runtime_seconds / 3600.0

    def copy(self) -> "MotorState":
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {k: _serialize(v) for k, v in asdict(self).items()}
        data["operating_hours"] = self.operating_hours
        return data
