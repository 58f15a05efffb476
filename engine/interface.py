"""
Capability Interfaces

Structural protocols describing what a host can ask of the engines,
grouped by entity kind. FleetEngine satisfies every fleet protocol and
AggregateMotor satisfies MotorTelemetry; hosts should depend on these
rather than on the concrete classes.
"""

from typing import Optional, Protocol, runtime_checkable

from core.health_score import HealthScore
from .daily_life import DailyLifeMetrics
from .models import Machine, EdgeNode, MLModel


@runtime_checkable
class MachineTelemetry(Protocol):
    def machine_count(self) -> int: ...
    def machine_id(self, index: int) -> str: ...
    def machine_name(self, index: int) -> str: ...
    def machine_type(self, index: int) -> int: ...
    def machine_running(self, index: int) -> bool: ...
    def machine_speed(self, index: int) -> float: ...
    def machine_temperature(self, index: int) -> float: ...
    def machine_load(self, index: int) -> float: ...
    def machine_efficiency(self, index: int) -> float: ...
    def machine_power(self, index: int) -> float: ...
    def machine_vibration(self, index: int) -> float: ...
    def machine_health(self, index: int) -> float: ...
    def machine_maintenance_status(self, index: int) -> int: ...
    def machine_snapshot(self, index: int) -> Optional[Machine]: ...


@runtime_checkable
class EdgeTelemetry(Protocol):
    def edge_node_count(self) -> int: ...
    def edge_node_id(self, index: int) -> str: ...
    def edge_node_name(self, index: int) -> str: ...
    def edge_node_location(self, index: int) -> str: ...
    def edge_node_online(self, index: int) -> bool: ...
    def edge_node_cpu(self, index: int) -> float: ...
    def edge_node_memory(self, index: int) -> float: ...
    def edge_node_latency(self, index: int) -> float: ...
    def edge_node_processing_time(self, index: int) -> float: ...
    def edge_node_snapshot(self, index: int) -> Optional[EdgeNode]: ...


@runtime_checkable
class ModelTelemetry(Protocol):
    def ml_model_count(self) -> int: ...
    def ml_model_id(self, index: int) -> str: ...
    def ml_model_name(self, index: int) -> str: ...
    def ml_model_accuracy(self, index: int) -> float: ...
    def ml_model_confidence(self, index: int) -> float: ...
    def ml_model_failure_probability(self, index: int) -> float: ...
    def ml_model_remaining_useful_life(self, index: int) -> float: ...
    def ml_model_snapshot(self, index: int) -> Optional[MLModel]: ...


@runtime_checkable
class SystemTelemetry(Protocol):
    def overall_efficiency(self) -> float: ...
    def total_power_consumption(self) -> float: ...
    def system_health_score(self) -> int: ...
    def is_working_hours(self) -> bool: ...
    def seasonal_factor(self) -> float: ...
    def reset_for_next_reading(self) -> None: ...


@runtime_checkable
class FleetControl(Protocol):
    def start_machine(self, index: int) -> None: ...
    def stop_machine(self, index: int) -> None: ...
    def set_target_speed(self, index: int, target_speed: float) -> None: ...
    def reset(self) -> None: ...
    def advance(self, dt: Optional[float] = None) -> None: ...


@runtime_checkable
class MotorTelemetry(Protocol):
    """Legacy single-motor surface (core subset)."""

    def motor_speed(self) -> int: ...
    def motor_temperature(self) -> int: ...
    def rpm(self) -> float: ...
    def torque(self) -> float: ...
    def vibration_x(self) -> float: ...
    def vibration_y(self) -> float: ...
    def vibration_z(self) -> float: ...
    def vibration(self) -> float: ...
    def oil_pressure(self) -> float: ...
    def power_consumption(self) -> float: ...
    def efficiency(self) -> float: ...
    def bearing_health(self) -> float: ...
    def operating_hours(self) -> int: ...
    def operating_minutes(self) -> int: ...
    def operating_seconds(self) -> float: ...
    def maintenance_status(self) -> int: ...
    def system_health(self) -> int: ...
    def health_report(self) -> HealthScore: ...
    def daily_life(self) -> DailyLifeMetrics: ...
    def start(self) -> None: ...
    def stop(self) -> None: ...
    def reset(self) -> None: ...
    def reset_for_next_reading(self) -> None: ...
