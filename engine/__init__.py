"""
Engine Module - Stateful Telemetry Simulation

This module owns all simulated state and randomness for the Motor
Telemetry Twin.

Key Components:
- FleetEngine: 17 machines, 9 edge nodes and 6 ML models behind
  index-based accessors with sentinel values for bad indices
- AggregateMotor: single motor with the legacy flat sensor surface,
  scenario-driven physics and stratified readings
- ReadingSampler: one consistent, classified reading per tick
- TelemetryGenerator: batches of readings exported to JSON or CSV
- Analytics: maintenance schedule, energy analysis, OEE and window
  health analysis over engine output
- EngineConfig: settings read from ENGINE_* environment variables

Usage:
    from engine import FleetEngine, AggregateMotor, ReadingSampler, EngineConfig

    config = EngineConfig(seed=42)
    fleet = FleetEngine(config)
    print(fleet.machine_count(), fleet.system_health_score())

    sampler = ReadingSampler(AggregateMotor(config))
    reading = sampler.sample()
    print(reading.title)
"""

from .config import EngineConfig
from .random_source import RandomSource, SeededRandom
from .models import Machine, MachineType, EdgeNode, MLModel, MotorState
from .registry import FleetRegistry
from .coalescer import UpdateCoalescer
from .fleet import FleetEngine
from .scenarios import (
    ScenarioLibrary,
    StratifiedBand,
    SPEED_SCENARIOS,
    THERMAL_SCENARIOS,
    EFFICIENCY_SCENARIOS,
)
from .daily_life import DailyLifeMetrics, compute_daily_life
from .motor import AggregateMotor
from .sampler import ReadingSampler, MotorReading, Alert
from .generator import TelemetryGenerator, generate_motor_readings
from .analytics import (
    MaintenancePriority,
    MaintenanceTask,
    MaintenanceSchedule,
    EnergyAnalysis,
    OEEAnalysis,
    HealthAnalysis,
    RiskLevel,
    generate_maintenance_schedule,
    analyze_energy,
    calculate_oee,
    analyze_health,
)
from .interface import (
    MachineTelemetry,
    EdgeTelemetry,
    ModelTelemetry,
    SystemTelemetry,
    FleetControl,
    MotorTelemetry,
)

__all__ = [
    # Configuration and randomness
    "EngineConfig",
    "RandomSource",
    "SeededRandom",

    # Entities
    "Machine",
    "MachineType",
    "EdgeNode",
    "MLModel",
    "MotorState",

    # Fleet
    "FleetRegistry",
    "UpdateCoalescer",
    "FleetEngine",

    # Aggregate motor
    "ScenarioLibrary",
    "StratifiedBand",
    "SPEED_SCENARIOS",
    "THERMAL_SCENARIOS",
    "EFFICIENCY_SCENARIOS",
    "DailyLifeMetrics",
    "compute_daily_life",
    "AggregateMotor",

    # Sampling and export
    "ReadingSampler",
    "MotorReading",
    "Alert",
    "TelemetryGenerator",
    "generate_motor_readings",

    # Analytics
    "MaintenancePriority",
    "MaintenanceTask",
    "MaintenanceSchedule",
    "EnergyAnalysis",
    "OEEAnalysis",
    "HealthAnalysis",
    "RiskLevel",
    "generate_maintenance_schedule",
    "analyze_energy",
    "calculate_oee",
    "analyze_health",

    # Capability interfaces
    "MachineTelemetry",
    "EdgeTelemetry",
    "ModelTelemetry",
    "SystemTelemetry",
    "FleetControl",
    "MotorTelemetry",
]

__version__ = "0.1.0"
