"""
Core Module - Motor Telemetry Twin

This module contains the stateless calculations behind the simulation:
- Calendar helpers (working hours, seasonal factor)
- Machine physics stages (wear, thermal, efficiency, speed, load, power)
- Maintenance status classification
- Motor health scoring
- Range guard for documented physical ranges

These components hold no state and draw no random numbers, so they can
be used by the engines, the API and the tests alike.
"""

from .seasonality import is_working_hours, seasonal_factor, ambient_temperature
from .physics import MachinePhysics, PhysicsConstants, clamp
from .maintenance import MaintenanceStatus, MaintenanceThresholds, classify_maintenance
from .health_score import MotorHealthEngine, HealthScore, HealthCategory, calculate_motor_health
from .validators import RangeGuard, ValidationResult, validate_state

__all__ = [
    # Calendar
    "is_working_hours",
    "seasonal_factor",
    "ambient_temperature",

    # Physics
    "MachinePhysics",
    "PhysicsConstants",
    "clamp",

    # Maintenance
    "MaintenanceStatus",
    "MaintenanceThresholds",
    "classify_maintenance",

    # Health scoring
    "MotorHealthEngine",
    "HealthScore",
    "HealthCategory",
    "calculate_motor_health",

    # Validation
    "RangeGuard",
    "ValidationResult",
    "validate_state",
]

__version__ = "0.1.0"
