"""
Maintenance Status Classification

Maps the current condition of a machine onto one of four maintenance
states. Rules are evaluated in priority order and the first match wins:

1. Critical        - any hard limit exceeded
2. Warning         - any soft limit exceeded
3. MaintenanceDue  - service interval reached (every 100 operating hours)
4. Good            - otherwise

The integer values are part of the host contract and must not change.
"""

import math
from dataclasses import dataclass
from enum import IntEnum


class MaintenanceStatus(IntEnum):
    """Maintenance states reported to hosts."""
    GOOD = 0
    WARNING = 1
    CRITICAL = 2
    MAINTENANCE_DUE = 3

    @property
    def label(self) -> str:
        """Display label used by dashboards."""
        return _LABELS[self]


_LABELS = {
    MaintenanceStatus.GOOD: "Good",
    MaintenanceStatus.WARNING: "Warning",
    MaintenanceStatus.CRITICAL: "Critical",
    MaintenanceStatus.MAINTENANCE_DUE: "MaintenanceDue",
}


@dataclass(frozen=True)
class MaintenanceThresholds:
    """Limits used by :func:`classify_maintenance`."""

    # Critical (hard) limits
    critical_wear: float = 0.1
    critical_oil: float = 0.05
    critical_temperature: float = 90.0      # °C
    critical_vibration: float = 3.0         # mm/s

    # Warning (soft) limits
    warning_wear: float = 0.05
    warning_oil: float = 0.02
    warning_temperature: float = 80.0       # °C
    warning_vibration: float = 2.5          # mm/s
    warning_efficiency: float = 85.0        # %

    # Scheduled service interval
    service_interval_hours: int = 100


DEFAULT_THRESHOLDS = MaintenanceThresholds()


def is_service_due(operating_hours: float, interval: int = 100) -> bool:
    """True when floor(hours) is a positive multiple of the interval."""
    whole_hours = math.floor(operating_hours)
    return whole_hours > 0 and whole_hours % interval == 0


def classify_maintenance(
    bearing_wear: float,
    oil_degradation: float,
    temperature: float,
    vibration: float,
    efficiency: float,
    operating_hours: float,
    thresholds: MaintenanceThresholds = DEFAULT_THRESHOLDS
) -> MaintenanceStatus:
    """
    Classify machine condition into a maintenance status.

    Args:
        bearing_wear: Cumulative bearing wear (0-1)
        oil_degradation: Cumulative oil degradation (0-1)
        temperature: Machine temperature (°C)
        vibration: Vibration magnitude (mm/s)
        efficiency: Efficiency (%)
        operating_hours: Cumulative operating hours

    Returns:
        MaintenanceStatus of the highest-priority matching rule
    """
    t = thresholds

    if (bearing_wear > t.critical_wear
            or oil_degradation > t.critical_oil
            or temperature > t.critical_temperature
            or vibration > t.critical_vibration):
        return MaintenanceStatus.CRITICAL

    if (bearing_wear > t.warning_wear
            or oil_degradation > t.warning_oil
            or temperature > t.warning_temperature
            or vibration > t.warning_vibration
            or efficiency < t.warning_efficiency):
        return MaintenanceStatus.WARNING

    if is_service_due(operating_hours, t.service_interval_hours):
        return MaintenanceStatus.MAINTENANCE_DUE

    return MaintenanceStatus.GOOD
