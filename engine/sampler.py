"""
Reading Sampler

Takes one consistent reading from the aggregate motor: starts a new
tick, reads the whole legacy sensor surface from that single physics
pass, then classifies the reading, titles it and raises alerts.

Status priority (first match wins):
    critical    - temperature > 90, vibration > 5.0, efficiency < 75,
                  oil pressure < 2.0, bearing health < 70 or system health < 60
    warning     - temperature > 80, vibration > 4.0, efficiency < 85,
                  oil pressure < 2.5, bearing health < 80 or system health < 75
    maintenance - system health < 85
    normal      - otherwise
"""

import logging
import uuid
from collections import deque
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional

from core.maintenance import MaintenanceStatus
from core.validators import RangeGuard, ValidationResult
from .motor import AggregateMotor

logger = logging.getLogger(__name__)


MACHINE_ID = "MOTOR-001"

# Readings kept for window analytics (OEE, health trends)
DEFAULT_HISTORY_SIZE = 100


@dataclass
class Alert:
    """A threshold crossing raised for one reading."""
    type: str
    severity: str         # "critical", "warning" or "info"
    message: str
    machine_id: str = MACHINE_ID
    timestamp: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "severity": self.severity,
            "message": self.message,
            "machine_id": self.machine_id,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


@dataclass
class MotorReading:
    """
    One complete sampled reading of the aggregate motor.

    Every field comes from the same physics pass.
    """
    timestamp: datetime
    machine_id: str
    title: str
    status: str

    # Motion
    speed: int
    rpm: float
    torque: float
    shaft_position: float
    displacement: float

    # Temperature and vibration
    temperature: int
    vibration_x: float
    vibration_y: float
    vibration_z: float
    vibration: float

    # Pressure and flow
    oil_pressure: float
    air_pressure: float
    hydraulic_pressure: float
    coolant_flow_rate: float
    fuel_flow_rate: float

    # Electrical
    voltage: float
    current: float
    power_factor: float
    power_consumption: float
    efficiency: float
    load: float

    # Environment
    humidity: float
    ambient_temperature: float
    ambient_pressure: float

    # Strain and acoustics
    strain_gauge_1: float
    strain_gauge_2: float
    strain_gauge_3: float
    sound_level: float

    # Wear and status
    bearing_health: float
    bearing_wear: float
    oil_degradation: float
    operating_hours: int
    operating_minutes: int
    operating_seconds: float
    maintenance_status: int
    system_health: int

    alerts: List[Alert] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["alerts"] = [alert.to_dict() for alert in self.alerts]
        return data


def determine_status(
    temperature: float,
    vibration: float,
    efficiency: float,
    oil_pressure: float,
    bearing_health: float,
    system_health: float
) -> str:
    """Classify a reading as critical, warning, maintenance or normal."""
    if (temperature > 90 or vibration > 5.0 or efficiency < 75
            or oil_pressure < 2.0 or bearing_health < 70 or system_health < 60):
        return "critical"
    if (temperature > 80 or vibration > 4.0 or efficiency < 85
            or oil_pressure < 2.5 or bearing_health < 80 or system_health < 75):
        return "warning"
    if system_health < 85:
        return "maintenance"
    return "normal"


def title_prefix(speed: float, temperature: float, system_health: float) -> str:
    """Operating-condition prefix for a reading title."""
    if speed > 2800:
        return "High-speed"
    if speed < 2200:
        return "Low-speed"
    if temperature > 80:
        return "High-temp"
    if temperature < 50:
        return "Cool"
    if system_health >= 95:
        return "Optimal"
    if system_health < 75:
        return "Degraded"
    return "Standard"


def health_indicator(system_health: float) -> str:
    if system_health >= 90:
        return "green"
    if system_health >= 75:
        return "yellow"
    if system_health >= 60:
        return "orange"
    return "red"


def reading_title(speed: int, temperature: int, status: str, system_health: int) -> str:
    """
    Build a human-readable, unique reading title.

    Example:
        "[NORMAL] green Optimal Operation - 2450RPM @ 68°C (Health: 96%) [1f3a9c0e]"
    """
    prefix = title_prefix(speed, temperature, system_health)
    unique_id = uuid.uuid4().hex[:8]
    return (
        f"[{status.upper()}] {health_indicator(system_health)} {prefix} Operation - "
        f"{speed}RPM @ {temperature}°C (Health: {system_health}%) [{unique_id}]"
    )


def build_alerts(reading: MotorReading) -> List[Alert]:
    """Raise one alert per crossed threshold, critical taking precedence."""
    alerts: List[Alert] = []

    def add(alert_type: str, severity: str, message: str) -> None:
        alerts.append(Alert(
            type=alert_type,
            severity=severity,
            message=message,
            machine_id=reading.machine_id,
            timestamp=reading.timestamp,
        ))

    if reading.temperature > 90:
        add("temperature", "critical", f"CRITICAL: Temperature {reading.temperature}°C exceeds safe limits")
    elif reading.temperature > 80:
        add("temperature", "warning", f"WARNING: High temperature {reading.temperature}°C detected")

    if reading.vibration > 5.0:
        add("vibration", "critical", f"CRITICAL: Excessive vibration {reading.vibration:.2f} mm/s detected")
    elif reading.vibration > 4.0:
        add("vibration", "warning", f"WARNING: High vibration {reading.vibration:.2f} mm/s detected")

    if reading.oil_pressure < 2.0:
        add("pressure", "critical", f"CRITICAL: Low oil pressure {reading.oil_pressure:.2f} bar")
    elif reading.oil_pressure < 2.5:
        add("pressure", "warning", f"WARNING: Low oil pressure {reading.oil_pressure:.2f} bar")

    if reading.bearing_health < 70:
        add("bearing", "critical",
            f"CRITICAL: Bearing health {reading.bearing_health:.1f}% - immediate attention required")
    elif reading.bearing_health < 80:
        add("bearing", "warning", f"WARNING: Bearing health {reading.bearing_health:.1f}% - monitor closely")

    if reading.system_health < 60:
        add("system", "critical", f"CRITICAL: System health {reading.system_health}% - shutdown recommended")
    elif reading.system_health < 75:
        add("system", "warning", f"WARNING: System health {reading.system_health}% - performance degraded")

    if reading.efficiency < 75:
        add("efficiency", "critical", f"CRITICAL: Low efficiency {reading.efficiency:.1f}% - energy waste detected")
    elif reading.efficiency < 85:
        add("efficiency", "warning", f"WARNING: Low efficiency {reading.efficiency:.1f}% - optimization needed")

    if reading.maintenance_status == MaintenanceStatus.MAINTENANCE_DUE:
        add("maintenance", "info",
            f"MAINTENANCE: Scheduled maintenance due - {reading.operating_hours} operating hours")

    return alerts


class ReadingSampler:
    """
    Samples complete readings from an AggregateMotor.

    Example:
        sampler = ReadingSampler(AggregateMotor())
        reading = sampler.sample()
        print(reading.title, len(reading.alerts))
    """

    def __init__(
        self,
        motor: AggregateMotor,
        guard: Optional[RangeGuard] = None,
        history_size: int = DEFAULT_HISTORY_SIZE
    ):
        self.motor = motor
        self.guard = guard or RangeGuard()
        self.last_validation: Optional[ValidationResult] = None
        self.history: Deque[MotorReading] = deque(maxlen=history_size)

    def sample(
        self,
        timestamp: Optional[datetime] = None,
        advance_seconds: Optional[float] = None
    ) -> MotorReading:
        """
        Start a new tick and read every sensor from it.

        Args:
            timestamp: Reading timestamp (defaults to the motor's clock)
            advance_seconds: Step the motor by this much simulated time
                instead of letting the wall clock drive the tick

        Returns:
            MotorReading with status, title and alerts filled in
        """
        m = self.motor
        if advance_seconds is None:
            m.reset_for_next_reading()
        else:
            m.advance(advance_seconds)

        speed = m.motor_speed()
        temperature = m.motor_temperature()
        vibration = m.vibration()
        efficiency = m.efficiency()
        oil_pressure = m.oil_pressure()
        bearing = round(m.bearing_health(), 1)
        system_health = m.system_health()

        status = determine_status(
            temperature, vibration, efficiency, oil_pressure, bearing, system_health
        )

        reading = MotorReading(
            timestamp=timestamp or m.clock(),
            machine_id=MACHINE_ID,
            title=reading_title(speed, temperature, status, system_health),
            status=status,
            speed=speed,
            rpm=m.rpm(),
            torque=m.torque(),
            shaft_position=m.shaft_position(),
            displacement=m.displacement(),
            temperature=temperature,
            vibration_x=m.vibration_x(),
            vibration_y=m.vibration_y(),
            vibration_z=m.vibration_z(),
            vibration=vibration,
            oil_pressure=oil_pressure,
            air_pressure=m.air_pressure(),
            hydraulic_pressure=m.hydraulic_pressure(),
            coolant_flow_rate=m.coolant_flow_rate(),
            fuel_flow_rate=m.fuel_flow_rate(),
            voltage=m.voltage(),
            current=m.current(),
            power_factor=m.power_factor(),
            power_consumption=m.power_consumption(),
            efficiency=efficiency,
            load=m.state.load,
            humidity=m.humidity(),
            ambient_temperature=m.ambient_temperature(),
            ambient_pressure=m.ambient_pressure(),
            strain_gauge_1=m.strain_gauge_1(),
            strain_gauge_2=m.strain_gauge_2(),
            strain_gauge_3=m.strain_gauge_3(),
            sound_level=m.sound_level(),
            bearing_health=bearing,
            bearing_wear=m.bearing_wear(),
            oil_degradation=m.oil_degradation(),
            operating_hours=m.operating_hours(),
            operating_minutes=m.operating_minutes(),
            operating_seconds=round(m.operating_seconds(), 2),
            maintenance_status=m.maintenance_status(),
            system_health=system_health,
        )
        reading.alerts = build_alerts(reading)

        self.last_validation = self.guard.validate(reading.to_dict())
        self.history.append(reading)
        logger.debug(f"Sampled {reading.title} with {len(reading.alerts)} alert(s)")
        return reading
