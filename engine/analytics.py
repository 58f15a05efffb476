"""
Fleet and Motor Analytics

Read-only analyses over engine output:
- Maintenance schedule: one prioritised task per machine that needs work
- Energy analysis: fleet power, daily energy and savings potential
- OEE: availability × performance × quality over a window of readings
- Health analysis: averaged health score, risk level, trends and
  anomalies over a window of readings

Machine analyses take ``Machine`` copies (``FleetEngine.machines()``);
reading analyses take ``MotorReading`` objects oldest first
(``ReadingSampler.history``). Nothing here mutates engine state.

Maintenance priority (first match wins):
    Critical - maintenance status CRITICAL or efficiency < 70
    High     - operating hours > 2000 or efficiency < 85
    Medium   - operating hours > 1500
    none     - otherwise (no task scheduled)
"""

import math
import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from core.maintenance import MaintenanceStatus
from .models import Machine, MachineType
from .sampler import MACHINE_ID, MotorReading


# =========================================
# Maintenance Schedule
# =========================================

class MaintenancePriority(Enum):
    """Priority of a scheduled maintenance task."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"

    @property
    def rank(self) -> int:
        return {"Critical": 1, "High": 2, "Medium": 3}[self.value]


# How far ahead each priority is scheduled
SCHEDULE_LEAD = {
    MaintenancePriority.CRITICAL: timedelta(hours=2),
    MaintenancePriority.HIGH: timedelta(days=1),
    MaintenancePriority.MEDIUM: timedelta(days=7),
}

TASK_TYPES = {
    MaintenancePriority.CRITICAL: "Emergency",
    MaintenancePriority.HIGH: "Preventive",
    MaintenancePriority.MEDIUM: "Routine",
}

# Base crew hours and cost per machine category
BASE_DURATION_HOURS = {
    MachineType.MOTOR: 4,
    MachineType.PUMP: 3,
    MachineType.COMPRESSOR: 6,
    MachineType.GENERATOR: 8,
}
DEFAULT_DURATION_HOURS = 4

EXTRA_DURATION_HOURS = {
    MaintenancePriority.CRITICAL: 0,
    MaintenancePriority.HIGH: 2,
    MaintenancePriority.MEDIUM: 4,
}

BASE_COST = {
    MachineType.MOTOR: 500.0,
    MachineType.PUMP: 400.0,
    MachineType.COMPRESSOR: 800.0,
    MachineType.GENERATOR: 1200.0,
}
DEFAULT_COST = 500.0

COST_MULTIPLIER = {
    MaintenancePriority.CRITICAL: 1.5,
    MaintenancePriority.HIGH: 1.2,
    MaintenancePriority.MEDIUM: 1.0,
}

REQUIRED_SKILLS = {
    MachineType.MOTOR: ["Electrical", "Mechanical"],
    MachineType.PUMP: ["Mechanical", "Hydraulic"],
    MachineType.COMPRESSOR: ["Mechanical", "Pneumatic"],
    MachineType.GENERATOR: ["Electrical", "Mechanical", "Control Systems"],
}
DEFAULT_SKILLS = ["General Maintenance"]

CRITICAL_EFFICIENCY = 70.0
LOW_EFFICIENCY = 85.0
HIGH_HOURS = 2000.0
MEDIUM_HOURS = 1500.0


@dataclass
class MaintenanceTask:
    """One scheduled maintenance job."""
    task_id: str
    machine_id: str
    machine_name: str
    task_type: str
    priority: MaintenancePriority
    scheduled_date: datetime
    estimated_duration_hours: int
    estimated_cost: float
    required_skills: List[str]
    description: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["priority"] = self.priority.value
        data["scheduled_date"] = self.scheduled_date.isoformat()
        return data


@dataclass
class MaintenanceSchedule:
    """Prioritised maintenance tasks, most urgent first."""
    generated_at: datetime
    tasks: List[MaintenanceTask] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return sum(task.estimated_cost for task in self.tasks)

    @property
    def total_hours(self) -> int:
        return sum(task.estimated_duration_hours for task in self.tasks)


def maintenance_priority(machine: Machine) -> Optional[MaintenancePriority]:
    """Priority of the work a machine needs, or None when it needs none."""
    if machine.maintenance_status == MaintenanceStatus.CRITICAL:
        return MaintenancePriority.CRITICAL
    if machine.efficiency < CRITICAL_EFFICIENCY:
        return MaintenancePriority.CRITICAL
    if machine.operating_hours > HIGH_HOURS or machine.efficiency < LOW_EFFICIENCY:
        return MaintenancePriority.HIGH
    if machine.operating_hours > MEDIUM_HOURS:
        return MaintenancePriority.MEDIUM
    return None


def task_description(machine: Machine, priority: MaintenancePriority) -> str:
    if priority == MaintenancePriority.CRITICAL:
        return (
            f"Emergency maintenance required for {machine.name} - "
            f"status {machine.maintenance_status.label}, efficiency {machine.efficiency:.1f}%"
        )
    if priority == MaintenancePriority.HIGH:
        return f"Preventive maintenance for {machine.name} - efficiency at {machine.efficiency:.1f}%"
    return f"Routine maintenance for {machine.name} - {machine.operating_hours:.0f} operating hours"


def build_task(machine: Machine, priority: MaintenancePriority, now: datetime) -> MaintenanceTask:
    machine_type = MachineType(machine.type)
    duration = BASE_DURATION_HOURS.get(machine_type, DEFAULT_DURATION_HOURS)
    cost = BASE_COST.get(machine_type, DEFAULT_COST)
    return MaintenanceTask(
        task_id=str(uuid.uuid4()),
        machine_id=machine.id,
        machine_name=machine.name,
        task_type=TASK_TYPES[priority],
        priority=priority,
        scheduled_date=now + SCHEDULE_LEAD[priority],
        estimated_duration_hours=duration + EXTRA_DURATION_HOURS[priority],
        estimated_cost=round(cost * COST_MULTIPLIER[priority], 2),
        required_skills=list(REQUIRED_SKILLS.get(machine_type, DEFAULT_SKILLS)),
        description=task_description(machine, priority),
    )


def generate_maintenance_schedule(machines: Sequence[Machine], now: datetime) -> MaintenanceSchedule:
    """
    Schedule maintenance for every machine that needs it.

    Args:
        machines: Machine copies to assess
        now: Reference time for scheduled dates

    Returns:
        MaintenanceSchedule sorted by priority, then scheduled date
    """
    tasks = []
    for machine in machines:
        priority = maintenance_priority(machine)
        if priority is not None:
            tasks.append(build_task(machine, priority, now))

    tasks.sort(key=lambda t: (t.priority.rank, t.scheduled_date))
    return MaintenanceSchedule(generated_at=now, tasks=tasks)


# =========================================
# Energy Analysis
# =========================================

NOMINAL_POWER_FACTOR = 0.92
ANALYSIS_HOURS = 24
SAVINGS_FRACTION = 0.15
HIGH_DAILY_ENERGY_KWH = 500.0


@dataclass
class EnergyAnalysis:
    """Fleet energy use over one analysis period."""
    analysis_period_hours: int
    running_machines: int
    total_power_kw: float
    daily_energy_kwh: float
    average_power_factor: float
    energy_efficiency: float
    cost_savings_potential_kwh: float
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze_energy(
    machines: Sequence[Machine],
    power_factor: float = NOMINAL_POWER_FACTOR
) -> EnergyAnalysis:
    """
    Summarise power draw and savings potential of running machines.

    Daily energy assumes the current draw holds for the whole period;
    savings potential is a fixed share of it.
    """
    running = [m for m in machines if m.is_running]
    if not running:
        return EnergyAnalysis(
            analysis_period_hours=ANALYSIS_HOURS,
            running_machines=0,
            total_power_kw=0.0,
            daily_energy_kwh=0.0,
            average_power_factor=0.0,
            energy_efficiency=0.0,
            cost_savings_potential_kwh=0.0,
            recommendations=["No running machines to analyse"],
        )

    total_power = sum(m.power_consumption for m in running)
    daily_energy = total_power * ANALYSIS_HOURS
    efficiency = sum(m.efficiency for m in running) / len(running)

    recommendations = []
    if power_factor < 0.9:
        recommendations.append("Improve power factor - consider power factor correction")
    if efficiency < LOW_EFFICIENCY:
        recommendations.append("Optimise machine efficiency to reduce energy consumption")
    if daily_energy > HIGH_DAILY_ENERGY_KWH:
        recommendations.append("Implement an energy management system for cost savings")

    return EnergyAnalysis(
        analysis_period_hours=ANALYSIS_HOURS,
        running_machines=len(running),
        total_power_kw=round(total_power, 2),
        daily_energy_kwh=round(daily_energy, 2),
        average_power_factor=round(power_factor, 3),
        energy_efficiency=round(efficiency, 2),
        cost_savings_potential_kwh=round(daily_energy * SAVINGS_FRACTION, 2),
        recommendations=recommendations,
    )


# =========================================
# Overall Equipment Effectiveness
# =========================================

IDEAL_SPEED_RPM = 2500.0
OEE_TARGET = 90.0


@dataclass
class OEEAnalysis:
    """Overall equipment effectiveness over a window of readings."""
    machine_id: str
    sample_count: int
    availability: float
    performance: float
    quality: float
    overall_oee: float
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def oee_recommendations(availability: float, performance: float, quality: float) -> List[str]:
    recommendations = []
    if availability < OEE_TARGET:
        recommendations.append("Improve availability - focus on reducing downtime")
    if performance < OEE_TARGET:
        recommendations.append("Optimise performance - check speed settings and load")
    if quality < OEE_TARGET:
        recommendations.append("Enhance quality - review process parameters")
    if not recommendations:
        recommendations.append("Excellent OEE performance - maintain current practices")
    return recommendations


def calculate_oee(readings: Sequence[MotorReading], machine_id: str = MACHINE_ID) -> OEEAnalysis:
    """
    Compute OEE from sampled readings.

    Formula:
        availability = non-critical readings / readings × 100
        performance  = min(100, mean speed / 2500 × 100)
        quality      = normal readings with efficiency > 85 / readings × 100
        overall      = availability × performance × quality / 10000
    """
    if not readings:
        return OEEAnalysis(
            machine_id=machine_id,
            sample_count=0,
            availability=0.0,
            performance=0.0,
            quality=0.0,
            overall_oee=0.0,
        )

    total = len(readings)
    operational = sum(1 for r in readings if r.status != "critical")
    good = sum(1 for r in readings if r.status == "normal" and r.efficiency > LOW_EFFICIENCY)
    mean_speed = sum(r.speed for r in readings) / total

    availability = operational / total * 100.0
    performance = min(100.0, mean_speed / IDEAL_SPEED_RPM * 100.0)
    quality = good / total * 100.0
    overall = availability * performance * quality / 10000.0

    return OEEAnalysis(
        machine_id=machine_id,
        sample_count=total,
        availability=round(availability, 2),
        performance=round(performance, 2),
        quality=round(quality, 2),
        overall_oee=round(overall, 2),
        recommendations=oee_recommendations(availability, performance, quality),
    )


# =========================================
# Health Analysis
# =========================================

class RiskLevel(Enum):
    """Failure risk over the analysed window."""
    UNKNOWN = "Unknown"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


MAINTENANCE_INTERVAL_HOURS = 2000.0
MAX_ANOMALIES = 10


@dataclass
class Trends:
    """Least-squares slope of each signal, per reading."""
    temperature: float = 0.0
    vibration: float = 0.0
    efficiency: float = 0.0
    power: float = 0.0


@dataclass
class Prediction:
    """A component expected to need attention."""
    component: str
    issue: str
    severity: str
    predicted_failure_time: datetime
    confidence: float
    description: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["predicted_failure_time"] = self.predicted_failure_time.isoformat()
        return data


@dataclass
class Anomaly:
    """A reading more than two standard deviations from the window mean."""
    timestamp: datetime
    sensor_type: str
    value: float
    expected_low: float
    expected_high: float
    severity: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


@dataclass
class HealthAnalysis:
    """Window-level health assessment of the aggregate motor."""
    machine_id: str
    analysis_timestamp: datetime
    sample_count: int
    overall_health_score: float
    risk_level: RiskLevel
    trends: Trends = field(default_factory=Trends)
    predictions: List[Prediction] = field(default_factory=list)
    anomalies: List[Anomaly] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def trend(values: Sequence[float]) -> float:
    """Least-squares slope of ``values`` against their index (0 for < 2 values)."""
    n = len(values)
    if n < 2:
        return 0.0
    sum_x = n * (n - 1) / 2.0
    sum_xx = (n - 1) * n * (2 * n - 1) / 6.0
    sum_y = sum(values)
    sum_xy = sum(i * y for i, y in enumerate(values))
    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def window_health_score(readings: Sequence[MotorReading]) -> float:
    """
    Mean of five window-averaged terms.

    Terms:
        temperature: 100 - (mean temperature - 50) × 2, clamped to 0-100
        vibration:   100 - mean vibration × 20, clamped to 0-100
        efficiency, bearing health and system health: window means
    """
    temperature_score = min(100.0, max(0.0, 100.0 - (_mean([r.temperature for r in readings]) - 50.0) * 2.0))
    vibration_score = min(100.0, max(0.0, 100.0 - _mean([r.vibration for r in readings]) * 20.0))
    scores = [
        temperature_score,
        vibration_score,
        _mean([r.efficiency for r in readings]),
        _mean([r.bearing_health for r in readings]),
        _mean([r.system_health for r in readings]),
    ]
    return _mean(scores)


def risk_level(score: float, readings: Sequence[MotorReading]) -> RiskLevel:
    critical = sum(1 for r in readings if r.status == "critical")
    warning = sum(1 for r in readings if r.status == "warning")
    if score < 40 or critical > 5:
        return RiskLevel.CRITICAL
    if score < 60 or warning > 10:
        return RiskLevel.HIGH
    if score < 80:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def predict_failures(readings: Sequence[MotorReading], trends: Trends, now: datetime) -> List[Prediction]:
    predictions = []

    if trends.temperature > 0.5:
        predictions.append(Prediction(
            component="Cooling System",
            issue="Rising Temperature Trend",
            severity="High" if trends.temperature > 1.0 else "Medium",
            predicted_failure_time=now + timedelta(days=max(0, 7 - int(trends.temperature * 5))),
            confidence=min(95.0, trends.temperature * 30.0 + 50.0),
            description=f"Temperature increasing at {trends.temperature:.2f}°C per reading",
        ))

    if len(readings) > 10 and trends.vibration > 0.1:
        predictions.append(Prediction(
            component="Bearing Assembly",
            issue="Increasing Vibration",
            severity="High" if trends.vibration > 0.3 else "Medium",
            predicted_failure_time=now + timedelta(days=max(0, 14 - int(trends.vibration * 20))),
            confidence=min(90.0, trends.vibration * 50.0 + 40.0),
            description=f"Vibration increasing at {trends.vibration:.3f} mm/s per reading",
        ))

    if len(readings) > 10 and trends.efficiency < -0.1:
        decline = abs(trends.efficiency)
        predictions.append(Prediction(
            component="Motor Efficiency",
            issue="Efficiency Degradation",
            severity="High" if trends.efficiency < -0.5 else "Medium",
            predicted_failure_time=now + timedelta(days=max(0, 30 - int(decline * 30))),
            confidence=min(85.0, decline * 40.0 + 45.0),
            description=f"Efficiency declining at {decline:.2f}% per reading",
        ))

    hours = readings[-1].operating_hours
    remaining = MAINTENANCE_INTERVAL_HOURS - hours
    if hours > 1000 and remaining < 200:
        predictions.append(Prediction(
            component="General Maintenance",
            issue="Scheduled Maintenance Due",
            severity="High" if remaining < 50 else "Medium",
            predicted_failure_time=now + timedelta(hours=max(0.0, remaining)),
            confidence=95.0,
            description=f"Maintenance due in {max(0.0, remaining):.0f} operating hours",
        ))

    predictions.sort(key=lambda p: 0 if p.severity == "High" else 1)
    return predictions


def _outliers(readings: Sequence[MotorReading], sensor: str) -> List[Anomaly]:
    values = [float(getattr(r, sensor)) for r in readings]
    mean = _mean(values)
    std = math.sqrt(_mean([(v - mean) ** 2 for v in values]))
    anomalies = []
    for reading, value in zip(readings, values):
        deviation = abs(value - mean)
        if deviation > 2 * std:
            anomalies.append(Anomaly(
                timestamp=reading.timestamp,
                sensor_type=sensor.title(),
                value=value,
                expected_low=round(mean - 2 * std, 2),
                expected_high=round(mean + 2 * std, 2),
                severity="High" if deviation > 3 * std else "Medium",
            ))
    return anomalies


def detect_anomalies(readings: Sequence[MotorReading]) -> List[Anomaly]:
    """Temperature and vibration outliers, high severity first (at most 10)."""
    if len(readings) < 10:
        return []
    anomalies = _outliers(readings, "temperature") + _outliers(readings, "vibration")
    anomalies.sort(key=lambda a: 0 if a.severity == "High" else 1)
    return anomalies[:MAX_ANOMALIES]


def health_recommendations(readings: Sequence[MotorReading]) -> List[str]:
    recommendations = []

    temperature = _mean([r.temperature for r in readings])
    if temperature > 80:
        recommendations.append("Check cooling system - temperature consistently high")
    elif temperature < 30:
        recommendations.append("Verify heating system - temperature unusually low")

    if _mean([r.vibration for r in readings]) > 4.0:
        recommendations.append("Inspect bearings and mounting - high vibration detected")
    if _mean([r.efficiency for r in readings]) < LOW_EFFICIENCY:
        recommendations.append("Optimise motor settings - efficiency below optimal range")
    if _mean([r.bearing_health for r in readings]) < 80:
        recommendations.append("Schedule bearing inspection - health declining")

    critical = sum(1 for r in readings if r.status == "critical")
    if critical:
        recommendations.append(f"IMMEDIATE attention required - {critical} critical reading(s) in window")

    if not recommendations:
        recommendations.append("All systems operating within normal parameters")
    return recommendations


def analyze_health(
    readings: Sequence[MotorReading],
    now: datetime,
    machine_id: str = MACHINE_ID
) -> HealthAnalysis:
    """
    Assess motor health over a window of readings, oldest first.

    An empty window yields score 0, risk UNKNOWN and a single
    "insufficient data" recommendation.
    """
    if not readings:
        return HealthAnalysis(
            machine_id=machine_id,
            analysis_timestamp=now,
            sample_count=0,
            overall_health_score=0.0,
            risk_level=RiskLevel.UNKNOWN,
            recommendations=["Insufficient data for analysis"],
        )

    score = window_health_score(readings)
    trends = Trends(
        temperature=trend([float(r.temperature) for r in readings]),
        vibration=trend([r.vibration for r in readings]),
        efficiency=trend([r.efficiency for r in readings]),
        power=trend([r.power_consumption for r in readings]),
    )

    return HealthAnalysis(
        machine_id=machine_id,
        analysis_timestamp=now,
        sample_count=len(readings),
        overall_health_score=round(score, 2),
        risk_level=risk_level(score, readings),
        trends=trends,
        predictions=predict_failures(readings, trends, now),
        anomalies=detect_anomalies(readings),
        recommendations=health_recommendations(readings),
    )
