"""
Range-Guard Validation Layer

This module checks simulated state against the documented physical
ranges of the telemetry model. The engines clamp every value they
produce, so an ERROR here means a modelling bug rather than bad input.

Philosophy:
- Hard failures: Outside the documented clamp range → ERROR
- Soft warnings: Inside range but past an operating threshold → WARNING
- Informational: Noteworthy but expected (frozen machine, service due)

Typical use is to guard every sampled reading and to assert invariants
in tests.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any, Tuple
import logging

from .maintenance import is_service_due

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity levels for validation issues."""
    ERROR = "error"        # Outside documented range - model bug
    WARNING = "warning"    # Past an operating threshold
    INFO = "info"          # Informational note


@dataclass
class ValidationIssue:
    """
    A single validation issue found in a state snapshot.

    Attributes:
        severity: How serious is this issue
        rule_name: Identifier for the rule that was violated
        message: Human-readable description
        metric_name: Which field has the issue
        actual_value: The problematic value
        expected_range: What the value should be
    """
    severity: ValidationSeverity
    rule_name: str
    message: str
    metric_name: Optional[str] = None
    actual_value: Optional[float] = None
    expected_range: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "severity": self.severity.value,
            "rule_name": self.rule_name,
            "message": self.message,
            "metric_name": self.metric_name,
            "actual_value": self.actual_value,
            "expected_range": self.expected_range,
        }


@dataclass
class ValidationResult:
    """
    Result of validating a state snapshot.

    Attributes:
        is_valid: True if no ERROR issues were found
        status: "accepted", "accepted_with_warnings", or "rejected"
        issues: List of all validation issues found
    """
    is_valid: bool
    status: str
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response."""
        infos = [i for i in self.issues if i.severity == ValidationSeverity.INFO]
        return {
            "is_valid": self.is_valid,
            "status": self.status,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "info_count": len(infos),
            "issues": [issue.to_dict() for issue in self.issues],
        }


# Documented clamp ranges: field -> (min, max)
PHYSICAL_RANGES: Dict[str, Tuple[float, float]] = {
    "efficiency": (70.0, 96.0),           # %
    "vibration": (0.5, 8.0),              # mm/s
    "temperature": (0.0, 120.0),          # °C (lower bound is ambient)
    "health_score": (0.0, 100.0),
    "system_health": (0.0, 100.0),
    "load": (0.2, 1.0),                   # fraction
    "power_consumption": (2.0, 15.0),     # kW
    "bearing_wear": (0.0, 1.0),
    "oil_degradation": (0.0, 1.0),
}

# Operating thresholds that produce WARNING issues
WARNING_LIMITS = {
    "temperature": ("above", 80.0),
    "vibration": ("above", 2.5),
    "efficiency": ("below", 85.0),
}

# Cumulative fields that may only grow between updates
MONOTONIC_FIELDS = ("bearing_wear", "oil_degradation", "operating_hours")


class RangeGuard:
    """
    Range guard for simulated telemetry state.

    Example:
        guard = RangeGuard()
        result = guard.validate(machine.to_dict())
        if not result.is_valid:
            print(result.errors[0].message)

        # Cumulative fields must not decrease between updates
        result = guard.validate(after.to_dict(), previous=before.to_dict())
    """

    def __init__(self, ranges: Optional[Dict[str, Tuple[float, float]]] = None):
        """
        Initialize the range guard.

        Args:
            ranges: Custom clamp ranges (defaults to PHYSICAL_RANGES)
        """
        self.ranges = ranges or PHYSICAL_RANGES

    def validate(
        self,
        data: Dict[str, Any],
        previous: Optional[Dict[str, Any]] = None
    ) -> ValidationResult:
        """
        Validate a state snapshot.

        Args:
            data: Snapshot dictionary (Machine.to_dict() or a motor reading)
            previous: Optional earlier snapshot of the same entity

        Returns:
            ValidationResult with status and any issues found
        """
        issues: List[ValidationIssue] = []

        if data.get("is_running") is False:
            # Stopped machines are frozen; their seed values are not clamped yet
            issues.append(ValidationIssue(
                severity=ValidationSeverity.INFO,
                rule_name="machine_stopped",
                message="Machine is stopped; state is frozen",
            ))
        else:
            issues.extend(self._validate_absolute_bounds(data))
            issues.extend(self._validate_ambient_floor(data))
            issues.extend(self._validate_operating_thresholds(data))

        if previous is not None:
            issues.extend(self._validate_monotonic(data, previous))

        issues.extend(self._validate_service_interval(data))

        errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
        warnings = [i for i in issues if i.severity == ValidationSeverity.WARNING]

        if errors:
            for issue in errors:
                logger.warning(f"Range guard: {issue.message} ({issue.actual_value})")
            return ValidationResult(is_valid=False, status="rejected", issues=issues)
        if warnings:
            return ValidationResult(is_valid=True, status="accepted_with_warnings", issues=issues)
        return ValidationResult(is_valid=True, status="accepted", issues=issues)

    def _validate_absolute_bounds(self, data: Dict[str, Any]) -> List[ValidationIssue]:
        """Every present field must lie inside its documented clamp range."""
        issues = []
        for metric_name, (low, high) in self.ranges.items():
            value = data.get(metric_name)
            if value is None:
                continue
            if value < low or value > high:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name=f"{metric_name}_out_of_range",
                    message=f"{metric_name} is outside its documented range",
                    metric_name=metric_name,
                    actual_value=round(value, 4),
                    expected_range=f"{low} - {high}",
                ))
        return issues

    def _validate_ambient_floor(self, data: Dict[str, Any]) -> List[ValidationIssue]:
        """
        Machine temperature can never drop below ambient.

        Physics:
            With no heat source the machine cools toward ambient but
            never below it.
        """
        temperature = data.get("temperature")
        ambient = data.get("ambient_temperature")
        if temperature is None or ambient is None:
            return []
        # Tolerance covers ambient sensor noise on sampled readings
        if temperature < ambient - 1.0:
            return [ValidationIssue(
                severity=ValidationSeverity.ERROR,
                rule_name="temperature_below_ambient",
                message="Machine temperature is below ambient",
                metric_name="temperature",
                actual_value=round(temperature, 2),
                expected_range=f">= {ambient:.1f}°C (ambient)",
            )]
        return []

    def _validate_operating_thresholds(self, data: Dict[str, Any]) -> List[ValidationIssue]:
        """In-range values past an operating threshold produce warnings."""
        issues = []
        for metric_name, (direction, limit) in WARNING_LIMITS.items():
            value = data.get(metric_name)
            if value is None:
                continue
            crossed = value > limit if direction == "above" else value < limit
            if crossed:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.WARNING,
                    rule_name=f"{metric_name}_threshold",
                    message=f"{metric_name} is {direction} its operating threshold",
                    metric_name=metric_name,
                    actual_value=round(value, 2),
                    expected_range=f"{'<=' if direction == 'above' else '>='} {limit}",
                ))
        return issues

    def _validate_monotonic(
        self,
        data: Dict[str, Any],
        previous: Dict[str, Any]
    ) -> List[ValidationIssue]:
        """Cumulative wear fields never decrease between updates."""
        issues = []
        for metric_name in MONOTONIC_FIELDS:
            before = previous.get(metric_name)
            after = data.get(metric_name)
            if before is None or after is None:
                continue
            if after < before:
                issues.append(ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    rule_name=f"{metric_name}_decreased",
                    message=f"{metric_name} decreased between updates",
                    metric_name=metric_name,
                    actual_value=after,
                    expected_range=f">= {before}",
                ))
        return issues

    def _validate_service_interval(self, data: Dict[str, Any]) -> List[ValidationIssue]:
        hours = data.get("operating_hours")
        if hours is not None and is_service_due(hours):
            return [ValidationIssue(
                severity=ValidationSeverity.INFO,
                rule_name="service_interval_reached",
                message="Scheduled service interval reached",
                metric_name="operating_hours",
                actual_value=hours,
            )]
        return []


def validate_state(
    data: Dict[str, Any],
    previous: Optional[Dict[str, Any]] = None
) -> ValidationResult:
    """
    Convenience function to validate a state snapshot.

    Example:
        result = validate_state(engine.machine_snapshot(0).to_dict())
        assert result.is_valid
    """
    return RangeGuard().validate(data, previous)
