"""
Health Score Engine for the Aggregate Motor

This module calculates the motor's system health (0-100) as a fixed
weighted sum of five component health terms.

Philosophy:
- Score 100 = Perfect health
- Score 0 = Complete failure
- Efficiency dominates (it integrates most other losses)
- Fully explainable (know which component pulled the score down)

Component Terms:
- Efficiency (0.40): Motor efficiency in percent, used as-is
- Vibration (0.25): 100 below 2.8 mm/s, linear decay to 0 at 7.1 mm/s
- Temperature (0.20): 100 below 70°C, -2/°C to 85°C, -4/°C to 95°C, then 0
- Bearing (0.10): 100 - wear × 1000
- Oil (0.05): 100 - degradation × 2000
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum

from .physics import clamp


class HealthCategory(Enum):
    """Health categories for easy interpretation."""
    EXCELLENT = "excellent"   # 90-100: No action needed
    GOOD = "good"            # 75-89: Normal operation
    FAIR = "fair"            # 55-74: Monitor closely
    POOR = "poor"            # 30-54: Action recommended
    CRITICAL = "critical"    # 0-29: Immediate action required


# Vibration severity bands (mm/s)
VIBRATION_HEALTHY_LIMIT = 2.8
VIBRATION_FAILED_LIMIT = 7.1

# Temperature bands (°C)
TEMPERATURE_HEALTHY_LIMIT = 70.0
TEMPERATURE_HOT_LIMIT = 85.0
TEMPERATURE_FAILED_LIMIT = 95.0


def vibration_health(vibration: float) -> float:
    """Piecewise-linear vibration health (0-100)."""
    if vibration < VIBRATION_HEALTHY_LIMIT:
        return 100.0
    if vibration > VIBRATION_FAILED_LIMIT:
        return 0.0
    span = VIBRATION_FAILED_LIMIT - VIBRATION_HEALTHY_LIMIT
    return 100.0 * (1.0 - (vibration - VIBRATION_HEALTHY_LIMIT) / span)


def temperature_health(temperature: float) -> float:
    """
    Piecewise-linear temperature health (0-100).

    Bands:
        < 70°C      -> 100
        70 - 85°C   -> 100 - 2 × (T - 70)          (100 .. 70)
        85 - 95°C   -> 70 - 4 × (T - 85)           (70 .. 30)
        > 95°C      -> 0
    """
    if temperature < TEMPERATURE_HEALTHY_LIMIT:
        return 100.0
    if temperature <= TEMPERATURE_HOT_LIMIT:
        return 100.0 - 2.0 * (temperature - TEMPERATURE_HEALTHY_LIMIT)
    if temperature <= TEMPERATURE_FAILED_LIMIT:
        return 70.0 - 4.0 * (temperature - TEMPERATURE_HOT_LIMIT)
    return 0.0


def bearing_health(bearing_wear: float) -> float:
    """Bearing health (0-100); wear of 0.1 or more reads as failed."""
    return clamp(100.0 - bearing_wear * 1000.0, 0.0, 100.0)


def oil_health(oil_degradation: float) -> float:
    """Lubricant health (0-100); degradation of 0.05 or more reads as failed."""
    return clamp(100.0 - oil_degradation * 2000.0, 0.0, 100.0)


@dataclass
class MetricScore:
    """
    Score breakdown for an individual health component.

    This provides full transparency into how each component
    contributed to the overall health score.
    """
    metric_name: str
    raw_value: float           # Actual state value
    normalized_score: float    # 0-100 score for this component
    weighted_contribution: float  # Points contributed to overall
    weight: float              # Weight used (0-1)
    status: str                # excellent/good/fair/poor/critical

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "metric_name": self.metric_name,
            "raw_value": round(self.raw_value, 4),
            "normalized_score": round(self.normalized_score, 1),
            "weighted_contribution": round(self.weighted_contribution, 2),
            "weight": round(self.weight, 2),
            "status": self.status,
        }


@dataclass
class HealthScore:
    """
    Complete health assessment result.

    Contains the overall score, category, detailed breakdown,
    and actionable recommendations.
    """
    overall_score: float                          # 0-100
    category: HealthCategory                       # Classification
    breakdown: List[MetricScore]                   # Per-component details
    primary_concern: Optional[str] = None          # Worst component
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "overall_score": round(self.overall_score, 1),
            "category": self.category.value,
            "primary_concern": self.primary_concern,
            "recommendations": self.recommendations,
            "breakdown": [m.to_dict() for m in self.breakdown],
        }


class MotorHealthEngine:
    """
    Engine for calculating the aggregate motor's system health.

    Example:
        engine = MotorHealthEngine()
        result = engine.calculate(
            efficiency=92.0,
            vibration=1.9,
            temperature=68.0,
            bearing_wear=0.002,
            oil_degradation=0.001,
        )
        print(f"Health: {result.overall_score:.0f}/100 ({result.category.value})")
    """

    DEFAULT_WEIGHTS = {
        "efficiency": 0.40,
        "vibration": 0.25,
        "temperature": 0.20,
        "bearing": 0.10,
        "oil": 0.05,
    }

    def __init__(self, weights: Optional[Dict[str, float]] = None):
        """
        Initialize the health engine.

        Args:
            weights: Custom weights per component (must sum to 1.0).

        Raises:
            ValueError: If the weights do not sum to 1.0
        """
        self.weights = dict(weights or self.DEFAULT_WEIGHTS)

        unknown = set(self.weights) - set(self.DEFAULT_WEIGHTS)
        if unknown:
            raise ValueError(f"Unknown health components: {sorted(unknown)}")

        total = sum(self.weights.values())
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Health weights must sum to 1.0, got {total:.3f}")

        self._init_recommendations()

    def _init_recommendations(self):
        """Initialize the recommendations database."""
        self.recommendations_db = {
            "efficiency": {
                "fair": [
                    "Compare efficiency against commissioning baseline",
                    "Check load is near the 80% optimum",
                ],
                "poor": [
                    "Schedule an energy audit of the drive train",
                    "Inspect coupling and belt tension",
                ],
                "critical": [
                    "URGENT: Efficiency collapse - check for winding faults",
                    "Reduce load until the cause is found",
                ],
            },
            "vibration": {
                "fair": [
                    "Schedule vibration analysis within 2 weeks",
                    "Check mounting bolts for looseness",
                ],
                "poor": [
                    "Schedule vibration analysis within 1 week",
                    "Verify shaft alignment and balance",
                ],
                "critical": [
                    "URGENT: Stop the motor and inspect bearings",
                    "Check for rotor rub or broken mounts",
                ],
            },
            "temperature": {
                "fair": [
                    "Verify cooling fan and air path are clear",
                ],
                "poor": [
                    "Check winding insulation temperature class",
                    "Reduce duty cycle until temperature recovers",
                ],
                "critical": [
                    "URGENT: Overheating - shut down to protect insulation",
                ],
            },
            "bearing": {
                "fair": [
                    "Re-grease bearings at next opportunity",
                ],
                "poor": [
                    "Order replacement bearings",
                    "Increase vibration monitoring frequency",
                ],
                "critical": [
                    "URGENT: Replace bearings before next shift",
                ],
            },
            "oil": {
                "fair": [
                    "Take an oil sample for analysis",
                ],
                "poor": [
                    "Schedule an oil change",
                ],
                "critical": [
                    "URGENT: Oil degraded - change before restart",
                ],
            },
        }

    def component_scores(
        self,
        efficiency: float,
        vibration: float,
        temperature: float,
        bearing_wear: float,
        oil_degradation: float
    ) -> Dict[str, Tuple[float, float]]:
        """Return ``{component: (raw_value, normalized_score)}``."""
        return {
            "efficiency": (efficiency, clamp(efficiency, 0.0, 100.0)),
            "vibration": (vibration, vibration_health(vibration)),
            "temperature": (temperature, temperature_health(temperature)),
            "bearing": (bearing_wear, bearing_health(bearing_wear)),
            "oil": (oil_degradation, oil_health(oil_degradation)),
        }

    def calculate(
        self,
        efficiency: float,
        vibration: float,
        temperature: float,
        bearing_wear: float,
        oil_degradation: float
    ) -> HealthScore:
        """
        Calculate the overall health score.

        Returns:
            HealthScore object with complete breakdown
        """
        components = self.component_scores(
            efficiency, vibration, temperature, bearing_wear, oil_degradation
        )

        breakdown: List[MetricScore] = []
        weighted_sum = 0.0

        for metric_name, weight in self.weights.items():
            raw_value, score = components[metric_name]
            contribution = score * weight
            breakdown.append(MetricScore(
                metric_name=metric_name,
                raw_value=raw_value,
                normalized_score=score,
                weighted_contribution=contribution,
                weight=weight,
                status=self._get_category(score).value,
            ))
            weighted_sum += contribution

        overall_score = clamp(weighted_sum, 0.0, 100.0)

        # Sort by score (lowest first = worst)
        breakdown.sort(key=lambda x: x.normalized_score)

        primary_concern = None
        recommendations: List[str] = []
        worst = breakdown[0]
        if worst.normalized_score < 75:
            primary_concern = worst.metric_name
            recommendations = self._get_recommendations(worst.metric_name, worst.status)

        return HealthScore(
            overall_score=overall_score,
            category=self._get_category(overall_score),
            breakdown=breakdown,
            primary_concern=primary_concern,
            recommendations=recommendations,
        )

    def score(
        self,
        efficiency: float,
        vibration: float,
        temperature: float,
        bearing_wear: float,
        oil_degradation: float
    ) -> float:
        """Overall score only, without building the breakdown."""
        components = self.component_scores(
            efficiency, vibration, temperature, bearing_wear, oil_degradation
        )
        total = sum(components[name][1] * weight for name, weight in self.weights.items())
        return clamp(total, 0.0, 100.0)

    def _get_category(self, score: float) -> HealthCategory:
        """Convert numeric score to category."""
        if score >= 90:
            return HealthCategory.EXCELLENT
        elif score >= 75:
            return HealthCategory.GOOD
        elif score >= 55:
            return HealthCategory.FAIR
        elif score >= 30:
            return HealthCategory.POOR
        else:
            return HealthCategory.CRITICAL

    def _get_recommendations(self, metric_name: str, status: str) -> List[str]:
        """Get actionable recommendations for a component in a given state."""
        metric_recs = self.recommendations_db.get(metric_name, {})
        return metric_recs.get(status, ["Monitor and investigate as needed"])


def calculate_motor_health(
    efficiency: float,
    vibration: float,
    temperature: float,
    bearing_wear: float,
    oil_degradation: float
) -> HealthScore:
    """
    Convenience function to calculate motor health with default weights.

    Example:
        result = calculate_motor_health(92.0, 1.9, 68.0, 0.002, 0.001)
        print(f"Score: {result.overall_score}")
    """
    return MotorHealthEngine().calculate(
        efficiency, vibration, temperature, bearing_wear, oil_degradation
    )
