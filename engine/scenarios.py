"""
Operating Scenarios for the Aggregate Motor

Each scenario is a baseline operating point for one real-world motor
application. The aggregate motor draws one scenario of each kind per
physics pass and perturbs it with load, ambient, time, seasonal and wear
terms:

- Speed scenarios: base speed, load and ambient temperature
- Thermal scenarios: base temperature, ambient and base vibration
  (shared by the temperature and vibration passes)
- Efficiency scenarios: base efficiency and a wear sensitivity factor

StratifiedBand then replaces the physics result with a draw forced into
a normal/warning/critical band with 70/20/10 odds, so dashboards always
see a realistic spread of readings.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from .random_source import RandomSource


@dataclass(frozen=True)
class SpeedScenario:
    """Speed baseline. Speeds in rpm, ambient in °C."""
    name: str
    base_speed: float
    load: float
    ambient: float


@dataclass(frozen=True)
class ThermalScenario:
    """Thermal baseline. Temperatures in °C, vibration in mm/s."""
    name: str
    base_temperature: float
    ambient: float
    base_vibration: float


@dataclass(frozen=True)
class EfficiencyScenario:
    """
    Efficiency baseline.

    ``wear_factor`` scales the bearing-wear loss: older or rewound motors
    lose efficiency faster as they wear.
    """
    name: str
    base_efficiency: float
    wear_factor: float


SPEED_SCENARIOS: Tuple[SpeedScenario, ...] = (
    SpeedScenario("Manufacturing", 2400.0, 0.85, 25.0),
    SpeedScenario("HVAC", 1750.0, 0.60, 22.0),
    SpeedScenario("Water Pumping", 2900.0, 0.75, 18.0),
    SpeedScenario("Conveyor", 1450.0, 0.70, 20.0),
    SpeedScenario("Compressor", 3000.0, 0.90, 28.0),
    SpeedScenario("Fan", 1200.0, 0.50, 21.0),
    SpeedScenario("Mixer", 900.0, 0.80, 24.0),
    SpeedScenario("Electric Vehicle", 3200.0, 0.65, 30.0),
)

THERMAL_SCENARIOS: Tuple[ThermalScenario, ...] = (
    ThermalScenario("Manufacturing", 65.0, 25.0, 1.5),
    ThermalScenario("Data Center", 55.0, 22.0, 1.2),
    ThermalScenario("Mining", 75.0, 35.0, 2.0),
    ThermalScenario("Marine", 68.0, 28.0, 1.8),
    ThermalScenario("Food Processing", 58.0, 18.0, 1.3),
    ThermalScenario("Steel Mill", 80.0, 40.0, 2.0),
)

EFFICIENCY_SCENARIOS: Tuple[EfficiencyScenario, ...] = (
    EfficiencyScenario("Premium Efficiency", 95.0, 0.8),
    EfficiencyScenario("High Efficiency", 93.0, 1.0),
    EfficiencyScenario("Standard Efficiency", 90.0, 1.2),
    EfficiencyScenario("Rewound Motor", 88.0, 1.4),
    EfficiencyScenario("Aging Motor", 86.0, 1.6),
)


class StratifiedBand:
    """
    Three-band stratified sampler.

    A band is chosen by weight, then a value is drawn uniformly inside it.

    Example:
        band = StratifiedBand((60, 80), (80, 90), (90, 95))
        temperature = band.sample(rng)
    """

    LABELS = ("normal", "warning", "critical")
    DEFAULT_WEIGHTS = (0.70, 0.20, 0.10)

    def __init__(
        self,
        normal: Tuple[float, float],
        warning: Tuple[float, float],
        critical: Tuple[float, float],
        weights: Tuple[float, float, float] = DEFAULT_WEIGHTS
    ):
        if len(weights) != 3 or any(w < 0 for w in weights):
            raise ValueError(f"Expected three non-negative weights, got {weights}")
        if abs(sum(weights) - 1.0) > 0.001:
            raise ValueError(f"Band weights must sum to 1.0, got {sum(weights)}")
        for low, high in (normal, warning, critical):
            if low > high:
                raise ValueError(f"Band lower bound {low} exceeds upper bound {high}")

        self.bands = (normal, warning, critical)
        self.weights = weights

    def choose_band(self, rng: RandomSource) -> int:
        """Index of the band selected by one weighted draw."""
        roll = rng.uniform(0.0, 1.0)
        cumulative = 0.0
        for i, weight in enumerate(self.weights):
            cumulative += weight
            if roll < cumulative:
                return i
        return len(self.weights) - 1

    def sample(self, rng: RandomSource) -> float:
        low, high = self.bands[self.choose_band(rng)]
        return rng.uniform(low, high)

    def classify(self, value: float) -> str:
        """Label of the band containing ``value`` (nearest band when outside)."""
        normal, warning, critical = self.bands
        if normal[0] <= value < normal[1]:
            return "normal"
        if warning[0] <= value < warning[1]:
            return "warning"
        if critical[0] <= value <= critical[1]:
            return "critical"
        distances = [min(abs(value - low), abs(value - high)) for low, high in self.bands]
        return self.LABELS[distances.index(min(distances))]


# Bands for the stratified override of each quantity
TEMPERATURE_BAND = StratifiedBand((60.0, 80.0), (80.0, 90.0), (90.0, 95.0))
SPEED_BAND = StratifiedBand((2200.0, 2800.0), (2800.0, 3100.0), (3100.0, 3300.0))
# Efficiency degrades downward: the "critical" band is the lowest one
EFFICIENCY_BAND = StratifiedBand((88.0, 96.0), (80.0, 88.0), (72.0, 80.0))


class ScenarioLibrary:
    """
    Lookup helpers over the literal scenario tables.

    Example:
        scenario = ScenarioLibrary.speed("HVAC")
        print(scenario.base_speed)
    """

    @staticmethod
    def _find(table, name: str, kind: str):
        for scenario in table:
            if scenario.name == name:
                return scenario
        raise ValueError(f"Unknown {kind} scenario: {name!r}")

    @classmethod
    def speed(cls, name: str) -> SpeedScenario:
        return cls._find(SPEED_SCENARIOS, name, "speed")

    @classmethod
    def thermal(cls, name: str) -> ThermalScenario:
        return cls._find(THERMAL_SCENARIOS, name, "thermal")

    @classmethod
    def efficiency(cls, name: str) -> EfficiencyScenario:
        return cls._find(EFFICIENCY_SCENARIOS, name, "efficiency")

    @classmethod
    def get_scenario_names(cls) -> Dict[str, List[str]]:
        """Return the scenario names of each kind."""
        return {
            "speed": [s.name for s in SPEED_SCENARIOS],
            "thermal": [s.name for s in THERMAL_SCENARIOS],
            "efficiency": [s.name for s in EFFICIENCY_SCENARIOS],
        }

    @staticmethod
    def draw(rng: RandomSource) -> Tuple[SpeedScenario, ThermalScenario, EfficiencyScenario]:
        """Draw one scenario of each kind by uniform random index."""
        return (
            SPEED_SCENARIOS[rng.index(len(SPEED_SCENARIOS))],
            THERMAL_SCENARIOS[rng.index(len(THERMAL_SCENARIOS))],
            EFFICIENCY_SCENARIOS[rng.index(len(EFFICIENCY_SCENARIOS))],
        )
