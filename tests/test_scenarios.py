"""
Tests for Operating Scenarios and Stratified Bands

Run with: pytest tests/test_scenarios.py -v
"""

import pytest

from engine.random_source import SeededRandom
from engine.scenarios import (
    ScenarioLibrary,
    StratifiedBand,
    TEMPERATURE_BAND,
    SPEED_BAND,
    EFFICIENCY_BAND,
    SPEED_SCENARIOS,
    THERMAL_SCENARIOS,
    EFFICIENCY_SCENARIOS,
)


class TestScenarioLibrary:
    """Test scenario tables and lookups."""

    def test_table_sizes(self):
        assert len(SPEED_SCENARIOS) == 8
        assert len(THERMAL_SCENARIOS) == 6
        assert len(EFFICIENCY_SCENARIOS) == 5

    def test_lookup_by_name(self):
        assert ScenarioLibrary.speed("HVAC").base_speed == 1750.0
        assert ScenarioLibrary.thermal("Mining").base_vibration == 2.0
        assert ScenarioLibrary.efficiency("Aging Motor").wear_factor == 1.6

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError):
            ScenarioLibrary.speed("Submarine")

    def test_scenario_names(self):
        names = ScenarioLibrary.get_scenario_names()
        assert set(names) == {"speed", "thermal", "efficiency"}
        assert "Steel Mill" in names["thermal"]

    def test_draw_covers_every_scenario(self):
        rng = SeededRandom(3)
        seen = set()
        for _ in range(500):
            speed, _, _ = ScenarioLibrary.draw(rng)
            seen.add(speed.name)
        assert seen == {s.name for s in SPEED_SCENARIOS}


class TestStratifiedBand:
    """Test the 70/20/10 stratified sampler."""

    def setup_method(self):
        """Set up test fixtures."""
        self.rng = SeededRandom(42)

    def test_temperature_distribution(self):
        counts = {"normal": 0, "warning": 0, "critical": 0}
        draws = 10_000
        for _ in range(draws):
            counts[TEMPERATURE_BAND.classify(TEMPERATURE_BAND.sample(self.rng))] += 1

        assert counts["normal"] / draws == pytest.approx(0.70, abs=0.05)
        assert counts["warning"] / draws == pytest.approx(0.20, abs=0.05)
        assert counts["critical"] / draws == pytest.approx(0.10, abs=0.05)

    @pytest.mark.parametrize("band,low,high", [
        (TEMPERATURE_BAND, 60.0, 95.0),
        (SPEED_BAND, 2200.0, 3300.0),
        (EFFICIENCY_BAND, 72.0, 96.0),
    ])
    def test_samples_stay_inside_bands(self, band, low, high):
        for _ in range(1000):
            assert low <= band.sample(self.rng) <= high

    def test_efficiency_critical_band_is_lowest(self):
        assert EFFICIENCY_BAND.classify(75.0) == "critical"
        assert EFFICIENCY_BAND.classify(90.0) == "normal"

    def test_classify_outside_bands(self):
        assert TEMPERATURE_BAND.classify(40.0) == "normal"
        assert TEMPERATURE_BAND.classify(110.0) == "critical"

    def test_invalid_weights(self):
        with pytest.raises(ValueError):
            StratifiedBand((0, 1), (1, 2), (2, 3), weights=(0.5, 0.5, 0.5))

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            StratifiedBand((5, 1), (1, 2), (2, 3))

    def test_single_band_weights(self):
        band = StratifiedBand((0, 1), (1, 2), (2, 3), weights=(0.0, 0.0, 1.0))
        for _ in range(100):
            assert band.choose_band(self.rng) == 2
