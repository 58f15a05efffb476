"""
Batch Telemetry Generator for the Aggregate Motor

Produces time series of sampled motor readings for testing, demos and
offline analysis.

Features:
- Explicit simulated-time stepping between readings
- Reproducible traces from a seeded engine
- Export to JSON, CSV, or as Python lists
"""

import csv
import json
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Generator, Any

from .config import EngineConfig
from .motor import AggregateMotor
from .sampler import ReadingSampler


class TelemetryGenerator:
    """
    Generates batches of readings from one aggregate motor.

    Example:
        generator = TelemetryGenerator(AggregateMotor(EngineConfig(seed=42)))
        readings = generator.generate_to_list(count=288, interval_seconds=300)
        generator.generate_to_csv(count=288, filepath="motor.csv")
    """

    def __init__(
        self,
        motor: Optional[AggregateMotor] = None,
        start_time: Optional[datetime] = None
    ):
        """
        Initialize the generator.

        Args:
            motor: Motor to sample (defaults to a new AggregateMotor)
            start_time: Timestamp of the first reading (defaults to now)
        """
        self.motor = motor or AggregateMotor()
        self.sampler = ReadingSampler(self.motor)
        self.start_time = start_time or self.motor.clock()

    def generate_batch(
        self,
        count: int,
        interval_seconds: float = 5.0
    ) -> Generator[Dict[str, Any], None, None]:
        """
        Generate readings spaced ``interval_seconds`` of simulated time apart.

        Args:
            count: Number of readings
            interval_seconds: Simulated seconds between readings

        Yields:
            Reading dictionaries
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        current_time = self.start_time
        for _ in range(count):
            current_time += timedelta(seconds=interval_seconds)
            reading = self.sampler.sample(
                timestamp=current_time, advance_seconds=interval_seconds
            )
            yield reading.to_dict()

    def generate_to_list(
        self,
        count: int,
        interval_seconds: float = 5.0
    ) -> List[Dict[str, Any]]:
        """Generate readings and return as a list."""
        return list(self.generate_batch(count, interval_seconds))

    def generate_to_json(
        self,
        count: int,
        interval_seconds: float = 5.0,
        filepath: Optional[str] = None,
        indent: int = 2
    ) -> str:
        """
        Generate readings and return/save as JSON.

        Args:
            count: Number of readings
            interval_seconds: Simulated seconds between readings
            filepath: Optional file path to save JSON
            indent: JSON indentation (default 2)

        Returns:
            JSON string
        """
        readings = self.generate_to_list(count, interval_seconds)
        json_str = json.dumps(readings, indent=indent, default=str)

        if filepath:
            with open(filepath, 'w') as f:
                f.write(json_str)

        return json_str

    def generate_to_csv(
        self,
        count: int,
        interval_seconds: float = 5.0,
        filepath: str = "motor_telemetry.csv"
    ) -> str:
        """
        Generate readings and save as CSV.

        Alerts are flattened into an ``alert_count`` column.

        Returns:
            Filepath of saved CSV
        """
        rows = []
        for reading in self.generate_batch(count, interval_seconds):
            alerts = reading.pop("alerts")
            reading["alert_count"] = len(alerts)
            rows.append(reading)

        if not rows:
            return filepath

        fieldnames = list(rows[0].keys())

        with open(filepath, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)

        return filepath


# =========================================
# Convenience Functions
# =========================================

def generate_motor_readings(
    count: int = 100,
    seed: Optional[int] = None,
    interval_seconds: float = 5.0,
    start_time: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """
    Generate a list of aggregate motor readings.

    Args:
        count: Number of readings
        seed: Seed for a reproducible trace
        interval_seconds: Simulated seconds between readings
        start_time: Timestamp of the first reading

    Returns:
        List of reading dictionaries
    """
    motor = AggregateMotor(EngineConfig(seed=seed))
    generator = TelemetryGenerator(motor, start_time=start_time)
    return generator.generate_to_list(count, interval_seconds)
