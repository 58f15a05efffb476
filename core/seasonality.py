"""
Calendar Helpers for Telemetry Simulation

Wall-clock dependent factors used by the simulation engines:
- Working hours: decides which non-critical machines start running
- Seasonal factor: slow annual oscillation biasing ambient conditions

Both helpers accept an explicit ``now`` so callers (and tests) can pin
the date instead of reading the system clock.
"""

import math
from datetime import datetime
from typing import Optional


# Working hours: 8 AM to 6 PM, Monday to Friday
WORK_START_HOUR = 8
WORK_END_HOUR = 18

# Ambient baseline (°C) and seasonal swing
AMBIENT_BASE_TEMP = 22.0
AMBIENT_SEASONAL_SWING = 5.0


def is_working_hours(now: Optional[datetime] = None) -> bool:
    """
    Check whether ``now`` falls inside plant working hours.

    Args:
        now: Local timestamp (defaults to the current wall-clock time)

    Returns:
        True on weekdays between 08:00 (inclusive) and 18:00 (exclusive)
    """
    now = now or datetime.now()
    # weekday(): Monday == 0 ... Sunday == 6
    return now.weekday() < 5 and WORK_START_HOUR <= now.hour < WORK_END_HOUR


def seasonal_factor(now: Optional[datetime] = None) -> float:
    """
    Slow annual oscillation in [-0.1, +0.1].

    Formula:
        0.1 × sin(2π × dayOfYear / 365)

    Where dayOfYear is zero-based (1 January == 0).
    """
    now = now or datetime.now()
    day_of_year = now.timetuple().tm_yday - 1
    return 0.1 * math.sin(2.0 * math.pi * day_of_year / 365.0)


def ambient_temperature(seasonal: float) -> float:
    """Ambient plant temperature (°C) for a given seasonal factor."""
    return AMBIENT_BASE_TEMP + seasonal * AMBIENT_SEASONAL_SWING
