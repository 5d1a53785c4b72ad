"""
Hourly conversion projection

NOT TELEMETRY. The upstream report only gives today's running total, so the
"hourly rhythm" chart is an extrapolation: the current total spread linearly
over the operating hours elapsed so far, with a small random jitter per
point. Points can dip below their predecessor. Consumers must present the
series as synthetic.
"""
import random
from typing import List, Optional, Protocol

from ads_monitor.models.metrics import HourlyPoint
from ads_monitor.utils.helpers import round_half_up

WINDOW_START_HOUR = 6
WINDOW_HOURS = 18  # 06:00 .. 23:00
JITTER_MIN = 0.95
JITTER_MAX = 1.05


class RandomSource(Protocol):
    def uniform(self, a: float, b: float) -> float:
        ...


class FixedJitter:
    """Random source that always returns the same multiplier"""

    def __init__(self, value: float = 1.0):
        self.value = value

    def uniform(self, a: float, b: float) -> float:
        return self.value


def hour_label(hour: int) -> str:
    return f"{hour:02d}:00"


def operating_hours() -> List[int]:
    return [WINDOW_START_HOUR + i for i in range(WINDOW_HOURS)]


def project_hourly(
    current_hour: int,
    total_conversions: int,
    rng: Optional[RandomSource] = None,
) -> List[HourlyPoint]:
    """
    Synthetic cumulative-conversions curve for the hours elapsed today.

    Args:
        current_hour: Hour of day, 0-23
        total_conversions: Conversions so far today across all accounts
        rng: Source of jitter; anything with ``uniform(a, b)``

    Returns:
        One point per operating hour <= current_hour, or a single
        ("06:00", 0) point before the window opens
    """
    if not 0 <= current_hour <= 23:
        raise ValueError(f"current_hour must be 0-23, got {current_hour}")

    rng = rng or random
    elapsed = [h for h in operating_hours() if h <= current_hour]
    if not elapsed:
        return [HourlyPoint(hour=hour_label(WINDOW_START_HOUR), conversions=0)]

    n = len(elapsed)
    points = []
    for i, hour in enumerate(elapsed, start=1):
        progress = i / n
        jitter = rng.uniform(JITTER_MIN, JITTER_MAX)
        value = round_half_up(total_conversions * progress * jitter)
        points.append(HourlyPoint(hour=hour_label(hour), conversions=max(value, 0)))

    return points
