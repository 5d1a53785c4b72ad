"""
Hourly projection tests.

The series is synthetic; these tests pin the jitter to make values exact,
and check bounds when the jitter is random.
"""
import math
import random

import pytest

from ads_monitor.services.hourly_projection import FixedJitter, project_hourly


def _pairs(points):
    return [(p.hour, p.conversions) for p in points]


def test_before_window_yields_single_zero_point():
    for hour in range(0, 6):
        assert _pairs(project_hourly(hour, 500, FixedJitter())) == [("06:00", 0)]


def test_length_matches_elapsed_operating_hours():
    for hour in range(6, 24):
        assert len(project_hourly(hour, 100, FixedJitter())) == hour - 5


def test_full_day_covers_window():
    points = project_hourly(23, 180, FixedJitter())
    assert points[0].hour == "06:00"
    assert points[-1].hour == "23:00"
    assert len(points) == 18
    assert points[-1].conversions == 180


def test_pinned_jitter_is_linear():
    assert _pairs(project_hourly(9, 100, FixedJitter(1.0))) == [
        ("06:00", 25),
        ("07:00", 50),
        ("08:00", 75),
        ("09:00", 100),
    ]


def test_halves_round_up():
    assert _pairs(project_hourly(7, 7, FixedJitter(1.0))) == [("06:00", 4), ("07:00", 7)]


def test_zero_total_is_all_zero():
    assert all(p.conversions == 0 for p in project_hourly(15, 0, random.Random(1)))


def test_random_jitter_stays_within_bounds():
    total = 1000
    points = project_hourly(20, total, random.Random(42))
    n = len(points)
    for i, point in enumerate(points, start=1):
        base = total * i / n
        assert isinstance(point.conversions, int)
        assert math.floor(base * 0.95) <= point.conversions <= math.ceil(base * 1.05)


def test_jitter_draws_use_expected_range():
    class Recorder:
        def __init__(self):
            self.calls = []

        def uniform(self, a, b):
            self.calls.append((a, b))
            return 1.0

    rec = Recorder()
    project_hourly(8, 10, rec)
    assert rec.calls == [(0.95, 1.05)] * 3


def test_invalid_hour_rejected():
    with pytest.raises(ValueError):
        project_hourly(24, 10)
