import math

import pytest

from stacker_core.metrics import RADIUS_FLOOR, compute_area, compute_curvature_score
from stacker_core.models import Panel


@pytest.mark.parametrize(
    "length, width, expected",
    [(127, 24, 3048), (0, 24, 0), (-10, 3, -30), (-2, -2.5, 5)],
)
def test_area_is_length_times_width(length, width, expected):
    panel = Panel(1, "P1", length=length, width=width)
    assert compute_area(panel) == expected


def test_curvature_matches_bend_per_radius():
    panel_a = Panel(1, "A", length=127, width=24, radius=91, angle_deg=30)
    panel_b = Panel(2, "B", length=127, width=20, radius=91, angle_deg=45)

    assert math.isclose(compute_curvature_score(panel_a), math.pi / 6 / 91, rel_tol=1e-12)
    assert compute_curvature_score(panel_a) == pytest.approx(0.00575, abs=1e-4)
    assert compute_curvature_score(panel_b) == pytest.approx(0.00863, abs=1e-4)


def test_curvature_zero_radius_is_large_and_finite():
    panel = Panel(1, "flat-radius", radius=0, angle_deg=90)
    score = compute_curvature_score(panel)

    assert math.isfinite(score)
    assert score > 0
    assert math.isclose(score, (math.pi / 2) / RADIUS_FLOOR, rel_tol=1e-12)


def test_curvature_zero_angle_is_exactly_zero():
    assert compute_curvature_score(Panel(1, "P", radius=0, angle_deg=0)) == 0.0
    assert compute_curvature_score(Panel(2, "P", radius=50, angle_deg=0)) == 0.0


def test_curvature_ignores_sign():
    positive = Panel(1, "P", radius=60, angle_deg=45)
    negative = Panel(2, "P", radius=-60, angle_deg=-45)
    assert compute_curvature_score(positive) == compute_curvature_score(negative)
