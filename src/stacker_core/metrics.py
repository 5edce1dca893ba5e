from __future__ import annotations

import math

from .models import Panel

# Substituted for a zero radius so a flat-radius entry never divides by zero.
RADIUS_FLOOR = 1e-6


def compute_area(panel: Panel) -> float:
    return panel.length * panel.width


def compute_curvature_score(panel: Panel) -> float:
    """Bend per unit radius: ``|angle| in radians / |radius|``.

    Dimensionless and only meaningful for ranking; higher means a tighter
    bend and/or a larger sweep.
    """
    radius = max(abs(panel.radius), RADIUS_FLOOR)
    angle_rad = abs(panel.angle_deg) * math.pi / 180
    return angle_rad / radius
