from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from .units import DEG, MM, parse_number


class PanelField(str, Enum):
    LABEL = "label"
    LENGTH = "length"
    WIDTH = "width"
    RADIUS = "radius"
    ANGLE_DEG = "angleDeg"


@dataclass(frozen=True)
class Panel:
    """A single curved sheet.

    ``length`` runs along X and ``width`` along Y. ``radius`` shares the
    length unit and ``angle_deg`` is the sweep of the bend in degrees.
    """

    id: int
    label: str
    length: MM = 0.0
    width: MM = 0.0
    radius: MM = 0.0
    angle_deg: DEG = 0.0

    def with_field(self, field: PanelField, raw_value: str) -> "Panel":
        """Return a copy with one field replaced from raw form text."""
        if field is PanelField.LABEL:
            return replace(self, label=raw_value)
        value = parse_number(raw_value)
        if field is PanelField.LENGTH:
            return replace(self, length=value)
        if field is PanelField.WIDTH:
            return replace(self, width=value)
        if field is PanelField.RADIUS:
            return replace(self, radius=value)
        if field is PanelField.ANGLE_DEG:
            return replace(self, angle_deg=value)
        raise ValueError(f"Unknown panel field: {field!r}")
