"""Display rows for the panel, stack and pallet tables without GUI imports."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from stacker_core.metrics import compute_area, compute_curvature_score
from stacker_core.models import Panel
from stacker_core.units import format_exponential, format_fixed, format_number

MIN_PALLETS = 1
MAX_PALLETS = 12


def stack_position_text(index: int, total: int) -> str:
    position = index + 1
    if index == 0:
        return f"{position} (bottom)"
    if index == total - 1:
        return f"{position} (top)"
    return str(position)


def panel_row(panel: Panel) -> Tuple[str, ...]:
    return (
        panel.label,
        format_number(panel.length),
        format_number(panel.width),
        format_number(panel.radius),
        format_number(panel.angle_deg),
    )


def stack_rows(sorted_panels: Sequence[Panel]) -> List[Tuple[str, ...]]:
    total = len(sorted_panels)
    return [
        (
            stack_position_text(index, total),
            panel.label,
            f"{format_number(panel.length)} × {format_number(panel.width)}",
            format_number(panel.radius),
            format_number(panel.angle_deg),
            format_fixed(compute_area(panel), 2),
            format_exponential(compute_curvature_score(panel), 3),
        )
        for index, panel in enumerate(sorted_panels)
    ]


def pallet_heading(pallet_idx: int, pallet: Sequence[Panel]) -> str:
    count = len(pallet)
    return f"Pallet {pallet_idx + 1} ({count} panel{'' if count == 1 else 's'})"


def pallet_rows(pallet: Sequence[Panel]) -> List[Tuple[str, ...]]:
    total = len(pallet)
    return [
        (
            stack_position_text(index, total),
            panel.label,
            format_number(panel.length),
            format_number(panel.width),
            format_number(panel.radius),
            format_number(panel.angle_deg),
            format_fixed(compute_area(panel), 2),
            format_exponential(compute_curvature_score(panel), 3),
        )
        for index, panel in enumerate(pallet)
    ]


def clamp_pallet_count(value: int) -> int:
    return max(MIN_PALLETS, min(MAX_PALLETS, value))
