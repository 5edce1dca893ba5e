from __future__ import annotations

from typing import Iterable, List, Tuple

from .metrics import compute_area, compute_curvature_score
from .models import Panel


def stack_sort_key(panel: Panel) -> Tuple[float, float, int]:
    """Least curved first, then largest area, then lowest id."""
    return (compute_curvature_score(panel), -compute_area(panel), panel.id)


def sort_for_stack(panels: Iterable[Panel]) -> List[Panel]:
    """Order panels bottom-to-top for a single stack.

    Index 0 is the bottom of the stack. The input is left untouched.
    """
    return sorted(panels, key=stack_sort_key)
