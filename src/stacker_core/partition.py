from __future__ import annotations

import logging
from typing import Iterable, List

from .models import Panel
from .stacking import sort_for_stack

logger = logging.getLogger(__name__)


def bucket_sizes(total: int, pallet_count: int) -> List[int]:
    """Split ``total`` items over ``pallet_count`` buckets.

    Sizes differ by at most one and the larger buckets come first.
    """
    if pallet_count <= 0 or total <= 0:
        return []
    base, remainder = divmod(total, pallet_count)
    return [base + 1 if idx < remainder else base for idx in range(pallet_count)]


def partition_into_pallets(
    panels: Iterable[Panel], pallet_count: int
) -> List[List[Panel]]:
    """Group panels into pallets by length, then stack-sort each pallet.

    The longest panels land on the lowest-numbered pallets. Equal lengths
    keep ascending id order so pallet boundaries never depend on input
    order. Empty pallets are left out of the result.
    """
    panels = list(panels)
    if pallet_count <= 0 or not panels:
        return []

    by_length = sorted(panels, key=lambda panel: (-panel.length, panel.id))

    pallets: List[List[Panel]] = []
    index = 0
    for size in bucket_sizes(len(by_length), pallet_count):
        chunk = by_length[index : index + size]
        index += size
        if chunk:
            pallets.append(sort_for_stack(chunk))

    logger.debug(
        "Partitioned %d panels into %d pallets (requested %d)",
        len(by_length),
        len(pallets),
        pallet_count,
    )
    return pallets
