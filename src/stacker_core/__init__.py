"""Curvature scoring, stack ordering and pallet grouping for curved panels."""

from .csv_import import CsvImportError, parse_panel_csv
from .metrics import RADIUS_FLOOR, compute_area, compute_curvature_score
from .models import Panel, PanelField
from .partition import bucket_sizes, partition_into_pallets
from .session import PanelSession
from .stacking import sort_for_stack, stack_sort_key

__all__ = [
    "Panel",
    "PanelField",
    "PanelSession",
    "CsvImportError",
    "RADIUS_FLOOR",
    "bucket_sizes",
    "compute_area",
    "compute_curvature_score",
    "parse_panel_csv",
    "partition_into_pallets",
    "sort_for_stack",
    "stack_sort_key",
]
