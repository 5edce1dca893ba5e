from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import List, Sequence

from .metrics import compute_area, compute_curvature_score
from .models import Panel
from .units import format_exponential, format_fixed, format_number

CSV_COLUMNS = [
    "stackPosition",
    "label",
    "length",
    "width",
    "radius",
    "angleDeg",
    "area",
    "curvatureScore",
]

REPORT_SUBTITLE = "Stacking order (1 = bottom, last = top)"


@dataclass(frozen=True)
class ExportRow:
    stack_position: int
    label: str
    length: float
    width: float
    radius: float
    angle_deg: float
    area: float
    curvature_score: float

    def csv_cells(self) -> List[str]:
        return [
            str(self.stack_position),
            self.label,
            format_number(self.length),
            format_number(self.width),
            format_number(self.radius),
            format_number(self.angle_deg),
            format_fixed(self.area, 4),
            format_exponential(self.curvature_score, 6),
        ]


@dataclass(frozen=True)
class ReportLayout:
    """A4 page geometry in millimetres, text placed from the top edge."""

    page_width_mm: float = 210.0
    page_height_mm: float = 297.0
    margin_x_mm: float = 10.0
    top_mm: float = 10.0
    bottom_limit_mm: float = 280.0
    line_height_mm: float = 7.0
    title_size: float = 12.0
    subtitle_size: float = 10.0
    body_size: float = 9.0


DEFAULT_REPORT_LAYOUT = ReportLayout()


@dataclass(frozen=True)
class ReportLine:
    y_mm: float
    text: str
    font_size: float


def build_export_rows(sorted_panels: Sequence[Panel]) -> List[ExportRow]:
    return [
        ExportRow(
            stack_position=position,
            label=panel.label,
            length=panel.length,
            width=panel.width,
            radius=panel.radius,
            angle_deg=panel.angle_deg,
            area=compute_area(panel),
            curvature_score=compute_curvature_score(panel),
        )
        for position, panel in enumerate(sorted_panels, start=1)
    ]


def _write_csv(header: List[str], rows: List[List[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def build_csv(sorted_panels: Sequence[Panel]) -> str:
    """CSV text for one stack, bottom first, without a trailing newline."""
    rows = [row.csv_cells() for row in build_export_rows(sorted_panels)]
    return _write_csv(CSV_COLUMNS, rows)


def build_pallet_csv(pallets: Sequence[Sequence[Panel]]) -> str:
    """CSV text for grouped pallets; stack positions restart per pallet."""
    rows: List[List[str]] = []
    for pallet_no, pallet in enumerate(pallets, start=1):
        for row in build_export_rows(pallet):
            rows.append([str(pallet_no)] + row.csv_cells())
    return _write_csv(["pallet"] + CSV_COLUMNS, rows)


def position_label(position: int, total: int) -> str:
    if position == 1:
        return "bottom"
    if position == total:
        return "top"
    return str(position)


def build_report_lines(sorted_panels: Sequence[Panel]) -> List[str]:
    rows = build_export_rows(sorted_panels)
    lines = []
    for row in rows:
        lines.append(
            f"{row.stack_position} ({position_label(row.stack_position, len(rows))})  "
            f"{row.label} | L={format_number(row.length)}  "
            f"W={format_number(row.width)}  R={format_number(row.radius)}  "
            f"θ={format_number(row.angle_deg)}°  Area={format_fixed(row.area, 2)}  "
            f"Curv={format_exponential(row.curvature_score, 2)}"
        )
    return lines


def paginate_report(
    lines: Sequence[str],
    title: str,
    subtitle: str = REPORT_SUBTITLE,
    layout: ReportLayout = DEFAULT_REPORT_LAYOUT,
) -> List[List[ReportLine]]:
    """Place report lines on pages.

    The title and subtitle open the first page. A body line starts a new
    page once the cursor has moved past ``layout.bottom_limit_mm``.
    """
    pages: List[List[ReportLine]] = [[]]
    y = layout.top_mm
    pages[0].append(ReportLine(y, title, layout.title_size))
    y += layout.line_height_mm
    pages[0].append(ReportLine(y, subtitle, layout.subtitle_size))
    y += layout.line_height_mm * 1.5

    for text in lines:
        if y > layout.bottom_limit_mm:
            pages.append([])
            y = layout.top_mm
        pages[-1].append(ReportLine(y, text, layout.body_size))
        y += layout.line_height_mm
    return pages
