from __future__ import annotations

import csv
import logging
import re
from typing import Dict, List, Sequence, Tuple

from .models import Panel, PanelField
from .units import parse_number

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [field.value for field in PanelField]

SAMPLE_CSV = """label,length,width,radius,angleDeg
sp101,127,24,91,30
sp102,127,20,91,45
sp103,127,22,60,45
sp104,96,24,120,20"""

_LINE_BREAK = re.compile(r"\r?\n")


class CsvImportError(ValueError):
    """Raised when pasted CSV text lacks one of the required columns."""

    def __init__(self, missing: Sequence[str], found: Sequence[str]) -> None:
        self.missing = list(missing)
        self.found = list(found)
        super().__init__(
            f"CSV header must include: {', '.join(REQUIRED_COLUMNS)} "
            f"(found: {', '.join(self.found)})"
        )


def _column_index(header: Sequence[str]) -> Dict[str, int]:
    normalized = [name.strip().lower() for name in header]
    index: Dict[str, int] = {}
    missing: List[str] = []
    for column in REQUIRED_COLUMNS:
        try:
            index[column] = normalized.index(column.lower())
        except ValueError:
            missing.append(column)
    if missing:
        raise CsvImportError(missing, normalized)
    return index


def _split_line(line: str, line_no: int) -> List[str]:
    # Each physical line is one record; a malformed quote never spills over.
    try:
        return next(csv.reader([line], strict=True), [])
    except csv.Error as e:
        logger.warning("CSV line %d has malformed quoting (%s); splitting on commas", line_no, e)
        return line.split(",")


def _is_blank(row: Sequence[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def _cell(row: Sequence[str], idx: int) -> str:
    return row[idx].strip() if idx < len(row) else ""


def parse_panel_csv(text: str, start_id: int) -> Tuple[List[Panel], int]:
    """Parse ``label,length,width,radius,angleDeg`` rows into panels.

    Ids are assigned from ``start_id`` in row order. Returns the panels and
    the next unused id.
    """
    if not text.strip():
        return [], start_id

    rows = []
    for line_no, line in enumerate(_LINE_BREAK.split(text.strip()), start=1):
        row = _split_line(line, line_no)
        if not _is_blank(row):
            rows.append(row)
    if not rows:
        return [], start_id

    index = _column_index(rows[0])
    panels: List[Panel] = []
    next_id = start_id
    for row in rows[1:]:
        panels.append(
            Panel(
                id=next_id,
                label=_cell(row, index[PanelField.LABEL.value]),
                length=parse_number(_cell(row, index[PanelField.LENGTH.value])),
                width=parse_number(_cell(row, index[PanelField.WIDTH.value])),
                radius=parse_number(_cell(row, index[PanelField.RADIUS.value])),
                angle_deg=parse_number(_cell(row, index[PanelField.ANGLE_DEG.value])),
            )
        )
        next_id += 1

    logger.debug("Parsed %d panels from CSV", len(panels))
    return panels, next_id
