from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from .export import (
    DEFAULT_REPORT_LAYOUT,
    ReportLayout,
    build_csv,
    build_pallet_csv,
    build_report_lines,
    paginate_report,
)
from .models import Panel
from .settings import load_settings

logger = logging.getLogger(__name__)

EXPORT_DIR_ENV = "PANEL_STACKER_EXPORT_DIR"
MM_PER_INCH = 25.4


def get_export_dir() -> str:
    env_dir = os.getenv(EXPORT_DIR_ENV)
    if env_dir:
        return str(Path(env_dir).expanduser().resolve())
    configured = load_settings().export_dir
    if configured:
        return str(Path(configured).expanduser().resolve())
    argv_path = Path(sys.argv[0]) if sys.argv[0] else None
    if argv_path and argv_path.is_file():
        base_dir = argv_path.parent
    else:
        base_dir = Path.cwd()
    return str((base_dir / "exports").resolve())


def ensure_export_dir() -> str:
    path = Path(get_export_dir())
    path.mkdir(parents=True, exist_ok=True)
    return str(path)


def _write_text(path: str, content: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def write_stack_csv(path: str, sorted_panels: Sequence[Panel]) -> None:
    if not sorted_panels:
        raise ValueError("nothing to export")
    _write_text(path, build_csv(sorted_panels))
    logger.info("Wrote stack CSV with %d panels to %s", len(sorted_panels), path)


def write_pallet_csv(path: str, pallets: Sequence[Sequence[Panel]]) -> None:
    if not any(pallets):
        raise ValueError("nothing to export")
    _write_text(path, build_pallet_csv(pallets))
    logger.info("Wrote pallet CSV with %d pallets to %s", len(pallets), path)


def write_stack_pdf(
    path: str,
    sorted_panels: Sequence[Panel],
    *,
    title: str | None = None,
    layout: ReportLayout = DEFAULT_REPORT_LAYOUT,
) -> int:
    """Render the stacking report to a PDF and return the page count."""
    if not sorted_panels:
        raise ValueError("nothing to export")
    title = title or load_settings().report_title
    pages = paginate_report(build_report_lines(sorted_panels), title, layout=layout)

    figsize = (layout.page_width_mm / MM_PER_INCH, layout.page_height_mm / MM_PER_INCH)
    x = layout.margin_x_mm / layout.page_width_mm
    with PdfPages(path, metadata={"Title": title}) as pdf:
        for page in pages:
            fig = Figure(figsize=figsize)
            for line in page:
                fig.text(
                    x,
                    1.0 - line.y_mm / layout.page_height_mm,
                    line.text,
                    fontsize=line.font_size,
                    ha="left",
                    va="baseline",
                )
            pdf.savefig(fig)
    logger.info("Wrote %d-page stack report to %s", len(pages), path)
    return len(pages)
