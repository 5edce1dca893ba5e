import logging
from typing import Callable

import tkinter as tk
from tkinter import messagebox

from stacker_core.units import parse_float

from .table_rows import MIN_PALLETS, clamp_pallet_count

logger = logging.getLogger(__name__)


def parse_pallet_count(
    var: tk.Variable | str,
    *,
    on_error: Callable[[str], None] | None = None,
) -> int:
    """Parse the pallet count from a Tk variable or string.

    A blank entry counts as one pallet. Values are clamped to the spinbox
    range. If parsing fails, one pallet is used; when ``on_error`` is
    provided it is called with the raw text instead of showing a popup.
    """

    raw_value = var.get() if hasattr(var, "get") else var
    if not str(raw_value).strip():
        return MIN_PALLETS
    try:
        value = int(parse_float(str(raw_value)))
    except (OverflowError, ValueError):
        if on_error is not None:
            try:
                on_error(str(raw_value))
            except Exception:
                logger.exception("parse_pallet_count error callback failed")
        else:
            messagebox.showwarning(
                "Invalid value", "Pallet count must be a whole number. Using 1."
            )
        return MIN_PALLETS
    return clamp_pallet_count(value)
