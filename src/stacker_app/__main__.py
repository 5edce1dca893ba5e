import logging
import tkinter as tk
from importlib import metadata
from tkinter import ttk

import matplotlib

from stacker_core.settings import load_settings


def _get_app_version() -> str:
    for distribution in ("curved-panel-stacker", "stacker_app"):
        try:
            return metadata.version(distribution)
        except metadata.PackageNotFoundError:
            continue
    return "dev"


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    settings = load_settings()
    _configure_logging(settings.log_level)
    matplotlib.use("TkAgg")

    from stacker_app.gui.tab_stacker import TabStacker

    app_version = _get_app_version()
    logging.getLogger(__name__).info("Starting curved panel stacker %s", app_version)

    root = tk.Tk()
    root.title(f"Curved Panel Pallet Stacker v{app_version}")
    screen_w = root.winfo_screenwidth()
    screen_h = root.winfo_screenheight()
    width = min(int(screen_w * 0.9), 1600)
    height = min(int(screen_h * 0.9), 1000)
    root.geometry(f"{width}x{height}")
    root.minsize(1100, 700)

    style = ttk.Style()
    style.configure("TLabel", padding=(2, 1))
    style.configure("TEntry", padding=(2, 1))
    style.configure("TSpinbox", padding=(2, 1))
    style.configure("TButton", padding=(6, 3))
    style.configure("Treeview", rowheight=22)

    tab = TabStacker(root)
    tab.pack(fill=tk.BOTH, expand=True)

    root.mainloop()


if __name__ == "__main__":
    main()
