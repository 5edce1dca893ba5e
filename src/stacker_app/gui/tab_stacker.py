import logging
import tkinter as tk
from tkinter import ttk, messagebox, filedialog
from typing import Dict, List

import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from stacker_core import CsvImportError, PanelField, PanelSession
from stacker_core.csv_import import SAMPLE_CSV
from stacker_core.export_io import (
    ensure_export_dir,
    write_pallet_csv,
    write_stack_csv,
    write_stack_pdf,
)
from stacker_core.metrics import compute_curvature_score
from stacker_core.models import Panel
from stacker_core.settings import load_settings
from stacker_app.gui.panel_input_parsing import parse_pallet_count
from stacker_app.gui.recompute_debouncer import RecomputeDebouncer
from stacker_app.gui.table_rows import (
    MAX_PALLETS,
    MIN_PALLETS,
    clamp_pallet_count,
    pallet_heading,
    pallet_rows,
    panel_row,
    stack_rows,
)

logger = logging.getLogger(__name__)

FORM_FIELDS = [
    (PanelField.LABEL, "Label:"),
    (PanelField.LENGTH, "Length (X):"),
    (PanelField.WIDTH, "Width (Y):"),
    (PanelField.RADIUS, "Radius:"),
    (PanelField.ANGLE_DEG, "Angle (°):"),
]


class TabStacker(ttk.Frame):
    def __init__(self, parent, session: PanelSession | None = None):
        super().__init__(parent)
        self.settings = load_settings()
        self.session = session or PanelSession.initial()
        self.selected_id: int | None = None
        self.sorted_panels: List[Panel] = []
        self.pallets: List[List[Panel]] = []
        self._loading_form = False

        self.pallet_count_var = tk.StringVar(
            value=str(clamp_pallet_count(self.settings.default_pallet_count))
        )
        self.field_vars: Dict[PanelField, tk.StringVar] = {
            panel_field: tk.StringVar() for panel_field, _ in FORM_FIELDS
        }
        self.status_var = tk.StringVar(value="")

        self.debouncer = RecomputeDebouncer(
            self.after_idle, self.after_cancel, self.recompute
        )
        self.build_ui()
        for panel_field, var in self.field_vars.items():
            var.trace_add("write", lambda *_args, f=panel_field: self.on_field_edit(f))
        self.pallet_count_var.trace_add("write", lambda *_args: self.debouncer.request())
        self.recompute(full=True)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def build_ui(self):
        self.columnconfigure(0, weight=2)
        self.columnconfigure(1, weight=3)
        self.rowconfigure(0, weight=1)

        left = ttk.Frame(self)
        left.grid(row=0, column=0, sticky="nsew", padx=5, pady=5)
        left.columnconfigure(0, weight=1)
        left.rowconfigure(1, weight=1)

        right = ttk.Frame(self)
        right.grid(row=0, column=1, sticky="nsew", padx=5, pady=5)
        right.columnconfigure(0, weight=1)
        right.rowconfigure(0, weight=1)
        right.rowconfigure(2, weight=1)

        self._build_csv_frame(left)
        self._build_panel_frame(left)
        self._build_stack_frame(right)
        self._build_chart(right)
        self._build_pallet_frame(right)

        ttk.Label(self, textvariable=self.status_var).grid(
            row=1, column=0, columnspan=2, sticky="w", padx=5, pady=(0, 5)
        )

    def _build_csv_frame(self, parent):
        frame = ttk.LabelFrame(parent, text="Quick CSV import")
        frame.grid(row=0, column=0, sticky="nsew", pady=(0, 5))
        frame.columnconfigure(0, weight=1)

        ttk.Label(
            frame, text="Paste CSV text using this header: label,length,width,radius,angleDeg"
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=5, pady=2)
        self.csv_text = tk.Text(frame, height=8, width=40, font=("Courier", 9))
        self.csv_text.grid(row=1, column=0, columnspan=2, sticky="nsew", padx=5, pady=2)

        btn_frame = ttk.Frame(frame)
        btn_frame.grid(row=2, column=0, columnspan=2, sticky="w", padx=5, pady=5)
        ttk.Button(
            btn_frame, text="Replace table with CSV", command=self.on_csv_replace
        ).pack(side=tk.LEFT, padx=2)
        ttk.Button(btn_frame, text="Insert sample", command=self.on_csv_sample).pack(
            side=tk.LEFT, padx=2
        )

    def _build_panel_frame(self, parent):
        frame = ttk.LabelFrame(parent, text="Panel list")
        frame.grid(row=1, column=0, sticky="nsew")
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(0, weight=1)

        columns = ("label", "length", "width", "radius", "angle")
        headings = {
            "label": "Label",
            "length": "Length (X)",
            "width": "Width (Y)",
            "radius": "Radius",
            "angle": "Angle (°)",
        }
        self.panel_tree = ttk.Treeview(
            frame, columns=columns, show="headings", height=10, selectmode="browse"
        )
        for col in columns:
            anchor = "w" if col == "label" else "e"
            self.panel_tree.heading(col, text=headings[col])
            self.panel_tree.column(col, anchor=anchor, width=80, minwidth=60, stretch=True)
        scroll = ttk.Scrollbar(frame, orient="vertical", command=self.panel_tree.yview)
        self.panel_tree.configure(yscrollcommand=scroll.set)
        self.panel_tree.grid(row=0, column=0, sticky="nsew", padx=(5, 0), pady=5)
        scroll.grid(row=0, column=1, sticky="ns", pady=5)
        self.panel_tree.bind("<<TreeviewSelect>>", self.on_panel_select)

        form = ttk.Frame(frame)
        form.grid(row=1, column=0, columnspan=2, sticky="w", padx=5, pady=5)
        self.field_entries = {}
        for row, (panel_field, text) in enumerate(FORM_FIELDS):
            ttk.Label(form, text=text).grid(row=row, column=0, sticky="e", pady=2)
            entry = ttk.Entry(form, textvariable=self.field_vars[panel_field], width=20)
            entry.grid(row=row, column=1, sticky="w", pady=2)
            self.field_entries[panel_field] = entry

        btn_frame = ttk.Frame(form)
        btn_frame.grid(row=len(FORM_FIELDS), column=0, columnspan=2, pady=5)
        ttk.Button(btn_frame, text="+ Add panel", command=self.add_panel).pack(
            side=tk.LEFT, padx=2
        )
        ttk.Button(btn_frame, text="Remove", command=self.remove_panel).pack(
            side=tk.LEFT, padx=2
        )
        self._set_form_state(enabled=False)

    def _build_stack_frame(self, parent):
        frame = ttk.LabelFrame(parent, text="Stack order (row 1 is the pallet bottom)")
        frame.grid(row=0, column=0, sticky="nsew", pady=(0, 5))
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(1, weight=1)

        btn_frame = ttk.Frame(frame)
        btn_frame.grid(row=0, column=0, columnspan=2, sticky="w", padx=5, pady=2)
        self.export_buttons = [
            ttk.Button(btn_frame, text="Export CSV", command=self.export_stack_csv),
            ttk.Button(btn_frame, text="Export PDF", command=self.export_stack_pdf),
        ]
        for button in self.export_buttons:
            button.pack(side=tk.LEFT, padx=2)
        ttk.Label(
            btn_frame, text="Sort: least curved ➜ most curved, then largest area ➜ smallest"
        ).pack(side=tk.LEFT, padx=8)

        columns = ("pos", "label", "size", "radius", "angle", "area", "curvature")
        headings = {
            "pos": "Stack Pos.",
            "label": "Label",
            "size": "Length × Width",
            "radius": "Radius",
            "angle": "Angle (°)",
            "area": "Area",
            "curvature": "Curvature score",
        }
        self.stack_tree = ttk.Treeview(frame, columns=columns, show="headings", height=8)
        for col in columns:
            anchor = "w" if col in ("pos", "label") else "e"
            self.stack_tree.heading(col, text=headings[col])
            self.stack_tree.column(col, anchor=anchor, width=90, minwidth=60, stretch=True)
        scroll = ttk.Scrollbar(frame, orient="vertical", command=self.stack_tree.yview)
        self.stack_tree.configure(yscrollcommand=scroll.set)
        self.stack_tree.grid(row=1, column=0, sticky="nsew", padx=(5, 0), pady=5)
        scroll.grid(row=1, column=1, sticky="ns", pady=5)

    def _build_chart(self, parent):
        chart_panel = ttk.Frame(parent)
        chart_panel.grid(row=1, column=0, sticky="nsew", pady=(0, 5))
        chart_panel.columnconfigure(0, weight=1)

        self.fig = plt.Figure(figsize=(6, 2.2))
        self.ax_curvature = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, master=chart_panel)
        self.canvas.get_tk_widget().grid(row=0, column=0, sticky="nsew")

    def _build_pallet_frame(self, parent):
        frame = ttk.LabelFrame(parent, text="Length-based pallet planner")
        frame.grid(row=2, column=0, sticky="nsew")
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(1, weight=1)

        top = ttk.Frame(frame)
        top.grid(row=0, column=0, columnspan=2, sticky="w", padx=5, pady=2)
        ttk.Label(top, text="# of pallets:").pack(side=tk.LEFT)
        ttk.Spinbox(
            top,
            from_=MIN_PALLETS,
            to=MAX_PALLETS,
            textvariable=self.pallet_count_var,
            width=5,
        ).pack(side=tk.LEFT, padx=4)
        self.pallet_export_button = ttk.Button(
            top, text="Export pallets CSV", command=self.export_pallet_csv
        )
        self.pallet_export_button.pack(side=tk.LEFT, padx=4)
        ttk.Label(
            top, text="Group: length ↓ → split into pallets → sort by curvature within each"
        ).pack(side=tk.LEFT, padx=8)

        columns = ("label", "length", "width", "radius", "angle", "area", "curvature")
        headings = {
            "label": "Label",
            "length": "Length",
            "width": "Width",
            "radius": "Radius",
            "angle": "Angle (°)",
            "area": "Area",
            "curvature": "Curv",
        }
        self.pallet_tree = ttk.Treeview(frame, columns=columns, show="tree headings", height=8)
        self.pallet_tree.heading("#0", text="Pallet / Pos.")
        self.pallet_tree.column("#0", width=150, minwidth=110, stretch=True)
        for col in columns:
            anchor = "w" if col == "label" else "e"
            self.pallet_tree.heading(col, text=headings[col])
            self.pallet_tree.column(col, anchor=anchor, width=80, minwidth=60, stretch=True)
        scroll = ttk.Scrollbar(frame, orient="vertical", command=self.pallet_tree.yview)
        self.pallet_tree.configure(yscrollcommand=scroll.set)
        self.pallet_tree.grid(row=1, column=0, sticky="nsew", padx=(5, 0), pady=5)
        scroll.grid(row=1, column=1, sticky="ns", pady=5)

    # ------------------------------------------------------------------
    # Panel editing
    # ------------------------------------------------------------------

    def _set_form_state(self, enabled: bool) -> None:
        state = "!disabled" if enabled else "disabled"
        for entry in self.field_entries.values():
            entry.state([state])

    def _fill_form(self, panel: Panel | None) -> None:
        self._loading_form = True
        try:
            if panel is None:
                for var in self.field_vars.values():
                    var.set("")
            else:
                for panel_field, value in zip(
                    (field for field, _ in FORM_FIELDS), panel_row(panel)
                ):
                    self.field_vars[panel_field].set(value)
        finally:
            self._loading_form = False
        self._set_form_state(enabled=panel is not None)

    def on_panel_select(self, event=None):
        selection = self.panel_tree.selection()
        self.selected_id = int(selection[0]) if selection else None
        panel = self.session.get(self.selected_id) if self.selected_id is not None else None
        self._fill_form(panel)

    def on_field_edit(self, panel_field: PanelField) -> None:
        if self._loading_form or self.selected_id is None:
            return
        self.session = self.session.update_panel(
            self.selected_id, panel_field, self.field_vars[panel_field].get()
        )
        panel = self.session.get(self.selected_id)
        if panel is not None:
            self.panel_tree.item(str(panel.id), values=panel_row(panel))
        self.debouncer.request()

    def add_panel(self):
        new_id = self.session.next_id
        self.session = self.session.add_panel()
        self.recompute(full=True)
        self.panel_tree.selection_set(str(new_id))
        self.panel_tree.see(str(new_id))

    def remove_panel(self):
        if self.selected_id is None:
            return
        self.session = self.session.remove_panel(self.selected_id)
        self.selected_id = None
        self._fill_form(None)
        self.recompute(full=True)

    def on_csv_sample(self):
        self.csv_text.delete("1.0", tk.END)
        self.csv_text.insert("1.0", SAMPLE_CSV)

    def on_csv_replace(self):
        text = self.csv_text.get("1.0", tk.END)
        try:
            session = self.session.replace_from_csv(text)
        except CsvImportError as e:
            messagebox.showerror("CSV import", str(e))
            return
        if session is self.session:
            return
        self.session = session
        self.selected_id = None
        self._fill_form(None)
        self.recompute(full=True)
        self.status_var.set(f"Imported {len(self.session.panels)} panels from CSV.")

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def recompute(self, full: bool = False) -> None:
        if full:
            self._refresh_panel_tree()
        pallet_count = parse_pallet_count(
            self.pallet_count_var,
            on_error=lambda raw: self.status_var.set(
                f"Invalid pallet count {raw!r}, using {MIN_PALLETS}."
            ),
        )
        self.sorted_panels = self.session.stack()
        self.pallets = self.session.pallets(pallet_count)
        self._refresh_stack_tree()
        self._refresh_pallet_tree()
        self._draw_chart()
        state = "!disabled" if self.sorted_panels else "disabled"
        for button in self.export_buttons + [self.pallet_export_button]:
            button.state([state])

    def _refresh_panel_tree(self) -> None:
        self.panel_tree.delete(*self.panel_tree.get_children())
        for panel in self.session.panels:
            self.panel_tree.insert("", tk.END, iid=str(panel.id), values=panel_row(panel))
        if self.selected_id is not None and self.session.get(self.selected_id) is not None:
            self.panel_tree.selection_set(str(self.selected_id))

    def _refresh_stack_tree(self) -> None:
        self.stack_tree.delete(*self.stack_tree.get_children())
        if not self.sorted_panels:
            self.stack_tree.insert(
                "", tk.END, values=("", "Add or import panels to see a stack order.")
            )
            return
        for row in stack_rows(self.sorted_panels):
            self.stack_tree.insert("", tk.END, values=row)

    def _refresh_pallet_tree(self) -> None:
        self.pallet_tree.delete(*self.pallet_tree.get_children())
        if not self.pallets:
            self.pallet_tree.insert(
                "", tk.END, text="Add or import panels to see pallet groupings."
            )
            return
        for pallet_idx, pallet in enumerate(self.pallets):
            parent = self.pallet_tree.insert(
                "", tk.END, text=pallet_heading(pallet_idx, pallet), open=True
            )
            for row in pallet_rows(pallet):
                self.pallet_tree.insert(parent, tk.END, text=row[0], values=row[1:])

    def _draw_chart(self) -> None:
        ax = self.ax_curvature
        ax.clear()
        if self.sorted_panels:
            positions = list(range(1, len(self.sorted_panels) + 1))
            scores = [compute_curvature_score(panel) for panel in self.sorted_panels]
            ax.bar(positions, scores, color="tab:green")
            ax.set_xticks(positions)
            ax.set_xticklabels([panel.label for panel in self.sorted_panels], fontsize=7)
        ax.set_xlabel("Stack position (bottom → top)", fontsize=8)
        ax.set_ylabel("Curvature", fontsize=8)
        ax.tick_params(axis="y", labelsize=7)
        self.fig.tight_layout()
        self.canvas.draw_idle()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def _ask_export_path(self, filename: str, extension: str, filetype: str) -> str:
        try:
            initial_dir = ensure_export_dir()
        except OSError:
            logger.exception("Failed to prepare export directory")
            initial_dir = None
        return filedialog.asksaveasfilename(
            initialdir=initial_dir,
            initialfile=filename,
            defaultextension=extension,
            filetypes=[(filetype, f"*{extension}")],
        )

    def _run_export(self, filename: str, extension: str, filetype: str, writer) -> None:
        if not self.sorted_panels:
            messagebox.showwarning("No panels", "There are no panels to export.")
            return
        path = self._ask_export_path(filename, extension, filetype)
        if not path:
            return
        try:
            writer(path)
        except (OSError, ValueError) as e:
            logger.exception("Export to %s failed", path)
            messagebox.showerror("Export failed", str(e))
            return
        self.status_var.set(f"Saved {path}")

    def export_stack_csv(self):
        self._run_export(
            self.settings.stack_csv_name,
            ".csv",
            "CSV",
            lambda path: write_stack_csv(path, self.sorted_panels),
        )

    def export_pallet_csv(self):
        self._run_export(
            self.settings.pallet_csv_name,
            ".csv",
            "CSV",
            lambda path: write_pallet_csv(path, self.pallets),
        )

    def export_stack_pdf(self):
        self._run_export(
            self.settings.stack_pdf_name,
            ".pdf",
            "PDF",
            lambda path: write_stack_pdf(
                path, self.sorted_panels, title=self.settings.report_title
            ),
        )
