from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Tuple

from .csv_import import parse_panel_csv
from .models import Panel, PanelField
from .partition import partition_into_pallets
from .stacking import sort_for_stack


@dataclass(frozen=True)
class PanelSession:
    """Panel list plus id counter for one editing session.

    Every change returns a new session; ids handed out by ``next_id`` are
    never reused, even after the panel carrying them is removed.
    """

    panels: Tuple[Panel, ...] = field(default_factory=tuple)
    next_id: int = 1

    @classmethod
    def initial(cls) -> "PanelSession":
        return cls(
            panels=(
                Panel(1, "P1", length=127, width=24, radius=91, angle_deg=30),
                Panel(2, "P2", length=127, width=20, radius=91, angle_deg=45),
            ),
            next_id=3,
        )

    def get(self, panel_id: int) -> Panel | None:
        for panel in self.panels:
            if panel.id == panel_id:
                return panel
        return None

    def add_panel(self) -> "PanelSession":
        panel = Panel(self.next_id, f"P{self.next_id}")
        return replace(self, panels=self.panels + (panel,), next_id=self.next_id + 1)

    def remove_panel(self, panel_id: int) -> "PanelSession":
        remaining = tuple(panel for panel in self.panels if panel.id != panel_id)
        if len(remaining) == len(self.panels):
            return self
        return replace(self, panels=remaining)

    def update_panel(
        self, panel_id: int, panel_field: PanelField, raw_value: str
    ) -> "PanelSession":
        if self.get(panel_id) is None:
            return self
        updated = tuple(
            panel.with_field(panel_field, raw_value) if panel.id == panel_id else panel
            for panel in self.panels
        )
        return replace(self, panels=updated)

    def replace_from_csv(self, text: str) -> "PanelSession":
        panels, next_id = parse_panel_csv(text, self.next_id)
        if not panels:
            return self
        return replace(self, panels=tuple(panels), next_id=next_id)

    def stack(self) -> List[Panel]:
        return sort_for_stack(self.panels)

    def pallets(self, pallet_count: int) -> List[List[Panel]]:
        return partition_into_pallets(self.panels, pallet_count)
