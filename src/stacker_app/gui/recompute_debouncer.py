from __future__ import annotations

from collections.abc import Callable
from typing import Any


class RecomputeDebouncer:
    """Coalesce bursts of edits into one recompute.

    ``schedule``/``cancel`` are usually bound to ``widget.after_idle`` and
    ``widget.after_cancel``. A pending ``full`` request survives later
    partial ones until the flush.
    """

    def __init__(
        self,
        schedule: Callable[[Callable[[], None]], Any],
        cancel: Callable[[Any], None],
        recompute: Callable[[bool], None],
    ) -> None:
        self._schedule = schedule
        self._cancel = cancel
        self._recompute = recompute
        self._after_id: Any | None = None
        self._pending = False
        self._pending_full = False

    @property
    def pending(self) -> bool:
        return self._pending

    def request(self, full: bool = False) -> None:
        self._pending = True
        self._pending_full = self._pending_full or full
        if self._after_id is not None:
            self._cancel(self._after_id)
        self._after_id = self._schedule(self.flush)

    def flush(self) -> None:
        self._after_id = None
        if not self._pending:
            return
        full = self._pending_full
        self._pending = False
        self._pending_full = False
        self._recompute(full)
