"""Debug-mode leak tracking for releasable cells.

When ``MovableConfig.track_leaks`` is on, every releasable cell takes a
ticket from the process-wide ``tracker`` on construction and hands it
back when it is moved or released.  A cell that is garbage collected
while still owning its resource is reported as a leak: its release
still runs, but a ``ResourceWarning`` is issued and a WARNING record is
logged so the missing ``release()``/``with`` block can be found.

With tracking off (the default) tickets are ``None`` and every call
here returns immediately.
"""
from __future__ import annotations

import itertools
import logging
import threading
import warnings

from movable.config import get_config
from movable.state import OwnershipState

logger = logging.getLogger(__name__)


class LeakTracker:
    """Registry of live owned cells, keyed by ticket number."""

    def __init__(self) -> None:
        self._live: dict[int, str] = {}
        self._tickets = itertools.count(1)
        self._lock = threading.Lock()
        self._leaks = 0

    def acquire(self, label: str) -> int | None:
        """Register a new owned cell and return its ticket.

        Returns ``None`` when tracking is disabled.
        """
        if not get_config().track_leaks:
            return None
        with self._lock:
            ticket = next(self._tickets)
            self._live[ticket] = label
        logger.debug("Acquired %s cell #%d", label, ticket)
        return ticket

    def settle(self, ticket: int | None, state: OwnershipState) -> None:
        """Forget a cell that was moved or released."""
        if ticket is None:
            return
        with self._lock:
            label = self._live.pop(ticket, None)
        if label is not None:
            logger.debug("Settled %s cell #%d as %s", label, ticket, state.value)

    def report_leak(self, ticket: int | None, label: str) -> None:
        """Record that an owned cell was finalized without release or move."""
        if ticket is None:
            return
        with self._lock:
            if self._live.pop(ticket, None) is None:
                return
            self._leaks += 1
        logger.warning(
            "%s cell #%d was finalized while still owned; releasing it now",
            label,
            ticket,
        )
        if get_config().warn_on_leak:
            warnings.warn(
                f"{label} cell #{ticket} was never released or moved. "
                "Release it explicitly or use it in a 'with' block.",
                ResourceWarning,
                stacklevel=2,
            )

    def live_count(self) -> int:
        """Return the number of tracked cells that still own their value."""
        with self._lock:
            return len(self._live)

    def live_labels(self) -> list[str]:
        """Return the labels of live cells in acquisition order."""
        with self._lock:
            return [self._live[ticket] for ticket in sorted(self._live)]

    @property
    def leak_count(self) -> int:
        """Number of leaks reported since the last ``reset``."""
        return self._leaks

    def reset(self) -> None:
        """Drop all tracked cells and zero the leak counter."""
        with self._lock:
            self._live.clear()
            self._leaks = 0

    def __repr__(self) -> str:
        return f"LeakTracker(live={self.live_count()}, leaks={self._leaks})"


tracker = LeakTracker()
