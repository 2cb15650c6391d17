"""Ownership state machine shared by every cell type.

A cell starts ``OWNED`` and leaves that state exactly once, either by
being moved (ownership passes to the caller of ``move``) or by being
released (the release action runs).  Both outcomes are terminal::

    OWNED --move()----> MOVED
      |
      +---release()---> RELEASED

``Ownership`` holds the state and the guard logic; cells compose one
instance and delegate every check and transition to it.  Each
transition is a read-check-write performed under a lock, so two
threads racing on ``move``/``release`` cannot both observe ``OWNED``.
"""
from __future__ import annotations

import threading
from enum import Enum

from movable.errors import MovedError, ReleasedError


class OwnershipState(Enum):
    """Lifecycle state of a cell."""

    OWNED = "owned"
    MOVED = "moved"
    RELEASED = "released"

    @property
    def is_terminal(self) -> bool:
        """Return True for states no operation can leave."""
        return self is not OwnershipState.OWNED


class Ownership:
    """The transition table and guards for a single cell.

    Parameters
    ----------
    label:
        Type tag used in error messages, e.g. ``"BytesIO"``.
    releasable:
        ``False`` for bare-value cells, which have no ``RELEASED`` state.
    """

    __slots__ = ("_label", "_releasable", "_state", "_lock")

    def __init__(self, label: str, releasable: bool = True) -> None:
        self._label = label
        self._releasable = releasable
        self._state = OwnershipState.OWNED
        self._lock = threading.Lock()

    @property
    def label(self) -> str:
        return self._label

    @property
    def state(self) -> OwnershipState:
        return self._state

    @property
    def is_owned(self) -> bool:
        return self._state is OwnershipState.OWNED

    @property
    def is_moved(self) -> bool:
        return self._state is OwnershipState.MOVED

    @property
    def is_released(self) -> bool:
        return self._state is OwnershipState.RELEASED

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def ensure_not_moved(self) -> None:
        """Raise ``MovedError`` if the cell has been moved."""
        if self._state is OwnershipState.MOVED:
            raise MovedError(self._label, self._state)

    def ensure_not_released(self) -> None:
        """Raise ``ReleasedError`` if the cell has been released."""
        if self._state is OwnershipState.RELEASED:
            raise ReleasedError(self._label, self._state)

    def ensure_owned(self) -> None:
        """Raise the error matching the current terminal state, if any."""
        self.ensure_not_moved()
        self.ensure_not_released()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def begin_move(self) -> None:
        """Transition ``OWNED -> MOVED`` or raise.

        Raises
        ------
        MovedError
            If the cell was already moved.
        ReleasedError
            If the cell was already released.
        """
        with self._lock:
            self.ensure_owned()
            self._state = OwnershipState.MOVED

    def try_begin_move(self) -> bool:
        """Transition ``OWNED -> MOVED`` and return whether it happened."""
        with self._lock:
            if self._state is not OwnershipState.OWNED:
                return False
            self._state = OwnershipState.MOVED
            return True

    def begin_release(self) -> bool:
        """Transition ``OWNED -> RELEASED`` and return whether it happened.

        Returns ``False`` without changing anything when the cell is
        already moved or released; the caller then skips its release
        action.
        """
        if not self._releasable:
            raise TypeError(f"{self._label} cells carry no release action")
        with self._lock:
            if self._state is not OwnershipState.OWNED:
                return False
            self._state = OwnershipState.RELEASED
            return True

    def __repr__(self) -> str:
        return f"Ownership(label={self._label!r}, state={self._state.value})"
