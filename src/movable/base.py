"""Base class for resources that carry their own move semantics.

Subclass ``MovableBase`` when the resource *is* the object, rather than
something wrapped by it.  Override ``release_managed`` to close the
Python objects the resource holds (streams, sockets, child cells) and
``release_unmanaged`` to free anything outside the interpreter's
control (OS handles, native buffers).  Both run once, managed first,
on the first ``release()``.

Resource operations call the guard helpers first so they fail the same
way a wrapper cell does::

    class Connection(MovableBase):
        def send(self, data: bytes) -> None:
            self.ensure_owned()
            self._sock.sendall(data)

        def release_managed(self) -> None:
            self._sock.close()

If an owned instance is garbage collected without being released, only
``release_unmanaged`` runs: the managed objects it refers to are
finalized on their own.

The ``ReleaseHooks`` protocol describes the same two hooks for objects
that do not inherit from ``MovableBase``; see
``MovableResource.from_hooks``.
"""
from __future__ import annotations

from types import TracebackType
from typing import Protocol, runtime_checkable

from movable.state import Ownership, OwnershipState
from movable.tracking import tracker


@runtime_checkable
class ReleaseHooks(Protocol):
    """Anything that can be released in a managed and an unmanaged step."""

    def release_managed(self) -> None: ...

    def release_unmanaged(self) -> None: ...


class MovableBase:
    """Subclassable resource with move and exactly-once release."""

    def __init__(self) -> None:
        label = type(self).__name__
        self._ownership = Ownership(label)
        self._ticket = tracker.acquire(label)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> OwnershipState:
        return self._ownership.state

    @property
    def is_moved(self) -> bool:
        return self._ownership.is_moved

    @property
    def is_released(self) -> bool:
        return self._ownership.is_released

    # ------------------------------------------------------------------
    # Guards for subclass operations
    # ------------------------------------------------------------------

    def ensure_not_moved(self) -> None:
        """Raise ``MovedError`` if this instance has been moved."""
        self._ownership.ensure_not_moved()

    def ensure_not_released(self) -> None:
        """Raise ``ReleasedError`` if this instance has been released."""
        self._ownership.ensure_not_released()

    def ensure_owned(self) -> None:
        self._ownership.ensure_owned()

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def move(self) -> "MovableBase":
        """Mark this instance moved and return it.

        Later ``release()`` calls, including the one at the end of a
        ``with`` block, do nothing.

        Raises
        ------
        MovedError
            If the instance has already been moved.
        ReleasedError
            If the instance has been released.
        """
        self._ownership.begin_move()
        tracker.settle(self._ticket, OwnershipState.MOVED)
        return self

    def try_move(self) -> tuple[bool, "MovableBase | None"]:
        """Non-raising ``move``: ``(True, self)`` or ``(False, None)``."""
        if not self._ownership.try_begin_move():
            return False, None
        tracker.settle(self._ticket, OwnershipState.MOVED)
        return True, self

    def release(self) -> None:
        """Run both release hooks, unless moved or already released."""
        self._release(managed=True)

    close = release

    def _release(self, managed: bool) -> None:
        if not self._ownership.begin_release():
            return
        tracker.settle(self._ticket, OwnershipState.RELEASED)
        try:
            if managed:
                self.release_managed()
        finally:
            self.release_unmanaged()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def release_managed(self) -> None:
        """Release Python-level resources. Override in subclasses."""

    def release_unmanaged(self) -> None:
        """Release resources outside the interpreter. Override in subclasses."""

    # ------------------------------------------------------------------
    # Context manager and finalizer
    # ------------------------------------------------------------------

    def __enter__(self) -> "MovableBase":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __del__(self) -> None:
        ownership = getattr(self, "_ownership", None)
        if ownership is None or not ownership.is_owned:
            return
        tracker.report_leak(self._ticket, ownership.label)
        self._release(managed=False)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.state.value})"
