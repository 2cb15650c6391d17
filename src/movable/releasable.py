"""Move semantics for resources that must be released exactly once.

``MovableResource`` pairs a resource with the action that releases it
(``close()`` by default).  The holder either moves the resource out,
after which the cell never touches it again, or releases it, after
which the resource is gone.  ``release()`` is safe to call from any
cleanup path: once the cell is moved or released it does nothing.

Example
-------
::

    import io
    from movable import MovableResource

    with MovableResource(io.BytesIO()) as cell:
        cell.resource.write(b"payload")
        stream = cell.move()

    # leaving the block was a no-op: ``stream`` is still open
    stream.close()
"""
from __future__ import annotations

import weakref
from collections.abc import Callable
from types import TracebackType
from typing import Generic, TypeVar

from movable.base import MovableBase, ReleaseHooks
from movable.errors import InvalidArgumentError
from movable.state import Ownership, OwnershipState
from movable.tracking import tracker

T = TypeVar("T")

ReleaseAction = Callable[[T], None]


def _close(resource: object) -> None:
    resource.close()  # type: ignore[attr-defined]


def _release_hooks(resource: ReleaseHooks) -> None:
    try:
        resource.release_managed()
    finally:
        resource.release_unmanaged()


def _release_base(resource: MovableBase) -> None:
    # The base keeps its own state; releasing through it keeps one owner.
    resource.release()


def _release_on_collect(
    release: ReleaseAction, resource: object, ticket: int | None, label: str
) -> None:
    # Runs when the cell is collected while still owned.
    tracker.report_leak(ticket, label)
    release(resource)


class MovableResource(Generic[T]):
    """A single-owner wrapper around a releasable resource.

    Parameters
    ----------
    resource:
        The resource to own.  ``None`` is rejected.
    release:
        Called with ``resource`` on release.  Defaults to the resource's
        own ``close`` method.
    label:
        Type tag for error messages; defaults to the resource's class name.

    Raises
    ------
    InvalidArgumentError
        If ``resource`` is ``None``, or no ``release`` is given and the
        resource has no callable ``close``.

    Notes
    -----
    The release-on-collection finalizer holds a strong reference to the
    resource.  A resource that refers back to its own cell therefore
    keeps the cell alive: it is only released at interpreter exit, and
    leak tracking does not report it before then.  Release such cells
    explicitly.
    """

    def __init__(
        self,
        resource: T,
        release: ReleaseAction | None = None,
        *,
        label: str | None = None,
    ) -> None:
        if resource is None:
            raise InvalidArgumentError("resource", "cannot wrap None")
        if release is None:
            if not callable(getattr(resource, "close", None)):
                raise InvalidArgumentError(
                    "release",
                    f"{type(resource).__name__} has no close() method; "
                    "pass an explicit release action",
                )
            release = _close
        label = label or type(resource).__name__
        self._resource: T | None = resource
        self._release = release
        self._ownership = Ownership(label)
        self._ticket = tracker.acquire(label)
        self._finalizer = weakref.finalize(
            self, _release_on_collect, release, resource, self._ticket, label
        )

    @classmethod
    def from_hooks(
        cls, resource: ReleaseHooks, *, label: str | None = None
    ) -> "MovableResource[ReleaseHooks]":
        """Wrap an object exposing ``release_managed``/``release_unmanaged``.

        The hooks run in that order, once, when the cell is released.  A
        ``MovableBase`` is released through its own ``release()``, so the
        hooks cannot run again from the base's ``with`` block or finalizer.
        """
        if resource is not None and not isinstance(resource, ReleaseHooks):
            raise InvalidArgumentError(
                "resource",
                f"{type(resource).__name__} does not implement the release hooks",
            )
        release = _release_base if isinstance(resource, MovableBase) else _release_hooks
        return cls(resource, release, label=label)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def label(self) -> str:
        return self._ownership.label

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
    # Access
    # ------------------------------------------------------------------

    @property
    def resource(self) -> T:
        """The owned resource.

        Raises
        ------
        MovedError
            If the resource has been moved out.
        ReleasedError
            If the resource has been released.
        """
        return self.peek()

    def peek(self) -> T:
        """Return the owned resource without giving up ownership."""
        self._ownership.ensure_owned()
        return self._resource  # type: ignore[return-value]

    def ensure_not_moved(self) -> None:
        self._ownership.ensure_not_moved()

    def ensure_not_released(self) -> None:
        self._ownership.ensure_not_released()

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def move(self) -> T:
        """Take the resource out; the caller becomes responsible for it.

        Raises
        ------
        MovedError
            If the resource has already been moved out.
        ReleasedError
            If the resource has been released.
        """
        self._ownership.begin_move()
        return self._hand_over()

    def try_move(self) -> tuple[bool, T | None]:
        """Take the resource out if still owned.

        Returns ``(True, resource)`` on success and ``(False, None)`` when
        the cell is already moved or released.  Never raises.
        """
        if not self._ownership.try_begin_move():
            return False, None
        return True, self._hand_over()

    def release(self) -> None:
        """Release the resource unless it was moved or already released."""
        if not self._ownership.begin_release():
            return
        self._finalizer.detach()
        resource, self._resource = self._resource, None
        tracker.settle(self._ticket, OwnershipState.RELEASED)
        self._release(resource)

    close = release

    def _hand_over(self) -> T:
        self._finalizer.detach()
        resource, self._resource = self._resource, None
        tracker.settle(self._ticket, OwnershipState.MOVED)
        return resource  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> "MovableResource[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"MovableResource[{self.label}]({self.state.value})"
