"""Move semantics for plain values.

``Movable`` wraps any non-``None`` value and lets exactly one holder
take it out with ``move()``.  After that every access fails with
``MovedError``.  There is no release action, so a bare cell never
enters the ``RELEASED`` state.

Example
-------
::

    from movable import Movable

    greeting = Movable("Hello, World!")
    greeting.value            # 'Hello, World!'
    text = greeting.move()    # ownership now lives in ``text``
    greeting.value            # raises MovedError
"""
from __future__ import annotations

from typing import Generic, TypeVar

from movable.errors import InvalidArgumentError
from movable.state import Ownership, OwnershipState

T = TypeVar("T")


class Movable(Generic[T]):
    """A single-owner wrapper around an arbitrary value.

    Parameters
    ----------
    value:
        The value to own.  ``None`` is rejected.
    label:
        Type tag for error messages; defaults to the value's class name.

    Raises
    ------
    InvalidArgumentError
        If ``value`` is ``None``.
    """

    def __init__(self, value: T, *, label: str | None = None) -> None:
        if value is None:
            raise InvalidArgumentError("value", "cannot wrap None")
        self._value: T | None = value
        self._ownership = Ownership(
            label or type(value).__name__, releasable=False
        )

    @property
    def label(self) -> str:
        return self._ownership.label

    @property
    def state(self) -> OwnershipState:
        return self._ownership.state

    @property
    def is_moved(self) -> bool:
        """True once ``move`` or ``try_move`` has succeeded."""
        return self._ownership.is_moved

    @property
    def value(self) -> T:
        """The owned value.

        Raises
        ------
        MovedError
            If the value has been moved out.
        """
        return self.peek()

    def peek(self) -> T:
        """Return the owned value without giving up ownership."""
        self._ownership.ensure_not_moved()
        return self._value  # type: ignore[return-value]

    def move(self) -> T:
        """Take the value out, leaving this cell moved.

        Returns
        -------
        T
            The same object that was passed to the constructor.

        Raises
        ------
        MovedError
            If the value has already been moved out.
        """
        self._ownership.begin_move()
        value, self._value = self._value, None
        return value  # type: ignore[return-value]

    def try_move(self) -> tuple[bool, T | None]:
        """Take the value out if still owned.

        Returns ``(True, value)`` on success and ``(False, None)`` when
        the value was already moved.  Never raises.
        """
        if not self._ownership.try_begin_move():
            return False, None
        value, self._value = self._value, None
        return True, value

    def __repr__(self) -> str:
        return f"Movable[{self.label}]({self.state.value})"
