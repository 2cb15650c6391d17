"""Exception types raised by movable cells.

Access failures are split by the terminal state that caused them so
callers can tell a moved cell from a released one.  Both derive from
``OwnershipError`` for callers that only care that the cell no longer
owns its value.

Releasing a cell twice, or releasing a moved cell, is not an error and
has no exception type.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from movable.state import OwnershipState


class OwnershipError(RuntimeError):
    """Raised when a cell is used after it stopped owning its value.

    Parameters
    ----------
    label:
        Type tag of the wrapped value, captured when the cell was built.
    state:
        The terminal state the cell was in when the access happened.
    message:
        Optional override for the default message.
    """

    verb = "settled"

    def __init__(
        self, label: str, state: "OwnershipState", message: str | None = None
    ) -> None:
        self.label = label
        self.state = state
        super().__init__(
            message
            or f"The {label} has been {self.verb} and can no longer be accessed."
        )


class MovedError(OwnershipError):
    """Raised when a cell is accessed or moved after a successful move."""

    verb = "moved"


class ReleasedError(OwnershipError):
    """Raised when a cell is accessed or moved after it was released."""

    verb = "released"


class InvalidArgumentError(ValueError):
    """Raised when a cell is constructed from an unusable argument."""

    def __init__(self, argument: str, reason: str) -> None:
        self.argument = argument
        super().__init__(f"Invalid argument {argument!r}: {reason}")
