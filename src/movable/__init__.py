"""movable: runtime-checked ownership transfer for Python values and resources.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import io
    import movable

    # A plain value: one owner at a time
    cell = movable.Movable("Hello, World!")
    text = cell.move()
    cell.value                      # raises movable.MovedError

    # A resource: moved out, or released exactly once
    with movable.MovableResource(io.BytesIO()) as res:
        res.resource.write(b"abc")
        stream = res.move()         # the block exit no longer closes it

    # A resource type with its own release hooks
    class Buffer(movable.MovableBase):
        def release_managed(self) -> None:
            ...

    movable.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from movable.base import MovableBase, ReleaseHooks
from movable.cell import Movable
from movable.config import MovableConfig, configure, get_config
from movable.errors import (
    InvalidArgumentError,
    MovedError,
    OwnershipError,
    ReleasedError,
)
from movable.releasable import MovableResource
from movable.state import Ownership, OwnershipState
from movable.tracking import LeakTracker, tracker

__all__ = [
    "__version__",
    "Movable",
    "MovableResource",
    "MovableBase",
    "ReleaseHooks",
    "Ownership",
    "OwnershipState",
    "OwnershipError",
    "MovedError",
    "ReleasedError",
    "InvalidArgumentError",
    "MovableConfig",
    "configure",
    "get_config",
    "LeakTracker",
    "tracker",
]
