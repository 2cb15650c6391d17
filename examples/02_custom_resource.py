#!/usr/bin/env python3
"""Example: Custom resource — movable

Define a resource type by subclassing ``MovableBase`` and overriding
its release hooks, then run with leak tracking enabled.

Usage:
    MOVABLE_TRACK_LEAKS=1 python examples/02_custom_resource.py

Requirements:
    pip install movable
"""
from __future__ import annotations

import movable


class Connection(movable.MovableBase):
    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name
        self.sent: list[bytes] = []

    def send(self, data: bytes) -> None:
        self.ensure_owned()
        self.sent.append(data)

    def release_managed(self) -> None:
        print(f"{self.name}: flushing {len(self.sent)} message(s)")

    def release_unmanaged(self) -> None:
        print(f"{self.name}: socket closed")


def main() -> None:
    with Connection("primary") as conn:
        conn.send(b"hello")
        conn.send(b"world")

    try:
        conn.send(b"late")
    except movable.ReleasedError as exc:
        print(f"Send after release: {exc}")

    print(f"Live tracked cells: {movable.tracker.live_count()}")


if __name__ == "__main__":
    main()
