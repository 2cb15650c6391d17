#!/usr/bin/env python3
"""Example: Quickstart — movable

Minimal working example: move a plain value, then hand a stream
resource to a new owner without the wrapper closing it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install movable
"""
from __future__ import annotations

import io

import movable


def main() -> None:
    print(f"movable version: {movable.__version__}")

    # Step 1: a plain value has exactly one owner
    greeting = movable.Movable("Hello, World!")
    text = greeting.move()
    print(f"Moved: {text!r}, cell is moved: {greeting.is_moved}")
    try:
        greeting.value
    except movable.MovedError as exc:
        print(f"Access after move: {exc}")

    # Step 2: a resource is released on block exit unless moved out
    with movable.MovableResource(io.BytesIO()) as cell:
        cell.resource.write(b"payload")
        stream = cell.move()
    print(f"Stream still open after block exit: {not stream.closed}")
    stream.close()

    # Step 3: try_move never raises
    answer = movable.Movable(42)
    print(f"First try_move: {answer.try_move()}")
    print(f"Second try_move: {answer.try_move()}")


if __name__ == "__main__":
    main()
