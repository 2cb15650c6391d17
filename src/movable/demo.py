"""Walkthrough scenarios shown by ``movable demo``.

Each scenario appends ``DemoStep`` records instead of printing, so the
CLI can render them as text, JSON or YAML and tests can assert on them.
"""
from __future__ import annotations

import io
import tempfile
from collections.abc import Callable
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from movable.cell import Movable
from movable.errors import MovedError, ReleasedError
from movable.handles import FileHandle
from movable.releasable import MovableResource


@dataclass(frozen=True)
class DemoStep:
    """One line of demo output.

    Parameters
    ----------
    example:
        Title of the scenario the step belongs to.
    message:
        What happened.
    expected_error:
        True when the step reports an error the scenario provoked on purpose.
    """

    example: str
    message: str
    expected_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


Recorder = Callable[..., None]


def _recorder(steps: list[DemoStep], example: str) -> Recorder:
    def record(message: str, expected_error: bool = False) -> None:
        steps.append(DemoStep(example, message, expected_error))

    return record


def bare_value(record: Recorder) -> None:
    cell = Movable("Hello, World!")
    record(f"Value: {cell.value}")
    moved = cell.move()
    record(f"Moved value: {moved}")
    record(f"Is moved: {cell.is_moved}")
    try:
        _ = cell.value
    except MovedError as exc:
        record(f"Expected error: {exc}", expected_error=True)


def stream_resource(record: Recorder) -> None:
    with MovableResource(io.BytesIO()) as cell:
        cell.resource.write(bytes([1, 2, 3, 4, 5]))
        record("Wrote 5 bytes to stream")
        record(f"Stream position: {cell.resource.tell()}")
        stream = cell.move()
        record(f"Moved stream, position: {stream.tell()}")
        record(f"Original wrapper is moved: {cell.is_moved}")
    record(f"Wrapper exit left the moved stream open: {not stream.closed}")
    stream.close()


def try_move_pattern(record: Recorder) -> None:
    cell = Movable(42)
    ok, value = cell.try_move()
    if ok:
        record(f"Successfully moved value: {value}")
    ok, _ = cell.try_move()
    if not ok:
        record("Second move attempt failed as expected")


def transfer_prevents_double_release(record: Recorder) -> None:
    stream = io.BytesIO()
    record("Created BytesIO")
    wrapper = MovableResource(stream)
    record("Wrapped in MovableResource")
    moved = wrapper.move()
    record("Moved ownership out of wrapper")
    wrapper.release()
    record("Wrapper released (no-op due to move)")
    moved.write(b"\xff")
    record(f"Can still use the moved stream, length: {len(moved.getvalue())}")
    moved.close()
    record("Closed the moved stream")


def file_handle(record: Recorder) -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "demo.bin"
        with FileHandle(path) as handle:
            handle.write(b"movable")
            handle.seek(0)
            record(f"Read back: {handle.read().decode()}")
        record(f"Handle released: {handle.is_released}")
        try:
            handle.read()
        except ReleasedError as exc:
            record(f"Expected error: {exc}", expected_error=True)


EXAMPLES: dict[str, Callable[[Recorder], None]] = {
    "Basic Movable": bare_value,
    "MovableResource with BytesIO": stream_resource,
    "try_move pattern": try_move_pattern,
    "Ownership transfer prevents double release": transfer_prevents_double_release,
    "FileHandle built on MovableBase": file_handle,
}


def run_demo() -> list[DemoStep]:
    """Run every scenario in order and return the recorded steps."""
    steps: list[DemoStep] = []
    for title, example in EXAMPLES.items():
        example(_recorder(steps, title))
    return steps
