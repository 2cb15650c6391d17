"""Unit tests for movable.tracking — debug-mode leak detection."""
from __future__ import annotations

import gc
import io
import logging

import pytest

from movable import MovableBase, MovableConfig, MovableResource, configure
from movable.state import OwnershipState
from movable.tracking import LeakTracker, tracker


class TestLeakTrackerDisabled:
    def test_acquire_returns_none(self) -> None:
        assert LeakTracker().acquire("BytesIO") is None

    def test_settle_and_report_accept_none(self) -> None:
        local = LeakTracker()
        local.settle(None, OwnershipState.MOVED)
        local.report_leak(None, "BytesIO")
        assert local.live_count() == 0
        assert local.leak_count == 0


@pytest.mark.usefixtures("leak_tracking")
class TestLeakTrackerEnabled:
    def test_acquire_counts_live_cells(self) -> None:
        local = LeakTracker()
        first = local.acquire("BytesIO")
        second = local.acquire("FileHandle")
        assert first != second
        assert local.live_count() == 2
        assert local.live_labels() == ["BytesIO", "FileHandle"]

    def test_settle_forgets_cell(self) -> None:
        local = LeakTracker()
        ticket = local.acquire("BytesIO")
        local.settle(ticket, OwnershipState.RELEASED)
        assert local.live_count() == 0

    def test_acquire_logs_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="movable.tracking"):
            LeakTracker().acquire("BytesIO")
        assert "Acquired BytesIO" in caplog.text

    def test_report_leak_warns_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        local = LeakTracker()
        ticket = local.acquire("BytesIO")
        with pytest.warns(ResourceWarning, match="never released or moved"):
            local.report_leak(ticket, "BytesIO")
        assert local.leak_count == 1
        assert local.live_count() == 0
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_report_leak_without_warning(self) -> None:
        configure(MovableConfig(track_leaks=True, warn_on_leak=False))
        local = LeakTracker()
        ticket = local.acquire("BytesIO")
        local.report_leak(ticket, "BytesIO")
        assert local.leak_count == 1

    def test_reset(self) -> None:
        local = LeakTracker()
        local.acquire("BytesIO")
        local.reset()
        assert local.live_count() == 0
        assert "live=0" in repr(local)


@pytest.mark.usefixtures("leak_tracking")
class TestTrackedCells:
    def test_released_resource_is_settled(self) -> None:
        cell = MovableResource(io.BytesIO())
        assert tracker.live_count() == 1
        cell.release()
        assert tracker.live_count() == 0
        assert tracker.leak_count == 0

    def test_moved_resource_is_settled(self) -> None:
        cell = MovableResource(io.BytesIO())
        stream = cell.move()
        assert tracker.live_count() == 0
        stream.close()

    def test_dropped_resource_is_a_leak(self) -> None:
        stream = io.BytesIO()
        cell = MovableResource(stream)
        with pytest.warns(ResourceWarning):
            del cell
            gc.collect()
        assert tracker.leak_count == 1
        assert stream.closed

    def test_dropped_base_is_a_leak(self) -> None:
        resource = MovableBase()
        with pytest.warns(ResourceWarning):
            del resource
            gc.collect()
        assert tracker.leak_count == 1

    def test_moved_base_is_not_a_leak(self) -> None:
        resource = MovableBase()
        resource.move()
        del resource
        gc.collect()
        assert tracker.leak_count == 0
        assert tracker.live_count() == 0
