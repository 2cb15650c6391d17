"""Unit tests for movable.state — OwnershipState and the Ownership
transition table.
"""
from __future__ import annotations

import threading

import pytest

from movable.errors import MovedError, ReleasedError
from movable.state import Ownership, OwnershipState


# ===========================================================================
# OwnershipState
# ===========================================================================


class TestOwnershipState:
    def test_owned_is_not_terminal(self) -> None:
        assert not OwnershipState.OWNED.is_terminal

    @pytest.mark.parametrize("state", [OwnershipState.MOVED, OwnershipState.RELEASED])
    def test_moved_and_released_are_terminal(self, state: OwnershipState) -> None:
        assert state.is_terminal

    def test_values_are_lowercase_names(self) -> None:
        assert [s.value for s in OwnershipState] == ["owned", "moved", "released"]


# ===========================================================================
# Ownership — guards
# ===========================================================================


class TestOwnershipGuards:
    def test_starts_owned(self) -> None:
        ownership = Ownership("str")
        assert ownership.state is OwnershipState.OWNED
        assert ownership.is_owned

    def test_guards_pass_while_owned(self) -> None:
        ownership = Ownership("str")
        ownership.ensure_not_moved()
        ownership.ensure_not_released()
        ownership.ensure_owned()

    def test_guards_do_not_mutate(self) -> None:
        ownership = Ownership("str")
        ownership.ensure_owned()
        assert ownership.is_owned

    def test_ensure_not_moved_raises_after_move(self) -> None:
        ownership = Ownership("str")
        ownership.begin_move()
        with pytest.raises(MovedError):
            ownership.ensure_not_moved()
        ownership.ensure_not_released()

    def test_ensure_not_released_raises_after_release(self) -> None:
        ownership = Ownership("str")
        ownership.begin_release()
        with pytest.raises(ReleasedError):
            ownership.ensure_not_released()
        ownership.ensure_not_moved()

    def test_error_carries_label_and_state(self) -> None:
        ownership = Ownership("BytesIO")
        ownership.begin_move()
        with pytest.raises(MovedError) as info:
            ownership.ensure_owned()
        assert info.value.label == "BytesIO"
        assert info.value.state is OwnershipState.MOVED


# ===========================================================================
# Ownership — transitions
# ===========================================================================


class TestOwnershipTransitions:
    def test_begin_move_sets_moved(self) -> None:
        ownership = Ownership("str")
        ownership.begin_move()
        assert ownership.is_moved

    def test_begin_move_twice_raises_moved(self) -> None:
        ownership = Ownership("str")
        ownership.begin_move()
        with pytest.raises(MovedError):
            ownership.begin_move()

    def test_begin_move_after_release_raises_released(self) -> None:
        ownership = Ownership("str")
        ownership.begin_release()
        with pytest.raises(ReleasedError):
            ownership.begin_move()

    def test_try_begin_move_reports_outcome(self) -> None:
        ownership = Ownership("str")
        assert ownership.try_begin_move() is True
        assert ownership.try_begin_move() is False

    def test_begin_release_is_one_shot(self) -> None:
        ownership = Ownership("str")
        assert ownership.begin_release() is True
        assert ownership.begin_release() is False
        assert ownership.is_released

    def test_begin_release_after_move_is_noop(self) -> None:
        ownership = Ownership("str")
        ownership.begin_move()
        assert ownership.begin_release() is False
        assert ownership.is_moved

    def test_bare_value_ownership_has_no_release(self) -> None:
        ownership = Ownership("int", releasable=False)
        with pytest.raises(TypeError):
            ownership.begin_release()
        assert ownership.is_owned

    @pytest.mark.parametrize(
        "operations",
        [
            ["move", "release", "try_move"],
            ["release", "try_move", "release"],
            ["try_move", "try_move", "release"],
        ],
    )
    def test_state_never_returns_to_owned(self, operations: list[str]) -> None:
        ownership = Ownership("str")
        actions = {
            "move": ownership.begin_move,
            "try_move": ownership.try_begin_move,
            "release": ownership.begin_release,
        }
        first_terminal = None
        for name in operations:
            try:
                actions[name]()
            except (MovedError, ReleasedError):
                pass
            assert not ownership.is_owned
            if first_terminal is None:
                first_terminal = ownership.state
            assert ownership.state is first_terminal

    def test_concurrent_moves_have_single_winner(self) -> None:
        ownership = Ownership("str")
        barrier = threading.Barrier(8)
        wins: list[bool] = []
        lock = threading.Lock()

        def contender() -> None:
            barrier.wait()
            won = ownership.try_begin_move()
            with lock:
                wins.append(won)

        threads = [threading.Thread(target=contender) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert wins.count(True) == 1

    def test_repr_contains_label_and_state(self) -> None:
        ownership = Ownership("BytesIO")
        assert "BytesIO" in repr(ownership)
        assert "owned" in repr(ownership)
