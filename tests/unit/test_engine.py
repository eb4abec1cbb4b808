"""
Unit tests for RevealEngine.

Tests single reveals, the flood-fill cascade, win evaluation and the
invariants that must hold across any sequence of reveals.
"""
import numpy as np
import pytest
from sweeper import (
    BoardConfig,
    BoardState,
    MineField,
    OutOfBoundsError,
    RevealEngine,
    RevealKind,
    RevealOutcome,
)


def _random_engine(seed: int, dimension: int = 8, mines: int = 8):
    field = MineField.random(
        BoardConfig(dimension, mines), np.random.default_rng(seed)
    )
    return RevealEngine(field)


def _safe_tiles(engine: RevealEngine):
    return [
        coord for coord in engine.state.all_tiles()
        if not engine.facts.is_mine(coord)
    ]


# ============================================================================
# Construction Tests
# ============================================================================

class TestEngineConstruction:
    """Test engine setup."""

    def test_creates_covered_state(self, center_mine_engine) -> None:
        assert center_mine_engine.dimension == 3
        assert center_mine_engine.uncovered_count == 0

    def test_accepts_existing_state(self, center_mine_field) -> None:
        state = BoardState(3)
        engine = RevealEngine(center_mine_field, state)
        engine.reveal((0, 0))
        assert state.is_covered((0, 0)) is False

    def test_mismatched_state_raises_error(self, center_mine_field) -> None:
        with pytest.raises(ValueError, match="does not match"):
            RevealEngine(center_mine_field, BoardState(4))

    def test_mine_count(self, walled_engine) -> None:
        assert walled_engine.mine_count == 7


# ============================================================================
# Single Reveal Tests
# ============================================================================

class TestReveal:
    """Test revealing individual tiles."""

    def test_numbered_tile_does_not_cascade(self, center_mine_engine) -> None:
        """A tile bordering a mine opens only itself."""
        outcome = center_mine_engine.reveal((0, 0))
        assert outcome == RevealOutcome.safe_reveal(1)
        assert center_mine_engine.get_valid_actions() == [
            (0, 1), (0, 2), (1, 0), (1, 1), (1, 2), (2, 0), (2, 1), (2, 2),
        ]

    def test_zero_tile_opens_whole_safe_region(
        self, corner_mine_engine
    ) -> None:
        """Revealing a blank corner opens every safe tile."""
        outcome = corner_mine_engine.reveal((0, 0))
        assert outcome.kind == RevealKind.SAFE_REVEAL
        assert outcome.uncovered == 8
        assert corner_mine_engine.is_covered((2, 2)) is True
        assert corner_mine_engine.evaluate() is True

    def test_reveal_mine_hits_and_stops(self, corner_mine_engine) -> None:
        """Revealing a mine uncovers only the mine."""
        outcome = corner_mine_engine.reveal((2, 2))
        assert outcome == RevealOutcome.hit_mine()
        assert corner_mine_engine.is_covered((2, 2)) is False
        assert corner_mine_engine.uncovered_count == 1

    def test_reveal_twice_is_already_uncovered(
        self, corner_mine_engine
    ) -> None:
        """Second reveal changes nothing."""
        corner_mine_engine.reveal((0, 0))
        before = corner_mine_engine.state.covered_mask()
        outcome = corner_mine_engine.reveal((0, 0))
        assert outcome == RevealOutcome.already_uncovered()
        np.testing.assert_array_equal(
            corner_mine_engine.state.covered_mask(), before
        )

    def test_reveal_tile_opened_by_cascade(self, corner_mine_engine) -> None:
        corner_mine_engine.reveal((0, 0))
        outcome = corner_mine_engine.reveal((1, 1))
        assert outcome.kind == RevealKind.ALREADY_UNCOVERED

    def test_reveal_mine_twice(self, center_mine_engine) -> None:
        center_mine_engine.reveal((1, 1))
        outcome = center_mine_engine.reveal((1, 1))
        assert outcome.kind == RevealKind.ALREADY_UNCOVERED

    @pytest.mark.parametrize("coord", [(-1, 0), (3, 0), (0, -1), (0, 3)])
    def test_reveal_out_of_bounds_raises(
        self, center_mine_engine, coord
    ) -> None:
        with pytest.raises(OutOfBoundsError):
            center_mine_engine.reveal(coord)
        assert center_mine_engine.uncovered_count == 0

    def test_is_covered_out_of_bounds_raises(self, center_mine_engine) -> None:
        with pytest.raises(OutOfBoundsError):
            center_mine_engine.is_covered((-1, 0))


# ============================================================================
# Cascade Tests
# ============================================================================

class TestCascade:
    """Test flood-fill behavior."""

    def test_empty_board_opens_completely(self, empty_engine) -> None:
        outcome = empty_engine.reveal((2, 2))
        assert outcome.uncovered == 25
        assert empty_engine.get_valid_actions() == []

    def test_cascade_stops_at_mine_wall(self, walled_engine) -> None:
        """Region left of the wall opens; wall and right side stay covered."""
        outcome = walled_engine.reveal((0, 0))
        assert outcome.uncovered == 21
        for row in range(7):
            for col in range(3, 7):
                assert walled_engine.is_covered((row, col)) is True

    def test_boundary_tiles_are_uncovered(self, walled_engine) -> None:
        walled_engine.reveal((3, 0))
        obs = walled_engine.get_observation()
        assert obs[0, 2] == 2
        assert obs[3, 2] == 3
        assert obs[3, 1] == 0

    def test_count_excludes_previously_uncovered(self, walled_engine) -> None:
        """Tiles opened by an earlier reveal are not counted again."""
        assert walled_engine.reveal((0, 2)).uncovered == 1
        assert walled_engine.reveal((0, 0)).uncovered == 20

    def test_both_sides_of_wall_win(self, walled_engine) -> None:
        walled_engine.reveal((0, 0))
        assert walled_engine.evaluate() is False
        walled_engine.reveal((6, 6))
        assert walled_engine.evaluate() is True

    def test_large_board_cascades_without_recursion(self) -> None:
        """A region far larger than the recursion limit still opens."""
        engine = RevealEngine(MineField.from_mines(120, [(119, 119)]))
        outcome = engine.reveal((0, 0))
        assert outcome.uncovered == 120 * 120 - 1
        assert engine.evaluate() is True

    def test_single_tile_board(self) -> None:
        engine = RevealEngine(MineField.from_mines(1, []))
        assert engine.reveal((0, 0)) == RevealOutcome.safe_reveal(1)
        assert engine.evaluate() is True

    def test_single_mine_board(self) -> None:
        engine = RevealEngine(MineField.from_mines(1, [(0, 0)]))
        assert engine.evaluate() is True
        assert engine.reveal((0, 0)).is_mine_hit is True


# ============================================================================
# Evaluation Tests
# ============================================================================

class TestEvaluate:
    """Test the win predicate."""

    def test_new_board_is_not_won(self, center_mine_engine) -> None:
        assert center_mine_engine.evaluate() is False

    def test_covered_mines_are_allowed(self, center_mine_engine) -> None:
        """Winning does not require touching the mine."""
        for coord in center_mine_engine.state.all_tiles():
            if coord != (1, 1):
                center_mine_engine.reveal(coord)
        assert center_mine_engine.evaluate() is True
        assert center_mine_engine.is_covered((1, 1)) is True

    def test_evaluate_does_not_mutate(self, corner_mine_engine) -> None:
        corner_mine_engine.reveal((0, 2))
        before = corner_mine_engine.state.covered_mask()
        for _ in range(3):
            corner_mine_engine.evaluate()
        np.testing.assert_array_equal(
            corner_mine_engine.state.covered_mask(), before
        )


# ============================================================================
# End-of-game Display Tests
# ============================================================================

class TestUncoverRemaining:
    """Test the optional uncover-everything policy."""

    def test_uncovers_all_remaining(self, corner_mine_engine) -> None:
        corner_mine_engine.reveal((0, 0))
        assert corner_mine_engine.uncover_remaining() == 1
        assert corner_mine_engine.get_valid_actions() == []

    def test_observation_shows_mine(self, center_mine_engine) -> None:
        center_mine_engine.uncover_remaining()
        obs = center_mine_engine.get_observation()
        assert obs[1, 1] == 9
        assert obs[0, 0] == 1
        assert obs.dtype == np.int8


# ============================================================================
# Invariant Tests
# ============================================================================

class TestInvariants:
    """Properties that hold on arbitrary random boards."""

    @pytest.mark.parametrize("seed", range(10))
    def test_cascade_closure(self, seed: int) -> None:
        """Every uncovered safe zero tile has all neighbors uncovered."""
        engine = _random_engine(seed)
        for coord in _safe_tiles(engine):
            engine.reveal(coord)
            for tile in engine.state.all_tiles():
                if engine.is_covered(tile) or engine.facts.is_mine(tile):
                    continue
                if engine.facts.adjacent_mine_count(tile) != 0:
                    continue
                for neighbor in engine.state.neighbors(tile):
                    assert engine.is_covered(neighbor) is False

    @pytest.mark.parametrize("seed", range(10))
    def test_cascade_never_uncovers_mines(self, seed: int) -> None:
        engine = _random_engine(seed)
        for coord in _safe_tiles(engine):
            engine.reveal(coord)
        for coord in engine.facts.mine_positions():
            assert engine.is_covered(coord) is True

    @pytest.mark.parametrize("seed", range(10))
    def test_uncovered_set_never_shrinks(self, seed: int) -> None:
        engine = _random_engine(seed)
        rng = np.random.default_rng(seed)
        previous = engine.state.covered_mask()
        for index in rng.permutation(64):
            engine.reveal((int(index) // 8, int(index) % 8))
            current = engine.state.covered_mask()
            # Covered now implies covered before
            assert np.all(previous | ~current)
            previous = current

    @pytest.mark.parametrize("seed", range(10))
    def test_win_matches_uncovered_count(self, seed: int) -> None:
        """Win iff uncovered tiles equal dimension^2 minus mines."""
        engine = _random_engine(seed)
        rng = np.random.default_rng(seed)
        target = 64 - engine.mine_count
        safe = _safe_tiles(engine)
        for index in rng.permutation(len(safe)):
            assert engine.evaluate() == (engine.uncovered_count == target)
            engine.reveal(safe[index])
        assert engine.evaluate() is True
        assert engine.uncovered_count == target

    @pytest.mark.parametrize("seed", range(5))
    def test_reported_count_matches_grid(self, seed: int) -> None:
        engine = _random_engine(seed)
        total = 0
        for coord in _safe_tiles(engine):
            total += engine.reveal(coord).uncovered
            assert total == engine.uncovered_count
