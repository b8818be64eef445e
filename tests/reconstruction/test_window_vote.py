"""Test the single-pixel neighborhood vote."""

import numpy as np
import pytest

from rccm.categories import (
    MISSING, CLOUD_HIGH, CLOUD_LOW, CLEAR_LOW, CLEAR_HIGH, OBSCURED, EDGE, FILL,
)
from rccm.contracts import ContractViolation
from rccm.reconstruction.window_vote import vote, window_histogram, NO_DECISION, Vote

pytestmark = pytest.mark.unit


def _set(grid, cells, value):
    for col, row in cells:
        grid[col, row] = value


class TestStrictVote:
    """Homogeneous acceptance rule."""

    def test_four_agreeing_neighbors_resolve(self, fill_grid):
        """Exactly four neighbors valued 2, rest missing/fill, resolves to 2."""
        fill_grid[100, 60] = MISSING
        _set(fill_grid, [(99, 59), (100, 59), (101, 59), (99, 60)], CLOUD_LOW)
        _set(fill_grid, [(101, 60), (99, 61)], MISSING)

        assert vote(fill_grid, 100, 60, 1, 4, True) == Vote(True, CLOUD_LOW)

    def test_three_neighbors_are_not_enough(self, fill_grid):
        fill_grid[100, 60] = MISSING
        _set(fill_grid, [(99, 59), (100, 59), (101, 59)], CLOUD_HIGH)

        assert vote(fill_grid, 100, 60, 1, 4, True) == NO_DECISION

    def test_mixed_neighbors_rejected(self, fill_grid):
        """Strict mode refuses as soon as two categories are present."""
        fill_grid[100, 60] = MISSING
        _set(fill_grid, [(99, 59), (100, 59), (101, 59)], CLOUD_LOW)
        fill_grid[99, 60] = CLEAR_LOW

        assert vote(fill_grid, 100, 60, 1, 4, True) == NO_DECISION

    def test_uniform_window_resolves(self, clear_grid):
        clear_grid[10, 10] = MISSING

        assert vote(clear_grid, 10, 10, 1, 4, True) == Vote(True, CLEAR_HIGH)


class TestRelaxedVote:
    """Heterogeneous (majority) acceptance rule."""

    def test_majority_wins(self, fill_grid):
        fill_grid[50, 50] = MISSING
        cells = [(c, r) for c in range(48, 53) for r in range(48, 53) if (c, r) != (50, 50)]
        _set(fill_grid, cells[:7], CLOUD_HIGH)
        _set(fill_grid, cells[7:12], CLEAR_LOW)

        assert vote(fill_grid, 50, 50, 2, 12, False) == Vote(True, CLOUD_HIGH)

    def test_below_threshold_not_resolved(self, fill_grid):
        fill_grid[50, 50] = MISSING
        cells = [(c, r) for c in range(48, 53) for r in range(48, 53) if (c, r) != (50, 50)]
        _set(fill_grid, cells[:11], CLOUD_HIGH)

        assert vote(fill_grid, 50, 50, 2, 12, False) == NO_DECISION

    def test_tie_goes_to_lowest_category(self, fill_grid):
        fill_grid[50, 50] = MISSING
        cells = [(c, r) for c in range(48, 53) for r in range(48, 53) if (c, r) != (50, 50)]
        _set(fill_grid, cells[:6], CLEAR_HIGH)
        _set(fill_grid, cells[6:12], CLOUD_LOW)

        assert vote(fill_grid, 50, 50, 2, 12, False) == Vote(True, CLOUD_LOW)

    def test_tie_between_all_four_categories(self, fill_grid):
        fill_grid[50, 50] = MISSING
        fill_grid[49, 49] = CLEAR_HIGH
        fill_grid[51, 51] = CLEAR_LOW
        fill_grid[49, 51] = CLOUD_LOW
        fill_grid[51, 49] = CLOUD_HIGH

        assert vote(fill_grid, 50, 50, 1, 3, False) == Vote(True, CLOUD_HIGH)

    def test_diverse_neighbors_accepted(self, fill_grid):
        """Relaxed mode does not require agreement."""
        fill_grid[50, 50] = MISSING
        _set(fill_grid, [(49, 49), (50, 49)], CLEAR_HIGH)
        fill_grid[51, 49] = CLEAR_LOW

        assert vote(fill_grid, 50, 50, 1, 3, False) == Vote(True, CLEAR_HIGH)


class TestEvidence:
    """Which cells count as evidence."""

    @pytest.mark.parametrize("marker", [MISSING, OBSCURED, EDGE, FILL])
    def test_non_decidable_cells_are_not_evidence(self, marker):
        grid = np.full((512, 128), marker, dtype=np.uint8)
        grid[20, 20] = MISSING

        assert window_histogram(grid, 20, 20, 2).sum() == 0
        assert vote(grid, 20, 20, 2, 1, False) == NO_DECISION

    def test_histogram_counts_each_category(self, fill_grid):
        fill_grid[20, 20] = MISSING
        fill_grid[19, 19] = CLOUD_HIGH
        fill_grid[21, 21] = CLOUD_HIGH
        fill_grid[19, 21] = CLEAR_HIGH
        fill_grid[20, 19] = OBSCURED

        assert window_histogram(fill_grid, 20, 20, 1).tolist() == [2, 0, 0, 1]

    def test_corner_window_is_clipped(self, clear_grid):
        """Radius 2 at (0, 0) only sees the in-bounds 3x3 block."""
        clear_grid[0, 0] = MISSING

        assert window_histogram(clear_grid, 0, 0, 2).tolist() == [0, 0, 0, 8]
        assert vote(clear_grid, 0, 0, 2, 8, False) == Vote(True, CLEAR_HIGH)
        assert vote(clear_grid, 0, 0, 2, 9, False) == NO_DECISION

    def test_far_corner_window_is_clipped(self, clear_grid):
        clear_grid[511, 127] = MISSING

        assert window_histogram(clear_grid, 511, 127, 2).sum() == 8

    def test_edge_window_is_clipped(self, clear_grid):
        clear_grid[0, 64] = MISSING

        # 3 columns x 5 rows, minus the center
        assert window_histogram(clear_grid, 0, 64, 2).sum() == 14

    def test_vote_does_not_modify_grid(self, clear_grid):
        clear_grid[30, 30] = MISSING
        before = clear_grid.copy()

        vote(clear_grid, 30, 30, 1, 4, False)

        np.testing.assert_array_equal(clear_grid, before)


class TestVoteContract:
    """Contract violations are errors; no decision is not."""

    def test_non_missing_center_raises(self, clear_grid):
        with pytest.raises(ContractViolation, match="expected 0"):
            vote(clear_grid, 5, 5, 1, 4, True)

    @pytest.mark.parametrize("col,row", [(512, 0), (0, 128), (-1, 0), (0, -1)])
    def test_out_of_bounds_raises(self, clear_grid, col, row):
        with pytest.raises(ContractViolation, match="outside grid"):
            vote(clear_grid, col, row, 1, 4, True)

    def test_zero_radius_raises(self, clear_grid):
        clear_grid[5, 5] = MISSING
        with pytest.raises(ContractViolation, match="radius"):
            vote(clear_grid, 5, 5, 0, 4, True)
