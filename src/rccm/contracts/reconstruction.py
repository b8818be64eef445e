"""Reconstruction engine contracts.

assert_votable() guards every window vote; assert_reconstructed() checks a
camera grid after its stage schedule has run.
"""

import numpy as np
from rccm.categories import MISSING, DECIDABLE
from rccm.contracts.base import require


def assert_votable(grid: np.ndarray, col: int, row: int, radius: int) -> None:
    """Enforce the window vote preconditions.

    Raises
    ------
    ContractViolation
        If the coordinate is outside the grid, the center is not missing,
        or the radius is below 1.
    """
    n_cols, n_rows = grid.shape
    require(
        0 <= col < n_cols and 0 <= row < n_rows,
        f"Vote contract violated: ({col}, {row}) outside grid of shape {grid.shape}"
    )
    require(
        grid[col, row] == MISSING,
        f"Vote contract violated: center ({col}, {row}) is {grid[col, row]}, expected {MISSING}"
    )
    require(
        radius >= 1,
        f"Vote contract violated: radius {radius} < 1"
    )


def assert_reconstructed(before: np.ndarray, after: np.ndarray) -> None:
    """Enforce domain closure after a camera's stage schedule.

    Only cells that were missing may change, and every written value must
    be one of the decidable categories.

    Parameters
    ----------
    before : np.ndarray
        Copy of the grid taken before the first stage.

    after : np.ndarray
        The same grid after the last stage.

    Raises
    ------
    ContractViolation
        If a non-missing cell changed or a written value is not decidable.
    """
    require(
        before.shape == after.shape,
        f"Reconstruction contract violated: shape changed {before.shape} -> {after.shape}"
    )

    changed = before != after
    require(
        bool(np.all(before[changed] == MISSING)),
        f"Reconstruction contract violated: {int(np.sum(before[changed] != MISSING))} "
        "non-missing cells were overwritten"
    )
    require(
        bool(np.all(np.isin(after[changed], DECIDABLE))),
        "Reconstruction contract violated: written values outside "
        f"{DECIDABLE}: {np.unique(after[changed][~np.isin(after[changed], DECIDABLE)])}"
    )
