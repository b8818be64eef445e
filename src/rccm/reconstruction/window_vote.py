"""Neighborhood vote for a single missing pixel.

A missing pixel is resolved from the decidable categories (1-4) found in the
square window around it, clipped at the grid borders. Missing cells and the
permanent markers (obscured, edge, fill) never count as evidence.

Two acceptance rules exist:

- strict (homogeneous): at least ``min_evidence`` decidable neighbors and all
  of them agree; the pixel takes that category.
- relaxed (heterogeneous): at least ``min_evidence`` decidable neighbors; the
  pixel takes the most frequent category, ties going to the lowest value.
"""

from typing import NamedTuple, Optional
import numpy as np

from rccm.categories import CLOUD_HIGH, CLEAR_HIGH, DECIDABLE
from rccm.contracts import assert_votable

__all__ = ['Vote', 'NO_DECISION', 'window_histogram', 'vote']


class Vote(NamedTuple):
    resolved: bool
    value: Optional[int] = None


NO_DECISION = Vote(False, None)


def window_histogram(grid: np.ndarray, col: int, row: int, radius: int) -> np.ndarray:
    """Count decidable categories in the clipped window around (col, row).

    Parameters
    ----------
    grid : np.ndarray
        (samples, lines) category grid.
    col, row : int
        Window center.
    radius : int
        Window half-width; the full window is (2*radius+1) square.

    Returns
    -------
    np.ndarray
        Four counts, for categories 1, 2, 3 and 4 in that order.

    Notes
    -----
    The center itself is only counted if it is decidable, so callers that
    vote on a missing center get a histogram of the neighbors alone.
    """
    n_cols, n_rows = grid.shape
    window = grid[max(col - radius, 0):min(col + radius + 1, n_cols),
                  max(row - radius, 0):min(row + radius + 1, n_rows)]
    counts = np.bincount(window.ravel(), minlength=CLEAR_HIGH + 1)
    return counts[CLOUD_HIGH:CLEAR_HIGH + 1]


def vote(grid: np.ndarray, col: int, row: int, radius: int,
         min_evidence: int, strict_mode: bool) -> Vote:
    """Decide a replacement value for the missing pixel at (col, row).

    Parameters
    ----------
    grid : np.ndarray
        Current grid state. Not modified.
    col, row : int
        Coordinates of a missing pixel.
    radius : int
        Window half-width (>= 1).
    min_evidence : int
        Minimum number of decidable neighbors required.
    strict_mode : bool
        True for the homogeneous rule, False for majority vote.

    Returns
    -------
    Vote
        ``Vote(True, value)`` with value in 1..4, or NO_DECISION.

    Raises
    ------
    ContractViolation
        If (col, row) is outside the grid, not missing, or radius < 1.

    Examples
    --------
    >>> vote(grid, 10, 20, radius=1, min_evidence=4, strict_mode=True)
    Vote(resolved=True, value=2)
    """
    assert_votable(grid, col, row, radius)

    hist = window_histogram(grid, col, row, radius)
    total = int(hist.sum())
    if total == 0 or total < min_evidence:
        return NO_DECISION

    if strict_mode:
        present = np.flatnonzero(hist)
        if len(present) != 1:
            return NO_DECISION
        return Vote(True, DECIDABLE[int(present[0])])

    # argmax returns the first maximum, i.e. the lowest tied category
    return Vote(True, DECIDABLE[int(np.argmax(hist))])
