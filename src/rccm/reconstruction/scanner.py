"""Pass scanner and per-stage fixpoint loop.

A pass snapshots the missing pixels once, then votes on each of them in a
fixed order against the live grid. Accepted values are written immediately,
so later pixels of the same pass see them as evidence. A stage repeats passes
with one parameter set until a pass resolves nothing.

Scan order is line-major: ascending ``row * n_samples + col`` (all samples of
line 0, then line 1, ...). Changing the order changes the output.
"""

import logging
from typing import Optional, Tuple

import numpy as np

from rccm.categories import MISSING
from rccm.reconstruction.stages import StageParams
from rccm.reconstruction.window_vote import vote
from rccm.reconstruction.diagnostics import StageReport

__all__ = ['count_missing', 'missing_coordinates', 'scan_pass', 'iterate_stage', 'run_stage']

logger = logging.getLogger(__name__)


def count_missing(grid: np.ndarray) -> int:
    return int(np.count_nonzero(grid == MISSING))


def missing_coordinates(grid: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return (cols, rows) of missing pixels in line-major scan order."""
    # nonzero on the transposed view walks lines in the outer loop
    rows, cols = np.nonzero(grid.T == MISSING)
    return cols, rows


def scan_pass(grid: np.ndarray, stage: StageParams) -> int:
    """Run one in-place pass over the currently missing pixels.

    Parameters
    ----------
    grid : np.ndarray
        (samples, lines) grid, modified in place.
    stage : StageParams
        Radius, evidence threshold and acceptance rule.

    Returns
    -------
    int
        Number of pixels resolved in this pass.
    """
    cols, rows = missing_coordinates(grid)
    resolved = 0
    for col, row in zip(cols.tolist(), rows.tolist()):
        decision = vote(grid, col, row, stage.radius, stage.min_evidence, stage.strict_mode)
        if decision.resolved:
            grid[col, row] = decision.value
            resolved += 1
    return resolved


def iterate_stage(grid: np.ndarray, stage: StageParams,
                  max_passes: Optional[int] = None, index: int = 1) -> StageReport:
    """Repeat scan_pass until a pass resolves nothing.

    The missing count never increases, so the loop always terminates.
    ``max_passes`` is an optional safety cap; hitting it is logged and
    recorded in the report but is not an error.

    Parameters
    ----------
    grid : np.ndarray
        Grid modified in place.
    stage : StageParams
        Parameters held fixed for every pass.
    max_passes : int, optional
        Stop after this many passes even without a fixpoint.
    index : int
        Stage number, for the report.

    Returns
    -------
    StageReport
    """
    passes = 0
    total_resolved = 0
    capped = False

    while True:
        if max_passes is not None and passes >= max_passes:
            capped = True
            logger.warning("Stage %d stopped at pass cap %d before reaching a fixpoint",
                           index, max_passes)
            break

        resolved = scan_pass(grid, stage)
        passes += 1
        total_resolved += resolved
        logger.debug("Stage %d pass %d: resolved %d", index, passes, resolved)

        if resolved == 0:
            break

    return StageReport(
        index=index,
        radius=stage.radius,
        min_evidence=stage.min_evidence,
        strict=stage.strict_mode,
        passes=passes,
        resolved=total_resolved,
        remaining=count_missing(grid),
        capped=capped,
    )


def run_stage(grid: np.ndarray, stage: StageParams, max_passes: Optional[int] = None) -> int:
    """Run one stage to its fixpoint and return the missing count left."""
    return iterate_stage(grid, stage, max_passes=max_passes).remaining
