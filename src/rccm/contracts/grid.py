"""Camera stack input contract.

Enforces the guarantee that the camera stack handed to the driver has the
expected number of cameras and that each grid is a writable, integer,
512 x 128 raster holding only known category values.
"""

import numpy as np
from rccm.categories import GRID_SHAPE, NUM_CAMERAS, VALID_VALUES
from rccm.contracts.base import require
from rccm.contracts.failure import MalformedInputError


def assert_grid(grid, camera: int = 0) -> None:
    """Enforce the single-grid input contract.

    Parameters
    ----------
    grid : np.ndarray
        Candidate camera grid.

    camera : int, optional
        Camera index, used only in error messages.

    Raises
    ------
    MalformedInputError
        If the grid is not a writable 2-D integer (512, 128) array of
        known category values.
    """
    require(
        isinstance(grid, np.ndarray),
        f"Input contract violated: camera {camera} grid is {type(grid).__name__}, expected ndarray",
        error=MalformedInputError,
    )
    require(
        grid.ndim == 2,
        f"Input contract violated: camera {camera} grid has {grid.ndim} dims, expected 2",
        error=MalformedInputError,
    )
    require(
        grid.shape == GRID_SHAPE,
        f"Input contract violated: camera {camera} grid shape is {grid.shape}, expected {GRID_SHAPE}",
        error=MalformedInputError,
    )
    require(
        grid.dtype.kind in {"i", "u"},
        f"Input contract violated: camera {camera} grid dtype is {grid.dtype}, expected integer",
        error=MalformedInputError,
    )
    require(
        grid.flags.writeable,
        f"Input contract violated: camera {camera} grid is read-only",
        error=MalformedInputError,
    )

    unknown = ~np.isin(grid, VALID_VALUES)
    require(
        not unknown.any(),
        f"Input contract violated: camera {camera} grid holds {int(unknown.sum())} "
        f"cells outside the category domain: {np.unique(grid[unknown])[:5]}",
        error=MalformedInputError,
    )


def assert_camera_stack(stack) -> None:
    """Enforce the camera stack input contract.

    Called by the driver before any stage runs.

    Parameters
    ----------
    stack : sequence of np.ndarray or np.ndarray
        Nine camera grids, or one (9, 512, 128) array.

    Raises
    ------
    MalformedInputError
        If the stack length or any grid is malformed.
    """
    require(
        isinstance(stack, (list, tuple, np.ndarray)),
        f"Input contract violated: camera stack is {type(stack).__name__}, "
        "expected list, tuple or ndarray",
        error=MalformedInputError,
    )
    require(
        len(stack) == NUM_CAMERAS,
        f"Input contract violated: camera stack has {len(stack)} grids, expected {NUM_CAMERAS}",
        error=MalformedInputError,
    )
    for camera, grid in enumerate(stack):
        assert_grid(grid, camera)
