"""Convert camera stacks to and from xarray Datasets and NetCDF files.

The reconstruction engine works on plain (samples, lines) arrays. This
module is the thin boundary to the labelled world: it pulls the nine
camera grids out of a Dataset (in camera, sample, line order) and wraps
reconstructed grids back up with CF-style flag attributes.

NetCDF files are read without mask/scale decoding so fill markers (255)
stay integer categories instead of becoming NaN.
"""

from pathlib import Path
from typing import Optional, Sequence, TYPE_CHECKING
import logging

import numpy as np
import xarray as xr

from rccm.categories import CAMERAS, CATEGORY_NAMES, VALID_VALUES, GRID_SHAPE
from rccm.contracts import require, assert_camera_stack, MalformedInputError

if TYPE_CHECKING:
    from rccm.schemas import InternalConfig

__all__ = ['stack_from_dataset', 'stack_to_dataset', 'load_stack', 'save_stack']

logger = logging.getLogger(__name__)


def stack_from_dataset(ds: xr.Dataset, config: "InternalConfig") -> np.ndarray:
    """Extract a writable (9, 512, 128) uint8 camera stack from a Dataset.

    Parameters
    ----------
    ds : xr.Dataset
        Dataset holding the cloud mask variable named in config, with the
        configured camera, sample and line dimensions (any order).
    config : InternalConfig
        Supplies variable and dimension names.

    Returns
    -------
    np.ndarray
        Copy of the mask transposed to (camera, sample, line).

    Raises
    ------
    MalformedInputError
        If the variable or a dimension is missing, or the stack fails
        the input contract.
    """
    var = config.global_.var_names.cloud_mask
    dims = config.global_.coord_names
    wanted = (dims.camera, dims.sample, dims.line)

    require(
        var in ds.data_vars,
        f"Input contract violated: missing '{var}' variable",
        error=MalformedInputError,
    )
    mask = ds[var]
    require(
        set(mask.dims) == set(wanted),
        f"Input contract violated: '{var}' has dims {mask.dims}, expected {wanted}",
        error=MalformedInputError,
    )

    values = np.array(mask.transpose(*wanted).values)
    assert_camera_stack(values)
    return values.astype(np.uint8)


def stack_to_dataset(stack, remaining: Sequence[int], config: "InternalConfig",
                     attrs: Optional[dict] = None) -> xr.Dataset:
    """Wrap a reconstructed stack and its remaining counts in a Dataset.

    Parameters
    ----------
    stack : sequence of np.ndarray or np.ndarray
        Nine (512, 128) grids.
    remaining : sequence of int
        Remaining missing pixels per camera, in camera order.
    config : InternalConfig
        Supplies variable and dimension names.
    attrs : dict, optional
        Global attributes to carry over (e.g. from the input Dataset).
    """
    names = config.global_.var_names
    dims = config.global_.coord_names

    data = np.stack([np.asarray(grid, dtype=np.uint8) for grid in stack])
    flag_values = VALID_VALUES.copy()
    flag_meanings = " ".join(CATEGORY_NAMES[int(v)] for v in flag_values)

    ds = xr.Dataset(
        data_vars={
            names.cloud_mask: (
                (dims.camera, dims.sample, dims.line),
                data,
                {
                    "long_name": "Reconstructed cloud mask",
                    "units": "1",
                    "flag_values": flag_values,
                    "flag_meanings": flag_meanings,
                },
            ),
            names.remaining_missing: (
                (dims.camera,),
                np.asarray(remaining, dtype=np.int32),
                {"long_name": "Pixels still missing after the last stage", "units": "1"},
            ),
        },
        coords={
            dims.camera: list(CAMERAS),
            dims.sample: np.arange(GRID_SHAPE[0]),
            dims.line: np.arange(GRID_SHAPE[1]),
        },
        attrs=dict(attrs or {}),
    )
    ds.attrs["reconstruction_schedule"] = config.reconstruction.schedule
    ds.attrs["reconstruction_stages"] = "; ".join(
        f"r={s.radius} n={s.min_evidence} {s.mode}" for s in config.reconstruction.stages
    )
    return ds


def load_stack(path, config: "InternalConfig") -> tuple:
    """Read a NetCDF file and extract its camera stack.

    Returns
    -------
    tuple
        ``(stack, attrs)`` where attrs are the file's global attributes.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")

    with xr.open_dataset(path, mask_and_scale=False) as ds:
        stack = stack_from_dataset(ds, config)
        attrs = dict(ds.attrs)

    logger.info("Loaded camera stack: %s", path)
    return stack, attrs


def save_stack(ds: xr.Dataset, path, complevel: int = 9) -> Path:
    """Write a Dataset to compressed NetCDF."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    encoding = {var: {"zlib": complevel > 0, "complevel": complevel} for var in ds.data_vars}
    ds.to_netcdf(path, mode='w', engine='netcdf4', encoding=encoding)

    logger.info("Saved reconstructed NetCDF: %s", path)
    return path
