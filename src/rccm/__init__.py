"""`rccm` - gap filling for per-camera Radiometric Camera-by-camera Cloud Masks.

Subpackages:
- reconstruction: Neighborhood voting, pass scanner, stage driver
- contracts: Input and engine invariants
- schemas: Pydantic configuration
- io: xarray/NetCDF adapters for camera stacks
- cli: Command-line runner
"""

__version__ = "0.1.0"
