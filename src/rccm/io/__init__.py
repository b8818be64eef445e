"""xarray/NetCDF adapters for camera stacks."""

from rccm.io.dataset import stack_from_dataset, stack_to_dataset, load_stack, save_stack

__all__ = ['stack_from_dataset', 'stack_to_dataset', 'load_stack', 'save_stack']
