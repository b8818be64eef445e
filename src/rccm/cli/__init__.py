"""Command-line interface modules for RCCM gap filling.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from rccm.cli.run_reconstruction import run_reconstruction, main

__all__ = ['run_reconstruction', 'main']
