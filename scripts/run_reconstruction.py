#!/usr/bin/env python3
"""RCCM gap-filling runner.

Usage:
    python scripts/run_reconstruction.py input.nc output.nc
    python scripts/run_reconstruction.py input.nc output.nc -c scripts/user_config.py
    python scripts/run_reconstruction.py input.nc output.nc --schedule legacy --workers 1

Note: User config in scripts/user_config.py, expert config in src/rccm/schemas/param.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from rccm.cli import main


if __name__ == "__main__":
    sys.exit(main())
