"""RCCM User Configuration.

This is the user-facing configuration file. Modify settings here to customize
gap filling. Expert defaults (named stage schedules) live in
src/rccm/schemas/param.py

Usage:
    python scripts/run_reconstruction.py input.nc output.nc -c scripts/user_config.py
    python scripts/run_reconstruction.py input.nc output.nc -c scripts/user_config.py --schedule legacy
"""

CONFIG = {
    # ========================================================================
    # STAGE SCHEDULE
    # ========================================================================
    "SCHEDULE": "production",  # "production" (4 stages) or "legacy" (3 stages, capped)
    "MAX_PASSES": None,        # Per-stage pass cap (None = schedule default)

    # Explicit stage table; overrides SCHEDULE when set.
    # "STAGES": [
    #     {"radius": 1, "min_evidence": 4, "mode": "strict"},
    #     {"radius": 2, "min_evidence": 12, "mode": "relaxed"},
    # ],

    # ========================================================================
    # EXECUTION
    # ========================================================================
    "WORKERS": 9,              # Cameras reconstructed concurrently

    # ========================================================================
    # DATASET NAMES
    # ========================================================================
    "MASK_VAR": "cloud_mask",

    # ========================================================================
    # OUTPUT
    # ========================================================================
    "SAVE_DIAGNOSTICS": True,  # Per-stage CSV next to the output file
    "LOG_LEVEL": "INFO",
}
