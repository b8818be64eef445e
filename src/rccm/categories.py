"""Category domain and grid geometry of per-camera cloud masks.

A grid is a ``(512, 128)`` ``uint8`` array indexed ``grid[col, row]``:
``col`` is the sample (0..511), ``row`` the line (0..127). A camera stack
holds one grid per MISR camera, in the fixed order of ``CAMERAS``.
"""

import numpy as np

__all__ = [
    'MISSING', 'CLOUD_HIGH', 'CLOUD_LOW', 'CLEAR_LOW', 'CLEAR_HIGH',
    'OBSCURED', 'EDGE', 'FILL',
    'DECIDABLE', 'PERMANENT', 'VALID_VALUES', 'CATEGORY_NAMES',
    'GRID_SHAPE', 'CAMERAS', 'NUM_CAMERAS',
]

MISSING = 0
CLOUD_HIGH = 1
CLOUD_LOW = 2
CLEAR_LOW = 3
CLEAR_HIGH = 4
OBSCURED = 253
EDGE = 254
FILL = 255

# Values a vote may produce and count as evidence
DECIDABLE = (CLOUD_HIGH, CLOUD_LOW, CLEAR_LOW, CLEAR_HIGH)

# Terminal markers set upstream; never read as evidence, never overwritten
PERMANENT = (OBSCURED, EDGE, FILL)

VALID_VALUES = np.array((MISSING,) + DECIDABLE + PERMANENT, dtype=np.uint8)

CATEGORY_NAMES = {
    MISSING: "missing",
    CLOUD_HIGH: "cloud_high_confidence",
    CLOUD_LOW: "cloud_low_confidence",
    CLEAR_LOW: "clear_low_confidence",
    CLEAR_HIGH: "clear_high_confidence",
    OBSCURED: "obscured",
    EDGE: "edge",
    FILL: "fill",
}

GRID_SHAPE = (512, 128)  # (samples, lines)

CAMERAS = ("DF", "CF", "BF", "AF", "AN", "AA", "BA", "CA", "DA")
NUM_CAMERAS = len(CAMERAS)
