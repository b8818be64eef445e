"""Neighborhood-voting reconstruction engine.

- window_vote: Acceptance rule for one missing pixel
- scanner: One in-place pass, and the per-stage fixpoint loop
- driver: Stage schedule over a nine-camera stack
- diagnostics: Per-camera, per-stage reports
"""

from rccm.reconstruction.stages import StageParams, stages_from_config
from rccm.reconstruction.window_vote import Vote, vote, window_histogram
from rccm.reconstruction.scanner import scan_pass, run_stage, iterate_stage, count_missing
from rccm.reconstruction.diagnostics import StageReport, CameraReport, reports_to_frame
from rccm.reconstruction.driver import ReconstructionDriver, ReconstructionResult

__all__ = [
    "StageParams",
    "stages_from_config",
    "Vote",
    "vote",
    "window_histogram",
    "scan_pass",
    "run_stage",
    "iterate_stage",
    "count_missing",
    "StageReport",
    "CameraReport",
    "reports_to_frame",
    "ReconstructionDriver",
    "ReconstructionResult",
]
