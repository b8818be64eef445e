"""Per-camera, per-stage reconstruction diagnostics.

Reports are purely observational: they record what each stage did and are
never consulted by the engine.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Sequence

import pandas as pd

from rccm.categories import CAMERAS

__all__ = ['StageReport', 'CameraReport', 'reports_to_frame']


@dataclass
class StageReport:
    """Outcome of one stage's fixpoint loop on one grid."""

    index: int
    radius: int
    min_evidence: int
    strict: bool
    passes: int
    resolved: int
    remaining: int
    capped: bool = False

    @property
    def window_size(self) -> int:
        return 2 * self.radius + 1

    @property
    def mode(self) -> str:
        return "strict" if self.strict else "relaxed"


@dataclass
class CameraReport:
    """Stage reports of one camera grid."""

    camera: int
    initial_missing: int
    stages: List[StageReport] = field(default_factory=list)

    @property
    def name(self) -> str:
        return CAMERAS[self.camera]

    @property
    def skipped(self) -> bool:
        return not self.stages

    @property
    def remaining(self) -> int:
        if self.stages:
            return self.stages[-1].remaining
        return self.initial_missing

    @property
    def resolved(self) -> int:
        return self.initial_missing - self.remaining


def reports_to_frame(reports: Sequence[CameraReport]) -> pd.DataFrame:
    """Flatten camera reports into one row per camera and stage.

    Cameras that were skipped (no missing pixels) get a single row with
    ``stage`` 0 so every camera appears in the table.

    Parameters
    ----------
    reports : sequence of CameraReport
        Reports in camera order.

    Returns
    -------
    pd.DataFrame
        Columns: camera, camera_name, initial_missing, stage, window_size,
        radius, min_evidence, mode, passes, resolved, remaining, capped.
    """
    rows = []
    for report in reports:
        base = {
            "camera": report.camera,
            "camera_name": report.name,
            "initial_missing": report.initial_missing,
        }
        if report.skipped:
            rows.append({**base, "stage": 0, "window_size": 0, "radius": 0,
                         "min_evidence": 0, "mode": "skipped", "passes": 0,
                         "resolved": 0, "remaining": report.remaining, "capped": False})
            continue
        for stage in report.stages:
            row = asdict(stage)
            row["stage"] = row.pop("index")
            row.pop("strict")
            rows.append({**base, **row, "window_size": stage.window_size, "mode": stage.mode})

    columns = ["camera", "camera_name", "initial_missing", "stage", "window_size",
               "radius", "min_evidence", "mode", "passes", "resolved", "remaining", "capped"]
    return pd.DataFrame(rows, columns=columns)
