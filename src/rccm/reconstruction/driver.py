"""Multi-stage gap filling of a nine-camera cloud-mask stack.

Each camera grid is reconstructed independently: the configured stage table
is run in order, each stage iterating passes until it reaches a fixpoint, and
every stage starts from the grid left by the previous one. Grids are mutated
in place; the driver returns the same stack together with the number of
pixels still missing per camera.
"""

import logging
import concurrent.futures
from dataclasses import dataclass, field
from typing import List, TYPE_CHECKING

import numpy as np

from rccm.categories import CAMERAS
from rccm.contracts import assert_camera_stack, assert_reconstructed
from rccm.reconstruction.stages import stages_from_config
from rccm.reconstruction.scanner import count_missing, iterate_stage
from rccm.reconstruction.diagnostics import CameraReport

if TYPE_CHECKING:
    from rccm.schemas import InternalConfig

__all__ = ['ReconstructionDriver', 'ReconstructionResult']

logger = logging.getLogger(__name__)


@dataclass
class ReconstructionResult:
    """Reconstructed stack, per-camera remaining counts and stage reports."""

    stack: object
    remaining: List[int]
    reports: List[CameraReport] = field(default_factory=list)

    @property
    def total_remaining(self) -> int:
        return sum(self.remaining)


class ReconstructionDriver:
    """Config-driven stage schedule runner for camera stacks.

    **Per-camera state machine:**

    ``Stage1 -> Stage2 -> ... -> StageN -> Done``. Each stage is an inner
    fixpoint loop (``Scanning -> ... -> fixpoint``). ``Done`` is reached after
    the last stage whether or not missing pixels remain. A grid with no
    missing pixels skips straight to ``Done``.

    **Concurrency:**

    Camera grids share no state, so with ``workers > 1`` one task per camera
    is submitted to a thread pool and results are collected by camera index.
    Within a grid the scan is strictly sequential.

    **Failure:**

    Malformed stacks are rejected before any stage runs. A contract
    violation in any camera cancels the cameras not yet started and
    propagates; grids already processed are not rolled back.

    Example usage::

        driver = ReconstructionDriver(config)
        stack, remaining = driver.reconstruct(stack)
    """

    def __init__(self, config: "InternalConfig"):
        """Store config and build the stage table.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        """
        self.config = config
        self.stages = stages_from_config(config)
        self.max_passes = config.reconstruction.max_passes
        self.workers = config.reconstruction.workers

        logger.info("ReconstructionDriver initialized: schedule=%s, stages=%d, max_passes=%s, workers=%d",
                    config.reconstruction.schedule, len(self.stages), self.max_passes, self.workers)

    def reconstruct_camera(self, grid: np.ndarray, camera: int = 0) -> CameraReport:
        """Run the full stage table on one grid, in place."""
        initial = count_missing(grid)
        report = CameraReport(camera=camera, initial_missing=initial)
        name = CAMERAS[camera]

        if initial == 0:
            logger.debug("Camera %s: no missing pixels, skipped", name)
            return report

        before = grid.copy()
        for index, stage in enumerate(self.stages, start=1):
            stage_report = iterate_stage(grid, stage, max_passes=self.max_passes, index=index)
            report.stages.append(stage_report)
            logger.info("Camera %s stage %d (%s): passes=%d resolved=%d remaining=%d",
                        name, index, stage.describe(), stage_report.passes,
                        stage_report.resolved, stage_report.remaining)

        assert_reconstructed(before, grid)
        return report

    def run(self, camera_stack) -> ReconstructionResult:
        """Reconstruct every camera grid and collect the reports.

        Parameters
        ----------
        camera_stack : sequence of np.ndarray or np.ndarray
            Nine (512, 128) grids, or one (9, 512, 128) array. Modified in place.

        Returns
        -------
        ReconstructionResult
            The same stack object, remaining counts in camera order, and one
            CameraReport per camera.

        Raises
        ------
        MalformedInputError
            If the stack fails input validation.
        ContractViolation
            If the engine breaks a vote or domain-closure contract.
        """
        assert_camera_stack(camera_stack)
        grids = list(camera_stack)

        if self.workers == 1:
            reports = [self.reconstruct_camera(grid, camera) for camera, grid in enumerate(grids)]
        else:
            reports = self._run_parallel(grids)

        remaining = [report.remaining for report in reports]
        logger.info("Reconstruction done: resolved=%d remaining=%d (%s)",
                    sum(r.resolved for r in reports), sum(remaining),
                    ", ".join(f"{r.name}={r.remaining}" for r in reports))

        return ReconstructionResult(stack=camera_stack, remaining=remaining, reports=reports)

    def reconstruct(self, camera_stack):
        """Reconstruct a camera stack in place.

        Returns
        -------
        tuple
            ``(camera_stack, remaining_missing_counts)``
        """
        result = self.run(camera_stack)
        return result.stack, result.remaining

    def _run_parallel(self, grids: list) -> List[CameraReport]:
        """Fan out one task per camera; cancel the rest on the first failure."""
        reports = [None] * len(grids)
        max_workers = min(self.workers, len(grids))

        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers,
                                                   thread_name_prefix="rccm-camera") as executor:
            futures = {
                executor.submit(self.reconstruct_camera, grid, camera): camera
                for camera, grid in enumerate(grids)
            }
            try:
                for future in concurrent.futures.as_completed(futures):
                    camera = futures[future]
                    reports[camera] = future.result()
            except Exception:
                logger.error("Camera %s failed, aborting reconstruction", CAMERAS[camera])
                for pending in futures:
                    pending.cancel()
                raise

        return reports
