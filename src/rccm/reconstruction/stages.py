"""Stage parameter tuples for the reconstruction engine.

The engine itself only sees StageParams; the stage table comes from the
resolved configuration (named schedule or explicit table).
"""

from typing import NamedTuple, TYPE_CHECKING

if TYPE_CHECKING:
    from rccm.schemas import InternalConfig

__all__ = ['StageParams', 'stages_from_config']


class StageParams(NamedTuple):
    """Window radius, minimum evidence count and acceptance rule of one stage."""

    radius: int
    min_evidence: int
    strict_mode: bool

    @property
    def window_size(self) -> int:
        return 2 * self.radius + 1

    @property
    def mode(self) -> str:
        return "strict" if self.strict_mode else "relaxed"

    def describe(self) -> str:
        return f"{self.window_size}x{self.window_size} window, min_evidence={self.min_evidence}, {self.mode}"


def stages_from_config(config: "InternalConfig") -> tuple:
    """Build the ordered stage table from a resolved config."""
    return tuple(
        StageParams(stage.radius, stage.min_evidence, stage.mode == "strict")
        for stage in config.reconstruction.stages
    )
