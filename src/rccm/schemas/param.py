"""ParamConfig: Expert defaults for RCCM gap filling.

This module defines the complete default configuration, including the named
stage schedules. ALL engine parameters must have defaults here. No runtime
code should define fallback values - this is the single source of truth for
defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from rccm.schemas.base import RccmBaseModel


# Accepted spellings for the stage acceptance rule
MODE_ALIASES = {
    "strict": "strict",
    "homogeneous": "strict",
    "relaxed": "relaxed",
    "heterogeneous": "relaxed",
}


def normalize_mode(v):
    """Map homogeneous/heterogeneous spellings onto strict/relaxed."""
    if isinstance(v, str):
        key = v.lower().strip()
        return MODE_ALIASES.get(key, key)
    return v


# Named stage schedules. "production" is the four-stage uncapped table,
# "legacy" the earlier three-stage table run with a per-stage pass cap.
SCHEDULES = {
    "production": {
        "stages": [
            {"radius": 1, "min_evidence": 4, "mode": "strict"},
            {"radius": 2, "min_evidence": 12, "mode": "relaxed"},
            {"radius": 2, "min_evidence": 10, "mode": "relaxed"},
            {"radius": 1, "min_evidence": 3, "mode": "relaxed"},
        ],
        "max_passes": None,
    },
    "legacy": {
        "stages": [
            {"radius": 1, "min_evidence": 4, "mode": "strict"},
            {"radius": 2, "min_evidence": 12, "mode": "relaxed"},
            {"radius": 2, "min_evidence": 10, "mode": "relaxed"},
        ],
        "max_passes": 20,
    },
}


# =============================================================================
# Nested Configuration Models
# =============================================================================

class StageConfig(RccmBaseModel):
    """One refinement stage: window radius, evidence threshold, acceptance rule."""
    radius: int = Field(..., ge=1, description="Window half-width in pixels")
    min_evidence: int = Field(..., ge=1, description="Minimum decidable neighbors")
    mode: Literal["strict", "relaxed"] = "relaxed"

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode_name(cls, v):
        """Accept homogeneous/heterogeneous as aliases."""
        return normalize_mode(v)


class ReconstructionConfig(RccmBaseModel):
    """Gap-filling engine configuration."""
    schedule: Literal["production", "legacy"] = "production"
    stages: Optional[list[StageConfig]] = Field(
        None, description="Explicit stage table; overrides the named schedule"
    )
    max_passes: Optional[int] = Field(
        None, ge=1, description="Per-stage pass cap; schedule default when unset"
    )
    workers: int = Field(9, ge=1, description="Camera grids reconstructed concurrently")

    @field_validator("schedule", mode="before")
    @classmethod
    def normalize_schedule_name(cls, v):
        """Normalize schedule names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class VarNamesConfig(RccmBaseModel):
    """Variable name mappings."""
    cloud_mask: str = "cloud_mask"
    remaining_missing: str = "remaining_missing"


class CoordNamesConfig(RccmBaseModel):
    """Dimension name mappings."""
    camera: str = "camera"
    sample: str = "sample"
    line: str = "line"


class GlobalConfig(RccmBaseModel):
    """Global settings."""
    var_names: VarNamesConfig = Field(default_factory=VarNamesConfig)
    coord_names: CoordNamesConfig = Field(default_factory=CoordNamesConfig)


class OutputConfig(RccmBaseModel):
    """Output file configuration."""
    complevel: int = Field(9, ge=0, le=9)
    save_diagnostics: bool = True


class LoggingConfig(RccmBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(RccmBaseModel):
    """Complete expert configuration with all defaults.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    reconstruction: ReconstructionConfig = Field(default_factory=ReconstructionConfig)
    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = RccmBaseModel.model_config.copy()
    model_config.update({"populate_by_name": True})  # Allow both 'global' and 'global_'
