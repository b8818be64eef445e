"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and the stage table is always explicit (named schedules are
expanded during resolution).
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict
from rccm.schemas.base import RccmBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalStageConfig(RccmBaseModel):
    """Runtime stage parameters."""
    radius: int = Field(ge=1)
    min_evidence: int = Field(ge=1)
    mode: Literal["strict", "relaxed"]


class InternalReconstructionConfig(RccmBaseModel):
    """Runtime engine configuration."""
    schedule: Literal["production", "legacy"]
    stages: list[InternalStageConfig] = Field(min_length=1)
    max_passes: Optional[int] = Field(ge=1)  # None means run each stage to its fixpoint
    workers: int = Field(ge=1)


class InternalVarNamesConfig(RccmBaseModel):
    """Runtime variable name mappings."""
    cloud_mask: str
    remaining_missing: str


class InternalCoordNamesConfig(RccmBaseModel):
    """Runtime dimension name mappings."""
    camera: str
    sample: str
    line: str


class InternalGlobalConfig(RccmBaseModel):
    """Runtime global settings."""
    var_names: InternalVarNamesConfig
    coord_names: InternalCoordNamesConfig


class InternalOutputConfig(RccmBaseModel):
    """Runtime output configuration."""
    complevel: int
    save_diagnostics: bool


class InternalLoggingConfig(RccmBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(RccmBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.stages = config.reconstruction.stages  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    reconstruction: InternalReconstructionConfig
    global_: InternalGlobalConfig = Field(alias="global")
    output: InternalOutputConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
        populate_by_name=True,  # Allow both 'global' and 'global_'
    )
