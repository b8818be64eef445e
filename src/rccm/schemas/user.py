"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., SCHEDULE → schedule, WORKERS → workers).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from rccm.schemas.base import RccmBaseModel
from rccm.schemas.param import normalize_mode


class UserStageConfig(RccmBaseModel):
    """User-facing stage entry."""
    radius: int
    min_evidence: int
    mode: str = "relaxed"

    @field_validator("mode", mode="before")
    @classmethod
    def normalize_mode_name(cls, v):
        """Accept homogeneous/heterogeneous as aliases."""
        return normalize_mode(v)


class UserReconstructionConfig(RccmBaseModel):
    """User-facing reconstruction config."""
    schedule: Optional[Literal["production", "legacy"]] = None
    stages: Optional[list[UserStageConfig]] = None
    max_passes: Optional[int] = None
    workers: Optional[int] = None

    @field_validator("schedule", mode="before")
    @classmethod
    def normalize_schedule(cls, v):
        """Normalize schedule names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserGlobalConfig(RccmBaseModel):
    """User-facing global config."""
    var_names: Optional[dict[str, str]] = None
    coord_names: Optional[dict[str, str]] = None


class UserConfig(RccmBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(
            schedule="legacy",
            workers=3,
            mask_var="RCCM",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Engine settings (flat aliases)
    schedule: Optional[Literal["production", "legacy"]] = Field(None, alias="SCHEDULE")
    stages: Optional[list[UserStageConfig]] = Field(None, alias="STAGES")
    max_passes: Optional[int] = Field(None, alias="MAX_PASSES")
    workers: Optional[int] = Field(None, alias="WORKERS")

    # Dataset naming (flat aliases)
    mask_var: Optional[str] = Field(None, alias="MASK_VAR")
    camera_dim: Optional[str] = Field(None, alias="CAMERA_DIM")

    # Output / logging
    save_diagnostics: Optional[bool] = Field(None, alias="SAVE_DIAGNOSTICS")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    reconstruction: Optional[UserReconstructionConfig] = None
    global_: Optional[UserGlobalConfig] = Field(None, alias="global")

    model_config = RccmBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("schedule", mode="before")
    @classmethod
    def normalize_schedule(cls, v):
        """Normalize schedule names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        # Reconstruction section
        reconstruction = {}
        if self.schedule is not None:
            reconstruction["schedule"] = self.schedule
        if self.stages is not None:
            reconstruction["stages"] = [s.model_dump() for s in self.stages]
        if self.max_passes is not None:
            reconstruction["max_passes"] = self.max_passes
        if self.workers is not None:
            reconstruction["workers"] = self.workers

        # Merge with explicit reconstruction config
        if self.reconstruction is not None:
            reconstruction.update(self.reconstruction.model_dump(exclude_none=True))

        if reconstruction:
            overrides["reconstruction"] = reconstruction

        # Global section
        var_names = {}
        coord_names = {}
        if self.mask_var is not None:
            var_names["cloud_mask"] = self.mask_var
        if self.camera_dim is not None:
            coord_names["camera"] = self.camera_dim
        if self.global_ is not None:
            if self.global_.var_names:
                var_names.update(self.global_.var_names)
            if self.global_.coord_names:
                coord_names.update(self.global_.coord_names)

        global_ = {}
        if var_names:
            global_["var_names"] = var_names
        if coord_names:
            global_["coord_names"] = coord_names
        if global_:
            overrides["global"] = global_

        if self.save_diagnostics is not None:
            overrides["output"] = {"save_diagnostics": self.save_diagnostics}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
