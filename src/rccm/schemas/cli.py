"""CLIConfig: Command-line operational overrides.

Minimal configuration for operational parameters that commonly change
between runs: schedule, worker count, pass cap, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from rccm.schemas.base import RccmBaseModel


class CLIConfig(RccmBaseModel):
    """Command-line configuration overrides.
    
    Operational-only settings that override user and param configs.
    Highest priority in config resolution.
    
    Usage
    -----
        cli_cfg = CLIConfig(schedule="legacy", workers=1)
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """
    
    schedule: Optional[Literal["production", "legacy"]] = None
    workers: Optional[int] = Field(None, ge=1)
    max_passes: Optional[int] = Field(None, ge=1)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("schedule", mode="before")
    @classmethod
    def normalize_schedule(cls, v):
        """Normalize schedule names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v
    
    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.
        
        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}
        
        reconstruction = {}
        if self.schedule is not None:
            reconstruction["schedule"] = self.schedule
        if self.workers is not None:
            reconstruction["workers"] = self.workers
        if self.max_passes is not None:
            reconstruction["max_passes"] = self.max_passes
        
        if reconstruction:
            overrides["reconstruction"] = reconstruction
        
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}
        
        return overrides
