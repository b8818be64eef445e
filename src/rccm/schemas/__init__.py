"""Pydantic configuration schemas for RCCM gap filling.

This module provides strictly typed configuration models. All configuration
validation, coercion, and normalization happens at schema validation time
via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from rccm.schemas.resolve import resolve_config
from rccm.schemas.internal import InternalConfig
from rccm.schemas.param import ParamConfig, SCHEDULES
from rccm.schemas.user import UserConfig
from rccm.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'SCHEDULES',
    'UserConfig',
    'CLIConfig',
]
