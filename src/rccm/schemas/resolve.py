"""Configuration resolution and merging logic.

This module provides the single entrypoint for configuration resolution:
resolve_config(). It merges ParamConfig, UserConfig, and CLIConfig in
the correct precedence order and returns a validated InternalConfig.

Precedence (highest to lowest):
1. CLIConfig (command-line overrides)
2. UserConfig (user file)
3. ParamConfig (expert defaults)
"""

import copy
from typing import Union, Optional
from rccm.schemas.param import ParamConfig, SCHEDULES
from rccm.schemas.user import UserConfig
from rccm.schemas.cli import CLIConfig
from rccm.schemas.internal import InternalConfig


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Deep merge multiple dictionaries.
    
    Later dictionaries override earlier ones. Nested dictionaries are
    merged recursively; other values (including lists) are replaced.
    
    Parameters
    ----------
    base : dict
        Base dictionary (lowest priority)
    *overrides : dict
        Override dictionaries (higher priority, left to right)
    
    Returns
    -------
    dict
        Merged dictionary
    
    Examples
    --------
    >>> base = {"a": 1, "b": {"c": 2, "d": 3}}
    >>> override = {"b": {"d": 4, "e": 5}, "f": 6}
    >>> deep_merge(base, override)
    {'a': 1, 'b': {'c': 2, 'd': 4, 'e': 5}, 'f': 6}
    """
    result = base.copy()
    
    for override in overrides:
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                # Recursive merge for nested dicts
                result[key] = deep_merge(result[key], value)
            else:
                # Replace value
                result[key] = value
    
    return result


def expand_schedule(reconstruction: dict) -> dict:
    """Fill the stage table and pass cap from the named schedule.

    An explicit ``stages`` list always wins over the schedule name; the
    schedule's pass cap is only used when ``max_passes`` was not set.
    """
    schedule = SCHEDULES[reconstruction["schedule"]]
    expanded = dict(reconstruction)
    if expanded.get("stages") is None:
        expanded["stages"] = copy.deepcopy(schedule["stages"])
    if expanded.get("max_passes") is None:
        expanded["max_passes"] = schedule["max_passes"]
    return expanded


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Resolve final runtime configuration from param, user, and CLI configs.
    
    This is the SINGLE ENTRYPOINT for configuration resolution. It validates
    and merges configs in the correct precedence order, expands the named
    stage schedule, then returns an immutable InternalConfig for runtime use.
    
    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Expert configuration with complete defaults. Required.
    user_cfg : dict or UserConfig, optional
        User configuration with overrides. If None or empty, uses only param defaults.
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides. If None or empty, no CLI overrides applied.
    
    Returns
    -------
    InternalConfig
        Fully validated, immutable runtime configuration
    
    Raises
    ------
    ValidationError
        If any config fails Pydantic validation
    
    Examples
    --------
    >>> from rccm.schemas import resolve_config, ParamConfig, UserConfig
    >>> config = resolve_config(ParamConfig(), UserConfig(schedule="legacy"))
    >>> len(config.reconstruction.stages)
    3
    >>> config.reconstruction.max_passes
    20
    """
    # Validate/convert inputs to Pydantic models
    if not isinstance(param_cfg, ParamConfig):
        param = ParamConfig.model_validate(param_cfg)
    else:
        param = param_cfg
    
    if user_cfg is None or (isinstance(user_cfg, dict) and not user_cfg):
        user = UserConfig()
    elif not isinstance(user_cfg, UserConfig):
        user = UserConfig.model_validate(user_cfg)
    else:
        user = user_cfg
    
    if cli_cfg is None or (isinstance(cli_cfg, dict) and not cli_cfg):
        cli = CLIConfig()
    elif not isinstance(cli_cfg, CLIConfig):
        cli = CLIConfig.model_validate(cli_cfg)
    else:
        cli = cli_cfg
    
    # Convert to dicts for merging
    param_dict = param.model_dump(by_alias=True)  # Use 'global' not 'global_'
    user_overrides = user.to_internal_overrides()
    cli_overrides = cli.to_internal_overrides()
    
    # Deep merge: param < user < cli
    merged = deep_merge(param_dict, user_overrides, cli_overrides)
    merged["reconstruction"] = expand_schedule(merged["reconstruction"])
    
    # Validate and freeze as InternalConfig
    return InternalConfig.model_validate(merged)
