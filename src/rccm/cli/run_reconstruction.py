"""Core gap-filling execution logic.

This module contains the actual runner, separated from argument parsing.
Scripts are thin wrappers; this is the real implementation.
"""

import sys
import json
import logging
import argparse
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any

from rccm.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig
from rccm.reconstruction import ReconstructionDriver, ReconstructionResult, reports_to_frame
from rccm.io import load_stack, stack_to_dataset, save_stack

__all__ = ['run_reconstruction', 'load_user_config_dict', 'setup_logging', 'main']

logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def setup_logging(level: str = "INFO", log_path: Optional[Path] = None) -> None:
    """Configure the root logger with a console and optional file handler."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if log_path is not None:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.debug("Logging: level=%s, file=%s", level, log_path)


def run_reconstruction(
    input_path: str,
    output_path: str,
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
    log_path: Optional[str] = None,
) -> ReconstructionResult:
    """Fill missing pixels of a camera stack file and write the result.

    This is the core execution function. It:
    1. Loads and resolves configuration (Param < User < CLI)
    2. Reads the camera stack from NetCDF
    3. Runs the stage schedule on every camera
    4. Writes the reconstructed stack to NetCDF and, if enabled,
       the per-stage diagnostics to a CSV next to it

    Parameters
    ----------
    input_path : str
        NetCDF file holding the (camera, sample, line) cloud mask.

    output_path : str
        NetCDF file to write.

    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).

    cli_args : dict, optional
        CLI argument overrides. Keys: schedule, workers, max_passes,
        log_level. All optional.

    verbose : bool, optional
        If True, enable DEBUG logging and log the full resolved config.

    log_path : str, optional
        Also write the log to this file.

    Returns
    -------
    ReconstructionResult
        Reconstructed stack, remaining counts and stage reports.

    Raises
    ------
    FileNotFoundError
        If the input or user config file does not exist.
    MalformedInputError
        If the input file does not hold a valid camera stack.
    ValidationError
        If configuration validation fails.

    Examples
    --------
    >>> run_reconstruction("block_042.nc", "block_042_filled.nc",
    ...                    cli_args={"schedule": "legacy"})
    """
    param_cfg = ParamConfig()

    user_cfg_dict = load_user_config_dict(user_config_path) if user_config_path else {}
    user_cfg = UserConfig.model_validate(user_cfg_dict)

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    # Filter None values
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    setup_logging(config.logging.level, log_path)

    logger.info("=" * 60)
    logger.info("RCCM gap filling: %s -> %s", input_path, output_path)
    logger.info("=" * 60)
    if verbose:
        logger.debug("Full internal configuration:\n%s",
                     json.dumps(config.model_dump(by_alias=True), indent=2))

    stack, attrs = load_stack(input_path, config)

    driver = ReconstructionDriver(config)
    result = driver.run(stack)

    ds = stack_to_dataset(result.stack, result.remaining, config, attrs=attrs)
    output_path = save_stack(ds, output_path, complevel=config.output.complevel)

    if config.output.save_diagnostics:
        csv_path = output_path.with_name(output_path.stem + "_diagnostics.csv")
        reports_to_frame(result.reports).to_csv(csv_path, index=False)
        logger.info("Saved diagnostics: %s", csv_path)

    logger.info("Remaining missing pixels: %d", result.total_remaining)
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fill missing pixels in per-camera cloud masks")
    parser.add_argument("input", help="Input NetCDF camera stack")
    parser.add_argument("output", help="Output NetCDF file")
    parser.add_argument("-c", "--config", help="Path to user config file")
    parser.add_argument("--schedule", choices=["production", "legacy"], help="Named stage schedule")
    parser.add_argument("--workers", type=int, help="Cameras reconstructed concurrently")
    parser.add_argument("--max-passes", type=int, help="Per-stage pass cap")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    result = run_reconstruction(
        args.input,
        args.output,
        user_config_path=args.config,
        cli_args={
            "schedule": args.schedule,
            "workers": args.workers,
            "max_passes": args.max_passes,
        },
        verbose=args.verbose,
        log_path=args.log_file,
    )

    print(f"\n{'='*60}")
    print("Remaining missing pixels per camera:")
    for report in result.reports:
        print(f"  {report.name:4s}: {report.remaining}")
    print('='*60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
