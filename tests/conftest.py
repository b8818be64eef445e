"""Root-level pytest fixtures for the RCCM test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, and small grid factories. Tests must use these fixtures
instead of creating raw dict configs.
"""

import pytest
import numpy as np

from rccm.categories import GRID_SHAPE, CLEAR_HIGH, FILL
from rccm.schemas import ParamConfig, UserConfig, CLIConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (production schedule, serial).

    Examples
    --------
    >>> def test_driver_init(internal_config):
    ...     driver = ReconstructionDriver(internal_config)
    ...     assert len(driver.stages) == 4
    """
    return resolve_config(param_config, None, CLIConfig(workers=1))


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_legacy(make_config):
    ...     config = make_config(schedule="legacy")
    ...     assert config.reconstruction.max_passes == 20
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Grid Fixtures
# =============================================================================

@pytest.fixture
def clear_grid():
    """Full-size grid of clear high-confidence pixels."""
    return np.full(GRID_SHAPE, CLEAR_HIGH, dtype=np.uint8)


@pytest.fixture
def fill_grid():
    """Full-size grid of fill pixels."""
    return np.full(GRID_SHAPE, FILL, dtype=np.uint8)
