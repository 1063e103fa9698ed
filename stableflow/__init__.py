"""
stableflow - real-time stable fluids on a periodic 2D grid
"""

from stableflow.core import (
    StableFluidSolver,
    create,
    PaddedGrid,
    BufferPair,
    BoundaryMode
)
from stableflow.configs import SolverConfig, ConfigManager, get_preset
from stableflow.utils import (
    SimulationError,
    ConfigurationError,
    PhysicsError,
    setup_logging
)

__version__ = "1.0.0"

__all__ = [
    # Core components
    'StableFluidSolver',
    'create',
    'PaddedGrid',
    'BufferPair',
    'BoundaryMode',

    # Configuration
    'SolverConfig',
    'ConfigManager',
    'get_preset',

    # Utilities
    'SimulationError',
    'ConfigurationError',
    'PhysicsError',
    'setup_logging'
]
