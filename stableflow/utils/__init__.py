from .error_handling import (
    SimulationError,
    SolverError,
    BoundaryError,
    PhysicsError,
    ConfigurationError,
    handle_simulation_error,
    validate_config,
    check_grid_size,
    check_numerical_stability,
    check_array_bounds
)
from .logging import setup_logging, SimulationLogger, Timer
from .math_helpers import clamp, smoothstep, remap

__all__ = [
    'SimulationError',
    'SolverError',
    'BoundaryError',
    'PhysicsError',
    'ConfigurationError',
    'handle_simulation_error',
    'validate_config',
    'check_grid_size',
    'check_numerical_stability',
    'check_array_bounds',
    'setup_logging',
    'SimulationLogger',
    'Timer',
    'clamp',
    'smoothstep',
    'remap'
]
