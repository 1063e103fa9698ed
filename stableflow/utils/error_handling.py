import logging
from typing import Optional, Any, Dict
import traceback
import numpy as np

class SimulationError(Exception):
    """Base class for simulation-related errors"""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message)
        self.details = details or {}

class SolverError(SimulationError):
    """Error in a numerical kernel"""
    pass

class BoundaryError(SimulationError):
    """Error in boundary enforcement"""
    pass

class PhysicsError(SimulationError):
    """Non-physical field values"""
    pass

class ConfigurationError(SimulationError):
    """Error in configuration"""
    pass

def handle_simulation_error(e: Exception, logger: logging.Logger) -> None:
    """Log a simulation error with its details"""
    if isinstance(e, SimulationError):
        logger.error(f"{e.__class__.__name__}: {str(e)}")
        if e.details:
            logger.debug(f"Error details: {e.details}")
    else:
        logger.error(f"Unexpected error: {str(e)}")
        logger.debug(f"Traceback: {traceback.format_exc()}")

def validate_config(config: Dict[str, Any], required_fields: Dict[str, type]) -> None:
    """Validate configuration dictionary"""
    for field, field_type in required_fields.items():
        if field not in config:
            raise ConfigurationError(f"Missing required field: {field}")
        if not isinstance(config[field], field_type):
            raise ConfigurationError(
                f"Invalid type for field {field}. Expected {field_type}, got {type(config[field])}",
                details={'field': field, 'value': config[field]}
            )

def check_grid_size(size: Any) -> int:
    """Check that a grid resolution is a positive integer"""
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise ConfigurationError(
            f"Grid size must be an integer, got {type(size).__name__}",
            details={'size': size}
        )
    if size <= 0:
        raise ConfigurationError(f"Grid size must be positive, got {size}", details={'size': size})
    return int(size)

def check_numerical_stability(value: float, field_name: str, limit: float = 1e6) -> None:
    """Check numerical stability of a value"""
    if not np.isfinite(value):
        raise PhysicsError(f"Non-finite value detected in {field_name}")
    if np.abs(value) > limit:
        raise PhysicsError(f"Value too large in {field_name}: {value}")

def check_array_bounds(array: np.ndarray, field_name: str, limit: float = 1e6) -> None:
    """Check array values are finite and bounded"""
    if not np.all(np.isfinite(array)):
        raise PhysicsError(
            f"Non-finite values detected in {field_name}",
            details={'count': int(np.count_nonzero(~np.isfinite(array)))}
        )
    if np.any(np.abs(array) > limit):
        raise PhysicsError(
            f"Values too large in {field_name}",
            details={'max_abs': float(np.max(np.abs(array))), 'limit': limit}
        )
