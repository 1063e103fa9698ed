from typing import Dict, Any, List
from dataclasses import replace

from .settings import SolverConfig
from ..utils.error_handling import ConfigurationError

# Time steps are in milliseconds, matching a frame-clock driver
PRESETS: Dict[str, Dict[str, Any]] = {
    "default": {},
    "rotating_jet": {
        "size": 126,
        "diffusivity": 1e-7,
        "viscosity": 1e-6,
        "time_step": 16.0,
        "min_time_step": 8.0,
        "max_time_step": 32.0,
    },
    "smoke_preview": {
        "size": 62,
        "diffusivity": 1e-6,
        "viscosity": 1e-5,
        "time_step": 16.0,
        "max_steps": 100,
    },
}

def list_presets() -> List[str]:
    """Names of the available presets"""
    return sorted(PRESETS)

def get_preset(name: str, **overrides) -> SolverConfig:
    """
    Build a configuration from a named preset

    Args:
        name: Preset name
        **overrides: Fields replacing the preset's values

    Returns:
        Solver configuration
    """
    if name not in PRESETS:
        raise ConfigurationError(
            f"Unknown preset: {name}",
            details={'available': list_presets()}
        )
    return replace(SolverConfig(), **{**PRESETS[name], **overrides})
