from .settings import SolverConfig, ConfigManager, ConfigFormat
from .presets import get_preset, list_presets

__all__ = [
    'SolverConfig',
    'ConfigManager',
    'ConfigFormat',
    'get_preset',
    'list_presets'
]
