import yaml
import json
import logging
from typing import Optional, Dict, List
from dataclasses import dataclass, asdict
from enum import Enum
import os

from ..utils.error_handling import ConfigurationError, validate_config

SUPPORTED_DTYPES = ("float32", "float64")

NUMBER = (int, float)

# Expected types of the fields read from configuration files
FIELD_TYPES = {
    'size': int,
    'dtype': str,
    'iterations': int,
    'diffusivity': NUMBER,
    'viscosity': NUMBER,
    'time_step': NUMBER,
    'min_time_step': NUMBER,
    'max_time_step': NUMBER,
    'max_steps': int,
    'output_dir': str,
    'log_level': str
}

class ConfigFormat(Enum):
    """Configuration file formats"""
    YAML = "yaml"
    JSON = "json"

@dataclass
class SolverConfig:
    """Solver and driver configuration"""
    # Grid
    size: int = 126
    dtype: str = "float32"

    # Numerical parameters
    iterations: int = 20

    # Physics parameters
    diffusivity: float = 1e-7
    viscosity: float = 1e-6

    # Driver time stepping
    time_step: float = 16.0
    min_time_step: float = 8.0
    max_time_step: float = 32.0
    max_steps: int = 200

    # Output
    output_dir: str = "results"
    log_level: str = "INFO"

class ConfigManager:
    def __init__(self, config: Optional[SolverConfig] = None):
        """
        Initialize configuration manager

        Args:
            config: Solver configuration
        """
        self.config = config or SolverConfig()
        self.logger = logging.getLogger(__name__)

    def save(self,
             filename: str,
             format: ConfigFormat = ConfigFormat.YAML):
        """
        Save configuration to file

        Args:
            filename: Output filename
            format: File format
        """
        config_dict = asdict(self.config)

        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)

        if format == ConfigFormat.YAML:
            with open(filename, "w") as f:
                yaml.safe_dump(config_dict, f, default_flow_style=False)
        elif format == ConfigFormat.JSON:
            with open(filename, "w") as f:
                json.dump(config_dict, f, indent=4)
        else:
            raise ValueError(f"Unknown format: {format}")

        self.logger.info(f"Saved configuration to {filename}")

    def load(self,
             filename: str,
             format: Optional[ConfigFormat] = None) -> SolverConfig:
        """
        Load configuration from file

        Args:
            filename: Input filename
            format: File format, inferred from the extension when omitted

        Returns:
            Updated configuration
        """
        if format is None:
            format = ConfigFormat.JSON if filename.endswith(".json") else ConfigFormat.YAML

        if format == ConfigFormat.YAML:
            with open(filename, "r") as f:
                config_dict = yaml.safe_load(f) or {}
        elif format == ConfigFormat.JSON:
            with open(filename, "r") as f:
                config_dict = json.load(f)
        else:
            raise ValueError(f"Unknown format: {format}")

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration file {filename} does not contain a mapping"
            )

        self.update(config_dict)
        self.logger.info(f"Loaded configuration from {filename}")
        return self.config

    def update(self, config_dict: Dict):
        """Update configuration from dictionary, rejecting unknown keys and mistyped values"""
        unknown = [key for key in config_dict if key not in self.config.__dataclass_fields__]
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration fields: {', '.join(sorted(unknown))}",
                details={'fields': unknown}
            )
        validate_config(config_dict, {field: FIELD_TYPES[field] for field in config_dict})
        for field, value in config_dict.items():
            setattr(self.config, field, value)

    def validate(self) -> List[str]:
        """
        Validate configuration

        Returns:
            List of validation errors
        """
        errors = []
        config = self.config

        # Range checks below only run on fields of the right type
        mistyped = set()
        for field, field_type in FIELD_TYPES.items():
            value = getattr(config, field)
            if isinstance(value, bool) or not isinstance(value, field_type):
                mistyped.add(field)
                errors.append(f"Invalid type for {field}: {type(value).__name__}")

        def typed(*fields):
            return not mistyped.intersection(fields)

        if typed('size') and config.size <= 0:
            errors.append("Grid size must be positive")
        if typed('dtype') and config.dtype not in SUPPORTED_DTYPES:
            errors.append(f"dtype must be one of {', '.join(SUPPORTED_DTYPES)}")

        if typed('iterations') and config.iterations <= 0:
            errors.append("Number of iterations must be positive")

        if typed('diffusivity') and config.diffusivity < 0:
            errors.append("Diffusivity must be non-negative")
        if typed('viscosity') and config.viscosity < 0:
            errors.append("Viscosity must be non-negative")

        if typed('time_step') and config.time_step <= 0:
            errors.append("Time step must be positive")
        if typed('min_time_step') and config.min_time_step <= 0:
            errors.append("Minimum time step must be positive")
        if typed('min_time_step', 'max_time_step') and config.max_time_step < config.min_time_step:
            errors.append("Maximum time step must not be below the minimum")
        if typed('max_steps') and config.max_steps <= 0:
            errors.append("Maximum steps must be positive")

        if typed('log_level') and not isinstance(logging.getLevelName(config.log_level.upper()), int):
            errors.append(f"Unknown log level: {config.log_level}")

        return errors

    def require_valid(self) -> SolverConfig:
        """Raise ConfigurationError if the configuration is invalid"""
        errors = self.validate()
        if errors:
            raise ConfigurationError("; ".join(errors), details={'errors': errors})
        return self.config

    def get_output_path(self, name: str) -> str:
        """
        Get output path for a file name

        Args:
            name: File name

        Returns:
            Output path
        """
        return os.path.join(self.config.output_dir, name)

    def create_output_dirs(self):
        """Create output directories"""
        os.makedirs(self.config.output_dir, exist_ok=True)
