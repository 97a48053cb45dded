from dataclasses import dataclass
from pathlib import Path
import yaml

from fleetsite.exceptions import ConfigError

SOLVER_CHOICES = ('auto', 'cbc', 'gurobi')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

@dataclass
class Parameters:
    """Configuration parameters for a solve run"""
    solver: str = 'auto'
    verbose: bool = False
    tolerance: float = 1e-6
    log_level: str = 'INFO'
    show_progress: bool = True

    @classmethod
    def from_yaml(cls, path: Path | str = None) -> 'Parameters':
        """Load parameters from YAML file"""
        if path is None:
            path = Path(__file__).parent / 'default_config.yaml'

        with open(path) as f:
            data = yaml.safe_load(f) or {}
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    def __post_init__(self):
        """Validate parameters after initialization"""
        self.solver = str(self.solver).lower()
        if self.solver not in SOLVER_CHOICES:
            raise ConfigError(
                f"solver must be one of {SOLVER_CHOICES}. Got: {self.solver}"
            )

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {LOG_LEVELS}. Got: {self.log_level}"
            )

        if not isinstance(self.tolerance, (int, float)) or self.tolerance < 0:
            raise ConfigError(
                f"tolerance must be a non-negative number. Got: {self.tolerance}"
            )
