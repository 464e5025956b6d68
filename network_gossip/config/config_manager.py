"""
Configuration manager for the gossip aggregation simulation.
"""

import json
import logging
from typing import Dict, Any, List, Optional
from pathlib import Path

from ..core.aggregation import resolve_mode
from ..network.generator import resolve_kind
from ..simulation.state import SimulationParams

logger = logging.getLogger(__name__)

NODES_RANGE = (50, 300)
PROBABILITY_RANGE = (0.01, 1.0)


class ConfigManager:
    """
    Manages configuration for the simulation.
    """

    def __init__(self, config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to configuration file (JSON)
            config: Already loaded configuration; skips reading a file
        """
        self.config_path = config_path or "config.json"
        self.config = config if config is not None else self._load_config()

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ConfigManager":
        return cls(config=config)

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r') as f:
            return json.load(f)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key, dots separate nested sections
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_simulation_params(self) -> Dict[str, Any]:
        """
        Get simulation parameters.

        Returns:
            Dictionary of simulation parameters
        """
        return {
            'nodes_number': int(self.get('simulation.nodes_number', 100)),
            'net_type': str(self.get('simulation.net_type', 'lattice')),
            'mode_aggregation': str(self.get('simulation.mode_aggregation', 'average')),
            'random_neighbor': bool(self.get('simulation.random_neighbor', True)),
            'compute_size': bool(self.get('simulation.compute_size', False)),
            'rewiring_probability': float(self.get('simulation.rewiring_probability', 0.1)),
            'random_probability': float(self.get('simulation.random_probability', 0.1)),
            'node_failure_probability': float(self.get('simulation.node_failure_probability', 0.0)),
            'convergence_threshold': float(self.get('simulation.convergence_threshold', 0.1)),
            'max_attempts': int(self.get('generation.max_attempts', 1000))
        }

    def build_params(self, **overrides) -> SimulationParams:
        """Simulation parameters as a ``SimulationParams`` with overrides applied."""
        params = self.get_simulation_params()
        params.update(overrides)
        return SimulationParams(**params)

    def get_run_params(self) -> Dict[str, Any]:
        """
        Get run loop parameters.

        Returns:
            Dictionary with the seed list, tick bound and topologies to run
        """
        seed = self.get('simulation.random_seed')
        seeds = self.get('simulation.seeds', [seed] if seed is not None else [None])
        return {
            'seeds': list(seeds),
            'max_ticks': int(self.get('simulation.max_ticks', 10000)),
            'topologies': list(self.get('topologies', [self.get('simulation.net_type', 'lattice')]))
        }

    def get_visualization_params(self) -> Dict[str, Any]:
        """
        Get visualization parameters.

        Returns:
            Dictionary of visualization parameters
        """
        return {
            'enabled': bool(self.get('visualization.enabled', True)),
            'figure_size': self.get('visualization.figure_size', [12, 8]),
            'dpi': int(self.get('visualization.dpi', 150))
        }

    def get_output_directory(self) -> str:
        """
        Get output directory.

        Returns:
            Output directory path
        """
        return str(self.get('output_directory', 'results'))

    def validate_config(self) -> bool:
        """
        Validate configuration.

        Problems are logged; values outside the recommended control ranges
        only produce a warning.

        Returns:
            True if configuration is valid
        """
        errors: List[str] = []
        try:
            sim_params = self.get_simulation_params()
        except (TypeError, ValueError) as e:
            logger.error(f"Error: Malformed simulation parameter: {e}")
            return False

        if sim_params['nodes_number'] < 2:
            errors.append("nodes_number must be at least 2")
        elif not NODES_RANGE[0] <= sim_params['nodes_number'] <= NODES_RANGE[1]:
            logger.warning(f"nodes_number {sim_params['nodes_number']} outside {NODES_RANGE}")

        topologies = self.get_run_params()['topologies'] + [sim_params['net_type']]
        for net_type in topologies:
            try:
                resolve_kind(str(net_type))
            except ValueError:
                errors.append(f"Unknown net_type '{net_type}'")

        try:
            resolve_mode(sim_params['mode_aggregation'])
        except ValueError:
            errors.append(f"Unknown mode_aggregation '{sim_params['mode_aggregation']}'")

        # Flags must be JSON booleans; bool("false") is True
        for key in ('random_neighbor', 'compute_size'):
            raw = self.get(f'simulation.{key}')
            if raw is not None and not isinstance(raw, bool):
                errors.append(f"{key} must be true or false, got {raw!r}")

        for key in ('rewiring_probability', 'random_probability'):
            value = sim_params[key]
            if not 0.0 <= value <= 1.0:
                errors.append(f"{key} must be in [0, 1]")
            elif not PROBABILITY_RANGE[0] <= value <= PROBABILITY_RANGE[1]:
                logger.warning(f"{key} {value} outside {PROBABILITY_RANGE}")

        if not 0.0 <= sim_params['node_failure_probability'] <= 1.0:
            errors.append("node_failure_probability must be in [0, 1]")

        if sim_params['convergence_threshold'] <= 0:
            errors.append("convergence_threshold must be positive")

        if sim_params['max_attempts'] <= 0:
            errors.append("max_attempts must be positive")

        for error in errors:
            logger.error(f"Error: {error}")

        return not errors
