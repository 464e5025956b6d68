"""
Base class and interface for network topologies.
"""

import logging
import numpy as np
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from ..errors import GenerationError, InvalidTopologyParameter
from ..network.graph_model import NetworkModel
from .mathematics import is_connected, get_network_info

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


class NetworkTopology(ABC):
    """
    Abstract base class for network topologies.

    Subclasses implement ``build`` which produces one candidate graph. Topologies
    that can come out disconnected set ``retry_until_connected``; their
    candidates are rejected and rebuilt from scratch until one is connected or
    ``max_attempts`` is exhausted.
    """

    retry_until_connected = False
    min_nodes = 2

    def __init__(self, parameters: Dict[str, Any], max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        """
        Initialize the network topology.

        Args:
            parameters: Topology-specific parameters; always includes ``n_agents``
            max_attempts: Upper bound on rejected candidates before giving up
        """
        self.parameters = parameters
        self.name = self.__class__.__name__
        self.n_agents = parameters["n_agents"]
        if not isinstance(self.n_agents, (int, np.integer)) or self.n_agents < self.min_nodes:
            raise InvalidTopologyParameter(
                f"{self.name} needs n_agents >= {self.min_nodes}, got {self.n_agents!r}"
            )
        if max_attempts < 1:
            raise InvalidTopologyParameter(f"max_attempts must be >= 1, got {max_attempts}")
        self.max_attempts = max_attempts

    @abstractmethod
    def build(self, rng: np.random.Generator) -> NetworkModel:
        """
        Build one candidate network.

        Args:
            rng: Random source; the only randomness a topology may consume

        Returns:
            Candidate network (possibly disconnected)
        """
        pass

    def generate_network(self, rng: Optional[np.random.Generator] = None) -> NetworkModel:
        """
        Generate a connected network.

        Args:
            rng: Random source, a fresh unseeded generator if omitted

        Returns:
            The accepted network

        Raises:
            GenerationError: no connected candidate within ``max_attempts``
        """
        if rng is None:
            rng = np.random.default_rng()

        if not self.retry_until_connected:
            return self.build(rng)

        for attempt in range(1, self.max_attempts + 1):
            candidate = self.build(rng)
            if is_connected(candidate):
                logger.info(f"{self.name}: accepted connected network after {attempt} attempt(s)")
                return candidate
            logger.debug(f"{self.name}: attempt {attempt} disconnected, regenerating")

        raise GenerationError(self.name, self.max_attempts)

    def get_network_info(self, rng: Optional[np.random.Generator] = None) -> Dict[str, Any]:
        """
        Generate a network and summarise it.

        Returns:
            Dictionary with network statistics
        """
        info = get_network_info(self.generate_network(rng))
        info["topology"] = self.name
        return info

    @staticmethod
    def _check_probability(name: str, value: Any, allow_zero: bool = True) -> float:
        """Validate a probability parameter, returning it as float."""
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidTopologyParameter(f"{name} must be a number, got {value!r}")
        lower_ok = value >= 0.0 if allow_zero else value > 0.0
        if not (lower_ok and value <= 1.0):
            interval = "[0, 1]" if allow_zero else "(0, 1]"
            raise InvalidTopologyParameter(f"{name} must be in {interval}, got {value}")
        return value
