"""
Simulation state threaded through the tick transitions.
"""

import numpy as np
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, FrozenSet, List, Optional

from ..core.aggregation import AggregationMode, resolve_mode
from ..network.generator import TopologyKind, resolve_kind
from ..network.graph_model import NetworkModel

CONVERGENCE_THRESHOLD = 0.1


class SimulationStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    CONVERGED = "converged"
    EXTINCT = "extinct"


class NodeStatus(str, Enum):
    ACTIVE = "active"
    FAILED = "failed"


@dataclass(frozen=True)
class SimulationParams:
    """
    Run parameters, one field per control of the simulation panel.

    Attributes:
        nodes_number: Number of nodes in the network
        net_type: Topology kind
        mode_aggregation: Aggregation function
        random_neighbor: Exchange with one random neighbor instead of all
        compute_size: Derive a network size estimate (average mode only)
        rewiring_probability: Small-world rewiring probability
        random_probability: Erdős-Rényi edge retention probability
        node_failure_probability: Chance per tick that one node fails
        convergence_threshold: Standard deviation at which the run converges
        max_attempts: Retry budget of the topology connectivity loop
    """
    nodes_number: int = 100
    net_type: TopologyKind = TopologyKind.LATTICE
    mode_aggregation: AggregationMode = AggregationMode.AVERAGE
    random_neighbor: bool = True
    compute_size: bool = False
    rewiring_probability: float = 0.1
    random_probability: float = 0.1
    node_failure_probability: float = 0.0
    convergence_threshold: float = CONVERGENCE_THRESHOLD
    max_attempts: int = 1000

    def __post_init__(self):
        object.__setattr__(self, "net_type", resolve_kind(self.net_type))
        object.__setattr__(self, "mode_aggregation", resolve_mode(self.mode_aggregation))
        if not 0.0 <= self.node_failure_probability <= 1.0:
            raise ValueError(
                f"node_failure_probability must be in [0, 1], got {self.node_failure_probability}"
            )

    def topology_params(self) -> Dict[str, float]:
        return {
            "rewiring_probability": self.rewiring_probability,
            "connection_probability": self.random_probability,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["net_type"] = self.net_type.value
        data["mode_aggregation"] = self.mode_aggregation.value
        return data


@dataclass
class SimulationState:
    """
    Complete state of one run.

    Transitions never mutate a state in place; ``run_tick`` returns a new one.
    The graph object is shared between consecutive states until a node failure
    changes it.
    """
    params: SimulationParams
    graph: NetworkModel
    values: np.ndarray
    node_status: List[NodeStatus]
    rng: np.random.Generator
    estimated_sizes: np.ndarray
    source_node: int = -1
    touched: FrozenSet[int] = frozenset()
    tick: int = 0
    convergence_tick: int = -1
    status: SimulationStatus = SimulationStatus.IDLE
    metrics: Dict[str, float] = field(default_factory=dict)
    last_active: Optional[int] = None
    last_failed: Optional[int] = None

    @property
    def active_nodes(self) -> List[int]:
        return [i for i, s in enumerate(self.node_status) if s is NodeStatus.ACTIVE]

    @property
    def n_failed(self) -> int:
        return sum(1 for s in self.node_status if s is NodeStatus.FAILED)

    @property
    def is_terminal(self) -> bool:
        return self.status in (SimulationStatus.CONVERGED, SimulationStatus.EXTINCT)

    def std(self) -> float:
        """Population standard deviation of all node values, failed ones included."""
        return float(np.std(self.values))
