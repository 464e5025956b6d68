"""
Simulation controller: setup, tick transition and the run loop.
"""

import copy
import dataclasses
import logging
import numpy as np
from typing import Dict, Any, List, Optional
from tqdm import tqdm

from ..core.aggregation import AggregationMode, SOURCE_VALUE, aggregate, estimate_network_size
from ..core.mathematics import degree_histogram, get_network_info, network_metrics
from ..network.generator import generate_topology
from .state import NodeStatus, SimulationParams, SimulationState, SimulationStatus

logger = logging.getLogger(__name__)


def setup(params: SimulationParams, rng: Optional[np.random.Generator] = None,
          random_seed: Optional[int] = None) -> SimulationState:
    """
    Build the network and seed the source node.

    All values start at 0 except one uniformly chosen source node set to
    ``SOURCE_VALUE``. The graph is drawn first, then the source, both from the
    same random source.

    Args:
        params: Run parameters
        rng: Random source; takes precedence over ``random_seed``
        random_seed: Seed for a fresh generator when ``rng`` is not given

    Returns:
        A running state at tick 0

    Raises:
        InvalidTopologyParameter: topology parameters rejected
        GenerationError: no connected network within the retry budget
    """
    if rng is None:
        rng = np.random.default_rng(random_seed)

    graph = generate_topology(params.net_type, params.nodes_number, params.topology_params(),
                              rng=rng, max_attempts=params.max_attempts)
    n = graph.n_nodes

    values = np.zeros(n)
    source_node = int(rng.integers(n))
    values[source_node] = SOURCE_VALUE

    metrics = network_metrics(graph)
    logger.info(
        f"Setup {params.net_type.value} network: {n} nodes, {graph.n_edges} edges, "
        f"APL={metrics['average_path_length']:.3f}, CC={metrics['clustering_coefficient']:.3f}"
    )

    return SimulationState(
        params=params,
        graph=graph,
        values=values,
        node_status=[NodeStatus.ACTIVE] * n,
        rng=rng,
        estimated_sizes=np.full(n, np.nan),
        source_node=source_node,
        status=SimulationStatus.RUNNING,
        metrics=metrics,
    )

def run_tick(state: SimulationState) -> SimulationState:
    """
    Advance a running simulation by one tick.

    The input state is left untouched, including its random source, so the
    same state always yields the same successor. Terminal and idle states are
    returned as they are.

    Args:
        state: Current state

    Returns:
        Successor state
    """
    if state.status is not SimulationStatus.RUNNING:
        return state

    params = state.params
    if state.std() <= params.convergence_threshold:
        logger.info(f"Converged at tick {state.tick}")
        return dataclasses.replace(state, status=SimulationStatus.CONVERGED,
                                   convergence_tick=state.tick)

    rng = copy.deepcopy(state.rng)
    values = state.values.copy()
    estimated_sizes = state.estimated_sizes.copy()
    node_status = list(state.node_status)
    graph = state.graph

    active = state.active_nodes
    touched = set(state.touched)
    candidates = [i for i in active if i not in touched]
    if not candidates:
        # Every active node took its turn; start a new round
        touched = set()
        candidates = active

    node_id = candidates[int(rng.integers(len(candidates)))]
    touched.add(node_id)
    aggregate(graph, values, node_id, params.mode_aggregation, params.random_neighbor, rng)

    if params.compute_size and params.mode_aggregation is AggregationMode.AVERAGE:
        estimate = estimate_network_size(values[node_id])
        if estimate is not None:
            estimated_sizes[node_id] = estimate

    failed_node = None
    if rng.random() < params.node_failure_probability:
        failed_node = active[int(rng.integers(len(active)))]
        graph = graph.copy()
        graph.isolate_node(failed_node)
        node_status[failed_node] = NodeStatus.FAILED
        touched.discard(failed_node)
        logger.debug(f"Tick {state.tick}: node {failed_node} failed")

    next_state = dataclasses.replace(
        state,
        graph=graph,
        values=values,
        node_status=node_status,
        rng=rng,
        estimated_sizes=estimated_sizes,
        touched=frozenset(touched),
        last_active=node_id,
        last_failed=failed_node,
    )

    if not next_state.active_nodes:
        logger.info(f"All nodes failed at tick {state.tick}")
        return dataclasses.replace(next_state, status=SimulationStatus.EXTINCT,
                                   convergence_tick=state.tick)

    return dataclasses.replace(next_state, tick=state.tick + 1)


class Controller:
    """
    Drives one simulation run and records its history.
    """

    def __init__(self,
                 params: Optional[SimulationParams] = None,
                 random_seed: Optional[int] = None,
                 max_ticks: int = 10000,
                 **overrides):
        """
        Initialize simulation controller.

        Args:
            params: Run parameters; keyword overrides are applied on top
            random_seed: Seed of the run's random source
            max_ticks: Safety bound on the number of ticks per run
        """
        if params is None:
            params = SimulationParams(**overrides)
        elif overrides:
            params = dataclasses.replace(params, **overrides)
        self.params = params
        self.random_seed = random_seed
        self.max_ticks = max_ticks
        self.state: Optional[SimulationState] = None
        self.initial_graph = None

        self.std_history: List[float] = []
        self.mean_history: List[float] = []
        self.max_history: List[float] = []
        self.min_history: List[float] = []
        self.active_history: List[int] = []

    def setup(self) -> SimulationState:
        """Build a fresh network and reset the history."""
        self.state = setup(self.params, random_seed=self.random_seed)
        self.initial_graph = self.state.graph
        self.std_history = []
        self.mean_history = []
        self.max_history = []
        self.min_history = []
        self.active_history = []
        self._store_current_state()
        return self.state

    def step(self) -> SimulationState:
        """Run a single tick, setting up first if needed."""
        if self.state is None:
            self.setup()
        previous = self.state
        self.state = run_tick(previous)
        if self.state is not previous and self.state.status is not SimulationStatus.CONVERGED:
            self._store_current_state()
        return self.state

    def run_simulation(self, progress_bar: bool = True) -> Dict[str, Any]:
        """
        Run until convergence, extinction or ``max_ticks``.

        Returns:
            Simulation results
        """
        self.setup()

        iterator = range(self.max_ticks)
        if progress_bar:
            iterator = tqdm(iterator,
                            desc=f"{self.params.net_type.value}/{self.params.mode_aggregation.value} "
                                 f"({self.params.nodes_number} nodes)",
                            unit="tick")

        for _ in iterator:
            self.step()
            if self.state.is_terminal:
                break
        else:
            logger.warning(f"Stopped after {self.max_ticks} ticks without convergence")

        return self._get_simulation_results()

    def _store_current_state(self):
        values = self.state.values
        self.std_history.append(float(np.std(values)))
        self.mean_history.append(float(np.mean(values)))
        self.max_history.append(float(np.max(values)))
        self.min_history.append(float(np.min(values)))
        self.active_history.append(len(self.state.active_nodes))

    def _get_simulation_results(self) -> Dict[str, Any]:
        state = self.state
        estimates = state.estimated_sizes[~np.isnan(state.estimated_sizes)]

        return {
            'experiment_metadata': {
                'params': self.params.to_dict(),
                'random_seed': self.random_seed,
                'max_ticks': self.max_ticks,
            },
            'status': state.status.value,
            'convergence_tick': state.convergence_tick,
            'final_tick': state.tick,
            'source_node': state.source_node,
            'failed_nodes': state.n_failed,
            'std_history': self.std_history,
            'mean_history': self.mean_history,
            'max_history': self.max_history,
            'min_history': self.min_history,
            'active_history': self.active_history,
            'final_values': state.values.tolist(),
            'mean_estimated_size': float(np.mean(estimates)) if estimates.size else None,
            'metrics': state.metrics,
            'degree_histogram': degree_histogram(self.initial_graph),
            'network_info': get_network_info(self.initial_graph),
        }
