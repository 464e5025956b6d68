from .errors import GenerationError, InvalidTopologyParameter, NetworkGossipError
from .network.graph_model import NetworkModel, Edge
from .network.generator import TopologyKind, generate_topology
from .core.mathematics import network_metrics, degree_histogram
from .core.aggregation import AggregationMode
from .simulation.controller import Controller, setup, run_tick
from .simulation.state import SimulationParams, SimulationState, SimulationStatus
from .runner import Runner, run_experiment

__all__ = [
    "GenerationError",
    "InvalidTopologyParameter",
    "NetworkGossipError",
    "NetworkModel",
    "Edge",
    "TopologyKind",
    "generate_topology",
    "network_metrics",
    "degree_histogram",
    "AggregationMode",
    "Controller",
    "setup",
    "run_tick",
    "SimulationParams",
    "SimulationState",
    "SimulationStatus",
    "Runner",
    "run_experiment"
]
