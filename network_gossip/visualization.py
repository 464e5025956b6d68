"""
Visualization module for gossip aggregation runs.
"""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import networkx as nx
from typing import Dict, Any, Optional, Sequence

from .network.graph_model import NetworkModel
from .network.layout import node_positions


def _label(results: Dict[str, Any]) -> str:
    params = results.get('experiment_metadata', {}).get('params', {})
    return f"{params.get('net_type', '?')} / {params.get('mode_aggregation', '?')}"

def plot_std_history(results: Dict[str, Any], save_path: Optional[str] = None,
                     figure_size: Sequence[float] = (12, 8), dpi: int = 150):
    """
    Plot the standard deviation of node values per tick.

    Args:
        results: Simulation results dictionary
        save_path: Optional path to save the plot
    """
    std_history = results['std_history']
    ticks = range(len(std_history))

    plt.figure(figsize=tuple(figure_size))
    plt.plot(ticks, std_history, 'b-', linewidth=2, label='Std Dev')
    threshold = results.get('experiment_metadata', {}).get('params', {}).get('convergence_threshold')
    if threshold:
        plt.axhline(threshold, color='red', linestyle='--', alpha=0.6, label='Convergence threshold')
    if results.get('convergence_tick', -1) >= 0:
        plt.axvline(results['convergence_tick'], color='gray', linestyle=':', label=results['status'])

    plt.yscale('symlog', linthresh=0.01)
    plt.xlabel('Tick')
    plt.ylabel('Standard deviation of values')
    plt.title(f'Convergence: {_label(results)}')
    plt.grid(True, alpha=0.3)
    plt.legend()

    if save_path:
        plt.savefig(save_path, dpi=dpi, bbox_inches='tight')
    plt.close()

def plot_value_range(results: Dict[str, Any], save_path: Optional[str] = None,
                     figure_size: Sequence[float] = (12, 8), dpi: int = 150):
    """
    Plot mean value with the min/max envelope per tick.

    Args:
        results: Simulation results dictionary
        save_path: Optional path to save the plot
    """
    mean_history = results['mean_history']
    ticks = range(len(mean_history))

    plt.figure(figsize=tuple(figure_size))
    plt.plot(ticks, mean_history, 'b-', linewidth=2, label='Mean')
    plt.fill_between(ticks, results['min_history'], results['max_history'],
                     alpha=0.3, color='blue', label='Min / Max')

    plt.xlabel('Tick')
    plt.ylabel('Node value')
    plt.title(f'Values: {_label(results)}')
    plt.grid(True, alpha=0.3)
    plt.legend()

    if save_path:
        plt.savefig(save_path, dpi=dpi, bbox_inches='tight')
    plt.close()

def plot_degree_distribution(results: Dict[str, Any], save_path: Optional[str] = None,
                             figure_size: Sequence[float] = (12, 8), dpi: int = 150):
    """
    Bar chart of the degree histogram of the generated network.

    Args:
        results: Simulation results dictionary
        save_path: Optional path to save the plot
    """
    histogram = {int(k): v for k, v in results['degree_histogram'].items()}
    degrees = sorted(histogram)

    plt.figure(figsize=tuple(figure_size))
    plt.bar(degrees, [histogram[d] for d in degrees], color='steelblue')
    plt.xlabel('Degree')
    plt.ylabel('Number of nodes')
    plt.title(f'Degree distribution: {_label(results)}')
    plt.grid(True, axis='y', alpha=0.3)

    if save_path:
        plt.savefig(save_path, dpi=dpi, bbox_inches='tight')
    plt.close()

def plot_network(graph: NetworkModel, values: Sequence[float], kind: str = "lattice", save_path: Optional[str] = None,
                 seed: Optional[int] = None, figure_size: Sequence[float] = (10, 10), dpi: int = 150):
    """
    Draw the network with nodes colored by value.

    Args:
        graph: NetworkModel to draw
        values: Per-node values indexed by node id
        kind: Topology kind, selects the layout
        save_path: Optional path to save the plot
    """
    G = graph.to_networkx()
    pos = node_positions(graph, kind, seed=seed)
    rewired = [(u, v) for u, v, d in G.edges(data=True) if d.get('rewired')]
    plain = [(u, v) for u, v, d in G.edges(data=True) if not d.get('rewired')]

    plt.figure(figsize=tuple(figure_size))
    nx.draw_networkx_edges(G, pos, edgelist=plain, alpha=0.3, width=0.6)
    nx.draw_networkx_edges(G, pos, edgelist=rewired, alpha=0.6, width=0.8, edge_color='orange')
    nodes = nx.draw_networkx_nodes(G, pos, nodelist=graph.nodes(),
                                   node_color=[values[i] for i in graph.nodes()],
                                   cmap=plt.cm.viridis, node_size=40)
    plt.colorbar(nodes, label='Node value')
    plt.title(f'{kind} network ({graph.n_nodes} nodes, {graph.n_edges} edges)')
    plt.axis('off')

    if save_path:
        plt.savefig(save_path, dpi=dpi, bbox_inches='tight')
    plt.close()
