"""
Experiment runner for gossip aggregation studies.
"""

import os
import json
import math
import numpy as np
from datetime import datetime
from typing import Dict, Any, List, Optional, Tuple
import logging

from .config.config_manager import ConfigManager
from .errors import NetworkGossipError
from .network.graph_model import NetworkModel
from .simulation.controller import Controller
from .visualization import plot_degree_distribution, plot_network, plot_std_history, plot_value_range

logger = logging.getLogger(__name__)


class Runner:
    """Experiment runner: one controller per (topology, seed) pair."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.config_manager = ConfigManager.from_dict(config)
        self.output_dir = config.get("output_dir", self.config_manager.get_output_directory())
        run_params = self.config_manager.get_run_params()
        self.max_ticks = run_params["max_ticks"]
        self.progress_bar = bool(config.get("progress_bar", True))
        self.visualization = self.config_manager.get_visualization_params()
        self.last_controller: Optional[Controller] = None
        # Result index -> (generated network, final values), for the network plots
        self._networks: Dict[int, Tuple[NetworkModel, List[float]]] = {}

    def run_experiment(self, net_type: str, random_seed: Optional[int] = None) -> Dict[str, Any]:
        """Run a single experiment"""
        params = self.config_manager.build_params(net_type=net_type)
        logger.info(f"Running experiment: {net_type} with {params.nodes_number} nodes (seed={random_seed})")

        controller = Controller(params, random_seed=random_seed, max_ticks=self.max_ticks)
        results = controller.run_simulation(progress_bar=self.progress_bar)
        self.last_controller = controller
        results["experiment_metadata"]["topology"] = params.net_type.value

        return results

    def run_batch(self, net_types: List[str], seeds: Optional[List[Optional[int]]] = None) -> List[Dict[str, Any]]:
        """Run every topology with every seed, recording failures instead of stopping."""
        if seeds is None:
            seeds = [None]

        experiments = [{'net_type': net_type, 'random_seed': seed}
                       for net_type in net_types for seed in seeds]

        results = []
        for i, exp in enumerate(experiments):
            try:
                result = self.run_experiment(exp['net_type'], exp['random_seed'])
                results.append(result)
                self._networks[len(results) - 1] = (self.last_controller.initial_graph,
                                                    result["final_values"])
                logger.info(f"[{i+1}/{len(experiments)}] {exp['net_type']} seed={exp['random_seed']}: "
                            f"{result['status']} at tick {result['convergence_tick']}")
            except NetworkGossipError as e:
                logger.error(f"[{i+1}/{len(experiments)}] {exp['net_type']} seed={exp['random_seed']} failed: {e}")
                results.append({"error": str(e), "config": exp})

        return results

    def save_results(self, results: List[Dict[str, Any]]) -> str:
        """
        Save each run as JSON plus a metadata file in a timestamped directory.

        Returns:
            The experiment directory
        """
        timestamp = datetime.now().strftime("%m-%d-%H-%M-%S")
        experiment_name = self.config.get("experiment", {}).get("name", "experiment")
        experiment_name = experiment_name.lower().replace(" ", "_").replace("-", "_")
        experiment_path = os.path.join(self.output_dir, f"{experiment_name}_{timestamp}")
        os.makedirs(experiment_path, exist_ok=True)

        for i, result in enumerate(results):
            if "error" in result:
                continue
            metadata = result["experiment_metadata"]
            filename = f"{metadata['topology']}_seed{metadata['random_seed']}_{i}.json"
            with open(os.path.join(experiment_path, filename), 'w') as f:
                json.dump(self._make_json_serializable(result), f, indent=2)
            logger.debug(f"Saved {filename}")

        metadata = {
            "experiment_directory": os.path.basename(experiment_path),
            "total_runs": len(results),
            "successful_runs": len([r for r in results if "error" not in r]),
            "failures": [r for r in results if "error" in r],
            "config": self.config
        }
        with open(os.path.join(experiment_path, "experiment_metadata.json"), 'w') as f:
            json.dump(self._make_json_serializable(metadata), f, indent=2)

        logger.info(f"Results saved: {experiment_path}")
        return experiment_path

    def save_plots(self, results: List[Dict[str, Any]], experiment_path: str) -> str:
        """
        Write convergence, value range, degree distribution and network plots.

        Returns:
            The plots directory
        """
        plots_dir = os.path.join(experiment_path, "plots")
        os.makedirs(plots_dir, exist_ok=True)
        figure_size = self.visualization["figure_size"]
        dpi = self.visualization["dpi"]

        for i, result in enumerate(results):
            if "error" in result:
                continue
            metadata = result["experiment_metadata"]
            base = f"{metadata['topology']}_seed{metadata['random_seed']}_{i}"
            plot_std_history(result, os.path.join(plots_dir, f"{base}_std.png"), figure_size, dpi)
            plot_value_range(result, os.path.join(plots_dir, f"{base}_values.png"), figure_size, dpi)
            plot_degree_distribution(result, os.path.join(plots_dir, f"{base}_degrees.png"), figure_size, dpi)

            network = self._networks.get(i)
            if network is not None:
                graph, values = network
                plot_network(graph, values, metadata["topology"],
                             os.path.join(plots_dir, f"{base}_network.png"), seed=metadata["random_seed"],
                             dpi=dpi)
            logger.info(f"Saved plots for {base}")

        return plots_dir

    def _make_json_serializable(self, obj):
        """Convert numpy types and infinities to plain JSON values"""
        if isinstance(obj, dict):
            return {str(key): self._make_json_serializable(value) for key, value in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_json_serializable(item) for item in obj]
        elif isinstance(obj, np.ndarray):
            return self._make_json_serializable(obj.tolist())
        elif isinstance(obj, (np.integer, np.floating, np.bool_)):
            return self._make_json_serializable(obj.item())
        elif isinstance(obj, float) and not math.isfinite(obj):
            return None
        else:
            return obj


def run_experiment(config: Dict[str, Any]) -> tuple:
    """Run every configured topology and seed, then save the results and plots."""
    runner = Runner(config)
    run_params = runner.config_manager.get_run_params()

    results = runner.run_batch(run_params["topologies"], run_params["seeds"])
    experiment_path = runner.save_results(results)
    if runner.visualization["enabled"]:
        runner.save_plots(results, experiment_path)

    return results, experiment_path
