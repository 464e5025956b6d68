#!/usr/bin/env python3
"""
Simple script to run gossip aggregation experiments from config file.
"""

import json
import argparse
import logging
import warnings

from network_gossip.config.config_manager import ConfigManager
from network_gossip.runner import run_experiment

# Suppress NumPy deprecation warnings from NetworkX
warnings.filterwarnings("ignore", message=".*alltrue.*", category=DeprecationWarning)

def main():
    parser = argparse.ArgumentParser(description="Run gossip aggregation experiments from config file")
    parser.add_argument("--config", required=True, help="Configuration file path")
    parser.add_argument("--output-dir", default=None, help="Output directory")
    parser.add_argument("--no-plots", action="store_true", help="Skip writing plots")
    parser.add_argument("--no-progress", action="store_true", help="Hide the per-run progress bar")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args()

    # Setup logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger(__name__)

    # Load config
    try:
        with open(args.config, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logger.error(f"Config file {args.config} not found!")
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in config file: {e}")
        return 1

    if not ConfigManager.from_dict(config).validate_config():
        logger.error("Configuration is invalid, aborting")
        return 1

    if args.output_dir:
        config["output_dir"] = args.output_dir
    if args.no_plots:
        config.setdefault("visualization", {})["enabled"] = False
    if args.no_progress:
        config["progress_bar"] = False

    sim = config.get("simulation", {})
    logger.info("Starting Gossip Aggregation Experiment")
    logger.info("=" * 50)
    logger.info(f"Config: {args.config}")
    logger.info(f"Topologies: {config.get('topologies', [sim.get('net_type', 'lattice')])}")
    logger.info(f"Mode: {sim.get('mode_aggregation', 'average')}, nodes: {sim.get('nodes_number', 100)}")

    try:
        results, experiment_path = run_experiment(config)
    except Exception as e:
        logger.error(f"Experiment failed: {e}")
        raise

    failures = [r for r in results if "error" in r]
    logger.info(f"Experiment completed: {len(results) - len(failures)}/{len(results)} runs succeeded")
    logger.info(f"Results saved to: {experiment_path}")
    return 0 if not failures else 2

if __name__ == "__main__":
    raise SystemExit(main())
