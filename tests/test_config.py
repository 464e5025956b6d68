"""Tests for the JSON configuration layer."""

import json

import pytest

from network_gossip.config.config_manager import ConfigManager
from network_gossip.simulation.state import SimulationParams


@pytest.fixture
def config_dict():
    return {
        "topologies": ["lattice", "scalefree"],
        "simulation": {
            "nodes_number": 60,
            "mode_aggregation": "max",
            "random_neighbor": False,
            "seeds": [1, 2],
            "max_ticks": 500,
        },
        "generation": {"max_attempts": 50},
        "visualization": {"enabled": False},
    }


def test_load_from_file(tmp_path, config_dict):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config_dict))
    manager = ConfigManager(str(path))
    assert manager.get("simulation.nodes_number") == 60


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager(str(tmp_path / "absent.json"))


def test_dotted_get_with_default(config_dict):
    manager = ConfigManager.from_dict(config_dict)
    assert manager.get("generation.max_attempts") == 50
    assert manager.get("simulation.missing", "x") == "x"
    assert manager.get("simulation.nodes_number.deeper") is None


def test_simulation_defaults():
    params = ConfigManager.from_dict({}).get_simulation_params()
    assert params["nodes_number"] == 100
    assert params["net_type"] == "lattice"
    assert params["mode_aggregation"] == "average"
    assert params["random_neighbor"] is True
    assert params["convergence_threshold"] == 0.1
    assert params["max_attempts"] == 1000


def test_build_params(config_dict):
    params = ConfigManager.from_dict(config_dict).build_params(net_type="smallworld")
    assert isinstance(params, SimulationParams)
    assert params.net_type.value == "smallworld"
    assert params.mode_aggregation.value == "max"
    assert params.max_attempts == 50
    assert params.random_neighbor is False


def test_run_params(config_dict):
    run = ConfigManager.from_dict(config_dict).get_run_params()
    assert run == {"seeds": [1, 2], "max_ticks": 500, "topologies": ["lattice", "scalefree"]}


def test_run_params_single_seed_and_net_type():
    run = ConfigManager.from_dict(
        {"simulation": {"random_seed": 7, "net_type": "random"}}).get_run_params()
    assert run["seeds"] == [7]
    assert run["topologies"] == ["random"]


def test_visualization_params(config_dict):
    vis = ConfigManager.from_dict(config_dict).get_visualization_params()
    assert vis["enabled"] is False
    assert vis["figure_size"] == [12, 8]
    assert vis["dpi"] == 150


def test_valid_config(config_dict):
    assert ConfigManager.from_dict(config_dict).validate_config()


@pytest.mark.parametrize("section,key,value", [
    ("simulation", "nodes_number", 1),
    ("simulation", "mode_aggregation", "median"),
    ("simulation", "net_type", "hypercube"),
    ("simulation", "rewiring_probability", 1.5),
    ("simulation", "node_failure_probability", -0.1),
    ("simulation", "convergence_threshold", 0),
    ("generation", "max_attempts", 0),
])
def test_invalid_values(config_dict, section, key, value):
    config_dict[section][key] = value
    assert not ConfigManager.from_dict(config_dict).validate_config()


def test_unknown_topology_in_list(config_dict):
    config_dict["topologies"].append("torus")
    assert not ConfigManager.from_dict(config_dict).validate_config()


def test_malformed_value(config_dict):
    config_dict["simulation"]["nodes_number"] = "many"
    assert not ConfigManager.from_dict(config_dict).validate_config()


def test_out_of_range_values_only_warn(config_dict, caplog):
    config_dict["simulation"]["nodes_number"] = 20
    config_dict["simulation"]["random_probability"] = 0.001
    with caplog.at_level("WARNING"):
        assert ConfigManager.from_dict(config_dict).validate_config()
    assert "nodes_number" in caplog.text
    assert "random_probability" in caplog.text


def test_capitalized_option_spellings_accepted(config_dict):
    config_dict["topologies"] = ["Lattice", "SmallWorld"]
    config_dict["simulation"]["net_type"] = "SmallWorld"
    config_dict["simulation"]["mode_aggregation"] = "Average"
    manager = ConfigManager.from_dict(config_dict)
    assert manager.validate_config()
    params = manager.build_params()
    assert params.net_type.value == "smallworld"
    assert params.mode_aggregation.value == "average"


@pytest.mark.parametrize("key", ["random_neighbor", "compute_size"])
@pytest.mark.parametrize("raw", ["false", 0, "yes"])
def test_non_boolean_flags_rejected(config_dict, key, raw):
    config_dict["simulation"][key] = raw
    assert not ConfigManager.from_dict(config_dict).validate_config()
