"""
Tests for config loader with overrides.
"""

import json
import os
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from spread_arb.config import RunConfig, apply_cli_overrides, apply_env_overrides, load_config


@pytest.fixture
def temp_config_json():
    """Create a temporary JSON config file"""
    config_dict = {
        "data": {"chain_path": "/tmp/chain.csv"},
        "scan": {"strategies": ["Butterfly", "Boxspread"], "min_edge": 0.05},
        "orders": {"account_id": "DU123", "discount_factor": 0.9, "fill_type": "2"},
    }

    fd, path = tempfile.mkstemp(suffix=".json")
    with open(fd, "w") as f:
        json.dump(config_dict, f)

    yield path

    Path(path).unlink()


def test_load_config_json(temp_config_json):
    config = load_config(temp_config_json)
    assert isinstance(config, RunConfig)
    assert config.data.chain_path == "/tmp/chain.csv"
    assert config.scan.strategies == ["Butterfly", "Boxspread"]
    assert config.orders.fill_type == "2"
    assert config.orders.capital_floor == 600.0
    assert config.loop.live is False


def test_load_config_yaml():
    config_dict = {
        "orders": {"account_id": "DU123", "fill_type": 3},
        "market": {"session_open": "09:30", "session_close": "16:15"},
    }

    fd, path = tempfile.mkstemp(suffix=".yaml")
    with open(fd, "w") as f:
        yaml.dump(config_dict, f)

    try:
        config = load_config(path)
        assert config.orders.fill_type == "3"
        assert config.market.close_time().minute == 15
    finally:
        Path(path).unlink()


def test_load_config_errors():
    with pytest.raises(FileNotFoundError):
        load_config("/nonexistent/config.yaml")

    fd, path = tempfile.mkstemp(suffix=".toml")
    os.close(fd)
    try:
        with pytest.raises(ValueError, match="Unsupported config file format"):
            load_config(path)
    finally:
        Path(path).unlink()


def test_apply_env_overrides(temp_config_json):
    os.environ["ARB__orders__discount_factor"] = "0.95"
    os.environ["ARB__ORDERS__FILL_TYPE"] = "3"

    try:
        config = apply_env_overrides(load_config(temp_config_json))
        assert config.orders.discount_factor == 0.95
        assert config.orders.fill_type == "3"
        # untouched values survive the merge
        assert config.orders.account_id == "DU123"
    finally:
        os.environ.pop("ARB__orders__discount_factor", None)
        os.environ.pop("ARB__ORDERS__FILL_TYPE", None)


def test_apply_cli_overrides_typed(temp_config_json):
    config = load_config(temp_config_json)

    config = apply_cli_overrides(config, ["scan.min_edge=0.1"])
    assert config.scan.min_edge == 0.1

    config = apply_cli_overrides(config, ["scan.parallel=true", "loop.max_cycles=3"])
    assert config.scan.parallel is True
    assert config.loop.max_cycles == 3

    config = apply_cli_overrides(config, ['scan.strategies=["Calendar"]'])
    assert config.scan.strategies == ["Calendar"]

    config = apply_cli_overrides(config, ["orders.account_id=12345"])
    assert config.orders.account_id == "12345"


def test_apply_cli_overrides_bad_format(temp_config_json):
    config = load_config(temp_config_json)
    with pytest.raises(ValueError, match="Invalid --set format"):
        apply_cli_overrides(config, ["scan.min_edge"])
    with pytest.raises(ValueError, match="Invalid --set key format"):
        apply_cli_overrides(config, ["scan=1"])


def test_schema_validation():
    with pytest.raises(ValidationError):
        RunConfig(orders={"discount_factor": 0.0})
    with pytest.raises(ValidationError):
        RunConfig(orders={"discount_factor": 1.5})
    with pytest.raises(ValidationError):
        RunConfig(orders={"fill_type": "4"})
    with pytest.raises(ValidationError):
        RunConfig(scan={"strategies": ["Condor"]})
    with pytest.raises(ValidationError):
        RunConfig(scan={"strategies": []})
    with pytest.raises(ValidationError):
        RunConfig(market={"session_open": "9"})
    assert RunConfig(scan={"strategies": ["Calendar", "Calendar"]}).scan.strategies == ["Calendar"]
