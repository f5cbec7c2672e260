"""
Configuration loader with YAML/JSON support, environment overrides, and CLI overrides.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .schemas import RunConfig

ENV_PREFIX = "ARB__"


def load_config(path: str) -> RunConfig:
    """
    Load configuration from YAML or JSON file.

    Args:
        path: Path to config file

    Returns:
        RunConfig validated instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If file format is unsupported
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = config_path.suffix.lower()

    if suffix in [".yaml", ".yml"]:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}
    elif suffix == ".json":
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    else:
        raise ValueError(f"Unsupported config file format: {suffix}. Use .yaml, .yml, or .json")

    return RunConfig(**config_dict)


def _parse_value(raw: str) -> Any:
    """JSON first, then true/false/null, then int/float, else the raw string."""
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, ValueError):
        pass
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    try:
        return float(raw) if "." in raw else int(raw)
    except ValueError:
        return raw


def _set_nested(overrides: Dict[str, Any], parts: List[str], value: Any) -> None:
    current = overrides
    for part in parts[:-1]:
        current = current.setdefault(part, {})
    current[parts[-1]] = value


def _merge_overrides(cfg: RunConfig, overrides: Dict[str, Any]) -> RunConfig:
    if not overrides:
        return cfg
    config_dict = _deep_merge(cfg.model_dump(), overrides)
    # Re-validate
    return RunConfig(**config_dict)


def apply_env_overrides(cfg: RunConfig) -> RunConfig:
    """
    Apply environment variable overrides to configuration.

    Environment variables must follow pattern: ARB__{section}__{key}
    Example: ARB__orders__discount_factor=0.95

    Args:
        cfg: Base RunConfig

    Returns:
        RunConfig with environment overrides applied
    """
    overrides: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        # Env vars are often uppercase; config keys are lowercase
        parts = key[len(ENV_PREFIX):].lower().split("__")
        if len(parts) < 2:
            continue
        _set_nested(overrides, parts, _parse_value(value))

    return _merge_overrides(cfg, overrides)


def apply_cli_overrides(cfg: RunConfig, sets: List[str]) -> RunConfig:
    """
    Apply CLI --set key=value overrides to configuration.

    Supports nested keys: orders.discount_factor=0.95 or scan.strategies='["Butterfly"]'

    Args:
        cfg: Base RunConfig
        sets: List of "key=value" strings from CLI --set flags

    Returns:
        RunConfig with CLI overrides applied
    """
    if not sets:
        return cfg

    overrides: Dict[str, Any] = {}

    for set_str in sets:
        if "=" not in set_str:
            raise ValueError(f"Invalid --set format: {set_str}. Expected 'key=value'")

        key_str, value_str = set_str.split("=", 1)
        parts = key_str.split(".")
        if len(parts) < 2:
            raise ValueError(f"Invalid --set key format: {key_str}. Expected 'section.key' or 'section.nested.key'")

        _set_nested(overrides, parts, _parse_value(value_str))

    return _merge_overrides(cfg, overrides)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
