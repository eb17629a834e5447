import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from cerberus import Validator
from pydantic import ValidationError

from retention_model.scenario_loader import load as load_with_extends
from .models import ScenarioConfig

logger = logging.getLogger(__name__)

# Inner keys are checked by the pydantic models; this schema guards the layout.
SCENARIO_SCHEMA: Dict[str, Any] = {
    "name": {"type": "string", "required": False},
    "mode": {"type": "string", "required": False, "allowed": ["cost", "revenue"]},
    "company_inputs": {"type": "dict", "required": True},
    "estimations": {"type": "dict", "required": False, "nullable": True},
    "simulation": {
        "type": "dict",
        "required": False,
        "nullable": True,
        "schema": {
            "iterations": {"type": "integer", "min": 1},
            "perturbation": {"type": "number", "min": 0},
            "seed": {"type": "integer", "nullable": True},
            "batch_size": {"type": "integer", "min": 1},
            "workers": {"type": "integer", "min": 1},
            "max_retries": {"type": "integer", "min": 0},
        },
    },
}


class ConfigLoadError(Exception):
    """Custom exception for errors during scenario loading."""

    pass


def _load_with_extends(path: Path) -> Any:
    try:
        return load_with_extends(str(path))
    except FileNotFoundError as e:
        raise ConfigLoadError(str(e)) from e
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing YAML scenario file {path}: {e}")
        raise ConfigLoadError(f"Error parsing YAML file {path}") from e
    except ValueError as e:
        # circular or malformed extends chain
        logger.error(f"Invalid extends chain in {path}: {e}")
        raise ConfigLoadError(str(e)) from e


def load_yaml_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Loads scenario data from a YAML file, resolving ``extends`` chains.

    Raises:
        ConfigLoadError: If the file cannot be found or parsed, or its
            ``extends`` chain is circular.
    """
    config_path = Path(config_path)
    logger.info(f"Attempting to load scenario from: {config_path}")

    if not config_path.is_file():
        logger.error(f"Scenario file not found at path: {config_path}")
        raise ConfigLoadError(f"Scenario file not found: {config_path}")

    config_data = _load_with_extends(config_path)

    if not isinstance(config_data, dict):
        logger.error(f"Scenario file {config_path} did not parse into a dictionary.")
        raise ConfigLoadError(
            f"Invalid scenario format in {config_path}: Expected a dictionary."
        )

    logger.info(f"Successfully loaded scenario from {config_path}")
    return config_data


def parse_scenario(config_data: Dict[str, Any], default_name: Optional[str] = None) -> ScenarioConfig:
    """Validate a raw scenario mapping and build the typed ``ScenarioConfig``."""
    v = Validator(SCENARIO_SCHEMA)
    if not v.validate(config_data):
        raise ConfigLoadError(f"Scenario validation failed: {v.errors}")

    data = {k: val for k, val in config_data.items() if val is not None}
    if default_name and "name" not in data:
        data["name"] = default_name
    try:
        scenario = ScenarioConfig(**data)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid scenario values: {e}") from e

    logger.debug(f"Scenario parsed: {scenario}")
    return scenario


def load_scenario_config(config_path: Union[str, Path]) -> ScenarioConfig:
    """Load, validate and parse a scenario YAML file."""
    config_path = Path(config_path)
    return parse_scenario(load_yaml_config(config_path), default_name=config_path.stem)


def load_scenario_directory(config_dir: Union[str, Path]) -> Dict[str, ScenarioConfig]:
    """
    Load every scenario YAML in ``config_dir``, keyed by file stem and sorted by name.

    Raises:
        ConfigLoadError: If the directory is missing or empty, or any scenario fails to load.
    """
    config_dir = Path(config_dir)
    if not config_dir.is_dir():
        raise ConfigLoadError(f"Scenario directory not found: {config_dir}")

    raw = _load_with_extends(config_dir)
    if not raw:
        raise ConfigLoadError(f"No scenario files in {config_dir}")

    scenarios = {}
    for name, config_data in raw.items():
        if not isinstance(config_data, dict):
            raise ConfigLoadError(f"Invalid scenario format in {name}: Expected a dictionary.")
        try:
            scenarios[name] = parse_scenario(config_data, default_name=name)
        except ConfigLoadError as e:
            raise ConfigLoadError(f"Scenario '{name}': {e}") from e
    logger.info(f"Loaded {len(scenarios)} scenarios from {config_dir}")
    return scenarios


__all__ = [
    "SCENARIO_SCHEMA",
    "ConfigLoadError",
    "load_yaml_config",
    "parse_scenario",
    "load_scenario_config",
    "load_scenario_directory",
]
