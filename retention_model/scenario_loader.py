from typing import Dict, Any, Optional, Set
import os
import yaml
from copy import deepcopy

__all__ = ['load', 'deep_merge', 'CircularExtendsError']

SCENARIO_SUFFIXES = ('.yaml', '.yml')


class CircularExtendsError(ValueError):
    """A scenario's ``extends`` chain leads back to itself."""

    pass


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge override into base and return the result.
    """
    for key, val in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(val, dict):
            base[key] = deep_merge(base[key], val)
        else:
            base[key] = deepcopy(val)
    return base


def _resolve_parent(fp: str, parent: str) -> str:
    parent_fp = os.path.join(os.path.dirname(fp), parent)
    if not os.path.exists(parent_fp) and not parent.endswith(SCENARIO_SUFFIXES):
        parent_fp += '.yaml'
    if not os.path.exists(parent_fp):
        raise FileNotFoundError(f"Parent scenario '{parent}' not found for {fp}")
    return parent_fp


def _load_file(fp: str, seen: Optional[Set[str]] = None) -> Any:
    if seen is None:
        seen = set()
    real = os.path.realpath(fp)
    if real in seen:
        raise CircularExtendsError(f"Circular extends detected at '{fp}'")
    seen.add(real)

    with open(fp) as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict) or not cfg.get('extends'):
        return cfg

    parent_cfg = _load_file(_resolve_parent(fp, cfg['extends']), seen)
    if not isinstance(parent_cfg, dict):
        raise ValueError(f"Parent of {fp} is not a scenario mapping")
    overrides = {k: v for k, v in cfg.items() if k != 'extends'}
    return deep_merge(parent_cfg, overrides)


def load(path: str) -> Any:
    """
    Load a scenario from a YAML file or a directory of YAMLs.

    A scenario may name a parent file with ``extends`` (relative to its own
    directory, ``.yaml`` optional); the parent is loaded first and the
    child's company inputs, estimations and simulation settings are
    deep-merged over it. A directory returns ``{scenario_name: config}``
    sorted by name.

    Raises:
        FileNotFoundError: a parent named by ``extends`` does not exist.
        CircularExtendsError: an ``extends`` chain revisits a file.
    """
    if not os.path.isdir(path):
        return _load_file(path)

    scenarios = {}
    for fn in sorted(os.listdir(path)):
        if fn.lower().endswith(SCENARIO_SUFFIXES):
            scenarios[os.path.splitext(fn)[0]] = _load_file(os.path.join(path, fn))
    return scenarios
