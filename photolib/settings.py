"""
Application settings, layered from defaults, a TOML file and CLI flags.
"""
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .exceptions import ConfigError
from .models import SortPolicy


@dataclass
class AppConfig:
    output: Path
    inputs: List[Path] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: list(config.DEFAULT_EXTENSIONS))
    sort_policy: SortPolicy = SortPolicy.MOVE_TO_ROOT


def read_config_file(path: Path) -> Dict[str, Any]:
    """Returns the file's settings, or {} if the file does not exist."""
    if not path.exists():
        logging.debug(f"Config file {path} not found, using defaults")
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e


def load_config(config_file: Optional[Path], overrides: Optional[Dict[str, Any]] = None) -> AppConfig:
    """
    Merges settings: defaults < config file < overrides.
    Override values that are None or empty lists are treated as unset.
    """
    merged: Dict[str, Any] = {}
    if config_file is not None:
        merged.update(read_config_file(config_file))
    for key, value in (overrides or {}).items():
        if value is None or value == []:
            continue
        merged[key] = value

    unknown = set(merged) - {"output", "inputs", "extensions", "sort_policy"}
    if unknown:
        raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")

    if not merged.get("output"):
        raise ConfigError("No output directory configured (set 'output' or pass --output)")

    cfg = AppConfig(output=Path(merged["output"]))

    if "inputs" in merged:
        cfg.inputs = [Path(p) for p in _as_list(merged["inputs"], "inputs")]
    if "extensions" in merged:
        cfg.extensions = [str(e) for e in _as_list(merged["extensions"], "extensions")]
    if "sort_policy" in merged:
        policy = merged["sort_policy"]
        if not isinstance(policy, SortPolicy):
            try:
                policy = SortPolicy.parse(str(policy))
            except ValueError as e:
                raise ConfigError(str(e)) from e
        cfg.sort_policy = policy

    return cfg


def _as_list(value, name: str) -> list:
    if isinstance(value, (str, Path)):
        return [value]
    if isinstance(value, list):
        return value
    raise ConfigError(f"'{name}' must be a list, got {type(value).__name__}")
