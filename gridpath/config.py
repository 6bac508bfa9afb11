"""Configuration loader for the gridpath editor."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml

from gridpath.core.heuristics import HEURISTICS


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"
CONFIG_ENV = "GRIDPATH_CONFIG"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class GridConfig:
    """Initial grid shown by the editor. Side length is ``length * 10`` cells."""

    length: int = 1
    diagonals: bool = False
    heuristic: str = "manhattan"


@dataclass
class ViewerConfig:
    cell_size: int = 30
    steps_per_sec: int = 20
    panel_width: int = 320


@dataclass
class LoggingConfig:
    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    grid: GridConfig = field(default_factory=GridConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("1", "true", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("0", "false", "no", "off", ""):
        return False
    if isinstance(value, int):
        return bool(value)
    raise ValueError(f"expected a boolean, got {value!r}")


def _positive_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if number < 1:
        raise ValueError(f"{name} must be >= 1, got {number}")
    return number


def _level(value: Any, name: str) -> str:
    level = str(value).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {LOG_LEVELS}, got {value!r}")
    return level


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    grid_data = data.get("grid") or {}
    heuristic = str(grid_data.get("heuristic", "manhattan")).lower()
    if heuristic not in HEURISTICS:
        raise ValueError(f"grid.heuristic must be one of {sorted(HEURISTICS)}, got {heuristic!r}")
    grid = GridConfig(
        length=_positive_int(grid_data.get("length", 1), "grid.length"),
        diagonals=_as_bool(grid_data.get("diagonals", False)),
        heuristic=heuristic,
    )

    viewer_data = data.get("viewer") or {}
    viewer = ViewerConfig(
        cell_size=_positive_int(viewer_data.get("cell_size", 30), "viewer.cell_size"),
        steps_per_sec=_positive_int(viewer_data.get("steps_per_sec", 20), "viewer.steps_per_sec"),
        panel_width=_positive_int(viewer_data.get("panel_width", 320), "viewer.panel_width"),
    )

    logging_data = data.get("logging") or {}
    modules = logging_data.get("module_levels") or {}
    log = LoggingConfig(
        global_level=_level(logging_data.get("global_level", "INFO"), "logging.global_level"),
        module_levels={
            str(name): _level(level, f"logging.module_levels.{name}")
            for name, level in modules.items()
        },
    )

    return Config(grid=grid, viewer=viewer, logging=log)


def config_path() -> Path:
    """Config file location: ``$GRIDPATH_CONFIG`` if set, else ``config.yaml`` at the repo root."""

    override = os.getenv(CONFIG_ENV)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`.

    A missing file yields the defaults.
    """

    path = config_path() if path is None else path
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
    else:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return _parse_config(raw)


def apply_cli_overrides(config: Config, argv: Iterable[str]) -> Config:
    """Apply ``--section.key=value`` flags, e.g. ``--grid.diagonals=true``."""

    raw: dict[str, Any] = {
        "grid": dict(vars(config.grid)),
        "viewer": dict(vars(config.viewer)),
        "logging": {
            "global_level": config.logging.global_level,
            "module_levels": dict(config.logging.module_levels),
        },
    }
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, value = arg[2:].split("=", 1)
        section, _, name = key.partition(".")
        if section not in raw or name not in raw[section] or name == "module_levels":
            raise ValueError(f"unknown option --{key}")
        raw[section][name] = value
    return _parse_config(raw)


def configure_logging(config: LoggingConfig) -> None:
    """Install the root handler and per-module levels."""

    logging.basicConfig(
        level=getattr(logging, config.global_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    for module_name, level in config.module_levels.items():
        logging.getLogger(module_name).setLevel(getattr(logging, level))
