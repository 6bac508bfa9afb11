import logging

import pytest

from gridpath import config as config_mod
from gridpath.config import (
    Config,
    LoggingConfig,
    apply_cli_overrides,
    configure_logging,
    load_config,
)


def test_missing_file_gives_defaults(tmp_path) -> None:
    cfg = load_config(tmp_path / "absent.yaml")
    assert cfg == Config()
    assert cfg.grid.length == 1
    assert cfg.grid.heuristic == "manhattan"
    assert cfg.viewer.steps_per_sec == 20


def test_values_loaded_from_yaml(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "grid:\n"
        "  length: 3\n"
        "  diagonals: true\n"
        "  heuristic: Octile\n"
        "viewer:\n"
        "  cell_size: 12\n"
        "logging:\n"
        "  global_level: debug\n"
        "  module_levels:\n"
        "    gridpath.core.astar: warning\n"
    )
    cfg = load_config(path)
    assert cfg.grid.length == 3
    assert cfg.grid.diagonals is True
    assert cfg.grid.heuristic == "octile"
    assert cfg.viewer.cell_size == 12
    assert cfg.viewer.panel_width == 320
    assert cfg.logging.global_level == "DEBUG"
    assert cfg.logging.module_levels == {"gridpath.core.astar": "WARNING"}


def test_empty_file_gives_defaults(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == Config()


def test_env_var_selects_file(tmp_path, monkeypatch) -> None:
    path = tmp_path / "other.yaml"
    path.write_text("grid:\n  length: 4\n")
    monkeypatch.setenv(config_mod.CONFIG_ENV, str(path))
    assert config_mod.config_path() == path
    assert load_config().grid.length == 4


@pytest.mark.parametrize(
    "text",
    [
        "grid:\n  heuristic: euclid\n",
        "grid:\n  length: 0\n",
        "grid:\n  diagonals: maybe\n",
        "viewer:\n  cell_size: big\n",
        "logging:\n  global_level: LOUD\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_values_raise(tmp_path, text) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(text)
    with pytest.raises(ValueError):
        load_config(path)


def test_cli_overrides() -> None:
    cfg = apply_cli_overrides(Config(), ["--grid.diagonals=yes", "--viewer.steps_per_sec=5", "stray"])
    assert cfg.grid.diagonals is True
    assert cfg.viewer.steps_per_sec == 5
    assert cfg.grid.length == 1


@pytest.mark.parametrize("arg", ["--grid.colour=red", "--world.size=3", "--grid=1"])
def test_unknown_cli_option_raises(arg) -> None:
    with pytest.raises(ValueError, match="unknown option"):
        apply_cli_overrides(Config(), [arg])


def test_configure_logging_sets_module_levels() -> None:
    configure_logging(LoggingConfig(global_level="INFO",
                                    module_levels={"gridpath.test_module": "ERROR"}))
    assert logging.getLogger("gridpath.test_module").level == logging.ERROR


def test_shipped_config_file_is_valid() -> None:
    cfg = load_config(config_mod.CONFIG_PATH)
    assert cfg.grid.heuristic == "manhattan"
