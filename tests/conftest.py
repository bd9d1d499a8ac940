"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any

import pytest

from binconf.adapters.config.ini_store import IniConfigStore
from binconf.adapters.config.toml_store import TomlConfigStore
from binconf.domain.config import get_defaults
from binconf.shared.config_io import CONFIG_PATH_ENV, install_prefix

# ============================================================================
# Environment isolation
# ============================================================================


@pytest.fixture(autouse=True)
def clear_config_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure a CONFIG_PATH from the developer's shell never leaks in."""
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)


# ============================================================================
# Installation layout
# ============================================================================


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """Temporary installation root with an empty cfg/ directory."""
    root = tmp_path / "install"
    (root / "cfg").mkdir(parents=True)
    return root


@pytest.fixture
def cfg_dir(install_root: Path) -> Path:
    """Default configuration directory of the temporary installation."""
    return install_root / "cfg"


@pytest.fixture
def conf_file(cfg_dir: Path) -> Path:
    """Canonical configuration file path (not created)."""
    return cfg_dir / "conf.toml"


@pytest.fixture
def expected_options(install_root: Path) -> dict[str, dict[str, Any]]:
    """Defaults as the loader exposes them, with "dir" paths made absolute."""
    options = get_defaults()
    prefix = install_prefix(install_root)
    for section in ("model_options", "traffic", "purge"):
        options[section]["dir"] = prefix + options[section]["dir"]
    return options


# ============================================================================
# File helpers
# ============================================================================


def write_toml(path: Path, data: dict[str, dict[str, Any]]) -> Path:
    """Write a configuration mapping as TOML (None values are omitted)."""
    TomlConfigStore().write(path, data)
    return path


def write_ini(path: Path, data: dict[str, dict[str, Any]]) -> Path:
    """Write a configuration mapping in the legacy INI format."""
    IniConfigStore().write(path, data)
    return path
