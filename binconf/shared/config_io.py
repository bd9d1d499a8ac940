"""Configuration path resolution and default file rendering.

The configuration directory is <install root>/cfg unless the CONFIG_PATH
environment variable points somewhere else. Inside it live the canonical
conf.toml, its distributed sample and, on old installs, the legacy INI files.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "CONFIG_PATH"

CONFIG_FILENAME = "conf.toml"
SAMPLE_FILENAME = "conf.sample.toml"
LEGACY_FILENAME = "conf.ini"
LEGACY_SAMPLE_FILENAME = "conf.ini.sample"

DEFAULT_CONFIG_HEADER = """\
# Pastebin configuration
# Created by: binconf (built-in defaults)
#
# Missing sections and keys fall back to their defaults.
# [main], [model] and [model_options] must be present, even if empty.
# Paths in "dir" keys are relative to the installation root.

"""


@dataclass(frozen=True)
class ConfigPaths:
    """Files making up a configuration directory.

    Attributes:
        config_dir: Directory holding the configuration files
        config_file: Canonical configuration file (conf.toml)
        sample_file: Canonical sample file (conf.sample.toml)
        legacy_file: Legacy INI configuration file (conf.ini)
        legacy_sample_file: Legacy INI sample file (conf.ini.sample)
    """

    config_dir: Path
    config_file: Path
    sample_file: Path
    legacy_file: Path
    legacy_sample_file: Path

    @classmethod
    def in_dir(cls, config_dir: Path) -> "ConfigPaths":
        return cls(
            config_dir=config_dir,
            config_file=config_dir / CONFIG_FILENAME,
            sample_file=config_dir / SAMPLE_FILENAME,
            legacy_file=config_dir / LEGACY_FILENAME,
            legacy_sample_file=config_dir / LEGACY_SAMPLE_FILENAME,
        )


def get_install_root() -> Path:
    """Get the default installation root.

    This is the directory containing the binconf package, so a source
    checkout keeps its configuration in <checkout>/cfg.

    Returns:
        Absolute path to the installation root
    """
    return Path(__file__).resolve().parents[2]


def install_prefix(install_root: Path) -> str:
    """Return the installation root as a string prefix for relative paths."""
    return f"{install_root}{os.sep}"


def resolve_config_dir(
    install_root: Path,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Resolve the configuration directory.

    Args:
        install_root: Installation root used for the default location
        environ: Environment to read CONFIG_PATH from (defaults to os.environ)

    Returns:
        CONFIG_PATH if set and non-empty, otherwise <install_root>/cfg
    """
    if environ is None:
        environ = os.environ

    override = environ.get(CONFIG_PATH_ENV, "")
    if override:
        logger.debug("Using %s override: %s", CONFIG_PATH_ENV, override)
        return Path(override)
    return install_root / "cfg"
