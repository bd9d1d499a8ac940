"""Configuration loader for the pastebin application.

Construction runs the whole pipeline once: resolve the configuration
directory, migrate legacy files, materialize a default file on fresh
installs, parse, merge over the defaults and normalize legacy values.
Consumers only read the result through get() and get_key().
"""

import copy
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from binconf.adapters.config.ini_store import IniConfigStore
from binconf.adapters.config.toml_store import TomlConfigStore
from binconf.core.migrations import run_migrations
from binconf.domain.coercion import coerce, coerce_int, coerce_str
from binconf.domain.config import (
    DATABASE_MODEL_CLASSES,
    LEGACY_MODEL_CLASS_REPLACEMENTS,
    PATH_KEYS,
    REQUIRED_SECTIONS,
    SCHEMA,
    FieldKind,
    database_model_options,
    get_defaults,
)
from binconf.domain.exceptions import (
    MalformedConfigurationError,
    UnknownKeyError,
    UnknownSectionError,
)
from binconf.ports.config import ConfigStore
from binconf.shared.config_io import (
    DEFAULT_CONFIG_HEADER,
    ConfigPaths,
    get_install_root,
    install_prefix,
    resolve_config_dir,
)

logger = logging.getLogger(__name__)

Options = dict[str, dict[str, Any]]


def _with_install_root(values: dict[str, Any], prefix: str) -> dict[str, Any]:
    return {
        key: f"{prefix}{value}" if key in PATH_KEYS else value
        for key, value in values.items()
    }


def _resolve_path(value: Any, prefix: str) -> Any:
    # Relative paths in the file are relative to the installation root
    if isinstance(value, str) and value and not os.path.isabs(value):
        return f"{prefix}{value}"
    return value


def merge_with_defaults(raw: Mapping[str, Any], prefix: str) -> Options:
    """Merge parsed file data over the compiled-in defaults.

    Missing or empty sections keep their defaults. Open sections
    (expire_options, formatter_options) are replaced wholesale by the file's
    section, every value coerced to the section's kind. Fixed sections take
    each known key from the file, coerced to the default's kind; unknown
    keys are ignored.

    Args:
        raw: Parsed configuration file
        prefix: Installation root prefix for "dir" keys

    Returns:
        Fully populated configuration
    """
    options: Options = {}
    for section, defaults in get_defaults().items():
        schema = SCHEMA[section]
        file_values = raw.get(section)
        if not isinstance(file_values, Mapping) or not file_values:
            options[section] = _with_install_root(defaults, prefix)
            continue

        if schema.is_open:
            if schema.open_kind is FieldKind.INT:
                options[section] = {
                    str(key): coerce_int(value) for key, value in file_values.items()
                }
            else:
                options[section] = {
                    str(key): coerce_str(value) for key, value in file_values.items()
                }
            continue

        fields = schema.fields
        if section == "model_options" and options["model"]["class"] in DATABASE_MODEL_CLASSES:
            defaults = database_model_options(prefix)
            fields = {key: FieldKind.of(value) for key, value in defaults.items()}

        merged = _with_install_root(defaults, prefix)
        for key, kind in fields.items():
            if key in file_values:
                value = coerce(kind, file_values[key], merged[key])
                if key in PATH_KEYS:
                    value = _resolve_path(value, prefix)
                merged[key] = value
        options[section] = merged

    return options


def rename_legacy_model_class(model_class: str) -> str:
    """Map deprecated storage model identifiers to their current names."""
    for old, new in LEGACY_MODEL_CLASS_REPLACEMENTS:
        model_class = model_class.replace(old, new)
    return model_class


def ensure_valid_expire_default(options: Options) -> None:
    """Point expire.default at an existing expire_options key."""
    expire_options = options["expire_options"]
    if options["expire"]["default"] not in expire_options and expire_options:
        fallback = next(iter(expire_options))
        logger.debug(
            "Expire default %r is not an expire option, using %r",
            options["expire"]["default"],
            fallback,
        )
        options["expire"]["default"] = fallback


class Configuration:
    """Loaded application configuration.

    Example:
        conf = Configuration()
        if conf.get_key("fileupload"):
            ...
        limit = conf.get_key("limit", "traffic")

    Raises:
        MalformedConfigurationError: If the configuration file is empty,
            unparsable or lacks a required section.
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        install_root: Path | None = None,
        environ: Mapping[str, str] | None = None,
        canonical_store: ConfigStore | None = None,
        legacy_store: ConfigStore | None = None,
    ) -> None:
        """Locate, migrate, parse and merge the configuration file.

        Args:
            config_dir: Configuration directory; when None it comes from the
                CONFIG_PATH environment variable or <install_root>/cfg
            install_root: Installation root used for the default directory
                and for relative "dir" paths
            environ: Environment mapping consulted for CONFIG_PATH
            canonical_store: Store for conf.toml (TOML by default)
            legacy_store: Store for the legacy files (INI by default)
        """
        self.install_root = Path(install_root) if install_root else get_install_root()
        if config_dir is None:
            config_dir = resolve_config_dir(self.install_root, environ)
        self.paths = ConfigPaths.in_dir(Path(config_dir))

        self._canonical = canonical_store or TomlConfigStore()
        self._legacy = legacy_store or IniConfigStore()

        logger.debug("Loading configuration from %s", self.paths.config_dir)
        run_migrations(self.paths, self._legacy, self._canonical)
        self._materialize_defaults()

        raw = self._read()
        options = merge_with_defaults(raw, install_prefix(self.install_root))
        options["model"]["class"] = rename_legacy_model_class(
            options["model"]["class"]
        )
        ensure_valid_expire_default(options)
        self._options = options

    def _materialize_defaults(self) -> None:
        if self.paths.config_file.exists():
            return

        defaults = get_defaults()
        self._canonical.write(self.paths.config_file, defaults, DEFAULT_CONFIG_HEADER)
        logger.info("Created default configuration at %s", self.paths.config_file)

        if not self.paths.sample_file.exists():
            self._canonical.write(self.paths.sample_file, defaults, DEFAULT_CONFIG_HEADER)
            logger.info("Created sample configuration at %s", self.paths.sample_file)

    def _read(self) -> Options:
        raw = self._canonical.read(self.paths.config_file)
        for section in REQUIRED_SECTIONS:
            if not isinstance(raw.get(section), Mapping):
                raise MalformedConfigurationError(
                    f"Configuration section [{section}] is required in "
                    f"{self.paths.config_file}",
                    hint="Add the section, even empty, or delete the file to regenerate defaults",
                )
        return raw

    def get(self) -> Options:
        """Return the whole configuration.

        Returns:
            Copy of the merged configuration, section -> key -> value
        """
        return copy.deepcopy(self._options)

    def get_key(self, key: str, section: str = "main") -> Any:
        """Return a single configuration value.

        Args:
            key: Key within the section
            section: Section name (default: "main")

        Returns:
            The configured value

        Raises:
            UnknownSectionError: If the section does not exist
            UnknownKeyError: If the key does not exist in the section
        """
        if section not in self._options:
            raise UnknownSectionError(section)
        if key not in self._options[section]:
            raise UnknownKeyError(key, section)
        return copy.deepcopy(self._options[section][key])
