"""Legacy configuration layout migrations.

Older installs kept their settings in cfg/conf.ini next to a distributed
cfg/conf.ini.sample. Each rule below converts one piece of that layout to
the canonical TOML files. Rules run in order, once, when the configuration
is loaded; they assume nothing else touches the directory meanwhile.
"""

import logging
from collections.abc import Callable, Mapping

from binconf.domain.config import REQUIRED_SECTIONS
from binconf.domain.exceptions import MalformedConfigurationError
from binconf.ports.config import ConfigStore
from binconf.shared.config_io import ConfigPaths

logger = logging.getLogger(__name__)

MigrationRule = Callable[[ConfigPaths, ConfigStore, ConfigStore], bool]


def migrate_legacy_config(
    paths: ConfigPaths, legacy: ConfigStore, canonical: ConfigStore
) -> bool:
    """Convert conf.ini to conf.toml and remove the INI file.

    Returns:
        True if the legacy file was converted

    Raises:
        MalformedConfigurationError: If conf.ini is unreadable or lacks a
            required section; the directory is left untouched
    """
    if not paths.legacy_file.exists():
        return False

    if paths.config_file.exists():
        logger.warning(
            "Ignoring legacy %s because %s already exists",
            paths.legacy_file,
            paths.config_file,
        )
        return False

    data = legacy.read(paths.legacy_file)
    # Validate before touching the directory so a bad legacy file survives
    for section in REQUIRED_SECTIONS:
        if not isinstance(data.get(section), Mapping):
            raise MalformedConfigurationError(
                f"Configuration section [{section}] is required in {paths.legacy_file}",
                hint="Add the section, even empty, to the legacy file and retry",
            )

    canonical.write(paths.config_file, data)
    paths.legacy_file.unlink()
    logger.info("Converted %s to %s", paths.legacy_file, paths.config_file)
    return True


def migrate_legacy_sample(
    paths: ConfigPaths, legacy: ConfigStore, canonical: ConfigStore
) -> bool:
    """Replace conf.ini.sample with conf.sample.toml.

    The sample is converted when no canonical sample exists yet, otherwise
    it is only removed.

    Returns:
        True if the legacy sample was converted or removed
    """
    if not paths.legacy_sample_file.exists():
        return False

    if not paths.sample_file.exists():
        data = legacy.read(paths.legacy_sample_file)
        canonical.write(paths.sample_file, data)
        logger.info(
            "Converted %s to %s", paths.legacy_sample_file, paths.sample_file
        )

    paths.legacy_sample_file.unlink()
    logger.info("Removed legacy sample %s", paths.legacy_sample_file)
    return True


MIGRATIONS: tuple[MigrationRule, ...] = (
    migrate_legacy_config,
    migrate_legacy_sample,
)


def run_migrations(
    paths: ConfigPaths,
    legacy: ConfigStore,
    canonical: ConfigStore,
    rules: tuple[MigrationRule, ...] = MIGRATIONS,
) -> list[str]:
    """Apply migration rules in order.

    Args:
        paths: Files of the configuration directory
        legacy: Store reading the legacy format
        canonical: Store writing the canonical format
        rules: Rules to apply, in order

    Returns:
        Names of the rules that changed the directory
    """
    applied = []
    for rule in rules:
        if rule(paths, legacy, canonical):
            applied.append(rule.__name__)
    return applied
