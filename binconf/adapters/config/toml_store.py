"""TOML-based configuration store.

Reads and writes the canonical cfg/conf.toml file.
"""

import logging
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from binconf.domain.exceptions import MalformedConfigurationError

logger = logging.getLogger(__name__)


def _drop_none(data: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
    # TOML has no null
    return {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in data.items()
    }


class TomlConfigStore:
    """Configuration store for the canonical TOML format."""

    def read(self, path: Path) -> dict[str, dict[str, Any]]:
        """Load raw TOML data from a config file.

        Args:
            path: Path to conf.toml

        Returns:
            Dictionary with parsed TOML data

        Raises:
            FileNotFoundError: If config file doesn't exist
            MalformedConfigurationError: If config file is malformed
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise MalformedConfigurationError(
                f"Invalid TOML in config file {path}: {e}",
                hint="Fix the syntax error or delete the file to regenerate defaults",
            ) from e
        except UnicodeDecodeError as e:
            raise MalformedConfigurationError(
                f"Config file {path} is not valid UTF-8: {e}",
                hint="Save the file as UTF-8 or delete it to regenerate defaults",
            ) from e

        logger.debug("Parsed %s with sections %s", path, list(data))
        return data

    def dumps(self, data: dict[str, dict[str, Any]], header: str | None = None) -> str:
        """Render configuration data as TOML text."""
        return (header or "") + tomli_w.dumps(_drop_none(data))

    def write(
        self,
        path: Path,
        data: dict[str, dict[str, Any]],
        header: str | None = None,
    ) -> None:
        """Save configuration data to a TOML file.

        Args:
            path: Destination path for conf.toml
            data: Mapping of section name to key/value pairs
            header: Optional comment block written before the data
        """
        text = self.dumps(data, header)

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w", encoding="utf-8") as f:
            f.write(text)
