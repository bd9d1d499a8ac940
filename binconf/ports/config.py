"""Configuration store port.

Defines the interface for reading and writing a configuration file as a
nested section -> key -> value mapping.
"""

from pathlib import Path
from typing import Any, Protocol


class ConfigStore(Protocol):
    """Protocol for a configuration file format."""

    def read(self, path: Path) -> dict[str, dict[str, Any]]:
        """Parse a configuration file.

        Args:
            path: Path to the configuration file

        Returns:
            Mapping of section name to key/value pairs

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedConfigurationError: If the file can't be parsed
        """
        ...

    def dumps(self, data: dict[str, dict[str, Any]], header: str | None = None) -> str:
        """Render a configuration mapping as text in this format."""
        ...

    def write(
        self,
        path: Path,
        data: dict[str, dict[str, Any]],
        header: str | None = None,
    ) -> None:
        """Serialize a configuration mapping to a file.

        Keys whose value is None are omitted.

        Args:
            path: Destination path
            data: Mapping of section name to key/value pairs
            header: Optional comment block written before the data
        """
        ...
