"""INI-based configuration store.

Reads the legacy cfg/conf.ini layout and writes INI artifacts for tools
that still expect the old format. Values are returned as strings; typing
them is left to the coercion stage of the loader.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from binconf.domain.exceptions import MalformedConfigurationError

logger = logging.getLogger(__name__)

_NULL_WORDS = frozenset({"null"})


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('\\"', '"')
    return value


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    escaped = str(value).replace('"', '\\"')
    return f'"{escaped}"'


class IniConfigStore:
    """Configuration store for the legacy INI format."""

    def _parser(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(
            interpolation=None,
            comment_prefixes=(";", "#"),
            strict=False,
            default_section="\x00",
        )
        # Keys are case-sensitive
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        return parser

    def read(self, path: Path) -> dict[str, dict[str, Any]]:
        """Load raw INI data from a config file.

        Args:
            path: Path to conf.ini

        Returns:
            Dictionary of sections with unquoted string values

        Raises:
            FileNotFoundError: If config file doesn't exist
            MalformedConfigurationError: If config file is malformed
        """
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        parser = self._parser()
        try:
            with path.open("r", encoding="utf-8") as f:
                parser.read_file(f, source=str(path))
        except configparser.Error as e:
            raise MalformedConfigurationError(
                f"Invalid INI in config file {path}: {e}",
                hint="Fix the legacy file by hand or remove it to start from defaults",
            ) from e
        except UnicodeDecodeError as e:
            raise MalformedConfigurationError(
                f"Legacy config file {path} is not valid UTF-8: {e}",
                hint="Save the legacy file as UTF-8 or remove it to start from defaults",
            ) from e

        data: dict[str, dict[str, Any]] = {}
        for section in parser.sections():
            values: dict[str, Any] = {}
            for key, raw in parser.items(section, raw=True):
                value = _unquote(raw)
                if value.lower() in _NULL_WORDS:
                    continue
                values[key] = value
            data[section] = values

        logger.debug("Parsed legacy %s with sections %s", path, list(data))
        return data

    def dumps(self, data: dict[str, dict[str, Any]], header: str | None = None) -> str:
        """Render configuration data as INI text."""
        lines: list[str] = []
        for section, values in data.items():
            if lines:
                lines.append("")
            lines.append(f"[{section}]")
            for key, value in values.items():
                if value is None:
                    continue
                lines.append(f"{key} = {_format_value(value)}")
        return (header or "") + "\n".join(lines) + "\n"

    def write(
        self,
        path: Path,
        data: dict[str, dict[str, Any]],
        header: str | None = None,
    ) -> None:
        """Save configuration data to an INI file.

        Args:
            path: Destination path
            data: Mapping of section name to key/value pairs
            header: Optional comment block written before the data
        """
        text = self.dumps(data, header)

        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w", encoding="utf-8") as f:
            f.write(text)
