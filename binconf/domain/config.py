"""Config domain models for binconf.

The pastebin application reads its settings from cfg/conf.toml. This module
defines the compiled-in defaults and the typed schema that the loader walks
when merging a parsed file over those defaults.
"""

import copy
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

DEFAULT_CSP_HEADER = (
    "default-src 'none'; manifest-src 'self'; connect-src *; "
    "form-action 'none'; script-src 'self' 'unsafe-eval'; style-src 'self'; "
    "font-src 'self'; img-src 'self' data: blob:; media-src blob:; "
    "object-src blob:; sandbox allow-same-origin allow-scripts allow-forms "
    "allow-popups allow-modals"
)

_DEFAULTS: dict[str, dict[str, Any]] = {
    "main": {
        "name": "PrivateBin",
        "discussion": True,
        "opendiscussion": False,
        "password": True,
        "fileupload": False,
        "burnafterreadingselected": False,
        "defaultformatter": "plaintext",
        "syntaxhighlightingtheme": None,
        "sizelimit": 2097152,
        "template": "bootstrap",
        "notice": "",
        "languageselection": False,
        "languagedefault": "",
        "urlshortener": "",
        "icon": "identicon",
        "cspheader": DEFAULT_CSP_HEADER,
        "zerobincompatibility": False,
    },
    "expire": {
        "default": "1week",
        "clone": True,
    },
    "expire_options": {
        "5min": 300,
        "10min": 600,
        "1hour": 3600,
        "1day": 86400,
        "1week": 604800,
        "1month": 2592000,
        "1year": 31536000,
        "never": 0,
    },
    "formatter_options": {
        "plaintext": "Plain Text",
        "syntaxhighlighting": "Source Code",
        "markdown": "Markdown",
    },
    "traffic": {
        "limit": 10,
        "header": None,
        "dir": "data",
    },
    "purge": {
        "limit": 300,
        "batchsize": 10,
        "dir": "data",
    },
    "model": {
        "class": "Filesystem",
    },
    "model_options": {
        "dir": "data",
    },
}

DEFAULTS = MappingProxyType(
    {section: MappingProxyType(values) for section, values in _DEFAULTS.items()}
)

# Sections that must appear in a configuration file (they may be empty)
REQUIRED_SECTIONS = ("main", "model", "model_options")

# Keys holding paths relative to the installation root
PATH_KEYS = frozenset({"dir"})

DATABASE_MODEL_CLASSES = frozenset({"Database", "privatebin_db", "zerobin_db"})

# Substring replacements applied in order to model.class
LEGACY_MODEL_CLASS_REPLACEMENTS = (
    ("zerobin_", "privatebin_"),
    ("privatebin_data", "Filesystem"),
    ("privatebin_db", "Database"),
)


class FieldKind(Enum):
    """Expected value type of a configuration key."""

    BOOL = "bool"
    INT = "int"
    STRING = "string"
    OPTIONAL_STRING = "optional_string"

    @classmethod
    def of(cls, default: Any) -> "FieldKind":
        """Infer the kind of a key from its default value."""
        # bool first: bool is a subclass of int
        if isinstance(default, bool):
            return cls.BOOL
        if isinstance(default, int):
            return cls.INT
        if default is None:
            return cls.OPTIONAL_STRING
        return cls.STRING


@dataclass(frozen=True)
class SectionSchema:
    """Typed description of one configuration section.

    Attributes:
        name: Section name as it appears in the file
        fields: Key -> kind for fixed sections (empty for open sections)
        open_kind: Kind applied to every key of an open section, or None
                   for a fixed section whose keys are walked explicitly
    """

    name: str
    fields: MappingProxyType
    open_kind: FieldKind | None = None

    @property
    def is_open(self) -> bool:
        return self.open_kind is not None


def _build_schema(defaults: dict[str, dict[str, Any]]) -> dict[str, SectionSchema]:
    schema: dict[str, SectionSchema] = {}
    for section, values in defaults.items():
        if section.endswith("_options") and section != "model_options":
            first = next(iter(values.values()))
            schema[section] = SectionSchema(
                name=section,
                fields=MappingProxyType({}),
                open_kind=FieldKind.of(first),
            )
        else:
            schema[section] = SectionSchema(
                name=section,
                fields=MappingProxyType(
                    {key: FieldKind.of(value) for key, value in values.items()}
                ),
            )
    return schema


SCHEMA = MappingProxyType(_build_schema(_DEFAULTS))


def get_defaults() -> dict[str, dict[str, Any]]:
    """Return a mutable deep copy of the compiled-in defaults."""
    return {section: copy.deepcopy(dict(values)) for section, values in DEFAULTS.items()}


def database_model_options(install_root: str) -> dict[str, Any]:
    """Defaults used for [model_options] when a database model is configured.

    Args:
        install_root: Installation root, with a trailing separator

    Returns:
        Fresh dictionary of database model option defaults
    """
    return {
        "dsn": f"sqlite:{install_root}data/db.sq3",
        "tbl": None,
        "usr": None,
        "pwd": None,
    }
