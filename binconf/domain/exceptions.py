"""Domain exceptions for binconf.

Each error kind carries a stable numeric code. The host application treats
any of them as a fatal startup error; the CLI reuses the code as its exit
status.
"""


class ConfigurationError(Exception):
    """Base exception for all configuration errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
        code: Stable numeric error code.
    """

    code = 1

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class MalformedConfigurationError(ConfigurationError):
    """Raised when the configuration file is empty or cannot be parsed."""

    code = 2


class UnknownSectionError(ConfigurationError):
    """Raised when a lookup references a section that does not exist."""

    code = 3

    def __init__(self, section: str) -> None:
        super().__init__(
            f"Invalid data section '{section}' requested in configuration",
        )
        self.section = section


class UnknownKeyError(ConfigurationError):
    """Raised when a lookup references a key absent from its section."""

    code = 4

    def __init__(self, key: str, section: str) -> None:
        super().__init__(
            f"Invalid data key '{key}' requested in configuration section '{section}'",
        )
        self.key = key
        self.section = section
