"""binconf CLI entrypoint.

Command-line interface to inspect the pastebin configuration as the
application sees it.
"""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path

import click

from binconf.adapters.config.ini_store import IniConfigStore
from binconf.adapters.config.toml_store import TomlConfigStore
from binconf.core.loader import Configuration
from binconf.domain.exceptions import ConfigurationError, UnknownSectionError
from binconf.shared.config_io import (
    ConfigPaths,
    get_install_root,
    resolve_config_dir,
)
from binconf.version import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class BinconfCliError(click.ClickException):
    """CLI error with actionable hint for users.

    The exit status is the numeric code of the configuration error that
    caused it, so scripts can tell a malformed file (2) from a bad
    lookup (3, 4).

    Example:
        raise BinconfCliError(
            "Configuration section [main] is required",
            hint="Add the section, even empty",
            exit_code=2,
        )
    """

    def __init__(self, message: str, hint: str | None = None, exit_code: int = 1) -> None:
        super().__init__(message)
        self.hint = hint
        self.exit_code = exit_code

    def format_message(self) -> str:
        """Format the error message with hint if present."""
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def handle_cli_errors(func):
    """Convert configuration errors into CLI errors."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            raise BinconfCliError(e.message, hint=e.hint, exit_code=e.code) from e

    return wrapper


def _load(ctx: click.Context) -> Configuration:
    return Configuration(
        config_dir=ctx.obj["config_dir"],
        install_root=ctx.obj["install_root"],
    )


@click.group()
@click.version_option(version=__version__, prog_name="binconf")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging.",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Configuration directory (overrides CONFIG_PATH).",
)
@click.option(
    "--install-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Installation root used for relative data paths.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    config_dir: Path | None,
    install_root: Path | None,
) -> None:
    """binconf - pastebin configuration loader.

    Loads cfg/conf.toml (migrating legacy conf.ini files on the way) and
    shows the effective configuration.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir
    ctx.obj["install_root"] = install_root


@cli.command()
@click.option("--section", "-s", default=None, help="Only show this section.")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["toml", "ini", "json"]),
    default="toml",
    show_default=True,
    help="Output format.",
)
@click.pass_context
@handle_cli_errors
def show(ctx: click.Context, section: str | None, output_format: str) -> None:
    """Show the effective configuration."""
    conf = _load(ctx)
    options = conf.get()
    if section is not None:
        if section not in options:
            raise UnknownSectionError(section)
        options = {section: options[section]}

    if output_format == "json":
        click.echo(json.dumps(options, indent=2))
    elif output_format == "ini":
        click.echo(IniConfigStore().dumps(options), nl=False)
    else:
        click.echo(TomlConfigStore().dumps(options), nl=False)


@cli.command()
@click.argument("key")
@click.argument("section", required=False, default="main")
@click.pass_context
@handle_cli_errors
def get(ctx: click.Context, key: str, section: str) -> None:
    """Print a single configuration value.

    SECTION defaults to "main". Booleans print as true/false, unset values
    print as an empty line.
    """
    value = _load(ctx).get_key(key, section)
    if isinstance(value, bool):
        click.echo("true" if value else "false")
    elif value is None:
        click.echo("")
    else:
        click.echo(value)


@cli.command()
@click.pass_context
def path(ctx: click.Context) -> None:
    """Show where configuration files are looked up."""
    install_root = ctx.obj["install_root"] or get_install_root()
    config_dir = ctx.obj["config_dir"] or resolve_config_dir(install_root)
    paths = ConfigPaths.in_dir(config_dir)

    click.echo(f"Install root:  {install_root}")
    for label, file_path in (
        ("Config:        ", paths.config_file),
        ("Sample:        ", paths.sample_file),
        ("Legacy config: ", paths.legacy_file),
        ("Legacy sample: ", paths.legacy_sample_file),
    ):
        status = "exists" if file_path.exists() else "not created"
        color = "green" if file_path.exists() else "yellow"
        click.echo(f"{label}{file_path}")
        click.echo(f"  Status: {click.style(status, fg=color)}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
