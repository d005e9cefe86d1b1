from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click

from .core import parser, store
from .core.util import HomeDirectoryError, default_config_path
from . import __version__


@dataclass
class UpdateResult:
    host: str
    old_hostname: str
    new_hostname: str
    changed: bool

    def message(self) -> str:
        if not self.changed:
            return f"No change: '{self.host}' hostname is already '{self.new_hostname}'."
        return f"Modified '{self.host}' hostname from '{self.old_hostname}' to '{self.new_hostname}'."


def resolve_config_path(custom_path: Optional[Path]) -> Path:
    if custom_path is not None:
        return custom_path
    try:
        return default_config_path()
    except HomeDirectoryError as exc:
        raise click.ClickException(f"Failed to find path for config file. {exc}")


def update_config(
    host: str,
    new_hostname: str,
    config_path: Path,
    backup: bool = False,
    keep_extra: bool = False,
) -> UpdateResult:
    """Replace the HostName of ``host`` in config_path.

    The file is only rewritten when the hostname actually changes.
    """
    try:
        lines = store.read_config_lines(config_path)
    except OSError as exc:
        raise click.ClickException(f"Problem reading config file: {config_path}: {exc.strerror or exc}")

    try:
        parsed = parser.split_lines_on_host(lines, host)
    except parser.HostNotFoundError as exc:
        raise click.ClickException(str(exc))

    old_hostname = parsed.hostname
    if old_hostname == new_hostname:
        return UpdateResult(host, old_hostname, new_hostname, changed=False)

    if parsed.extra_options and not keep_extra:
        dropped = ", ".join(line.strip() for line in parsed.extra_options)
        click.echo(f"Warning: dropping unrecognized lines from '{host}' block: {dropped}", err=True)

    parsed.hostname = new_hostname
    try:
        if backup:
            snapshot = store.backup_config(config_path)
            click.echo(f"Backup created at {snapshot}")
        store.write_config_lines(config_path, parser.render(parsed, keep_extra=keep_extra))
    except OSError as exc:
        raise click.ClickException(f"Error while writing new config file: {exc.strerror or exc}")
    return UpdateResult(host, old_hostname, new_hostname, changed=True)


@click.command()
@click.version_option(__version__)
@click.option("-h", "--host", required=True, metavar="HOST", help="Name of host in config file")
@click.option("-n", "--hostname", required=True, metavar="HOSTNAME", help="New hostname to replace current one")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    metavar="CONFIG FILE",
    help="Custom path for SSH config file",
)
@click.option("--backup/--no-backup", default=False, help="Copy the config to <config>.bak before rewriting it")
@click.option(
    "--keep-extra/--drop-extra",
    default=False,
    help="Keep directives other than HostName/User/IdentityFile in the rewritten block",
)
def main(host: str, hostname: str, config_path: Optional[Path], backup: bool, keep_extra: bool) -> None:
    """Updates ~/.ssh/config file hostname."""
    path = resolve_config_path(config_path)
    result = update_config(host, hostname, path, backup=backup, keep_extra=keep_extra)
    click.echo(result.message())
