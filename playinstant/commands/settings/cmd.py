"""CLI commands for the Play Instant build settings."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from playinstant.helpers.console import console

if TYPE_CHECKING:
    from playinstant.commands.settings.config import BuildConfiguration

_config_option = click.option("--config", "config_path", default=None, help="Configuration file path")


def _load(config_path: str | None) -> tuple[Path, BuildConfiguration]:
    from playinstant.commands.settings.config import ConfigError, load_config, resolve_config_path

    path = resolve_config_path(config_path)
    try:
        return path, load_config(path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def settings() -> None:
    """Play Instant build settings (target platform, default URL)."""


@settings.command("show")
@_config_option
@click.option("--package", default=None, help="Android package name")
def show_cmd(config_path: str | None, package: str | None) -> None:
    """Show the current build settings."""
    from playinstant.commands.settings.config import format_define_symbols

    path, config = _load(config_path)

    console.print(f"[bold]Configuration:[/bold] {path}")
    target = "instant" if config.is_play_instant_defined() else "installed"
    console.print(f"  Target: {target}")
    console.print(f"  Default URL: {config.get_instant_url(package) or '-'}")
    console.print(f"  Define symbols: {format_define_symbols(config.scripting_define_symbols) or '-'}")


@settings.command()
@_config_option
@click.argument("symbols", required=False)
def symbols(config_path: str | None, symbols: str | None) -> None:
    """Print or replace the scripting define symbols, e.g. "FOO;BAR"."""
    from playinstant.commands.settings.config import (
        format_define_symbols,
        parse_define_symbols,
        save_config,
    )

    path, config = _load(config_path)
    if symbols is not None:
        config.scripting_define_symbols = parse_define_symbols(symbols)
        save_config(config, path)
    click.echo(format_define_symbols(config.scripting_define_symbols))


@settings.command()
@click.argument("target", type=click.Choice(["instant", "installed"]))
@_config_option
@click.option("--url", default=None, help="Default URL (https) for the instant app")
@click.option("--package", default=None, help="Android package name the URL is stored under")
@click.option("--manifest", "manifest_path", default=None, help="AndroidManifest.xml to update")
def select(
    target: str,
    config_path: str | None,
    url: str | None,
    package: str | None,
    manifest_path: str | None,
) -> None:
    """Select the instant or installed build target."""
    from playinstant.commands.manifest.updater import DEFAULT_MANIFEST_PATH
    from playinstant.commands.settings.config import save_config
    from playinstant.commands.settings.platform import select_installed, select_instant
    from playinstant.formats.android_manifest import ManifestParseError
    from playinstant.helpers.urls import InvalidUrlError

    path, config = _load(config_path)
    manifest = Path(manifest_path) if manifest_path else DEFAULT_MANIFEST_PATH

    def on_progress(msg: str) -> None:
        console.print(f"  {msg}")

    try:
        if target == "installed":
            select_installed(config, manifest, on_progress=on_progress)
            error = None
        else:
            error = select_instant(config, package, manifest, url, on_progress=on_progress)
    except InvalidUrlError as e:
        raise click.ClickException(f"Invalid Default URL: {e}") from e
    except ManifestParseError as e:
        raise click.ClickException(str(e)) from e
    if error is not None:
        raise click.ClickException(error)

    save_config(config, path)
    console.print(f"[green]Build target set to {target}[/green]")
