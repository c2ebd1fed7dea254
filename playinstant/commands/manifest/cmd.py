"""CLI commands for converting AndroidManifest.xml files."""

from __future__ import annotations

from pathlib import Path

import click

from playinstant.helpers.console import console


def _progress(msg: str) -> None:
    console.print(f"  {msg}")


@click.group()
def manifest() -> None:
    """Convert AndroidManifest.xml between installed and instant apps."""


@manifest.command()
@click.option("-o", "--output", default=None, help="Output file (prints to stdout if omitted)")
def create(output: str | None) -> None:
    """Write a minimal Unity AndroidManifest.xml."""
    from playinstant.commands.manifest.transform import create_default_manifest
    from playinstant.formats.android_manifest import save_manifest, serialize_manifest

    doc = create_default_manifest()
    if output is None:
        click.echo(serialize_manifest(doc), nl=False)
        return

    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    save_manifest(doc, out)
    console.print(f"[green]Manifest written to {out}[/green]")


@manifest.command()
@click.argument("manifest_path", type=click.Path(dir_okay=False))
@click.option("--url", default=None, help="Default URL (https) used to launch the instant app")
def instant(manifest_path: str, url: str | None) -> None:
    """Convert a manifest to an instant app, creating it if missing."""
    from playinstant.commands.manifest.updater import switch_to_instant
    from playinstant.formats.android_manifest import ManifestParseError
    from playinstant.helpers.urls import InvalidUrlError, parse_instant_url

    try:
        parsed = parse_instant_url(url)
        console.print(f"[bold]Converting to instant:[/bold] {manifest_path}")
        error = switch_to_instant(Path(manifest_path), parsed, on_progress=_progress)
    except (InvalidUrlError, ManifestParseError) as e:
        raise click.ClickException(str(e)) from e

    if error is not None:
        raise click.ClickException(f"Error updating AndroidManifest.xml: {error}")
    console.print("[green]Manifest now targets an instant app[/green]")


@manifest.command()
@click.argument("manifest_path", type=click.Path(dir_okay=False))
def installed(manifest_path: str) -> None:
    """Convert a manifest back to an installed app."""
    from playinstant.commands.manifest.updater import switch_to_installed
    from playinstant.formats.android_manifest import ManifestParseError

    console.print(f"[bold]Converting to installed:[/bold] {manifest_path}")
    try:
        switch_to_installed(Path(manifest_path), on_progress=_progress)
    except ManifestParseError as e:
        raise click.ClickException(str(e)) from e
    console.print("[green]Manifest now targets an installed app[/green]")


@manifest.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False))
def show(manifest_path: str) -> None:
    """Show the Play Instant configuration of a manifest."""
    from playinstant.commands.manifest.inspect import print_summary, summarize_manifest
    from playinstant.formats.android_manifest import ManifestParseError, load_manifest

    try:
        doc = load_manifest(Path(manifest_path))
    except ManifestParseError as e:
        raise click.ClickException(str(e)) from e
    print_summary(summarize_manifest(doc))


@manifest.command()
@click.argument("project_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--config", "config_path", default=None, help="Configuration file path")
@click.option("--package", default=None, help="Android package name the default URL is stored under")
def gradle(project_dir: str, config_path: str | None, package: str | None) -> None:
    """Update the merged manifest of a generated Gradle project."""
    from playinstant.commands.manifest.updater import update_gradle_project
    from playinstant.commands.settings.config import ConfigError, load_config, resolve_config_path
    from playinstant.formats.android_manifest import ManifestParseError
    from playinstant.helpers.urls import InvalidUrlError

    try:
        config = load_config(resolve_config_path(config_path))
        error = update_gradle_project(Path(project_dir), config, package, on_progress=_progress)
    except (ConfigError, InvalidUrlError, ManifestParseError, FileNotFoundError) as e:
        raise click.ClickException(str(e)) from e
    if error is not None:
        raise click.ClickException(error)
