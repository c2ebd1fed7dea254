"""CLI entry point for playinstant."""

from __future__ import annotations

import click
from dotenv import load_dotenv

from playinstant.commands.manifest.cmd import manifest
from playinstant.commands.settings.cmd import settings

load_dotenv()


@click.group()
@click.version_option(version="0.1.0", prog_name="playinstant")
def cli() -> None:
    """Prepare Android manifests for Google Play Instant builds."""


cli.add_command(manifest)
cli.add_command(settings)


if __name__ == "__main__":
    cli()
