"""Switch a project between the installed and instant build targets."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from playinstant.commands.manifest.updater import switch_to_installed, switch_to_instant
from playinstant.commands.settings.config import BuildConfiguration
from playinstant.helpers.urls import parse_instant_url


def select_instant(
    config: BuildConfiguration,
    package: str | None,
    manifest_path: Path,
    url_text: str | None,
    on_progress: Callable[[str], None] | None = None,
) -> str | None:
    """Target an instant app build.

    The config is only changed when the manifest update succeeds.

    Raises:
        InvalidUrlError: If ``url_text`` is not an acceptable default URL.

    Returns:
        An error message, or None on success.
    """
    url_text = (url_text or "").strip()
    url = parse_instant_url(url_text)

    error = switch_to_instant(manifest_path, url, on_progress=on_progress)
    if error is not None:
        return f"Error updating AndroidManifest.xml: {error}"

    config.define_play_instant()
    config.set_instant_url(package, url_text)
    return None


def select_installed(
    config: BuildConfiguration,
    manifest_path: Path,
    on_progress: Callable[[str], None] | None = None,
) -> None:
    """Target a regular installed app build."""
    config.undefine_play_instant()
    switch_to_installed(manifest_path, on_progress=on_progress)
