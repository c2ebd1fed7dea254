"""Apply manifest conversions to AndroidManifest.xml files on disk."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from pydantic import AnyUrl

from playinstant.commands.manifest.transform import (
    convert_to_installed,
    convert_to_instant,
    create_default_manifest,
)
from playinstant.commands.settings.config import BuildConfiguration
from playinstant.formats.android_manifest import load_manifest, save_manifest
from playinstant.helpers.urls import parse_url

# Project-level manifest that Unity merges into every Android build.
DEFAULT_MANIFEST_PATH = Path("Assets/Plugins/Android/AndroidManifest.xml")

# Location of the merged manifest inside a generated Gradle project.
GRADLE_MANIFEST_PATH = Path("src/main/AndroidManifest.xml")


def switch_to_instant(
    manifest_path: Path,
    url: AnyUrl | None,
    on_progress: Callable[[str], None] | None = None,
) -> str | None:
    """Convert a manifest file to target an instant app.

    A missing file is created from the default manifest. The file is only
    written when the conversion succeeds.

    Returns:
        An error message, or None on success.
    """
    progress = on_progress or (lambda _msg: None)

    if manifest_path.exists():
        progress(f"Loading existing file {manifest_path}")
        doc = load_manifest(manifest_path)
    else:
        progress("Creating new manifest file")
        doc = create_default_manifest()

    error = convert_to_instant(doc, url)
    if error is not None:
        return error

    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    save_manifest(doc, manifest_path)
    progress(f"Successfully updated {manifest_path}")
    return None


def switch_to_installed(
    manifest_path: Path,
    on_progress: Callable[[str], None] | None = None,
) -> None:
    """Convert a manifest file back to an installed app, if it exists."""
    progress = on_progress or (lambda _msg: None)

    if not manifest_path.exists():
        progress(f"Nothing to do for {manifest_path} since file does not exist")
        return

    progress(f"Loading existing file {manifest_path}")
    doc = load_manifest(manifest_path)
    convert_to_installed(doc)
    save_manifest(doc, manifest_path)
    progress(f"Successfully updated {manifest_path}")


def update_gradle_project(
    project_dir: Path,
    config: BuildConfiguration,
    package: str | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> str | None:
    """Update the merged manifest of a generated Gradle project.

    Does nothing unless the Play Instant symbol is defined. The configured
    default URL for ``package`` is applied when present.

    Returns:
        An error message, or None on success or when skipped.
    """
    progress = on_progress or (lambda _msg: None)

    if not config.is_play_instant_defined():
        progress("Play Instant is not enabled, skipping manifest update")
        return None

    manifest_path = project_dir / GRADLE_MANIFEST_PATH
    progress(f"Updating manifest for Play Instant: {manifest_path}")

    # Already validated when it was stored; any parseable URL is applied.
    url = parse_url(config.get_instant_url(package))
    doc = load_manifest(manifest_path)
    error = convert_to_instant(doc, url)
    if error is not None:
        return f"Error updating AndroidManifest.xml: {error}"

    save_manifest(doc, manifest_path)
    return None
