"""Summarize how a manifest is configured for Play Instant."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.table import Table

from playinstant.commands.manifest.transform import (
    ATTR_HOST,
    ATTR_NAME,
    ATTR_PATH,
    ATTR_TARGET_SANDBOX_VERSION,
    ATTR_VALUE,
    DATA,
    default_url_meta_data,
    find_main_activities,
    view_intent_filters,
)
from playinstant.formats.android_manifest import ManifestDocument
from playinstant.helpers.console import console


@dataclass
class ManifestSummary:
    target_sandbox_version: str | None = None
    main_activities: list[str] = field(default_factory=lambda: list[str]())
    view_hosts: list[str] = field(default_factory=lambda: list[str]())
    view_paths: list[str] = field(default_factory=lambda: list[str]())
    default_urls: list[str] = field(default_factory=lambda: list[str]())

    @property
    def is_instant(self) -> bool:
        return self.target_sandbox_version == "2"


def summarize_manifest(doc: ManifestDocument) -> ManifestSummary:
    summary = ManifestSummary()
    for manifest in doc.manifests():
        version = manifest.get(ATTR_TARGET_SANDBOX_VERSION)
        if version is not None:
            summary.target_sandbox_version = version

    for activity in find_main_activities(doc):
        summary.main_activities.append(activity.get(ATTR_NAME) or "<unnamed>")
        for view_filter in view_intent_filters(activity):
            for data in view_filter.find_all(DATA):
                host = data.get(ATTR_HOST)
                if host is not None:
                    summary.view_hosts.append(host)
                path = data.get(ATTR_PATH)
                if path is not None:
                    summary.view_paths.append(path)
        for meta_data in default_url_meta_data(activity):
            summary.default_urls.append(meta_data.get(ATTR_VALUE) or "")
    return summary


def print_summary(summary: ManifestSummary) -> None:
    table = Table(title="AndroidManifest")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Variant", "instant" if summary.is_instant else "installed")
    table.add_row("targetSandboxVersion", summary.target_sandbox_version or "-")
    table.add_row("Main activity", ", ".join(summary.main_activities) or "-")
    table.add_row("VIEW host", ", ".join(summary.view_hosts) or "-")
    table.add_row("VIEW path", ", ".join(summary.view_paths) or "-")
    table.add_row("Default URL", ", ".join(summary.default_urls) or "-")
    console.print(table)
