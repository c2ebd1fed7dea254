"""Tests for summarizing a manifest's Play Instant configuration."""

from __future__ import annotations

from pydantic import AnyUrl

from playinstant.commands.manifest.inspect import summarize_manifest
from playinstant.commands.manifest.transform import (
    DEFAULT_ACTIVITY,
    convert_to_instant,
    create_default_manifest,
)


class TestSummarizeManifest:
    def test_installed(self) -> None:
        summary = summarize_manifest(create_default_manifest())

        assert not summary.is_instant
        assert summary.target_sandbox_version is None
        assert summary.main_activities == [DEFAULT_ACTIVITY]
        assert summary.view_hosts == []
        assert summary.default_urls == []

    def test_instant_with_url(self) -> None:
        doc = create_default_manifest()
        assert convert_to_instant(doc, AnyUrl("https://example.com/instant")) is None

        summary = summarize_manifest(doc)

        assert summary.is_instant
        assert summary.view_hosts == ["example.com"]
        assert summary.view_paths == ["/instant"]
        assert summary.default_urls == ["https://example.com/instant"]
