"""Shared test fixtures for playinstant tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from playinstant.formats.android_manifest import ANDROID_NS

MAIN_INTENT_FILTER = """\
<intent-filter>
  <action android:name="android.intent.action.MAIN" />
  <category android:name="android.intent.category.LAUNCHER" />
</intent-filter>"""

VIEW_INTENT_FILTER = """\
<intent-filter>
  <action android:name="android.intent.action.VIEW" />
  <data android:scheme="myapp" />
</intent-filter>"""

DEFAULT_URL_META_DATA = '<meta-data android:name="default-url" android:value="https://old.example.com/" />'


def make_activity(*body: str, name: str = ".MainActivity") -> str:
    """Helper to build an <activity> element from raw child XML."""
    return f'<activity android:name="{name}">{"".join(body)}</activity>'


def make_manifest_xml(
    *activities: str,
    namespace: str | None = ANDROID_NS,
    application: bool = True,
) -> str:
    """Helper to build manifest XML with the given activities."""
    xmlns = f' xmlns:android="{namespace}"' if namespace is not None else ""
    inner = f"<application>{''.join(activities)}</application>" if application else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<manifest{xmlns} package="com.example.game">{inner}</manifest>'
    )


@pytest.fixture
def main_activity_xml() -> str:
    return make_activity(MAIN_INTENT_FILTER)


@pytest.fixture
def manifest_file(tmp_path: Path, main_activity_xml: str) -> Path:
    """An on-disk manifest with a single main activity."""
    path = tmp_path / "AndroidManifest.xml"
    path.write_text(make_manifest_xml(main_activity_xml))
    return path
