"""Convert an AndroidManifest between the installed and instant app variants.

Instant conversion validates the document step by step and returns the first
failed precondition as a message; it never raises for a malformed manifest.
Mutations applied before a failure are not rolled back, so callers must not
persist a document whose conversion returned an error.
"""

from __future__ import annotations

from pydantic import AnyUrl

from playinstant.formats.android_manifest import (
    ANDROID_NS,
    ANDROID_PREFIX,
    Element,
    ManifestDocument,
    QName,
    android,
)

ACTION = "action"
ACTIVITY = "activity"
APPLICATION = "application"
CATEGORY = "category"
DATA = "data"
INTENT_FILTER = "intent-filter"
MANIFEST = "manifest"
META_DATA = "meta-data"

ACTION_MAIN = "android.intent.action.MAIN"
ACTION_VIEW = "android.intent.action.VIEW"
CATEGORY_BROWSABLE = "android.intent.category.BROWSABLE"
CATEGORY_DEFAULT = "android.intent.category.DEFAULT"
CATEGORY_LAUNCHER = "android.intent.category.LAUNCHER"
DEFAULT_URL = "default-url"
DEFAULT_ACTIVITY = "com.unity3d.player.UnityPlayerActivity"

ATTR_AUTO_VERIFY = android("autoVerify")
ATTR_HOST = android("host")
ATTR_NAME = android("name")
ATTR_PATH = android("path")
ATTR_SCHEME = android("scheme")
ATTR_TARGET_SANDBOX_VERSION = android("targetSandboxVersion")
ATTR_VALUE = android("value")

PRECONDITION_ONE_MANIFEST_ELEMENT = "expect 1 manifest element"
PRECONDITION_MISSING_XMLNS_ANDROID = "missing manifest attribute xmlns:android"
PRECONDITION_INVALID_XMLNS_ANDROID = "invalid value for xmlns:android"
PRECONDITION_ONE_APPLICATION_ELEMENT = "expect 1 application element"
PRECONDITION_ONE_MAIN_ACTIVITY = "expect 1 activity with action MAIN and category LAUNCHER"
ERROR_MULTIPLE_VIEW_INTENT_FILTERS = "more than one VIEW intent-filter"
ERROR_MULTIPLE_DEFAULT_URLS = "more than one meta-data element for default-url"


def create_default_manifest() -> ManifestDocument:
    """Build the minimal manifest Unity generates for an Android player."""
    activity = Element(ACTIVITY, attributes={ATTR_NAME: DEFAULT_ACTIVITY})
    intent_filter = activity.append(Element(INTENT_FILTER))
    intent_filter.append(_element_with_attribute(ACTION, ATTR_NAME, ACTION_MAIN))
    intent_filter.append(_element_with_attribute(CATEGORY, ATTR_NAME, CATEGORY_LAUNCHER))

    manifest = Element(
        MANIFEST,
        namespaces={ANDROID_PREFIX: ANDROID_NS},
        children=[Element(APPLICATION, children=[activity])],
    )
    return ManifestDocument(elements=[manifest])


def convert_to_installed(doc: ManifestDocument) -> None:
    """Strip the instant-only markers from a manifest.

    Removes ``targetSandboxVersion`` and every ``default-url`` meta-data of
    each main activity. View intent filters added for the default URL are
    left in place. Running this on an installed manifest changes nothing.
    """
    for manifest in doc.manifests():
        manifest.remove_attribute(ATTR_TARGET_SANDBOX_VERSION)
        for application in manifest.find_all(APPLICATION):
            for activity in main_activities(application):
                for meta_data in default_url_meta_data(activity):
                    activity.remove(meta_data)


def convert_to_instant(doc: ManifestDocument, url: AnyUrl | None) -> str | None:
    """Convert a manifest to support an instant app build.

    Args:
        doc: The manifest, mutated in place.
        url: The default URL, or None for a URL-less instant app.

    Returns:
        An error message describing the first failed precondition, or None
        on success.
    """
    manifest = _exactly_one(doc.manifests())
    if manifest is None:
        return PRECONDITION_ONE_MANIFEST_ELEMENT

    namespace = manifest.namespaces.get(ANDROID_PREFIX)
    if namespace is None:
        return PRECONDITION_MISSING_XMLNS_ANDROID
    if namespace != ANDROID_NS:
        return PRECONDITION_INVALID_XMLNS_ANDROID

    # Sandbox version 2 is required for instant apps starting with Android Oreo.
    manifest.set(ATTR_TARGET_SANDBOX_VERSION, "2")

    if url is None:
        return None
    return _add_default_url(manifest, url)


def _add_default_url(manifest: Element, url: AnyUrl) -> str | None:
    application = _exactly_one(manifest.find_all(APPLICATION))
    if application is None:
        return PRECONDITION_ONE_APPLICATION_ELEMENT

    activity = _exactly_one(main_activities(application))
    if activity is None:
        return PRECONDITION_ONE_MAIN_ACTIVITY

    error = _update_view_intent_filter(activity, url)
    if error is not None:
        return error
    return _update_default_url_meta_data(activity, url)


def _update_view_intent_filter(activity: Element, url: AnyUrl) -> str | None:
    filters = view_intent_filters(activity)
    if len(filters) > 1:
        return ERROR_MULTIPLE_VIEW_INTENT_FILTERS
    if filters:
        view_filter = filters[0]
        # Existing content is replaced wholesale, not merged.
        view_filter.clear()
    else:
        view_filter = activity.append(Element(INTENT_FILTER))

    # autoVerify asks Android to verify the site association for app links.
    view_filter.set(ATTR_AUTO_VERIFY, "true")
    view_filter.append(_element_with_attribute(ACTION, ATTR_NAME, ACTION_VIEW))
    view_filter.append(_element_with_attribute(CATEGORY, ATTR_NAME, CATEGORY_BROWSABLE))
    view_filter.append(_element_with_attribute(CATEGORY, ATTR_NAME, CATEGORY_DEFAULT))
    view_filter.append(_element_with_attribute(DATA, ATTR_SCHEME, "http"))
    view_filter.append(_element_with_attribute(DATA, ATTR_SCHEME, "https"))
    view_filter.append(_element_with_attribute(DATA, ATTR_HOST, url.host or ""))
    path = url.path
    if path and path != "/":
        view_filter.append(_element_with_attribute(DATA, ATTR_PATH, path))
    return None


def _update_default_url_meta_data(activity: Element, url: AnyUrl) -> str | None:
    elements = default_url_meta_data(activity)
    if len(elements) > 1:
        return ERROR_MULTIPLE_DEFAULT_URLS
    if elements:
        meta_data = elements[0]
        # Only attributes are reset; children survive.
        meta_data.clear_attributes()
    else:
        meta_data = activity.append(Element(META_DATA))

    meta_data.set(ATTR_NAME, DEFAULT_URL)
    meta_data.set(ATTR_VALUE, str(url))
    return None


# ── Queries ───────────────────────────────────────────────────────


def find_main_activities(doc: ManifestDocument) -> list[Element]:
    """All main activities across every manifest/application in the document."""
    return [
        activity
        for manifest in doc.manifests()
        for application in manifest.find_all(APPLICATION)
        for activity in main_activities(application)
    ]


def main_activities(application: Element) -> list[Element]:
    """Activities with an intent-filter holding both MAIN and LAUNCHER."""
    return [
        activity
        for activity in application.find_all(ACTIVITY)
        if any(
            _has_named_child(f, ACTION, ACTION_MAIN)
            and _has_named_child(f, CATEGORY, CATEGORY_LAUNCHER)
            for f in activity.find_all(INTENT_FILTER)
        )
    ]


def view_intent_filters(activity: Element) -> list[Element]:
    return [f for f in activity.find_all(INTENT_FILTER) if _has_named_child(f, ACTION, ACTION_VIEW)]


def default_url_meta_data(activity: Element) -> list[Element]:
    return [m for m in activity.find_all(META_DATA) if m.get(ATTR_NAME) == DEFAULT_URL]


def _has_named_child(element: Element, tag: str, name: str) -> bool:
    return any(child.get(ATTR_NAME) == name for child in element.find_all(tag))


def _element_with_attribute(tag: str, name: QName, value: str) -> Element:
    element = Element(tag)
    element.set(name, value)
    return element


def _exactly_one(elements: list[Element]) -> Element | None:
    """The single element, or None for zero or several."""
    return elements[0] if len(elements) == 1 else None
