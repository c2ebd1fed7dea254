"""Validation of the default URL entered for an instant app."""

from __future__ import annotations

from pydantic import AnyUrl, ValidationError


class InvalidUrlError(Exception):
    """Raised when a default URL is rejected."""


def parse_url(text: str | None) -> AnyUrl | None:
    """Parse a stored default URL without scheme or host checks.

    Blank input yields None.

    Raises:
        InvalidUrlError: If the URL is malformed.
    """
    text = (text or "").strip()
    if not text:
        return None

    try:
        return AnyUrl(text)
    except ValidationError as e:
        detail = e.errors()[0]["msg"] if e.errors() else str(e)
        raise InvalidUrlError(f"The URL is invalid: {detail}") from e


def parse_instant_url(text: str | None) -> AnyUrl | None:
    """Parse a user-supplied default URL.

    Blank input means a URL-less instant app and yields None.

    Raises:
        InvalidUrlError: If the URL is malformed, not https, or has no host.
    """
    url = parse_url(text)
    if url is None:
        return None

    if url.scheme.lower() != "https":
        raise InvalidUrlError('The URL scheme should be "https"')
    if not url.host:
        raise InvalidUrlError("If a URL is provided, the host must be specified")
    return url
