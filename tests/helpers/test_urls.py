"""Tests for playinstant/helpers/urls.py."""

import pytest

from playinstant.helpers.urls import InvalidUrlError, parse_instant_url, parse_url


class TestParseInstantUrl:
    def test_blank_means_no_url(self) -> None:
        assert parse_instant_url(None) is None
        assert parse_instant_url("") is None
        assert parse_instant_url("   ") is None

    def test_valid_url_is_stripped(self) -> None:
        url = parse_instant_url("  https://example.com/instant  ")
        assert url is not None
        assert url.host == "example.com"
        assert url.path == "/instant"
        assert str(url) == "https://example.com/instant"

    def test_scheme_is_case_insensitive(self) -> None:
        url = parse_instant_url("HTTPS://example.com/")
        assert url is not None
        assert url.scheme == "https"

    def test_http_rejected(self) -> None:
        with pytest.raises(InvalidUrlError, match='The URL scheme should be "https"'):
            parse_instant_url("http://example.com/")

    def test_malformed_rejected(self) -> None:
        with pytest.raises(InvalidUrlError, match="The URL is invalid"):
            parse_instant_url("not a url")

    def test_missing_host_rejected(self) -> None:
        with pytest.raises(InvalidUrlError):
            parse_instant_url("https://")


class TestParseUrl:
    def test_blank_means_no_url(self) -> None:
        assert parse_url(None) is None
        assert parse_url("  ") is None

    def test_http_accepted(self) -> None:
        url = parse_url("http://example.com/game")
        assert url is not None
        assert url.scheme == "http"
        assert url.host == "example.com"

    def test_malformed_rejected(self) -> None:
        with pytest.raises(InvalidUrlError, match="The URL is invalid"):
            parse_url("not a url")
