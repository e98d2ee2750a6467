"""Tests for configuration helpers."""

from photo_kiosk.config import Settings, parse_cors_origins


def test_parse_cors_origins_wildcard_and_lists() -> None:
    assert parse_cors_origins(None) == ["*"]
    assert parse_cors_origins("") == ["*"]
    assert parse_cors_origins(" * ") == ["*"]
    assert parse_cors_origins("http://a.test, http://b.test,") == [
        "http://a.test",
        "http://b.test",
    ]


def test_base_url_prefers_public_url() -> None:
    assert Settings(public_base_url="https://kiosk.example/").base_url == (
        "https://kiosk.example"
    )
    assert Settings(public_base_url=None, port=8080).base_url == (
        "http://localhost:8080"
    )
