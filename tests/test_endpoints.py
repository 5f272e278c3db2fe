"""
Tests for the HTTP surface: POST /shorten and GET /{short_code}.
"""

import re

import pytest

from shortener.api.endpoints import build_short_url, get_url_service, header_safe_url
from shortener.services.url_service import URLShorteningService

from conftest import TEST_BASE_URL, UnavailableStore

SHORT_URL_RE = re.compile(re.escape(TEST_BASE_URL) + r"/([0-9a-zA-Z]{8})")


def shorten(client, url):
    return client.post("/shorten", json={"url": url})


class TestShorten:

    def test_created(self, client):
        """POST /shorten returns 201 with the short URL and the echoed URL."""
        response = shorten(client, "https://example.com/page")

        assert response.status_code == 201
        body = response.json()
        assert set(body) == {"short_url", "original_url"}
        assert body["original_url"] == "https://example.com/page"
        assert SHORT_URL_RE.fullmatch(body["short_url"]), body["short_url"]

    @pytest.mark.parametrize("url", ["ftp://bad", "", "example.com", "http"])
    def test_invalid_url(self, client, url):
        """Non-http(s) URLs are rejected with the fixed 400 message."""
        response = shorten(client, url)

        assert response.status_code == 400
        assert response.json() == {"error": "URL must start with http:// or https://"}

    @pytest.mark.parametrize("payload", [{}, {"url": 42}, ["https://example.com"]])
    def test_malformed_body(self, client, payload):
        """Bodies without a string url field get a 400 error body."""
        response = client.post("/shorten", json=payload)

        assert response.status_code == 400
        assert set(response.json()) == {"error"}

    def test_store_failure_is_generic_500(self, app, client):
        """Store failures on create return a generic 500 body."""
        app.dependency_overrides[get_url_service] = (
            lambda: URLShorteningService(UnavailableStore())
        )

        response = shorten(client, "https://example.com")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to store URL mapping"}
        assert "connection refused" not in response.text

    def test_exhaustion_is_500(self, app, client):
        """Running out of candidate codes is reported as 500."""
        service = URLShorteningService(
            app.state.store, generator=lambda: "AAAAAAAA", max_attempts=2
        )
        app.dependency_overrides[get_url_service] = lambda: service

        assert shorten(client, "https://example.com/one").status_code == 201
        response = shorten(client, "https://example.com/two")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate a unique short URL"}


class TestRedirect:

    def test_scenario(self, client):
        """A created code redirects to its URL with 302."""
        created = shorten(client, "https://example.com/page").json()
        code = SHORT_URL_RE.fullmatch(created["short_url"]).group(1)

        response = client.get(f"/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com/page"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/a b",
            "https://example.com/search?q={x}",
            "https://example.com/café",
            "https://example.com/p|q",
            'https://example.com/^"<quoted>"',
        ],
    )
    def test_location_is_the_stored_url(self, client, url):
        """Location carries the stored URL as-is, without percent-encoding."""
        code = SHORT_URL_RE.fullmatch(shorten(client, url).json()["short_url"]).group(1)

        response = client.get(f"/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == url

    @pytest.mark.parametrize(
        "url, location",
        [
            ("https://example.com/a\r\nSet-Cookie: x=1", "https://example.com/a%0D%0ASet-Cookie: x=1"),
            ("https://example.com/日本", "https://example.com/%E6%97%A5%E6%9C%AC"),
        ],
    )
    def test_location_encodes_unsendable_characters(self, client, url, location):
        """Control characters and non-latin-1 text are percent-encoded in Location."""
        code = SHORT_URL_RE.fullmatch(shorten(client, url).json()["short_url"]).group(1)

        response = client.get(f"/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == location
        assert "set-cookie" not in response.headers

    def test_unknown_code(self, client):
        """A code that was never created is 404."""
        response = client.get("/doesnotexist", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found"}

    def test_malformed_code_skips_store(self, app, client):
        """Non-base62 codes are 404 without a database lookup."""
        unavailable = UnavailableStore()
        app.dependency_overrides[get_url_service] = (
            lambda: URLShorteningService(unavailable)
        )

        response = client.get("/not-a-code", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found"}
        assert unavailable.lookup_calls == 0

    def test_store_failure_is_generic_500(self, app, client):
        """Store failures on redirect return a generic 500 body."""
        app.dependency_overrides[get_url_service] = (
            lambda: URLShorteningService(UnavailableStore())
        )

        response = client.get("/Ab3dE6gH", follow_redirects=False)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to query URL mapping"}


class TestHealth:

    def test_health(self, client):
        """Health check reports a reachable database."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_responses_carry_process_time(self, client):
        """Logging middleware adds X-Process-Time."""
        response = client.get("/")

        assert response.status_code == 200
        assert "x-process-time" in response.headers


def test_build_short_url():
    """Base URL and code are joined with exactly one slash."""
    assert build_short_url("http://localhost:8080", "Ab3dE6gH") == "http://localhost:8080/Ab3dE6gH"
    assert build_short_url("https://sho.rt/", "Ab3dE6gH") == "https://sho.rt/Ab3dE6gH"


def test_header_safe_url():
    """Only characters a header value cannot carry are percent-encoded."""
    assert header_safe_url("https://example.com/a b?q={x}|é") == "https://example.com/a b?q={x}|é"
    assert header_safe_url("https://example.com/\x7f\x85\t") == "https://example.com/%7F%C2%85%09"
    assert header_safe_url("https://example.com/€") == "https://example.com/%E2%82%AC"
