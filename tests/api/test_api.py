"""Tests for the HTTP API."""

import re
from urllib.parse import urlparse

import pytest

from shortlink.api.dependencies import get_shortener_service
from shortlink.services.exceptions import InternalError, URLCreationError

SHORT_URL_PATTERN = re.compile(r"^http://localhost:5004/[A-Za-z0-9_-]{6}$")


def shorten(client, url):
    response = client.post("/shorten", json={"url": url})
    assert response.status_code == 200, response.text
    return response.json()


class FailingShortenerService:
    """Stand-in service whose store is unavailable."""

    async def create_short_url(self, db, original_url):
        raise URLCreationError("store unavailable")

    async def resolve_short_url(self, db, short_id):
        raise InternalError("store unavailable")

    async def list_history(self, db):
        raise InternalError("store unavailable")


@pytest.mark.api
class TestShortenEndpoint:

    def test_shorten(self, client):
        body = shorten(client, "https://example.com")

        assert body["originalUrl"] == "https://example.com"
        assert SHORT_URL_PATTERN.match(body["shortUrl"])
        assert set(body) == {"originalUrl", "shortUrl"}

    def test_shorten_then_redirect(self, client):
        body = shorten(client, "https://example.com")
        path = urlparse(body["shortUrl"]).path

        response = client.get(path, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "https://example.com"

    def test_same_url_gets_distinct_short_urls(self, client):
        first = shorten(client, "https://example.com/page")
        second = shorten(client, "https://example.com/page")

        assert first["shortUrl"] != second["shortUrl"]
        assert len(client.get("/history").json()) == 2

    @pytest.mark.parametrize("payload", [{}, {"url": ""}, {"url": None}])
    def test_missing_url(self, client, payload):
        response = client.post("/shorten", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}
        assert client.get("/history").json() == []

    def test_no_body(self, client):
        response = client.post("/shorten")

        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}

    def test_malformed_body(self, client):
        response = client.post(
            "/shorten",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_store_failure(self, client, test_app):
        test_app.dependency_overrides[get_shortener_service] = lambda: FailingShortenerService()

        response = client.post("/shorten", json={"url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}


@pytest.mark.api
class TestRedirectEndpoint:

    def test_unknown_id(self, client):
        response = client.get("/abc123", follow_redirects=False)

        assert response.status_code == 404
        assert response.json() == {"error": "URL not found"}

    def test_redirect_follows_to_original(self, client):
        body = shorten(client, "http://testserver/history")
        path = urlparse(body["shortUrl"]).path

        response = client.get(path)

        assert response.status_code == 200
        assert response.json()[0]["originalUrl"] == "http://testserver/history"

    def test_store_failure(self, client, test_app):
        test_app.dependency_overrides[get_shortener_service] = lambda: FailingShortenerService()

        response = client.get("/abc123", follow_redirects=False)

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}


@pytest.mark.api
class TestHistoryEndpoint:

    def test_empty(self, client):
        response = client.get("/history")

        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first(self, client):
        urls = [f"https://example.com/{i}" for i in range(3)]
        created = [shorten(client, url) for url in urls]

        response = client.get("/history")

        assert response.status_code == 200
        history = response.json()
        assert [item["shortUrl"] for item in history] == [
            body["shortUrl"] for body in reversed(created)
        ]
        assert set(history[0]) == {"originalUrl", "shortUrl", "createdAt"}
        timestamps = [item["createdAt"] for item in history]
        assert timestamps == sorted(timestamps, reverse=True)

    def test_store_failure(self, client, test_app):
        test_app.dependency_overrides[get_shortener_service] = lambda: FailingShortenerService()

        response = client.get("/history")

        assert response.status_code == 500
        assert response.json() == {"error": "Server error"}


@pytest.mark.api
class TestServiceEndpoints:

    def test_home(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "POST /shorten" in response.text

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["environment"] == "testing"
        assert body["components"]["database"]["status"] == "healthy"

    def test_api_docs(self, client):
        assert client.get("/api-docs").status_code == 200
        schema = client.get("/api-docs/openapi.json").json()
        assert "/shorten" in schema["paths"]
        assert "/history" in schema["paths"]

    def test_request_id_header(self, client):
        response = client.get("/history")
        assert response.headers.get("x-request-id")

        response = client.get("/history", headers={"X-Request-ID": "req-42"})
        assert response.headers["x-request-id"] == "req-42"

    def test_cors(self, client):
        response = client.get("/history", headers={"Origin": "http://example.org"})
        assert response.headers.get("access-control-allow-origin") == "*"

    def test_unknown_nested_path(self, client):
        response = client.get("/a/b")

        assert response.status_code == 404
        assert "error" in response.json()
