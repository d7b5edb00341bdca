"""Tests for API endpoints."""

import logging

import pytest
from httpx import AsyncClient, ASGITransport

from shortener.database.memory import InMemoryURLStore
from shortener.service import URLShortenerService
from tests.fakes import SequenceGenerator, SlowStore
from web_app import create_app


class UnhealthyStore(InMemoryURLStore):
    async def health_check(self) -> bool:
        return False


def make_client(service, config) -> AsyncClient:
    app = create_app(service_instance=service, config=config)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
class TestAPIEndpoints:
    """Test API endpoints."""

    async def test_shorten_url(self, client, sample_urls):
        """Test POST /."""
        response = await client.post("/", json={"url": sample_urls[0]})

        assert response.status_code == 201
        short_url = response.json()["url"]
        assert short_url.startswith("http://testserver/")
        assert len(short_url.rsplit("/", 1)[1]) == 6

    async def test_shorten_same_url_twice(self, client, store, sample_urls):
        """Test re-shortening returns the same short link."""
        first = await client.post("/", json={"url": sample_urls[0]})
        second = await client.post("/", json={"url": sample_urls[0]})

        assert first.json()["url"] == second.json()["url"]
        assert await store.count() == 1

    async def test_shorten_uses_forwarded_headers(self, client, sample_urls):
        """Test short link base from proxy headers."""
        response = await client.post(
            "/",
            json={"url": sample_urls[0]},
            headers={"X-Forwarded-Proto": "https", "X-Forwarded-Host": "sho.rt"},
        )

        assert response.json()["url"].startswith("https://sho.rt/")

    async def test_shorten_with_path_prefix(self, service, config, sample_urls):
        """Test configured path prefix."""
        config.path_prefix = "/s"

        async with make_client(service, config) as client:
            response = await client.post("/", json={"url": sample_urls[0]})

        assert "/s/" in response.json()["url"]

    async def test_shorten_missing_url(self, client):
        """Test body without url field."""
        response = await client.post("/", json={"link": "https://example.com"})

        assert response.status_code == 422
        assert "Malformed request" in response.json()["detail"]
        assert "url" in response.json()["detail"]

    async def test_shorten_invalid_json(self, client):
        """Test unparseable body."""
        response = await client.post(
            "/",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert "Malformed request" in response.json()["detail"]

    async def test_shorten_empty_url(self, client):
        """Test empty url."""
        response = await client.post("/", json={"url": ""})

        assert response.status_code == 422

    async def test_shorten_whitespace_url(self, client, store):
        """Test a whitespace-only url is accepted and stored as given."""
        response = await client.post("/", json={"url": "   "})

        assert response.status_code == 201
        short_code = response.json()["url"].rsplit("/", 1)[1]
        assert await store.get(short_code) == "   "

    async def test_redirect(self, client, sample_urls):
        """Test GET /{code}."""
        create_response = await client.post("/", json={"url": sample_urls[1]})
        short_code = create_response.json()["url"].rsplit("/", 1)[1]

        response = await client.get(f"/{short_code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[1]

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/search?q={x}|y",
            "https://example.com/a b",
            "https://example.com/%7Eu/?x=%20",
        ],
    )
    async def test_redirect_location_is_verbatim(self, client, url):
        """Test Location is the stored URL without re-quoting."""
        create_response = await client.post("/", json={"url": url})
        short_code = create_response.json()["url"].rsplit("/", 1)[1]

        response = await client.get(f"/{short_code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == url

    async def test_redirect_not_found(self, client):
        """Test GET /{code} for nonexistent code."""
        response = await client.get("/zzzzzz", follow_redirects=False)

        assert response.status_code == 404
        assert "zzzzzz" in response.json()["detail"]

    async def test_shorten_timeout(self, config, logger):
        """Test deadline maps to 408 and stores nothing."""
        store = SlowStore(delay=0.5, logger=logger)
        service = URLShortenerService(store=store, logger=logger, request_timeout_seconds=0.05)

        async with make_client(service, config) as client:
            response = await client.post("/", json={"url": "https://example.com"})

        assert response.status_code == 408
        assert await store.count() == 0

    async def test_redirect_timeout(self, config, logger):
        """Test deadline on lookups maps to 408."""
        store = SlowStore(delay=0.5, logger=logger)
        service = URLShortenerService(store=store, logger=logger, request_timeout_seconds=0.05)

        async with make_client(service, config) as client:
            response = await client.get("/abc123", follow_redirects=False)

        assert response.status_code == 408

    async def test_shorten_internal_error(self, config, store, logger):
        """Test exhausted retries map to a generic 500."""
        await store.put("taken1", "https://first.example.com")
        service = URLShortenerService(
            store=store,
            short_code_generator=SequenceGenerator(["taken1"] * 5),
            logger=logger,
        )

        async with make_client(service, config) as client:
            response = await client.post("/", json={"url": "https://second.example.com"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal server error"

    async def test_requests_are_logged(self, client, caplog):
        """Test one access log line per request."""
        caplog.set_level(logging.INFO, logger="url_shortener.web")

        await client.get("/zzzzzz", follow_redirects=False)

        lines = [r for r in caplog.records if r.name == "url_shortener.web"]
        assert len(lines) == 1
        assert lines[0].levelno == logging.INFO
        assert "GET /zzzzzz -> 404" in lines[0].getMessage()

    async def test_server_errors_are_logged_as_warnings(self, config, store, logger, caplog):
        """Test 5xx responses stand out in the access log."""
        caplog.set_level(logging.INFO, logger="url_shortener.web")
        await store.put("taken1", "https://first.example.com")
        service = URLShortenerService(
            store=store,
            short_code_generator=SequenceGenerator(["taken1"] * 5),
            logger=logger,
        )

        async with make_client(service, config) as client:
            await client.post("/", json={"url": "https://second.example.com"})

        lines = [r for r in caplog.records if r.name == "url_shortener.web"]
        assert [r.levelno for r in lines] == [logging.WARNING]
        assert "POST / -> 500" in lines[0].getMessage()

    async def test_health_check(self, client):
        """Test GET /api/health."""
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert "timestamp" in data

    async def test_health_check_unhealthy(self, config, logger):
        """Test unhealthy store yields 503."""
        service = URLShortenerService(store=UnhealthyStore(logger=logger), logger=logger)

        async with make_client(service, config) as client:
            response = await client.get("/api/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
