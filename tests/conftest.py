"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from shortener.database.memory import InMemoryURLStore
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def store(logger) -> InMemoryURLStore:
    """Create in-memory store instance."""
    return InMemoryURLStore(logger=logger)


@pytest.fixture
def service(store, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config() -> Config:
    """Create test configuration."""
    return Config(
        storage_backend="memory",
        base_url="http://testserver",
    )


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
