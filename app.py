#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are handled concurrently on one event loop (FastAPI +
asyncpg connection pool) in a single uvicorn process.

Usage:
    python app.py

Environment variables:
    STORAGE_BACKEND - 'postgres' (default) or 'memory'
    DATABASE_URL - PostgreSQL connection URL
    BASE_URL - Base URL for short links
    HOST / PORT - Address to listen on
    REQUEST_TIMEOUT_SECONDS - Per-request deadline (default 30)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.database import create_store
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    logger.info(f"Using {config.storage_backend} storage backend")
    store = create_store(
        backend=config.storage_backend,
        database_url=config.database_url,
        code_length=config.short_code_length,
        pool_max_size=config.db_pool_max_size,
        logger=logger,
    )
    # The store owns the pool from here on; it is closed even if startup fails.
    try:
        await store.initialize()

        generator = ShortCodeGenerator(default_length=config.short_code_length)
        app.state.service = URLShortenerService(
            store=store,
            short_code_generator=generator,
            logger=logger,
            max_collision_retries=config.max_collision_retries,
            request_timeout_seconds=config.request_timeout_seconds,
        )

        logger.info("Service started successfully")

        yield
    finally:
        logger.info("Shutting down URL shortener service...")
        await store.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    # Service is created in lifespan once the event loop is running
    app = create_app(service_instance=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
