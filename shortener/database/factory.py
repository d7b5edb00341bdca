"""Store construction from configuration."""

import logging
from typing import Optional

from .base import URLStoreBase
from .memory import InMemoryURLStore
from .postgres import PostgresURLStore


def create_store(
    backend: str,
    database_url: Optional[str] = None,
    code_length: int = 6,
    pool_max_size: int = 10,
    logger: Optional[logging.Logger] = None,
) -> URLStoreBase:
    """Create the configured store.

    Args:
        backend: 'postgres' or 'memory'
        database_url: Connection URL (postgres only)
        code_length: Short code length, fixes the id column width
        pool_max_size: Maximum connection pool size (postgres only)
        logger: Optional logger

    Returns:
        Store instance (not yet initialized)
    """
    if backend == "memory":
        return InMemoryURLStore(logger=logger)

    if backend == "postgres":
        if not database_url:
            raise ValueError("database_url is required for the postgres backend")
        return PostgresURLStore(
            db_config=database_url,
            code_length=code_length,
            pool_max_size=pool_max_size,
            logger=logger,
        )

    raise ValueError(f"Unknown storage backend: {backend}")
