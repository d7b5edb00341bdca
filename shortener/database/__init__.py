"""Storage layer for URL shortener."""

from .base import URLStoreBase
from .memory import InMemoryURLStore
from .postgres import PostgresURLStore
from .models import UrlRecord
from .factory import create_store

__all__ = ["URLStoreBase", "InMemoryURLStore", "PostgresURLStore", "UrlRecord", "create_store"]
