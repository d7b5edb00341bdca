"""In-memory implementation for URL shortener."""

import asyncio
import logging
from typing import Dict, Optional

from .base import URLStoreBase
from ..errors import CodeCollisionError, NotFoundError


class InMemoryURLStore(URLStoreBase):
    """Process-local URL store guarded by a single lock.

    Both indexes are updated inside one critical section with no await in
    between, so an insert is never visible half-done, even if the calling
    task is cancelled while waiting for the lock.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__("memory://")
        self.logger = logger or logging.getLogger(__name__)
        self._url_by_code: Dict[str, str] = {}
        self._code_by_url: Dict[str, str] = {}
        self._lock = asyncio.Lock()

    async def put(self, short_code: str, original_url: str) -> str:
        async with self._lock:
            existing = self._code_by_url.get(original_url)
            if existing is not None:
                self.logger.debug(f"URL already stored under {existing}: {original_url}")
                return existing

            if short_code in self._url_by_code:
                raise CodeCollisionError(short_code)

            self._url_by_code[short_code] = original_url
            self._code_by_url[original_url] = short_code

        self.logger.debug(f"Stored short URL: {short_code} -> {original_url}")
        return short_code

    async def get(self, short_code: str) -> str:
        async with self._lock:
            original_url = self._url_by_code.get(short_code)

        if original_url is None:
            raise NotFoundError(short_code)
        return original_url

    async def find_code(self, original_url: str) -> Optional[str]:
        async with self._lock:
            return self._code_by_url.get(original_url)

    async def count(self) -> int:
        async with self._lock:
            return len(self._url_by_code)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug("In-memory store closed")
