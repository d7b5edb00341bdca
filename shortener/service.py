"""Business logic service for URL shortener."""

import asyncio
import logging
from typing import Optional, Dict, Awaitable, TypeVar

from .shortcode import ShortCodeGenerator
from .database.base import URLStoreBase
from .errors import (
    ShortenerError,
    CodeCollisionError,
    NotFoundError,
    MalformedError,
    RequestTimeoutError,
    InternalError,
)
from .common.validators import is_valid_url, is_valid_short_code

T = TypeVar("T")


class URLShortenerService:
    """Service layer for URL shortening business logic.

    The service keeps no state of its own between calls: the store is the
    single source of truth for every (code, url) binding.
    """

    def __init__(
        self,
        store: URLStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
        request_timeout_seconds: Optional[float] = 30.0,
    ):
        """Initialize URL shortener service.

        Args:
            store: Store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Maximum generate-and-insert attempts per request
            request_timeout_seconds: Per-operation deadline (None or 0 disables it)
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self.request_timeout_seconds = request_timeout_seconds

    async def shorten(self, original_url: str) -> str:
        """Create (or look up) the short code for a URL.

        Shortening the same URL again returns the code it already has.

        Args:
            original_url: The original long URL

        Returns:
            Short code bound to the URL

        Raises:
            MalformedError: If the URL is not a non-empty string
            RequestTimeoutError: If the deadline is exceeded
            InternalError: If retries are exhausted or the store fails
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise MalformedError(f"Invalid URL: {error}")

        return await self._with_deadline(self._shorten(original_url), "shorten")

    async def resolve(self, short_code: str) -> str:
        """Get the original URL for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            Original URL

        Raises:
            NotFoundError: If the code is unknown
            RequestTimeoutError: If the deadline is exceeded
            InternalError: If the store fails
        """
        is_valid, _ = is_valid_short_code(short_code, self.generator.default_length)
        if not is_valid:
            # A code of the wrong shape can never have been issued.
            self.logger.info(f"Short code not found: {short_code}")
            raise NotFoundError(short_code)

        try:
            original_url = await self._with_deadline(self.store.get(short_code), "resolve")
        except NotFoundError:
            self.logger.info(f"Short code not found: {short_code}")
            raise

        self.logger.debug(f"Resolved URL: {short_code} -> {original_url}")
        return original_url

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.store.health_check()

        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def _shorten(self, original_url: str) -> str:
        """Generate-and-insert loop with bounded retries on code collision."""
        for attempt in range(1, self.max_collision_retries + 1):
            code = self.generator.generate()
            try:
                stored_code = await self.store.put(code, original_url)
            except CodeCollisionError:
                self.logger.warning(
                    f"Short code collision on attempt {attempt}/{self.max_collision_retries}: {code}"
                )
                continue

            if stored_code != code:
                self.logger.info(f"Reused existing short URL: {stored_code} -> {original_url}")
            else:
                self.logger.info(f"Created short URL: {stored_code} -> {original_url}")
            return stored_code

        self.logger.error(
            f"Unable to generate unique short code after {self.max_collision_retries} attempts"
        )
        raise InternalError("Unable to generate unique short code")

    async def _with_deadline(self, operation: Awaitable[T], name: str) -> T:
        """Run a store operation under the request deadline.

        Expiry cancels the pending store call; stores only ever commit a
        record atomically, so nothing partial is left behind.
        """
        try:
            if self.request_timeout_seconds:
                return await asyncio.wait_for(operation, timeout=self.request_timeout_seconds)
            return await operation
        except asyncio.TimeoutError as e:
            self.logger.warning(
                f"Operation '{name}' exceeded {self.request_timeout_seconds}s deadline"
            )
            raise RequestTimeoutError(
                f"Request exceeded {self.request_timeout_seconds}s deadline"
            ) from e
        except ShortenerError:
            raise
        except Exception as e:
            self.logger.exception(f"Unexpected error during '{name}': {e}")
            raise InternalError("Internal error") from e

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
