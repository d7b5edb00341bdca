"""Abstract base class for URL store implementations."""

from abc import ABC, abstractmethod
from typing import Optional


class URLStoreBase(ABC):
    """Abstract base class for URL store operations.

    A store owns the record set. Every record binds one short code to one URL:
    codes are unique (primary key) and URLs are unique, so a given long URL is
    only ever associated with a single code.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Connection string (ignored by in-process stores)
        """
        self.db_config = db_config

    @abstractmethod
    async def put(self, short_code: str, original_url: str) -> str:
        """Insert a record, resolving URL conflicts to the existing code.

        Args:
            short_code: Proposed short code
            original_url: The original long URL

        Returns:
            The code bound to ``original_url``: ``short_code`` when inserted,
            or the pre-existing code when the URL was already stored

        Raises:
            CodeCollisionError: If ``short_code`` is bound to a different URL
            InternalError: If the backend fails
        """
        pass

    @abstractmethod
    async def get(self, short_code: str) -> str:
        """Get the URL bound to a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The stored URL, unchanged

        Raises:
            NotFoundError: If no record has that code
            InternalError: If the backend fails
        """
        pass

    @abstractmethod
    async def find_code(self, original_url: str) -> Optional[str]:
        """Get the code bound to a URL, if any.

        Args:
            original_url: The original long URL

        Returns:
            Short code or None
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored records."""
        pass

    async def initialize(self) -> None:
        """Prepare backing storage (e.g., create tables). No-op by default."""
        return None

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass
