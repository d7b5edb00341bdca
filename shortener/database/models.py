"""Data models for URL shortener."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UrlRecord:
    """Represents a stored (short code, url) pair."""

    code: str
    url: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "url": self.url,
        }
