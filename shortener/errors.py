"""Error taxonomy for URL shortener."""


class ShortenerError(Exception):
    """Base class for all URL shortener errors."""

    error_code = "shortener:error"


class CodeCollisionError(ShortenerError):
    """Raised when a generated short code is already bound to a different URL.

    Recovered inside the service by retrying with a fresh code.
    """

    error_code = "shortener:code_collision"

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' is already in use")
        self.short_code = short_code


class NotFoundError(ShortenerError):
    """Raised when no record is bound to a short code."""

    error_code = "shortener:not_found"

    def __init__(self, short_code: str):
        super().__init__(f"Short code '{short_code}' not found")
        self.short_code = short_code


class MalformedError(ShortenerError):
    """Raised when input fails basic structural validation."""

    error_code = "shortener:malformed"


class RequestTimeoutError(ShortenerError):
    """Raised when an operation exceeds the configured deadline."""

    error_code = "shortener:timeout"


class InternalError(ShortenerError):
    """Raised for backend failures, exhausted retries and anything unclassified.

    The message is safe to show to callers; the underlying cause is chained.
    """

    error_code = "shortener:internal"
