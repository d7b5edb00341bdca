"""Validation utilities for URL shortener."""

from typing import Tuple

from ..shortcode import ShortCodeGenerator


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Only structural checks are made: the value must be a non-empty string.
    The URL itself is stored and returned verbatim.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(url, str):
        return False, "URL must be a string"

    if not url:
        return False, "URL is required"

    return True, ""


def is_valid_short_code(short_code: str, length: int = 6) -> Tuple[bool, str]:
    """Validate a short code.

    Args:
        short_code: The short code to validate
        length: Expected length of short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) != length:
        return False, f"Short code must be exactly {length} characters"

    if not ShortCodeGenerator.is_valid_format(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    return True, ""
