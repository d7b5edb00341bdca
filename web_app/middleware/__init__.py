"""Middleware for URL shortener web app."""

from .request_log import log_requests

__all__ = ["log_requests"]
