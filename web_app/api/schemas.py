"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL."""

    url: str = Field(..., description="The URL to shorten", min_length=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    url: str = Field(..., description="The complete short URL")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "http://localhost:3000/aB3_x9"},
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: Optional[str] = Field(None, description="Error message")
