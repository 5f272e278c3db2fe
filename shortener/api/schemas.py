"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.

The request URL is a plain string: scheme validation happens in the service
layer so that a bad URL produces the service's 400 error body rather than
pydantic's 422 response.
"""

from pydantic import BaseModel, Field


class ShortenRequest(BaseModel):
    """Request model for URL shortening endpoint."""
    url: str = Field(..., description="The long URL to shorten")


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""
    error: str


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""
    status: str
