"""
MCP Import Configuration

This module handles configuration models for the registry client and import service.
"""

import os

from pydantic import BaseModel, Field, field_validator

REGISTRY_TOKEN_ENV = "MCP_REGISTRY_TOKEN"


class RegistryClientConfig(BaseModel):
    """Configuration for the MCP registry HTTP client."""

    registry_token: str | None = Field(default=None, description="Bearer token for the registry endpoint")
    connect_timeout: float = Field(default=10.0, description="Connect timeout in seconds")
    read_timeout: float = Field(default=20.0, description="Read / overall request timeout in seconds")
    follow_redirects: bool = Field(default=True, description="Follow HTTP redirects")
    max_pages: int = Field(default=200, description="Upper bound on pages fetched by fetch_all")
    page_size: int = Field(default=30, description="Page size used when fetching all pages")
    user_agent: str = Field(default="mcp-registry-import/1.0", description="User-Agent header value")

    @field_validator('connect_timeout', 'read_timeout')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator('max_pages')
    @classmethod
    def validate_max_pages(cls, v):
        if v < 1:
            raise ValueError("max_pages must be at least 1")
        return v

    def resolve_bearer_token(self) -> str | None:
        """Resolve the bearer token from config, falling back to the environment."""
        token = self.registry_token
        if not token or not token.strip():
            token = os.getenv(REGISTRY_TOKEN_ENV)
        if not token or not token.strip():
            return None
        return token.strip()


class ImportServiceConfig(BaseModel):
    """Configuration for the import service."""

    default_namespace: str = Field(default="public", description="Namespace used when none is given")
    registry: RegistryClientConfig = Field(default_factory=RegistryClientConfig)
