"""
MCP Registry Client Module

Paginated HTTP access to external MCP registries.
"""

from .registry_client import PageResult, RegistryClient, build_page_url, extract_next_cursor

__all__ = [
    "PageResult",
    "RegistryClient",
    "build_page_url",
    "extract_next_cursor"
]
