"""
MCP Import Errors

Exception hierarchy for the registry import pipeline.
"""


class McpImportError(Exception):
    """Base class for all import errors."""


class InvalidArgumentError(McpImportError, ValueError):
    """Blank URL, malformed payload or otherwise unusable input."""


class UnsupportedSourceKindError(InvalidArgumentError):
    """Import type is not one of file, json or url."""

    def __init__(self, source_kind):
        self.source_kind = source_kind
        super().__init__(f"Unsupported import type: {source_kind}")


class HttpStatusError(McpImportError):
    """Registry endpoint answered outside the 2xx range."""

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} when fetching {url}")


class ParseError(McpImportError):
    """Response body could not be read as any known registry shape."""


class RecordConversionError(McpImportError):
    """A single registry record could not be mapped to a server record."""


class RemoteUrlError(McpImportError):
    """A remote URL passed validation but could not be decomposed."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        super().__init__(f"Invalid URL: {url}" + (f" ({cause})" if cause else ""))


class CatalogOperationError(McpImportError):
    """Catalog create or update failed for one server."""
