"""
MCP Import Module

Import pipeline for MCP servers published by external registries.

Components:
- dispatcher: request -> normalized server records
- validation: batch and catalog checks
- executor: create / update / skip per server
- results: batch response aggregation
- service: the pipeline as one service
"""

from .catalog import CatalogEntry, EndpointSpec, InMemoryCatalog, McpCatalog
from .dispatcher import ImportDispatcher, SourceKind
from .executor import ImportExecutor, build_endpoint_spec, select_items
from .models import ImportRequest, ImportResponse, ImportResult, ValidationItem, ValidationResult
from .results import ImportResultAggregator
from .service import McpImportService, get_import_service
from .validation import CatalogValidationService, ValidationService

__all__ = [
    "CatalogEntry",
    "CatalogValidationService",
    "EndpointSpec",
    "ImportDispatcher",
    "ImportExecutor",
    "ImportRequest",
    "ImportResponse",
    "ImportResult",
    "ImportResultAggregator",
    "InMemoryCatalog",
    "McpCatalog",
    "McpImportService",
    "SourceKind",
    "ValidationItem",
    "ValidationResult",
    "ValidationService",
    "build_endpoint_spec",
    "get_import_service",
    "select_items"
]
