"""
MCP Import Service

This module wires the import pipeline together: dispatch, validation, execution
and result aggregation.
"""

import threading

from ..client import RegistryClient
from ..config import ImportServiceConfig, mcp_logger
from ..registry.transformer import SchemaTransformer
from .catalog import InMemoryCatalog, McpCatalog
from .dispatcher import ImportDispatcher
from .executor import ImportExecutor, select_items
from .models import ImportRequest, ImportResponse, ValidationResult
from .results import ImportResultAggregator
from .validation import CatalogValidationService, ValidationService


class McpImportService:
    """Imports MCP servers from external sources into the catalog."""

    def __init__(self, catalog: McpCatalog,
                 dispatcher: ImportDispatcher | None = None,
                 validation_service: ValidationService | None = None,
                 config: ImportServiceConfig | None = None):
        self.config = config or ImportServiceConfig()
        self.catalog = catalog

        if dispatcher is None:
            transformer = SchemaTransformer()
            dispatcher = ImportDispatcher(RegistryClient(self.config.registry, transformer=transformer), transformer)
        self.dispatcher = dispatcher
        self.validation_service = validation_service or CatalogValidationService(catalog)
        self.executor = ImportExecutor(catalog)
        self.aggregator = ImportResultAggregator()

    def validate_import(self, namespace: str | None, request: ImportRequest) -> ValidationResult:
        """Normalize and validate the servers of a request without importing them."""
        namespace = namespace or self.config.default_namespace
        try:
            servers = self.dispatcher.normalize(request)
            return self.validation_service.validate(namespace, servers)
        except Exception as e:
            mcp_logger.warning(f"Import validation failed: {e}")
            return ValidationResult(is_valid=False, errors=[f"Import validation failed: {e}"])

    def execute_import(self, namespace: str | None, request: ImportRequest) -> ImportResponse:
        """Validate, then import the selected valid servers."""
        namespace = namespace or self.config.default_namespace
        try:
            validation = self.validate_import(namespace, request)

            if not validation.is_valid and not request.skip_invalid:
                return self.aggregator.validation_failed(validation.errors)

            to_import = select_items(validation.items, request.selected_servers)
            if not validation.is_valid and not to_import:
                return self.aggregator.nothing_to_import(validation.errors)

            results = self.executor.execute(namespace, to_import, None, request.override_existing)
            response = self.aggregator.aggregate(results)

            if not validation.is_valid:
                self.aggregator.note_skipped_invalid(response, validation.invalid_count)

            mcp_logger.info(
                f"Imported into {namespace}: {response.success_count} succeeded, "
                f"{response.failed_count} failed, {response.skipped_count} skipped"
            )
            return response

        except Exception as e:
            mcp_logger.error(f"Import execution failed: {e}")
            return self.aggregator.execution_failed(e)


# Global import service instance
_import_service: McpImportService | None = None
_import_service_lock = threading.Lock()


def get_import_service() -> McpImportService:
    """Get the global MCP import service instance."""
    global _import_service
    if _import_service is None:
        # Route handlers run in a thread pool
        with _import_service_lock:
            if _import_service is None:
                _import_service = McpImportService(InMemoryCatalog())
    return _import_service
