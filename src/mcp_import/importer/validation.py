"""
MCP Import Validation

Validation of candidate servers before they are written to the catalog.
"""

from abc import ABC, abstractmethod

from ..registry.records import McpServerRecord
from .catalog import McpCatalog
from .models import STATUS_INVALID, STATUS_VALID, ValidationItem, ValidationResult


class ValidationService(ABC):
    """Checks a batch of servers against each other and the catalog."""

    @abstractmethod
    def validate(self, namespace: str, servers: list[McpServerRecord]) -> ValidationResult:
        """Validate a batch of servers for import into a namespace."""


class CatalogValidationService(ValidationService):
    """Validates required fields, in-batch duplicates and catalog conflicts."""

    def __init__(self, catalog: McpCatalog):
        self.catalog = catalog

    def validate(self, namespace: str, servers: list[McpServerRecord]) -> ValidationResult:
        result = ValidationResult(total_count=len(servers))
        if not servers:
            result.errors.append("No servers found to import")
            return result

        seen_ids: set[str] = set()
        seen_names: set[str] = set()

        for server in servers:
            item = ValidationItem(server=server, server_id=server.id, server_name=server.name)
            errors = self._check_required(server)

            duplicate = False
            if server.id and server.id.strip():
                if server.id in seen_ids:
                    errors.append(f"Duplicate server id in import batch: {server.id}")
                    duplicate = True
                seen_ids.add(server.id)
            if server.name and server.name.strip():
                if server.name in seen_names:
                    errors.append(f"Duplicate server name in import batch: {server.name}")
                    duplicate = True
                seen_names.add(server.name)
            if duplicate:
                result.duplicate_count += 1

            if server.id and server.id.strip():
                item.exists = self.catalog.get(namespace, server.id) is not None
            if server.name and server.name.strip():
                named = self.catalog.find_by_name(namespace, server.name)
                if named is not None and named.basic_info.id != server.id:
                    errors.append(f"Server name '{server.name}' is already used by {named.basic_info.id}")

            item.errors = errors
            if errors:
                item.status = STATUS_INVALID
                result.invalid_count += 1
                label = server.name or server.id or "<unnamed>"
                result.errors.extend(f"{label}: {error}" for error in errors)
            else:
                item.status = STATUS_VALID
                result.valid_count += 1
            result.items.append(item)

        result.is_valid = result.invalid_count == 0
        return result

    def _check_required(self, server: McpServerRecord) -> list[str]:
        errors = []
        if not server.id or not server.id.strip():
            errors.append("Server id is required")
        if not server.name or not server.name.strip():
            errors.append("Server name is required")
        if not server.protocol or not server.protocol.strip():
            errors.append("Server protocol is required")
        return errors
