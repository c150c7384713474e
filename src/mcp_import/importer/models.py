"""
MCP Import Models

This module defines the request, validation and result types of an import batch.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ..registry.records import McpServerRecord

STATUS_VALID = "valid"
STATUS_INVALID = "invalid"

RESULT_SUCCESS = "success"
RESULT_FAILED = "failed"
RESULT_SKIPPED = "skipped"

CONFLICT_EXISTING = "existing"

FETCH_ALL_PAGES = -1


class ImportRequest(BaseModel):
    """Request to import MCP servers from a file, a JSON document or a registry URL."""

    model_config = ConfigDict(populate_by_name=True)

    import_type: str | None = Field(
        default=None, validation_alias=AliasChoices("import_type", "importType"),
        description="Source kind: file, json or url"
    )
    data: str | None = Field(default=None, description="Payload text, or the registry URL for url imports")
    cursor: str | None = Field(default=None, description="Registry page cursor")
    limit: int | None = Field(default=None, description="Page size; -1 fetches every page")
    search: str | None = Field(default=None, description="Registry search term")
    override_existing: bool = Field(
        default=False, validation_alias=AliasChoices("override_existing", "overrideExisting")
    )
    skip_invalid: bool = Field(default=False, validation_alias=AliasChoices("skip_invalid", "skipInvalid"))
    validate_only: bool = Field(default=False, validation_alias=AliasChoices("validate_only", "validateOnly"))
    selected_servers: list[str] | None = Field(
        default=None, validation_alias=AliasChoices("selected_servers", "selectedServers")
    )


@dataclass
class ValidationItem:
    """Validation outcome for one candidate server."""
    server: McpServerRecord
    status: str = STATUS_VALID
    server_id: str | None = None
    server_name: str | None = None
    exists: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.status == STATUS_VALID

    def to_dict(self) -> dict[str, Any]:
        return {
            "server": self.server.to_dict(),
            "status": self.status,
            "server_id": self.server_id,
            "server_name": self.server_name,
            "exists": self.exists,
            "errors": self.errors
        }


@dataclass
class ValidationResult:
    """Validation outcome for a whole batch."""
    is_valid: bool = False
    errors: list[str] = field(default_factory=list)
    items: list[ValidationItem] = field(default_factory=list)
    total_count: int = 0
    valid_count: int = 0
    invalid_count: int = 0
    duplicate_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "items": [item.to_dict() for item in self.items],
            "total_count": self.total_count,
            "valid_count": self.valid_count,
            "invalid_count": self.invalid_count,
            "duplicate_count": self.duplicate_count
        }


@dataclass
class ImportResult:
    """Outcome of importing one server."""
    server_id: str | None
    server_name: str | None
    status: str = RESULT_SUCCESS
    conflict_type: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "server_id": self.server_id,
            "server_name": self.server_name,
            "status": self.status,
            "conflict_type": self.conflict_type,
            "error_message": self.error_message
        }


@dataclass
class ImportResponse:
    """Envelope returned for an import batch."""
    success: bool = False
    total_count: int = 0
    success_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    results: list[ImportResult] = field(default_factory=list)
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "total_count": self.total_count,
            "success_count": self.success_count,
            "failed_count": self.failed_count,
            "skipped_count": self.skipped_count,
            "results": [result.to_dict() for result in self.results],
            "error_message": self.error_message
        }
