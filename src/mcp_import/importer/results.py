"""
MCP Import Results

Folds per-server outcomes into the batch response.
"""

from .models import RESULT_FAILED, RESULT_SKIPPED, RESULT_SUCCESS, ImportResponse, ImportResult


class ImportResultAggregator:
    """Builds import responses from per-server results and batch-level failures."""

    def aggregate(self, results: list[ImportResult]) -> ImportResponse:
        """Count outcomes; the batch succeeds only when nothing failed."""
        response = ImportResponse(total_count=len(results), results=list(results))

        for result in results:
            if result.status == RESULT_SUCCESS:
                response.success_count += 1
            elif result.status == RESULT_FAILED:
                response.failed_count += 1
            elif result.status == RESULT_SKIPPED:
                response.skipped_count += 1

        response.success = response.failed_count == 0
        return response

    def validation_failed(self, errors: list[str]) -> ImportResponse:
        return ImportResponse(
            success=False,
            error_message="Import validation failed: " + ", ".join(errors or [])
        )

    def nothing_to_import(self, errors: list[str]) -> ImportResponse:
        message = "Import validation failed and no valid servers to import"
        if errors:
            message += ": " + ", ".join(errors)
        return ImportResponse(success=False, total_count=0, error_message=message)

    def execution_failed(self, error: Exception) -> ImportResponse:
        return ImportResponse(success=False, error_message=f"Import execution failed: {error}")

    def note_skipped_invalid(self, response: ImportResponse, invalid_count: int) -> ImportResponse:
        """Attach the skipped-invalid note; it does not change the outcome."""
        if invalid_count > 0:
            response.error_message = f"Some invalid servers were skipped: {invalid_count}"
        return response
