"""
Exceptions for EBS volume operations.

Every exception carries the response built so far (possibly empty) so the
caller never loses a partial result.
"""

from typing import Any, Optional

from botocore.exceptions import ClientError


def extract_error_code(error: Exception) -> Optional[str]:
    """Return the AWS error code of a ClientError, or None for other errors."""
    if not isinstance(error, ClientError):
        return None
    return error.response.get("Error", {}).get("Code") or None


class VolumeOperationError(Exception):
    """Base class for failures of a volume operation."""

    def __init__(self, operation: str, message: str, response: Any = None):
        super().__init__(message)
        self.operation = operation
        self.response = response


class InvalidVolumeRequestError(VolumeOperationError, ValueError):
    """Raised when a request fails local validation before any AWS call."""

    def __init__(self, operation: str, reason: str, response: Any = None):
        super().__init__(operation, f"Invalid {operation} request: {reason}", response)
        self.reason = reason


class ClientConstructionError(VolumeOperationError):
    """Raised when the region-scoped EC2 client cannot be created."""

    def __init__(self, operation: str, region: str, error: Exception):
        super().__init__(operation, f"Can't start AWS session in region {region!r}: {error}")
        self.region = region
        self.original_error = error


class ProviderCallError(VolumeOperationError):
    """Raised when an EC2 API call fails."""

    def __init__(
        self,
        operation: str,
        error: Exception,
        response: Any = None,
        message: Optional[str] = None,
    ):
        super().__init__(operation, message or f"Error in {operation}: {error}", response)
        self.provider_error = error
        self.error_code = extract_error_code(error)

    @property
    def has_error_code(self) -> bool:
        return self.error_code is not None


class CompositePartialFailureError(ProviderCallError):
    """Raised when the snapshot was taken but the source volume could not be deleted."""

    def __init__(self, operation: str, snapshot_id: str, error: Exception, response: Any = None):
        super().__init__(
            operation,
            error,
            response,
            message=f"Snapshot {snapshot_id} created but volume deletion failed: {error}",
        )
        self.snapshot_id = snapshot_id
