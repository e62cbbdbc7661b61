"""
Error logging helpers shared by the volume operations.
"""

import logging

from .exceptions import ProviderCallError, extract_error_code


def log_error(method_name: str, logger: logging.Logger, error: Exception) -> None:
    """
    Log a failed EC2 call with the operation name and raw error text.

    Args:
        method_name: Name of the operation that failed (e.g. "CreateVolume")
        logger: Logger receiving the record
        error: The error raised by the call, or a ProviderCallError wrapping it
    """
    if error is None:
        return

    if isinstance(error, ProviderCallError):
        provider_error = error.provider_error
        error_code = error.error_code
    else:
        provider_error = error
        error_code = extract_error_code(error)

    if error_code:
        logger.error("Error in %s [%s]: %s", method_name, error_code, provider_error)
    else:
        logger.error("Error in %s: %s", method_name, provider_error)


def log_session_error(operation: str, logger: logging.Logger, region: str, error: Exception) -> None:
    """Log a failure to build the region-scoped client for an operation."""
    logger.error("Can't start AWS session for %s in %s: %s", operation, region, error)
