"""
Custom exception classes for recordbricks.

Provides structured error handling with domain-specific exceptions
for the transport, configuration and service layers.
"""

import logging
from enum import Enum
from typing import Any, Optional


class RecordbricksException(Exception):
    """Base exception class for all recordbricks exceptions."""

    pass


class RecordApiError(RecordbricksException):
    """
    Raised when the record API cannot be reached or rejects a request.

    Carries the HTTP status code (when there was a reply) and the message
    the backend put in the reply body, if any.

    Example:
        >>> raise RecordApiError("Table not found", status_code=404)
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        text = message
        if status_code is not None:
            text = f"{message} (HTTP {status_code})"
        super().__init__(text)


class InvalidRecordIdError(RecordbricksException, ValueError):
    """Raised when a record id is missing or cannot be read as a positive integer."""

    def __init__(self, entity: str, value: Any):
        self.entity = entity
        self.value = value
        super().__init__(f"Valid {entity} ID is required (got {value!r})")


class RecordOperationError(RecordbricksException):
    """Raised (under ErrorPolicy.RAISE) when the API reports success=False."""

    pass


class ConfigurationError(RecordbricksException):
    """Raised when connection or service configuration is incomplete."""

    pass


class ServiceRegistryError(RecordbricksException, RuntimeError):
    pass


class ErrorPolicy(Enum):
    """Policy for handling failed record operations."""

    SUPPRESS = "suppress"      # Log and return the operation's fallback value (default)
    RAISE = "raise"            # Log and raise


class FailureHandler:
    """
    Handles failed record operations based on configured policy.

    Usage:
        >>> handler = FailureHandler(policy=ErrorPolicy.SUPPRESS, logger=log)
        >>> handler.handle("Error fetching clients", exc)
        # Logs "Error fetching clients: ..." and returns

        >>> handler = FailureHandler(policy=ErrorPolicy.RAISE, logger=log)
        >>> handler.handle("Error fetching clients", exc)
        # Logs, then re-raises exc
    """

    def __init__(
        self,
        policy: ErrorPolicy = ErrorPolicy.SUPPRESS,
        logger: Optional[logging.Logger] = None,
    ):
        self.policy = policy
        self.logger = logger or logging.getLogger("recordbricks")

    def handle(self, context: str, error: RecordbricksException) -> None:
        """
        Log a raised error and re-raise it under ErrorPolicy.RAISE.

        Args:
            context: Human-readable description of the failed operation
            error: The exception raised by the transport or validation layer
        """
        self.logger.error(f"{context}: {error}")
        if self.policy == ErrorPolicy.RAISE:
            raise error

    def rejected(self, context: str, message: Optional[str]) -> None:
        """
        Handle a reply whose ``success`` flag is False.

        Raises:
            RecordOperationError: If policy is RAISE
        """
        self.logger.error(message or f"{context}: request was not successful")
        if self.policy == ErrorPolicy.RAISE:
            raise RecordOperationError(f"{context}: {message or 'request was not successful'}")
