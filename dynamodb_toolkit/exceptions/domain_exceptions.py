"""
Domain exceptions for the DynamoDB toolkit.

Organized by category:
1. Input validation errors (operators, key schema, write requests)
2. Setup errors (credentials, session/resource creation)

Errors returned by DynamoDB itself are not wrapped: the botocore
ClientError is logged and re-raised unchanged.
"""

from typing import Any, Dict, Optional, Sequence

from .base import DynamoDBToolkitError


# =============================================================================
# Input Validation Errors
# =============================================================================

class ValidationError(DynamoDBToolkitError):
    """Raised when caller input cannot be turned into a valid request.

    Used for:
    - Sort key conditions on tables without a range key
    - Malformed conditions, filters or write requests
    - Unknown pagination methods
    - Invalid limits and chunk sizes
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class InvalidOperatorError(ValidationError):
    """Raised when a comparison operator is not in the allow-list."""

    def __init__(self, operation: Any, allowed: Sequence[str]):
        self.operation = operation
        self.allowed = tuple(allowed)
        super().__init__(f'Invalid operation "{operation}" used.')


# =============================================================================
# Setup Errors
# =============================================================================

class CredentialsError(DynamoDBToolkitError):
    """Raised when no usable AWS credentials source can be found."""

    def __init__(self, message: str, source: Optional[str] = None, original_error: Optional[Exception] = None):
        self.source = source
        context = {}
        if source:
            context['source'] = source
        super().__init__(message, original_error, context)


class ConnectionError(DynamoDBToolkitError):
    """Raised when the boto3 session or DynamoDB resource cannot be created.

    Used for:
    - Unknown profiles
    - Malformed endpoint URLs
    - Invalid botocore client configuration
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        """Initialize connection error.

        Args:
            message: Human-readable error message
            original_error: The original exception that caused this error
            context: Additional context information (e.g., endpoint, region)
        """
        super().__init__(message, original_error, context)
