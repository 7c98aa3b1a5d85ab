# Base exception class
from .base import DynamoDBToolkitError

from .domain_exceptions import (
    ConnectionError,
    CredentialsError,
    InvalidOperatorError,
    ValidationError,
)

__all__ = [
    "DynamoDBToolkitError",
    "ConnectionError",
    "CredentialsError",
    "InvalidOperatorError",
    "ValidationError",
]
