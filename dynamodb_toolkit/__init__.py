"""
DynamoDB Toolkit

Convenience helpers over Amazon DynamoDB built on boto3 and pydantic:
table listing and description, key queries and filtered scans with
optional auto-pagination, and chunked batch writes.
"""

from .config import DynamoDBConfig
from .exceptions import (
    ConnectionError,
    CredentialsError,
    DynamoDBToolkitError,
    InvalidOperatorError,
    ValidationError,
)
from .models import (
    BatchWriteResult,
    PaginatedResults,
    ScanFilter,
    SortKeyCondition,
    TableKeySchema,
)
from .core import (
    DynamoDBToolkit,
    create_session,
    create_toolkit,
)
from .utils import (
    FILTER_OPERATORS,
    KEY_CONDITION_OPERATORS,
    build_filter_expression,
    build_key_condition_expression,
    build_query_params,
    build_scan_params,
    chunk_requests,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "DynamoDBConfig",

    # Exceptions
    "ConnectionError",
    "CredentialsError",
    "DynamoDBToolkitError",
    "InvalidOperatorError",
    "ValidationError",

    # Models
    "BatchWriteResult",
    "PaginatedResults",
    "ScanFilter",
    "SortKeyCondition",
    "TableKeySchema",

    # Toolkit
    "DynamoDBToolkit",
    "create_session",
    "create_toolkit",

    # Expression building
    "FILTER_OPERATORS",
    "KEY_CONDITION_OPERATORS",
    "build_filter_expression",
    "build_key_condition_expression",
    "build_query_params",
    "build_scan_params",
    "chunk_requests",
]
