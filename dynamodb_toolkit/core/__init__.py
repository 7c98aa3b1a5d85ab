"""
Core components for DynamoDB access.

- DynamoDBToolkit: helper operations over one boto3 DynamoDB resource
- create_session: one-time credentials/region setup
"""

from .session import create_session, resolve_credentials_source
from .toolkit import DynamoDBToolkit, create_toolkit

__all__ = [
    "DynamoDBToolkit",
    "create_session",
    "create_toolkit",
    "resolve_credentials_source",
]
