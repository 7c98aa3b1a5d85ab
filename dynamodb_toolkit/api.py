"""
Module-level shortcuts over a process-wide default toolkit.

    from dynamodb_toolkit import api

    api.list_tables()
    api.query_table('orders', 'customer-1', '2024-')

The default toolkit is built from the environment on first use. Call
``configure()`` beforehand to use an explicit configuration instead.
"""

from typing import Any, Dict, Optional, Sequence

from .config import DynamoDBConfig
from .core import DynamoDBToolkit, create_toolkit
from .models import BatchWriteResult
from .utils import ScanFiltersInput, SortKeyConditionInput

_default_toolkit: Optional[DynamoDBToolkit] = None


def get_default_toolkit() -> DynamoDBToolkit:
    """Return the shared toolkit, creating it from the environment if needed."""
    global _default_toolkit
    if _default_toolkit is None:
        _default_toolkit = create_toolkit()
    return _default_toolkit


def configure(config: DynamoDBConfig) -> DynamoDBToolkit:
    """Replace the shared toolkit with one built from ``config``."""
    global _default_toolkit
    _default_toolkit = create_toolkit(config)
    return _default_toolkit


def reset_default_toolkit() -> None:
    """Forget the shared toolkit so the next call rebuilds it."""
    global _default_toolkit
    _default_toolkit = None


def list_tables() -> Dict[str, Any]:
    """List tables (one page) with the shared toolkit."""
    return get_default_toolkit().list_tables()


def describe_table(table_name: str) -> Dict[str, Any]:
    """Describe ``table_name`` with the shared toolkit."""
    return get_default_toolkit().describe_table(table_name)


def query_table(
    table_name: str,
    hash_value: Any,
    sort_key_condition: Optional[SortKeyConditionInput] = None
) -> Dict[str, Any]:
    """Query one page by partition key and optional sort key condition."""
    return get_default_toolkit().query_table(table_name, hash_value, sort_key_condition)


def query_table_with_auto_pagination(
    table_name: str,
    hash_value: Any,
    sort_key_condition: Optional[SortKeyConditionInput] = None
) -> Dict[str, Any]:
    """Query every page; returns summed Count, ScannedCount and Items."""
    return get_default_toolkit().query_table_with_auto_pagination(table_name, hash_value, sort_key_condition)


def scan_table(table_name: str, filters: Optional[ScanFiltersInput] = None) -> Dict[str, Any]:
    """Scan one page with optional filters."""
    return get_default_toolkit().scan_table(table_name, filters)


def scan_table_with_auto_pagination(table_name: str, filters: Optional[ScanFiltersInput] = None) -> Dict[str, Any]:
    """Scan every page with optional filters."""
    return get_default_toolkit().scan_table_with_auto_pagination(table_name, filters)


def batch_write(table_name: str, requests: Sequence[Dict[str, Any]]) -> BatchWriteResult:
    """Write requests to ``table_name`` in chunks of at most 25."""
    return get_default_toolkit().batch_write(table_name, requests)
