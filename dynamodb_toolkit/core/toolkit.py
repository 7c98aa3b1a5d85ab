"""
DynamoDB Toolkit

Convenience operations over the DynamoDB API:

- list_tables / list_table_names
- describe_table / get_table_key_schema
- query_table / query_table_with_auto_pagination
- scan_table / scan_table_with_auto_pagination
- batch_write

Query and scan helpers take plain values (a partition key value, a sort key
condition, scan filters) and build the expression strings themselves. All
calls go through the document-aware client of a boto3 DynamoDB resource, so
items are passed and returned as native Python values.

Requests are strictly sequential. Pagination and batch chunks are issued one
at a time, and the only retries are the ones botocore performs on its own.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import DynamoDBConfig
from ..exceptions import ConnectionError, CredentialsError, ValidationError
from ..models import BatchWriteResult, PaginatedResults, TableKeySchema
from ..utils import (
    ScanFiltersInput,
    SortKeyConditionInput,
    build_query_params,
    build_scan_params,
    chunk_requests,
    validate_write_requests,
)
from .session import create_session

logger = logging.getLogger(__name__)

PAGINATED_METHODS = ('query', 'scan')


class DynamoDBToolkit:
    """
    Helper operations over one DynamoDB connection.

    The boto3 session and resource are created on first use, so building a
    toolkit never touches AWS or the credentials chain.
    """

    def __init__(self, config: Optional[DynamoDBConfig] = None):
        """Initialize toolkit.

        Args:
            config: DynamoDB configuration (read from the environment if None)
        """
        self.config = config or DynamoDBConfig.from_env()
        self._dynamodb = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = create_session(self.config)

                resource_kwargs = {
                    'config': Config(
                        retries={'max_attempts': self.config.retries},
                        max_pool_connections=self.config.max_pool_connections,
                        read_timeout=self.config.timeout_seconds,
                        connect_timeout=self.config.timeout_seconds
                    )
                }
                if self.config.endpoint_url:
                    resource_kwargs['endpoint_url'] = self.config.endpoint_url

                self._dynamodb = session.resource('dynamodb', **resource_kwargs)
            except CredentialsError:
                raise
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def client(self):
        """Document-aware DynamoDB client (accepts and returns native values)."""
        return self.dynamodb.meta.client

    def _call(self, method: str, table_name: Optional[str], **params) -> Dict[str, Any]:
        """Invoke a client method, logging and re-raising remote failures."""
        try:
            return getattr(self.client, method)(**params)
        except ClientError as e:
            target = f" for table {table_name}" if table_name else ""
            logger.error(f"DynamoDB {method} failed{target}: {e}")
            raise

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def list_tables(
        self,
        exclusive_start_table_name: Optional[str] = None,
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        List tables (one page).

        Returns:
            Raw ListTables response with ``TableNames`` and, when more
            tables remain, ``LastEvaluatedTableName``
        """
        params: Dict[str, Any] = {}
        if exclusive_start_table_name:
            params['ExclusiveStartTableName'] = exclusive_start_table_name
        if limit is not None:
            params['Limit'] = limit
        return self._call('list_tables', None, **params)

    def list_table_names(self) -> List[str]:
        """List the names of all tables, following ListTables pagination."""
        names: List[str] = []
        start_table_name = None
        while True:
            response = self.list_tables(exclusive_start_table_name=start_table_name)
            names.extend(response.get('TableNames', []))
            start_table_name = response.get('LastEvaluatedTableName')
            if not start_table_name:
                return names

    def describe_table(self, table_name: str) -> Dict[str, Any]:
        """Return the raw DescribeTable response for ``table_name``."""
        return self._call('describe_table', table_name, TableName=table_name)

    def get_table_key_schema(self, table_name: str) -> TableKeySchema:
        """Return the hash and range key names of ``table_name``."""
        key_schema = self.describe_table(table_name)['Table']['KeySchema']
        return TableKeySchema.from_key_schema(key_schema)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def query_table(
        self,
        table_name: str,
        hash_value: Any,
        sort_key_condition: Optional[SortKeyConditionInput] = None,
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Query a table by partition key value and optional sort key condition.

        The key attribute names are read from DescribeTable, so callers only
        supply values.

        Args:
            table_name: Table to query
            hash_value: Partition key value
            sort_key_condition: None, a prefix string (``begins_with``), or a
                SortKeyCondition / dict with ``operation`` and values
            limit: Maximum items evaluated by this single call

        Returns:
            Raw Query response (one page)

        Example:
            >>> toolkit.query_table('orders', 'customer-1',
            ...                     {'operation': '>=', 'value': '2024-01-01'})
        """
        key_schema = self.get_table_key_schema(table_name)
        params = build_query_params(table_name, key_schema, hash_value, sort_key_condition, limit)
        return self._call('query', table_name, **params)

    def query_table_with_auto_pagination(
        self,
        table_name: str,
        hash_value: Any,
        sort_key_condition: Optional[SortKeyConditionInput] = None,
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Query a table and follow every page.

        ``limit`` applies per page. Returns ``Count``, ``ScannedCount`` and
        ``Items`` summed across all pages.
        """
        key_schema = self.get_table_key_schema(table_name)
        params = build_query_params(table_name, key_schema, hash_value, sort_key_condition, limit)
        return self._auto_paginate(params, 'query')

    def scan_table(
        self,
        table_name: str,
        filters: Optional[ScanFiltersInput] = None,
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Scan a table with optional filters.

        Args:
            table_name: Table to scan
            filters: A ScanFilter / dict, or a list of them combined with ``and``
            limit: Maximum items evaluated by this single call

        Returns:
            Raw Scan response (one page)
        """
        params = build_scan_params(table_name, filters, limit)
        return self._call('scan', table_name, **params)

    def scan_table_with_auto_pagination(
        self,
        table_name: str,
        filters: Optional[ScanFiltersInput] = None,
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """Scan a table and follow every page; ``limit`` applies per page."""
        params = build_scan_params(table_name, filters, limit)
        return self._auto_paginate(params, 'scan')

    def _auto_paginate(self, params: Dict[str, Any], method: str) -> Dict[str, Any]:
        """Repeat ``method`` with ``ExclusiveStartKey`` until no page remains.

        ``params`` is copied per page and never modified.
        """
        if method not in PAGINATED_METHODS:
            raise ValidationError(f"Invalid method {method} provided.")

        table_name = params.get('TableName')
        results = PaginatedResults()
        last_evaluated_key = None

        while True:
            page_params = dict(params)
            if last_evaluated_key:
                logger.info(f"Starting next {method} with {last_evaluated_key}")
                page_params['ExclusiveStartKey'] = last_evaluated_key

            response = self._call(method, table_name, **page_params)
            results.add_page(response)

            last_evaluated_key = response.get('LastEvaluatedKey')
            if not last_evaluated_key:
                logger.debug(f"{method} on {table_name} finished after {results.pages} page(s)")
                return results.to_response()
            logger.info(f"Retrieved {response.get('ScannedCount', 0)} results. Fetching next set...")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def batch_write(self, table_name: str, requests: Sequence[Dict[str, Any]]) -> BatchWriteResult:
        """
        Write requests in chunks of at most 25 (``config.batch_size``).

        Chunks are sent one after another. If DynamoDB hands back
        UnprocessedItems for the table, they are logged, writing stops, and
        they are returned on the result; nothing is retried.

        Args:
            table_name: Target table
            requests: ``{'PutRequest': {'Item': ...}}`` or
                ``{'DeleteRequest': {'Key': ...}}`` entries

        Returns:
            BatchWriteResult describing how far the write got

        Example:
            >>> result = toolkit.batch_write('orders', [
            ...     {'PutRequest': {'Item': {'customer_id': 'c1', 'order_id': 'o1'}}},
            ... ])
            >>> result.completed
            True
        """
        validate_write_requests(requests)
        chunks = chunk_requests(requests, self.config.batch_size)
        result = BatchWriteResult(
            table_name=table_name,
            total_requests=len(requests),
            total_chunks=len(chunks)
        )

        for index, chunk in enumerate(chunks, start=1):
            logger.info(f"Performing batch_write request {index}/{len(chunks)}")
            response = self._call('batch_write_item', table_name, RequestItems={table_name: chunk})
            result.chunks_written += 1

            unprocessed = response.get('UnprocessedItems', {}).get(table_name)
            if unprocessed:
                logger.warning(
                    f"Unprocessed items stop triggered! {len(unprocessed)} request(s) "
                    f"left in batch {index}/{len(chunks)}"
                )
                for request in unprocessed:
                    logger.warning(f"Unprocessed request: {request}")
                result.unprocessed_items = list(unprocessed)
                return result

        logger.info(f"Done! Wrote {result.total_requests} request(s) to {table_name} in {len(chunks)} batch(es)")
        return result


def create_toolkit(config: Optional[DynamoDBConfig] = None) -> DynamoDBToolkit:
    """
    Factory function to create a DynamoDBToolkit instance.

    Args:
        config: DynamoDB configuration (read from the environment if None)

    Returns:
        Configured DynamoDBToolkit instance
    """
    return DynamoDBToolkit(config)
