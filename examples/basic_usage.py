#!/usr/bin/env python3
"""
Basic usage examples for the DynamoDB toolkit.

1. Listing tables and describing each one
2. Querying by partition key with a sort key condition
3. Scanning with filters, with and without auto-pagination
4. Writing in bulk

Set ORDERS_TABLE to a table keyed by (customer_id, order_date) to run the
query, scan and write sections.
"""

import os
from decimal import Decimal

from dynamodb_toolkit import DynamoDBConfig, ScanFilter, SortKeyCondition, create_toolkit


def main():
    """Demonstrate basic usage of the DynamoDB toolkit."""

    print("AWS Toolkit.")
    config = DynamoDBConfig.from_env()  # Uses environment variables

    # For DynamoDB Local, you might use:
    # config = DynamoDBConfig.for_local_development()

    toolkit = create_toolkit(config)

    # 1. Tables
    print("Listing your tables...")
    tables = toolkit.list_tables()
    print(tables)

    print("Describing each table...")
    for table_name in tables['TableNames']:
        print(table_name, ':', toolkit.describe_table(table_name))

    orders_table = os.getenv("ORDERS_TABLE")
    if not orders_table:
        return

    # 2. Bulk write (sent as 25-request batches)
    print("Writing sample orders...")
    result = toolkit.batch_write(orders_table, [
        {'PutRequest': {'Item': {
            'customer_id': 'customer-1',
            'order_date': f'2024-01-{day:02d}',
            'order_total': Decimal('19.99') * day,
            'order_status': 'shipped' if day % 2 else 'pending',
        }}}
        for day in range(1, 31)
    ])
    print(f"Wrote {result.chunks_written}/{result.total_chunks} batches, completed={result.completed}")

    # 3. Queries
    print("January orders with a prefix condition...")
    print(toolkit.query_table(orders_table, 'customer-1', '2024-01'))

    print("Orders in a date range, all pages...")
    print(toolkit.query_table_with_auto_pagination(
        orders_table,
        'customer-1',
        SortKeyCondition(operation='between', value1='2024-01-10', value2='2024-01-20'),
    ))

    # 4. Scans
    print("Shipped orders over 100...")
    print(toolkit.scan_table_with_auto_pagination(orders_table, [
        ScanFilter(attribute='order_status', operation='=', value='shipped'),
        {'attribute': 'order_total', 'operation': '>', 'value': 100},
    ]))


if __name__ == "__main__":
    main()
