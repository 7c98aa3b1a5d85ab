#!/usr/bin/env python3
"""
Command line access to the DynamoDB toolkit.

Examples:
    dynamodb-toolkit list-tables
    dynamodb-toolkit describe orders
    dynamodb-toolkit query orders customer-1 --begins-with 2024-
    dynamodb-toolkit query orders customer-1 --between 2024-01-01 2024-02-01 --all
    dynamodb-toolkit scan orders --filter '{"attribute": "order_total", "operation": ">", "value": 100}'
    dynamodb-toolkit batch-write orders requests.json
    dynamodb-toolkit sample

Results are printed to stdout as JSON; logs go to stderr.
"""

import argparse
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional

from botocore.exceptions import ClientError

from .config import DynamoDBConfig
from .core import DynamoDBToolkit, create_toolkit
from .exceptions import DynamoDBToolkitError, ValidationError
from .utils import KEY_CONDITION_OPERATORS

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _load_json(text: str, source: str) -> Any:
    # boto3 refuses floats, so numbers with a fraction become Decimal
    try:
        return json.loads(text, parse_float=Decimal)
    except ValueError as e:
        raise ValidationError(f"Invalid JSON in {source}: {e}", original_error=e) from e


def _key_value(value: str, numeric: bool) -> Any:
    if not numeric:
        return value
    try:
        number = Decimal(value)
    except ArithmeticError as e:
        raise ValidationError(f"Not a number: {value!r}", original_error=e) from e
    # DynamoDB numbers have no NaN or Infinity
    if not number.is_finite():
        raise ValidationError(f"Not a finite number: {value!r}")
    return number


def _sort_key_condition(args: argparse.Namespace) -> Optional[Any]:
    if args.begins_with is not None:
        return args.begins_with
    if args.between is not None:
        lower, upper = args.between
        return {
            'operation': 'between',
            'value1': _key_value(lower, args.numeric),
            'value2': _key_value(upper, args.numeric),
        }
    if args.operation is not None:
        return {'operation': args.operation, 'value': _key_value(args.value, args.numeric)}
    return None


def _emit(result: Any) -> None:
    print(json.dumps(result, indent=2, default=str))


def run_sample(toolkit: DynamoDBToolkit) -> None:
    """List every table, then describe each one."""
    logger.info("Listing your tables...")
    table_names = toolkit.list_table_names()
    _emit({'TableNames': table_names})

    logger.info("Describing each table...")
    for table_name in table_names:
        _emit({table_name: toolkit.describe_table(table_name)})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dynamodb-toolkit",
        description="Convenience operations over Amazon DynamoDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--endpoint-url", help="DynamoDB endpoint URL (overrides DYNAMODB_ENDPOINT_URL)")
    parser.add_argument("--region", help="AWS region (overrides AWS_REGION)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-tables", help="List all table names")

    describe = subparsers.add_parser("describe", help="Describe a table")
    describe.add_argument("table")

    query = subparsers.add_parser("query", help="Query a table by partition key")
    query.add_argument("table")
    query.add_argument("hash_value", help="Partition key value")
    sort_group = query.add_mutually_exclusive_group()
    sort_group.add_argument("--begins-with", help="Sort key prefix")
    sort_group.add_argument("--operation", choices=KEY_CONDITION_OPERATORS, help="Sort key comparison operator")
    sort_group.add_argument("--between", nargs=2, metavar=("LOWER", "UPPER"), help="Sort key range (inclusive)")
    query.add_argument("--value", help="Sort key operand for --operation")
    query.add_argument("--numeric", action="store_true", help="Treat key values as numbers")
    query.add_argument("--limit", type=int, help="Items evaluated per request")
    query.add_argument("--all", action="store_true", help="Follow every page")

    scan = subparsers.add_parser("scan", help="Scan a table with optional filters")
    scan.add_argument("table")
    scan.add_argument(
        "--filter", dest="filters", action="append", default=[],
        help='Filter as JSON, e.g. {"attribute": "age", "operation": ">", "value": 30}; repeatable'
    )
    scan.add_argument("--limit", type=int, help="Items evaluated per request")
    scan.add_argument("--all", action="store_true", help="Follow every page")

    batch = subparsers.add_parser("batch-write", help="Write a JSON array of PutRequest/DeleteRequest entries")
    batch.add_argument("table")
    batch.add_argument("file", type=Path)

    subparsers.add_parser("sample", help="List tables, then describe each one")

    return parser


def run(args: argparse.Namespace, toolkit: DynamoDBToolkit) -> int:
    if args.command == "list-tables":
        _emit({'TableNames': toolkit.list_table_names()})
    elif args.command == "describe":
        _emit(toolkit.describe_table(args.table))
    elif args.command == "query":
        if args.operation is not None and args.value is None:
            raise ValidationError("--operation requires --value")
        if args.operation is None and args.value is not None:
            raise ValidationError("--value is only used with --operation")
        hash_value = _key_value(args.hash_value, args.numeric)
        condition = _sort_key_condition(args)
        if args.all:
            _emit(toolkit.query_table_with_auto_pagination(args.table, hash_value, condition, args.limit))
        else:
            _emit(toolkit.query_table(args.table, hash_value, condition, args.limit))
    elif args.command == "scan":
        filters = [_load_json(text, "--filter") for text in args.filters]
        if args.all:
            _emit(toolkit.scan_table_with_auto_pagination(args.table, filters, args.limit))
        else:
            _emit(toolkit.scan_table(args.table, filters, args.limit))
    elif args.command == "batch-write":
        try:
            text = args.file.read_text(encoding="utf-8")
        except OSError as e:
            raise ValidationError(f"Unable to read {args.file}: {e}", original_error=e) from e
        requests = _load_json(text, str(args.file))
        if not isinstance(requests, list):
            raise ValidationError(f"{args.file} must contain a JSON array of write requests")
        result = toolkit.batch_write(args.table, requests)
        _emit(result.model_dump())
        return 0 if result.completed else 2
    elif args.command == "sample":
        run_sample(toolkit)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = DynamoDBConfig.from_env()
        if args.endpoint_url:
            config.endpoint_url = args.endpoint_url
        if args.region:
            config.region_name = args.region
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or config.enable_debug_logging else logging.INFO,
        format=LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        return run(args, create_toolkit(config))
    except (DynamoDBToolkitError, ClientError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
