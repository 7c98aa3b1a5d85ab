import pytest
from pydantic import ValidationError as PydanticValidationError

from dynamodb_toolkit.exceptions import DynamoDBToolkitError, InvalidOperatorError
from dynamodb_toolkit.models import (
    BatchWriteResult,
    PaginatedResults,
    ScanFilter,
    SortKeyCondition,
    TableKeySchema,
)


class TestConditionModels:
    """Test request-side condition models."""

    def test_sort_key_condition_defaults(self):
        condition = SortKeyCondition()

        assert condition.operation == '='
        assert condition.value is None
        assert condition.value1 is None
        assert condition.value2 is None

    def test_scan_filter_requires_attribute(self):
        with pytest.raises(PydanticValidationError):
            ScanFilter(attribute='')

    def test_models_are_frozen(self):
        scan_filter = ScanFilter(attribute='age', value=1)

        with pytest.raises(PydanticValidationError):
            scan_filter.value = 2


class TestTableKeySchema:
    """Test TableKeySchema construction."""

    def test_from_key_schema_with_range_key(self):
        schema = TableKeySchema.from_key_schema([
            {'AttributeName': 'order_date', 'KeyType': 'RANGE'},
            {'AttributeName': 'customer_id', 'KeyType': 'HASH'},
        ])

        assert schema.hash_key == 'customer_id'
        assert schema.range_key == 'order_date'

    def test_from_key_schema_hash_only(self):
        schema = TableKeySchema.from_key_schema([{'AttributeName': 'customer_id', 'KeyType': 'HASH'}])

        assert schema.hash_key == 'customer_id'
        assert schema.range_key is None


class TestPaginatedResults:
    """Test accumulation across pages."""

    def test_add_pages(self):
        results = PaginatedResults()

        results.add_page({'Items': [{'id': 1}, {'id': 2}], 'Count': 2, 'ScannedCount': 5})
        results.add_page({'Items': [{'id': 3}], 'Count': 1, 'ScannedCount': 4})

        assert results.pages == 2
        assert results.to_response() == {
            'Count': 3,
            'ScannedCount': 9,
            'Items': [{'id': 1}, {'id': 2}, {'id': 3}],
        }

    def test_missing_counts_fall_back_to_items(self):
        results = PaginatedResults()

        results.add_page({'Items': [{'id': 1}, {'id': 2}]})

        assert results.count == 2
        assert results.scanned_count == 2

    def test_empty(self):
        assert PaginatedResults().to_response() == {'Count': 0, 'ScannedCount': 0, 'Items': []}


class TestBatchWriteResult:
    """Test batch write outcome reporting."""

    def test_completed(self):
        result = BatchWriteResult(table_name='orders', total_requests=30, total_chunks=2, chunks_written=2)

        assert result.completed is True

    def test_not_completed_with_unprocessed_items(self):
        result = BatchWriteResult(
            table_name='orders', total_requests=30, total_chunks=2, chunks_written=2,
            unprocessed_items=[{'PutRequest': {'Item': {'customer_id': 'c1'}}}]
        )

        assert result.completed is False

    def test_not_completed_when_chunks_remain(self):
        result = BatchWriteResult(table_name='orders', total_requests=30, total_chunks=2, chunks_written=1)

        assert result.completed is False

    def test_empty_write_is_completed(self):
        assert BatchWriteResult(table_name='orders').completed is True


class TestExceptions:
    """Test exception formatting."""

    def test_str_includes_context(self):
        error = DynamoDBToolkitError("Boom", context={'table': 'orders'})

        assert str(error) == "Boom (Context: table=orders)"

    def test_repr(self):
        error = DynamoDBToolkitError("Boom")

        assert repr(error) == "DynamoDBToolkitError(message='Boom', original_error=None, context={})"

    def test_invalid_operator_message(self):
        error = InvalidOperatorError('like', ('=',))

        assert str(error) == 'Invalid operation "like" used.'
