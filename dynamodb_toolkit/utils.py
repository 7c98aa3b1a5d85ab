"""
DynamoDB Toolkit Utilities

Pure request-building helpers used by the toolkit:
- Operator validation against allow-lists
- KeyConditionExpression building for table queries
- FilterExpression building for table scans
- Query/Scan parameter assembly
- Chunking of write requests for BatchWriteItem

Nothing here talks to AWS. Every function takes plain values and returns
plain values.
"""

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import MAX_BATCH_SIZE
from .exceptions import InvalidOperatorError, ValidationError
from .models import ScanFilter, SortKeyCondition, TableKeySchema

KEY_CONDITION_OPERATORS = ('=', '>', '>=', '<', '<=', 'between', 'begins_with')

FILTER_OPERATORS = (
    '=', '!=', '>', '>=', '<', '<=', 'between',
    'exists', 'not exists', 'contains', 'not contains', 'begins_with',
)

BATCH_WRITE_LIMIT = MAX_BATCH_SIZE

WRITE_REQUEST_TYPES = ('PutRequest', 'DeleteRequest')

# Expression attribute value placeholders only allow word characters
_UNSAFE_PLACEHOLDER_CHARS = re.compile(r'[^A-Za-z0-9_]')

SortKeyConditionInput = Union[str, SortKeyCondition, Dict[str, Any]]
ScanFilterInput = Union[ScanFilter, Dict[str, Any]]
ScanFiltersInput = Union[ScanFilterInput, Sequence[ScanFilterInput]]

ExpressionParts = Tuple[str, Dict[str, Any]]

ModelT = TypeVar('ModelT', bound=BaseModel)


def validate_operator(operation: Any, allowed: Sequence[str]) -> str:
    """Return ``operation`` if it is allow-listed.

    Raises:
        InvalidOperatorError: The operator is not in ``allowed``
    """
    if operation not in allowed:
        raise InvalidOperatorError(operation, allowed)
    return operation


def _coerce(model_class: Type[ModelT], value: Any) -> ModelT:
    """Accept either a model instance or a dict with the same keys."""
    if isinstance(value, model_class):
        return value
    try:
        return model_class.model_validate(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid {model_class.__name__}: {value!r}", original_error=e) from e


def build_key_condition_expression(
    hash_key: str,
    hash_value: Any,
    range_key: Optional[str] = None,
    sort_key_condition: Optional[SortKeyConditionInput] = None
) -> ExpressionParts:
    """Build a KeyConditionExpression and its attribute values.

    Args:
        hash_key: Partition key attribute name
        hash_value: Partition key value to match
        range_key: Sort key attribute name, None if the table has none
        sort_key_condition: A string (treated as a ``begins_with`` prefix),
            a SortKeyCondition, a dict with the same keys, or None

    Returns:
        Tuple of (KeyConditionExpression, ExpressionAttributeValues)

    Raises:
        InvalidOperatorError: Operator not in KEY_CONDITION_OPERATORS
        ValidationError: Sort condition given for a table without a range key

    Example:
        >>> build_key_condition_expression('user_id', 'u1', 'created_at',
        ...                                {'operation': 'between', 'value1': 1, 'value2': 5})
        ('user_id = :pkvalue and created_at between :skvalue1 and :skvalue2',
         {':pkvalue': 'u1', ':skvalue1': 1, ':skvalue2': 5})
    """
    expression = f"{hash_key} = :pkvalue"
    values = {':pkvalue': hash_value}

    if sort_key_condition is None or sort_key_condition == "":
        return expression, values

    if isinstance(sort_key_condition, str):
        condition = SortKeyCondition(operation='begins_with', value=sort_key_condition)
    else:
        condition = _coerce(SortKeyCondition, sort_key_condition)
    operation = validate_operator(condition.operation, KEY_CONDITION_OPERATORS)

    if not range_key:
        raise ValidationError(
            f"Sort key condition given but the table has no range key (hash key: {hash_key})"
        )

    if operation == 'begins_with':
        expression += f" and begins_with({range_key}, :skvalue)"
        values[':skvalue'] = condition.value
    elif operation == 'between':
        expression += f" and {range_key} between :skvalue1 and :skvalue2"
        values[':skvalue1'] = condition.value1
        values[':skvalue2'] = condition.value2
    else:
        expression += f" and {range_key} {operation} :skvalue"
        values[':skvalue'] = condition.value

    return expression, values


def build_filter_expression(scan_filter: ScanFilterInput, suffix: str = "") -> ExpressionParts:
    """Build one FilterExpression clause and its attribute values.

    Placeholders are named after the attribute (``:<attribute>Value``) with
    any non-word characters replaced by ``_`` and ``suffix`` appended.

    Raises:
        InvalidOperatorError: Operator not in FILTER_OPERATORS
    """
    condition = _coerce(ScanFilter, scan_filter)
    operation = validate_operator(condition.operation, FILTER_OPERATORS)
    attribute = condition.attribute
    base = f":{_UNSAFE_PLACEHOLDER_CHARS.sub('_', attribute)}Value"

    if operation in ('begins_with', 'contains', 'not contains'):
        placeholder = f"{base}{suffix}"
        return f"{operation}({attribute}, {placeholder})", {placeholder: condition.value}

    if operation == 'exists':
        return f"attribute_exists({attribute})", {}

    if operation == 'not exists':
        return f"attribute_not_exists({attribute})", {}

    if operation == 'between':
        lower, upper = f"{base}1{suffix}", f"{base}2{suffix}"
        return (
            f"{attribute} between {lower} and {upper}",
            {lower: condition.value1, upper: condition.value2},
        )

    # DynamoDB spells inequality as <>
    comparator = '<>' if operation == '!=' else operation
    placeholder = f"{base}{suffix}"
    return f"{attribute} {comparator} {placeholder}", {placeholder: condition.value}


def _validate_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 1:
        raise ValidationError(f"Limit must be a positive integer, got {limit}")


def build_query_params(
    table_name: str,
    key_schema: TableKeySchema,
    hash_value: Any,
    sort_key_condition: Optional[SortKeyConditionInput] = None,
    limit: Optional[int] = None
) -> Dict[str, Any]:
    """Assemble the keyword arguments for a Query call."""
    _validate_limit(limit)
    expression, values = build_key_condition_expression(
        key_schema.hash_key, hash_value, key_schema.range_key, sort_key_condition
    )
    params = {
        'TableName': table_name,
        'KeyConditionExpression': expression,
        'ExpressionAttributeValues': values,
    }
    if limit is not None:
        params['Limit'] = limit
    return params


def build_scan_params(
    table_name: str,
    filters: Optional[ScanFiltersInput] = None,
    limit: Optional[int] = None
) -> Dict[str, Any]:
    """Assemble the keyword arguments for a Scan call.

    ``filters`` may be a single filter or a list of filters; a list is
    combined with ``and``. When two filters would share a placeholder the
    later one is given a positional suffix (``:ageValue_1``).
    """
    _validate_limit(limit)
    params: Dict[str, Any] = {'TableName': table_name}
    if limit is not None:
        params['Limit'] = limit

    if not filters:
        return params

    if isinstance(filters, (ScanFilter, dict)):
        filters = [filters]

    expressions: List[str] = []
    values: Dict[str, Any] = {}
    for index, scan_filter in enumerate(filters):
        expression, filter_values = build_filter_expression(scan_filter)
        if any(name in values for name in filter_values):
            expression, filter_values = build_filter_expression(scan_filter, suffix=f"_{index}")
        expressions.append(expression)
        values.update(filter_values)

    params['FilterExpression'] = ' and '.join(expressions)
    # DynamoDB rejects an empty ExpressionAttributeValues map
    if values:
        params['ExpressionAttributeValues'] = values
    return params


def validate_write_requests(requests: Sequence[Any]) -> None:
    """Check every entry is a single PutRequest or DeleteRequest.

    Raises:
        ValidationError: Names the first malformed request by index
    """
    for index, request in enumerate(requests):
        if not isinstance(request, dict) or len(request) != 1 or next(iter(request)) not in WRITE_REQUEST_TYPES:
            raise ValidationError(
                f"Write request {index} must contain exactly one of {', '.join(WRITE_REQUEST_TYPES)}",
                errors={str(index): request}
            )


def chunk_requests(requests: Sequence[Any], size: int = BATCH_WRITE_LIMIT) -> List[List[Any]]:
    """Split write requests into consecutive groups of at most ``size``.

    Example:
        >>> [len(chunk) for chunk in chunk_requests(list(range(60)))]
        [25, 25, 10]
    """
    if size < 1:
        raise ValidationError(f"Chunk size must be a positive integer, got {size}")
    requests = list(requests)
    return [requests[i:i + size] for i in range(0, len(requests), size)]
