from .conditions import ScanFilter, SortKeyCondition
from .results import BatchWriteResult, PaginatedResults, TableKeySchema

__all__ = [
    # Request-side conditions
    "ScanFilter",
    "SortKeyCondition",

    # Response-side aggregates
    "BatchWriteResult",
    "PaginatedResults",
    "TableKeySchema",
]
