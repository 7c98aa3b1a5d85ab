"""
Aggregated views over raw DynamoDB responses.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class TableKeySchema(BaseModel):
    """Hash and range key attribute names of a table."""

    hash_key: str = Field(..., description="Partition key attribute name")
    range_key: Optional[str] = Field(None, description="Sort key attribute name, if any")

    @classmethod
    def from_key_schema(cls, key_schema: List[Dict[str, str]]) -> 'TableKeySchema':
        """Build from a DescribeTable ``KeySchema`` list.

        Example:
            >>> TableKeySchema.from_key_schema([
            ...     {'AttributeName': 'user_id', 'KeyType': 'HASH'},
            ...     {'AttributeName': 'created_at', 'KeyType': 'RANGE'},
            ... ])
            TableKeySchema(hash_key='user_id', range_key='created_at')
        """
        keys = {entry['KeyType']: entry['AttributeName'] for entry in key_schema}
        return cls(hash_key=keys.get('HASH'), range_key=keys.get('RANGE'))


class PaginatedResults(BaseModel):
    """Running totals of a Query/Scan followed across every page."""

    count: int = 0
    scanned_count: int = 0
    items: List[Any] = Field(default_factory=list)
    pages: int = 0

    def add_page(self, response: Dict[str, Any]) -> None:
        """Fold one Query/Scan response into the totals."""
        page_items = response.get('Items', [])
        count = response.get('Count', len(page_items))
        self.count += count
        self.scanned_count += response.get('ScannedCount', count)
        self.items.extend(page_items)
        self.pages += 1

    def to_response(self) -> Dict[str, Any]:
        """Return the totals in the shape of a single Query/Scan response."""
        return {
            'Count': self.count,
            'ScannedCount': self.scanned_count,
            'Items': self.items,
        }


class BatchWriteResult(BaseModel):
    """Outcome of a chunked batch write."""

    table_name: str
    total_requests: int = 0
    total_chunks: int = 0
    chunks_written: int = 0
    unprocessed_items: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def completed(self) -> bool:
        """True when every chunk was sent and nothing came back unprocessed."""
        return self.chunks_written == self.total_chunks and not self.unprocessed_items
