from .config import MAX_BATCH_SIZE, DynamoDBConfig

__all__ = [
    "DynamoDBConfig",
    "MAX_BATCH_SIZE",
]
