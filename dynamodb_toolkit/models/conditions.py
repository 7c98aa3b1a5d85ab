"""
Caller-facing condition models.

These are plain containers: operator allow-lists are enforced by the
expression builders in ``dynamodb_toolkit.utils`` so that a bad operator
always surfaces as ``InvalidOperatorError`` rather than a pydantic error.
Plain dicts with the same keys are accepted wherever these models are.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SortKeyCondition(BaseModel):
    """Condition applied to a table's range key in a Query.

    ``value`` is used by the single-operand operators and ``begins_with``;
    ``value1``/``value2`` are the bounds for ``between``.
    """

    operation: str = Field(default="=", description="Comparison operator")
    value: Any = Field(default=None, description="Operand for single-value operators")
    value1: Any = Field(default=None, description="Lower bound for 'between'")
    value2: Any = Field(default=None, description="Upper bound for 'between'")

    model_config = ConfigDict(frozen=True)


class ScanFilter(BaseModel):
    """Predicate on a single attribute used to build a Scan FilterExpression."""

    attribute: str = Field(..., min_length=1, description="Attribute name to filter on")
    operation: str = Field(default="=", description="Comparison operator")
    value: Any = Field(default=None, description="Operand for single-value operators")
    value1: Any = Field(default=None, description="Lower bound for 'between'")
    value2: Any = Field(default=None, description="Upper bound for 'between'")

    model_config = ConfigDict(frozen=True)
