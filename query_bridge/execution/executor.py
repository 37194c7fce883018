"""
Query execution over in-memory records.

Applies filter, sort, projection and limit/count to a table's record set.
"""

from functools import cmp_to_key
from typing import Any, List, Optional, Sequence

from query_bridge.core.models import ExecutionResult, FilterCondition, Record
from query_bridge.query.comparison import (
    loose_greater_than,
    loose_less_than,
    matches_condition,
)
from query_bridge.schema.type_mappings import UNDEFINED


class QueryExecutor:
    """
    Executes structured queries against a snapshot of records.

    Works on copies only: the records handed in, which belong to the
    dataset store, are never reordered or modified.
    """

    def execute(
        self,
        records: Sequence[Record],
        filter_list: Optional[Sequence[FilterCondition]] = None,
        sort_list: Optional[Sequence[str]] = None,
        field_list: Optional[Sequence[str]] = None,
        query_type: Optional[str] = "list",
        limit_count: Any = None,
    ) -> ExecutionResult:
        """
        Run a query.

        Args:
            records: Table records
            filter_list: Conditions that must all hold
            sort_list: Field names to sort by, highest priority first
            field_list: Field names to keep in list output
            query_type: "count", anything else lists records
            limit_count: Maximum records to list, when a positive integer

        Returns:
            ExecutionResult with the count and, for list queries, the
            projected documents
        """
        matched = self.filter(records, filter_list or [])

        if sort_list:
            matched = self.sort(matched, sort_list)

        if query_type == "count":
            return ExecutionResult(query_type="count", count=len(matched))

        documents = [self.project(record, field_list or []) for record in matched]
        limit = self._effective_limit(limit_count)
        if limit is not None:
            documents = documents[:limit]

        return ExecutionResult(query_type="list", count=len(documents), documents=documents)

    @staticmethod
    def filter(records: Sequence[Record], filter_list: Sequence[FilterCondition]) -> List[Record]:
        """Keep records that satisfy every condition."""
        return [
            record
            for record in records
            if all(matches_condition(record, condition) for condition in filter_list)
        ]

    @staticmethod
    def sort(records: Sequence[Record], sort_list: Sequence[str]) -> List[Record]:
        """Sort ascending by each key in turn; the first non-tie decides."""

        def compare(a: Record, b: Record) -> int:
            for key in sort_list:
                left, right = a.get(key, UNDEFINED), b.get(key, UNDEFINED)
                if loose_less_than(left, right):
                    return -1
                if loose_greater_than(left, right):
                    return 1
            return 0

        return sorted(records, key=cmp_to_key(compare))

    @staticmethod
    def project(record: Record, field_list: Sequence[str]) -> Record:
        """Keep only the listed fields; missing ones become None."""
        return {field: record.get(field) for field in field_list}

    @staticmethod
    def _effective_limit(limit_count: Any) -> Optional[int]:
        if isinstance(limit_count, bool):
            return None
        if isinstance(limit_count, float) and limit_count.is_integer():
            limit_count = int(limit_count)
        if isinstance(limit_count, int) and limit_count > 0:
            return limit_count
        return None
