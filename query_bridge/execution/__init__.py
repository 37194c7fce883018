"""Query execution and result formatting."""

from query_bridge.execution.executor import QueryExecutor
from query_bridge.execution.result_formatter import ResultFormatter

__all__ = ["QueryExecutor", "ResultFormatter"]
