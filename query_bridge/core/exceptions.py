"""
Exceptions raised by the query bridge.
"""


class QueryBridgeError(Exception):
    """Base class for all query bridge errors."""


class ConfigurationError(QueryBridgeError):
    """Configuration file or environment is missing or invalid."""


class MemoryBudgetExceeded(QueryBridgeError):
    """
    Cumulative size of loaded tables went over the configured budget.

    Raised right after the offending table has been fetched; the remaining
    tables are not loaded.
    """

    def __init__(self, table_name: str, current_total_bytes: int, budget_bytes: int):
        self.table_name = table_name
        self.current_total_bytes = current_total_bytes
        self.budget_bytes = budget_bytes
        super().__init__(
            f"Memory limit exceeded while loading table '{table_name}'. "
            f"Current: {current_total_bytes}, Limit: {budget_bytes}"
        )


class ToolNotFoundError(QueryBridgeError):
    """An unknown tool was invoked, or its arguments were missing."""

    def __init__(self, message: str = "Tool not found or missing arguments"):
        super().__init__(message)
