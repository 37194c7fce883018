"""Core interfaces, models and exceptions for the query bridge."""

from query_bridge.core.interfaces import (
    IRecordFetcher,
    ILanguageModel,
    INotifier,
)
from query_bridge.core.models import (
    Record,
    Schema,
    TableDescriptor,
    FilterCondition,
    StructuredQuery,
    ExecutionResult,
    LLMConfig,
)
from query_bridge.core.exceptions import (
    QueryBridgeError,
    ConfigurationError,
    MemoryBudgetExceeded,
    ToolNotFoundError,
)

__all__ = [
    "IRecordFetcher",
    "ILanguageModel",
    "INotifier",
    "Record",
    "Schema",
    "TableDescriptor",
    "FilterCondition",
    "StructuredQuery",
    "ExecutionResult",
    "LLMConfig",
    "QueryBridgeError",
    "ConfigurationError",
    "MemoryBudgetExceeded",
    "ToolNotFoundError",
]
