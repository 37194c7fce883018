"""
Result formatting utilities.

Turns execution results into the text returned to the calling agent.
"""

import json

from query_bridge.core.models import ExecutionResult


class ResultFormatter:
    """Formats execution results and failures as text content."""

    TABLE_NOT_FOUND = "Table not found"

    @staticmethod
    def format_result(result: ExecutionResult) -> str:
        """
        Format an execution result.

        Args:
            result: Output of the query executor

        Returns:
            A one-line count message, or the documents as indented JSON
        """
        if result.query_type == "count":
            return f"Found {result.count} matching records."
        return json.dumps(result.documents, indent=2, ensure_ascii=False, default=str)

    @staticmethod
    def format_error(message: str) -> str:
        """Format an error reported by (or about) the language model."""
        return f"AI error: {message}"
