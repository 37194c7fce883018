"""
Query Bridge - natural-language queries over in-memory DynamoDB snapshots.

Main entry point for creating query orchestrators.
"""

from query_bridge.orchestrator import QueryOrchestrator

__version__ = "1.0.0"

__all__ = ["QueryOrchestrator", "__version__"]
