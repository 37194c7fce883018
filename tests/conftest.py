"""
Pytest configuration and shared fixtures.
"""
import json
from typing import Any, Dict, List, Optional

import pytest

from query_bridge.core.models import TableDescriptor
from query_bridge.orchestrator import QueryOrchestrator


class FakeFetcher:
    """In-memory IRecordFetcher serving each table in fixed-size pages."""

    def __init__(self, tables: Dict[str, List[Dict[str, Any]]], page_size: int = 2):
        self.tables = tables
        self.page_size = page_size
        self.calls: List[tuple] = []

    async def fetch_page(self, table_name: str, continuation_token: Optional[int] = None):
        self.calls.append((table_name, continuation_token))
        records = self.tables[table_name]
        start = continuation_token or 0
        end = start + self.page_size
        next_token = end if end < len(records) else None
        return records[start:end], next_token


class FakeLLM:
    """ILanguageModel returning canned responses and recording prompts."""

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response


class RecordingNotifier:
    """INotifier that keeps every notification."""

    def __init__(self):
        self.messages: List[tuple] = []

    async def notify(self, kind: str, message: str) -> None:
        self.messages.append((kind, message))


@pytest.fixture
def students():
    return [
        {"name": "Ann", "grade": 9},
        {"name": "Bo", "grade": 10},
    ]


@pytest.fixture
def people():
    return [
        {"name": "Cy", "age": 30, "city": "Oslo"},
        {"name": "Di", "age": 10, "city": "Rome"},
        {"name": "Ed", "age": 20, "city": "Oslo"},
        {"name": "Fa", "age": "25", "city": "Lima"},
    ]


@pytest.fixture
def table_descriptors():
    return [
        TableDescriptor(name="students", description="Students and their grade level"),
        TableDescriptor(name="people", description="People with age and home city"),
    ]


@pytest.fixture
def fetcher(students, people):
    return FakeFetcher({"students": students, "people": people})


@pytest.fixture
def make_orchestrator(table_descriptors, fetcher):
    """Build an orchestrator whose LLM returns the given responses."""

    def _make(*responses: Any, memory_budget_bytes: int = 0) -> QueryOrchestrator:
        return QueryOrchestrator(
            tables=table_descriptors,
            fetcher=fetcher,
            llm=FakeLLM(*responses),
            memory_budget_bytes=memory_budget_bytes,
        )

    return _make


@pytest.fixture
def notifier():
    return RecordingNotifier()


# Markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "mcp: marks tests related to MCP functionality")
