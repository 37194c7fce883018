"""
Tests for the HTTP API.
"""
import asyncio

import pytest
from fastapi.testclient import TestClient

from query_bridge.api import create_app


@pytest.fixture
def loaded_orchestrator(make_orchestrator):
    orchestrator = make_orchestrator(
        {
            "result": "OK",
            "tableName": "students",
            "filterList": [{"field": "grade", "matchValue": 10, "operator": "equals"}],
            "sortList": [],
            "fieldList": [],
            "queryType": "count",
        },
        {"result": "OK", "tableName": "teachers", "queryType": "count"},
    )
    asyncio.run(orchestrator.initialize())
    return orchestrator


@pytest.fixture
def client(loaded_orchestrator):
    with TestClient(create_app(loaded_orchestrator)) as test_client:
        yield test_client


class TestAPI:

    def test_health_lists_tables(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "tables": ["students", "people"]}

    def test_tools(self, client):
        response = client.get("/tools")
        assert [tool["name"] for tool in response.json()] == ["query_table"]

    def test_query_then_unknown_table(self, client):
        response = client.post("/query", json={"prompt": "how many students are in grade 10?"})
        assert response.status_code == 200
        assert response.json() == {
            "prompt": "how many students are in grade 10?",
            "text": "Found 1 matching records.",
        }

        response = client.post("/query", json={"prompt": "how many teachers?"})
        assert response.json()["text"] == "Table not found"

    def test_prompt_is_required(self, client):
        response = client.post("/query", json={})
        assert response.status_code == 422

    def test_not_loaded_without_lifespan(self, loaded_orchestrator):
        client = TestClient(create_app(loaded_orchestrator))
        response = client.post("/query", json={"prompt": "x"})
        assert response.status_code == 503
