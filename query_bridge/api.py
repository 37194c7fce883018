"""
FastAPI REST API for the query bridge.

Serves the same ``query_table`` operation as the MCP server over HTTP.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field

from query_bridge import __version__
from query_bridge.config import Settings, configure_logging
from query_bridge.orchestrator import QueryOrchestrator

logger = logging.getLogger(__name__)


class QueryRequest(BaseModel):
    """Request model for a natural language query."""
    prompt: str = Field(..., description="Natural language query string")


class QueryResponse(BaseModel):
    """Response model carrying the text result."""
    prompt: str
    text: str


class ToolInfo(BaseModel):
    name: str
    description: str


def get_orchestrator(request: Request) -> QueryOrchestrator:
    """Get the orchestrator loaded at startup."""
    orchestrator: Optional[QueryOrchestrator] = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Tables are not loaded")
    return orchestrator


def create_app(orchestrator: Optional[QueryOrchestrator] = None) -> FastAPI:
    """
    Create the API application.

    Args:
        orchestrator: Pre-loaded orchestrator. When omitted, one is built
            from Settings and loaded during startup.

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if orchestrator is not None:
            app.state.orchestrator = orchestrator
        else:
            settings = Settings.load()
            configure_logging(settings.log_level)
            loaded = QueryOrchestrator.from_dynamodb(
                tables=settings.tables,
                region=settings.aws_region,
                llm_model=settings.llm.model,
                llm_api_key=settings.llm.api_key,
                llm_base_url=settings.llm.base_url,
                memory_budget_bytes=settings.max_record_memory_bytes,
            )
            await loaded.initialize()
            app.state.orchestrator = loaded
        yield

    app = FastAPI(
        title="DynamoDB Query Bridge API",
        description="Run natural language queries over in-memory DynamoDB tables",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health(request: Request):
        loaded = getattr(request.app.state, "orchestrator", None)
        return {
            "status": "ok",
            "tables": loaded.store.table_names() if loaded is not None else [],
        }

    @app.get("/tools", response_model=List[ToolInfo])
    async def list_tools():
        return [
            ToolInfo(
                name="query_table",
                description="Run a natural language query over a configured DynamoDB table",
            )
        ]

    @app.post("/query", response_model=QueryResponse)
    async def query_table(
        request: QueryRequest,
        orchestrator: QueryOrchestrator = Depends(get_orchestrator),
    ):
        """
        Run a natural language query.

        Query-time problems (model errors, unknown tables) come back as
        ordinary text, not HTTP errors.
        """
        text = await orchestrator.query_table(request.prompt)
        logger.debug("query_table(%r) -> %d characters", request.prompt, len(text))
        return QueryResponse(prompt=request.prompt, text=text)

    return app


app = create_app()


def main() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = Settings.load()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
