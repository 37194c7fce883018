"""
Query orchestrator - main entry point.

Coordinates the dataset store, prompt generation, the language model,
response interpretation and execution behind a single operation.
"""

import logging
from typing import Optional, Sequence

from query_bridge.core.interfaces import ILanguageModel, INotifier, IRecordFetcher
from query_bridge.core.models import StructuredQuery, TableDescriptor
from query_bridge.execution.executor import QueryExecutor
from query_bridge.execution.result_formatter import ResultFormatter
from query_bridge.query.interpreter import StructuredQueryInterpreter
from query_bridge.query.prompt_generator import PromptGenerator
from query_bridge.store.dataset_store import DatasetStore

logger = logging.getLogger(__name__)


class QueryOrchestrator:
    """
    Main orchestrator for natural-language table queries.

    Owns the dataset store once it has been loaded and answers
    ``query_table`` calls against it. Query-time failures are returned as
    text; only startup failures raise.
    """

    def __init__(
        self,
        tables: Sequence[TableDescriptor],
        fetcher: IRecordFetcher,
        llm: ILanguageModel,
        memory_budget_bytes: int = 0,
        store: Optional[DatasetStore] = None,
    ):
        """
        Initialize query orchestrator.

        Args:
            tables: Tables to load, in load order
            fetcher: Page-level fetcher for the remote store
            llm: Language model client
            memory_budget_bytes: Cumulative load limit; 0 means unbounded
            store: Dataset store to populate (a fresh one by default)
        """
        self.tables = list(tables)
        self.fetcher = fetcher
        self.llm = llm
        self.memory_budget_bytes = memory_budget_bytes
        self.store = store or DatasetStore()

        self.prompt_generator = PromptGenerator()
        self.interpreter = StructuredQueryInterpreter()
        self.query_executor = QueryExecutor()
        self.formatter = ResultFormatter()

    @classmethod
    def from_dynamodb(
        cls,
        tables: Sequence[TableDescriptor],
        region: Optional[str] = None,
        llm_model: Optional[str] = None,
        llm_api_key: Optional[str] = None,
        llm_base_url: Optional[str] = None,
        memory_budget_bytes: int = 0,
    ) -> "QueryOrchestrator":
        """
        Create orchestrator for DynamoDB tables and an OpenAI model.

        Args:
            tables: Tables to load
            region: AWS region
            llm_model: LLM model name
            llm_api_key: LLM API key
            llm_base_url: Optional OpenAI-compatible endpoint
            memory_budget_bytes: Cumulative load limit; 0 means unbounded

        Returns:
            Configured QueryOrchestrator
        """
        from query_bridge.adapters.dynamodb import DynamoRecordFetcher
        from query_bridge.llm.client_factory import LLMClientFactory

        return cls(
            tables=tables,
            fetcher=DynamoRecordFetcher(region=region),
            llm=LLMClientFactory(llm_model, llm_api_key, llm_base_url),
            memory_budget_bytes=memory_budget_bytes,
        )

    async def initialize(self, notifier: Optional[INotifier] = None) -> None:
        """
        Load every configured table into memory.

        Args:
            notifier: Optional progress channel

        Raises:
            MemoryBudgetExceeded: The load went over budget
            Exception: Any remote fetch failure, after notifying it
        """

        async def announce(table_name: str) -> None:
            if notifier is not None:
                await notifier.notify("info", f"Loading table: {table_name}")

        try:
            await self.store.load_from(
                self.tables,
                self.fetcher,
                memory_budget_bytes=self.memory_budget_bytes,
                on_progress=announce,
            )
        except Exception as e:
            logger.error("Table load failed: %s", e)
            if notifier is not None:
                await notifier.notify("error", str(e))
            raise

        loaded = ", ".join(self.store.table_names())
        logger.info("Initialization complete. Tables loaded: %s", loaded)
        if notifier is not None:
            await notifier.notify("success", f"Initialization complete. Tables loaded: {loaded}")

    async def translate(self, prompt: str) -> StructuredQuery:
        """
        Ask the language model for a structured query.

        Args:
            prompt: Natural-language request

        Returns:
            Parsed query; an error-shaped one if the call or parse failed
        """
        augmented = self.prompt_generator.build(
            prompt, self.store.all_table_descriptors(), self.store.all_schemas()
        )
        try:
            response = await self.llm.complete(augmented)
        except Exception as e:
            logger.exception("Language model request failed")
            return StructuredQuery.error(f"Language model request failed: {e}")
        return self.interpreter.parse(response)

    async def query_table(self, prompt: str) -> str:
        """
        Run a natural-language query over the loaded tables.

        Args:
            prompt: Natural-language request

        Returns:
            Text result: an AI error, "Table not found", a count message or
            a JSON array of records
        """
        structured = await self.translate(prompt)

        if not structured.is_ok:
            return self.formatter.format_error(structured.errorMessage or "No error message provided")

        records = self.store.records_of(structured.tableName) if structured.tableName else None
        if records is None:
            logger.info("Language model chose unknown table %r", structured.tableName)
            return ResultFormatter.TABLE_NOT_FOUND

        result = self.query_executor.execute(
            records,
            structured.filterList,
            structured.sortList,
            structured.fieldList,
            structured.queryType,
            structured.limitCount,
        )
        return self.formatter.format_result(result)
