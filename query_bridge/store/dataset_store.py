"""
In-memory dataset store.

Holds the full record set and inferred schema of every configured table,
loaded once at startup from the remote table store.
"""

import inspect
import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from query_bridge.core.exceptions import MemoryBudgetExceeded
from query_bridge.core.interfaces import IRecordFetcher
from query_bridge.core.models import Record, Schema, TableDescriptor
from query_bridge.schema.inference import SchemaInferrer

logger = logging.getLogger(__name__)

FetchAll = Callable[[str], Awaitable[Sequence[Record]]]
ProgressHook = Callable[[str], Union[None, Awaitable[None]]]


async def collect_pages(fetcher: IRecordFetcher, table_name: str) -> List[Record]:
    """
    Read a whole table by following continuation tokens.

    Args:
        fetcher: Page-level fetcher for the remote store
        table_name: Table to read

    Returns:
        Every record of the table, in page order
    """
    records: List[Record] = []
    token: Optional[Any] = None
    pages = 0
    while True:
        page, token = await fetcher.fetch_page(table_name, token)
        records.extend(page)
        pages += 1
        if not token:
            break
    logger.debug("Fetched %d records from '%s' in %d page(s)", len(records), table_name, pages)
    return records


def estimate_size(records: Sequence[Record]) -> int:
    """Estimate the serialized byte size of a record set (compact UTF-8 JSON)."""
    payload = json.dumps(list(records), separators=(",", ":"), ensure_ascii=False, default=str)
    return len(payload.encode("utf-8"))


class DatasetStore:
    """
    Owns every loaded table and its schema.

    Populated by ``load``; afterwards it is treated as a read-only
    snapshot and shared by all queries. Loading again replaces the
    snapshot and restarts the size total.
    """

    def __init__(self, inferrer: Optional[SchemaInferrer] = None):
        """
        Initialize an empty store.

        Args:
            inferrer: Schema inferrer to use (defaults to a 5-record sampler)
        """
        self.inferrer = inferrer or SchemaInferrer()
        self._descriptors: List[TableDescriptor] = []
        self._records: Dict[str, List[Record]] = {}
        self._schemas: Dict[str, Schema] = {}
        self.total_bytes = 0

    async def load(
        self,
        tables: Sequence[TableDescriptor],
        fetch_all: FetchAll,
        memory_budget_bytes: Optional[int] = None,
        on_progress: Optional[ProgressHook] = None,
    ) -> None:
        """
        Load tables one at a time, in the given order.

        Args:
            tables: Tables to load
            fetch_all: Returns the complete record set of a table
            memory_budget_bytes: Cumulative size limit; 0 or None means unbounded
            on_progress: Called with each table name before it is fetched

        Raises:
            MemoryBudgetExceeded: The running total went over the budget. The
                tables loaded so far stay resident; the rest are skipped.
        """
        self._descriptors = list(tables)
        self._records = {}
        self._schemas = {}
        self.total_bytes = 0

        for table in tables:
            if on_progress is not None:
                outcome = on_progress(table.name)
                if inspect.isawaitable(outcome):
                    await outcome

            logger.info("Loading table '%s'", table.name)
            records = list(await fetch_all(table.name))
            self._records[table.name] = records

            size = estimate_size(records)
            self.total_bytes += size
            logger.info(
                "Loaded %d records from '%s' (%d bytes, %d total)",
                len(records), table.name, size, self.total_bytes,
            )
            if memory_budget_bytes and self.total_bytes > memory_budget_bytes:
                raise MemoryBudgetExceeded(table.name, self.total_bytes, memory_budget_bytes)

            self._schemas[table.name] = self.inferrer.infer(self.inferrer.sample(records))

    async def load_from(
        self,
        tables: Sequence[TableDescriptor],
        fetcher: IRecordFetcher,
        memory_budget_bytes: Optional[int] = None,
        on_progress: Optional[ProgressHook] = None,
    ) -> None:
        """Load tables through a page-level fetcher."""

        async def fetch_all(table_name: str) -> List[Record]:
            return await collect_pages(fetcher, table_name)

        await self.load(tables, fetch_all, memory_budget_bytes, on_progress)

    def records_of(self, table_name: str) -> Optional[List[Record]]:
        """Get the records of a table, or None if it was never loaded."""
        return self._records.get(table_name)

    def schema_of(self, table_name: str) -> Optional[Schema]:
        """Get the inferred schema of a table, or None if it has none."""
        return self._schemas.get(table_name)

    def has_table(self, table_name: Optional[str]) -> bool:
        return table_name is not None and table_name in self._records

    def table_names(self) -> List[str]:
        """Names of the tables currently resident, in load order."""
        return list(self._records.keys())

    def all_table_descriptors(self) -> List[TableDescriptor]:
        return list(self._descriptors)

    def all_schemas(self) -> Dict[str, Schema]:
        return dict(self._schemas)
