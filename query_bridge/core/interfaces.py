"""
Abstract interfaces for the collaborators the query bridge depends on.

These protocols define the contract that remote stores, language models and
progress channels must implement to plug into the bridge.
"""

from typing import Any, Dict, List, Optional, Protocol, Tuple


class IRecordFetcher(Protocol):
    """
    Retrieve records from a remote table store, one page at a time.
    """

    async def fetch_page(
        self, table_name: str, continuation_token: Optional[Any] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Any]]:
        """
        Fetch one page of records.

        Args:
            table_name: Remote table identifier
            continuation_token: Opaque cursor returned by the previous page,
                or None for the first page

        Returns:
            Tuple of (records, next_token). ``next_token`` is None when the
            table has been read to the end.
        """
        ...


class ILanguageModel(Protocol):
    """
    Submit a prompt to a language model and receive its raw text response.

    Model identifier and temperature are fixed by the implementation.
    """

    async def complete(self, prompt: str) -> str:
        """
        Run a single completion.

        Args:
            prompt: Full prompt text

        Returns:
            The model's text output
        """
        ...


class INotifier(Protocol):
    """
    Best-effort progress channel towards the hosting client.

    ``kind`` is one of "info", "success" or "error".
    """

    async def notify(self, kind: str, message: str) -> None:
        ...
