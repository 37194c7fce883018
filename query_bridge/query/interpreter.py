"""
Interpret the language model's response as a structured query.
"""

import json
import logging
import re
from typing import NamedTuple, Optional

from pydantic import ValidationError

from query_bridge.core.models import StructuredQuery

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\s*(.*?)```", flags=re.S | re.I)


class ParseOutcome(NamedTuple):
    """Either a parsed query or a diagnostic explaining why parsing failed."""

    query: Optional[StructuredQuery]
    diagnostic: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.query is not None


class StructuredQueryInterpreter:
    """
    Turns free-form LLM text into a StructuredQuery.

    Parsing is total: malformed output becomes an error-shaped query rather
    than an exception, so callers only ever check ``result``.
    """

    def parse(self, response_text: Optional[str]) -> StructuredQuery:
        """
        Parse a response into a StructuredQuery.

        Args:
            response_text: Raw text returned by the language model

        Returns:
            The parsed query, or one with result "error" and a diagnostic
        """
        outcome = self.try_parse(response_text)
        if outcome.ok:
            return outcome.query
        logger.warning("Unusable language model response: %s", outcome.diagnostic)
        return StructuredQuery.error(outcome.diagnostic)

    def try_parse(self, response_text: Optional[str]) -> ParseOutcome:
        """Parse a response, reporting failure as a diagnostic."""
        text = self._strip_code_fence(response_text or "")
        if not text:
            return ParseOutcome(None, "Empty response from language model")

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            return ParseOutcome(None, f"Could not parse language model response as JSON: {e}")

        if not isinstance(payload, dict):
            return ParseOutcome(
                None,
                f"Expected a JSON object from language model, got {type(payload).__name__}",
            )

        try:
            return ParseOutcome(StructuredQuery.model_validate(payload))
        except ValidationError as e:
            return ParseOutcome(None, f"Language model response has an invalid shape: {e}")

    @staticmethod
    def _strip_code_fence(text: str) -> str:
        """Extract JSON even if wrapped in ```json ... ``` or ``` ... ```."""
        text = text.strip()
        fenced = _CODE_FENCE.findall(text)
        if fenced:
            text = fenced[-1].strip()
        return text
