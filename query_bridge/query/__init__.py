"""Prompt building, response interpretation and comparison semantics."""

from query_bridge.query.prompt_generator import PromptGenerator
from query_bridge.query.interpreter import StructuredQueryInterpreter, ParseOutcome
from query_bridge.query.comparison import (
    loose_equals,
    loose_less_than,
    loose_greater_than,
    matches_condition,
    to_number,
)

__all__ = [
    "PromptGenerator",
    "StructuredQueryInterpreter",
    "ParseOutcome",
    "loose_equals",
    "loose_less_than",
    "loose_greater_than",
    "matches_condition",
    "to_number",
]
