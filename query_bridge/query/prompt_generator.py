"""
Generate prompts for LLM query translation.
"""

import json
from typing import Dict, Sequence

from query_bridge.core.models import Schema, TableDescriptor


FILTER_OPERATORS = ("equals", "notEquals", "greaterThan", "lessThan")
QUERY_TYPES = ("count", "list")


class PromptGenerator:
    """
    Builds the prompt that asks the LLM for a structured query.

    The prompt carries the user's words verbatim, every configured table
    with its description, the inferred schemas, and the exact JSON shape
    the response must take.
    """

    def build(
        self,
        user_prompt: str,
        table_descriptors: Sequence[TableDescriptor],
        schemas: Dict[str, Schema],
    ) -> str:
        """
        Build the augmented prompt.

        Args:
            user_prompt: The original natural-language request
            table_descriptors: Configured tables
            schemas: Inferred schema per table name

        Returns:
            Prompt text to submit to the language model
        """
        tables = [descriptor.model_dump() for descriptor in table_descriptors]
        operators = " | ".join(f'"{op}"' for op in FILTER_OPERATORS)
        query_types = " | ".join(f'"{qt}"' for qt in QUERY_TYPES)

        return f"""Translate the following user prompt into a structured query.

User prompt: "{user_prompt}"

Available tables:
{json.dumps(tables, indent=2, ensure_ascii=False)}

Schemas:
{json.dumps(schemas, indent=2, ensure_ascii=False)}

Return a JSON object with the following fields:
- result: "OK" or "error"
- errorMessage: string explaining the problem, only if result is "error"
- tableName: string, the "name" of one of the available tables
- filterList: [{{ "field": string, "matchValue": string | number | boolean, "operator": {operators} }}]
- sortList: list of field names to sort by, in priority order
- fieldList: list of field names to include in the output
- queryType: {query_types}
- limitCount: optional positive integer limiting the number of records returned

Use field names exactly as they appear in the schemas. All filters must hold
for a record to match. If the prompt cannot be answered from these tables,
set result to "error" and explain why in errorMessage.
Output only the JSON object, with no extra explanation.
"""
