"""
Schema inference from sample records.

Derives a representative structural shape for a table by folding a handful
of records into one nested mapping of type tags.
"""

from typing import Any, Dict, Sequence

from query_bridge.core.models import Record, Schema
from query_bridge.schema.type_mappings import TypeMapper, UNDEFINED


SAMPLE_SIZE = 5


class SchemaInferrer:
    """
    Infers a unified schema from sample records.

    The merge is order-sensitive and lossy: when a field's types disagree
    across samples the last one seen wins, and a primitive on either side of
    a nested structure collapses the field to a single tag. Treat the result
    as a representative shape, not a guarantee.
    """

    def __init__(self, sample_size: int = SAMPLE_SIZE):
        """
        Initialize schema inferrer.

        Args:
            sample_size: Number of leading records the store samples
        """
        self.sample_size = sample_size

    def sample(self, records: Sequence[Record]) -> Sequence[Record]:
        """Pick the records used for inference."""
        return records[: self.sample_size]

    def infer(self, sample_records: Sequence[Record]) -> Schema:
        """
        Fold sample records into one schema.

        Args:
            sample_records: Records to infer from, in order

        Returns:
            Nested mapping of field name to type tag or sub-schema
        """
        schema: Schema = {}
        for record in sample_records:
            schema = self._merge(schema, record)
        return schema

    def _merge(self, accumulated: Any, value: Any) -> Any:
        """Merge one value into the accumulated shape."""
        if not (TypeMapper.is_mapping(accumulated) and TypeMapper.is_mapping(value)):
            return TypeMapper.type_tag(value)

        merged: Dict[str, Any] = dict(accumulated)
        for key, item in value.items():
            previous = accumulated.get(key, UNDEFINED)
            if previous is UNDEFINED and TypeMapper.is_mapping(item):
                previous = {}
            merged[key] = self._merge(previous, item)
        return merged


def infer_schema(sample_records: Sequence[Record]) -> Schema:
    """Infer a schema from sample records."""
    return SchemaInferrer().infer(sample_records)
