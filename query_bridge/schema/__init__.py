"""Schema inference from sample records."""

from query_bridge.schema.type_mappings import TypeMapper, UNDEFINED
from query_bridge.schema.inference import SchemaInferrer, infer_schema

__all__ = ["TypeMapper", "UNDEFINED", "SchemaInferrer", "infer_schema"]
