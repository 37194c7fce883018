"""
Shared data models for the query bridge.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


Record = Dict[str, Any]
Schema = Dict[str, Any]


def _as_text(value: Any) -> str:
    """Render a scalar from model output as text; null becomes ""."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value if isinstance(value, str) else str(value)


class TableDescriptor(BaseModel):
    """A configured, queryable table."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""


class FilterCondition(BaseModel):
    """
    A single field comparison produced by the language model.

    ``field`` and ``operator`` are read as plain text whatever the model
    sends: unrecognised or null operators must survive parsing so the
    executor can treat them as a pass-through.
    """

    model_config = ConfigDict(extra="ignore")

    field: str = ""
    matchValue: Any = None
    operator: str = ""

    @field_validator("field", "operator", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class StructuredQuery(BaseModel):
    """Machine-readable query the language model returns for a prompt."""

    model_config = ConfigDict(extra="ignore")

    result: Optional[str] = None
    errorMessage: Optional[str] = None
    tableName: Optional[str] = None
    filterList: List[FilterCondition] = Field(default_factory=list)
    sortList: List[str] = Field(default_factory=list)
    fieldList: List[str] = Field(default_factory=list)
    queryType: Optional[str] = None
    limitCount: Optional[Any] = None

    @field_validator("filterList", "sortList", "fieldList", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("sortList", "fieldList", mode="before")
    @classmethod
    def _names_as_text(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_as_text(name) for name in value]
        return value

    @field_validator("result", "errorMessage", "tableName", "queryType", mode="before")
    @classmethod
    def _scalar_as_text(cls, value: Any) -> Optional[str]:
        return None if value is None else _as_text(value)

    @property
    def is_ok(self) -> bool:
        return self.result == "OK"

    @classmethod
    def error(cls, message: str) -> "StructuredQuery":
        """Build an error-shaped query carrying a diagnostic."""
        return cls(result="error", errorMessage=message)


class ExecutionResult(BaseModel):
    """Outcome of running a structured query over a table's records."""

    query_type: str = "list"
    count: int = 0
    documents: List[Record] = Field(default_factory=list)


class LLMConfig(BaseModel):
    """Configuration for LLM client."""

    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
