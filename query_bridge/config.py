"""
Configuration for the query bridge.

Values come from the environment (optionally a ``.env`` file) and from a
``config.json`` listing the tables to load:

    {"ddb_defs": [{"name": "students", "description": "Enrolled students"}]}
"""

import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from query_bridge.core.exceptions import ConfigurationError
from query_bridge.core.models import LLMConfig, TableDescriptor
from query_bridge.llm.client_factory import DEFAULT_MODEL

DEFAULT_CONFIG_PATH = "config.json"


class Settings(BaseModel):
    """Validated runtime configuration."""

    tables: List[TableDescriptor] = Field(default_factory=list)
    aws_region: Optional[str] = None
    llm: LLMConfig = Field(default_factory=lambda: LLMConfig(model=DEFAULT_MODEL))
    max_record_memory_bytes: int = 0
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @classmethod
    def load(cls, config_path: Optional[Union[str, Path]] = None) -> "Settings":
        """
        Load settings from the environment and the table config file.

        Args:
            config_path: Path to config.json. Defaults to QUERY_BRIDGE_CONFIG
                or ./config.json

        Returns:
            Validated settings

        Raises:
            ConfigurationError: If the config file is missing or invalid
        """
        load_dotenv(find_dotenv(usecwd=True))

        path = Path(config_path or os.getenv("QUERY_BRIDGE_CONFIG", DEFAULT_CONFIG_PATH))
        tables = load_table_config(path)

        try:
            return cls(
                tables=tables,
                aws_region=os.getenv("AWS_REGION"),
                llm=LLMConfig(
                    model=os.getenv("OPENAI_MODEL") or os.getenv("LLM_MODEL") or DEFAULT_MODEL,
                    api_key=os.getenv("OPENAI_API_KEY") or os.getenv("LLM_API_KEY"),
                    base_url=os.getenv("LLM_BASE_URL"),
                ),
                max_record_memory_bytes=os.getenv("MAX_RECORD_MEMORY_BYTES") or 0,
                log_level=os.getenv("LOG_LEVEL", "INFO"),
                api_host=os.getenv("API_HOST", "0.0.0.0"),
                api_port=os.getenv("API_PORT", "8000"),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e


def load_table_config(path: Path) -> List[TableDescriptor]:
    """
    Read the table definitions from a config file.

    Args:
        path: Path to a JSON file with a ``ddb_defs`` list

    Returns:
        Table descriptors in file order
    """
    try:
        config = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Config file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")

    try:
        return [TableDescriptor.model_validate(entry) for entry in config.get("ddb_defs") or []]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid table definition in {path}: {e}") from e


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr; stdout is reserved for the stdio transport."""
    logging.basicConfig(
        level=level.upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
