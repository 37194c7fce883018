"""Language model access."""

from query_bridge.llm.client_factory import LLMClientFactory

__all__ = ["LLMClientFactory"]
