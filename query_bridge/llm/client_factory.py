"""
LLM client factory and management.

Handles creation of the pydantic-ai agent used to translate prompts into
structured queries.
"""

import logging
import os
from typing import Any, Dict, Optional

from pydantic_ai import Agent
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.openai import OpenAIProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"


class LLMClientFactory:
    """
    Creates and manages the LLM client for query translation.

    Supports OpenAI and OpenAI-compatible APIs. Temperature is pinned to 0
    so the same prompt keeps producing the same query.

    Reads configuration from environment variables by default:
    - OPENAI_MODEL or LLM_MODEL: Model name
    - OPENAI_API_KEY or LLM_API_KEY: API key
    - LLM_BASE_URL: Optional base URL for OpenAI-compatible APIs
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_settings: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize LLM client factory.

        Args:
            model_name: Name of the LLM model (e.g., "gpt-4o", "qwen3:8b")
            api_key: API key for the LLM provider. Optional when using
                base_url (e.g., Ollama doesn't require real API keys).
            base_url: Optional base URL for OpenAI-compatible APIs
                (e.g., "http://localhost:11434/v1" for Ollama)
            model_settings: Extra model settings; temperature is always 0

        Raises:
            ValueError: If api_key is missing when not using base_url
        """
        model_name = model_name or os.getenv("OPENAI_MODEL") or os.getenv("LLM_MODEL") or DEFAULT_MODEL
        api_key = api_key or os.getenv("OPENAI_API_KEY") or os.getenv("LLM_API_KEY")
        base_url = base_url or os.getenv("LLM_BASE_URL")

        self.model_name = model_name
        self.model_settings = {**(model_settings or {}), "temperature": 0}

        if base_url:
            # Normalize base_url - ensure it ends with /v1 for OpenAI-compatible APIs
            normalized_base_url = base_url.rstrip("/")
            if not normalized_base_url.endswith("/v1"):
                normalized_base_url = f"{normalized_base_url}/v1"
            self.base_url = normalized_base_url

            provider_kwargs = {"base_url": normalized_base_url}
            if api_key:
                provider_kwargs["api_key"] = api_key
            provider = OpenAIProvider(**provider_kwargs)
        elif not api_key:
            raise ValueError(
                "api_key is required when not using a custom base_url "
                "(provide as parameter or set OPENAI_API_KEY/LLM_API_KEY env var)"
            )
        else:
            self.base_url = None
            provider = OpenAIProvider(api_key=api_key)

        if model_name.startswith("openai:"):
            model_name = model_name.split(":", 1)[1]
        self.model = OpenAIChatModel(model_name, provider=provider)
        self.agent: Agent[None, str] = Agent(self.model, model_settings=self.model_settings)

    async def complete(self, prompt: str) -> str:
        """
        Submit a prompt and return the raw text response.

        Args:
            prompt: Full prompt text, sent as a single user message

        Returns:
            The model's text output
        """
        logger.debug("Submitting %d-character prompt to %s", len(prompt), self.model_name)
        result = await self.agent.run(prompt)
        return result.output
