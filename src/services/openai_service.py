"""
Simple OpenAI client service

Example:
  from services.openai_service import OpenAIService

  # Default client (configured model)
  client = OpenAIService.get_async_client()

  # Specific model
  client = OpenAIService.get_async_client(model="gpt-4o-mini")

Azure OpenAI is used when `OPENAI_ENDPOINT` is set, the public OpenAI API otherwise.
"""

from openai import AsyncAzureOpenAI, AsyncOpenAI

from common.config import config
from common.logging import get_logger

logger = get_logger(__name__)


class OpenAIService:
    _clients: dict[str, AsyncOpenAI] = {}

    @classmethod
    def get_async_client(cls, model: str | None = None) -> AsyncAzureOpenAI | AsyncOpenAI:
        """Get async OpenAI client for specified model (cached)"""
        model = model or config.openai_model
        logger.debug(f"Getting client for model: {model}")

        if model not in cls._clients:
            cls._clients[model] = cls._create_client()

        return cls._clients[model]

    @classmethod
    def _create_client(cls) -> AsyncAzureOpenAI | AsyncOpenAI:
        api_key = config.openai_key.get_secret_value()
        if not api_key:
            raise ValueError("OPENAI_KEY environment variable is required")

        if config.openai_endpoint:
            return AsyncAzureOpenAI(
                api_key=api_key,
                api_version=config.openai_api_version,
                azure_endpoint=config.openai_endpoint,
            )

        return AsyncOpenAI(api_key=api_key)

    @classmethod
    def clear_cache(cls) -> None:
        cls._clients.clear()
