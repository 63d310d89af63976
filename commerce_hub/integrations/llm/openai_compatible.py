"""
OpenAI-compatible LLM implementation for external APIs.

Works with OpenAI, DeepSeek, Groq or any server exposing the chat
completions API. Uses langchain_openai.ChatOpenAI with a configurable
base_url; provider errors are translated into the LLMError hierarchy.
"""

import logging
import re
from typing import Dict, List

import httpx
import openai
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from commerce_hub.config.settings import Settings
from commerce_hub.core.interfaces.llm import (
    ILLM,
    LLMConnectionError,
    LLMError,
    LLMGenerationError,
    LLMProvider,
    LLMRateLimitError,
    LLMTimeoutError,
)

logger = logging.getLogger(__name__)

# Reasoning models may prepend <think>...</think> blocks
THINK_PATTERN = re.compile(r"<think>.*?</think>", re.DOTALL)

PROVIDER_HOSTS = {
    "api.openai.com": LLMProvider.OPENAI,
    "api.deepseek.com": LLMProvider.DEEPSEEK,
    "api.groq.com": LLMProvider.GROQ,
}


class OpenAICompatibleLLM(ILLM):
    """
    OpenAI-compatible chat model.

    ChatOpenAI clients are cached per (temperature, json_mode) on the
    instance, so one OpenAICompatibleLLM can serve every service.

    Example:
        ```python
        llm = OpenAICompatibleLLM(api_key="sk-...", model="gpt-4o-mini")
        text = await llm.generate_chat([{"role": "user", "content": "Hi"}])
        ```
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: int = 30,
        max_retries: int = 0,
        **kwargs,
    ):
        """
        Initialize OpenAI-compatible LLM.

        Args:
            api_key: API key for the endpoint
            model: Chat model name
            base_url: Base URL of the OpenAI-compatible API
            timeout: Request timeout in seconds
            max_retries: Client-side retries (0 keeps one call per request)
            **kwargs: Additional arguments passed to ChatOpenAI
        """
        if not api_key:
            logger.warning("LLM_API_KEY is not set; every LLM call will fail as unavailable")

        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._timeout = timeout
        self._max_retries = max_retries
        self._kwargs = kwargs
        self._clients: dict[tuple[float, bool], ChatOpenAI] = {}

        logger.info(f"Initialized OpenAICompatibleLLM: base_url={base_url}, model={model}")

    @property
    def provider(self) -> LLMProvider:
        host = httpx.URL(self._base_url).host
        return PROVIDER_HOSTS.get(host, LLMProvider.OTHER)

    @property
    def model_name(self) -> str:
        return self._model

    def get_llm(self, temperature: float = 0.7, json_mode: bool = False) -> ChatOpenAI:
        """
        Get a cached ChatOpenAI client.

        Args:
            temperature: Sampling temperature
            json_mode: Request a JSON object response format

        Returns:
            Configured ChatOpenAI instance
        """
        cache_key = (temperature, json_mode)
        if cache_key in self._clients:
            return self._clients[cache_key]

        extra = dict(self._kwargs)
        model_kwargs = dict(extra.pop("model_kwargs", {}) or {})
        if json_mode:
            model_kwargs["response_format"] = {"type": "json_object"}

        client = ChatOpenAI(
            model=self._model,
            api_key=self._api_key,
            base_url=self._base_url,
            temperature=temperature,
            timeout=self._timeout,
            max_retries=self._max_retries,
            model_kwargs=model_kwargs,
            **extra,
        )
        self._clients[cache_key] = client
        logger.debug(f"Created ChatOpenAI client: model={self._model}, temp={temperature}, json={json_mode}")
        return client

    @staticmethod
    def _to_langchain(messages: List[Dict[str, str]]) -> list[BaseMessage]:
        converted: list[BaseMessage] = []
        for msg in messages:
            role = msg.get("role")
            content = msg.get("content", "")
            if role == "system":
                converted.append(SystemMessage(content=content))
            elif role == "assistant":
                converted.append(AIMessage(content=content))
            else:
                converted.append(HumanMessage(content=content))
        return converted

    @staticmethod
    def clean_response(content: str) -> str:
        """Strip reasoning blocks some models emit before the answer."""
        return THINK_PATTERN.sub("", content).strip()

    async def generate_chat(
        self,
        messages: List[Dict[str, str]],
        *,
        temperature: float = 0.7,
        json_mode: bool = False,
        **kwargs,
    ) -> str:
        if not self._api_key:
            raise LLMConnectionError("LLM API key not configured. Set LLM_API_KEY.")

        try:
            llm = self.get_llm(temperature=temperature, json_mode=json_mode)
            response = await llm.ainvoke(self._to_langchain(messages), **kwargs)
            content = response.content if isinstance(response.content, str) else str(response.content)
            return self.clean_response(content)

        except (openai.APITimeoutError, httpx.TimeoutException) as e:
            logger.error(f"Timeout calling {self._base_url}: {e}")
            raise LLMTimeoutError(f"Timeout calling LLM API at {self._base_url}") from e
        except (openai.APIConnectionError, httpx.ConnectError) as e:
            logger.error(f"Connection error to {self._base_url}: {e}")
            raise LLMConnectionError(f"Could not connect to LLM API at {self._base_url}") from e
        except openai.RateLimitError as e:
            logger.warning(f"Rate limit exceeded for {self._base_url}: {e}")
            raise LLMRateLimitError(f"Rate limit exceeded: {e}") from e
        except Exception as e:
            logger.error(f"Error in chat generation with {self._model}: {e}")
            raise LLMGenerationError(f"Failed to generate chat response with {self._model}: {e}") from e

    async def health_check(self) -> bool:
        try:
            await self.generate_chat([{"role": "user", "content": "ping"}], temperature=0.0)
            return True
        except LLMError as e:
            logger.warning(f"LLM health check failed: {e}")
            return False


def create_openai_compatible_llm(settings: Settings) -> OpenAICompatibleLLM:
    """
    Build the LLM from application settings.

    A missing LLM_API_KEY does not fail here; calls raise LLMConnectionError.
    """
    return OpenAICompatibleLLM(
        api_key=settings.LLM_API_KEY or "",
        model=settings.LLM_MODEL,
        base_url=settings.LLM_BASE_URL,
        timeout=settings.LLM_REQUEST_TIMEOUT,
        max_retries=settings.LLM_MAX_RETRIES,
    )
