"""
Interfaces for LLM providers

Contract for the language-model capability consumed by the sales assistant.
The services only depend on this protocol; concrete providers live in
commerce_hub.integrations.llm.
"""

from abc import abstractmethod
from enum import Enum
from typing import Dict, List, Protocol, runtime_checkable


class LLMProvider(str, Enum):
    """Supported providers (all speak the OpenAI chat completions API)"""

    OPENAI = "openai"
    DEEPSEEK = "deepseek"
    GROQ = "groq"
    OTHER = "other"


@runtime_checkable
class ILLM(Protocol):
    """
    Chat-style language model.

    Example:
        ```python
        messages = [
            {"role": "system", "content": "You are a sales assistant"},
            {"role": "user", "content": "Do you sell laptops?"},
        ]
        raw = await llm.generate_chat(messages, temperature=0.3, json_mode=True)
        ```
    """

    @property
    @abstractmethod
    def provider(self) -> LLMProvider:
        """Provider behind this model"""
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Name of the model in use"""
        ...

    @abstractmethod
    async def generate_chat(
        self,
        messages: List[Dict[str, str]],
        *,
        temperature: float = 0.7,
        json_mode: bool = False,
        **kwargs,
    ) -> str:
        """
        Generate a response for a role-tagged message list.

        Args:
            messages: Messages shaped as {"role": "system/user/assistant", "content": "..."}
            temperature: Sampling temperature
            json_mode: Ask the provider to return a single JSON object

        Returns:
            Raw text returned by the model (a JSON document when json_mode is set)

        Raises:
            LLMTimeoutError: The request timed out
            LLMConnectionError: The provider could not be reached
            LLMRateLimitError: The provider rejected the request for rate limiting
            LLMGenerationError: Any other provider failure
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """True when the provider answers a trivial request"""
        ...


class LLMError(Exception):
    """Base error for LLM providers"""

    pass


class LLMConnectionError(LLMError):
    """Provider unreachable"""

    pass


class LLMTimeoutError(LLMConnectionError):
    """Provider did not answer in time"""

    pass


class LLMGenerationError(LLMError):
    """Generation failed"""

    pass


class LLMRateLimitError(LLMError):
    """Rate limit exceeded"""

    pass
