from commerce_hub.core.interfaces.llm import (
    ILLM,
    LLMConnectionError,
    LLMError,
    LLMGenerationError,
    LLMProvider,
    LLMRateLimitError,
    LLMTimeoutError,
)

__all__ = [
    "ILLM",
    "LLMConnectionError",
    "LLMError",
    "LLMGenerationError",
    "LLMProvider",
    "LLMRateLimitError",
    "LLMTimeoutError",
]
