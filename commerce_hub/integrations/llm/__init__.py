"""
LLM Integrations

OpenAI-compatible chat model used by the sales assistant services.
"""

from commerce_hub.integrations.llm.openai_compatible import (
    OpenAICompatibleLLM,
    create_openai_compatible_llm,
)

__all__ = [
    "OpenAICompatibleLLM",
    "create_openai_compatible_llm",
]
