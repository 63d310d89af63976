"""
Tests for the OpenAI-compatible LLM adapter. No network calls are made.
"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from commerce_hub.config.settings import Settings
from commerce_hub.core.interfaces.llm import (
    LLMConnectionError,
    LLMGenerationError,
    LLMProvider,
    LLMTimeoutError,
)
from commerce_hub.integrations.llm import OpenAICompatibleLLM, create_openai_compatible_llm


@pytest.fixture
def llm():
    return OpenAICompatibleLLM(api_key="sk-test", model="gpt-4o-mini")


@pytest.mark.unit
def test_provider_from_base_url():
    assert OpenAICompatibleLLM("k", "m").provider == LLMProvider.OPENAI
    assert OpenAICompatibleLLM("k", "m", base_url="https://api.groq.com/openai/v1").provider == LLMProvider.GROQ
    assert OpenAICompatibleLLM("k", "m", base_url="http://localhost:8080/v1").provider == LLMProvider.OTHER


@pytest.mark.unit
def test_clients_are_cached_per_temperature_and_mode(llm):
    plain = llm.get_llm(temperature=0.3)
    json_client = llm.get_llm(temperature=0.3, json_mode=True)

    assert llm.get_llm(temperature=0.3) is plain
    assert json_client is not plain
    assert llm.get_llm(temperature=0.3, json_mode=True) is json_client


@pytest.mark.unit
def test_clean_response_strips_reasoning():
    assert OpenAICompatibleLLM.clean_response("<think>hmm</think>\n  Hello ") == "Hello"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_api_key_is_connection_error():
    llm = create_openai_compatible_llm(Settings(_env_file=None, LLM_API_KEY=None))

    with pytest.raises(LLMConnectionError):
        await llm.generate_chat([{"role": "user", "content": "hi"}])


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raised,expected",
    [
        (httpx.ReadTimeout("slow"), LLMTimeoutError),
        (httpx.ConnectError("refused"), LLMConnectionError),
        (ValueError("weird"), LLMGenerationError),
    ],
)
async def test_provider_errors_are_translated(llm, raised, expected):
    # Pre-seed the client cache with a stub
    llm._clients[(0.3, False)] = Mock(ainvoke=AsyncMock(side_effect=raised))

    with pytest.raises(expected):
        await llm.generate_chat([{"role": "user", "content": "hi"}], temperature=0.3)
