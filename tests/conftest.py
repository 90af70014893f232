"""Shared test fixtures for jsonsmith."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from jsonsmith.config.models import HistoryConfig, JsonsmithConfig
from jsonsmith.history.store import SQLiteHistoryStore
from jsonsmith.llm.base import LLMProvider
from jsonsmith.llm.models import LLMConfig, LLMResponse, TokenUsage


@pytest.fixture
def sample_config():
    return JsonsmithConfig()


@pytest.fixture
def tmp_config(tmp_path):
    """Config whose history database lives under tmp_path."""
    return JsonsmithConfig(
        history=HistoryConfig(db_path=str(tmp_path / "history.db")),
    )


@pytest.fixture
def history_store(tmp_path):
    store = SQLiteHistoryStore(str(tmp_path / "history.db"))
    yield store
    store.close()


def make_llm_response(content: str) -> LLMResponse:
    return LLMResponse(
        content=content,
        usage=TokenUsage(input_tokens=40, output_tokens=20),
        model="test-model",
    )


@pytest.fixture
def mock_llm_provider():
    provider = MagicMock(spec=LLMProvider)
    provider.config = LLMConfig(provider="anthropic", model="test-model")
    provider.generate = AsyncMock(return_value=make_llm_response('{"a": 1, "b": 2}'))
    return provider


@pytest.fixture
def record_rows():
    return [{"a": 1, "b": 2}, {"a": 3, "b": 4}]
