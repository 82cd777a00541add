import os
import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

# tests/conftest.py

# Log ke console saja selama test, jangan tulis ke logs/
os.environ.setdefault("LOG_MODE", "stdout")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("APP_ENV", "testing")

from cyberguard import create_app  # noqa: E402
from cyberguard.config import ServiceConfigs, TestingConfig  # noqa: E402
from cyberguard.extensions import shutdown_extensions  # noqa: E402
from cyberguard.services.llm_chain.llm_chains import LLMChains  # noqa: E402


def _chat_response(content: Optional[str] = None, parsed: Any = None, refusal: Optional[str] = None):
    message = SimpleNamespace(content=content, parsed=parsed, refusal=refusal)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeCompletions:
    """Stand-in for ``client.chat.completions`` of the OpenAI SDK."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.parsed: Any = None
        self.content: Optional[str] = None
        self.refusal: Optional[str] = None
        self.error: Optional[BaseException] = None

    def reply_with(self, payload: Dict[str, Any]) -> None:
        """Reply with a structured output built from ``payload``."""
        self.parsed = None
        self.content = json.dumps(payload)

    async def parse(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        parsed = self.parsed
        if parsed is None and self.content:
            parsed = kwargs["response_format"].model_validate_json(self.content)
        return _chat_response(content=self.content, parsed=parsed, refusal=self.refusal)

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return _chat_response(content=self.content)


class FakeOpenAI:
    def __init__(self) -> None:
        self.chat = SimpleNamespace(completions=FakeCompletions())


class CreateOnlyCompletions:
    """An OpenAI-compatible client whose SDK has no ``parse`` helper."""

    def __init__(self, content: Optional[str]) -> None:
        self.content = content
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        return _chat_response(content=self.content)


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture
def completions(fake_openai: FakeOpenAI) -> FakeCompletions:
    return fake_openai.chat.completions


@pytest.fixture
def llm(fake_openai: FakeOpenAI) -> LLMChains:
    return LLMChains("test-model", client=fake_openai, request_timeout=5)  # type: ignore[arg-type]


@pytest.fixture
async def app(llm: LLMChains):
    app = await create_app(
        TestingConfig,
        service_configs=ServiceConfigs(llm_api_key="test-key", initial_network_events=20),
    )
    app.extensions["llm"] = llm
    yield app
    await shutdown_extensions(app)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def create_only_llm():
    """Build an LLMChains whose client only offers ``chat.completions.create``."""

    def _make(content: Optional[str]):
        completions = CreateOnlyCompletions(content)
        client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
        return LLMChains("test-model", client=client), completions  # type: ignore[arg-type]

    return _make
