"""Shared fixtures: a scripted provider, a recording sleep and a ready client."""

from __future__ import annotations

import pytest

from lyricflow.agent.mock_provider import MockProvider
from lyricflow.models.provider import ProviderRequest, ProviderResponse
from lyricflow.services.generation_client import GenerationClient

VALID_KEY = "sk-or-v1-" + "a" * 40


class StubProvider:
    """Replays scripted responses in order. Exceptions in the script are raised."""

    def __init__(self, *script):
        self.script = list(script)
        self.requests: list[ProviderRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def generate(self, request: ProviderRequest) -> ProviderResponse:
        self.requests.append(request)
        if not self.script:
            raise AssertionError("StubProvider ran out of scripted responses")
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, ProviderResponse):
            return item
        return ProviderResponse(text=item)


class RecordingSleep:
    """Awaitable stand-in for asyncio.sleep that only records the delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def make_client(sleep):
    """Build a GenerationClient around a StubProvider scripted with ``script``."""

    def factory(*script, **kwargs) -> tuple[GenerationClient, StubProvider]:
        provider = StubProvider(*script)
        client = GenerationClient(VALID_KEY, provider, sleep=sleep, **kwargs)
        return client, provider

    return factory
