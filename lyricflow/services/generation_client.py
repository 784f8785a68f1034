"""The single client every agent talks to the LLM provider through.

Owns the credentials, the retry policy and the per-call timeout so the agents
only deal with prompts and schemas.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from typing import Awaitable, Callable, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from lyricflow.agent.debug import trace_request
from lyricflow.config import MAX_RETRIES, PROVIDER_TIMEOUT, RETRY_INITIAL_DELAY
from lyricflow.errors import (
    RETRYABLE_ERRORS,
    EmptyResponseError,
    MissingCredentialsError,
    ParseFailureError,
    TransientProviderError,
)
from lyricflow.models.provider import (
    WEB_SEARCH_TOOL,
    ProviderConfig,
    ProviderRequest,
    ProviderResponse,
    WebSource,
)
from lyricflow.services.provider import OpenRouterProvider, Provider
from lyricflow.services.validation import validate_api_key

log = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

Sleep = Callable[[float], Awaitable[None]]

_CODE_FENCE = re.compile(r"```(?:json)?\s*")
_DECODER = json.JSONDecoder()


async def retry_with_backoff(
    fn: Callable[[], Awaitable[T]],
    retries: int = MAX_RETRIES,
    delay: float = RETRY_INITIAL_DELAY,
    sleep: Sleep = asyncio.sleep,
) -> T:
    """Await ``fn`` until it succeeds, retrying transient and parse failures.

    Args:
        fn: Zero-argument coroutine factory, called once per attempt.
        retries: Retries after the first attempt, so at most ``1 + retries`` calls.
        delay: Seconds before the first retry. Doubles on every further retry.
        sleep: Awaitable sleep, swapped out in tests.

    Returns:
        Whatever ``fn`` returns on its first successful attempt.

    Configuration errors (including missing credentials) and anything not in
    RETRYABLE_ERRORS propagate from the attempt that raised them.
    """
    attempt = 0
    while True:
        try:
            return await fn()
        except RETRYABLE_ERRORS as e:
            if attempt >= retries:
                raise
            attempt += 1
            log.warning(
                "Attempt failed (%s: %s). Waiting %.1fs before retry %d of %d",
                type(e).__name__,
                e,
                delay,
                attempt,
                retries,
            )
            await sleep(delay)
            delay *= 2


def clean_and_parse_json(text: str, model_cls: type[M] | None = None) -> M | dict:
    """Strip Markdown fences, cut to the first balanced ``{...}`` span and parse.

    Braces inside JSON strings do not count, so prose after the object may
    contain braces of its own.

    Raises:
        ParseFailureError: the text is not JSON, or does not validate as ``model_cls``.
    """
    clean = _CODE_FENCE.sub("", text).strip()
    json_start = clean.find("{")

    try:
        if json_start >= 0:
            data, _ = _DECODER.raw_decode(clean, json_start)
        else:
            data = json.loads(clean)
        if model_cls is None:
            return data
        return model_cls.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        log.error("Failed to parse response: %s", e)
        log.error("Raw text: %s", text[:1000])
        raise ParseFailureError(raw_text=text) from e


class GenerationClient:
    """Validated credentials plus a provider, with retry and timeout policy applied per call."""

    def __init__(
        self,
        credentials: str,
        provider: Provider | None = None,
        *,
        retries: int = MAX_RETRIES,
        retry_delay: float = RETRY_INITIAL_DELAY,
        timeout: float | None = PROVIDER_TIMEOUT,
        sleep: Sleep = asyncio.sleep,
    ):
        result = validate_api_key(credentials)
        if not result.valid:
            raise MissingCredentialsError(result.error)
        self.credentials = credentials.strip()
        self.provider = provider if provider is not None else OpenRouterProvider(self.credentials)
        self.retries = retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self.sleep = sleep

    async def _call(self, request: ProviderRequest) -> ProviderResponse:
        if log.isEnabledFor(logging.DEBUG):
            trace_request(request)
        start = time.time()
        try:
            if self.timeout is None:
                response = await self.provider.generate(request)
            else:
                response = await asyncio.wait_for(self.provider.generate(request), self.timeout)
        except asyncio.TimeoutError as e:
            raise TransientProviderError(f"Provider call timed out after {self.timeout}s") from e
        log.info("Provider call to %s completed in %.2fs", request.model, time.time() - start)
        return response

    async def _call_with_text(self, request: ProviderRequest) -> ProviderResponse:
        response = await self._call(request)
        if not response.text or not response.text.strip():
            raise EmptyResponseError("No response text")
        return response

    async def _retry(self, fn: Callable[[], Awaitable[T]], retries: int | None) -> T:
        return await retry_with_backoff(
            fn,
            retries=self.retries if retries is None else retries,
            delay=self.retry_delay,
            sleep=self.sleep,
        )

    async def generate_text(
        self,
        prompt: str,
        *,
        model: str,
        system_instruction: str | None = None,
        temperature: float = 0.7,
        top_p: float | None = None,
        top_k: int | None = None,
        default: str | None = None,
        retries: int | None = None,
    ) -> str:
        """Free-text call. Returns trimmed text.

        A response without text is retried. Once retries are exhausted ``default``
        is returned if given, otherwise EmptyResponseError propagates.
        """
        text, _ = await self._generate_with_sources(
            prompt,
            ProviderConfig(
                system_instruction=system_instruction,
                temperature=temperature,
                top_p=top_p,
                top_k=top_k,
            ),
            model=model,
            default=default,
            retries=retries,
        )
        return text

    async def generate_grounded(
        self,
        prompt: str,
        *,
        model: str,
        system_instruction: str | None = None,
        temperature: float = 0.3,
        top_p: float | None = None,
        top_k: int | None = None,
        default: str | None = None,
        retries: int | None = None,
    ) -> tuple[str, list[WebSource]]:
        """Search-augmented free-text call. Returns the text and the cited web sources."""
        return await self._generate_with_sources(
            prompt,
            ProviderConfig(
                system_instruction=system_instruction,
                temperature=temperature,
                top_p=top_p,
                top_k=top_k,
                tools=[WEB_SEARCH_TOOL],
            ),
            model=model,
            default=default,
            retries=retries,
        )

    async def _generate_with_sources(
        self,
        prompt: str,
        config: ProviderConfig,
        *,
        model: str,
        default: str | None,
        retries: int | None,
    ) -> tuple[str, list[WebSource]]:
        request = ProviderRequest(model=model, contents=prompt, config=config)
        try:
            response = await self._retry(lambda: self._call_with_text(request), retries)
        except EmptyResponseError:
            if default is None:
                raise
            log.warning("No response text from %s, using default", model)
            return default, []

        return response.text.strip(), response.web_sources()

    async def generate_json(
        self,
        prompt: str,
        model_cls: type[M],
        *,
        model: str,
        system_instruction: str | None = None,
        temperature: float = 0.7,
        top_p: float | None = None,
        safety_settings: Sequence[dict[str, str]] = (),
        retries: int | None = None,
    ) -> M:
        """Schema-constrained call, parsed and validated into ``model_cls``.

        Missing text and unparseable JSON are both retried.
        """
        request = ProviderRequest(
            model=model,
            contents=prompt,
            config=ProviderConfig(
                system_instruction=system_instruction,
                temperature=temperature,
                top_p=top_p,
                response_mime_type="application/json",
                response_schema=model_cls.model_json_schema(by_alias=True),
                safety_settings=list(safety_settings),
            ),
        )

        async def attempt() -> M:
            response = await self._call_with_text(request)
            return clean_and_parse_json(response.text, model_cls)

        return await self._retry(attempt, retries)
