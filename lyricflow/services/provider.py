from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import openai
from openai import AsyncOpenAI

from lyricflow.config import OPENROUTER_BASE_URL
from lyricflow.errors import MissingCredentialsError, ProviderRequestError, TransientProviderError
from lyricflow.models.provider import (
    WEB_SEARCH_TOOL,
    Candidate,
    GroundingChunk,
    GroundingMetadata,
    ProviderRequest,
    ProviderResponse,
    WebSource,
)

log = logging.getLogger(__name__)


@runtime_checkable
class Provider(Protocol):
    """Interface for LLM completion backends.

    Implement this protocol with your own service. The only requirement is an
    async `generate` method that takes a ProviderRequest and returns a
    ProviderResponse. Implementations raise MissingCredentialsError for rejected
    keys, ProviderRequestError for requests the provider will never accept and
    TransientProviderError for everything that may succeed on retry.
    """

    async def generate(self, request: ProviderRequest) -> ProviderResponse: ...


def _build_messages(request: ProviderRequest) -> list[dict]:
    messages: list[dict] = []
    if request.config.system_instruction:
        messages.append({"role": "system", "content": request.config.system_instruction})

    if isinstance(request.contents, str):
        messages.append({"role": "user", "content": request.contents})
    else:
        for turn in request.contents:
            role = "assistant" if turn.role == "model" else "user"
            messages.append({"role": role, "content": turn.text})
    return messages


def _build_params(request: ProviderRequest) -> dict[str, Any]:
    config = request.config
    params: dict[str, Any] = {
        "model": request.model,
        "messages": _build_messages(request),
        "temperature": config.temperature,
    }
    if config.top_p is not None:
        params["top_p"] = config.top_p

    if config.response_schema is not None:
        params["response_format"] = {
            "type": "json_schema",
            "json_schema": {"name": "response", "schema": config.response_schema},
        }
    elif config.response_mime_type == "application/json":
        params["response_format"] = {"type": "json_object"}

    # OpenRouter-specific knobs the OpenAI SDK does not model
    extra_body: dict[str, Any] = {}
    if config.top_k is not None:
        extra_body["top_k"] = config.top_k
    if WEB_SEARCH_TOOL in config.tools:
        extra_body["plugins"] = [{"id": "web"}]
    if config.safety_settings:
        extra_body["safety_settings"] = config.safety_settings
    if extra_body:
        params["extra_body"] = extra_body
    return params


def _extract_sources(message: Any) -> list[WebSource]:
    sources: list[WebSource] = []
    for annotation in getattr(message, "annotations", None) or []:
        if getattr(annotation, "type", None) != "url_citation":
            continue
        citation = annotation.url_citation
        sources.append(WebSource(title=citation.title or citation.url, uri=citation.url))
    return sources


class OpenRouterProvider:
    """Provider backed by OpenRouter's OpenAI-compatible chat completions API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENROUTER_BASE_URL,
        client: AsyncOpenAI | None = None,
    ):
        # Retries are owned by GenerationClient
        self._client = client or AsyncOpenAI(base_url=base_url, api_key=api_key, max_retries=0)

    async def generate(self, request: ProviderRequest) -> ProviderResponse:
        params = _build_params(request)
        try:
            completion = await self._client.chat.completions.create(**params)
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            log.error("Provider rejected credentials: %s", e)
            raise MissingCredentialsError() from e
        except (openai.BadRequestError, openai.NotFoundError, openai.UnprocessableEntityError) as e:
            log.error("Provider rejected request to %s: %s", request.model, e)
            raise ProviderRequestError(str(e)) from e
        except openai.APIError as e:
            log.warning("Provider call failed (%s): %s", type(e).__name__, e)
            raise TransientProviderError(str(e)) from e

        if not completion.choices:
            return ProviderResponse(text=None)

        message = completion.choices[0].message
        sources = _extract_sources(message)
        candidates = []
        if sources:
            chunks = [GroundingChunk(web=source) for source in sources]
            candidates.append(Candidate(grounding_metadata=GroundingMetadata(grounding_chunks=chunks)))

        if completion.usage is not None:
            log.debug(
                "Usage for %s: prompt=%s completion=%s",
                request.model,
                completion.usage.prompt_tokens,
                completion.usage.completion_tokens,
            )
        return ProviderResponse(text=message.content, candidates=candidates)
