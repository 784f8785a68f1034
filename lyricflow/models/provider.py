"""Request/response contract of a single LLM provider call."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from lyricflow.models.base import CamelModel

WEB_SEARCH_TOOL = "web_search"


class ConversationTurn(CamelModel):
    role: Literal["user", "model"] = "user"
    text: str


class ProviderConfig(CamelModel):
    system_instruction: str | None = None
    temperature: float = 0.7
    top_p: float | None = None
    top_k: int | None = None
    response_mime_type: str | None = None
    response_schema: dict[str, Any] | None = Field(
        default=None, description="JSON schema the response text must satisfy"
    )
    tools: list[str] = Field(default_factory=list, description="e.g. ['web_search'] for grounding")
    safety_settings: list[dict[str, str]] = Field(default_factory=list)


class ProviderRequest(CamelModel):
    model: str
    contents: str | list[ConversationTurn]
    config: ProviderConfig = Field(default_factory=ProviderConfig)


class WebSource(CamelModel):
    title: str = ""
    uri: str = ""


class GroundingChunk(CamelModel):
    web: WebSource | None = None


class GroundingMetadata(CamelModel):
    grounding_chunks: list[GroundingChunk] = Field(default_factory=list)


class Candidate(CamelModel):
    grounding_metadata: GroundingMetadata | None = None


class ProviderResponse(CamelModel):
    """What came back. ``text`` may be None, which callers treat as a soft failure."""

    text: str | None = None
    candidates: list[Candidate] = Field(default_factory=list)

    def web_sources(self) -> list[WebSource]:
        sources: list[WebSource] = []
        for candidate in self.candidates:
            if candidate.grounding_metadata is None:
                continue
            for chunk in candidate.grounding_metadata.grounding_chunks:
                if chunk.web is not None and chunk.web.uri:
                    sources.append(chunk.web)
        return sources
