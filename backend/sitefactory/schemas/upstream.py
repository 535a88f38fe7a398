# backend/sitefactory/schemas/upstream.py
"""Typed views over the loosely shaped JSON returned by third-party APIs.

Every field is optional and unknown keys are ignored, so an upstream that
adds or drops fields still validates. Each top-level model exposes one
extraction method that returns ``None`` when the value we need is absent;
callers turn that into a single "unable to parse" failure.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .proxy import Photo, PhotoSearchResponse, PhotoSource, SearchHit


class UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# OpenAI chat completions

class CompletionMessage(UpstreamModel):
    content: Optional[str] = None


class CompletionChoice(UpstreamModel):
    message: Optional[CompletionMessage] = None
    text: Optional[str] = None  # legacy completions endpoint


class CompletionPayload(UpstreamModel):
    choices: List[CompletionChoice] = []

    def extract_text(self) -> Optional[str]:
        if not self.choices:
            return None
        choice = self.choices[0]
        if choice.message and choice.message.content is not None:
            return choice.message.content
        return choice.text


# Gemini generateContent

GEMINI_BLOCKED_FINISH_REASONS = {"SAFETY", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"}


class GeminiPart(UpstreamModel):
    text: Optional[str] = None


class GeminiContent(UpstreamModel):
    parts: List[GeminiPart] = []


class GeminiCandidate(UpstreamModel):
    content: Optional[GeminiContent] = None
    finish_reason: Optional[str] = Field(default=None, alias="finishReason")


class GeminiPromptFeedback(UpstreamModel):
    block_reason: Optional[str] = Field(default=None, alias="blockReason")


class GeminiPayload(UpstreamModel):
    candidates: List[GeminiCandidate] = []
    prompt_feedback: Optional[GeminiPromptFeedback] = Field(default=None, alias="promptFeedback")

    @property
    def blocked(self) -> bool:
        if self.prompt_feedback and self.prompt_feedback.block_reason:
            return True
        return bool(self.candidates) and self.candidates[0].finish_reason in GEMINI_BLOCKED_FINISH_REASONS

    def extract_text(self) -> Optional[str]:
        # A safety-blocked prompt produces no text
        if self.blocked or not self.candidates:
            return None
        content = self.candidates[0].content
        if content is None:
            return None
        texts = [part.text for part in content.parts if part.text is not None]
        if not texts:
            return None
        return "".join(texts)


# Azure AI Search docs/search

class SearchDocument(BaseModel):
    # Extra keys are the document's own fields, even ones named "score"
    model_config = ConfigDict(extra="allow")

    score: Optional[float] = Field(default=None, alias="@search.score")
    highlights: Optional[Dict[str, List[str]]] = Field(default=None, alias="@search.highlights")

    def to_hit(self, key_field: str = "id") -> SearchHit:
        fields = {
            name: value for name, value in (self.model_extra or {}).items()
            if not name.startswith("@search.")
        }
        key = fields.get(key_field)
        return SearchHit(
            id=str(key) if key is not None else None,
            score=self.score,
            highlights=self.highlights or {},
            document=fields,
        )


class SearchPayload(UpstreamModel):
    value: Optional[List[SearchDocument]] = None

    def extract_hits(self) -> Optional[List[SearchHit]]:
        if self.value is None:
            return None
        return [document.to_hit() for document in self.value]


# Pexels /v1/search

class PexelsSource(UpstreamModel):
    original: Optional[str] = None
    large: Optional[str] = None
    medium: Optional[str] = None
    small: Optional[str] = None


class PexelsPhoto(UpstreamModel):
    id: Optional[int] = None
    photographer: Optional[str] = None
    url: Optional[str] = None
    src: Optional[PexelsSource] = None


class PexelsPayload(UpstreamModel):
    photos: Optional[List[PexelsPhoto]] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    total_results: Optional[int] = None

    def extract_result(self, page: int, per_page: int) -> Optional[PhotoSearchResponse]:
        if self.photos is None:
            return None
        photos = [
            Photo(
                id=photo.id,
                photographer=photo.photographer,
                url=photo.url,
                src=PhotoSource(**photo.src.model_dump()) if photo.src else PhotoSource(),
            )
            for photo in self.photos
            if photo.id is not None
        ]
        return PhotoSearchResponse(
            photos=photos,
            page=self.page or page,
            per_page=self.per_page or per_page,
            total_results=self.total_results if self.total_results is not None else len(photos),
        )


__all__ = [
    "CompletionPayload",
    "GeminiPayload",
    "SearchPayload",
    "PexelsPayload",
]
