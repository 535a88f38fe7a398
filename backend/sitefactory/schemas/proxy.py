# backend/sitefactory/schemas/proxy.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, StrictStr, field_validator


class PromptRequest(BaseModel):
    prompt: StrictStr

    @field_validator("prompt")
    @classmethod
    def trim_prompt(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("prompt must not be empty")
        return trimmed


class TextResponse(BaseModel):
    text: str


class SearchHit(BaseModel):
    id: Optional[str] = None
    score: Optional[float] = None
    highlights: Dict[str, List[str]] = {}
    document: Dict[str, Any] = {}


class SearchResponse(BaseModel):
    hits: List[SearchHit]


class PhotoSource(BaseModel):
    original: Optional[str] = None
    large: Optional[str] = None
    medium: Optional[str] = None
    small: Optional[str] = None


class Photo(BaseModel):
    id: int
    photographer: Optional[str] = None
    url: Optional[str] = None
    src: PhotoSource = PhotoSource()


class PhotoSearchResponse(BaseModel):
    photos: List[Photo]
    page: int
    per_page: int
    total_results: int
