# backend/sitefactory/schemas/__init__.py
from .project import Project, ProjectCreate
from .proxy import (
    PromptRequest,
    TextResponse,
    SearchHit,
    SearchResponse,
    Photo,
    PhotoSource,
    PhotoSearchResponse,
)

__all__ = [
    "Project", "ProjectCreate",
    "PromptRequest", "TextResponse",
    "SearchHit", "SearchResponse",
    "Photo", "PhotoSource", "PhotoSearchResponse"
]
