# backend/sitefactory/services/__init__.py
from .ai import CompletionService, GeminiService
from .media import PexelsService
from .migrations import MigrationRunner
from .rate_limit import CallerRateLimiter
from .search import SearchService

__all__ = [
    "CompletionService",
    "GeminiService",
    "PexelsService",
    "SearchService",
    "MigrationRunner",
    "CallerRateLimiter"
]
