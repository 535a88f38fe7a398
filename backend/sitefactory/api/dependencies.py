# backend/sitefactory/api/dependencies.py
import httpx
from fastapi import Depends, Request

from ..config import Settings
from ..services.ai import CompletionService, GeminiService
from ..services.media import PexelsService
from ..services.rate_limit import caller_key
from ..services.search import SearchService
from ..stores import ProjectStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ProjectStore:
    return request.app.state.store


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def enforce_rate_limit(request: Request) -> None:
    limiter = request.app.state.rate_limiter
    if limiter is not None:
        limiter.hit(caller_key(request.headers))


def get_completion_service(client: httpx.AsyncClient = Depends(get_http_client),
                           settings: Settings = Depends(get_settings)) -> CompletionService:
    return CompletionService(client, settings)


def get_gemini_service(client: httpx.AsyncClient = Depends(get_http_client),
                       settings: Settings = Depends(get_settings)) -> GeminiService:
    return GeminiService(client, settings)


def get_search_service(client: httpx.AsyncClient = Depends(get_http_client),
                       settings: Settings = Depends(get_settings)) -> SearchService:
    return SearchService(client, settings)


def get_pexels_service(client: httpx.AsyncClient = Depends(get_http_client),
                       settings: Settings = Depends(get_settings)) -> PexelsService:
    return PexelsService(client, settings)
