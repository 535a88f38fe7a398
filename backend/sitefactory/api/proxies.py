# backend/sitefactory/api/proxies.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..errors import ValidationError
from ..schemas.proxy import PhotoSearchResponse, PromptRequest, SearchResponse, TextResponse
from ..services.ai import CompletionService, GeminiService
from ..services.media import DEFAULT_PAGE, DEFAULT_PER_PAGE, PexelsService, positive_int
from ..services.search import SearchService
from ..utils.logging import api_logger
from .dependencies import (
    enforce_rate_limit,
    get_completion_service,
    get_gemini_service,
    get_pexels_service,
    get_search_service,
)

router = APIRouter(tags=["proxies"], dependencies=[Depends(enforce_rate_limit)])


def required_param(value: Optional[str], name: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{name} query parameter required")
    return value.strip()


@router.post("/ai/complete", response_model=TextResponse)
async def complete(payload: PromptRequest, service: CompletionService = Depends(get_completion_service)):
    """Complete a prompt with the text-completion backend"""
    api_logger.info("Completion requested", extra={"prompt_length": len(payload.prompt)})
    return await service.complete(payload.prompt)


@router.post("/ai/gemini", response_model=TextResponse)
async def gemini(payload: PromptRequest, service: GeminiService = Depends(get_gemini_service)):
    """Generate text for a prompt with Gemini"""
    api_logger.info("Gemini generation requested", extra={"prompt_length": len(payload.prompt)})
    return await service.generate(payload.prompt)


@router.get("/search", response_model=SearchResponse)
async def search(q: Optional[str] = Query(default=None), service: SearchService = Depends(get_search_service)):
    query = required_param(q, "q")
    api_logger.info("Document search requested", extra={"query": query})
    result = await service.search(query)
    api_logger.info(f"Search returned {len(result.hits)} hits")
    return result


@router.get("/media/pexels", response_model=PhotoSearchResponse)
async def pexels(
    query: Optional[str] = Query(default=None),
    page: Optional[str] = Query(default=None),
    per_page: Optional[str] = Query(default=None),
    service: PexelsService = Depends(get_pexels_service),
):
    """Search stock photos; invalid paging values fall back to the defaults"""
    search_query = required_param(query, "query")
    page_number = positive_int(page, DEFAULT_PAGE)
    page_size = positive_int(per_page, DEFAULT_PER_PAGE)
    api_logger.info("Photo search requested", extra={
        "query": search_query,
        "page": page_number,
        "per_page": page_size
    })
    return await service.search(search_query, page=page_number, per_page=page_size)
