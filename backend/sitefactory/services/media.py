# backend/sitefactory/services/media.py
from typing import Optional

from ..schemas.proxy import PhotoSearchResponse
from ..schemas.upstream import PexelsPayload
from .upstream import UpstreamService

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 80  # Pexels rejects larger pages


def positive_int(value: Optional[str], default: int) -> int:
    """Parse a query parameter, falling back to ``default`` for anything but a positive integer"""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class PexelsService(UpstreamService):
    """Stock photo search through the Pexels API"""

    service_name = "Pexels"

    async def search(self, query: str, page: int = DEFAULT_PAGE, per_page: int = DEFAULT_PER_PAGE) -> PhotoSearchResponse:
        api_key = self.require(self.settings.PEXELS_API_KEY, "PEXELS_API_KEY")
        per_page = min(per_page, MAX_PER_PAGE)

        data = await self.fetch_json(
            "GET",
            f"{self.settings.PEXELS_BASE_URL.rstrip('/')}/search",
            params={"query": query, "page": page, "per_page": per_page},
            headers={"Authorization": api_key},
        )

        result = self.parse(PexelsPayload, data).extract_result(page, per_page)
        if result is None:
            raise self.unparseable()
        return result
