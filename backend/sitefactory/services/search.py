# backend/sitefactory/services/search.py
from ..schemas.proxy import SearchResponse
from ..schemas.upstream import SearchPayload
from .upstream import UpstreamService


class SearchService(UpstreamService):
    """Full-text search against a hosted Azure AI Search index"""

    service_name = "Search"

    async def search(self, query: str) -> SearchResponse:
        endpoint = self.require(self.settings.SEARCH_ENDPOINT, "SEARCH_ENDPOINT")
        api_key = self.require(self.settings.SEARCH_API_KEY, "SEARCH_API_KEY")
        index = self.require(self.settings.SEARCH_INDEX, "SEARCH_INDEX")

        data = await self.fetch_json(
            "POST",
            f"{endpoint.rstrip('/')}/indexes/{index}/docs/search",
            params={"api-version": self.settings.SEARCH_API_VERSION},
            headers={"api-key": api_key},
            json={"search": query},
        )

        hits = self.parse(SearchPayload, data).extract_hits()
        if hits is None:
            raise self.unparseable()
        return SearchResponse(hits=hits)
