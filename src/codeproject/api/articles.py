"""The Articles API."""

from __future__ import annotations

from typing import Optional

from codeproject import constants
from codeproject.client.api_client import ApiClient, to_query_string
from codeproject.models import PagedData


class ArticlesApi(ApiClient):
    """Article listings. Works with either a client or a user token."""

    async def get_articles(
        self,
        tags: Optional[str] = None,
        min_rating: float = 3,
        page: int = 1,
    ) -> Optional[PagedData]:
        """Request a page of articles.

        Args:
            tags: Comma separated tags the articles must carry. Blank means
                no tag filter.
            min_rating: Articles rated lower than this are left out.
            page: Page number to request.
        """
        parameters: dict[str, str] = {}
        if tags and tags.strip():
            parameters["tags"] = tags
        parameters["minrating"] = str(min_rating)
        parameters["page"] = str(page)
        return await self.get(constants.ARTICLES + to_query_string(parameters), PagedData)
