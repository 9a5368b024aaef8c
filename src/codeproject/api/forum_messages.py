"""The ForumMessages API, plus the scraped forum list."""

from __future__ import annotations

from typing import Optional

import httpx

from codeproject import constants
from codeproject.client.api_client import ApiClient
from codeproject.helpers.forum_scraper import fetch_forum_links
from codeproject.models import ForumDisplayMode, PagedData


class ForumMessagesApi(ApiClient):
    """Forum and message thread listings. Works with either a client or a user token."""

    async def get_forum(
        self,
        forum_id: int,
        mode: ForumDisplayMode = ForumDisplayMode.THREADS,
        page: int = 1,
    ) -> Optional[PagedData]:
        """Request a page of messages of forum *forum_id*."""
        mode = ForumDisplayMode(mode)
        return await self.get_paged(f"{constants.FORUM}/{forum_id}/{mode.value}", page)

    async def get_thread_messages(self, thread_id: int, page: int = 1) -> Optional[PagedData]:
        """Request a page of messages of thread *thread_id*."""
        return await self.get_paged(f"{constants.MESSAGE_THREAD}/{thread_id}", page)

    async def list_forums(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> Optional[PagedData]:
        """List the available forums as a single page.

        Scraped from the public web site, not requested from the API, so
        :attr:`last_status_code` is not updated.

        Args:
            transport: Optional transport for the scrape request.
        """
        return await fetch_forum_links(config=self.shared_transport.config, transport=transport)
