"""The "My" API: data belonging to the user the token was issued for.

Requires a *user* token (see
:meth:`~codeproject.auth.TokenManager.get_user_token`); a client token is
answered with 401 and every call returns ``None``.
"""

from __future__ import annotations

from typing import Optional

from codeproject import constants
from codeproject.client.api_client import ApiClient
from codeproject.models import NotificationList, PagedData, Reputation, UserProfile


class MyApi(ApiClient):
    """Profile, reputation, notifications and the user's own content listings."""

    async def get_profile(self) -> Optional[UserProfile]:
        return await self.get(constants.MY_PROFILE, UserProfile)

    async def get_reputation(self) -> Optional[Reputation]:
        return await self.get(constants.MY_REPUTATION, Reputation)

    async def get_notifications(self) -> Optional[NotificationList]:
        return await self.get(constants.MY_NOTIFICATIONS, NotificationList)

    async def get_answers(self, page: int = 1) -> Optional[PagedData]:
        return await self.get_paged(constants.MY_ANSWERS, page)

    async def get_articles(self, page: int = 1) -> Optional[PagedData]:
        return await self.get_paged(constants.MY_ARTICLES, page)

    async def get_blog_posts(self, page: int = 1) -> Optional[PagedData]:
        return await self.get_paged(constants.MY_BLOG_POSTS, page)

    async def get_bookmarks(self, page: int = 1) -> Optional[PagedData]:
        return await self.get_paged(constants.MY_BOOKMARKS, page)

    async def get_messages(self, page: int = 1) -> Optional[PagedData]:
        return await self.get_paged(constants.MY_MESSAGES, page)

    async def get_questions(self, page: int = 1) -> Optional[PagedData]:
        return await self.get_paged(constants.MY_QUESTIONS, page)

    async def get_tips(self, page: int = 1) -> Optional[PagedData]:
        return await self.get_paged(constants.MY_TIPS, page)
