"""The Questions API."""

from __future__ import annotations

from typing import Optional

from codeproject import constants
from codeproject.client.api_client import ApiClient, to_query_string
from codeproject.models import PagedData, QuestionMode


class QuestionsApi(ApiClient):
    """Question listings. Works with either a client or a user token."""

    async def get_questions(
        self,
        mode: QuestionMode = QuestionMode.NEW,
        include: Optional[str] = None,
        exclude: Optional[str] = None,
        page: int = 1,
    ) -> Optional[PagedData]:
        """Request a page of questions.

        Args:
            mode: Which questions to list.
            include: Comma separated tags to include. Blank means all.
            exclude: Comma separated tags to exclude. Blank means none.
            page: Page number to request.
        """
        parameters: dict[str, str] = {}
        if include and include.strip():
            parameters["include"] = include
        if exclude and exclude.strip():
            parameters["exclude"] = exclude
        parameters["page"] = str(page)
        url = f"{constants.QUESTIONS}/{QuestionMode(mode).value}{to_query_string(parameters)}"
        return await self.get(url, PagedData)
