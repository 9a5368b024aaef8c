"""Endpoint classes of the CodeProject API.

Each class is an :class:`~codeproject.client.ApiClient` that only builds
relative URLs; request execution, token handling and the shared transport
lifecycle all live in the base class.
"""

from codeproject.api.articles import ArticlesApi
from codeproject.api.forum_messages import ForumMessagesApi
from codeproject.api.my import MyApi
from codeproject.api.questions import QuestionsApi

__all__ = ["ArticlesApi", "ForumMessagesApi", "MyApi", "QuestionsApi"]
