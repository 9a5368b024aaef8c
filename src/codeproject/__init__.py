"""codeproject -- asynchronous client for the CodeProject REST API.

The package obtains OAuth2 bearer tokens (client credentials or password
grant), caches them until they expire, and runs authenticated GET
requests whose JSON bodies are validated into pydantic models.

Typical workflow::

    from codeproject import ArticlesApi, TokenManager

    manager = TokenManager(client_id, client_secret)
    token = await manager.get_client_token()
    async with ArticlesApi(token) as api:
        page = await api.get_articles(tags="python")

Modules:
    auth: Token acquisition and caching.
    client: Authenticated request executor and shared transport.
    api: Endpoint classes.
    helpers: Forum list scraper.
    models: Pydantic models shared across the package.
    config: HTTP settings.
    exceptions: Exception hierarchy.
"""

from codeproject.api import ArticlesApi, ForumMessagesApi, MyApi, QuestionsApi
from codeproject.auth import TokenManager
from codeproject.client import ApiClient, SharedTransport
from codeproject.config import ClientConfig
from codeproject.exceptions import (
    CodeProjectError,
    ConfigError,
    ConnectionError_,
    InvalidTokenError,
    ResponseParseError,
)
from codeproject.models import BearerToken, PagedData, UserCredential

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ArticlesApi",
    "BearerToken",
    "ClientConfig",
    "CodeProjectError",
    "ConfigError",
    "ConnectionError_",
    "ForumMessagesApi",
    "InvalidTokenError",
    "MyApi",
    "PagedData",
    "QuestionsApi",
    "ResponseParseError",
    "SharedTransport",
    "TokenManager",
    "UserCredential",
]
