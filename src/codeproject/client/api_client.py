"""Authenticated request executor for the CodeProject API.

:class:`ApiClient` is the base of every endpoint class. It holds a
reference to a :class:`~codeproject.client.transport.SharedTransport`,
puts the current bearer token on it and issues GET requests whose JSON
bodies are validated into pydantic models.

Failure contract:

- Non-2xx responses are *soft* failures: the call returns ``None`` and
  the status is kept in :attr:`ApiClient.last_status_code` /
  :attr:`ApiClient.last_status_message`.
- Transport failures raise :class:`~codeproject.exceptions.ConnectionError_`.
- Unparseable bodies raise :class:`~codeproject.exceptions.ResponseParseError`.

Lifecycle::

    Constructed (reference taken) -> Active -> Released (reference dropped once)

Use the client as an async context manager so the reference is dropped
on every exit path::

    async with ApiClient(token) as api:
        profile = await api.get(MY_PROFILE, UserProfile)
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping, Optional, TypeVar
from urllib.parse import quote

import httpx

from codeproject.client.response import decode_json
from codeproject.client.transport import SharedTransport, default_transport
from codeproject.config import ClientConfig
from codeproject.exceptions import ConfigError, ConnectionError_, InvalidTokenError
from codeproject.models import BearerToken, PagedData

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_query_string(parameters: Mapping[str, str]) -> str:
    """Build ``?k1=v1&k2=v2`` from *parameters*, percent-encoding keys and values.

    Pairs keep the mapping's iteration order. An empty mapping yields an
    empty string.
    """
    if not parameters:
        return ""
    pairs = (
        f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
        for key, value in parameters.items()
    )
    return "?" + "&".join(pairs)


def _check_token(token: Optional[BearerToken]) -> BearerToken:
    if token is None or not token.token or not token.token.strip():
        raise InvalidTokenError("Token value must have a valid contents.")
    return token


class ApiClient:
    """Executes authenticated GET requests against the API root.

    Args:
        token: Bearer token for the requests. Must have non-blank contents.
        shared_transport: Handle owning the HTTP client. Defaults to the
            process-wide handle from
            :func:`~codeproject.client.transport.default_transport`.
        transport: Optional :class:`httpx.AsyncBaseTransport` used if this
            instance ends up creating the shared client (tests inject an
            :class:`httpx.MockTransport` here).
        config: HTTP settings for a private handle owned by this instance
            alone. Only used when *shared_transport* is not given.

    Raises:
        InvalidTokenError: If *token* is ``None`` or blank. No reference
            to the shared transport is taken in that case.
        ConfigError: If both *shared_transport* and *config* are given.

    Note:
        The Authorization header is shared by every client using the same
        handle; :meth:`set_token` on one instance changes it for all.
    """

    def __init__(
        self,
        token: Optional[BearerToken],
        *,
        shared_transport: Optional[SharedTransport] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        token = _check_token(token)
        if shared_transport is not None and config is not None:
            raise ConfigError("Pass either shared_transport or config, not both.")
        if shared_transport is None:
            shared_transport = SharedTransport(config) if config is not None else default_transport()
        self._shared = shared_transport
        self._client = self._shared.acquire(transport)
        self._released = False
        self._token = token
        self._shared.set_bearer_token(token.token)
        self._status_code = int(HTTPStatus.OK)
        self._status_message = HTTPStatus.OK.phrase

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.release()

    # ------------------------------------------------------------------ #
    # Token & status
    # ------------------------------------------------------------------ #

    @property
    def token(self) -> BearerToken:
        """The token used for the next request(s)."""
        return self._token

    def set_token(self, token: Optional[BearerToken]) -> None:
        """Replace the request token and rewrite the shared default headers.

        Raises:
            InvalidTokenError: If *token* is ``None`` or blank. The
                previously active token stays in place.
            RuntimeError: If this instance has been released. Nothing is
                changed.
        """
        token = _check_token(token)
        if self._released:
            raise RuntimeError("Cannot set a token on a released client")
        self._shared.set_bearer_token(token.token)
        self._token = token

    @property
    def last_status_code(self) -> int:
        """HTTP status code of the last request (200 before any request)."""
        return self._status_code

    @property
    def last_status_message(self) -> str:
        """Reason phrase of the last request."""
        return self._status_message

    @property
    def shared_transport(self) -> SharedTransport:
        return self._shared

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    async def get(
        self,
        relative_url: str,
        model: type[T],
        *,
        timeout: Optional[float] = None,
    ) -> Optional[T]:
        """GET *relative_url* and validate the JSON body into *model*.

        Args:
            relative_url: Path (and query) relative to the API root.
            model: Type to validate the body into.
            timeout: Seconds for this request; defaults to the configured
                timeout.

        Returns:
            The validated body; ``None`` for an empty body or a non-2xx
            status.

        Raises:
            ConnectionError_: On network / timeout errors.
            ResponseParseError: If a 2xx body cannot be decoded.
        """
        kwargs: dict[str, Any] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout

        logger.debug("GET %s", relative_url)
        try:
            response = await self._client.get(relative_url, **kwargs)
        except httpx.TransportError as exc:
            raise ConnectionError_(f"GET {relative_url} failed: {exc}") from exc

        self._status_code = response.status_code
        self._status_message = response.reason_phrase

        if not response.is_success:
            logger.warning(
                "GET %s returned HTTP %d %s",
                relative_url, response.status_code, response.reason_phrase,
            )
            return None
        return decode_json(response, model)

    async def get_paged(self, relative_url: str, page: int) -> Optional[PagedData]:
        """GET one page of a paged listing (``<relative_url>?page=<page>``)."""
        return await self.get(f"{relative_url}?page={page}", PagedData)

    # ------------------------------------------------------------------ #
    # Release
    # ------------------------------------------------------------------ #

    @property
    def is_released(self) -> bool:
        """Whether this instance has dropped its transport reference."""
        return self._released

    async def release(self) -> None:
        """Drop this instance's reference to the shared transport.

        Only the first call has an effect. Do not issue requests after
        releasing.
        """
        if self._released:
            return
        self._released = True
        await self._shared.release()

    @staticmethod
    def all_released(shared_transport: Optional[SharedTransport] = None) -> bool:
        """True when no live client references *shared_transport* (default handle if omitted)."""
        return (shared_transport or default_transport()).is_released
