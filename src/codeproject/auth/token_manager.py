"""OAuth2 token acquisition and caching.

This module provides :class:`TokenManager`, which obtains bearer tokens
from the API's ``/Token`` endpoint with two grants:

- the Client Credentials grant (:rfc:`6749` section 4.4), authenticating
  the application itself, and
- the Resource Owner Password grant (:rfc:`6749` section 4.3),
  authenticating an end user.

Each grant has its own cache slot. A network request is only made when
the slot is empty, its token has expired, or the caller forces it.
Refreshing one slot never touches the other.

Failure handling:

- A non-200 answer, or a 200 answer carrying an empty token, clears the
  slot and yields ``None``. It is not raised.
- A body that is not JSON clears the slot and raises
  :class:`~codeproject.exceptions.ResponseParseError`.
- A transport failure clears the slot and raises
  :class:`~codeproject.exceptions.ConnectionError_`.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from pydantic import ValidationError

from codeproject.client.response import decode_json
from codeproject.config import DEFAULT_CONFIG, ClientConfig
from codeproject.constants import TOKEN_PATH
from codeproject.exceptions import ConfigError, ConnectionError_, ResponseParseError
from codeproject.models import BearerToken, Credentials, UserCredential

logger = logging.getLogger(__name__)


class _TokenSlot:
    """One cached token plus the lock serialising its refresh."""

    def __init__(self) -> None:
        self.token: Optional[BearerToken] = None
        self.lock = asyncio.Lock()


class TokenManager:
    """Requests and caches client and user access tokens.

    Args:
        client_id: Client id issued for the application.
        client_secret: Client secret issued for the application.
        config: HTTP settings (API root, timeout, TLS verification).
        transport: Optional :class:`httpx.AsyncBaseTransport` used instead
            of the network.

    Raises:
        ConfigError: If *client_id* or *client_secret* is ``None``, empty
            or whitespace only.

    Example::

        manager = TokenManager("my-id", "my-secret")
        client_token = await manager.get_client_token()
        user_token = await manager.get_user_token(UserCredential(username="u", password="p"))
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        try:
            self._credentials = Credentials(client_id=client_id, client_secret=client_secret)
        except ValidationError as exc:
            fields = [str(err["loc"][0]).replace("_", " ") for err in exc.errors()]
            raise ConfigError(
                " ".join(f"A valid {field} is required." for field in fields)
            ) from exc

        self._config = config or DEFAULT_CONFIG
        self._transport = transport
        self._client_slot = _TokenSlot()
        self._user_slot = _TokenSlot()

    @property
    def client_token(self) -> Optional[BearerToken]:
        """The cached client token, if any (may be expired)."""
        return self._client_slot.token

    @property
    def user_token(self) -> Optional[BearerToken]:
        """The cached user token, if any (may be expired)."""
        return self._user_slot.token

    def clear(self) -> None:
        """Forget both cached tokens."""
        self._client_slot.token = None
        self._user_slot.token = None

    async def get_client_token(self, force: bool = False) -> Optional[BearerToken]:
        """Return the client access token, requesting one only when needed.

        Args:
            force: Request a new token even if the cached one is valid.

        Returns:
            The cached client token after the attempt, or ``None`` if the
            token endpoint refused or returned an empty token.

        Raises:
            ConnectionError_: On network / timeout errors.
            ResponseParseError: If the token response is not valid JSON.
        """
        form = {"grant_type": "client_credentials", **self._client_fields()}
        return await self._get_token(self._client_slot, form, force, "client")

    async def get_user_token(
        self,
        credential: UserCredential,
        force: bool = False,
    ) -> Optional[BearerToken]:
        """Return the user access token for *credential*, requesting one only when needed.

        The slot is not keyed by user: a valid cached token is returned
        even if *credential* differs from the one it was issued for. Pass
        ``force=True`` when switching users.

        Args:
            credential: End-user name and password.
            force: Request a new token even if the cached one is valid.

        Returns:
            The cached user token after the attempt, or ``None``.

        Raises:
            ConnectionError_: On network / timeout errors.
            ResponseParseError: If the token response is not valid JSON.
        """
        form = {
            "grant_type": "password",
            "username": credential.username,
            "password": credential.password,
            **self._client_fields(),
        }
        return await self._get_token(self._user_slot, form, force, "user")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _client_fields(self) -> dict[str, str]:
        return {
            "client_id": self._credentials.client_id,
            "client_secret": self._credentials.client_secret,
        }

    async def _get_token(
        self,
        slot: _TokenSlot,
        form: dict[str, str],
        force: bool,
        kind: str,
    ) -> Optional[BearerToken]:
        async with slot.lock:
            if not force and slot.token is not None and slot.token.is_valid():
                return slot.token

            # Cleared up front so every failure path leaves the slot empty.
            slot.token = None
            slot.token = await self._request_token(form, kind)
            return slot.token

    async def _request_token(self, form: dict[str, str], kind: str) -> Optional[BearerToken]:
        """POST *form* to the token endpoint and return a valid token or ``None``."""
        logger.debug("Requesting %s access token", kind)
        try:
            async with httpx.AsyncClient(
                base_url=self._config.base_url,
                headers={"Accept": "application/json"},
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                transport=self._transport,
            ) as client:
                response = await client.post(TOKEN_PATH, data=form)
        except httpx.TransportError as exc:
            logger.warning("%s token request failed: %s", kind.capitalize(), exc)
            raise ConnectionError_(f"Token request failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            logger.warning(
                "%s token request returned HTTP %d %s",
                kind.capitalize(), response.status_code, response.reason_phrase,
            )
            return None

        payload = decode_json(response, dict)
        try:
            token = BearerToken.model_validate(
                {**(payload or {}), "requested_at": datetime.now(timezone.utc)}
            )
        except ValidationError as exc:
            raise ResponseParseError(
                f"Malformed {kind} token response: {exc.error_count()} error(s)",
                body=response.text[:200],
            ) from exc
        if not token.is_valid():
            logger.warning("%s token response did not contain a usable token", kind.capitalize())
            return None

        logger.debug("Obtained %s access token, expires in %ds", kind, token.expires_in)
        return token
