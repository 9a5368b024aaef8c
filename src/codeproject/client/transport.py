"""Reference-counted, process-wide HTTP transport.

All :class:`~codeproject.client.api_client.ApiClient` instances that are
alive at the same time send their requests through one
:class:`httpx.AsyncClient`. :class:`SharedTransport` owns that client:

- it is created lazily by the first :meth:`~SharedTransport.acquire`,
- every acquisition increments a reference count,
- :meth:`~SharedTransport.release` decrements it and closes the client
  once nothing references it any more, so the next acquisition starts
  from a fresh client.

The default request headers live on the shared client as well. Setting
a bearer token therefore changes the identity of *every* API client that
shares the handle. Callers that need several identities at once must use
separate :class:`SharedTransport` instances or serialise their requests.

Counting and header changes are short, non-awaiting critical sections,
guarded by a :class:`threading.Lock` so they can run from synchronous
constructors as well as from coroutines.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

import httpx

from codeproject.config import DEFAULT_CONFIG, ClientConfig

logger = logging.getLogger(__name__)

JSON_ACCEPT = {"Accept": "application/json"}


class SharedTransport:
    """Shared-ownership handle for one lazily created :class:`httpx.AsyncClient`.

    Args:
        config: HTTP settings used when the client is (re)created.

    Example::

        shared = SharedTransport()
        client = shared.acquire()
        ...
        await shared.release()
        assert shared.is_released
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        self._config = config or DEFAULT_CONFIG
        self._lock = threading.Lock()
        self._client: Optional[httpx.AsyncClient] = None
        self._ref_count = 0

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def ref_count(self) -> int:
        """Number of holders currently referencing the client."""
        with self._lock:
            return self._ref_count

    @property
    def is_released(self) -> bool:
        """True when no holder references the client."""
        return self.ref_count == 0

    def acquire(self, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
        """Take a reference to the shared client, creating it if needed.

        Args:
            transport: Optional transport (e.g. :class:`httpx.MockTransport`)
                for the client. Only honoured when this call creates the
                client; later acquisitions reuse whatever transport the
                live client already has.

        Returns:
            The shared :class:`httpx.AsyncClient`.
        """
        with self._lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self._config.base_url,
                    headers=JSON_ACCEPT,
                    timeout=self._config.timeout,
                    verify=self._config.verify_ssl,
                    transport=transport,
                )
                logger.debug("Created shared HTTP client for %s", self._config.base_url)
            self._ref_count += 1
            return self._client

    async def release(self) -> None:
        """Drop one reference; close the client when the last one goes."""
        with self._lock:
            if self._ref_count == 0:
                logger.warning("release() called on a shared transport with no holders")
                return
            self._ref_count -= 1
            if self._ref_count:
                return
            client, self._client = self._client, None

        if client is not None:
            await client.aclose()
            logger.debug("Closed shared HTTP client for %s", self._config.base_url)

    def set_bearer_token(self, token: str) -> None:
        """Replace the client's default headers with JSON accept plus *token*.

        Any other default header previously set on the client is dropped.
        """
        with self._lock:
            if self._client is None:
                raise RuntimeError("Shared transport has no live client; acquire() it first")
            self._client.headers = {**JSON_ACCEPT, "Authorization": f"Bearer {token}"}


_default_transport: Optional[SharedTransport] = None
_default_lock = threading.Lock()


def default_transport() -> SharedTransport:
    """Return the process-wide :class:`SharedTransport` used when none is passed."""
    global _default_transport
    with _default_lock:
        if _default_transport is None:
            _default_transport = SharedTransport()
        return _default_transport
