"""HTTP client layer for codeproject.

Provides the authenticated request executor and the shared transport it
runs on.

Classes:
    :class:`ApiClient` -- base of all endpoint classes; attaches the
    bearer token, executes GETs and records the last status.
    :class:`SharedTransport` -- reference-counted owner of the single
    :class:`httpx.AsyncClient` shared by live :class:`ApiClient` instances.

Example::

    from codeproject.client import ApiClient

    async with ApiClient(token) as api:
        page = await api.get_paged("v1/My/Articles", 1)
"""

from codeproject.client.api_client import ApiClient, to_query_string
from codeproject.client.transport import SharedTransport, default_transport

__all__ = ["ApiClient", "SharedTransport", "default_transport", "to_query_string"]
