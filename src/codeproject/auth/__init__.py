"""Token acquisition for codeproject.

The main entry point is :class:`TokenManager`, which requests client and
user bearer tokens from the API and caches each until it expires.

Typical usage::

    from codeproject.auth import TokenManager

    manager = TokenManager(client_id, client_secret)
    token = await manager.get_client_token()
"""

from codeproject.auth.token_manager import TokenManager

__all__ = ["TokenManager"]
