"""Client configuration.

There are no configuration files and no environment variables: a
:class:`ClientConfig` is built in code and passed to the components that
talk to the network. Every field has a default, so ``ClientConfig()`` is
the normal production setup.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from codeproject.constants import API_BASE_URL, SITE_BASE_URL


class ClientConfig(BaseModel):
    """HTTP settings shared by the token manager, API clients and scraper.

    Example::

        ClientConfig(timeout=10.0)
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(default=API_BASE_URL, description="API root URL")
    site_url: str = Field(
        default=SITE_BASE_URL, description="Public site root, used for forum scraping"
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Default per-request timeout in seconds"
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")


DEFAULT_CONFIG = ClientConfig()
