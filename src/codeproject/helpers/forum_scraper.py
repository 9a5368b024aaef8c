"""Forum list scraper.

The API has no endpoint that lists the available forums. Until it does,
:func:`fetch_forum_links` reads the public forum overview page and picks
out the links that point into ``/Forums/``. The result has the same shape
as a paged API listing, so callers can treat it like any other page.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import unquote

import httpx

from codeproject.config import DEFAULT_CONFIG, ClientConfig
from codeproject.constants import FORUM_LIST_PAGE
from codeproject.models import ItemSummary, PagedData

logger = logging.getLogger(__name__)

FORUM_HREF_PREFIX = "/Forums/"

_LINK_RE = re.compile(r"(<a.*?>.*?</a>)", re.DOTALL)
_HREF_RE = re.compile(r'href="(.*?)"', re.DOTALL)
_ID_RE = re.compile(r"\d+")
_TAG_RE = re.compile(r"\s*<.*?>\s*|&gt;", re.DOTALL)

# The Lounge is not linked under /Forums/ on the overview page.
LOUNGE = ItemSummary(
    id="1159",
    title="The Lounge",
    website_link="https://www.codeproject.com/Lounge.aspx",
)


def find_forum_links(html: str, site_url: str = DEFAULT_CONFIG.site_url) -> list[ItemSummary]:
    """Extract forum links from the overview page *html*.

    Only anchors whose ``href`` starts with ``/Forums/`` (any case) and
    contains a number are kept. The first number becomes the id and the
    anchor text, stripped of markup, becomes the title.

    Args:
        html: Page content.
        site_url: Site root the relative links are resolved against.

    Returns:
        The forums in page order.
    """
    site_url = site_url.rstrip("/") + "/"
    result: list[ItemSummary] = []

    for link in _LINK_RE.findall(html):
        href_match = _HREF_RE.search(link)
        if href_match is None:
            continue

        href = href_match.group(1)
        if not href.lower().startswith(FORUM_HREF_PREFIX.lower()):
            continue

        id_match = _ID_RE.search(href)
        if id_match is None:
            continue

        result.append(
            ItemSummary(
                id=id_match.group(0),
                title=unquote(_TAG_RE.sub("", link)),
                website_link=site_url + href[1:],
            )
        )
    return result


async def fetch_forum_links(
    *,
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[PagedData]:
    """Scrape the forum overview page into a single :class:`PagedData` page.

    "The Lounge" is always the first item.

    Args:
        config: HTTP settings; ``site_url`` selects the site to scrape.
        transport: Optional transport used instead of the network.

    Returns:
        The forums, or ``None`` when the page could not be fetched. Errors
        are logged, never raised.
    """
    config = config or DEFAULT_CONFIG
    try:
        async with httpx.AsyncClient(
            base_url=config.site_url,
            headers={"Accept": "text/html"},
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = await client.get(FORUM_LIST_PAGE)
    except httpx.TransportError as exc:
        logger.warning("Fetching the forum list failed: %s", exc)
        return None

    if not response.is_success:
        logger.warning(
            "Forum list page returned HTTP %d %s",
            response.status_code, response.reason_phrase,
        )
        return None

    forums = [LOUNGE.model_copy(), *find_forum_links(response.text, config.site_url)]
    logger.debug("Scraped %d forums", len(forums))
    return PagedData.single_page(forums)
