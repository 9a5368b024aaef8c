"""Helpers that stand in for endpoints the API does not offer yet."""

from codeproject.helpers.forum_scraper import fetch_forum_links, find_forum_links

__all__ = ["fetch_forum_links", "find_forum_links"]
