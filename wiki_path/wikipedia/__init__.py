"""
Wikipedia interaction module.

Provides the link source interface used by the search engine and its
live Wikipedia implementation.
"""

from wiki_path.wikipedia.link_source import LinkSource, WikiLinkSource, normalize_title

__all__ = [
    "LinkSource",
    "WikiLinkSource",
    "normalize_title",
]
