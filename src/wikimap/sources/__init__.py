"""
Link sources for wikimap.

A link source answers one question: for a topic name, what is its canonical
title and which topics does it link to?

- WikipediaLinkSource: MediaWiki action API
- StaticLinkSource: In-memory pages for demos and tests
"""

from .base import LinkSource, LinkSourceError
from .static import StaticLinkSource
from .wikipedia import WikipediaLinkSource

__all__ = ["LinkSource", "LinkSourceError", "StaticLinkSource", "WikipediaLinkSource"]
