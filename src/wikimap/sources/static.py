"""
In-memory link source.

Pages and redirects are plain dictionaries keyed by normalized id, so lookups
are insensitive to the same spelling differences as the real service.
"""

import asyncio
from typing import Dict, List, Mapping, Optional, Sequence

from ..core.identity import normalize
from ..core.types import PageLinks
from .base import LinkSourceError


class StaticLinkSource:
    """
    Link source over a fixed set of pages.

    Args:
        pages: Canonical title -> linked titles.
        redirects: Alias title -> canonical title.
        delay: Seconds to wait before answering, to exercise interleaving.
        strict: Raise on unknown pages. When False they resolve as pages
            without links.
    """

    def __init__(
        self,
        pages: Mapping[str, Sequence[str]],
        redirects: Optional[Mapping[str, str]] = None,
        delay: float = 0.0,
        strict: bool = True,
    ):
        self._titles: Dict[str, str] = {normalize(title): title for title in pages}
        self._links: Dict[str, List[str]] = {normalize(title): list(links) for title, links in pages.items()}
        self._redirects: Dict[str, str] = {normalize(alias): target for alias, target in (redirects or {}).items()}
        self._delay = delay
        self._strict = strict
        self.calls: List[str] = []

    async def resolve(self, topic: str) -> PageLinks:
        self.calls.append(topic)
        if self._delay:
            await asyncio.sleep(self._delay)

        canonical = self._redirects.get(normalize(topic), topic)
        key = normalize(canonical)
        if key not in self._links:
            if not self._strict:
                return PageLinks(canonical_name=canonical, linked_topics=[])
            raise LinkSourceError(f"No page named {topic!r}", topic=topic)

        return PageLinks(canonical_name=self._titles[key], linked_topics=self._links[key])

    def titles(self) -> List[str]:
        return list(self._titles.values())
