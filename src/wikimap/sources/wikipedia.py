"""
Wikipedia link source.

Talks to the MediaWiki action API. By default only the links in a page's
introduction are returned, which keeps the graph readable; in "people only"
mode every link on the page is fetched and then filtered down to articles
about people or characters, judged by their categories.

Requests are blocking ``urllib`` calls run in a worker thread so the event
loop stays free while several expansions are in flight.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List
from urllib import error, parse, request

from ..config import (
    CATEGORY_BATCH_SIZE,
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT_SECONDS,
    PEOPLE_CATEGORY_KEYWORDS,
)
from ..core.identity import normalize
from ..core.types import PageLinks
from .base import LinkSourceError

logger = logging.getLogger(__name__)

USER_AGENT = "wikimap/0.1 (https://github.com/wikimap/wikimap)"

# Namespace of regular articles
ARTICLE_NAMESPACE = 0


def is_article(title: str) -> bool:
    """
    Titles outside the main namespace carry an inner colon ('WP:UA').

    A trailing colon is ignored.
    """
    name = title[:-1] if title.endswith(":") else title
    return ":" not in name


def unique_titles(titles: List[str]) -> List[str]:
    """Drop titles that normalize to an id already seen, keeping the first."""
    seen = set()
    result = []
    for title in titles:
        key = normalize(title)
        if key not in seen:
            seen.add(key)
            result.append(title)
    return result


class WikipediaLinkSource:
    """
    Link source backed by the Wikipedia API.

    Args:
        api_url: ``api.php`` endpoint of the wiki.
        people_only: Keep only links to people and characters.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        people_only: bool = False,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.api_url = api_url
        self.people_only = people_only
        self.timeout = timeout

    # =========================================================================
    # LinkSource
    # =========================================================================

    async def resolve(self, topic: str) -> PageLinks:
        params: Dict[str, Any] = {"action": "parse", "page": topic, "prop": "links", "redirects": 1}
        if not self.people_only:
            params["section"] = 0

        res = await self._query(params)
        try:
            page = res["parse"]
            redirects = page.get("redirects") or []
            canonical = redirects[0]["to"] if redirects else page.get("title", topic)
            titles = [
                item["*"] for item in page.get("links", [])
                if item.get("ns") == ARTICLE_NAMESPACE and "*" in item
            ]
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise LinkSourceError(f"Malformed parse response for {topic!r}: {e}", topic=topic) from e

        links = unique_titles([t.replace("_", " ") for t in titles if is_article(t)])
        if self.people_only:
            links = await self.filter_people(links)

        logger.debug(f"Resolved {topic!r} as {canonical!r} with {len(links)} links")
        return PageLinks(canonical_name=canonical, linked_topics=links)

    # =========================================================================
    # Extras
    # =========================================================================

    async def filter_people(self, titles: List[str]) -> List[str]:
        """
        Keep titles whose categories mention people or characters.

        Titles are checked in batches; a batch that fails is logged and
        contributes nothing.
        """
        if not titles:
            return []

        valid = set()
        for start in range(0, len(titles), CATEGORY_BATCH_SIZE):
            chunk = titles[start:start + CATEGORY_BATCH_SIZE]
            try:
                res = await self._query({
                    "action": "query",
                    "titles": "|".join(chunk),
                    "prop": "categories",
                    "cllimit": "max",
                })
            except LinkSourceError as e:
                logger.warning(f"Category lookup failed for {len(chunk)} titles: {e}")
                continue

            pages = (res.get("query") or {}).get("pages") or {}
            for page in pages.values():
                categories = [c.get("title", "").lower() for c in page.get("categories", [])]
                if any(keyword in c for c in categories for keyword in PEOPLE_CATEGORY_KEYWORDS):
                    valid.add(page.get("title"))

        return [t for t in titles if t in valid]

    async def random_article(self) -> str:
        """Title of a random article."""
        res = await self._query({"action": "query", "list": "random", "rnlimit": 1,
                                 "rnnamespace": ARTICLE_NAMESPACE})
        try:
            return res["query"]["random"][0]["title"]
        except (KeyError, IndexError, TypeError) as e:
            raise LinkSourceError(f"Malformed random response: {e}") from e

    async def suggestions(self, search: str, limit: int = 10) -> List[str]:
        """Article titles completing ``search``."""
        res = await self._query({"action": "opensearch", "search": search, "limit": limit,
                                 "namespace": ARTICLE_NAMESPACE})
        try:
            return list(res[1])
        except (IndexError, KeyError, TypeError) as e:
            raise LinkSourceError(f"Malformed suggestion response for {search!r}: {e}", topic=search) from e

    # =========================================================================
    # Transport
    # =========================================================================

    async def _query(self, params: Dict[str, Any]) -> Any:
        return await asyncio.to_thread(self._request, params)

    def _request(self, params: Dict[str, Any]) -> Any:
        query = parse.urlencode({"format": "json", **params})
        req = request.Request(f"{self.api_url}?{query}", headers={"User-Agent": USER_AGENT})
        topic = params.get("page") or params.get("titles") or params.get("search")

        try:
            with request.urlopen(req, timeout=self.timeout) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except (error.URLError, TimeoutError, OSError) as e:
            raise LinkSourceError(f"Request to {self.api_url} failed: {e}", topic=topic) from e
        except (ValueError, UnicodeDecodeError) as e:
            raise LinkSourceError(f"Invalid JSON from {self.api_url}: {e}", topic=topic) from e

        if isinstance(payload, dict) and "error" in payload:
            info = payload["error"].get("info", payload["error"])
            raise LinkSourceError(f"API error for {topic!r}: {info}", topic=topic)
        return payload
