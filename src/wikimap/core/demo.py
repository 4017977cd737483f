"""
Offline demo data.

A small hand-written slice of the encyclopedia, so ``wikimap demo`` shows
expansion, redirects, merges and traceback without touching the network.
"""

import logging
from typing import Dict, List

from ..sources.static import StaticLinkSource

logger = logging.getLogger(__name__)

DEMO_SEEDS: List[str] = ["Albert Einstein"]

DEMO_PAGES: Dict[str, List[str]] = {
    "Albert Einstein": ["Relativity", "Physicist", "Nobel Prize in Physics", "Ulm"],
    "Theory of relativity": ["Special relativity", "General relativity", "Albert Einstein"],
    "Special relativity": ["Speed of light", "Spacetime", "Theory of relativity"],
    "General relativity": ["Gravity", "Spacetime", "Black hole"],
    "Physicist": ["Physics", "Scientist"],
    "Physics": ["Natural science", "Matter", "Energy"],
    "Nobel Prize in Physics": ["Royal Swedish Academy of Sciences", "Physics"],
    "Ulm": ["Germany", "Danube"],
    "Spacetime": ["Special relativity", "Four-dimensional space"],
    "Gravity": ["Isaac Newton", "General relativity"],
    "Black hole": ["General relativity", "Event horizon"],
    "Isaac Newton": ["Physicist", "Gravitation", "Calculus"],
    "Germany": ["Europe", "Berlin"],
    "Scientist": ["Science", "Physicist"],
}

# Alternative spellings that resolve to a page above
DEMO_REDIRECTS: Dict[str, str] = {
    "Einstein": "Albert Einstein",
    "Relativity": "Theory of relativity",
    "Gravitation": "Gravity",
    "Black holes": "Black hole",
}


def demo_link_source(delay: float = 0.0) -> StaticLinkSource:
    """Link source over the demo pages."""
    logger.debug(f"Demo link source with {len(DEMO_PAGES)} pages")
    return StaticLinkSource(DEMO_PAGES, DEMO_REDIRECTS, delay=delay, strict=False)
