"""
Wikimap - Interactive encyclopedia link-graph explorer.

Wikimap grows a directed graph of topics from one or more seed pages,
expanding nodes into their outbound links and tracing any node back to
the seed it was discovered from.

Key Components:
- core: Graph store, rename/merge protocol, traceback and highlighting
- sources: Link sources (Wikipedia, static in-memory pages)
- graph: Visualization surface and HTML export

Usage:
    from wikimap import Explorer
    from wikimap.sources import WikipediaLinkSource

    explorer = Explorer(WikipediaLinkSource())
    root_ids = explorer.seed(["Albert Einstein"])
    asyncio.run(explorer.expand(root_ids[0]))
"""

__version__ = "0.1.0"

from .core.explorer import Explorer
from .core.types import Edge, Node, PageLinks

__all__ = [
    "__version__",
    "Explorer",
    "Node",
    "Edge",
    "PageLinks",
]
