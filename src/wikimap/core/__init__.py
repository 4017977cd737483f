"""
Core modules for wikimap.

This package contains the graph state engine:
- types: Data structures (Node, Edge, styles)
- graph: The graph store
- rename: Rename/merge protocol for redirected topics
- traceback: Parent-chain walks back to a root
- highlight: Selection highlight state machine
- expansion: Link-source driven node expansion
- explorer: Session object composing all of the above
"""

from .types import Edge, EdgeClass, EdgeStyle, Node, NodeStyle, PageLinks

__all__ = [
    "Edge",
    "EdgeClass",
    "EdgeStyle",
    "Node",
    "NodeStyle",
    "PageLinks",
]
