"""
Traceback Engine.

Follows parent pointers (the expansion tree) from a node back to the root it
was discovered from, then looks up the graph edges along that chain.

Broken chains degrade instead of failing: a walk that exceeds the hop bound
or falls off the tree yields an empty trace, and a missing edge simply
shortens the edge list.
"""

import logging
from typing import Collection, List, Sequence

from ..config import MAX_TRACE_HOPS
from .graph import GraphStore

logger = logging.getLogger(__name__)


def trace_nodes(
    store: GraphStore,
    roots: Collection[str],
    node_id: str,
    max_hops: int = MAX_TRACE_HOPS,
) -> List[str]:
    """
    Ids from ``node_id`` up to its root, both inclusive.

    Returns an empty list if no root is reached within ``max_hops`` parent
    steps (a cycle or a corrupted chain) or the chain hits a missing or
    parentless non-root node.
    """
    path: List[str] = []
    current = node_id

    for _ in range(max_hops + 1):
        node = store.get_node(current)
        if node is None:
            logger.debug(f"Traceback from {node_id} hit missing node {current}")
            return []
        path.append(current)
        if current in roots:
            return path
        if node.parent is None:
            logger.debug(f"Traceback from {node_id} stopped at parentless node {current}")
            return []
        current = node.parent

    logger.debug(f"Traceback from {node_id} exceeded {max_hops} hops")
    return []


def trace_edges(store: GraphStore, node_ids: Sequence[str]) -> List[str]:
    """
    Edge ids along a trace, ordered root first.

    ``node_ids`` is expected in ``trace_nodes`` order (leaf first); it is
    not modified.
    """
    ordered = list(reversed(node_ids))
    path = []
    for ancestor, descendant in zip(ordered, ordered[1:]):
        edge = store.get_edge_connecting(ancestor, descendant)
        if edge is None:
            logger.debug(f"No edge {ancestor} -> {descendant} on trace")
            continue
        path.append(edge.id)
    return path
