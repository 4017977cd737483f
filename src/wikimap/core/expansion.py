"""
Expansion Coordinator.

Expanding a node asks the link source for the page behind it, folds any
redirect into the graph via the rename/merge protocol, and adds the linked
topics as children.

The link-source call is the only suspension point. Nothing is written to
the store until it returns, and everything after it runs synchronously, so
concurrent expansions only ever see fully applied states. Children and
edges that already exist are skipped, which makes repeated or racing
expansions of the same node harmless.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional, Tuple

from ..config import CHILD_LABEL_WIDTH, SPAWN_JITTER_MAX, SPAWN_JITTER_MIN
from . import palette
from .graph import GraphStore
from .identity import normalize, wordwrap
from .rename import RenameOutcome, rename_node
from .result import Err, Ok, Result
from .state import RootSet, TraceState
from .types import Edge, Node

logger = logging.getLogger(__name__)


class ExpansionFailure(StrEnum):
    LINK_SOURCE = "link_source"
    NODE_MISSING = "node_missing"


@dataclass
class ExpansionError:
    """Structured error for a rejected expansion. The graph is untouched."""
    message: str
    node_id: str
    reason: ExpansionFailure
    cause: Exception | None = None


@dataclass
class ExpansionReport:
    """What an expansion changed."""
    node_id: str
    rename: RenameOutcome
    added_nodes: List[str] = field(default_factory=list)
    added_edges: List[str] = field(default_factory=list)
    linked: List[str] = field(default_factory=list)


def spawn_position(anchor: Tuple[float, float], rng: random.Random) -> Tuple[float, float]:
    """A point 5-15 units from ``anchor`` in a random direction."""
    angle = rng.random() * 2 * math.pi
    radius = SPAWN_JITTER_MIN + rng.random() * (SPAWN_JITTER_MAX - SPAWN_JITTER_MIN)
    return anchor[0] + radius * math.cos(angle), anchor[1] + radius * math.sin(angle)


class ExpansionCoordinator:
    """Runs expansions against a store using a link source."""

    def __init__(
        self,
        store: GraphStore,
        roots: RootSet,
        trace: TraceState,
        link_source,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.roots = roots
        self.trace = trace
        self.link_source = link_source
        self.rng = rng or random.Random()

    async def expand(self, node_id: str) -> Result[ExpansionReport, ExpansionError]:
        """
        Expand ``node_id`` into its linked topics.

        Returns:
            Ok(ExpansionReport) on success, Err(ExpansionError) if the link
            source failed or the node is gone. Errors never mutate the graph.
        """
        node = self.store.get_node(node_id)
        if node is None:
            return Err(ExpansionError(f"Node {node_id} does not exist", node_id, ExpansionFailure.NODE_MISSING))

        try:
            page = await self.link_source.resolve(node.name)
        except Exception as e:
            logger.warning(f"Expansion of {node_id} failed: {e}")
            return Err(ExpansionError(f"Link source failed for {node.name!r}: {e}", node_id,
                                      ExpansionFailure.LINK_SOURCE, cause=e))

        # The node may have been removed while the request was in flight
        if not self.store.has_node(node_id):
            logger.info(f"Discarding expansion of removed node {node_id}")
            return Err(ExpansionError(f"Node {node_id} was removed during expansion", node_id,
                                      ExpansionFailure.NODE_MISSING))

        outcome = rename_node(self.store, self.roots, self.trace, node_id, page.canonical_name)
        report = self._merge_children(outcome, page.linked_topics)
        logger.info(f"Expanded {report.node_id}: {len(report.added_nodes)} new nodes, "
                    f"{len(report.added_edges)} new edges")
        return Ok(report)

    def _merge_children(self, outcome: RenameOutcome, topics: List[str]) -> ExpansionReport:
        parent_id = outcome.node_id
        parent = self.store.get_node(parent_id)
        level = parent.level + 1
        anchor = (parent.x, parent.y)

        new_nodes: List[Node] = []
        new_edges: List[Edge] = []
        linked: List[str] = []

        for topic in topics:
            child_id = normalize(topic)
            if child_id == parent_id or child_id in linked:
                continue
            linked.append(child_id)

            existing = self.store.get_node(child_id)
            if existing is None:
                x, y = spawn_position(anchor, self.rng)
                child = Node(
                    id=child_id,
                    name=topic,
                    label=wordwrap(topic, CHILD_LABEL_WIDTH),
                    level=level,
                    parent=parent_id,
                    value=1,
                    x=x,
                    y=y,
                    color=palette.node_color(level),
                )
                new_nodes.append(child)
            child_level = existing.level if existing else level

            if self.store.get_edge_connecting(parent_id, child_id) is None:
                new_edges.append(Edge(source_id=parent_id, target_id=child_id, level=child_level))

        added_nodes = self.store.add_nodes(new_nodes)
        added_edges = self.store.add_edges(new_edges)

        self.store.update_size(parent_id)
        for child_id in linked:
            self.store.update_size(child_id)

        return ExpansionReport(
            node_id=parent_id,
            rename=outcome,
            added_nodes=[n.id for n in added_nodes],
            added_edges=[e.id for e in added_edges],
            linked=linked,
        )
