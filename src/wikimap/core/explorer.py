"""
Explorer - the object that owns one exploration session.

It ties the graph store, the root set, the highlight state and the
visualization surface together, and is the only entry point the CLI and the
interaction controller use. Every operation leaves the store, the trace
state and the surface consistent with each other before it returns.
"""

import asyncio
import logging
import math
import random
from typing import Dict, Iterable, List, Optional, Tuple

from ..config import ROOT_LABEL_WIDTH, ROOT_SPACING, ExplorerConfig
from ..graph.surface import VisSurface, node_record
from . import palette
from .expansion import ExpansionCoordinator, ExpansionError, ExpansionReport
from .graph import GraphStore
from .highlight import HighlightStateMachine
from .identity import normalize, page_url, wordwrap
from .result import Ok, Result
from .state import RootSet, TraceState
from .traceback import trace_nodes
from .types import Node

logger = logging.getLogger(__name__)


class Explorer:
    """
    One exploration session over a link source.

    Args:
        link_source: Object with ``async resolve(topic) -> PageLinks``.
        surface: Renderer; defaults to an in-memory VisSurface.
        rng: Random source for spawn jitter and random selection.
        config: Explorer settings (API URL used for page links).
    """

    def __init__(self, link_source, surface=None, rng: Optional[random.Random] = None,
                 config: Optional[ExplorerConfig] = None):
        self.config = config or ExplorerConfig()
        self.rng = rng or random.Random()
        self.store = GraphStore()
        self.roots = RootSet()
        self.trace_state = TraceState()
        self.surface = surface if surface is not None else VisSurface()
        self.highlighter = HighlightStateMachine(self.store, self.roots, self.surface, self.trace_state)
        self.coordinator = ExpansionCoordinator(self.store, self.roots, self.trace_state, link_source, rng=self.rng)

        # What the surface currently shows: node ids and edge id -> endpoints
        self._rendered_nodes: set = set()
        self._rendered_edges: Dict[str, Tuple[str, str]] = {}

    @property
    def link_source(self):
        return self.coordinator.link_source

    @property
    def selected_node(self) -> Optional[str]:
        return self.trace_state.selected_node

    # =========================================================================
    # Seeding
    # =========================================================================

    def seed(self, names: Iterable[str]) -> List[str]:
        """
        Add root topics at level 0.

        Names that normalize to an id already on the graph are skipped.

        Returns:
            List[str]: Ids of the roots actually added.
        """
        fresh: List[Node] = []
        seen = set()
        for name in names:
            node_id = normalize(name)
            if not node_id or node_id in seen or self.store.has_node(node_id):
                continue
            seen.add(node_id)
            fresh.append(Node(
                id=node_id,
                name=name,
                label=wordwrap(name, ROOT_LABEL_WIDTH),
                level=0,
                value=1,
                color=palette.node_color(0),
            ))

        offset = len(self.roots)
        placed = []
        for i, node in enumerate(fresh):
            x, y = self._root_position(offset + i)
            placed.append(node.model_copy(update={"x": x, "y": y}))

        added = self.store.add_nodes(placed)
        for node in added:
            self.roots.add(node.id)
        self._sync_surface()
        self.highlighter.refresh()
        return [n.id for n in added]

    @staticmethod
    def _root_position(index: int) -> Tuple[float, float]:
        if index == 0:
            return 0.0, 0.0
        angle = index * 2 * math.pi / 6
        return ROOT_SPACING * math.cos(angle), ROOT_SPACING * math.sin(angle)

    # =========================================================================
    # Operations
    # =========================================================================

    async def expand(self, node_id: str) -> Result[ExpansionReport, ExpansionError]:
        result = await self.coordinator.expand(node_id)
        if isinstance(result, Ok):
            self._sync_surface()
            self.highlighter.refresh()
        return result

    async def expand_all(self, node_ids: Iterable[str]) -> List[Result[ExpansionReport, ExpansionError]]:
        """Expand several nodes concurrently."""
        return list(await asyncio.gather(*(self.expand(node_id) for node_id in node_ids)))

    def trace(self, node_id: str) -> bool:
        return self.highlighter.trace(node_id)

    def reset(self) -> bool:
        return self.highlighter.reset()

    def remove(self, node_id: str) -> bool:
        """
        Remove a node, its edges, and update the neighbors' sizes.

        If the node is selected or on the active trace, highlighting is reset
        first so no derived state points at a deleted node.
        """
        if not self.store.has_node(node_id):
            return False

        if self.trace_state.references(node_id):
            self.highlighter.reset()
        else:
            self.highlighter.forget([node_id], [e.id for e in self.store.incident_edges(node_id)])

        neighbors = self.store.neighbors(node_id)
        self.store.remove_node(node_id)
        self.roots.discard(node_id)
        for neighbor_id in neighbors:
            self.store.update_size(neighbor_id)

        self._sync_surface()
        return True

    def clear(self) -> None:
        """Drop the whole graph."""
        self.highlighter.reset()
        self.store.clear()
        self.roots.clear()
        self._sync_surface()

    def focus(self, node_id: str) -> None:
        self.surface.focus(node_id)

    # =========================================================================
    # Queries
    # =========================================================================

    def random_node(self) -> Optional[str]:
        ids = self.store.get_ids()
        if not ids:
            return None
        return self.rng.choice(ids)

    def page_url(self, node_id: str) -> Optional[str]:
        node = self.store.get_node(node_id)
        if node is None:
            return None
        return page_url(node.name, self.config.api_url)

    def traceback(self, node_id: str) -> List[str]:
        """Display names from the root down to ``node_id``."""
        path = trace_nodes(self.store, self.roots, node_id)
        return [self.store.get_node(i).name for i in reversed(path)]

    # =========================================================================
    # Surface
    # =========================================================================

    def _sync_surface(self) -> None:
        """Push the difference between the store and what is drawn."""
        nodes = {n.id: n for n in self.store.get_nodes()}
        edges = {e.id: e for e in self.store.get_edges()}

        gone_edges = [i for i in self._rendered_edges if i not in edges]
        if gone_edges:
            self.surface.remove_edges(gone_edges)

        new_nodes = [n for i, n in nodes.items() if i not in self._rendered_nodes]
        kept_nodes = [n for i, n in nodes.items() if i in self._rendered_nodes]
        if new_nodes:
            self.surface.add_nodes(new_nodes)
        if kept_nodes:
            # Color belongs to the highlighter once a node is drawn
            self.surface.update_nodes([
                {k: v for k, v in node_record(n).items() if k != "color"} for n in kept_nodes
            ])

        new_edges = [e for i, e in edges.items() if i not in self._rendered_edges]
        moved_edges = [e for i, e in edges.items()
                       if i in self._rendered_edges and self._rendered_edges[i] != (e.source_id, e.target_id)]
        if new_edges:
            self.surface.add_edges(new_edges)
        if moved_edges:
            self.surface.update_edges([{"id": e.id, "from": e.source_id, "to": e.target_id} for e in moved_edges])

        # Re-pointed edges must be moved before their old endpoint disappears
        gone_nodes = [i for i in self._rendered_nodes if i not in nodes]
        if gone_nodes:
            self.surface.remove_nodes(gone_nodes)

        self._rendered_nodes = set(nodes)
        self._rendered_edges = {i: (e.source_id, e.target_id) for i, e in edges.items()}
