"""
Highlight State Machine.

Two states: Reset (no overrides, everything drawn in its level colors) and
Traced(node). Entering Traced always tears down the previous state first and
recomputes every node and edge from scratch; nothing is patched
incrementally.

Classification when tracing node ``n``:
- Edges: TRACED (on the path to the root) > CONNECTED (touches ``n``) >
  UNRELATED (dimmed).
- Nodes: active (``n``, its trace, its neighbors) at full text opacity,
  everything else faded.
"""

import logging
from typing import Iterable, List, Optional

from ..config import (
    ACTIVE_TEXT_OPACITY,
    CONNECTED_EDGE_WIDTH,
    DEFAULT_EDGE_WIDTH,
    DIMMED_EDGE_COLOR,
    INACTIVE_TEXT_OPACITY,
    TRACED_EDGE_WIDTH,
)
from ..graph.surface import edge_style_patch, node_style_patch
from . import palette
from .graph import GraphStore
from .state import RootSet, TraceState
from .traceback import trace_edges, trace_nodes
from .types import Edge, EdgeClass, EdgeStyle, Node, NodeStyle

logger = logging.getLogger(__name__)


class HighlightStateMachine:
    """
    Derives per-node and per-edge visual state from the current selection.

    The surface is asked for the connected set of the selected node and
    receives every style update as one batch per collection.
    """

    def __init__(self, store: GraphStore, roots: RootSet, surface, trace: Optional[TraceState] = None):
        self.store = store
        self.roots = roots
        self.surface = surface
        self.state = trace or TraceState()

    @property
    def is_reset(self) -> bool:
        return self.state.is_reset

    @property
    def selected_node(self) -> Optional[str]:
        return self.state.selected_node

    # =========================================================================
    # Transitions
    # =========================================================================

    def trace(self, node_id: str) -> bool:
        """
        Enter Traced(node_id).

        Re-selecting the current node, or selecting a node that is not on the
        graph, leaves the state untouched.

        Returns:
            bool: True if a transition happened.
        """
        if node_id == self.state.selected_node or not self.store.has_node(node_id):
            return False

        self.reset()
        self._apply(node_id)
        return True

    def reset(self) -> bool:
        """
        Restore default styling. A no-op when already in Reset.

        Returns:
            bool: True if anything was restored.
        """
        if self.state.is_reset:
            return False

        nodes = self.store.get_nodes()
        edges = self.store.get_edges()
        self._push(
            [self._default_node_style(n) for n in nodes],
            [self._default_edge_style(e) for e in edges],
        )
        self.state.clear()
        return True

    def refresh(self) -> None:
        """Recompute Traced state after the graph changed underneath it."""
        selected = self.state.selected_node
        if selected is None:
            return
        self.reset()
        if self.store.has_node(selected):
            self._apply(selected)

    def forget(self, node_ids: Iterable[str] = (), edge_ids: Iterable[str] = ()) -> None:
        """Drop style overrides for records that are about to disappear."""
        for node_id in node_ids:
            self.state.node_styles.pop(node_id, None)
        for edge_id in edge_ids:
            self.state.edge_styles.pop(edge_id, None)

    # =========================================================================
    # Queries
    # =========================================================================

    def node_style(self, node_id: str) -> Optional[NodeStyle]:
        if node_id in self.state.node_styles:
            return self.state.node_styles[node_id]
        node = self.store.get_node(node_id)
        return self._default_node_style(node) if node else None

    def edge_style(self, edge_id: str) -> Optional[EdgeStyle]:
        if edge_id in self.state.edge_styles:
            return self.state.edge_styles[edge_id]
        edge = next(iter(self.store.get_edges_where(lambda e: e.id == edge_id)), None)
        return self._default_edge_style(edge) if edge else None

    # =========================================================================
    # Internals
    # =========================================================================

    def _apply(self, node_id: str) -> None:
        state = self.state
        state.selected_node = node_id
        state.is_reset = False

        state.trace_nodes = trace_nodes(self.store, self.roots, node_id)
        state.trace_edges = trace_edges(self.store, state.trace_nodes)

        connected_edges = set(self.surface.connected_edges(node_id))
        connected_nodes = set(self.surface.connected_nodes(node_id))
        traced_edges = set(state.trace_edges)
        traced_nodes = set(state.trace_nodes)

        edge_styles: List[EdgeStyle] = []
        for edge in self.store.get_edges():
            if edge.id in traced_edges:
                style = EdgeStyle(id=edge.id, width=TRACED_EDGE_WIDTH, color=None,
                                  edge_class=EdgeClass.TRACED)
            elif edge.id in connected_edges:
                style = EdgeStyle(id=edge.id, width=CONNECTED_EDGE_WIDTH,
                                  color=self._level_edge_color(edge), edge_class=EdgeClass.CONNECTED)
            else:
                style = EdgeStyle(id=edge.id, width=DEFAULT_EDGE_WIDTH, color=DIMMED_EDGE_COLOR,
                                  edge_class=EdgeClass.UNRELATED)
            edge_styles.append(style)

        node_styles: List[NodeStyle] = []
        for node in self.store.get_nodes():
            active = node.id == node_id or node.id in traced_nodes or node.id in connected_nodes
            color = palette.trace_color(node.level) if node.id in traced_nodes else self._level_node_color(node)
            node_styles.append(NodeStyle(
                id=node.id,
                color=color,
                font_opacity=ACTIVE_TEXT_OPACITY if active else INACTIVE_TEXT_OPACITY,
            ))

        self._push(node_styles, edge_styles)
        state.node_styles = {s.id: s for s in node_styles}
        state.edge_styles = {s.id: s for s in edge_styles}
        logger.debug(f"Traced {node_id}: {len(state.trace_nodes)} nodes, {len(state.trace_edges)} edges")

    def _push(self, node_styles: List[NodeStyle], edge_styles: List[EdgeStyle]) -> None:
        self.surface.update_edges([edge_style_patch(s) for s in edge_styles])
        self.surface.update_nodes([node_style_patch(s) for s in node_styles])

    def _level_edge_color(self, edge: Edge) -> str:
        target = self.store.get_node(edge.target_id)
        return palette.edge_color(target.level if target else edge.level)

    @staticmethod
    def _level_node_color(node: Node) -> str:
        return node.color or palette.node_color(node.level)

    def _default_node_style(self, node: Node) -> NodeStyle:
        return NodeStyle(id=node.id, color=self._level_node_color(node), font_opacity=ACTIVE_TEXT_OPACITY)

    def _default_edge_style(self, edge: Edge) -> EdgeStyle:
        return EdgeStyle(id=edge.id, width=DEFAULT_EDGE_WIDTH, color=self._level_edge_color(edge))
