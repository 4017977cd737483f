"""
Ephemeral exploration state.

- RootSet: the ordered seed ids that terminate a traceback.
- TraceState: the current selection, its trace, and the style overrides the
  highlighter has pushed to the surface.

Neither is part of the graph itself; both are rewritten by the rename/merge
protocol so they never reference a retired id.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from .types import EdgeStyle, NodeStyle


class RootSet:
    """Ordered, duplicate-free collection of root node ids."""

    def __init__(self, ids: Iterable[str] = ()):
        self._ids: List[str] = []
        for node_id in ids:
            self.add(node_id)

    def add(self, node_id: str) -> None:
        if node_id not in self._ids:
            self._ids.append(node_id)

    def discard(self, node_id: str) -> None:
        if node_id in self._ids:
            self._ids.remove(node_id)

    def replace(self, old_id: str, new_id: str) -> None:
        """Rewrite ``old_id`` in place; keeps the first occurrence if both exist."""
        if old_id not in self._ids:
            return
        pos = self._ids.index(old_id)
        if new_id in self._ids:
            del self._ids[pos]
        else:
            self._ids[pos] = new_id

    def clear(self) -> None:
        self._ids.clear()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"RootSet({self._ids!r})"


@dataclass
class TraceState:
    """Selection and derived highlight state."""
    selected_node: Optional[str] = None
    trace_nodes: List[str] = field(default_factory=list)
    trace_edges: List[str] = field(default_factory=list)
    is_reset: bool = True
    node_styles: Dict[str, NodeStyle] = field(default_factory=dict)
    edge_styles: Dict[str, EdgeStyle] = field(default_factory=dict)

    def references(self, node_id: str) -> bool:
        """True if the selection or the trace mentions ``node_id``."""
        return self.selected_node == node_id or node_id in self.trace_nodes

    def replace_node(self, old_id: str, new_id: str) -> None:
        if self.selected_node == old_id:
            self.selected_node = new_id
        self.trace_nodes = [new_id if n == old_id else n for n in self.trace_nodes]

        style = self.node_styles.pop(old_id, None)
        if style is not None and new_id not in self.node_styles:
            self.node_styles[new_id] = style.model_copy(update={"id": new_id})

    def clear(self) -> None:
        self.selected_node = None
        self.trace_nodes = []
        self.trace_edges = []
        self.node_styles.clear()
        self.edge_styles.clear()
        self.is_reset = True
