"""
Graph Store backed by rustworkx.

The store is the only mutator of graph data. It manages:
- The bimap between string node ids and rustworkx integer indices.
- Immutable Node and Edge payloads (queries return snapshots).
- The one-edge-per-ordered-pair invariant.
- The two re-identification primitives used by the rename/merge protocol.

Node sizes are not recomputed automatically when edges disappear; callers
batch that with ``update_size`` once a mutation is complete.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Set

import rustworkx as rx

from .types import Edge, Node

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Directed topic graph.

    Features:
    - O(1) node lookup via ID-to-Index bimap
    - Direction-sensitive duplicate edge suppression
    - In-place re-keying so renames never leave dangling edges
    """

    def __init__(self):
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx: Dict[str, int] = {}
        self._idx_to_id: Dict[int, str] = {}

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_nodes(self, nodes: Iterable[Node]) -> List[Node]:
        """
        Insert nodes whose ids are not present yet.

        Existing ids are skipped, not overwritten.

        Returns:
            List[Node]: The nodes actually inserted.
        """
        added = []
        for node in nodes:
            if node.id in self._id_to_idx:
                logger.debug(f"Skipping duplicate node {node.id}")
                continue
            idx = self._graph.add_node(node)
            self._id_to_idx[node.id] = idx
            self._idx_to_id[idx] = node.id
            added.append(node)
        return added

    def add_edges(self, edges: Iterable[Edge]) -> List[Edge]:
        """
        Insert edges, dropping duplicates in the same direction.

        Edges with an endpoint missing from the store are dropped too.

        Returns:
            List[Edge]: The edges actually inserted.
        """
        added = []
        for edge in edges:
            u = self._id_to_idx.get(edge.source_id)
            v = self._id_to_idx.get(edge.target_id)
            if u is None or v is None:
                logger.debug(f"Dropping edge {edge.source_id} -> {edge.target_id}: missing endpoint")
                continue
            if self._graph.has_edge(u, v):
                continue
            self._graph.add_edge(u, v, edge)
            added.append(edge)
        return added

    def remove_node(self, node_id: str) -> bool:
        """Remove a node and all connected edges. Absent ids are a no-op."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return False

        self._graph.remove_node(idx)
        del self._id_to_idx[node_id]
        del self._idx_to_id[idx]
        return True

    def update_node(self, node_id: str, **patch) -> Optional[Node]:
        """
        Replace fields of a node. The id cannot be changed here.

        Returns:
            Optional[Node]: The updated node, or None if it does not exist.
        """
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        patch.pop("id", None)
        node = self._graph[idx].model_copy(update=patch)
        self._graph[idx] = node
        return node

    def update_size(self, node_id: str) -> Optional[Node]:
        """Set a node's value to its current degree."""
        if node_id not in self._id_to_idx:
            return None
        return self.update_node(node_id, value=self.degree(node_id))

    def rekey_node(self, old_id: str, new_id: str, **patch) -> Optional[Node]:
        """
        Move a node to a new id, keeping its edges.

        Incident edges are re-pointed in place before the node payload
        changes, so no edge ever references a missing id.

        Returns:
            Optional[Node]: The re-keyed node, or None if ``old_id`` is absent
            or ``new_id`` is already taken.
        """
        idx = self._id_to_idx.get(old_id)
        if idx is None or new_id in self._id_to_idx:
            return None

        for u, v, edge in list(self._graph.in_edges(idx)) + list(self._graph.out_edges(idx)):
            self._graph.update_edge(u, v, self._repoint(edge, old_id, new_id))

        node = self._graph[idx].model_copy(update={**patch, "id": new_id})
        self._graph[idx] = node
        del self._id_to_idx[old_id]
        self._id_to_idx[new_id] = idx
        self._idx_to_id[idx] = new_id
        return node

    def merge_nodes(self, old_id: str, into_id: str) -> List[Edge]:
        """
        Fold ``old_id`` into the existing node ``into_id``.

        Every edge of ``old_id`` is re-pointed to ``into_id``, then ``old_id``
        is deleted. A re-pointed edge that would duplicate an existing ordered
        pair, or collapse into a self-loop, is dropped.

        Returns:
            List[Edge]: The edges that were dropped.
        """
        old_idx = self._id_to_idx.get(old_id)
        into_idx = self._id_to_idx.get(into_id)
        if old_idx is None or into_idx is None or old_idx == into_idx:
            return []

        dropped: List[Edge] = []
        # A self-loop shows up in both lists
        incident = {e.id: (u, v, e) for u, v, e in
                    list(self._graph.in_edges(old_idx)) + list(self._graph.out_edges(old_idx))}
        for u, v, edge in incident.values():
            new_u = into_idx if u == old_idx else u
            new_v = into_idx if v == old_idx else v
            if new_u == new_v or self._graph.has_edge(new_u, new_v):
                dropped.append(edge)
                continue
            self._graph.add_edge(new_u, new_v, self._repoint(edge, old_id, into_id))

        self.remove_node(old_id)
        return dropped

    def clear(self) -> None:
        self._graph = rx.PyDiGraph(multigraph=False)
        self._id_to_idx.clear()
        self._idx_to_id.clear()

    @staticmethod
    def _repoint(edge: Edge, old_id: str, new_id: str) -> Edge:
        update = {}
        if edge.source_id == old_id:
            update["source_id"] = new_id
        if edge.target_id == old_id:
            update["target_id"] = new_id
        return edge.model_copy(update=update)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_node(self, node_id: str) -> Optional[Node]:
        """Retrieve a node by ID."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return None
        return self._graph[idx]

    def has_node(self, node_id: str) -> bool:
        return node_id in self._id_to_idx

    def get_ids(self) -> List[str]:
        return [self._idx_to_id[idx] for idx in self._graph.node_indices()]

    def get_nodes(self) -> List[Node]:
        return list(self._graph.nodes())

    def get_nodes_where(self, predicate: Callable[[Node], bool]) -> List[Node]:
        return [node for node in self._graph.nodes() if predicate(node)]

    def get_edges(self) -> List[Edge]:
        return list(self._graph.edges())

    def get_edges_where(self, predicate: Callable[[Edge], bool]) -> List[Edge]:
        return [edge for edge in self._graph.edges() if predicate(edge)]

    def get_edge_connecting(self, source_id: str, target_id: str) -> Optional[Edge]:
        """Return the edge ``source_id -> target_id`` (direction-sensitive)."""
        u = self._id_to_idx.get(source_id)
        v = self._id_to_idx.get(target_id)
        if u is None or v is None or not self._graph.has_edge(u, v):
            return None
        return self._graph.get_edge_data(u, v)

    def incident_edges(self, node_id: str) -> List[Edge]:
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return []
        return [e for _, _, e in self._graph.in_edges(idx)] + [e for _, _, e in self._graph.out_edges(idx)]

    def neighbors(self, node_id: str) -> List[str]:
        """Ids adjacent to ``node_id`` in either direction."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return []
        seen: Set[int] = set()
        result = []
        for u, v, _ in list(self._graph.in_edges(idx)) + list(self._graph.out_edges(idx)):
            other = u if v == idx else v
            if other != idx and other not in seen:
                seen.add(other)
                result.append(self._idx_to_id[other])
        return result

    def degree(self, node_id: str) -> int:
        """Number of incident edges."""
        idx = self._id_to_idx.get(node_id)
        if idx is None:
            return 0
        return self._graph.in_degree(idx) + self._graph.out_degree(idx)

    @property
    def node_count(self) -> int:
        return self._graph.num_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.num_edges()

    def get_stats(self) -> Dict[str, int]:
        orphans = len([idx for idx in self._graph.node_indices()
                       if self._graph.in_degree(idx) == 0 and self._graph.out_degree(idx) == 0])
        return {
            "total_nodes": self.node_count,
            "total_edges": self.edge_count,
            "orphans": orphans,
        }
