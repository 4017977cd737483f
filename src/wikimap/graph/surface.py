"""
Visualization surface.

The surface is what draws the graph. The engine pushes batches of node and
edge records into it and asks it which nodes and edges touch a given node.

``VisSurface`` keeps vis-network style records in memory (the same shape a
``vis.DataSet`` holds) so they can be exported as a standalone HTML page.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol

from ..config import DEFAULT_EDGE_WIDTH
from ..core import palette
from ..core.types import Edge, EdgeStyle, Node, NodeStyle

Record = Dict[str, Any]


class Surface(Protocol):
    """What the engine needs from a renderer."""

    def connected_nodes(self, node_id: str) -> List[str]: ...

    def connected_edges(self, node_id: str) -> List[str]: ...

    def add_nodes(self, nodes: Iterable[Node]) -> None: ...

    def add_edges(self, edges: Iterable[Edge]) -> None: ...

    def update_nodes(self, patches: Iterable[Record]) -> None: ...

    def update_edges(self, patches: Iterable[Record]) -> None: ...

    def remove_nodes(self, node_ids: Iterable[str]) -> None: ...

    def remove_edges(self, edge_ids: Iterable[str]) -> None: ...

    def focus(self, node_id: str) -> None: ...


def node_record(node: Node) -> Record:
    return {
        "id": node.id,
        "label": node.label,
        "value": node.value,
        "level": node.level,
        "x": node.x,
        "y": node.y,
        "color": node.color,
    }


def edge_record(edge: Edge) -> Record:
    return {
        "id": edge.id,
        "from": edge.source_id,
        "to": edge.target_id,
        "level": edge.level,
        "width": DEFAULT_EDGE_WIDTH,
        "color": palette.edge_color(edge.level),
    }


def node_style_patch(style: NodeStyle) -> Record:
    return {"id": style.id, "color": style.color, "font": {"color": style.font_color}}


def edge_style_patch(style: EdgeStyle) -> Record:
    color: Any = {"inherit": "to"} if style.inherits_color else style.color
    return {"id": style.id, "width": style.width, "color": color}


class VisSurface:
    """
    In-memory renderer holding vis-network records.

    Updates merge into existing records the way ``vis.DataSet.update`` does;
    removing a node also drops the edges that touch it.
    """

    def __init__(self):
        self.nodes: Dict[str, Record] = {}
        self.edges: Dict[str, Record] = {}
        self.focused: Optional[str] = None

    def connected_nodes(self, node_id: str) -> List[str]:
        result = []
        for record in self.edges.values():
            if record.get("from") == node_id:
                other = record.get("to")
            elif record.get("to") == node_id:
                other = record.get("from")
            else:
                continue
            if other != node_id and other not in result:
                result.append(other)
        return result

    def connected_edges(self, node_id: str) -> List[str]:
        return [
            edge_id for edge_id, record in self.edges.items()
            if node_id in (record.get("from"), record.get("to"))
        ]

    def add_nodes(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self.nodes[node.id] = node_record(node)

    def add_edges(self, edges: Iterable[Edge]) -> None:
        for edge in edges:
            self.edges[edge.id] = edge_record(edge)

    def update_nodes(self, patches: Iterable[Record]) -> None:
        for patch in patches:
            self.nodes.setdefault(patch["id"], {}).update(patch)

    def update_edges(self, patches: Iterable[Record]) -> None:
        for patch in patches:
            self.edges.setdefault(patch["id"], {}).update(patch)

    def remove_nodes(self, node_ids: Iterable[str]) -> None:
        for node_id in list(node_ids):
            self.nodes.pop(node_id, None)
            for edge_id in self.connected_edges(node_id):
                del self.edges[edge_id]
            if self.focused == node_id:
                self.focused = None

    def remove_edges(self, edge_ids: Iterable[str]) -> None:
        for edge_id in edge_ids:
            self.edges.pop(edge_id, None)

    def focus(self, node_id: str) -> None:
        if node_id in self.nodes:
            self.focused = node_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": list(self.nodes.values()),
            "edges": list(self.edges.values()),
            "focus": self.focused,
        }
