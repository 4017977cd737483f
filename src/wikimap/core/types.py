"""
Core type definitions for wikimap.

Nodes and edges are frozen pydantic models: every query on the store hands
out immutable values, and updates are expressed as ``model_copy(update=...)``.
"""

import uuid
from enum import StrEnum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class EdgeClass(StrEnum):
    """How an edge relates to the current selection."""
    DEFAULT = "default"
    TRACED = "traced"
    CONNECTED = "connected"
    UNRELATED = "unrelated"


class Node(BaseModel):
    """
    A single topic in the explored graph.

    ``name`` keeps the unwrapped display name used to resolve the page;
    ``label`` is the word-wrapped form shown on screen.
    """
    id: str
    name: str
    label: str
    level: int = Field(default=0, ge=0)
    parent: str | None = None
    value: int = 1
    x: float = 0.0
    y: float = 0.0
    color: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @property
    def is_root(self) -> bool:
        return self.parent is None


class Edge(BaseModel):
    """
    Directed link discovered from one topic to another.

    ``id`` survives re-pointing during a rename, so highlight state keyed by
    edge id stays valid.
    """
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    source_id: str
    target_id: str
    level: int = 0

    model_config = ConfigDict(frozen=True, extra="ignore")

    def touches(self, node_id: str) -> bool:
        return self.source_id == node_id or self.target_id == node_id


class PageLinks(BaseModel):
    """Answer from a link source: the canonical title and its outbound links."""
    canonical_name: str
    linked_topics: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class NodeStyle(BaseModel):
    """Visual patch for a node, pushed to the surface by the highlighter."""
    id: str
    color: str
    font_opacity: float

    model_config = ConfigDict(frozen=True)

    @property
    def font_color(self) -> str:
        return f"rgba(0, 0, 0, {self.font_opacity:g})"


class EdgeStyle(BaseModel):
    """Visual patch for an edge, pushed to the surface by the highlighter."""
    id: str
    width: int
    color: str | None
    edge_class: EdgeClass = EdgeClass.DEFAULT

    model_config = ConfigDict(frozen=True)

    @property
    def inherits_color(self) -> bool:
        """Traced edges take their color from the target node."""
        return self.color is None
