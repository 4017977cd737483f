"""
Rename/Merge Protocol.

When the link source reports that a node's canonical title differs from the
name it was created under (a redirect), the node is re-identified. If the
canonical id is already on the graph, two expansion paths have converged on
the same page and the two records are merged; otherwise the record is simply
re-keyed.

The whole protocol is one synchronous call: no other component can observe
edges re-pointed to a node that does not exist yet.
"""

import logging
from dataclasses import dataclass
from typing import Union

from ..config import CHILD_LABEL_WIDTH, ROOT_LABEL_WIDTH
from .graph import GraphStore
from .identity import normalize, wordwrap
from .state import RootSet, TraceState
from .types import Edge

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unchanged:
    """The canonical name maps to the id the node already has."""
    node_id: str


@dataclass(frozen=True)
class Renamed:
    """The node was re-keyed to a fresh id."""
    node_id: str
    previous_id: str


@dataclass(frozen=True)
class Merged:
    """The node was folded into an existing node, which survives."""
    node_id: str
    absorbed_id: str
    dropped_edges: tuple[Edge, ...] = ()


RenameOutcome = Union[Unchanged, Renamed, Merged]


def label_width(level: int) -> int:
    return ROOT_LABEL_WIDTH if level == 0 else CHILD_LABEL_WIDTH


def rename_node(
    store: GraphStore,
    roots: RootSet,
    trace: TraceState,
    old_id: str,
    new_name: str,
) -> RenameOutcome:
    """
    Re-identify ``old_id`` under the canonical title ``new_name``.

    Args:
        store: The graph store to mutate.
        roots: Root set; an entry for ``old_id`` is rewritten.
        trace: Selection/trace state; references to ``old_id`` are rewritten.
        old_id: Current id of the node.
        new_name: Canonical display name reported by the link source.

    Returns:
        RenameOutcome: ``node_id`` on every variant is the effective id.
    """
    new_id = normalize(new_name)
    if new_id == old_id:
        return Unchanged(old_id)

    old_node = store.get_node(old_id)
    if old_node is None:
        logger.debug(f"Rename of missing node {old_id} ignored")
        return Unchanged(old_id)

    survivor = store.get_node(new_id)
    outcome: RenameOutcome
    if survivor is not None:
        logger.info(f"Merging {old_id} with {new_id}")
        dropped = store.merge_nodes(old_id, new_id)
        store.update_node(new_id, name=new_name, label=wordwrap(new_name, label_width(survivor.level)))
        for node_id in [new_id, *store.neighbors(new_id)]:
            store.update_size(node_id)
        outcome = Merged(new_id, absorbed_id=old_id, dropped_edges=tuple(dropped))
    else:
        logger.info(f"Re-identifying {old_id} as {new_id}")
        store.rekey_node(old_id, new_id, name=new_name, label=wordwrap(new_name, label_width(old_node.level)))
        outcome = Renamed(new_id, previous_id=old_id)

    for child in store.get_nodes_where(lambda n: n.parent == old_id):
        # The survivor of a merge may have been discovered from the node it absorbs
        parent = old_node.parent if child.id == new_id else new_id
        store.update_node(child.id, parent=parent if parent != child.id else None)

    trace.replace_node(old_id, new_id)
    for edge in outcome.dropped_edges if isinstance(outcome, Merged) else ():
        trace.edge_styles.pop(edge.id, None)
        if edge.id in trace.trace_edges:
            trace.trace_edges.remove(edge.id)
    roots.replace(old_id, new_id)

    return outcome
