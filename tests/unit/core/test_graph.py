"""Unit tests for the rustworkx-backed GraphStore."""

import pytest

from wikimap.core.graph import GraphStore
from wikimap.core.types import Edge, Node


def make_node(node_id, level=0, parent=None):
    return Node(id=node_id, name=node_id.title(), label=node_id.title(), level=level, parent=parent)


@pytest.fixture
def store():
    s = GraphStore()
    s.add_nodes([make_node("a"), make_node("b", 1, "a"), make_node("c", 1, "a")])
    s.add_edges([Edge(source_id="a", target_id="b", level=1), Edge(source_id="a", target_id="c", level=1)])
    return s


class TestMutation:
    def test_add_nodes_skips_existing(self, store):
        added = store.add_nodes([Node(id="a", name="Other", label="Other"), make_node("d")])

        assert [n.id for n in added] == ["d"]
        assert store.get_node("a").name == "A"
        assert store.node_count == 4

    def test_add_edges_is_direction_sensitive(self, store):
        added = store.add_edges([
            Edge(source_id="a", target_id="b"),
            Edge(source_id="b", target_id="a"),
        ])

        assert len(added) == 1
        assert added[0].source_id == "b"
        assert store.edge_count == 3
        assert store.get_edge_connecting("b", "a") is not None

    def test_add_edges_drops_missing_endpoints(self, store):
        added = store.add_edges([Edge(source_id="a", target_id="ghost")])
        assert added == []
        assert store.edge_count == 2

    def test_remove_node_drops_its_edges(self, store):
        assert store.remove_node("b") is True
        assert not store.has_node("b")
        assert store.edge_count == 1
        assert store.remove_node("b") is False

    def test_update_node_keeps_id(self, store):
        node = store.update_node("b", name="Bee", id="zzz")
        assert node.id == "b"
        assert store.get_node("b").name == "Bee"
        assert store.update_node("missing", name="x") is None

    def test_update_size_uses_degree(self, store):
        store.add_edges([Edge(source_id="b", target_id="a")])
        assert store.update_size("a").value == 3
        assert store.update_size("b").value == 2
        assert store.update_size("missing") is None

    def test_clear(self, store):
        store.clear()
        assert store.node_count == 0
        assert store.edge_count == 0
        store.add_nodes([make_node("a")])
        assert store.has_node("a")


class TestRekey:
    def test_rekey_repoints_edges(self, store):
        edge_id = store.get_edge_connecting("a", "b").id
        node = store.rekey_node("b", "bee", name="Bee")

        assert node.id == "bee"
        assert node.name == "Bee"
        assert not store.has_node("b")
        edge = store.get_edge_connecting("a", "bee")
        assert edge.id == edge_id
        assert edge.target_id == "bee"
        assert all(e.touches("b") is False for e in store.get_edges())

    def test_rekey_refuses_taken_id(self, store):
        assert store.rekey_node("b", "c") is None
        assert store.has_node("b")

    def test_rekey_missing(self, store):
        assert store.rekey_node("ghost", "x") is None


class TestMerge:
    def test_merge_moves_edges_to_survivor(self, store):
        store.add_nodes([make_node("d", 2, "b")])
        moved = Edge(source_id="b", target_id="d", level=2)
        store.add_edges([moved])

        dropped = store.merge_nodes("b", "c")

        assert not store.has_node("b")
        assert store.get_edge_connecting("c", "d").id == moved.id
        # a -> b collapses onto the existing a -> c
        assert [e.source_id for e in dropped] == ["a"]
        assert store.edge_count == 2

    def test_merge_drops_self_loops(self, store):
        store.add_edges([Edge(source_id="b", target_id="c"), Edge(source_id="c", target_id="b")])

        dropped = store.merge_nodes("b", "c")

        assert all(e.source_id != e.target_id for e in store.get_edges())
        assert {(e.source_id, e.target_id) for e in dropped} == {("a", "b"), ("b", "c"), ("c", "b")}
        assert store.get_edge_connecting("c", "c") is None

    def test_merge_with_missing_side_is_noop(self, store):
        assert store.merge_nodes("b", "ghost") == []
        assert store.has_node("b")


class TestQueries:
    def test_neighbors_ignore_direction(self, store):
        store.add_edges([Edge(source_id="c", target_id="a")])
        assert sorted(store.neighbors("a")) == ["b", "c"]
        assert store.neighbors("b") == ["a"]
        assert store.neighbors("ghost") == []

    def test_incident_edges(self, store):
        assert len(store.incident_edges("a")) == 2
        assert store.incident_edges("ghost") == []

    def test_filters(self, store):
        assert [n.id for n in store.get_nodes_where(lambda n: n.parent == "a")] == ["b", "c"]
        assert len(store.get_edges_where(lambda e: e.target_id == "c")) == 1

    def test_get_ids(self, store):
        assert sorted(store.get_ids()) == ["a", "b", "c"]

    def test_stats(self, store):
        store.add_nodes([make_node("lonely")])
        assert store.get_stats() == {"total_nodes": 4, "total_edges": 2, "orphans": 1}
