"""Unit tests for the expansion coordinator."""

import asyncio
import math
import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from wikimap.core import palette
from wikimap.core.expansion import ExpansionCoordinator, ExpansionFailure, spawn_position
from wikimap.core.graph import GraphStore
from wikimap.core.rename import Merged, Renamed, Unchanged
from wikimap.core.result import Err, Ok
from wikimap.core.state import RootSet, TraceState
from wikimap.core.types import Node, PageLinks
from wikimap.sources import LinkSourceError, StaticLinkSource


def make_coordinator(pages, redirects=None, roots=("Root",)):
    store = GraphStore()
    root_set = RootSet()
    for name in roots:
        node_id = name.lower()
        store.add_nodes([Node(id=node_id, name=name, label=name, level=0, color=palette.node_color(0))])
        root_set.add(node_id)
    source = StaticLinkSource(pages, redirects)
    coordinator = ExpansionCoordinator(store, root_set, TraceState(), source, rng=random.Random(7))
    return coordinator, store


class TestExpand:
    def test_adds_children_and_edges(self):
        coordinator, store = make_coordinator({"Root": ["Foo", "Bar"]})

        result = asyncio.run(coordinator.expand("root"))

        assert isinstance(result, Ok)
        report = result.value
        assert report.rename == Unchanged("root")
        assert report.added_nodes == ["foo", "bar"]
        assert len(report.added_edges) == 2

        foo = store.get_node("foo")
        assert foo.level == 1
        assert foo.parent == "root"
        assert foo.name == "Foo"
        assert foo.color == palette.node_color(1)
        assert store.get_edge_connecting("root", "foo").level == 1
        assert store.get_node("root").value == 2
        assert store.get_node("foo").value == 1

    def test_children_spawn_near_parent(self):
        coordinator, store = make_coordinator({"Root": ["Foo"]})
        asyncio.run(coordinator.expand("root"))
        foo = store.get_node("foo")
        assert 5.0 <= math.hypot(foo.x, foo.y) <= 15.0

    def test_re_expansion_is_idempotent(self):
        coordinator, store = make_coordinator({"Root": ["Foo", "Bar"]})
        asyncio.run(coordinator.expand("root"))

        coordinator.link_source = StaticLinkSource({"Root": ["Foo", "Baz"]})
        result = asyncio.run(coordinator.expand("root"))

        assert result.value.added_nodes == ["baz"]
        assert store.node_count == 4
        assert store.edge_count == 3
        assert store.get_node("root").value == 3

    def test_duplicate_and_self_links_are_skipped(self):
        coordinator, store = make_coordinator({"Root": ["Foo", "foo", "FOO_", "Root"]})

        result = asyncio.run(coordinator.expand("root"))

        assert result.value.linked == ["foo"]
        assert store.edge_count == 1
        assert store.get_edge_connecting("root", "root") is None

    def test_existing_node_keeps_its_level(self):
        coordinator, store = make_coordinator({"Root": ["Foo"], "Foo": ["Bar"], "Bar": ["Root"]})
        asyncio.run(coordinator.expand("root"))
        asyncio.run(coordinator.expand("foo"))
        asyncio.run(coordinator.expand("bar"))

        back = store.get_edge_connecting("bar", "root")
        assert back.level == 0
        assert store.get_node("root").level == 0
        assert store.get_node("root").parent is None
        assert store.get_node("bar").level == 2

    def test_redirect_renames_node(self):
        coordinator, store = make_coordinator(
            {"Root": ["Relativity"], "Theory of relativity": ["Spacetime"]},
            redirects={"Relativity": "Theory of relativity"},
        )
        asyncio.run(coordinator.expand("root"))

        result = asyncio.run(coordinator.expand("relativity"))

        report = result.value
        assert report.node_id == "theoryofrelativity"
        assert report.rename == Renamed("theoryofrelativity", previous_id="relativity")
        assert not store.has_node("relativity")
        assert store.get_node("spacetime").parent == "theoryofrelativity"
        assert store.get_node("theoryofrelativity").value == 2

    def test_redirect_merges_converging_paths(self):
        coordinator, store = make_coordinator(
            {"Root": ["Gravitation", "Gravity"], "Gravity": ["Isaac Newton"]},
            redirects={"Gravitation": "Gravity"},
        )
        asyncio.run(coordinator.expand("root"))

        result = asyncio.run(coordinator.expand("gravitation"))

        report = result.value
        assert isinstance(report.rename, Merged)
        assert report.node_id == "gravity"
        assert not store.has_node("gravitation")
        assert store.get_node("isaacnewton").parent == "gravity"
        assert store.get_node("root").value == 1
        assert store.edge_count == 2


class TestFailures:
    def test_link_source_error(self):
        coordinator, store = make_coordinator({})

        result = asyncio.run(coordinator.expand("root"))

        assert isinstance(result, Err)
        assert result.error.reason == ExpansionFailure.LINK_SOURCE
        assert isinstance(result.error.cause, LinkSourceError)
        assert store.node_count == 1
        assert store.edge_count == 0

    def test_unexpected_exception_is_contained(self):
        coordinator, store = make_coordinator({})
        coordinator.link_source = MagicMock()
        coordinator.link_source.resolve = AsyncMock(side_effect=TimeoutError("slow"))

        result = asyncio.run(coordinator.expand("root"))

        assert result.is_err()
        assert "slow" in result.error.message

    def test_missing_node_never_calls_source(self):
        coordinator, _ = make_coordinator({"Root": ["Foo"]})
        coordinator.link_source = MagicMock()
        coordinator.link_source.resolve = AsyncMock()

        result = asyncio.run(coordinator.expand("ghost"))

        assert result.error.reason == ExpansionFailure.NODE_MISSING
        coordinator.link_source.resolve.assert_not_called()

    def test_removed_while_in_flight(self):
        coordinator, store = make_coordinator({"Root": ["Foo"]})

        async def resolve(topic):
            store.remove_node("root")
            return PageLinks(canonical_name="Root", linked_topics=["Foo"])

        coordinator.link_source = MagicMock()
        coordinator.link_source.resolve = resolve

        result = asyncio.run(coordinator.expand("root"))

        assert result.error.reason == ExpansionFailure.NODE_MISSING
        assert store.node_count == 0


class TestConcurrency:
    def test_interleaved_expansions_share_children(self):
        coordinator, store = make_coordinator(
            {"A": ["Shared", "Only A"], "B": ["Shared", "Only B"]},
            roots=("A", "B"),
        )
        coordinator.link_source = StaticLinkSource(
            {"A": ["Shared", "Only A"], "B": ["Shared", "Only B"]}, delay=0.01)

        async def both():
            return await asyncio.gather(coordinator.expand("a"), coordinator.expand("b"))

        first, second = asyncio.run(both())

        assert first.is_ok() and second.is_ok()
        assert store.node_count == 5
        assert store.edge_count == 4
        assert store.get_node("shared").value == 2
        assert store.get_node("shared").parent in ("a", "b")

    def test_same_node_twice(self):
        coordinator, store = make_coordinator({"Root": ["Foo", "Bar"]})
        coordinator.link_source = StaticLinkSource({"Root": ["Foo", "Bar"]}, delay=0.01)

        async def twice():
            return await asyncio.gather(coordinator.expand("root"), coordinator.expand("root"))

        asyncio.run(twice())

        assert store.node_count == 3
        assert store.edge_count == 2


def test_spawn_position_is_deterministic():
    a = spawn_position((100.0, 50.0), random.Random(1))
    b = spawn_position((100.0, 50.0), random.Random(1))
    assert a == b
    assert 5.0 <= math.hypot(a[0] - 100.0, a[1] - 50.0) <= 15.0


@pytest.mark.parametrize("topic", ["Foo", "Foo_Bar"])
def test_child_names_are_kept_verbatim(topic):
    coordinator, store = make_coordinator({"Root": [topic]})
    asyncio.run(coordinator.expand("root"))
    assert store.get_nodes_where(lambda n: n.level == 1)[0].name == topic
