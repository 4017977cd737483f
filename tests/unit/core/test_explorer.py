"""Unit tests for the Explorer session object."""

import asyncio
import random

import pytest

from wikimap.config import ExplorerConfig
from wikimap.core.explorer import Explorer
from wikimap.core.result import Ok
from wikimap.core.types import EdgeClass
from wikimap.sources import StaticLinkSource

PAGES = {
    "R": ["Foo", "Bar"],
    "Foo": ["Relativity", "Bar"],
    "Theory of relativity": ["Spacetime"],
    "Bar": [],
}
REDIRECTS = {"Relativity": "Theory of relativity"}


@pytest.fixture
def explorer():
    return Explorer(StaticLinkSource(PAGES, REDIRECTS), rng=random.Random(3))


def assert_surface_matches_store(explorer):
    assert set(explorer.surface.nodes) == set(explorer.store.get_ids())
    assert set(explorer.surface.edges) == {e.id for e in explorer.store.get_edges()}
    for edge in explorer.store.get_edges():
        record = explorer.surface.edges[edge.id]
        assert (record["from"], record["to"]) == (edge.source_id, edge.target_id)


class TestSeed:
    def test_seed_roots(self, explorer):
        added = explorer.seed(["R", "r", "Second topic", ""])

        assert added == ["r", "secondtopic"]
        assert list(explorer.roots) == ["r", "secondtopic"]
        root = explorer.store.get_node("r")
        assert root.level == 0
        assert root.parent is None
        assert (root.x, root.y) == (0.0, 0.0)
        second = explorer.store.get_node("secondtopic")
        assert round(second.x) == 100
        assert_surface_matches_store(explorer)

    def test_seed_skips_existing(self, explorer):
        explorer.seed(["R"])
        assert explorer.seed(["R"]) == []
        assert len(explorer.roots) == 1

    def test_seed_while_traced_fades_new_roots(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))
        explorer.trace("foo")

        explorer.seed(["Other"])

        assert explorer.selected_node == "foo"
        assert explorer.highlighter.node_style("other").font_opacity == 0.3
        assert explorer.surface.nodes["other"]["font"] == {"color": "rgba(0, 0, 0, 0.3)"}


class TestExpand:
    def test_expand_root(self, explorer):
        explorer.seed(["R"])

        result = asyncio.run(explorer.expand("r"))

        assert isinstance(result, Ok)
        assert sorted(explorer.store.get_ids()) == ["bar", "foo", "r"]
        assert explorer.store.get_node("r").value == 2
        assert_surface_matches_store(explorer)
        assert explorer.surface.nodes["r"]["value"] == 2

    def test_reexpand_with_new_links(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))
        explorer.coordinator.link_source = StaticLinkSource({"R": ["Foo", "Baz"]})

        asyncio.run(explorer.expand("r"))

        assert explorer.store.node_count == 4
        assert explorer.store.edge_count == 3
        assert explorer.store.get_node("r").value == 3

    def test_expand_all(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))

        results = asyncio.run(explorer.expand_all(["foo", "bar", "ghost"]))

        assert [r.is_ok() for r in results] == [True, True, False]
        assert explorer.store.has_node("relativity")
        assert explorer.store.get_edge_connecting("foo", "bar") is not None
        assert_surface_matches_store(explorer)

    def test_rename_keeps_surface_and_selection_consistent(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))
        asyncio.run(explorer.expand("foo"))
        explorer.trace("relativity")

        asyncio.run(explorer.expand("relativity"))

        assert not explorer.store.has_node("relativity")
        assert explorer.selected_node == "theoryofrelativity"
        assert explorer.trace_state.trace_nodes == ["theoryofrelativity", "foo", "r"]
        assert "relativity" not in explorer.surface.nodes
        assert_surface_matches_store(explorer)

    def test_expand_refreshes_highlight(self, explorer):
        explorer.seed(["R"])
        explorer.trace("r")
        asyncio.run(explorer.expand("r"))

        edge_id = explorer.store.get_edge_connecting("r", "foo").id
        assert explorer.trace_state.edge_styles[edge_id].width == 3
        assert explorer.surface.edges[edge_id]["width"] == 3


class TestTrace:
    def test_switch_selection(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))

        explorer.trace("foo")
        explorer.trace("bar")

        state = explorer.trace_state
        foo_edge = explorer.store.get_edge_connecting("r", "foo").id
        bar_edge = explorer.store.get_edge_connecting("r", "bar").id
        assert state.trace_nodes == ["bar", "r"]
        assert state.edge_styles[foo_edge].edge_class == EdgeClass.UNRELATED
        assert state.edge_styles[bar_edge].edge_class == EdgeClass.TRACED
        # a sibling is neither traced nor adjacent
        assert state.node_styles["foo"].font_opacity == 0.3
        assert state.node_styles["bar"].font_opacity == 1.0

    def test_traceback_names(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))
        asyncio.run(explorer.expand("foo"))
        asyncio.run(explorer.expand("relativity"))

        assert explorer.traceback("spacetime") == ["R", "Foo", "Theory of relativity", "Spacetime"]
        assert explorer.traceback("ghost") == []


class TestRemove:
    def test_remove_updates_neighbors(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))

        assert explorer.remove("bar") is True

        assert not explorer.store.has_node("bar")
        assert explorer.store.get_node("r").value == 1
        assert "bar" not in explorer.surface.nodes
        assert_surface_matches_store(explorer)
        assert explorer.remove("bar") is False

    def test_remove_traced_node_resets(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))
        explorer.trace("foo")

        explorer.remove("r")

        assert explorer.trace_state.is_reset
        assert explorer.selected_node is None
        assert "r" not in explorer.roots
        assert explorer.store.edge_count == 0

    def test_remove_untraced_node_keeps_selection(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))
        explorer.trace("foo")
        bar_edge = explorer.store.get_edge_connecting("r", "bar").id

        explorer.remove("bar")

        assert explorer.selected_node == "foo"
        assert "bar" not in explorer.trace_state.node_styles
        assert bar_edge not in explorer.trace_state.edge_styles

    def test_expansion_of_removed_node(self, explorer):
        explorer.seed(["R"])
        explorer.remove("r")
        result = asyncio.run(explorer.expand("r"))
        assert result.is_err()
        assert explorer.store.node_count == 0


class TestQueries:
    def test_page_url(self):
        config = ExplorerConfig(api_url="https://fr.wikipedia.org/w/api.php")
        explorer = Explorer(StaticLinkSource(PAGES), config=config)
        explorer.seed(["Tour Eiffel"])
        assert explorer.page_url("toureiffel") == "https://fr.wikipedia.org/wiki/Tour_Eiffel"
        assert explorer.page_url("ghost") is None

    def test_random_node(self, explorer):
        assert explorer.random_node() is None
        explorer.seed(["R", "Bar"])
        assert explorer.random_node() in ("r", "bar")

    def test_focus(self, explorer):
        explorer.seed(["R"])
        explorer.focus("r")
        assert explorer.surface.focused == "r"

    def test_clear(self, explorer):
        explorer.seed(["R"])
        asyncio.run(explorer.expand("r"))
        explorer.trace("foo")

        explorer.clear()

        assert explorer.store.node_count == 0
        assert len(explorer.roots) == 0
        assert explorer.surface.nodes == {}
        assert explorer.surface.edges == {}
        assert explorer.trace_state.is_reset
