"""Unit tests for disclosure state and highlight resolution."""

from unfold.graph import DisclosureState, GraphStore, HighlightResolver, edge_key
from unfold.models import Link, Node


class TestRevealNeighbors:
    """Tests for monotonic disclosure."""

    def test_starts_with_root_only(self, chain_store: GraphStore) -> None:
        state = DisclosureState(chain_store)
        assert state.visible == {"root"}
        assert state.active_id is None

    def test_reveal_adds_neighbors(self, chain_store: GraphStore) -> None:
        state = DisclosureState(chain_store)
        revealed = state.reveal_neighbors("root")

        assert revealed == {"a"}
        assert state.visible == {"root", "a"}

    def test_reveal_is_idempotent(self, dataset_store: GraphStore) -> None:
        """Revealing twice equals revealing once."""
        state = DisclosureState(dataset_store)
        state.reveal_neighbors("root")
        once = state.visible
        assert state.reveal_neighbors("root") == frozenset()
        assert state.visible == once

    def test_reveal_unknown_is_noop(self, chain_store: GraphStore) -> None:
        state = DisclosureState(chain_store)
        assert state.reveal_neighbors("nope") == frozenset()
        assert state.visible == {"root"}

    def test_reveal_isolated_is_noop(self, dataset_store: GraphStore) -> None:
        state = DisclosureState(dataset_store)
        state.reveal_neighbors("orphan")
        assert state.visible == {"root"}

    def test_visible_set_only_grows(self, dataset_store: GraphStore) -> None:
        state = DisclosureState(dataset_store)
        seen = state.visible
        for node_id in ("root", "notes", "about", "deep", "root"):
            state.reveal_neighbors(node_id)
            assert seen <= state.visible
            seen = state.visible


class TestActivate:
    """Tests for activation and highlight recomputation."""

    def test_hidden_child_not_highlighted(self, chain_store: GraphStore) -> None:
        """Reveal root then activate a: a's hidden child is not highlighted."""
        state = DisclosureState(chain_store)
        state.reveal_neighbors("root")
        assert state.activate("a") is True

        assert state.visible == {"root", "a"}
        assert state.highlighted_nodes == {"root", "a"}
        assert state.highlighted_links == {edge_key("root", "a")}

    def test_invalid_activation_keeps_active(self, chain_store: GraphStore) -> None:
        state = DisclosureState(chain_store)
        state.activate("root")

        assert state.activate("ghost") is False
        assert state.active_id == "root"

    def test_root_has_no_links_before_reveal(self, chain_store: GraphStore) -> None:
        state = DisclosureState(chain_store)
        state.activate("root")
        assert state.highlighted_nodes == {"root"}
        assert state.highlighted_links == frozenset()

    def test_root_highlights_children_after_reveal(self, chain_store: GraphStore) -> None:
        state = DisclosureState(chain_store)
        state.reveal_neighbors("root")
        state.activate("root")
        assert state.highlighted_nodes == {"root", "a"}

    def test_unreachable_dims_everything(self, dataset_store: GraphStore) -> None:
        """Activating a node outside the hierarchy empties both sets."""
        state = DisclosureState(dataset_store)
        assert state.activate("orphan") is True
        assert state.highlight.is_empty


class TestHighlightResolver:
    """Tests for ancestor path and child fringe."""

    def test_focus_always_included(self, dataset_store: GraphStore) -> None:
        resolver = HighlightResolver(dataset_store)
        for node in dataset_store.nodes:
            if dataset_store.is_reachable(node.id):
                assert node.id in resolver.resolve(node.id).nodes

    def test_full_path_and_fringe(self, dataset_store: GraphStore) -> None:
        """Without a visible set every child is part of the fringe."""
        highlight = HighlightResolver(dataset_store).resolve("about")

        assert highlight.nodes == {"root", "about", "deep", "gallery"}
        assert highlight.links == {
            edge_key("root", "about"),
            edge_key("about", "deep"),
            edge_key("about", "gallery"),
        }

    def test_ancestor_path_order(self, dataset_store: GraphStore) -> None:
        nodes, edges = HighlightResolver(dataset_store).ancestor_path("gallery")
        assert nodes == ["gallery", "about", "root"]
        assert edges == ["about|gallery", "about|root"]

    def test_fringe_excludes_grandchildren(self) -> None:
        store = GraphStore.build(
            [Node(id=node_id) for node_id in ("root", "a", "b", "c")],
            [Link("root", "a"), Link("a", "b"), Link("b", "c")],
        )
        highlight = HighlightResolver(store).resolve("a")
        assert "c" not in highlight.nodes
        assert edge_key("b", "c") not in highlight.links

    def test_fringe_respects_visible(self, dataset_store: GraphStore) -> None:
        highlight = HighlightResolver(dataset_store).resolve("about", visible={"root", "about", "gallery"})
        assert highlight.nodes == {"root", "about", "gallery"}

    def test_opacity(self, dataset_store: GraphStore) -> None:
        highlight = HighlightResolver(dataset_store).resolve("notes")
        assert highlight.node_opacity("notes", 0.15) == 1.0
        assert highlight.node_opacity("gallery", 0.15) == 0.15
        assert highlight.link_opacity("notes", "root", 0.15) == 1.0
        assert highlight.link_opacity("about", "deep", 0.15) == 0.15

    def test_empty_highlight_keeps_full_opacity(self, dataset_store: GraphStore) -> None:
        highlight = HighlightResolver(dataset_store).resolve("orphan")
        assert highlight.node_opacity("root", 0.15) == 1.0
        assert highlight.link_opacity("root", "about", 0.15) == 1.0
