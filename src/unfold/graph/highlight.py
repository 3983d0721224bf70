"""Highlight computation: ancestor path plus child fringe of a focus node."""

from collections.abc import Collection
from dataclasses import dataclass, field

from unfold.graph.store import GraphStore, edge_key


@dataclass(frozen=True)
class HighlightSet:
    """Nodes and links emphasized relative to a focus node.

    Both sets empty means nothing is emphasized.
    """

    nodes: frozenset[str] = field(default_factory=frozenset)
    links: frozenset[str] = field(default_factory=frozenset)  # edge_key() values

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.links

    def node_opacity(self, node_id: str, dim: float) -> float:
        """Full opacity when nothing is highlighted or the node is."""
        return 1.0 if not self.nodes or node_id in self.nodes else dim

    def link_opacity(self, source: str, target: str, dim: float) -> float:
        return 1.0 if not self.links or edge_key(source, target) in self.links else dim


EMPTY_HIGHLIGHT = HighlightSet()


class HighlightResolver:
    """Computes highlight sets from the store's hierarchy."""

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def ancestor_path(self, focus_id: str) -> tuple[list[str], list[str]]:
        """
        Walk parents from the focus up to the root.

        Returns:
            (nodes, edge keys) along the path, focus first; empty when the
            focus is unreachable
        """
        if not self.store.is_reachable(focus_id):
            return [], []

        nodes: list[str] = []
        edges: list[str] = []
        current: str | None = focus_id
        while current is not None:
            nodes.append(current)
            parent = self.store.parent_of(current)
            if parent is not None:
                edges.append(edge_key(current, parent))
            current = parent
        return nodes, edges

    def child_fringe(
        self,
        focus_id: str,
        visible: Collection[str] | None = None,
    ) -> tuple[list[str], list[str]]:
        """Direct children of the focus and the edges to them.

        When `visible` is given, hidden children are left out.
        """
        children = self.store.children_of(focus_id) or ()
        if visible is not None:
            children = tuple(child for child in children if child in visible)
        return list(children), [edge_key(focus_id, child) for child in children]

    def resolve(
        self,
        focus_id: str,
        visible: Collection[str] | None = None,
    ) -> HighlightSet:
        """Union of the ancestor path and the child fringe.

        Args:
            focus_id: Node to highlight around
            visible: Optional visible set restricting the child fringe

        Returns:
            HighlightSet; empty when the focus is unreachable from the root
        """
        if not self.store.is_reachable(focus_id):
            return EMPTY_HIGHLIGHT

        path_nodes, path_edges = self.ancestor_path(focus_id)
        fringe_nodes, fringe_edges = self.child_fringe(focus_id, visible)
        return HighlightSet(
            nodes=frozenset(path_nodes) | frozenset(fringe_nodes),
            links=frozenset(path_edges) | frozenset(fringe_edges),
        )
