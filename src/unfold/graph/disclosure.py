"""Mutable view state: visible nodes, active node and highlights.

Disclosure is monotonic. Revealing only ever adds to the visible set;
nothing in this module hides a node again.
"""

import logging

from unfold.graph.highlight import EMPTY_HIGHLIGHT, HighlightResolver, HighlightSet
from unfold.graph.store import GraphStore

logger = logging.getLogger(__name__)


class DisclosureState:
    """View state owned by a single controller.

    Mutated only through `reveal_neighbors` and `activate`.
    """

    def __init__(
        self,
        store: GraphStore,
        resolver: HighlightResolver | None = None,
    ) -> None:
        self.store = store
        self.resolver = resolver or HighlightResolver(store)
        self._visible: set[str] = {store.root_id}
        self._active_id: str | None = None
        self._highlight: HighlightSet = EMPTY_HIGHLIGHT

    @property
    def visible(self) -> frozenset[str]:
        return frozenset(self._visible)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def highlight(self) -> HighlightSet:
        return self._highlight

    @property
    def highlighted_nodes(self) -> frozenset[str]:
        return self._highlight.nodes

    @property
    def highlighted_links(self) -> frozenset[str]:
        return self._highlight.links

    def is_visible(self, node_id: str) -> bool:
        return node_id in self._visible

    def reveal_neighbors(self, node_id: str) -> frozenset[str]:
        """Make every neighbor of a node visible.

        Unknown or isolated nodes are a no-op.

        Returns:
            Node ids that were hidden before this call
        """
        neighbors = self.store.neighbors_of(node_id)
        if not neighbors:
            return frozenset()

        revealed = neighbors - self._visible
        self._visible |= neighbors
        if revealed:
            logger.debug(f"Revealed {len(revealed)} nodes around '{node_id}'")
        return revealed

    def activate(self, node_id: str) -> bool:
        """Set the active node and recompute highlights.

        The child fringe only covers children that are already visible.
        Ids missing from the store leave the state unchanged.

        Returns:
            True when the activation took effect
        """
        if node_id not in self.store:
            logger.debug(f"Ignoring activation of unknown node '{node_id}'")
            return False

        self._active_id = node_id
        self._highlight = self.resolver.resolve(node_id, visible=self._visible)
        return True

    def __repr__(self) -> str:
        return (
            f"DisclosureState(visible={len(self._visible)}, active={self._active_id!r}, "
            f"highlighted={len(self._highlight.nodes)})"
        )
