"""Immutable graph dataset with adjacency and BFS hierarchy indices.

The hierarchy is a spanning tree over the component reachable from the
root. Parents are assigned on first discovery, and neighbors are visited
in link order, so the first link that reaches a node decides its parent.
"""

import logging
from collections import deque
from collections.abc import Iterable
from types import MappingProxyType

from unfold.models import Link, Node

logger = logging.getLogger(__name__)


def edge_key(a: str, b: str) -> str:
    """Canonical, direction-independent key for an undirected edge."""
    return f"{a}|{b}" if a < b else f"{b}|{a}"


class GraphStore:
    """Read-only node/link dataset with derived indices.

    Build instances with `GraphStore.build`; the constructor takes the
    already validated indices.
    """

    def __init__(
        self,
        nodes: dict[str, Node],
        links: tuple[Link, ...],
        adjacency: dict[str, tuple[str, ...]],
        root_id: str,
        parents: dict[str, str | None],
        depths: dict[str, int],
        children: dict[str, tuple[str, ...]],
    ) -> None:
        self._nodes = MappingProxyType(nodes)
        self._links = links
        self._adjacency = MappingProxyType(adjacency)
        self.root_id = root_id
        self._parents = MappingProxyType(parents)
        self._depths = MappingProxyType(depths)
        self._children = MappingProxyType(children)

    @classmethod
    def build(
        cls,
        nodes: Iterable[Node],
        links: Iterable[Link],
        root_id: str = "root",
    ) -> "GraphStore":
        """
        Validate the dataset and derive adjacency and hierarchy.

        Links whose endpoints are not both known nodes are dropped.
        An unknown root yields an empty hierarchy.

        Args:
            nodes: Node records, in dataset order
            links: Link records, in dataset order (decides BFS tie-breaks)
            root_id: Node the hierarchy is rooted at

        Returns:
            A new GraphStore; the inputs are not modified
        """
        node_by_id: dict[str, Node] = {}
        for node in nodes:
            node_by_id[node.id] = node

        # dict keys act as insertion-ordered sets
        ordered_adjacency: dict[str, dict[str, None]] = {}
        valid_links: list[Link] = []
        dropped = 0
        for link in links:
            if link.source not in node_by_id or link.target not in node_by_id:
                dropped += 1
                continue
            valid_links.append(link)
            ordered_adjacency.setdefault(link.source, {})[link.target] = None
            ordered_adjacency.setdefault(link.target, {})[link.source] = None

        if dropped:
            logger.debug(f"Dropped {dropped} links with unknown endpoints")

        adjacency = {nid: tuple(neighbors) for nid, neighbors in ordered_adjacency.items()}
        parents, depths, children = _build_hierarchy(adjacency, node_by_id, root_id)

        return cls(
            nodes=node_by_id,
            links=tuple(valid_links),
            adjacency=adjacency,
            root_id=root_id,
            parents=parents,
            depths=depths,
            children=children,
        )

    # ------------------------------------------------------------------
    # Dataset queries
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[Node, ...]:
        """All nodes in dataset order."""
        return tuple(self._nodes.values())

    @property
    def links(self) -> tuple[Link, ...]:
        """Valid links in dataset order."""
        return self._links

    def node_by_id(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def neighbors_of(self, node_id: str) -> frozenset[str]:
        """Directly connected node ids; empty for unknown or isolated nodes."""
        return frozenset(self._adjacency.get(node_id, ()))

    def ordered_neighbors_of(self, node_id: str) -> tuple[str, ...]:
        """Neighbors in link discovery order."""
        return self._adjacency.get(node_id, ())

    # ------------------------------------------------------------------
    # Hierarchy queries (None when the node is unreachable from the root)
    # ------------------------------------------------------------------

    def is_reachable(self, node_id: str) -> bool:
        return node_id in self._depths

    def parent_of(self, node_id: str) -> str | None:
        return self._parents.get(node_id)

    def depth_of(self, node_id: str) -> int | None:
        return self._depths.get(node_id)

    def children_of(self, node_id: str) -> tuple[str, ...] | None:
        return self._children.get(node_id)

    def __repr__(self) -> str:
        return (
            f"GraphStore(nodes={len(self._nodes)}, links={len(self._links)}, "
            f"reachable={len(self._depths)}, root={self.root_id!r})"
        )


def _build_hierarchy(
    adjacency: dict[str, tuple[str, ...]],
    node_by_id: dict[str, Node],
    root_id: str,
) -> tuple[dict[str, str | None], dict[str, int], dict[str, tuple[str, ...]]]:
    """Breadth-first traversal from the root; first discovery wins."""
    if root_id not in node_by_id:
        logger.warning(f"Root node '{root_id}' not in dataset, hierarchy is empty")
        return {}, {}, {}

    parents: dict[str, str | None] = {root_id: None}
    depths: dict[str, int] = {root_id: 0}
    children: dict[str, list[str]] = {root_id: []}

    queue = deque([root_id])
    while queue:
        current = queue.popleft()
        for neighbor_id in adjacency.get(current, ()):
            if neighbor_id in parents:
                continue
            parents[neighbor_id] = current
            depths[neighbor_id] = depths[current] + 1
            children[current].append(neighbor_id)
            children[neighbor_id] = []
            queue.append(neighbor_id)

    return parents, depths, {nid: tuple(kids) for nid, kids in children.items()}
