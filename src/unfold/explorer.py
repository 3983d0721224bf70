"""Controller tying the disclosure engine to the detail panel.

A selection reveals the node's neighbors, makes it the active node and
routes its content to the detail surface.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from unfold.config import settings
from unfold.content import ContentRouter
from unfold.graph import DisclosureState, GraphStore, HighlightSet
from unfold.panels import DetailSurface, PanelManager

logger = logging.getLogger(__name__)


@dataclass
class Selection:
    """Outcome of selecting a node."""

    node_id: str
    revealed: frozenset[str] = field(default_factory=frozenset)
    panel_load: asyncio.Task | None = None

    async def wait(self) -> None:
        """Wait for a scheduled panel load to finish."""
        if self.panel_load is not None:
            await self.panel_load


@dataclass
class ViewSnapshot:
    """What a renderer should draw right now."""

    nodes: list[dict[str, Any]]
    links: list[dict[str, Any]]
    active_id: str | None
    highlight: HighlightSet
    detail: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": self.nodes,
            "links": self.links,
            "active_id": self.active_id,
            "highlighted_nodes": sorted(self.highlight.nodes),
            "highlighted_links": sorted(self.highlight.links),
            "detail": self.detail,
        }


class GraphExplorer:
    """Single owner of the view state of one explorable graph."""

    def __init__(
        self,
        store: GraphStore,
        surface: DetailSurface | None = None,
        panel_manager: PanelManager | None = None,
        dim_opacity: float | None = None,
    ) -> None:
        if panel_manager is not None:
            # Router and panel manager must draw on the same surface
            if surface is not None and surface is not panel_manager.surface:
                raise ValueError("surface must be the panel manager's surface")
            surface = panel_manager.surface

        self.store = store
        self.state = DisclosureState(store)
        self.surface = surface or DetailSurface()
        self.panel_manager = panel_manager or PanelManager(self.surface)
        self.router = ContentRouter(self.surface, self.panel_manager)
        self.dim_opacity = dim_opacity if dim_opacity is not None else settings.dim_opacity

    def start(self) -> Selection | None:
        """Show the root's detail, as the initial view does."""
        return self.show_detail(self.store.root_id)

    def show_detail(self, node_id: str) -> Selection | None:
        """Activate a node and route its content, without revealing anything."""
        node = self.store.node_by_id(node_id)
        if node is None or not self.state.activate(node_id):
            return None
        return Selection(node_id=node_id, panel_load=self.router.route(node))

    def select_node(self, node_id: str) -> Selection | None:
        """
        Handle a click on a node.

        Neighbors are revealed before activation so the highlighted child
        fringe includes them. A node that is not visible yet cannot be
        clicked: nothing is revealed and the root's detail is shown instead.

        Returns:
            The selection, or None for an unknown node id
        """
        if node_id not in self.store:
            logger.debug(f"Ignoring selection of unknown node '{node_id}'")
            return None

        if not self.state.is_visible(node_id):
            logger.debug(f"Node '{node_id}' is hidden, showing root instead")
            return self.show_detail(self.store.root_id)

        revealed = self.state.reveal_neighbors(node_id)
        selection = self.show_detail(node_id)
        if selection is not None:
            selection.revealed = revealed
        return selection

    def view(self) -> ViewSnapshot:
        """Visible nodes and links with their highlight opacity."""
        highlight = self.state.highlight
        visible = self.state.visible

        nodes = [
            {
                **node.to_dict(),
                "opacity": highlight.node_opacity(node.id, self.dim_opacity),
                "active": node.id == self.state.active_id,
            }
            for node in self.store.nodes
            if node.id in visible
        ]
        links = [
            {
                **link.to_dict(),
                "opacity": highlight.link_opacity(link.source, link.target, self.dim_opacity),
            }
            for link in self.store.links
            if link.source in visible and link.target in visible
        ]

        return ViewSnapshot(
            nodes=nodes,
            links=links,
            active_id=self.state.active_id,
            highlight=highlight,
            detail=self.surface.to_dict(),
        )

    def __repr__(self) -> str:
        return f"GraphExplorer(store={self.store!r}, state={self.state!r})"
