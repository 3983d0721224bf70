"""Dispatch of node detail content by content mode."""

import asyncio
import logging
from collections.abc import Callable

from unfold.content.markdown import render_markdown
from unfold.models import ContentMode, Node
from unfold.panels import DetailSurface, PanelManager

logger = logging.getLogger(__name__)


class ContentRouter:
    """
    Sends a node's content to the right collaborator.

    - panel: PanelManager.load_panel(panel id or node id, node)
    - raw markup: the surface, verbatim
    - markdown (default): the converter, then the surface

    Any non-panel node clears the panel manager first so no script or
    style of a previous panel outlives the switch.
    """

    def __init__(
        self,
        surface: DetailSurface,
        panel_manager: PanelManager,
        converter: Callable[[str], str] = render_markdown,
    ) -> None:
        self.surface = surface
        self.panel_manager = panel_manager
        self.converter = converter

    def route(self, node: Node) -> asyncio.Task | None:
        """Show a node's content; returns the pending panel load, if any."""
        mode = node.content_mode
        logger.debug(f"Routing node {node.id} as {mode.value}")
        plain_layout = mode in (ContentMode.PANEL, ContentMode.RAW_MARKUP)
        self.surface.layout = mode.value
        self.surface.title = "" if plain_layout else node.display_title

        if mode is ContentMode.PANEL:
            return self.panel_manager.load_panel(node.effective_panel_id, node)

        self.panel_manager.clear_panel()
        content = node.content or ""
        if mode is ContentMode.RAW_MARKUP:
            self.surface.show_markup(content)
        else:
            self.surface.show_markup(self.converter(content))
        return None
