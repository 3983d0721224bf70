"""Catalog of the panel bundles a dataset refers to."""

from collections.abc import Iterable

from unfold.models import ContentMode, Node


def panel_catalog(nodes: Iterable[Node]) -> dict[str, Node]:
    """Map panel id -> node for panel nodes, ordered by display label.

    When several nodes share a panel id, the last one in label order wins.
    """
    panels = [node for node in nodes if node.content_mode is ContentMode.PANEL]
    panels.sort(key=lambda node: node.catalog_label.casefold())
    return {node.effective_panel_id: node for node in panels}
