"""Unfold: explorable node-link graph with progressive disclosure.

Clicking a node reveals its neighbors, highlights the path from the root
and fills a detail panel with markdown, raw markup or a dynamically
loaded panel bundle.
"""

from unfold.explorer import GraphExplorer, Selection, ViewSnapshot
from unfold.graph import DisclosureState, GraphStore, HighlightResolver, HighlightSet, edge_key
from unfold.models import ContentMode, Link, Node
from unfold.panels import DetailSurface, PanelManager, PanelState

__version__ = "0.1.0"
__all__ = [
    "ContentMode",
    "DetailSurface",
    "DisclosureState",
    "GraphExplorer",
    "GraphStore",
    "HighlightResolver",
    "HighlightSet",
    "Link",
    "Node",
    "PanelManager",
    "PanelState",
    "Selection",
    "ViewSnapshot",
    "edge_key",
]
