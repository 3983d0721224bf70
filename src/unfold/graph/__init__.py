"""Graph disclosure engine.

Provides:
- GraphStore: validated dataset with adjacency and BFS hierarchy
- DisclosureState: monotonic visibility, active node, highlights
- HighlightResolver: ancestor path and child fringe of a focus node
"""

from unfold.graph.disclosure import DisclosureState
from unfold.graph.highlight import EMPTY_HIGHLIGHT, HighlightResolver, HighlightSet
from unfold.graph.store import GraphStore, edge_key

__all__ = [
    "DisclosureState",
    "EMPTY_HIGHLIGHT",
    "GraphStore",
    "HighlightResolver",
    "HighlightSet",
    "edge_key",
]
