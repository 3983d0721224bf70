"""Detail content rendering and routing."""

from unfold.content.markdown import render_markdown
from unfold.content.router import ContentRouter

__all__ = [
    "ContentRouter",
    "render_markdown",
]
