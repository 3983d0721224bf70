"""Markdown to markup conversion for node detail content."""

from functools import lru_cache

from markdown_it import MarkdownIt


@lru_cache(maxsize=1)
def _get_parser() -> MarkdownIt:
    # Raw HTML in markdown content is escaped, not passed through
    return MarkdownIt("commonmark", {"html": False, "linkify": False}).enable("strikethrough")


def render_markdown(text: str | None) -> str:
    """Render markdown text to markup; empty input renders to ''."""
    if not text:
        return ""
    return _get_parser().render(text.replace("\r\n", "\n").replace("\r", "\n"))
