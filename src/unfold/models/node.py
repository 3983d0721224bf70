"""Node and link records of the explorable graph dataset."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class ContentMode(str, Enum):
    """How a node's detail content is presented."""

    MARKDOWN = "markdown"  # Rendered through the markdown converter
    RAW_MARKUP = "html"  # Handed to the surface verbatim
    PANEL = "panel"  # Externally supplied interactive bundle

    @classmethod
    def _missing_(cls, value: Any) -> "ContentMode | None":
        if value == "raw-markup":
            return cls.RAW_MARKUP
        return None

    @classmethod
    def parse(cls, value: Any) -> "ContentMode":
        """Parse a dataset `contentType` value, defaulting to markdown."""
        try:
            return cls(value)
        except ValueError:
            return cls.MARKDOWN


# Keys consumed by the core; everything else is presentation data
_NODE_KEYS = {"id", "label", "title", "content", "contentType", "panelId"}


@dataclass(frozen=True)
class Node:
    """
    A graph node with progressively disclosed detail content.

    Presentation fields (position, visual kind, sizing, images, urls)
    are carried opaquely in the read-only `attributes` mapping.
    """

    id: str
    label: str = ""
    content: str | None = None
    content_mode: ContentMode = ContentMode.MARKDOWN
    panel_id: str | None = None
    title: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def effective_panel_id(self) -> str:
        """Panel bundle id, defaulting to the node id."""
        return self.panel_id or self.id

    @property
    def display_title(self) -> str:
        """Title shown above the detail content."""
        return self.title or self.label or self.id

    @property
    def catalog_label(self) -> str:
        """Label used when listing panels."""
        return self.title or self.label or self.panel_id or self.id

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the dataset record shape."""
        data: dict[str, Any] = dict(self.attributes)
        data.update({
            "id": self.id,
            "label": self.label,
            "contentType": self.content_mode.value,
        })
        if self.content is not None:
            data["content"] = self.content
        if self.panel_id is not None:
            data["panelId"] = self.panel_id
        if self.title is not None:
            data["title"] = self.title
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """Create a Node from a dataset record."""
        return cls(
            id=str(data["id"]),
            label=data.get("label") or "",
            content=data.get("content"),
            content_mode=ContentMode.parse(data.get("contentType")),
            panel_id=data.get("panelId") or None,
            title=data.get("title") or None,
            attributes={k: v for k, v in data.items() if k not in _NODE_KEYS},
        )


@dataclass(frozen=True)
class Link:
    """Undirected connection between two nodes."""

    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Link":
        return cls(source=str(data["source"]), target=str(data["target"]))
