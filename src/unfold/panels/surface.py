"""In-memory rendering boundary for the detail panel.

The surface records what a renderer would show: markup, the mounted
panel container, panel attribution and injected style resources.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any

_style_ids = itertools.count(1)


@dataclass(eq=False)
class StyleResource:
    """A stylesheet injected on behalf of a mounted panel."""

    panel_id: str
    css: str
    css_class: str = "panel-style"
    id: int = field(default_factory=lambda: next(_style_ids))

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "panel_id": self.panel_id, "class": self.css_class, "css": self.css}


class StyleHost:
    """Document-level holder of injected style resources."""

    def __init__(self) -> None:
        self._styles: list[StyleResource] = []

    @property
    def styles(self) -> tuple[StyleResource, ...]:
        return tuple(self._styles)

    def inject(self, style: StyleResource) -> None:
        self._styles.append(style)

    def remove(self, style: StyleResource) -> None:
        if style in self._styles:
            self._styles.remove(style)

    def __len__(self) -> int:
        return len(self._styles)


@dataclass(eq=False)
class PanelContainer:
    """Fresh container a single panel load mounts its markup into.

    `state` is scratch space for behavior scripts (listeners, timers,
    anything the cleanup needs to undo).
    """

    panel_id: str
    markup: str
    css_class: str = "panel-container"
    state: dict[str, Any] = field(default_factory=dict)
    attached: bool = False

    def render(self) -> str:
        return f'<div class="{self.css_class}">{self.markup}</div>'


class DetailSurface:
    """Side panel content area."""

    def __init__(self, style_host: StyleHost | None = None) -> None:
        self.style_host = style_host or StyleHost()
        self.markup: str = ""
        self.container: PanelContainer | None = None
        self.panel_id: str | None = None  # Panel attribution
        self.panel_active: bool = False
        self.title: str = ""
        self.layout: str = "markdown"  # Content mode the surface is laid out for

    def show_markup(self, markup: str) -> None:
        """Replace the content with plain markup."""
        self._detach()
        self.markup = markup

    def mount(self, container: PanelContainer) -> None:
        """Replace the content with a panel container."""
        self._detach()
        container.attached = True
        self.container = container
        self.markup = container.render()

    def attribute(self, panel_id: str) -> None:
        self.panel_id = panel_id
        self.panel_active = True

    def clear_attribution(self) -> None:
        self.panel_id = None
        self.panel_active = False

    def clear(self) -> None:
        self.show_markup("")

    def _detach(self) -> None:
        if self.container is not None:
            self.container.attached = False
            self.container = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "layout": self.layout,
            "markup": self.markup,
            "panel_id": self.panel_id,
            "panel_active": self.panel_active,
            "styles": [style.to_dict() for style in self.style_host.styles],
        }
