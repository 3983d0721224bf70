"""API routes for Unfold.

Provides:
- /api/graph/view and node selection for the explorable graph
- Panel catalog and preview surface
- /health
"""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from unfold.explorer import GraphExplorer
from unfold.models import Node
from unfold.panels import PanelManager

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    nodes: int
    reachable: bool
    version: str = "0.1.0"


class PanelInfo(BaseModel):
    """Catalog entry for a panel bundle."""

    panel_id: str
    node_id: str
    label: str


class PanelStateResponse(BaseModel):
    """Panel manager state plus what its surface shows."""

    state: str
    panel_id: str | None = None
    detail: dict[str, Any]


# ============================================================================
# Helper Functions
# ============================================================================


def get_explorer(request: Request) -> GraphExplorer:
    """Get the graph explorer from app state."""
    return request.app.state.explorer


def get_preview(request: Request) -> PanelManager:
    """Get the preview panel manager from app state."""
    return request.app.state.preview


def get_catalog(request: Request) -> dict[str, Node]:
    return request.app.state.catalog


def _panel_state(manager: PanelManager) -> PanelStateResponse:
    return PanelStateResponse(
        state=manager.state.value,
        panel_id=manager.active_panel_id,
        detail=manager.surface.to_dict(),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check."""
    explorer = get_explorer(request)
    return HealthResponse(
        status="ok",
        nodes=len(explorer.store),
        reachable=explorer.store.is_reachable(explorer.store.root_id),
    )


@router.get("/api/graph/view")
async def graph_view(request: Request) -> dict[str, Any]:
    """Current visible graph, highlights and detail content."""
    return get_explorer(request).view().to_dict()


@router.post("/api/graph/nodes/{node_id}/select")
async def select_node(request: Request, node_id: str) -> dict[str, Any]:
    """Select a node: reveal its neighbors, highlight it, show its detail."""
    explorer = get_explorer(request)
    selection = explorer.select_node(node_id)
    if selection is None:
        raise HTTPException(status_code=404, detail=f"Node '{node_id}' not found")

    await selection.wait()
    return {
        "selected": selection.node_id,
        "revealed": sorted(selection.revealed),
        **explorer.view().to_dict(),
    }


@router.get("/api/panels", response_model=list[PanelInfo])
async def list_panels(request: Request) -> list[PanelInfo]:
    """Panels defined by the dataset, ordered by label."""
    return [
        PanelInfo(panel_id=panel_id, node_id=node.id, label=node.catalog_label)
        for panel_id, node in get_catalog(request).items()
    ]


@router.post("/api/panels/{panel_id}/preview", response_model=PanelStateResponse)
async def preview_panel(request: Request, panel_id: str) -> PanelStateResponse:
    """Load (or reload) a catalog panel on the preview surface."""
    node = get_catalog(request).get(panel_id)
    if node is None:
        raise HTTPException(
            status_code=404,
            detail=f'Panel "{panel_id}" is not defined in the graph dataset.',
        )

    preview = get_preview(request)
    preview.surface.title = ""
    preview.surface.layout = "panel"
    task = preview.load_panel(panel_id, node)
    if task is not None:
        await task
    return _panel_state(preview)


@router.post("/api/panels/clear", response_model=PanelStateResponse)
async def clear_preview(request: Request) -> PanelStateResponse:
    """Clear the preview surface."""
    preview = get_preview(request)
    preview.clear_panel()
    return _panel_state(preview)
