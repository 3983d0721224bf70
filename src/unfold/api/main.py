"""FastAPI application for Unfold.

Serves the explorable graph view, node selection and the panel preview
surface.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from unfold.api.routes import router
from unfold.config import settings
from unfold.dataset import load_dataset
from unfold.explorer import GraphExplorer
from unfold.graph import GraphStore
from unfold.panels import (
    DetailSurface,
    HttpAssetFetcher,
    PanelManager,
    create_asset_fetcher,
    panel_catalog,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    dataset_path = getattr(app.state, "dataset_path", None) or settings.dataset_path

    # Startup
    logger.info("Starting Unfold API...")
    nodes, links = load_dataset(dataset_path)
    store = GraphStore.build(nodes, links, root_id=settings.root_id)
    logger.info(f"Graph ready: {store!r}")

    fetcher = create_asset_fetcher()
    surface = DetailSurface()
    explorer = GraphExplorer(
        store,
        surface=surface,
        panel_manager=PanelManager(surface, fetcher=fetcher),
    )
    selection = explorer.start()
    if selection is not None:
        await selection.wait()

    app.state.explorer = explorer
    app.state.catalog = panel_catalog(store.nodes)
    app.state.preview = PanelManager(DetailSurface(), fetcher=fetcher)

    yield

    # Shutdown
    logger.info("Shutting down Unfold API...")
    explorer.panel_manager.clear_panel()
    app.state.preview.clear_panel()
    if isinstance(fetcher, HttpAssetFetcher):
        await fetcher.close()


def create_app(dataset_path: str | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Unfold",
        description="Explorable node-link graph with progressively disclosed detail panels",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.dataset_path = dataset_path

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "unfold.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
