"""Panel lifecycle management.

Provides:
- PanelManager: token-gated loading, mounting and teardown of bundles
- Asset fetchers for HTTP and local directories
- Behavior script execution with normalized cleanup
- DetailSurface: the in-memory rendering boundary
"""

from unfold.panels.assets import (
    HttpAssetFetcher,
    LocalAssetFetcher,
    create_asset_fetcher,
    is_valid_panel_id,
    panel_asset_paths,
)
from unfold.panels.behavior import (
    NO_CLEANUP,
    Cleanup,
    CleanupFn,
    NoCleanup,
    PanelContext,
    normalize_cleanup,
    run_behavior,
)
from unfold.panels.catalog import panel_catalog
from unfold.panels.manager import PanelManager, PanelSession, PanelState
from unfold.panels.surface import DetailSurface, PanelContainer, StyleHost, StyleResource

__all__ = [
    # Manager
    "PanelManager",
    "PanelSession",
    "PanelState",
    "panel_catalog",
    # Assets
    "HttpAssetFetcher",
    "LocalAssetFetcher",
    "create_asset_fetcher",
    "is_valid_panel_id",
    "panel_asset_paths",
    # Behavior
    "Cleanup",
    "CleanupFn",
    "NO_CLEANUP",
    "NoCleanup",
    "PanelContext",
    "normalize_cleanup",
    "run_behavior",
    # Surface
    "DetailSurface",
    "PanelContainer",
    "StyleHost",
    "StyleResource",
]
