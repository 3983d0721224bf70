"""Panel bundle fetching.

A bundle for panel id P lives under P/ relative to the panels base and
holds up to three text assets: markup, stylesheet and behavior script.
Every asset is optional at this layer. Fetchers resolve a missing asset
to None, and any other failure to None plus a warning. They never raise.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from unfold.config import Settings, settings

logger = logging.getLogger(__name__)

# Ids are interpolated into fetch paths, so only a safe alphabet is allowed
PANEL_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_panel_id(panel_id: object) -> bool:
    """Check a panel id against the allow-list pattern."""
    return isinstance(panel_id, str) and PANEL_ID_PATTERN.fullmatch(panel_id) is not None


@dataclass(frozen=True)
class PanelAssetPaths:
    """Relative paths of one panel bundle's assets."""

    markup: str
    style: str
    script: str


def panel_asset_paths(
    panel_id: str,
    markup_name: str | None = None,
    style_name: str | None = None,
    script_name: str | None = None,
) -> PanelAssetPaths:
    """Build the conventional asset paths for a (validated) panel id."""
    return PanelAssetPaths(
        markup=f"{panel_id}/{markup_name or settings.panel_markup_name}",
        style=f"{panel_id}/{style_name or settings.panel_style_name}",
        script=f"{panel_id}/{script_name or settings.panel_script_name}",
    )


class AssetFetcher(Protocol):
    """Anything that can fetch optional text assets."""

    async def fetch_text(self, path: str) -> str | None: ...


class HttpAssetFetcher:
    """Async-wrapped HTTP fetcher using requests."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_concurrent: int | None = None,
    ) -> None:
        self.base_url = (base_url or settings.panels_base_url or "panels").rstrip("/")
        # None means no timeout at all
        self.timeout = timeout if timeout is not None else settings.panel_fetch_timeout
        self.max_concurrent = max_concurrent or settings.panel_fetch_max_concurrent

        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self._session: requests.Session | None = None

    def _get_session(self) -> requests.Session:
        """Get or create requests session with connection pooling."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Cache-Control": "no-cache"})
            adapter = HTTPAdapter(
                pool_connections=self.max_concurrent,
                pool_maxsize=self.max_concurrent * 2,
                max_retries=Retry(total=2, backoff_factor=0.5),
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _sync_fetch(self, url: str) -> str | None:
        """Synchronous GET (runs in thread)."""
        try:
            response = self._get_session().get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Panel asset request threw for {url}: {e}")
            return None

        if not response.ok:
            if response.status_code != 404:
                logger.warning(f"Panel asset request failed for {url}: {response.status_code}")
            return None
        return response.text

    async def fetch_text(self, path: str) -> str | None:
        """Fetch an asset without blocking the event loop."""
        url = self.url_for(path)
        async with self._semaphore:
            return await asyncio.to_thread(self._sync_fetch, url)


class LocalAssetFetcher:
    """Reads panel bundles from a directory on disk."""

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root or settings.panels_dir).resolve()

    def _sync_read(self, path: str) -> str | None:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root):
            logger.warning(f"Panel asset path escapes panels dir: {path}")
            return None
        try:
            return target.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Panel asset read failed for {target}: {e}")
            return None

    async def fetch_text(self, path: str) -> str | None:
        return await asyncio.to_thread(self._sync_read, path)


def create_asset_fetcher(config: Settings | None = None) -> AssetFetcher:
    """HTTP fetcher when a base URL is configured, local directory otherwise."""
    config = config or settings
    if config.panels_base_url:
        return HttpAssetFetcher(
            base_url=config.panels_base_url,
            timeout=config.panel_fetch_timeout,
            max_concurrent=config.panel_fetch_max_concurrent,
        )
    return LocalAssetFetcher(config.panels_dir)
