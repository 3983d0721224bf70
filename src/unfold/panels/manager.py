"""Panel lifecycle: cancellable loading, mounting and teardown of panel bundles.

Every load gets a token from a monotonically increasing counter. Starting
a new load or clearing bumps the counter, so an in-flight load notices at
its next resumption point that it has been superseded and stops without
touching the surface. The underlying fetches are not cancelled; their
results are discarded.

States:
    IDLE -> LOADING(token) -> MOUNTED(token, panel_id)
    any -> ERROR (invalid panel id)
    LOADING -> IDLE (markup unavailable)
"""

import asyncio
import html
import logging
from dataclasses import dataclass, field
from enum import Enum

from unfold.models import Node
from unfold.panels.assets import (
    AssetFetcher,
    create_asset_fetcher,
    is_valid_panel_id,
    panel_asset_paths,
)
from unfold.panels.behavior import NO_CLEANUP, Cleanup, PanelContext, run_behavior
from unfold.panels.surface import DetailSurface, PanelContainer, StyleResource

logger = logging.getLogger(__name__)

LOADING_MARKUP = '<div class="panel-loading">Loading panel…</div>'


def _error_markup(message: str) -> str:
    return f'<div class="panel-error">{html.escape(message)}</div>'


class PanelState(str, Enum):
    """Lifecycle state of the panel manager."""

    IDLE = "idle"
    LOADING = "loading"
    MOUNTED = "mounted"
    ERROR = "error"


@dataclass(eq=False)
class PanelSession:
    """Resources owned by one panel load until it is superseded or cleared."""

    token: int
    panel_id: str
    container: PanelContainer | None = None
    styles: list[StyleResource] = field(default_factory=list)
    cleanup: Cleanup = NO_CLEANUP


class PanelManager:
    """
    Loads panel bundles into a detail surface.

    At most one session is current. Each asynchronous step re-checks its
    token before mutating the surface, so a later call always wins over
    an earlier slow one, and the loser's teardown runs exactly once.
    """

    def __init__(
        self,
        surface: DetailSurface,
        fetcher: AssetFetcher | None = None,
        markup_name: str | None = None,
        style_name: str | None = None,
        script_name: str | None = None,
    ) -> None:
        self.surface = surface
        self.fetcher = fetcher or create_asset_fetcher()
        self.markup_name = markup_name
        self.style_name = style_name
        self.script_name = script_name

        self._token = 0
        self._state = PanelState.IDLE
        self._session: PanelSession | None = None

    @property
    def token(self) -> int:
        return self._token

    @property
    def state(self) -> PanelState:
        return self._state

    @property
    def session(self) -> PanelSession | None:
        return self._session

    @property
    def active_panel_id(self) -> str | None:
        """Id of the mounted panel, if any."""
        if self._state is PanelState.MOUNTED and self._session is not None:
            return self._session.panel_id
        return None

    def _is_current(self, token: int) -> bool:
        return token == self._token

    def _teardown(self) -> None:
        """Run the current session's cleanup and drop its styles."""
        session, self._session = self._session, None
        if session is None:
            return

        cleanup, session.cleanup = session.cleanup, NO_CLEANUP
        try:
            cleanup()
        except Exception:
            logger.exception(f"Error cleaning up panel {session.panel_id}")

        for style in session.styles:
            self.surface.style_host.remove(style)
        session.styles.clear()

    def clear_panel(self, reset_content: bool = True) -> None:
        """Invalidate any load, tear down the session and return to idle."""
        self._token += 1
        self._teardown()
        self.surface.clear_attribution()
        if reset_content:
            self.surface.clear()
        self._state = PanelState.IDLE

    def load_panel(self, panel_id: str, node: Node | None = None) -> asyncio.Task | None:
        """
        Start loading a panel bundle.

        Validation, teardown of the previous session and the switch to
        LOADING happen before this returns. Fetching and mounting continue
        in a task on the running loop.

        Args:
            panel_id: Bundle id, restricted to letters, digits, '-' and '_'
            node: Originating node, handed to the behavior script

        Returns:
            The task completing the load, or None if the id was rejected
        """
        if not is_valid_panel_id(panel_id):
            logger.warning(f"Rejected invalid panel id {panel_id!r}")
            self.clear_panel()
            self.surface.show_markup(_error_markup(f'Panel "{panel_id}" is not available.'))
            self._state = PanelState.ERROR
            return None

        loop = asyncio.get_running_loop()

        self._token += 1
        token = self._token
        self._teardown()

        self._session = PanelSession(token=token, panel_id=panel_id)
        self._state = PanelState.LOADING
        self.surface.attribute(panel_id)
        self.surface.show_markup(LOADING_MARKUP)

        return loop.create_task(
            self._complete_load(token, panel_id, node),
            name=f"panel-load:{panel_id}:{token}",
        )

    async def _fetch(self, path: str) -> str | None:
        try:
            return await self.fetcher.fetch_text(path)
        except Exception as e:
            logger.warning(f"Panel asset fetch failed for {path}: {e}")
            return None

    async def _complete_load(self, token: int, panel_id: str, node: Node | None) -> None:
        paths = panel_asset_paths(panel_id, self.markup_name, self.style_name, self.script_name)

        # All three requests go out together; results are consumed in order
        markup_task = asyncio.create_task(self._fetch(paths.markup))
        style_task = asyncio.create_task(self._fetch(paths.style))
        script_task = asyncio.create_task(self._fetch(paths.script))

        markup = await markup_task
        if not self._is_current(token):
            logger.debug(f"Discarding stale markup for panel {panel_id} (token {token})")
            return

        if not markup:
            self.surface.show_markup(
                _error_markup(f'Panel content for "{panel_id}" could not be loaded.')
            )
            self.surface.clear_attribution()
            self._session = None
            self._state = PanelState.IDLE
            return

        session = self._session
        assert session is not None and session.token == token

        container = PanelContainer(panel_id=panel_id, markup=markup)
        self.surface.mount(container)
        session.container = container

        css = await style_task
        if not self._is_current(token):
            logger.debug(f"Discarding stale stylesheet for panel {panel_id} (token {token})")
            return
        if css:
            style = StyleResource(panel_id=panel_id, css=css)
            self.surface.style_host.inject(style)
            session.styles.append(style)

        script = await script_task
        if not self._is_current(token):
            logger.debug(f"Discarding stale script for panel {panel_id} (token {token})")
            return
        if script:
            try:
                session.cleanup = run_behavior(
                    script,
                    container,
                    PanelContext(panel_id=panel_id, node=node),
                    filename=paths.script,
                )
            except Exception:
                logger.exception(f"Error executing script for panel {panel_id}")

        self._state = PanelState.MOUNTED
        logger.debug(f"Mounted panel {panel_id} (token {token})")

    def __repr__(self) -> str:
        return f"PanelManager(state={self._state.value}, token={self._token})"
