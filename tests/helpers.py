"""Shared test doubles."""

import asyncio
from collections import defaultdict, deque


class FakeAssetFetcher:
    """In-memory asset fetcher with optional per-request gates.

    `assets` answers every request for a path. `enqueue` overrides the
    answer of the next request for that path, optionally holding it until
    the given event is set.
    """

    def __init__(self, assets: dict[str, str] | None = None) -> None:
        self.assets = dict(assets or {})
        self.requests: list[str] = []
        self._queued: dict[str, deque[tuple[str | None, asyncio.Event | None]]] = defaultdict(deque)

    def enqueue(self, path: str, value: str | None, gate: asyncio.Event | None = None) -> None:
        self._queued[path].append((value, gate))

    async def fetch_text(self, path: str) -> str | None:
        self.requests.append(path)
        if self._queued[path]:
            value, gate = self._queued[path].popleft()
            if gate is not None:
                await gate.wait()
            return value
        return self.assets.get(path)


# Appends to the list in the node's "calls" attribute on mount and cleanup
RECORDING_SCRIPT = """
calls = context.node.attributes["calls"]
calls.append(("mount", context.panel_id, container.markup))

def cleanup():
    calls.append(("cleanup", context.panel_id, container.markup))

return cleanup
"""
