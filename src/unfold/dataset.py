"""Loading of the graph dataset document."""

import json
import logging
from pathlib import Path
from typing import Any

from unfold.models import Link, Node

logger = logging.getLogger(__name__)


def parse_dataset(data: Any) -> tuple[list[Node], list[Link]]:
    """Parse a `{"nodes": [...], "links": [...]}` document.

    Link endpoint validation is left to GraphStore.build.

    Raises:
        ValueError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise ValueError("Graph dataset must be a JSON object")

    raw_nodes = data.get("nodes", [])
    raw_links = data.get("links", [])
    if not isinstance(raw_nodes, list) or not isinstance(raw_links, list):
        raise ValueError("Graph dataset 'nodes' and 'links' must be lists")

    try:
        nodes = [Node.from_dict(item) for item in raw_nodes]
        links = [Link.from_dict(item) for item in raw_links]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed graph dataset record: {e}") from e

    return nodes, links


def load_dataset(path: str | Path) -> tuple[list[Node], list[Link]]:
    """Read and parse a dataset JSON file."""
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = json.load(f)

    nodes, links = parse_dataset(data)
    logger.info(f"Loaded {len(nodes)} nodes and {len(links)} links from {path}")
    return nodes, links
