#!/usr/bin/env python3
"""Load one panel bundle and print what the detail surface ends up showing.

Usage:
    python scripts/preview_panel.py about
    python scripts/preview_panel.py --panels-dir site/panels --dataset site/graph-data.json about

When a dataset is given, the panel's node record is passed to the
behavior script, as it would be in the explorer.
"""

import argparse
import asyncio
import json
import logging
import sys

from unfold.config import settings
from unfold.dataset import load_dataset
from unfold.panels import DetailSurface, LocalAssetFetcher, PanelManager, PanelState, panel_catalog

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def preview(panel_id: str, panels_dir: str, dataset: str | None) -> int:
    node = None
    if dataset:
        nodes, _ = load_dataset(dataset)
        node = panel_catalog(nodes).get(panel_id)
        if node is None:
            logger.warning(f'Panel "{panel_id}" is not defined in {dataset}')

    manager = PanelManager(DetailSurface(), fetcher=LocalAssetFetcher(panels_dir))
    task = manager.load_panel(panel_id, node)
    if task is not None:
        await task

    mounted = manager.state is PanelState.MOUNTED
    print(json.dumps({"state": manager.state.value, **manager.surface.to_dict()}, indent=2, ensure_ascii=False))

    # Run the panel's cleanup, as navigating away would
    manager.clear_panel()
    return 0 if mounted else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Preview a panel bundle")
    parser.add_argument("panel_id", help="Panel bundle id")
    parser.add_argument("--panels-dir", default=settings.panels_dir, help="Directory holding panel bundles")
    parser.add_argument("--dataset", default=None, help="Graph dataset JSON with the panel's node")
    args = parser.parse_args()

    return asyncio.run(preview(args.panel_id, args.panels_dir, args.dataset))


if __name__ == "__main__":
    sys.exit(main())
