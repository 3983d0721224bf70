"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from tests.helpers import FakeAssetFetcher
from unfold.dataset import load_dataset
from unfold.graph import GraphStore
from unfold.models import ContentMode, Link, Node
from unfold.panels import DetailSurface, PanelManager


# Test data directory
TEST_FIXTURES_DIR = Path(__file__).parent / "fixtures"
DATASET_PATH = TEST_FIXTURES_DIR / "graph-data.json"
PANELS_DIR = TEST_FIXTURES_DIR / "panels"


@pytest.fixture
def chain_store() -> GraphStore:
    """root - a - b chain."""
    return GraphStore.build(
        [Node(id="root"), Node(id="a"), Node(id="b")],
        [Link("root", "a"), Link("a", "b")],
    )


@pytest.fixture
def dataset_store() -> GraphStore:
    """Store built from the fixture dataset."""
    nodes, links = load_dataset(DATASET_PATH)
    return GraphStore.build(nodes, links)


@pytest.fixture
def fetcher() -> FakeAssetFetcher:
    return FakeAssetFetcher()


@pytest.fixture
def surface() -> DetailSurface:
    return DetailSurface()


@pytest.fixture
def manager(surface: DetailSurface, fetcher: FakeAssetFetcher) -> PanelManager:
    return PanelManager(surface, fetcher=fetcher)


@pytest.fixture
def calls() -> list[tuple]:
    """Shared log that recording scripts append to."""
    return []


@pytest.fixture
def panel_node(calls: list[tuple]) -> Node:
    """Panel node whose attributes carry the call log."""
    return Node(
        id="x",
        label="Panel X",
        content_mode=ContentMode.PANEL,
        attributes={"calls": calls},
    )


@pytest.fixture
def panels_dir() -> Path:
    return PANELS_DIR


@pytest.fixture
def dataset_path() -> Path:
    return DATASET_PATH
