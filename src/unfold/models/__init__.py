"""Unfold data models."""

from unfold.models.node import ContentMode, Link, Node

__all__ = [
    "ContentMode",
    "Link",
    "Node",
]
