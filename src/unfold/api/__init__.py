"""Unfold HTTP API."""
