"""Shared helpers: video probing."""
