"""Sticky-notes document client that keeps a remote stickies API in sync."""

__version__ = "0.1.0"
