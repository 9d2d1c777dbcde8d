"""CLI commands for isc."""

from . import sync

__all__ = ["sync"]
