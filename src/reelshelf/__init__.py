"""Reelshelf - TV library folder reconciliation and episode conversion."""

__version__ = "0.1.0"
