"""Command line interface for ggsnap."""

from .dispatcher import main

__all__ = ["main"]
