"""Command-line interface for the household directory."""

from .app import main

__all__ = ["main"]
