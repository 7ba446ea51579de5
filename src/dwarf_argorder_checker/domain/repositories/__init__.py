"""Repositories for data consumed by the checker."""

from .cache import SourceFileCache

__all__ = ["SourceFileCache"]
