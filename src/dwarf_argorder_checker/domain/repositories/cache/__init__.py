"""Caching layer."""

from .source_file_cache import SourceFileCache

__all__ = ["SourceFileCache"]
