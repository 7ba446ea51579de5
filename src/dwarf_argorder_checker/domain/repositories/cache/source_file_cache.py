#!/usr/bin/env python3

"""Per-path cache of source file lines."""

from pathlib import Path
from typing import Any

from ....infrastructure.logging import get_logger

logger = get_logger(__name__)


class SourceFileCache:
    """Memoizes source files split into lines, keyed by path.

    Entries are never invalidated. A path that cannot be read is cached as
    missing and is not retried for the rest of the run.
    """

    def __init__(self) -> None:
        self.cache: dict[str, list[str] | None] = {}
        self.hits = 0
        self.misses = 0

    def get_lines(self, path: str) -> list[str] | None:
        """Get the lines of a source file.

        Lines are split on ``\\n`` without dropping the trailing empty
        element, so a file ending in a newline yields one extra line.

        Args:
            path: Source file path as recorded in the line table

        Returns:
            List of lines, or None if the file could not be read
        """
        if path in self.cache:
            self.hits += 1
            return self.cache[path]

        self.misses += 1
        lines: list[str] | None
        try:
            lines = Path(path).read_text(encoding="utf-8", errors="replace").split("\n")
        except OSError as e:
            logger.debug(f"Cannot read source file {path}: {e}")
            lines = None

        self.cache[path] = lines
        return lines

    def stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache performance metrics
        """
        total_requests = self.hits + self.misses
        hit_rate = (self.hits / total_requests * 100) if total_requests > 0 else 0.0

        return {
            "files": len(self.cache),
            "missing": sum(1 for lines in self.cache.values() if lines is None),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": f"{hit_rate:.1f}%",
        }
