#!/usr/bin/env python3

"""Unit tests for the source file cache."""

from pathlib import Path

import pytest

from dwarf_argorder_checker.domain.repositories.cache import SourceFileCache


class TestSourceFileCache:
    """Tests for SourceFileCache."""

    @pytest.mark.unit
    def test_splits_lines(self, tmp_path: Path) -> None:
        """Test that a trailing newline leaves an empty last element."""
        source = tmp_path / "add.go"
        source.write_text("package main\n\nfunc Add(x, y int) int {\n", encoding="utf-8")

        lines = SourceFileCache().get_lines(str(source))

        assert lines == ["package main", "", "func Add(x, y int) int {", ""]

    @pytest.mark.unit
    def test_memoizes_contents(self, tmp_path: Path) -> None:
        """Test that later changes on disk are not picked up."""
        source = tmp_path / "a.go"
        source.write_text("one", encoding="utf-8")
        cache = SourceFileCache()

        first = cache.get_lines(str(source))
        source.write_text("two", encoding="utf-8")
        second = cache.get_lines(str(source))

        assert first == second == ["one"]
        assert cache.hits == 1
        assert cache.misses == 1

    @pytest.mark.unit
    def test_missing_file_cached_permanently(self, tmp_path: Path) -> None:
        """Test that a failed read is not retried."""
        path = tmp_path / "missing.go"
        cache = SourceFileCache()

        assert cache.get_lines(str(path)) is None
        path.write_text("package main", encoding="utf-8")
        assert cache.get_lines(str(path)) is None
        assert cache.stats()["files"] == 1
        assert cache.stats()["missing"] == 1
